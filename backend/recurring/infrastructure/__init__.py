"""Infrastructure Layer — database access, persistence adapters, and logging setup.

Invariants:
    - Infrastructure may import core types and errors; core never imports infrastructure
    - All SQLAlchemy failures surface as core DatabaseError

Design Decisions:
    - Adapters implement core Protocols structurally (no inheritance)
"""
