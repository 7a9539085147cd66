"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every row is scoped by customer_id

Design Decisions:
    - One file per entity for locality
    - Models imported here so Base.metadata is populated before create_all / autogenerate
"""

from recurring.models.event import Event  # noqa: F401
