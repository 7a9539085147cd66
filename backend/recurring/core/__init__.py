"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are deterministic; aggregation may use threads internally
      but its output does not depend on them

Design Decisions:
    - Functional core separated from imperative shell
"""
