"""Services Layer — orchestrates repositories around the pure occurrence core.

Invariants:
    - Services own IO sequencing; core functions own every rule
    - Configuration is read here and passed into the core as arguments
"""
