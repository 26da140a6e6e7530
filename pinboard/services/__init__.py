"""Services Layer — repositories and the workflows composed over them.

Invariants:
    - Services own all IO (database, object storage); pure rules live in core/
    - Every operation that needs an owner receives a SessionContext argument

Design Decisions:
    - One class per workflow for locality (composer, mutations, feeds)
"""
