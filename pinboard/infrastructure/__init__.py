"""Infrastructure Layer — adapters for the database, object storage and sessions.

Invariants:
    - Collaborator failures are mapped to core/errors.py types at this boundary
"""
