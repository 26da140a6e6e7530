"""Core Layer — pure pin rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (time is always an argument)

Design Decisions:
    - Functional core separated from imperative shell: validation, the edit window
      and feed attribution are testable without a database
"""
