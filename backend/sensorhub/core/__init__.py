"""Core Layer — domain types, errors, boundary Protocols and pure helpers.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - No IO: functions here are pure and deterministic
"""
