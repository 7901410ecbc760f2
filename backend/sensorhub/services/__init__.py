"""Services Layer — the operations behind each endpoint.

Invariants:
    - Services depend on core Protocols only (no SQLAlchemy, no FastAPI)
    - Presence checks live here, not in the schemas
"""
