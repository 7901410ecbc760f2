"""Pydantic Schemas — request/response contracts for API endpoints.

Invariants:
    - Request schemas only check types; presence is checked by the services
    - No response schema declares a password field

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
