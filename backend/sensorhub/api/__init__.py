"""API Layer — FastAPI routes, dependency providers and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; errors use the SensorHubError envelope

Design Decisions:
    - Thin routes delegate to services
"""
