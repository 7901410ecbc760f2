"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - All sessions are async (AsyncSession), see infrastructure/database.py

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
