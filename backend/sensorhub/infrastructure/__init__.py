"""Infrastructure — database sessions, SQL repositories, password hashing, logging.

Invariants:
    - Only this package imports SQLAlchemy engines or bcrypt
"""
