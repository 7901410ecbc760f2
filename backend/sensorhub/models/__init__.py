"""ORM Models — SQLAlchemy declarative models for users and sensor readings.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete for create_all and alembic
"""

from sensorhub.models.user import User  # noqa: F401
from sensorhub.models.sensor_reading import SensorReading  # noqa: F401
