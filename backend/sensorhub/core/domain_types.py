"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - DeviceId is the account key AND the reading partition key
    - SensorField lists exactly the four numeric measurements of a reading

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

DeviceId = NewType("DeviceId", str)
ReadingId = NewType("ReadingId", int)


# ─── Enums ───────────────────────────────────────────────────────

class SensorField(str, Enum):
    """Numeric measurements carried by every reading."""
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    AIR_QUALITY = "air_quality"
    LPG_LEVEL = "lpg_level"


class Environment(str, Enum):
    """Deployment modes — production switches the store connection to TLS."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"
