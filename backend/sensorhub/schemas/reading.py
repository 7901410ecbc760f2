"""Reading Schemas — ingest payload and reading responses.

Invariants:
    - ReadingCreate accepts zero for every measurement; absence is reported as None
    - ReadingResponse.timestamp is always timezone-aware UTC

Design Decisions:
    - Naive datetimes read back from SQLite are tagged UTC: every stored
      timestamp was written as UTC
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, field_validator


class ReadingCreate(BaseModel):
    """Body of POST /api/data."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    device_id: str | None = None
    temperature: float | None = None
    humidity: float | None = None
    air_quality: float | None = None
    lpg_level: float | None = None


class ReadingResponse(BaseModel):
    id: int
    device_id: str
    temperature: float
    humidity: float
    air_quality: float
    lpg_level: float
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class ReadingEnvelope(BaseModel):
    message: str
    data: ReadingResponse


class MessageResponse(BaseModel):
    message: str
