"""Reading Service — ingest and query sensor readings per device.

Invariants:
    - Ingest requires device_id and all four measurements (0 is a valid value)
    - A rejected ingest never reaches the repository
    - list_readings is newest-first; history is oldest-first
    - An absent or empty date is "required"; an unparsable one is a separate 400
    - Empty history is a valid result (None), never an error; a device with
      no readings at all is a 404 on latest_reading
"""

import logging
from datetime import date

from sensorhub.core.day_window import utc_day_window
from sensorhub.core.domain_types import DeviceId, SensorField
from sensorhub.core.errors import (
    ErrorContext, InputValidationError, ResourceNotFoundError,
)
from sensorhub.core.repository_protocols import ReadingRepository

logger = logging.getLogger(__name__)


class ReadingService:
    """Sensor reading operations over a ReadingRepository."""

    def __init__(self, readings: ReadingRepository):
        self.readings = readings

    async def ingest(self, device_id: str | None, **measurements: float | None) -> dict:
        values = {f.value: measurements.get(f.value) for f in SensorField}
        missing = [name for name, v in values.items() if v is None]
        if not device_id or missing:
            raise InputValidationError(
                "Missing required fields",
                "device_id" if not device_id else missing[0],
            )
        reading = await self.readings.add(DeviceId(device_id), values)
        logger.info(
            "Reading stored",
            extra={"device_id": device_id, "reading_id": reading.get("id")},
        )
        return reading

    async def list_readings(self, device_id: str) -> list[dict]:
        return await self.readings.list_desc(DeviceId(device_id))

    async def latest_reading(self, device_id: str) -> dict:
        reading = await self.readings.latest(DeviceId(device_id))
        if reading is None:
            raise ResourceNotFoundError(
                "No data available", "SensorReading",
                ErrorContext(device_id=device_id),
            )
        return reading

    async def history(self, device_id: str, day: str | None) -> list[dict] | None:
        """Readings inside the UTC calendar day (YYYY-MM-DD), oldest first. None when empty."""
        if not day or not day.strip():
            raise InputValidationError("Date parameter is required", "date")
        try:
            parsed = date.fromisoformat(day.strip())
        except ValueError:
            raise InputValidationError(
                "Date parameter must be a calendar date (YYYY-MM-DD)", "date",
            ) from None
        start, end = utc_day_window(parsed)
        rows = await self.readings.between_asc(DeviceId(device_id), start, end)
        return rows or None
