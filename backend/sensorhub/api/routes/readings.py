"""Reading Routes — ingest and per-device queries.

Invariants:
    - POST /api/data returns 201 with the stored row (id + server timestamp)
    - GET /api/data/{device_id} is newest-first; empty list is 200
    - GET /api/data/latest/{device_id} is 404 when the device has no readings
    - GET /api/data/history/{device_id}?date=YYYY-MM-DD is oldest-first;
      an empty day is 200 with a message body, not an error

Design Decisions:
    - latest/ and history/ are two-segment paths, so they never collide
      with the single-segment /{device_id} route
"""

from fastapi import APIRouter, Depends, Query, status

from sensorhub.api.dependencies import get_reading_service
from sensorhub.schemas.reading import (
    MessageResponse, ReadingCreate, ReadingEnvelope, ReadingResponse,
)
from sensorhub.services.reading_service import ReadingService

router = APIRouter(prefix="/api/data", tags=["readings"])

NO_HISTORY_MESSAGE = "No data available for the selected date."


@router.post(
    "", response_model=ReadingEnvelope, status_code=status.HTTP_201_CREATED,
)
async def ingest_reading(
    body: ReadingCreate,
    service: ReadingService = Depends(get_reading_service),
):
    """Store one reading; the server assigns the timestamp."""
    reading = await service.ingest(
        body.device_id,
        temperature=body.temperature,
        humidity=body.humidity,
        air_quality=body.air_quality,
        lpg_level=body.lpg_level,
    )
    return {"message": "Data stored successfully", "data": reading}


@router.get("/latest/{device_id}", response_model=ReadingResponse)
async def latest_reading(
    device_id: str,
    service: ReadingService = Depends(get_reading_service),
):
    return await service.latest_reading(device_id)


@router.get(
    "/history/{device_id}",
    response_model=list[ReadingResponse] | MessageResponse,
)
async def reading_history(
    device_id: str,
    day: str | None = Query(None, alias="date"),
    service: ReadingService = Depends(get_reading_service),
):
    """Readings for one UTC calendar day, oldest first."""
    rows = await service.history(device_id, day)
    if rows is None:
        return {"message": NO_HISTORY_MESSAGE}
    return rows


@router.get("/{device_id}", response_model=list[ReadingResponse])
async def list_readings(
    device_id: str,
    service: ReadingService = Depends(get_reading_service),
):
    return await service.list_readings(device_id)
