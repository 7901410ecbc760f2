"""SensorReading ORM — one timestamped sample of four measurements.

Invariants:
    - device_id and all four measurements are non-nullable
    - timestamp is assigned by the store at insert (server_default now()),
      never by the application clock or by clients
    - Rows are append-only: no code path updates or deletes them

Design Decisions:
    - Composite index (device_id, timestamp): every query filters by device
      and orders or ranges by time
"""

from datetime import datetime

from sqlalchemy import DateTime, Float, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from sensorhub.db.base import Base


class SensorReading(Base):
    __tablename__ = "sensor_data"
    __table_args__ = (
        Index("ix_sensor_data_device_id_timestamp", "device_id", "timestamp"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    device_id: Mapped[str] = mapped_column(String(255), nullable=False)
    temperature: Mapped[float] = mapped_column(Float, nullable=False)
    humidity: Mapped[float] = mapped_column(Float, nullable=False)
    air_quality: Mapped[float] = mapped_column(Float, nullable=False)
    lpg_level: Mapped[float] = mapped_column(Float, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "device_id": self.device_id,
            "temperature": self.temperature,
            "humidity": self.humidity,
            "air_quality": self.air_quality,
            "lpg_level": self.lpg_level,
            "timestamp": self.timestamp,
        }
