"""User ORM — device-bound account, keyed by device_id.

Invariants:
    - device_id is unique and non-nullable (store-enforced)
    - password column holds bcrypt output only, never plaintext
    - email is neither unique nor required

Design Decisions:
    - Column is named "password" to match the deployed users table
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from sensorhub.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    device_id: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "device_id": self.device_id,
            "email": self.email,
            "password": self.password,
        }
