"""User Schemas — signup, admin signup and login payloads.

Invariants:
    - All request fields optional at the schema level: a missing field must
      surface as the service's presence error, not a generic type error
    - UserPublic has no password field; extra keys from records are ignored
    - Numeric device ids sent by firmware are coerced to strings
"""

from pydantic import BaseModel, ConfigDict


class CredentialsRequest(BaseModel):
    """Body of PUT /api/signup and POST /api/signup/admin."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    email: str | None = None
    password: str | None = None
    device_id: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserPublic(BaseModel):
    id: int
    device_id: str
    email: str | None = None


class UserEnvelope(BaseModel):
    message: str
    user: UserPublic


class LoginResponse(BaseModel):
    message: str
    device_id: str
