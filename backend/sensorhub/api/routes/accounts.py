"""Account Routes — signup by device, admin signup, login.

Invariants:
    - PUT /api/signup updates an existing device account (404 if none)
    - POST /api/signup/admin inserts or overwrites by device_id
    - POST /api/login returns the device_id, never a token
    - No response carries a password field
"""

from fastapi import APIRouter, Depends, status

from sensorhub.api.dependencies import get_account_service
from sensorhub.schemas.user import (
    CredentialsRequest, LoginRequest, LoginResponse, UserEnvelope,
)
from sensorhub.services.account_service import AccountService

router = APIRouter(prefix="/api", tags=["accounts"])


@router.put(
    "/signup", response_model=UserEnvelope, status_code=status.HTTP_200_OK,
)
async def signup(
    body: CredentialsRequest,
    service: AccountService = Depends(get_account_service),
):
    """Attach email and password to the account of an existing device."""
    user = await service.update_credentials(
        body.email, body.password, body.device_id,
    )
    return {"message": "User updated successfully", "user": user}


@router.post(
    "/signup/admin", response_model=UserEnvelope,
    status_code=status.HTTP_200_OK,
)
async def admin_signup(
    body: CredentialsRequest,
    service: AccountService = Depends(get_account_service),
):
    user = await service.admin_upsert(body.email, body.password, body.device_id)
    return {"message": "User created/updated successfully", "user": user}


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    service: AccountService = Depends(get_account_service),
):
    device_id = await service.login(body.email, body.password)
    return {"message": "Login successful", "device_id": device_id}
