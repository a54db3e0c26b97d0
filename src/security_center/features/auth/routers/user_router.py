"""Identity provider user administration router."""

import logging

from fastapi import APIRouter, Depends, status

from ..entities.idp import NewIdpUser
from ..models.requests import CreateUserRequest
from ..models.responses import CreateUserResponse
from ..services.auth_service import AuthService
from .auth_router import get_auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/users", tags=["Users"])


@router.post("", response_model=CreateUserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: CreateUserRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> CreateUserResponse:
    """Create a user in the identity provider."""
    user = NewIdpUser(
        username=user_data.username,
        email=user_data.email,
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        password=user_data.password,
        enabled=user_data.enabled,
        email_verified=user_data.email_verified,
        required_actions=list(user_data.required_actions),
        attributes=dict(user_data.attributes),
    )
    user_id = await auth_service.create_user(user)
    return CreateUserResponse(user_id=user_id, username=user.username)
