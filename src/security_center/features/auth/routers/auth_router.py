"""Authentication API router."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ....core.exceptions.auth import AuthenticationError, InvalidCredentialsError
from ....core.exceptions.base import SecurityCenterError
from ..models.requests import (
    IntrospectRequest,
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    ResetPasswordRequest,
)
from ..models.responses import AuthenticationResponse
from ..services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


def get_auth_service() -> AuthService:
    """Get auth service - to be overridden by application."""
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Auth service not configured"
    )


@router.post("/login", response_model=AuthenticationResponse)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthenticationResponse:
    """Authenticate against the IDP and return tokens with the party's session."""
    try:
        result = await auth_service.login(login_data.username, login_data.password)
        return AuthenticationResponse.from_result(result)

    except InvalidCredentialsError:
        logger.warning(f"Login failed for user {login_data.username}: Invalid credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password"
        )

    except AuthenticationError as e:
        logger.warning(f"Login failed for user {login_data.username}: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication failed"
        )

    except SecurityCenterError:
        raise

    except Exception as e:
        logger.error(f"Unexpected error during login: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login service temporarily unavailable"
        )


@router.post("/refresh", response_model=AuthenticationResponse)
async def refresh_token(
    refresh_data: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthenticationResponse:
    """Exchange a refresh token for new tokens and the party's session."""
    result = await auth_service.refresh(refresh_data.refresh_token)
    return AuthenticationResponse.from_result(result)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    logout_data: LogoutRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> Response:
    await auth_service.logout(logout_data.refresh_token, logout_data.session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/introspect", response_model=Dict[str, Any])
async def introspect(
    introspect_data: IntrospectRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """IDP introspection result, passed through unchanged."""
    return await auth_service.introspect(introspect_data.token)


@router.post("/reset-password", status_code=status.HTTP_204_NO_CONTENT)
async def reset_password(
    reset_data: ResetPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> Response:
    await auth_service.reset_password(reset_data.username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
