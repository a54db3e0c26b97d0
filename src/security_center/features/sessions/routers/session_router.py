"""Session management API router."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from ..entities.request_context import RequestContext
from ..models.responses import SessionContextResponse
from ..services.session_manager import SessionManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/sessions", tags=["Sessions"])


def get_session_manager() -> SessionManager:
    """Get session manager - to be overridden by application."""
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Session manager not configured"
    )


@router.post("", response_model=SessionContextResponse)
async def create_or_get_session(
    request: Request,
    manager: SessionManager = Depends(get_session_manager),
) -> SessionContextResponse:
    """Create a session for the X-Party-Id caller, or return the cached one."""
    context = RequestContext.from_headers(
        request.headers,
        client_host=request.client.host if request.client else None,
    )
    session = await manager.create_or_get(context)
    return SessionContextResponse.from_session(session)


@router.get("/access-check", response_model=bool)
async def check_product_access(
    party_id: str = Query(..., alias="partyId"),
    product_id: str = Query(..., alias="productId"),
    manager: SessionManager = Depends(get_session_manager),
) -> bool:
    """Whether the party holds an active contract on the product."""
    return await manager.has_access_to_product(party_id, product_id)


@router.get("/permission-check", response_model=bool)
async def check_permission(
    party_id: str = Query(..., alias="partyId"),
    product_id: str = Query(..., alias="productId"),
    action_type: str = Query(..., alias="actionType"),
    resource_type: Optional[str] = Query(None, alias="resourceType"),
    manager: SessionManager = Depends(get_session_manager),
) -> bool:
    """Whether the party may perform the action on the product's resource."""
    return await manager.has_permission(party_id, product_id, action_type, resource_type)


@router.get("/party/{party_id}", response_model=SessionContextResponse)
async def get_session_by_party(
    party_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> SessionContextResponse:
    session = await manager.get_by_party_id(party_id)
    return SessionContextResponse.from_session(session)


@router.delete("/party/{party_id}", status_code=status.HTTP_204_NO_CONTENT)
async def invalidate_party_sessions(
    party_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> Response:
    await manager.invalidate_sessions_by_party_id(party_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{session_id}", response_model=SessionContextResponse)
async def get_session(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> SessionContextResponse:
    session = await manager.get_by_session_id(session_id)
    return SessionContextResponse.from_session(session)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def invalidate_session(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> Response:
    await manager.invalidate_session(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{session_id}/refresh", response_model=SessionContextResponse)
async def refresh_session(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> SessionContextResponse:
    session = await manager.refresh_session(session_id)
    return SessionContextResponse.from_session(session)


@router.get("/{session_id}/validate", response_model=bool)
async def validate_session(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> bool:
    return await manager.validate_session(session_id)
