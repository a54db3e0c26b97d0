"""Shared httpx plumbing for registry clients."""

import logging
import uuid
from typing import Any, Dict, Optional

import httpx

from ...core.exceptions.infrastructure import DownstreamServiceError, ResourceNotFoundError

logger = logging.getLogger(__name__)

TRANSACTION_ID_HEADER = "X-Transaction-Id"


class BaseServiceClient:
    """JSON-over-HTTP client for one downstream service.

    Every call carries a fresh ``X-Transaction-Id``. A 404 becomes
    ``ResourceNotFoundError``; any other HTTP error, transport error or timeout
    becomes ``DownstreamServiceError``.
    """

    service_name = "downstream"

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        transaction_id = str(uuid.uuid4())
        headers = {
            "Accept": "application/json",
            TRANSACTION_ID_HEADER: transaction_id,
        }

        try:
            response = await self._get_client().request(
                method,
                path,
                params=params,
                json=json,
                headers=headers,
            )
            response.raise_for_status()

        except httpx.TimeoutException as e:
            logger.warning(f"{self.service_name} timed out on {method} {path} (tx={transaction_id})")
            raise DownstreamServiceError(
                f"{self.service_name} request timed out",
                error_code="UpstreamUnavailable",
                details={"service": self.service_name, "path": path},
            ) from e

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code == 404:
                raise ResourceNotFoundError(
                    f"{self.service_name} resource not found",
                    details={"service": self.service_name, "path": path},
                ) from e
            logger.warning(
                f"{self.service_name} returned {status_code} on {method} {path} (tx={transaction_id})"
            )
            raise DownstreamServiceError(
                f"{self.service_name} request failed with status {status_code}",
                error_code="UpstreamUnavailable",
                details={"service": self.service_name, "path": path, "status_code": status_code},
            ) from e

        except httpx.HTTPError as e:
            logger.warning(f"{self.service_name} unreachable on {method} {path}: {e}")
            raise DownstreamServiceError(
                f"{self.service_name} unreachable",
                error_code="UpstreamUnavailable",
                details={"service": self.service_name, "path": path},
            ) from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise DownstreamServiceError(
                f"{self.service_name} returned an invalid JSON body",
                error_code="UpstreamUnavailable",
                details={"service": self.service_name, "path": path},
            ) from e

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self._request("GET", path, params=params)

    async def _post(self, path: str, json: Dict[str, Any]) -> Any:
        return await self._request("POST", path, json=json)


def page_content(body: Any) -> list:
    """Extract the item list from a paginated body or a bare list."""
    if body is None:
        return []
    if isinstance(body, list):
        return body
    return body.get("content") or []
