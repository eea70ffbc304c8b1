"""HTTP client and credentials for the gallery REST API."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from .config import settings
from .exceptions import (
    ApiConnectionException,
    ApiException,
    AuthenticationException,
    GalleryException,
    NotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    """Bearer token handed to the client by whoever performed the login."""

    token: Optional[str] = None

    def headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}


ANONYMOUS = Credentials()


class ApiClient:
    """Thin async wrapper around httpx that speaks the gallery's JSON conventions."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        credentials: Optional[Credentials] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: API root, e.g. ``https://gallery.example/api``
            credentials: Default credentials sent with every request
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests use ``httpx.MockTransport``)
        """
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.credentials = credentials if credentials is not None else Credentials(settings.api_token)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.request_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
        data: Optional[dict[str, str]] = None,
        files: Optional[dict[str, Any]] = None,
        credentials: Optional[Credentials] = None,
    ) -> Any:
        """
        Send a request and decode the JSON body.

        Args:
            method: HTTP method
            endpoint: Path relative to the API root, starting with ``/``
            params: Query parameters; ``None`` values are dropped
            json: JSON body
            data: Multipart form fields (used with ``files``)
            files: Multipart files
            credentials: Overrides the client's default credentials for this call

        Returns:
            Decoded JSON, or an empty dict for 204 / empty responses

        Raises:
            ApiConnectionException: If the API cannot be reached
            AuthenticationException: On 401 / 403
            NotFoundException: On 404
            ValidationException: On 400 / 422
            ApiException: On any other error status, or a success body that is not JSON
        """
        creds = credentials if credentials is not None else self.credentials
        query = {k: v for k, v in (params or {}).items() if v is not None and v != ""}

        try:
            response = await self._client.request(
                method,
                endpoint,
                params=query or None,
                json=json,
                data=data,
                files=files,
                headers=creds.headers(),
            )
        except httpx.HTTPError as e:
            logger.error(f"{method} {endpoint} failed: {e}")
            raise ApiConnectionException(str(e)) from e

        if response.is_error:
            raise self._error_for(response, endpoint)

        if response.status_code == 204 or not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            content_type = response.headers.get("content-type", "unknown")
            logger.error(f"{method} {endpoint} returned a non-JSON body ({content_type})")
            raise ApiException("Invalid JSON response", status_code=response.status_code, endpoint=endpoint) from e

    async def get(self, endpoint: str, **kwargs: Any) -> Any:
        return await self.request("GET", endpoint, **kwargs)

    async def post(self, endpoint: str, **kwargs: Any) -> Any:
        return await self.request("POST", endpoint, **kwargs)

    async def put(self, endpoint: str, **kwargs: Any) -> Any:
        return await self.request("PUT", endpoint, **kwargs)

    async def delete(self, endpoint: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", endpoint, **kwargs)

    @staticmethod
    def _error_for(response: httpx.Response, endpoint: str) -> GalleryException:
        """Map an error response onto the exception taxonomy."""
        try:
            body = response.json()
            message = body.get("error") or "Request failed"
        except ValueError:
            message = "Unknown error"
        except AttributeError:
            message = "Request failed"

        status = response.status_code
        logger.warning(f"HTTP {status} on {response.request.method} {endpoint}: {message}")

        if status in (401, 403):
            return AuthenticationException(message, status_code=status)
        if status == 404:
            return NotFoundException("Resource", endpoint)
        if status in (400, 422):
            return ValidationException(message)
        return ApiException(message, status_code=status, endpoint=endpoint)

