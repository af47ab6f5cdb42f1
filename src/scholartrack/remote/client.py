"""ApperClient - async HTTP client for the hosted record store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from scholartrack.logging import sanitize_for_log, truncate_output
from scholartrack.remote.exceptions import RecordNotFoundError, RemoteStoreError

if TYPE_CHECKING:
    from scholartrack.config import RemoteSettings

logger = logging.getLogger("scholartrack.remote")


class RecordStoreClient(Protocol):
    """Interface for the remote record store.

    All methods return the decoded JSON body of the store's response and raise
    RemoteStoreError when the call itself fails.
    """

    async def fetch_records(self, table: str, params: dict[str, Any]) -> dict[str, Any]:
        """Query records; response carries ``data`` and ``total``."""
        ...

    async def get_record_by_id(self, table: str, record_id: int | str) -> dict[str, Any]:
        """Fetch one record; response carries ``data``."""
        ...

    async def create_record(self, table: str, params: dict[str, Any]) -> dict[str, Any]:
        """Create records from ``params['records']``."""
        ...

    async def update_record(self, table: str, params: dict[str, Any]) -> dict[str, Any]:
        """Replace records from ``params['records']``."""
        ...

    async def delete_record(self, table: str, params: dict[str, Any]) -> dict[str, Any]:
        """Delete records listed in ``params['recordIds']``."""
        ...


class ApperClient:
    """Client for the Apper record store REST API."""

    def __init__(
        self,
        project_id: str,
        public_key: str,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            project_id: Apper project identifier
            public_key: Apper public API key
            base_url: Root URL of the record store API
            timeout: Request timeout in seconds
            transport: Optional httpx transport (for testing)
        """
        self.project_id = project_id
        self.public_key = public_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the underlying HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "ApperProjectId": self.project_id,
                    "ApperPublicKey": self.public_key,
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute a request against the record store.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            payload: JSON body

        Returns:
            Decoded JSON body

        Raises:
            RecordNotFoundError: If the store answers 404
            RemoteStoreError: On transport errors, error statuses or non-JSON bodies
        """
        logger.debug("%s %s", method, path)
        try:
            response = await self.client.request(method, path, json=payload)
        except httpx.HTTPError as e:
            raise RemoteStoreError(f"Request to record store failed: {e}") from e

        if response.status_code == 404:
            raise RecordNotFoundError(f"Not found: {path}")

        if response.status_code >= 400:
            body = sanitize_for_log(truncate_output(response.text), (self.public_key,))
            raise RemoteStoreError(f"Request failed: {response.status_code} - {body}")

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteStoreError("Record store returned a non-JSON response") from e

        if not isinstance(data, dict):
            raise RemoteStoreError(
                f"Unexpected response from record store: {type(data).__name__}"
            )

        return data

    async def fetch_records(self, table: str, params: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", f"/tables/{table}/records/query", params)

    async def get_record_by_id(self, table: str, record_id: int | str) -> dict[str, Any]:
        return await self._request("GET", f"/tables/{table}/records/{record_id}")

    async def create_record(self, table: str, params: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", f"/tables/{table}/records", params)

    async def update_record(self, table: str, params: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", f"/tables/{table}/records", params)

    async def delete_record(self, table: str, params: dict[str, Any]) -> dict[str, Any]:
        return await self._request("DELETE", f"/tables/{table}/records", params)

    async def logout(self) -> None:
        """End the identity session held by the record store."""
        await self._request("POST", "/auth/logout")
        logger.info("Remote session logged out")


def initialize_client(
    settings: RemoteSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ApperClient | None:
    """Build an ApperClient from settings.

    Returns None (and logs an error) when either credential is missing, so no
    request is ever attempted without them.
    """
    project_id, public_key = settings.project_id, settings.public_key
    if not (project_id and public_key):
        logger.error(
            "Apper credentials are missing. Set APPER_PROJECT_ID and APPER_PUBLIC_KEY."
        )
        return None

    return ApperClient(
        project_id=project_id,
        public_key=public_key,
        base_url=settings.base_url,
        timeout=settings.request_timeout,
        transport=transport,
    )
