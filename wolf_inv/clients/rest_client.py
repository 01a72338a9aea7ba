"""REST client for the remote inventory service.

Provides synchronous and asynchronous variants of the three inventory
operations. Every call is a single attempt: failures are raised as
``InventoryError`` subclasses and never retried.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from ..core.config import WolfConfig
from ..core.errors import DecodeError, RemoteError, TransportError
from ..types.inventory import InventoryEntry

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

_ENTRY_LIST = TypeAdapter(list[InventoryEntry])


class InventoryClient:
    """Client for the inventory service's list/report/delete endpoints.

    Holds only the immutable base URL and bearer token, so one instance can
    be shared by concurrent requests.
    """

    def __init__(
        self,
        config: WolfConfig,
        transport: Optional[Any] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            config: Service configuration.
            transport: Optional httpx transport used for both the sync and
                async clients (``httpx.MockTransport`` in tests).
            timeout: Per-request timeout in seconds.
        """
        self._config = config
        self._transport = transport
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        """Get the service base URL."""
        return self._config.api_base_url

    def _delete_url(self, name: str) -> str:
        return f"{self.base_url}/delete/{quote(name, safe='')}"

    def _build_headers(self, json_body: bool = False) -> dict[str, str]:
        """Build request headers with authorization."""
        headers = {"Authorization": f"Bearer {self._config.api_token}"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _log_request(self, method: str, url: str, **kwargs: Any) -> None:
        logger.debug(f"REST {method} {url}")
        if "json" in kwargs:
            logger.debug(f"Request body: {kwargs['json']}")

    def _log_response(self, response: httpx.Response) -> None:
        logger.debug(f"Response status: {response.status_code}")

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self._timeout, transport=self._transport)

    def _async_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    # Response handling

    def _parse_listing(self, response: httpx.Response) -> list[InventoryEntry]:
        """Turn a listing response into entries.

        Raises:
            RemoteError: On any status other than 200.
            DecodeError: If the body is not a JSON array of entries.
        """
        self._log_response(response)
        if response.status_code != httpx.codes.OK:
            raise RemoteError(
                f"API request failed with status code {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )
        try:
            entries = _ENTRY_LIST.validate_python(response.json())
        except (ValueError, ValidationError) as e:
            raise DecodeError(f"failed to decode JSON: {e}") from e
        logger.debug(f"Fetched {len(entries)} entries")
        return entries

    def _check_write(self, response: httpx.Response) -> None:
        """Raise RemoteError for a failed report/delete call. Body is ignored on success."""
        self._log_response(response)
        if response.status_code != httpx.codes.OK:
            raise RemoteError(
                f"API request failed: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

    # Synchronous operations

    def list_entries(self) -> list[InventoryEntry]:
        """Fetch the full inventory.

        Returns:
            All entries, in service order.

        Raises:
            TransportError, RemoteError, DecodeError
        """
        url = self._config.inventory_url
        self._log_request("GET", url)
        try:
            with self._client() as client:
                response = client.get(url, headers=self._build_headers())
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"could not connect to API: {e}") from e
        return self._parse_listing(response)

    def upsert(self, entry: InventoryEntry) -> list[InventoryEntry]:
        """Create or update an entry, then re-fetch the inventory.

        Args:
            entry: Complete entry to submit.

        Returns:
            The inventory as the service reports it after the write.
        """
        url = self._config.report_url
        payload = entry.to_payload()
        self._log_request("POST", url, json=payload)
        try:
            with self._client() as client:
                response = client.post(url, json=payload, headers=self._build_headers(json_body=True))
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"failed to send request: {e}") from e
        self._check_write(response)
        return self.list_entries()

    def delete(self, name: str) -> list[InventoryEntry]:
        """Delete an entry by name, then re-fetch the inventory."""
        url = self._delete_url(name)
        self._log_request("DELETE", url)
        try:
            with self._client() as client:
                response = client.delete(url, headers=self._build_headers())
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"failed to send request: {e}") from e
        self._check_write(response)
        return self.list_entries()

    # Asynchronous operations

    async def list_entries_async(self) -> list[InventoryEntry]:
        """Async variant of ``list_entries``."""
        url = self._config.inventory_url
        self._log_request("GET", url)
        try:
            async with self._async_client() as client:
                response = await client.get(url, headers=self._build_headers())
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"could not connect to API: {e}") from e
        return self._parse_listing(response)

    async def upsert_async(self, entry: InventoryEntry) -> list[InventoryEntry]:
        """Async variant of ``upsert``."""
        url = self._config.report_url
        payload = entry.to_payload()
        self._log_request("POST", url, json=payload)
        try:
            async with self._async_client() as client:
                response = await client.post(
                    url, json=payload, headers=self._build_headers(json_body=True)
                )
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"failed to send request: {e}") from e
        self._check_write(response)
        return await self.list_entries_async()

    async def delete_async(self, name: str) -> list[InventoryEntry]:
        """Async variant of ``delete``."""
        url = self._delete_url(name)
        self._log_request("DELETE", url)
        try:
            async with self._async_client() as client:
                response = await client.delete(url, headers=self._build_headers())
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"failed to send request: {e}") from e
        self._check_write(response)
        return await self.list_entries_async()
