"""HTTP transport for the campaigns API."""

from dataclasses import dataclass
from typing import Any, Optional

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from ..models import Campaign

logger = structlog.get_logger()

_CAMPAIGN_LIST = TypeAdapter(list[Campaign])

HTTP_CREATED = 201


class CampaignApiError(Exception):
    """Error fetching campaigns from the API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class MutationResult:
    """
    Outcome of a save or delete request.

    ``status`` is 0 when the request never completed.
    """
    ok: bool
    status: int
    error: str = ""

    @property
    def created(self) -> bool:
        return self.status == HTTP_CREATED


class CampaignTransport:
    """
    Client for the campaigns collection endpoint.

    List reads raise ``CampaignApiError`` so the cache can keep its previous
    value. Mutations never raise: every failure becomes a ``MutationResult``
    with ``ok=False``.

    Usage:
        async with CampaignTransport("http://localhost:3000") as transport:
            campaigns = await transport.fetch_campaigns("/api/campaigns?search=")
            result = await transport.delete_campaign("abc123")
    """

    def __init__(
        self,
        base_url: str,
        endpoint: str = "/api/campaigns",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the transport.

        Args:
            base_url: API origin, e.g. ``http://localhost:3000``
            endpoint: Collection path
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (mock transports in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "CampaignTransport":
        await self.connect()
        return self

    async def __aexit__(self, *args) -> None:
        await self.disconnect()

    async def connect(self) -> None:
        """Open the underlying HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
            logger.info("transport.connected", base_url=self.base_url)

    async def disconnect(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("transport.disconnected")

    async def _ensure_connected(self) -> httpx.AsyncClient:
        if self._client is None:
            await self.connect()
        return self._client  # type: ignore

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def fetch_campaigns(self, key: str) -> list[Campaign]:
        """
        Fetch the campaign list addressed by a cache key.

        Args:
            key: Path plus query, e.g. ``/api/campaigns?search=summer``

        Returns:
            Parsed campaigns in server order

        Raises:
            CampaignApiError: On network failure, non-2xx status or bad payload
        """
        client = await self._ensure_connected()
        try:
            response = await client.get(key)
        except httpx.HTTPError as e:
            raise CampaignApiError(f"Request failed: {e}") from e

        if not response.is_success:
            raise CampaignApiError(
                f"HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            return _CAMPAIGN_LIST.validate_python(response.json())
        except (ValueError, ValidationError) as e:
            raise CampaignApiError(
                f"Invalid campaign list: {e}", status_code=response.status_code
            ) from e

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def save_campaign(self, payload: dict[str, Any]) -> MutationResult:
        """
        POST a campaign to the collection.

        The server creates the record when the payload has no id and
        updates it otherwise; 201 signals a creation.
        """
        return await self._mutate("POST", self.endpoint, json=payload)

    async def delete_campaign(self, campaign_id: str) -> MutationResult:
        """DELETE a single campaign by id."""
        return await self._mutate("DELETE", f"{self.endpoint}/{campaign_id}")

    async def _mutate(self, method: str, url: str, **kwargs) -> MutationResult:
        client = await self._ensure_connected()
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("transport.request_failed", method=method, url=url, error=str(e))
            return MutationResult(ok=False, status=0, error=str(e))

        result = MutationResult(ok=response.is_success, status=response.status_code)
        if not result.ok:
            result.error = response.text
            logger.warning(
                "transport.request_rejected",
                method=method,
                url=url,
                status=response.status_code,
            )
        else:
            logger.debug("transport.request_ok", method=method, url=url, status=response.status_code)
        return result
