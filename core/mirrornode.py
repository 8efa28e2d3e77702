"""Mirror node read service using httpx.

The mirror node indexes ledger state and serves it over a REST API.
Tools go through this service rather than calling the transport directly.
"""

import logging
from typing import Any, TypedDict

import httpx

from core.config import get_config

logger = logging.getLogger(__name__)


class TokenInfo(TypedDict, total=False):
    """Token record as returned by /api/v1/tokens/{token_id}."""

    token_id: str
    name: str
    symbol: str
    decimals: str
    total_supply: str
    supply_type: str
    treasury_account_id: str
    created_timestamp: str
    modified_timestamp: str
    freeze_default: bool


class MirrornodeError(Exception):
    """The mirror node returned a non-success response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EntityNotFoundError(MirrornodeError):
    """The requested entity does not exist on the network."""

    def __init__(self, entity_id: str) -> None:
        super().__init__(f"{entity_id} not found", status_code=404)
        self.entity_id = entity_id


class MirrornodeService:
    """Read-only client for a single network's mirror node."""

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        if client is None:
            client = httpx.AsyncClient(timeout=timeout or get_config().http.timeout)
        self._client = client

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def _get(self, path: str, entity_id: str) -> dict[str, Any]:
        url = f"{self.base_url}/api/v1/{path}"
        logger.debug("GET %s", url)
        resp = await self._client.get(url)

        if resp.status_code == 404:
            raise EntityNotFoundError(entity_id)
        if not resp.is_success:
            raise MirrornodeError(
                f"Mirror node returned {resp.status_code}", status_code=resp.status_code
            )
        return resp.json()

    async def get_token_info(self, token_id: str) -> TokenInfo:
        """Fetch a token record by its X.X.X identifier."""
        return await self._get(f"tokens/{token_id}", token_id)


def get_mirrornode_service(
    service: MirrornodeService | None, ledger_id: str | None
) -> MirrornodeService:
    """Return the given service, or build one for the ledger's mirror node."""
    if service is not None:
        return service
    url = get_config().network.get_mirror_node_url(ledger_id)
    return MirrornodeService(url)
