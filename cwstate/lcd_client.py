"""HTTP client for a chain's LCD (REST) endpoint."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from types import TracebackType

import httpx
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from cwstate.constants import (
    CONTRACT_STATE_PATH,
    DEFAULT_CHAINS,
    DEFAULT_PAGE_LIMIT,
    DEFAULT_REQUEST_TIMEOUT,
    LCD_OVERRIDE_ENV,
)
from cwstate.core.errors import InvalidAddressError, LcdError
from cwstate.core.state_tree import StateTree
from cwstate.core.storage import build_state_tree, decode_record
from cwstate.models import ContractStateResponse

__all__ = ["LcdClient", "LcdError", "resolve_lcd_url"]


def resolve_lcd_url(
    address: str,
    chains: Mapping[str, str] | None = None,
    env: Mapping[str, str] | None = None,
    override: str | None = None,
) -> str:
    """Pick the LCD endpoint for a contract address.

    ``OVERLOAD_LCD`` wins, then the configured override; otherwise the longest
    matching address prefix in the chain table is used.

    Raises:
        InvalidAddressError: no prefix matches
    """
    env = os.environ if env is None else env
    forced = env.get(LCD_OVERRIDE_ENV) or override
    if forced:
        return forced

    table = DEFAULT_CHAINS if chains is None else chains
    for prefix in sorted(table, key=len, reverse=True):
        if address.startswith(prefix):
            return table[prefix]
    raise InvalidAddressError(f"Invalid bech32 address => {address}")


def _error_detail(response: httpx.Response) -> str | None:
    """Extract the Cosmos SDK error message from a failed response."""
    try:
        body = response.json()
    except (json.JSONDecodeError, ValueError):
        return response.text or None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if isinstance(message, str):
            return message
    return response.text or None


class LcdClient:
    """Async client that loads a contract's full state in one request."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        page_limit: int = DEFAULT_PAGE_LIMIT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize client.

        Args:
            base_url: LCD base URL
            timeout: Request timeout in seconds
            page_limit: Number of storage records requested
            transport: Optional transport override (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.page_limit = page_limit
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "LcdClient":
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def _get(self, url: str, params: dict[str, str]) -> httpx.Response:
        """GET with error mapping.

        Raises:
            LcdError: request failed or returned a non-2xx status
        """
        if not self._client:
            raise LcdError("Client not connected. Call connect() first.")
        try:
            resp = await self._client.get(url, params=params)
            resp.raise_for_status()
            return resp
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            detail = _error_detail(e.response)
            raise LcdError(
                f"LCD request failed: {status_code} {detail or ''}".rstrip(),
                status_code=status_code,
                detail=detail,
            ) from e
        except httpx.TimeoutException as e:
            raise LcdError(f"LCD request timed out after {self.timeout}s: {self.base_url}") from e
        except httpx.HTTPError as e:
            raise LcdError(f"Cannot reach LCD at {self.base_url}: {e}") from e

    async def fetch_raw_state(self, address: str) -> ContractStateResponse:
        """Fetch the raw storage records of a contract."""
        url = CONTRACT_STATE_PATH.format(address=address)
        resp = await self._get(url, params={"pagination.limit": str(self.page_limit)})
        try:
            payload = TypeAdapter(ContractStateResponse).validate_json(resp.text)
        except ValidationError as e:
            raise LcdError(f"Malformed contract state response for {address}", detail=str(e)) from e

        if payload.pagination and payload.pagination.next_key:
            logger.warning(
                "Contract {} has more than {} storage records; showing the first page only", address, self.page_limit
            )
        logger.info("Fetched {} storage records for {}", len(payload.models), address)
        return payload

    async def fetch_contract_state(self, address: str) -> StateTree:
        """Fetch and decode a contract's state into a tree."""
        payload = await self.fetch_raw_state(address)
        return build_state_tree(decode_record(model.key, model.value) for model in payload.models)
