"""Unit tests for the LCD client."""

import base64

import httpx
import pytest
from loguru import logger

from cwstate.core.errors import InvalidAddressError, LcdError
from cwstate.core.state_tree import StateItem, StateMap
from cwstate.lcd_client import LcdClient, resolve_lcd_url

ADDRESS = "juno1contract"


def _model(key: bytes, value: bytes) -> dict[str, str]:
    return {"key": key.hex(), "value": base64.b64encode(value).decode()}


def _state_payload() -> dict[str, object]:
    return {
        "models": [
            _model(b"config", b'{"owner":"juno1owner"}'),
            _model(b"\x00\x08balances" + b"juno1a", b'"5"'),
        ],
        "pagination": {"next_key": None, "total": "0"},
    }


@pytest.mark.unit
def test_resolve_by_prefix():
    assert resolve_lcd_url("juno1xyz", env={}) == "https://api-juno-ia.cosmosia.notional.ventures/"
    assert resolve_lcd_url("tki1xyz", env={}) == "https://api-challenge.blockchain.ki"
    assert resolve_lcd_url("ki1xyz", env={}) == "https://api-mainnet.blockchain.ki"


@pytest.mark.unit
def test_resolve_prefers_environment_override():
    env = {"OVERLOAD_LCD": "http://localhost:1317"}

    assert resolve_lcd_url("unknown1xyz", env=env, override="http://other") == "http://localhost:1317"
    assert resolve_lcd_url("unknown1xyz", env={}, override="http://other") == "http://other"


@pytest.mark.unit
def test_resolve_uses_custom_chain_table():
    chains = {"neutron": "https://neutron.example"}

    assert resolve_lcd_url("neutron1abc", chains, env={}) == "https://neutron.example"


@pytest.mark.unit
def test_resolve_unknown_prefix_raises():
    with pytest.raises(InvalidAddressError, match="Invalid bech32 address => cosmos1abc"):
        resolve_lcd_url("cosmos1abc", env={})


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fetch_contract_state_builds_tree():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_state_payload())

    async with LcdClient("https://lcd.example/", page_limit=50, transport=httpx.MockTransport(handler)) as client:
        tree = await client.fetch_contract_state(ADDRESS)

    assert seen[0].url.path == f"/cosmwasm/wasm/v1/contract/{ADDRESS}/state"
    assert seen[0].url.params["pagination.limit"] == "50"
    assert tree.keys() == ("config", "balances")
    assert tree.get("config") == StateItem('{"owner":"juno1owner"}')
    assert tree.get("balances") == StateMap({"juno1a": StateItem('"5"')})


@pytest.mark.unit
@pytest.mark.asyncio
async def test_truncated_response_builds_tree_and_warns():
    warnings: list[str] = []
    logger.add(warnings.append, level="WARNING")
    payload = _state_payload()
    payload["pagination"] = {"next_key": "AAE=", "total": "0"}

    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    async with LcdClient("https://lcd.example", page_limit=2, transport=httpx.MockTransport(handler)) as client:
        tree = await client.fetch_contract_state(ADDRESS)

    assert tree.keys() == ("config", "balances")
    assert any("first page only" in message for message in warnings)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_http_error_maps_to_lcd_error():
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"code": 2, "message": "contract not found", "details": []})

    async with LcdClient("https://lcd.example", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(LcdError) as exc_info:
            await client.fetch_contract_state(ADDRESS)

    assert exc_info.value.status_code == 500
    assert exc_info.value.detail == "contract not found"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_connect_error_maps_to_lcd_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with LcdClient("https://lcd.example", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(LcdError, match="Cannot reach LCD"):
            await client.fetch_contract_state(ADDRESS)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_malformed_payload_raises():
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"models": [{"key": 1}]})

    async with LcdClient("https://lcd.example", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(LcdError, match="Malformed"):
            await client.fetch_contract_state(ADDRESS)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_request_without_connect_raises():
    client = LcdClient("https://lcd.example")

    with pytest.raises(LcdError, match="not connected"):
        await client.fetch_raw_state(ADDRESS)
