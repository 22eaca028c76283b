"""cw-state command-line entrypoint.

Usage: cw-state <contract_address>

The LCD endpoint is chosen from the address prefix, or forced with the
OVERLOAD_LCD environment variable.
"""

from __future__ import annotations

import asyncio
import sys

from loguru import logger

from cwstate.cli.tui.app import StateBrowserApp
from cwstate.config import BrowserConfig, load_browser_config, load_environment
from cwstate.core.errors import CwStateError
from cwstate.core.state_tree import StateTree
from cwstate.lcd_client import LcdClient, resolve_lcd_url
from cwstate.logging_config import setup_logging


def _usage() -> str:
    return "usage: cw-state contract_address"


async def load_contract_state(address: str, config: BrowserConfig) -> StateTree:
    """Resolve the endpoint for ``address`` and fetch its state once."""
    base_url = resolve_lcd_url(address, config.lcd.chain_table(), override=config.lcd_override)
    logger.info("Loading state of {} from {}", address, base_url)
    async with LcdClient(
        base_url,
        timeout=config.lcd.request_timeout,
        page_limit=config.lcd.page_limit,
    ) as client:
        return await client.fetch_contract_state(address)


def _main_impl(argv: list[str]) -> int:
    if len(argv) != 1:
        sys.stderr.write(f"{_usage()}\n")
        return 0

    address = argv[0]
    load_environment()
    config = load_browser_config()
    setup_logging(config.logging)

    try:
        tree = asyncio.run(load_contract_state(address, config))
    except CwStateError as exc:
        logger.error("Failed to load contract state: {}", exc)
        sys.stderr.write(f"cw-state error: {exc}\n")
        return 1

    StateBrowserApp(tree, address=address).run()
    return 0


def main() -> None:
    try:
        sys.exit(_main_impl(sys.argv[1:]))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
