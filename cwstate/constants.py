"""Constants used across cw-state."""

# LCD endpoints keyed by bech32 address prefix
DEFAULT_CHAINS: dict[str, str] = {
    "ki": "https://api-mainnet.blockchain.ki",
    "tki": "https://api-challenge.blockchain.ki",
    "juno": "https://api-juno-ia.cosmosia.notional.ventures/",
    "osmo": "https://lcd.osmosis.zone/",
    "chihuahua": "https://api.chihuahua.wtf/",
    "stars": "https://rest.stargaze-apis.com/",
}

# Environment variable that forces a specific LCD endpoint
LCD_OVERRIDE_ENV = "OVERLOAD_LCD"

CONTRACT_STATE_PATH = "/cosmwasm/wasm/v1/contract/{address}/state"

DEFAULT_REQUEST_TIMEOUT = 10.0  # Seconds
DEFAULT_PAGE_LIMIT = 1000  # Records requested in the single state query

DEFAULT_CONFIG_PATH = "~/.cw-state/config.yml"
DEFAULT_LOG_FILE = "~/.cw-state/logs/cw-state.log"

# Display strings shared by the TUI panes
NO_KEY_SELECTED = "NO KEY SELECTED"
HIGHLIGHT_SYMBOL = ">> "
