from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cwstate.constants import DEFAULT_CHAINS, DEFAULT_LOG_FILE, DEFAULT_PAGE_LIMIT, DEFAULT_REQUEST_TIMEOUT

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    level: LogLevel = "INFO"
    file: str = DEFAULT_LOG_FILE

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper()
        return v


class LcdConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    # Address prefix -> LCD base URL, merged over the built-in chains
    chains: Dict[str, str] = {}
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)
    page_limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1)

    @field_validator("chains")
    @classmethod
    def validate_chain_urls(cls, v: Dict[str, str]) -> Dict[str, str]:
        for prefix, url in v.items():
            if not prefix:
                raise ValueError("Chain prefix must not be empty")
            if not url.startswith(("http://", "https://")):
                raise ValueError(f"Invalid LCD URL for prefix '{prefix}': {url}")
        return v

    def chain_table(self) -> Dict[str, str]:
        """Built-in chains with user overrides applied."""
        return {**DEFAULT_CHAINS, **self.chains}


class BrowserConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    lcd: LcdConfig = LcdConfig()
    logging: LoggingConfig = LoggingConfig()
    # Optional endpoint forced for every address (OVERLOAD_LCD wins over this)
    lcd_override: Optional[str] = None
