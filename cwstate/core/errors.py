"""Exception hierarchy for cw-state."""


class CwStateError(Exception):
    """Base class for errors the CLI reports to the user."""


class InvalidAddressError(CwStateError):
    """Contract address has no known chain prefix."""


class StateDecodeError(CwStateError):
    """Raw contract storage record could not be decoded."""


class LcdError(CwStateError):
    """LCD request failed with structured error info."""

    def __init__(self, message: str, status_code: int | None = None, detail: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail or message
