"""Exception hierarchy for the Glue journey."""

from typing import Any


class GlueJourneyError(Exception):
    """Base exception for all Glue journey errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(GlueJourneyError):
    """Raised when input or snapshot validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class ConfigurationError(ValidationError):
    """Raised when the deployment still points at placeholder addresses."""

    pass


class NetworkError(GlueJourneyError):
    """Raised when RPC submission or receipt polling fails."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code


class RevertError(GlueJourneyError):
    """Raised when a transaction is mined with a failed status or reverts on estimation."""

    def __init__(
        self,
        message: str,
        tx_hash: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.tx_hash = tx_hash
