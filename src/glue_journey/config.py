"""Configuration container for the Glue journey."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv
from web3 import Web3
from web3.types import ChecksumAddress

from .constants import (
    DEFAULT_CHAIN_ID,
    DEFAULT_RECEIPT_TIMEOUT,
    DEFAULT_REFRESH_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RPC_URL,
    ZERO_ADDRESS,
)
from .exceptions import ConfigurationError, ValidationError

_TRUTHY = {"1", "true", "yes", "y", "on"}


def _checksum(value: str, field: str) -> ChecksumAddress:
    try:
        return Web3.to_checksum_address(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            "Invalid address", field=field, value=value, details={"error": str(exc)}
        ) from exc


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip(), 0)
    except ValueError as exc:
        raise ValidationError("Expected an integer", field=name, value=raw) from exc


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValidationError("Expected a number", field=name, value=raw) from exc


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class GlueConfig:
    """Deployment settings for one chain, one token and one vault.

    Every field defaults to an inert placeholder (zero addresses and the public
    Base Sepolia endpoint) so an unconfigured deployment can be detected and
    refused instead of silently targeting the wrong contract.
    """

    chain_id: int = DEFAULT_CHAIN_ID
    token_address: ChecksumAddress = ChecksumAddress(ZERO_ADDRESS)  # type: ignore[assignment]
    vault_address: ChecksumAddress = ChecksumAddress(ZERO_ADDRESS)  # type: ignore[assignment]
    rpc_url: str = DEFAULT_RPC_URL
    spender_address: ChecksumAddress | None = None
    claim_enabled: bool = True
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        dotenv_path: str | None = None,
    ) -> GlueConfig:
        """Build a config from ``GLUE_*`` environment variables.

        A ``.env`` file is loaded first without overriding variables that are
        already set. Passing ``environ`` skips the process environment entirely.
        """

        if environ is None:
            load_dotenv(dotenv_path, override=False)
            environ = os.environ

        token = _checksum(environ.get("GLUE_TOKEN_ADDRESS") or ZERO_ADDRESS, "GLUE_TOKEN_ADDRESS")
        vault = _checksum(environ.get("GLUE_VAULT_ADDRESS") or ZERO_ADDRESS, "GLUE_VAULT_ADDRESS")
        raw_spender = environ.get("GLUE_SPENDER_ADDRESS")
        spender = _checksum(raw_spender, "GLUE_SPENDER_ADDRESS") if raw_spender else None

        return cls(
            chain_id=_env_int(environ, "GLUE_CHAIN_ID", DEFAULT_CHAIN_ID),
            token_address=token,
            vault_address=vault,
            rpc_url=(environ.get("GLUE_RPC_URL") or DEFAULT_RPC_URL).rstrip("/"),
            spender_address=spender,
            claim_enabled=_env_bool(environ, "GLUE_CLAIM_ENABLED", True),
            refresh_interval=_env_float(environ, "GLUE_REFRESH_INTERVAL", DEFAULT_REFRESH_INTERVAL),
            receipt_timeout=_env_float(environ, "GLUE_RECEIPT_TIMEOUT", DEFAULT_RECEIPT_TIMEOUT),
            request_timeout=_env_float(environ, "GLUE_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        )

    @property
    def spender(self) -> ChecksumAddress:
        """Address allowed to pull tokens for unglue; the token contract by default."""

        return self.spender_address or self.token_address

    @property
    def is_configured(self) -> bool:
        return int(self.token_address, 16) != 0 and int(self.vault_address, 16) != 0

    def ensure_configured(self) -> None:
        if int(self.token_address, 16) == 0:
            raise ConfigurationError(
                "Token address is not configured", field="token_address", value=self.token_address
            )
        if int(self.vault_address, 16) == 0:
            raise ConfigurationError(
                "Vault address is not configured", field="vault_address", value=self.vault_address
            )
