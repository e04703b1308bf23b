"""Connection helpers for the web3-backed chain client."""

from __future__ import annotations

import logging
from typing import cast

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import HTTPProvider, Web3
from web3.contract import Contract
from web3.middleware import SignAndSendRawMiddlewareBuilder
from web3.types import ChecksumAddress

from ..config import GlueConfig
from ..constants import TOKEN_ABI
from ..exceptions import NetworkError, ValidationError

logger = logging.getLogger(__name__)


class Web3Connections:
    """Manage the Web3 provider, signing middleware and contract handles."""

    def __init__(self, config: GlueConfig, private_key: str):
        self.config = config
        self._private_key = private_key
        self._provider: HTTPProvider | None = None
        self._web3: Web3 | None = None
        self._account: LocalAccount | None = None
        self._contracts: dict[ChecksumAddress, Contract] = {}
        self._connected = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def connect(self) -> None:
        """Initialise the provider, signer middleware and token handle."""

        self.config.ensure_configured()

        try:
            signer = cast(LocalAccount, Account.from_key(self._private_key))  # type: ignore[arg-type]
        except Exception as exc:
            raise ValidationError(
                "Failed to derive signer account from provided private key",
                field="private_key",
                details={"error": str(exc)},
            ) from exc

        self._account = signer

        provider = HTTPProvider(
            self.config.rpc_url, request_kwargs={"timeout": self.config.request_timeout}
        )
        web3 = Web3(provider)
        if not web3.is_connected():
            raise NetworkError("Unable to connect to RPC", endpoint=self.config.rpc_url)

        web3.middleware_onion.add(SignAndSendRawMiddlewareBuilder.build(signer))  # type: ignore[arg-type]
        web3.eth.default_account = signer.address

        self._provider = provider
        self._web3 = web3
        self._contracts = {}
        self._connected = True
        logger.info("Connected to RPC at %s as %s", self.config.rpc_url, signer.address)

    def disconnect(self) -> None:
        self._provider = None
        self._web3 = None
        self._account = None
        self._contracts = {}
        self._connected = False

    def is_connected(self) -> bool:
        return self._connected and self._web3 is not None and self._account is not None

    def ensure_connected(self) -> None:
        if not self.is_connected():
            raise NetworkError("Chain client is not connected", endpoint=self.config.rpc_url)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def account(self) -> LocalAccount:
        if self._account is None:
            raise NetworkError(
                "Signer account is not initialised; call connect() first",
                endpoint=self.config.rpc_url,
            )
        return self._account

    @property
    def web3(self) -> Web3:
        if self._web3 is None:
            raise NetworkError("RPC provider not connected", endpoint=self.config.rpc_url)
        return self._web3

    def contract(self, address: str) -> Contract:
        """Return a cached contract handle bound to the token ABI."""

        checksum = Web3.to_checksum_address(address)
        handle = self._contracts.get(checksum)
        if handle is None:
            handle = self.web3.eth.contract(address=checksum, abi=TOKEN_ABI)
            self._contracts[checksum] = handle
        return handle
