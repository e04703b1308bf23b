"""web3.py implementation of the chain capability."""

from .client import Web3ChainClient
from .connections import Web3Connections
from .transactions import TransactionDispatcher

__all__ = ["Web3ChainClient", "Web3Connections", "TransactionDispatcher"]
