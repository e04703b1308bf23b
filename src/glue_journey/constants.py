"""Constants, ABI fragments and sentinels for the Glue journey."""

from enum import Enum

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Collateral selector meaning "the chain's native asset" in unglue()
NATIVE_SENTINEL = ZERO_ADDRESS

MAX_UINT256 = 2**256 - 1

NATIVE_DECIMALS = 18
MAX_TOKEN_DECIMALS = 36
DEFAULT_TOKEN_DECIMALS = 18
BACKING_DISPLAY_PLACES = 12

DEFAULT_CHAIN_ID = 84532  # Base Sepolia
DEFAULT_RPC_URL = "https://sepolia.base.org"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_RECEIPT_TIMEOUT = 120.0
DEFAULT_REFRESH_INTERVAL = 12.0

# 4-byte selector of the Glue NoAssetsTransferred() custom error
NO_ASSETS_TRANSFERRED_SELECTOR = "0x2e659379"


class TokenFunction(str, Enum):
    """Token contract functions used by the journey."""

    TOTAL_SUPPLY = "totalSupply"
    BALANCE_OF = "balanceOf"
    DECIMALS = "decimals"
    ALLOWANCE = "allowance"
    APPROVE = "approve"
    UNGLUE = "unglue"
    CLAIM = "claimDemoTokens"


TOKEN_ABI: list[dict] = [
    {
        "type": "function",
        "stateMutability": "view",
        "name": "totalSupply",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "type": "function",
        "stateMutability": "view",
        "name": "balanceOf",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "type": "function",
        "stateMutability": "view",
        "name": "decimals",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8"}],
    },
    {
        "type": "function",
        "stateMutability": "view",
        "name": "allowance",
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"},
        ],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "type": "function",
        "stateMutability": "nonpayable",
        "name": "approve",
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "stateMutability": "nonpayable",
        "name": "claimDemoTokens",
        "inputs": [],
        "outputs": [],
    },
    {
        "type": "function",
        "stateMutability": "nonpayable",
        "name": "unglue",
        "inputs": [
            {"name": "collaterals", "type": "address[]"},
            {"name": "amount", "type": "uint256"},
            {"name": "tokenIds", "type": "uint256[]"},
            {"name": "recipient", "type": "address"},
        ],
        "outputs": [
            {"name": "supplyDelta", "type": "uint256"},
            {"name": "realAmount", "type": "uint256"},
            {"name": "beforeTotalSupply", "type": "uint256"},
            {"name": "afterTotalSupply", "type": "uint256"},
        ],
    },
]
