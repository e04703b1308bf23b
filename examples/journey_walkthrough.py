"""Glue journey walkthrough.

This example demonstrates:
- Loading the deployment from GLUE_* environment variables
- Connecting a local signing wallet
- Claiming demo tokens, depositing into the vault and ungluing
- Printing the derived journey step after every action
"""

import asyncio
import os

from dotenv import load_dotenv

from glue_journey import GlueConfig, GlueJourneySession, format_token_amount
from glue_journey.evm import Web3ChainClient

load_dotenv()


def print_view(session: GlueJourneySession) -> None:
    view = session.view()
    print(f"🧭 Step: {view.step.value}")
    print(f"   {view.message}")

    metrics = session.metrics.latest
    if metrics is not None:
        print(f"   Vault: {format_token_amount(metrics.vault_native_balance, 18)} ETH")
        print(f"   My tokens: {format_token_amount(metrics.user_balance, metrics.decimals)}")
        print(f"   All tokens: {format_token_amount(metrics.total_supply, metrics.decimals, 2)}")
        print(f"   Backing per token: {metrics.estimated_backing_per_token} ETH")


async def example_journey():
    """Walk the full claim, deposit and unglue journey."""

    private_key = os.getenv("PRIVATE_KEY")
    if not private_key:
        raise ValueError("PRIVATE_KEY not found in environment variables")

    config = GlueConfig.from_env()
    client = Web3ChainClient(config, private_key)
    session = GlueJourneySession(config, client, client)

    await session.connect()
    print_view(session)

    if config.claim_enabled:
        await session.claim()
        print_view(session)

    await session.deposit(os.getenv("DEPOSIT_AMOUNT", "0.001"))
    print_view(session)

    await session.unglue(os.getenv("BURN_AMOUNT", "10"))
    print_view(session)

    await session.disconnect()


def main():
    """Run the Glue journey walkthrough."""

    print("=" * 50)
    print("Glue Journey - Walkthrough")
    print("🍪 Claim, deposit, unglue")
    print("=" * 50)

    asyncio.run(example_journey())


if __name__ == "__main__":
    main()
