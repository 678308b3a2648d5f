"""Reset a demo user's account.

Deletes every deposit and transaction for the account owned by EMAIL and sets
its balance to 0.00. Virtual cards are kept.

Usage:
    python scripts/reset_user.py user@example.com
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parents[1] / "src"))

from hsa.core.exceptions import NotFoundError  # noqa: E402
from hsa.core.logging import setup_logging  # noqa: E402
from hsa.db.session import AsyncSessionLocal, async_engine  # noqa: E402
from hsa.services.account import AccountService  # noqa: E402


async def reset_user(email: str) -> int:
    async with AsyncSessionLocal() as session:
        try:
            result = await AccountService(session).reset_by_email(email)
        except NotFoundError:
            print(f"❌ No account found for {email}")
            return 1

    print(f"Reset account for {email}")
    print(f"   Deposits deleted: {result.deposits_deleted}")
    print(f"   Transactions deleted: {result.transactions_deleted}")
    print(f"   Balance: {result.balance}")
    return 0


async def main(email: str) -> int:
    try:
        return await reset_user(email)
    finally:
        await async_engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Reset an HSA demo account to zero")
    parser.add_argument("email", help="Email of the account owner")
    args = parser.parse_args()

    setup_logging(json_output=False)
    sys.exit(asyncio.run(main(args.email)))
