"""Create the HSA database schema.

Safe to run repeatedly: existing tables are left alone and columns added in
later releases are patched onto older databases.
"""

import asyncio
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parents[1] / "src"))

from hsa.config import settings  # noqa: E402
from hsa.core.logging import setup_logging  # noqa: E402
from hsa.db.init_db import init_db  # noqa: E402
from hsa.db.session import async_engine  # noqa: E402


async def main() -> None:
    print(f"Setting up database at {settings.database_url} ...")
    try:
        await init_db(async_engine)
    finally:
        await async_engine.dispose()
    print("\n✅ Database ready!")


if __name__ == "__main__":
    setup_logging(json_output=False)
    asyncio.run(main())
