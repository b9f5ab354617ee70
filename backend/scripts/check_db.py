"""
Check database connectivity.

Runs ``SELECT 1`` against the configured DATABASE_URL and exits
non-zero when the store is unreachable.

Usage:
    python scripts/check_db.py
"""

import asyncio
import sys
from pathlib import Path

# Add backend directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from aloha.core.config import settings
from aloha.core.database import check_database, close_db


async def main() -> int:
    healthy = await check_database(timeout_seconds=settings.db_pool_timeout + 3.0)
    await close_db()
    scheme = settings.database_url.split("://", 1)[0]
    if healthy:
        print(f"Database OK ({scheme})")
        return 0
    print(f"Database UNREACHABLE ({scheme})")
    return 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
