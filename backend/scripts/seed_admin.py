"""
Seed the admin group and admin user.

Creates a user group named "admin" and a user "admin" with password
"changeme123" in that group. Safe to run repeatedly: existing rows are
left untouched.

Usage:
    python scripts/seed_admin.py

Security:
    IMPORTANT: Change the default password immediately after first login!
"""

import asyncio
import sys
from pathlib import Path

# Add backend directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from aloha.core.config import settings
from aloha.core.database import async_session_maker, init_db
from aloha.core.transaction import Transaction
from aloha.repositories import UserGroupRepository, UserRepository
from aloha.schemas.pagination import PageLinks

ADMIN_GROUP = "admin"
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "changeme123"


async def seed_admin(session_factory=async_session_maker) -> None:
    """
    Create the admin group and user if they don't exist.

    Each insert runs in its own transaction because inserts commit.
    """
    groups = UserGroupRepository(PageLinks(collection_url=settings.collection_url("user_groups")))
    users = UserRepository(PageLinks(collection_url=settings.collection_url("users")))

    async with Transaction.begin(session_factory) as tx:
        group = await groups.get_by_name(tx, ADMIN_GROUP)
        if group is None:
            group = await groups.insert(tx, group_name=ADMIN_GROUP)
            print(f"Created user group '{ADMIN_GROUP}'")

    async with Transaction.begin(session_factory) as tx:
        if await users.username_exists(tx, ADMIN_USERNAME):
            print("Admin user already exists. Skipping...")
            return
        await users.create(tx, ADMIN_USERNAME, ADMIN_PASSWORD, user_group_id=group.id)

    print("Admin user created successfully!")
    print(f"Username: {ADMIN_USERNAME}")
    print(f"Password: {ADMIN_PASSWORD}")
    print("")
    print("WARNING: Please change this password immediately after first login!")


async def main() -> None:
    await init_db()
    await seed_admin()


if __name__ == "__main__":
    print("Seeding admin user...")
    asyncio.run(main())
    print("Done!")
