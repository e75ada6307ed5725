from __future__ import annotations

import logging
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from site_cms.content.models import UserDocument
from site_cms.db.nosql import NoSqlRepository, NoSqlService

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_NAME = "مدير النظام"

users_repo = NoSqlRepository(collection_name="users", unique_fields=("email",))
user_service = NoSqlService(users_repo, schema=UserDocument)


async def find_user_by_email(db: AsyncIOMotorDatabase, email: str) -> Optional[dict[str, Any]]:
    return await users_repo.find_one(db, {"email": email.strip().lower()})


async def seed_admin(
    db: AsyncIOMotorDatabase, email: str, name: str = DEFAULT_ADMIN_NAME
) -> tuple[dict[str, Any], bool]:
    """Create the admin user unless one with ``email`` exists. Returns ``(user, created)``."""
    existing = await find_user_by_email(db, email)
    if existing is not None:
        logger.debug("Admin user %s already exists", existing["email"])
        return existing, False
    user = await user_service.create(db, {"email": email, "name": name, "role": "admin"})
    logger.info("Default admin user created: %s", user["email"])
    return user, True
