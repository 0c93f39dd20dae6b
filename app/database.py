"""Database module - MongoDB connection management and index setup."""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from app.config import settings

logger = logging.getLogger(__name__)

RESUMES_COLLECTION = "resumes"
OWNER_INDEX_NAME = "user_uploaded_at"

client: AsyncIOMotorClient | None = None
db: AsyncIOMotorDatabase | None = None


async def connect_db() -> None:
    global client, db
    client = AsyncIOMotorClient(settings.mongodb_connection_string)
    db = client[settings.database_name]
    await client.admin.command("ping")
    logger.info("Connected to MongoDB database '%s'", settings.database_name)


async def close_db() -> None:
    global client
    if client:
        client.close()


async def ensure_indexes() -> None:
    """Create the per-owner listing index on the resumes collection."""
    collection = get_db()[RESUMES_COLLECTION]
    name = await collection.create_index(
        [("user_id", ASCENDING), ("uploaded_at", DESCENDING)],
        name=OWNER_INDEX_NAME,
    )
    logger.info("Ensured index '%s' on %s", name, RESUMES_COLLECTION)


def get_db() -> AsyncIOMotorDatabase:
    if db is None:
        raise RuntimeError("Database not initialized. Call connect_db() first.")
    return db
