from functools import lru_cache

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from todolist.config import get_settings
from todolist.exceptions import StorageError


@lru_cache
def get_client() -> AsyncIOMotorClient:
    settings = get_settings()
    uri = settings.mongo_uri
    if not uri:
        raise StorageError("MongoDB connection string not configured. Set MONGO_URI in .env.")
    return AsyncIOMotorClient(uri, serverSelectionTimeoutMS=settings.mongo_timeout_ms)


def get_tasks_collection() -> AsyncIOMotorCollection:
    settings = get_settings()
    return get_client()[settings.mongo_db][settings.tasks_collection]


async def ping() -> None:
    await get_client().admin.command("ping")
