import certifi
from motor.motor_asyncio import AsyncIOMotorClient

from clipvault.config import Settings
from clipvault.store import ClipStore, InMemoryClipStore, MongoClipStore

client: AsyncIOMotorClient = None


async def connect_store(settings: Settings) -> ClipStore:
    """Open the configured clip store."""
    global client
    if settings.store_backend == "memory":
        print("Using in-memory clip store")
        return InMemoryClipStore()

    print(f"MongoDB URI: {settings.mongodb_uri[:50]}...")  # Print first 50 chars
    client = AsyncIOMotorClient(
        settings.mongodb_uri,
        serverSelectionTimeoutMS=5000,  # 5 second timeout
        tlsCAFile=certifi.where(),
    )
    store = MongoClipStore(client[settings.mongodb_database])
    # Test connection
    try:
        await client.admin.command('ping')
        await store.ensure_indexes()
        print(f"Connected to MongoDB: {settings.mongodb_database}")
    except Exception as e:
        print(f"MongoDB connection failed: {e}")
    return store


async def close_store():
    global client
    if client:
        client.close()
        client = None
        print("Closed MongoDB connection")
