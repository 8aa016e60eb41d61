import itertools

import pytest

from clipvault.catalog import ClipCatalog
from clipvault.config import Settings
from clipvault.services import S3Service
from clipvault.store import InMemoryClipStore

OWNER = "alice"
OTHER = "bob"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        store_backend="memory",
        allow_dev_identity=True,
        dev_user_id=OWNER,
    )


@pytest.fixture
def store():
    return InMemoryClipStore()


@pytest.fixture
def catalog(store):
    return ClipCatalog(store)


@pytest.fixture
def add_clip(store):
    """Insert a clip record directly; returns its id."""
    counter = itertools.count(1)

    async def _add_clip(user_id=OWNER, created_at=None, **fields):
        n = next(counter)
        record = {
            "user_id": user_id,
            "object_key": fields.pop("object_key", f"clips/{user_id}/{n}-clip.mp4"),
            "created_at": created_at if created_at is not None else n * 100,
            "bytes": fields.pop("bytes", 1024),
            "tags": fields.pop("tags", []),
            "favorite": fields.pop("favorite", False),
        }
        record.update(fields)
        return await store.insert_clip(record)

    return _add_clip


@pytest.fixture
def add_session(store):
    async def _add_session(user_id=OWNER, name="Monday", created_at=1):
        return await store.insert_session(
            {"user_id": user_id, "name": name, "created_at": created_at}
        )

    return _add_session


class PresigningS3(S3Service):
    """Issues fake URLs without talking to a bucket."""

    async def generate_presigned_upload_url(self, s3_key, content_type, content_length):
        return f"https://bucket.test/{s3_key}?put"

    async def generate_presigned_download_url(self, s3_key):
        return f"https://bucket.test/{s3_key}?get"
