from .base import ClipStore, DuplicateObjectKey, ordering_key
from .memory import InMemoryClipStore
from .mongo import MongoClipStore
