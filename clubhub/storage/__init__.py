"""
Storage abstractions.
"""

from clubhub.storage.base import (
    MetadataStorage,
    Collections,
)
from clubhub.storage.local import (
    InMemoryMetadataStorage,
    JsonFileMetadataStorage,
    create_local_storage,
)

__all__ = [
    "MetadataStorage",
    "Collections",
    "InMemoryMetadataStorage",
    "JsonFileMetadataStorage",
    "create_local_storage",
]
