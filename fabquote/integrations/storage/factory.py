from functools import lru_cache

from fabquote.integrations.storage.base import StorageProvider
from fabquote.integrations.storage.s3 import S3StorageProvider


@lru_cache
def get_storage_provider() -> StorageProvider:
    return S3StorageProvider()
