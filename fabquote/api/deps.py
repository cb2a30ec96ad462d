from fastapi import Depends

from fabquote.integrations.storage.base import StorageProvider
from fabquote.integrations.storage.factory import get_storage_provider
from fabquote.services.presign_service import PresignService
from fabquote.services.quote_service import QuoteService


def get_provider() -> StorageProvider:
    return get_storage_provider()


def get_presign_service(provider: StorageProvider = Depends(get_provider)) -> PresignService:
    return PresignService(provider)


def get_quote_service() -> QuoteService:
    return QuoteService()
