from fastapi import APIRouter

from fabquote.api.v1.endpoints import health, quotes, uploads

api_router = APIRouter()
api_router.include_router(uploads.router)
api_router.include_router(quotes.router)
api_router.include_router(health.router)
