from fastapi import APIRouter, Depends, status

from fabquote.api.deps import get_quote_service
from fabquote.schemas.quotes import QuoteAcceptedOut, QuoteSubmissionIn
from fabquote.services.quote_service import QuoteService

router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.post("", response_model=QuoteAcceptedOut, status_code=status.HTTP_202_ACCEPTED)
async def submit_quote(payload: QuoteSubmissionIn, service: QuoteService = Depends(get_quote_service)):
    return service.submit(payload)
