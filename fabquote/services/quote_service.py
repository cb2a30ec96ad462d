from uuid import uuid4

import structlog

from fabquote.schemas.quotes import QuoteAcceptedOut, QuoteSubmissionIn

logger = structlog.get_logger()


class QuoteService:
    """Acknowledges completed RFQ submissions. Nothing is stored server-side."""

    def submit(self, payload: QuoteSubmissionIn) -> QuoteAcceptedOut:
        quote_id = uuid4()
        logger.info(
            "quote_received",
            quote_id=str(quote_id),
            timeline=payload.timeline,
            material=payload.material,
            quantity=payload.quantity,
            company=payload.company_name,
            file_keys=payload.file_keys,
        )
        return QuoteAcceptedOut(quote_id=quote_id, file_count=len(payload.file_keys))
