from datetime import date
from estate_enquiry.database import AsyncSessionLocal
from estate_enquiry.services.inquiry_service import InquiryService
from estate_enquiry.config.logging import get_logger

logger = get_logger(__name__)

async def complete_past_tours(session_factory=AsyncSessionLocal) -> int:
    """Scheduled job: close out confirmed tours whose date is already behind us"""
    today = date.today()
    logger.info("Starting tour status update", extra={"today": today.isoformat()})

    try:
        async with session_factory() as db:
            updated = await InquiryService.complete_past_tours(db, today)

        logger.info("Tour status update completed", extra={"tours_completed": updated})
        return updated

    except Exception:
        logger.error("Tour status update failed", exc_info=True)
        raise
