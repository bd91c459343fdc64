from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from estate_enquiry.database import get_db
from estate_enquiry.schemas.inquiry import InquiryCreate, InquiryCreateResponse, InquiryTableStatus
from estate_enquiry.services.inquiry_service import InquiryService
from estate_enquiry.config.logging import get_logger

router = APIRouter(prefix="/api/inquiries", tags=["inquiries"])
logger = get_logger(__name__)


@router.post("", response_model=InquiryCreateResponse)
async def submit_inquiry(
    inquiry_data: InquiryCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Public enquiry and tour request submission from the property pages
    """
    try:
        inquiry, duplicate = await InquiryService.create_inquiry(db, inquiry_data)

        return InquiryCreateResponse(
            success=True,
            message="Enquiry submitted successfully",
            data=[inquiry],
            duplicate=duplicate
        )

    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error("Inquiry submission failed", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error. Please try again.",
                "details": str(e)
            }
        )


@router.get("", response_model=InquiryTableStatus)
async def check_inquiries_table(db: AsyncSession = Depends(get_db)):
    """Health check for the inquiries table"""
    try:
        count = await InquiryService.count_inquiries(db)
        return InquiryTableStatus(status="ok", tableExists=True, count=count)

    except Exception as e:
        logger.error("Inquiries table check failed", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Database not accessible", "details": str(e)}
        )
