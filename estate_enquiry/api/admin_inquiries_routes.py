from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from estate_enquiry.database import get_db
from estate_enquiry.models.database import User
from estate_enquiry.schemas.inquiry import (
    InquiryResponse,
    InquiryUpdate,
    InquiryUpdateResponse,
    InquiryDetailResponse,
    InquiryStatus,
    InquiryType,
    TourStatus,
)
from estate_enquiry.services.inquiry_service import InquiryService
from estate_enquiry.utils.auth import require_admin
from estate_enquiry.config.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/admin/inquiries", tags=["admin-inquiries"])


@router.get("", response_model=List[InquiryResponse])
async def list_inquiries(
    search: Optional[str] = Query(None, description="Match against name, email, message or subject"),
    status_filter: Optional[InquiryStatus] = Query(None, alias="status"),
    inquiry_type: Optional[InquiryType] = Query(None),
    tour_status: Optional[TourStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """List inquiries for the back office, newest first"""
    try:
        return await InquiryService.list_inquiries(
            db,
            search=search,
            status=status_filter.value if status_filter else None,
            inquiry_type=inquiry_type.value if inquiry_type else None,
            tour_status=tour_status.value if tour_status else None,
        )
    except Exception as e:
        logger.error("fetching inquiries failed", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail="Failed to fetch inquiries")


@router.get("/{inquiry_id}", response_model=InquiryDetailResponse)
async def get_inquiry(
    inquiry_id: str,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    inquiry = await InquiryService.get_inquiry(db, inquiry_id)
    if not inquiry:
        raise HTTPException(status_code=404, detail="Inquiry not found")
    return InquiryDetailResponse(inquiry=inquiry)


@router.patch("/{inquiry_id}", response_model=InquiryUpdateResponse)
async def update_inquiry(
    inquiry_id: str,
    changes: InquiryUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Update status, priority, tour status or follow-up details of an inquiry"""
    try:
        inquiry = await InquiryService.update_inquiry(db, inquiry_id, changes)

        if not inquiry:
            raise HTTPException(status_code=404, detail="Inquiry not found")

        return InquiryUpdateResponse(inquiry=inquiry, message="Inquiry updated successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error("updating inquiry failed", extra={"error": str(e), "inquiry_id": inquiry_id})
        await db.rollback()
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/{inquiry_id}")
async def delete_inquiry(
    inquiry_id: str,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    try:
        deleted = await InquiryService.delete_inquiry(db, inquiry_id)

        if not deleted:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inquiry not found")

        return {"message": "Inquiry deleted successfully"}

    except HTTPException:
        raise
    except Exception as e:
        logger.error("deleting inquiry failed", extra={"error": str(e), "inquiry_id": inquiry_id})
        await db.rollback()
        raise HTTPException(status_code=500, detail="Internal server error")
