from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func, or_, and_
from sqlalchemy.exc import IntegrityError
from pydantic import EmailStr, TypeAdapter, ValidationError
from typing import List, Optional, Tuple
from datetime import date, datetime, timezone

from estate_enquiry.models.database import Inquiry
from estate_enquiry.schemas.inquiry import (
    InquiryCreate,
    InquiryResponse,
    InquiryUpdate,
    InquiryType,
    TourStatus,
)
from estate_enquiry.services.email_service import EmailService
from estate_enquiry.config.logging import get_logger

logger = get_logger(__name__)

_email_adapter = TypeAdapter(EmailStr)


class InquiryService:
    """Service for storing and triaging property enquiries and tour requests"""

    @staticmethod
    def _validate_submission(data: InquiryCreate) -> None:
        if not data.name.strip():
            raise ValueError("Name is required")
        if not data.email.strip():
            raise ValueError("Email is required")
        if not data.message.strip():
            raise ValueError("Message is required")

        try:
            _email_adapter.validate_python(data.email.strip())
        except ValidationError:
            raise ValueError("Please provide a valid email address")

        if data.inquiry_type == InquiryType.TOUR and (not data.tour_date or not data.tour_time):
            raise ValueError("Tour date and time are required for tour requests")

    @staticmethod
    async def _get_by_request_id(db: AsyncSession, request_id: str) -> Optional[Inquiry]:
        result = await db.execute(
            select(Inquiry).where(Inquiry.request_id == request_id)
        )
        return result.scalar_one_or_none()

    @classmethod
    async def create_inquiry(
        cls,
        db: AsyncSession,
        data: InquiryCreate
    ) -> Tuple[InquiryResponse, bool]:
        """
        Store a new enquiry.

        Returns the stored inquiry and whether it was a duplicate of an
        earlier submission carrying the same request_id.
        """
        cls._validate_submission(data)

        if data.request_id:
            existing = await cls._get_by_request_id(db, data.request_id)
            if existing:
                logger.info(
                    "Duplicate inquiry submission ignored",
                    extra={"inquiry_id": existing.id, "request_id": data.request_id}
                )
                return InquiryResponse.model_validate(existing), True

        tour_status = data.tour_status.value if data.tour_status else None
        if data.inquiry_type == InquiryType.TOUR and tour_status is None:
            tour_status = TourStatus.PENDING.value

        inquiry = Inquiry(
            request_id=data.request_id,
            name=data.name.strip(),
            email=data.email.strip(),
            phone=data.phone.strip() if data.phone else None,
            subject=data.subject.strip() if data.subject else None,
            message=data.message.strip(),
            priority=data.priority.value,
            category=data.category or "general",
            inquiry_type=data.inquiry_type.value,
            status="unread",
            source="website",
            property_id=data.property_id,
            property_name=data.property_name,
            property_location=data.property_location,
            property_configurations=data.property_configurations,
            property_price_range=data.property_price_range,
            tour_date=data.tour_date,
            tour_time=data.tour_time,
            tour_type=data.tour_type,
            tour_status=tour_status,
        )

        db.add(inquiry)
        try:
            await db.commit()
        except IntegrityError:
            # Another request with the same request_id won the race
            await db.rollback()
            if data.request_id:
                existing = await cls._get_by_request_id(db, data.request_id)
                if existing:
                    return InquiryResponse.model_validate(existing), True
            raise
        await db.refresh(inquiry)

        logger.info(
            "Inquiry submitted",
            extra={
                "inquiry_id": inquiry.id,
                "inquiry_type": inquiry.inquiry_type,
                "property_id": inquiry.property_id,
            }
        )

        # Notification failures must not fail the submission
        try:
            await EmailService().notify_new_inquiry(inquiry)
        except Exception as e:
            logger.error("Failed to send inquiry notification", extra={"error": str(e)})

        return InquiryResponse.model_validate(inquiry), False

    @classmethod
    async def count_inquiries(cls, db: AsyncSession) -> int:
        result = await db.execute(select(func.count(Inquiry.id)))
        return result.scalar() or 0

    @classmethod
    async def list_inquiries(
        cls,
        db: AsyncSession,
        search: Optional[str] = None,
        status: Optional[str] = None,
        inquiry_type: Optional[str] = None,
        tour_status: Optional[str] = None
    ) -> List[InquiryResponse]:
        """List inquiries newest first, optionally filtered"""
        query = select(Inquiry)

        if search:
            # The search term is literal text, not a LIKE pattern
            term = search.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            pattern = f"%{term}%"
            query = query.where(
                or_(
                    func.lower(Inquiry.name).like(pattern, escape="\\"),
                    func.lower(Inquiry.email).like(pattern, escape="\\"),
                    func.lower(Inquiry.message).like(pattern, escape="\\"),
                    func.lower(Inquiry.subject).like(pattern, escape="\\"),
                )
            )
        if status:
            query = query.where(Inquiry.status == status)
        if inquiry_type:
            query = query.where(Inquiry.inquiry_type == inquiry_type)
        if tour_status:
            query = query.where(Inquiry.tour_status == tour_status)

        result = await db.execute(query.order_by(Inquiry.created_at.desc()))
        return [InquiryResponse.model_validate(row) for row in result.scalars().all()]

    @classmethod
    async def get_inquiry(cls, db: AsyncSession, inquiry_id: str) -> Optional[InquiryResponse]:
        result = await db.execute(select(Inquiry).where(Inquiry.id == inquiry_id))
        inquiry = result.scalar_one_or_none()
        if not inquiry:
            return None
        return InquiryResponse.model_validate(inquiry)

    @classmethod
    async def update_inquiry(
        cls,
        db: AsyncSession,
        inquiry_id: str,
        changes: InquiryUpdate
    ) -> Optional[InquiryResponse]:
        """Apply an admin update; only fields present in the request change"""
        result = await db.execute(select(Inquiry).where(Inquiry.id == inquiry_id))
        inquiry = result.scalar_one_or_none()

        if not inquiry:
            return None

        now = datetime.now(timezone.utc)
        for field, value in changes.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(inquiry, field, value.value if hasattr(value, "value") else value)
            if field == "response_method":
                inquiry.responded_at = now

        inquiry.updated_at = now

        await db.commit()
        await db.refresh(inquiry)

        logger.info("Inquiry updated", extra={"inquiry_id": inquiry_id})
        return InquiryResponse.model_validate(inquiry)

    @classmethod
    async def delete_inquiry(cls, db: AsyncSession, inquiry_id: str) -> bool:
        result = await db.execute(select(Inquiry).where(Inquiry.id == inquiry_id))
        inquiry = result.scalar_one_or_none()

        if not inquiry:
            return False

        await db.delete(inquiry)
        await db.commit()

        logger.info("Inquiry deleted", extra={"inquiry_id": inquiry_id})
        return True

    @classmethod
    async def complete_past_tours(cls, db: AsyncSession, today: Optional[date] = None) -> int:
        """Mark confirmed tours whose date has passed as completed"""
        today = today or date.today()

        stmt = update(Inquiry).where(
            and_(
                Inquiry.inquiry_type == InquiryType.TOUR.value,
                Inquiry.tour_status == TourStatus.CONFIRMED.value,
                Inquiry.tour_date < today,
            )
        ).values(
            tour_status=TourStatus.COMPLETED.value,
            updated_at=datetime.now(timezone.utc)
        )

        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount
