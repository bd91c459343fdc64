from sqlalchemy import Column, String, Text, Date, JSON, Index
from datetime import datetime, timezone
import uuid

from estate_enquiry.database import Base, TZDateTime


def _utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    full_name = Column(String, nullable=True)
    role = Column(String, nullable=False, default="user")  # admin, agent, user
    created_at = Column(TZDateTime, default=_utcnow)


class Inquiry(Base):
    __tablename__ = "inquiries"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    # Client-generated idempotency token, one per form submission
    request_id = Column(String, unique=True, nullable=True)

    # Contact details
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    subject = Column(String, nullable=True)
    message = Column(Text, nullable=False)

    # Triage
    inquiry_type = Column(String, nullable=False, default="contact")  # contact, tour, property, support, other
    status = Column(String, nullable=False, default="unread")
    priority = Column(String, nullable=False, default="normal")
    category = Column(String, nullable=False, default="general")
    source = Column(String, nullable=False, default="website")

    # Property context, denormalised at submission time
    property_id = Column(String, nullable=True, index=True)
    property_name = Column(String, nullable=True)
    property_location = Column(String, nullable=True)
    property_configurations = Column(JSON, nullable=True)
    property_price_range = Column(String, nullable=True)

    # Tour booking
    tour_date = Column(Date, nullable=True)
    tour_time = Column(String, nullable=True)
    tour_type = Column(JSON, nullable=True)
    tour_status = Column(String, nullable=True)  # pending, confirmed, completed, cancelled

    # Admin follow-up
    assigned_to = Column(String, nullable=True)
    response_notes = Column(Text, nullable=True)
    response_method = Column(String, nullable=True)
    responded_at = Column(TZDateTime, nullable=True)

    created_at = Column(TZDateTime, default=_utcnow)
    updated_at = Column(TZDateTime, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        Index("ix_inquiries_status_type", "status", "inquiry_type"),
    )
