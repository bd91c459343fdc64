from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import List, Optional, Union
from enum import Enum

from estate_enquiry.utils.pg_array import coerce_string_list


class InquiryType(str, Enum):
    CONTACT = "contact"
    TOUR = "tour"
    PROPERTY = "property"
    SUPPORT = "support"
    OTHER = "other"

class InquiryStatus(str, Enum):
    UNREAD = "unread"
    READ = "read"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"
    SPAM = "spam"

class InquiryPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"

class TourStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class TourType(str, Enum):
    SITE_VISIT = "siteVisit"
    VIDEO_CHAT = "videoChat"

class ResponseMethod(str, Enum):
    EMAIL = "email"
    PHONE = "phone"
    SMS = "sms"
    WHATSAPP = "whatsapp"
    IN_PERSON = "in_person"


class InquiryCreate(BaseModel):
    """Public enquiry submission, as posted by the property enquiry forms.

    Presence of name, email and message is checked by the service so the
    caller gets a plain-language error instead of a schema error.
    """
    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: str = ""
    priority: InquiryPriority = InquiryPriority.NORMAL
    category: str = "general"
    inquiry_type: InquiryType = InquiryType.CONTACT

    property_id: Optional[str] = None
    property_name: Optional[str] = None
    property_location: Optional[str] = None
    # Either a JSON list or a Postgres array literal such as {"2BHK","3BHK"}
    property_configurations: Optional[Union[List[str], str]] = None
    property_price_range: Optional[str] = None

    tour_date: Optional[date] = None
    tour_time: Optional[str] = None
    tour_type: Optional[Union[List[str], str]] = None
    tour_status: Optional[TourStatus] = None

    request_id: Optional[str] = None

    @field_validator("property_configurations", "tour_type", mode="before")
    @classmethod
    def normalise_string_list(cls, value):
        return coerce_string_list(value)

    @field_validator("tour_type")
    @classmethod
    def check_tour_types(cls, value):
        if value is None:
            return value
        allowed = {t.value for t in TourType}
        unknown = [v for v in value if v not in allowed]
        if unknown:
            raise ValueError(f"Unknown tour type: {', '.join(unknown)}")
        return value

    @field_validator("tour_date", "tour_time", "tour_status", "phone", "subject",
                     "property_id", "property_name", "property_location",
                     "property_price_range", "request_id", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class InquiryResponse(BaseModel):
    id: str
    request_id: Optional[str] = None
    name: str
    email: str
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: str
    inquiry_type: str
    status: str
    priority: str
    category: str
    source: str
    property_id: Optional[str] = None
    property_name: Optional[str] = None
    property_location: Optional[str] = None
    property_configurations: Optional[List[str]] = None
    property_price_range: Optional[str] = None
    tour_date: Optional[date] = None
    tour_time: Optional[str] = None
    tour_type: Optional[List[str]] = None
    tour_status: Optional[str] = None
    assigned_to: Optional[str] = None
    response_notes: Optional[str] = None
    response_method: Optional[str] = None
    responded_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class InquiryCreateResponse(BaseModel):
    success: bool
    message: str
    data: List[InquiryResponse]
    duplicate: bool = False


class InquiryUpdate(BaseModel):
    """Admin-side partial update. Unset fields are left untouched."""
    status: Optional[InquiryStatus] = None
    priority: Optional[InquiryPriority] = None
    tour_status: Optional[TourStatus] = None
    response_notes: Optional[str] = None
    response_method: Optional[ResponseMethod] = None
    assigned_to: Optional[str] = None


class InquiryUpdateResponse(BaseModel):
    inquiry: InquiryResponse
    message: str


class InquiryDetailResponse(BaseModel):
    inquiry: InquiryResponse


class InquiryTableStatus(BaseModel):
    status: str
    tableExists: bool
    count: int
