from .user import User, UserLogin, Token
from .inquiry import (
    InquiryCreate, InquiryResponse, InquiryCreateResponse, InquiryUpdate,
    InquiryUpdateResponse, InquiryDetailResponse, InquiryTableStatus,
    InquiryType, InquiryStatus, InquiryPriority, TourStatus, TourType, ResponseMethod
)
