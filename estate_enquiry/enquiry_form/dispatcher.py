"""Turns form state into an inquiry request and posts it to the inquiry endpoint."""

import httpx
from typing import Any, Dict

from estate_enquiry.enquiry_form.state import ContactForm, TourForm, PropertySummary
from estate_enquiry.utils.pg_array import encode_pg_array
from estate_enquiry.config.logging import get_logger

logger = get_logger(__name__)

INQUIRIES_ENDPOINT = "/api/inquiries"
TOUR_REQUEST_MESSAGE = "Tour request"


def default_contact_message(property: PropertySummary) -> str:
    return f"I'm interested in learning more about {property.title} in {property.location}."


def build_contact_payload(property: PropertySummary, form: ContactForm) -> Dict[str, Any]:
    state = form.state
    return {
        "name": state.name,
        "email": state.email,
        "phone": state.phone,
        # The endpoint requires a message; an untouched textarea sends its placeholder
        "message": state.message if state.message.strip() else default_contact_message(property),
        "inquiry_type": "contact",
        "property_id": property.id,
        "property_name": property.title,
        "property_location": property.location,
        "property_configurations": encode_pg_array(form.selected_labels()),
        "request_id": form.request_id,
    }


def build_tour_payload(property: PropertySummary, form: TourForm) -> Dict[str, Any]:
    state = form.state
    return {
        "name": state.name,
        "email": state.email,
        "phone": state.phone,
        "message": TOUR_REQUEST_MESSAGE,
        "inquiry_type": "tour",
        "property_id": property.id,
        "property_name": property.title,
        "property_location": property.location,
        "tour_date": state.date,
        "tour_time": state.time,
        "tour_type": encode_pg_array(state.tour_types()),
        "request_id": form.request_id,
    }


class DispatchResult:
    """Status and decoded body of one inquiry POST"""

    def __init__(self, status_code: int, data: Dict[str, Any]):
        self.status_code = status_code
        self.data = data

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def error_message(self, fallback: str) -> str:
        for key in ("error", "details", "detail"):
            value = self.data.get(key)
            if isinstance(value, str) and value:
                return value
        return fallback


class InquiryDispatcher:
    """
    Posts inquiry payloads with a caller-owned httpx.AsyncClient.

    One request per call: no retries, no deduplication beyond the payload's
    request_id. Transport errors (httpx.HTTPError) propagate to the caller.
    """

    def __init__(self, client: httpx.AsyncClient, endpoint: str = INQUIRIES_ENDPOINT):
        self.client = client
        self.endpoint = endpoint

    async def submit(self, payload: Dict[str, Any]) -> DispatchResult:
        response = await self.client.post(self.endpoint, json=payload)

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        logger.info(
            "Inquiry API response",
            extra={
                "inquiry_type": payload.get("inquiry_type"),
                "status_code": response.status_code,
            }
        )
        return DispatchResult(response.status_code, data)
