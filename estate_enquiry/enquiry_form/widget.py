"""
The property enquiry widget: a "Contact Now" form and a "Request a tour"
form behind two tabs, shown either inline on the property page or in a
dialog.

Both presentation modes share this one implementation. The modal mode
adds two behaviours: opening the dialog starts from empty forms, and a
successful submission closes it after a short delay so the confirmation
can be read first.
"""

import asyncio
import httpx
from datetime import date
from enum import Enum
from typing import Callable, Optional

from estate_enquiry.enquiry_form.calendar import DateNavigator
from estate_enquiry.enquiry_form.dispatcher import (
    InquiryDispatcher,
    build_contact_payload,
    build_tour_payload,
)
from estate_enquiry.enquiry_form.state import (
    ContactForm,
    TourForm,
    FormPhase,
    PropertySummary,
    SubmissionOutcome,
)
from estate_enquiry.config.logging import get_logger

logger = get_logger(__name__)

CONTACT_SUCCESS_MESSAGE = "Enquiry submitted successfully!"
CONTACT_FAILURE_MESSAGE = "Failed to submit enquiry. Please try again."
TOUR_SUCCESS_MESSAGE = "Tour request submitted successfully!"
TOUR_FAILURE_MESSAGE = "Failed to submit tour request. Please try again."

MODAL_CLOSE_DELAY = 1.5


class PresentationMode(str, Enum):
    INLINE = "inline"
    MODAL = "modal"


class EnquiryTab(str, Enum):
    CONTACT = "contact"
    TOUR = "tour"


class EnquiryWidget:

    def __init__(
        self,
        property: PropertySummary,
        dispatcher: InquiryDispatcher,
        mode: PresentationMode = PresentationMode.INLINE,
        clock: Callable[[], date] = date.today,
        close_delay: float = MODAL_CLOSE_DELAY,
        on_close: Optional[Callable[[], None]] = None,
    ):
        self.property = property
        self.dispatcher = dispatcher
        self.mode = mode
        self.close_delay = close_delay
        self.on_close = on_close

        self.active_tab = EnquiryTab.CONTACT
        self.contact = ContactForm(property)
        self.tour = TourForm()
        self.calendar = DateNavigator(clock)

        # Inline panels are always visible; dialogs start closed
        self.is_open = mode == PresentationMode.INLINE
        self.mounted = True
        self._close_handle: Optional[asyncio.TimerHandle] = None

    # Tabs and visibility

    def select_tab(self, tab: EnquiryTab) -> None:
        self.active_tab = EnquiryTab(tab)

    def open(self, tab: Optional[EnquiryTab] = None) -> None:
        if not self.mounted:
            return
        if tab is not None:
            self.select_tab(tab)
        if self.is_open:
            return
        self.is_open = True
        if self.mode == PresentationMode.MODAL:
            self._reset_all()

    def close(self) -> None:
        self._cancel_auto_close()
        if self.mode == PresentationMode.INLINE or not self.is_open:
            return
        self.is_open = False
        if self.on_close:
            self.on_close()

    def unmount(self) -> None:
        """Tear down; any submission still in flight is left to finish and ignored"""
        self.mounted = False
        self.is_open = False
        self._cancel_auto_close()

    def _reset_all(self) -> None:
        for form in (self.contact, self.tour):
            form.reset()
            form.clear_feedback()
            form.phase = FormPhase.IDLE
        self.calendar.reset()

    # Field edits

    @property
    def dates(self):
        return self.calendar.dates

    def update_contact(self, field: str, value) -> None:
        self.contact.update(field, value)

    def toggle_config(self, key: str, checked: bool) -> None:
        self.contact.toggle_config(key, checked)

    def update_tour(self, field: str, value) -> None:
        self.tour.update(field, value)

    # Submission

    async def submit_contact(self) -> SubmissionOutcome:
        return await self._submit(
            self.contact,
            build_contact_payload(self.property, self.contact),
            CONTACT_SUCCESS_MESSAGE,
            CONTACT_FAILURE_MESSAGE,
        )

    async def submit_tour(self) -> SubmissionOutcome:
        return await self._submit(
            self.tour,
            build_tour_payload(self.property, self.tour),
            TOUR_SUCCESS_MESSAGE,
            TOUR_FAILURE_MESSAGE,
        )

    async def _submit(self, form, payload, success_message: str, failure_message: str) -> SubmissionOutcome:
        # Nothing is sent while a request is in flight or once the widget is gone
        if form.submitting or not self.mounted:
            return form.outcome

        form.clear_feedback()

        errors = form.validate()
        if errors:
            form.validation_errors = errors
            form.phase = FormPhase.INVALID
            return form.outcome

        form.phase = FormPhase.SUBMITTING
        try:
            result = await self.dispatcher.submit(payload)
        except httpx.HTTPError as e:
            logger.error(
                "Inquiry submission failed",
                extra={"inquiry_type": payload["inquiry_type"], "error": str(e)}
            )
            outcome, succeeded = SubmissionOutcome(status="error", message=failure_message), False
        else:
            if result.ok:
                outcome, succeeded = SubmissionOutcome(status="success", message=success_message), True
            else:
                outcome = SubmissionOutcome(status="error", message=result.error_message(failure_message))
                succeeded = False

        if not self.mounted:
            logger.info(
                "Discarding inquiry outcome after unmount",
                extra={"inquiry_type": payload["inquiry_type"], "outcome": outcome.status}
            )
            form.phase = FormPhase.IDLE
            return outcome

        form.outcome = outcome
        if succeeded:
            form.phase = FormPhase.SUCCESS
            form.reset()
            if self.mode == PresentationMode.MODAL:
                self._schedule_auto_close()
        else:
            form.phase = FormPhase.ERROR
        return outcome

    def _schedule_auto_close(self) -> None:
        self._cancel_auto_close()
        loop = asyncio.get_running_loop()
        self._close_handle = loop.call_later(self.close_delay, self.close)

    def _cancel_auto_close(self) -> None:
        if self._close_handle is not None:
            self._close_handle.cancel()
            self._close_handle = None
