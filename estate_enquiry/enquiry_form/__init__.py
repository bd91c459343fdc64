from .calendar import CalendarDateEntry, DateNavigator, generate_dates, TIME_SLOTS, WINDOW_DAYS, PAGE_DAYS
from .state import (
    PropertySummary, ConfigOption, config_options, ContactFormState, TourFormState,
    ContactForm, TourForm, FormPhase, SubmissionOutcome, validate_tour_form, validate_contact_form
)
from .dispatcher import InquiryDispatcher, DispatchResult, build_contact_payload, build_tour_payload
from .widget import EnquiryWidget, EnquiryTab, PresentationMode
