"""View state of the contact enquiry and tour request forms, plus their validators."""

from pydantic import BaseModel, Field, field_validator
from datetime import date
from enum import Enum
from typing import Dict, List, Literal
import uuid

from estate_enquiry.enquiry_form.calendar import TIME_SLOT_VALUES


class PropertySummary(BaseModel):
    """The listing an enquiry is about, as much of it as the form needs"""
    id: str
    title: str
    location: str
    configurations: List[int] = Field(default_factory=list)  # BHK counts


class ConfigOption(BaseModel):
    key: str
    label: str


def config_options(property: PropertySummary) -> List[ConfigOption]:
    """
    One checkbox per configuration of the property, keyed "{bhk}BHK-{index}"
    so two configurations with the same BHK count stay distinct. Properties
    without configurations get the 1BHK / 2BHK defaults.
    """
    if not property.configurations:
        return [
            ConfigOption(key="1BHK-0", label="1BHK"),
            ConfigOption(key="2BHK-0", label="2BHK"),
        ]
    return [
        ConfigOption(key=f"{bhk}BHK-{index}", label=f"{bhk}BHK")
        for index, bhk in enumerate(property.configurations)
    ]


class FormPhase(str, Enum):
    IDLE = "idle"
    INVALID = "invalid"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class SubmissionOutcome(BaseModel):
    status: Literal["", "success", "error"] = ""
    message: str = ""


class ContactFormState(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    message: str = ""
    config: Dict[str, bool] = Field(default_factory=dict)

    class Config:
        validate_assignment = True


class TourFormState(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    date: str = ""
    time: str = ""
    site_visit: bool = False
    video_chat: bool = False

    class Config:
        validate_assignment = True

    @field_validator("date")
    @classmethod
    def check_date(cls, value: str) -> str:
        if value:
            date.fromisoformat(value)
        return value

    @field_validator("time")
    @classmethod
    def check_time(cls, value: str) -> str:
        if value and value not in TIME_SLOT_VALUES:
            raise ValueError(f"Unknown time slot: {value}")
        return value

    def tour_types(self) -> List[str]:
        types = []
        if self.site_visit:
            types.append("siteVisit")
        if self.video_chat:
            types.append("videoChat")
        return types


def validate_tour_form(state: TourFormState) -> List[str]:
    """Every failing rule, in display order"""
    errors = []
    if not state.name.strip():
        errors.append("Please enter your name")
    if not state.email.strip():
        errors.append("Please enter your email address")
    if not state.date:
        errors.append("Please select a date for your tour")
    if not state.time:
        errors.append("Please select a time for your tour")
    if not state.site_visit and not state.video_chat:
        errors.append("Please select at least one tour type")
    return errors


def validate_contact_form(state: ContactFormState) -> List[str]:
    errors = []
    if not state.name.strip():
        errors.append("Please enter your name")
    if not state.phone.strip():
        errors.append("Please enter your phone number")
    return errors


class _FormController:
    """Shared lifecycle of one form: fields, phase, feedback and idempotency token."""

    def __init__(self):
        self.state = self._initial_state()
        self.phase = FormPhase.IDLE
        self.outcome = SubmissionOutcome()
        self.validation_errors: List[str] = []
        self.request_id = uuid.uuid4().hex

    def _initial_state(self):
        raise NotImplementedError

    def validate(self) -> List[str]:
        raise NotImplementedError

    @property
    def submitting(self) -> bool:
        return self.phase == FormPhase.SUBMITTING

    def update(self, field: str, value) -> None:
        if field not in self._editable_fields():
            raise ValueError(f"Unknown field: {field}")
        before = getattr(self.state, field)
        setattr(self.state, field, value)
        self._edited(changed=getattr(self.state, field) != before)

    def _editable_fields(self):
        return set(type(self.state).model_fields)

    def _edited(self, changed: bool = True) -> None:
        # The token names one exact submission; changed content is a new enquiry
        if changed:
            self.request_id = uuid.uuid4().hex
        self.validation_errors = []
        if self.phase != FormPhase.SUBMITTING:
            self.phase = FormPhase.IDLE

    def clear_feedback(self) -> None:
        self.outcome = SubmissionOutcome()
        self.validation_errors = []

    def reset(self) -> None:
        """Back to the empty form; a new token marks the next submission as a new enquiry"""
        self.state = self._initial_state()
        self.validation_errors = []
        self.request_id = uuid.uuid4().hex


class ContactForm(_FormController):

    def __init__(self, property: PropertySummary):
        self.property = property
        self.options = config_options(property)
        super().__init__()

    def _initial_state(self) -> ContactFormState:
        return ContactFormState(config={option.key: False for option in self.options})

    def _editable_fields(self):
        return {"name", "email", "phone", "message"}

    def toggle_config(self, key: str, checked: bool) -> None:
        if key not in self.state.config:
            raise KeyError(key)
        changed = self.state.config[key] != bool(checked)
        self.state.config = {**self.state.config, key: bool(checked)}
        self._edited(changed=changed)

    def selected_labels(self) -> List[str]:
        labels = {option.key: option.label for option in self.options}
        return [labels.get(key, key) for key, selected in self.state.config.items() if selected]

    def validate(self) -> List[str]:
        return validate_contact_form(self.state)


class TourForm(_FormController):

    def _initial_state(self) -> TourFormState:
        return TourFormState()

    def validate(self) -> List[str]:
        return validate_tour_form(self.state)
