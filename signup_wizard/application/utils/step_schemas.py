from __future__ import annotations

from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from signup_wizard.application.exceptions import StepValidationError

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _check_allowed(value: Any, info: ValidationInfo) -> Any:
    """Enum membership against the option values passed in the validation context."""
    allowed = (info.context or {}).get(info.field_name)
    if allowed is None:
        return value
    values = value if isinstance(value, list) else [value]
    for item in values:
        if item not in allowed:
            raise ValueError(f"{item!r} is not an allowed option")
    return value


class StepSchema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    messages: ClassVar[dict[str, str]] = {}


class ServiceStepSchema(StepSchema):
    first_name: str = Field(min_length=2)
    phone: str = Field(min_length=10)
    number_of_dogs: str = Field(min_length=1)
    frequency: str = Field(min_length=1)
    last_cleaned: str = Field(min_length=1)

    messages: ClassVar[dict[str, str]] = {
        "first_name": "First name is required",
        "phone": "Please enter a valid phone number",
        "number_of_dogs": "Please select number of dogs",
        "frequency": "Please select a frequency",
        "last_cleaned": "Please select when yard was last cleaned",
    }

    @field_validator("number_of_dogs", "frequency", "last_cleaned")
    @classmethod
    def _allowed(cls, value: str, info: ValidationInfo) -> str:
        return _check_allowed(value, info)


class ContactStepSchema(StepSchema):
    first_name: str = Field(min_length=2)
    last_name: str = Field(min_length=2)
    email: str = Field(pattern=EMAIL_PATTERN)
    phone: str = Field(min_length=10)
    address: str = Field(min_length=5)
    city: str = Field(min_length=2)
    gate_location: str = Field(min_length=1)
    gate_code: str | None = None  # free text, no format rule

    messages: ClassVar[dict[str, str]] = {
        "first_name": "First name is required",
        "last_name": "Last name is required",
        "email": "Please enter a valid email",
        "phone": "Please enter a valid phone number",
        "address": "Street address is required",
        "city": "City is required",
        "gate_location": "Please select gate location",
        "gate_code": "Gate code must be text",
    }

    @field_validator("gate_location")
    @classmethod
    def _allowed(cls, value: str, info: ValidationInfo) -> str:
        return _check_allowed(value, info)


class DogStepSchema(StepSchema):
    name: str = Field(min_length=1)
    breed: str | None = None
    is_safe: Literal["yes", "no"]
    comments: str | None = None

    messages: ClassVar[dict[str, str]] = {
        "name": "Dog name is required",
        "breed": "Breed must be text",
        "is_safe": "Please indicate if dog is safe",
        "comments": "Comments must be text",
    }


class NotificationsStepSchema(StepSchema):
    notification_types: list[str] = Field(min_length=1)
    notification_channel: str = Field(min_length=1)

    messages: ClassVar[dict[str, str]] = {
        "notification_types": "Please select at least one notification type",
        "notification_channel": "Please select a notification channel",
    }

    @field_validator("notification_types", "notification_channel")
    @classmethod
    def _allowed(cls, value: Any, info: ValidationInfo) -> Any:
        return _check_allowed(value, info)


class OutOfAreaLeadSchema(StepSchema):
    first_name: str = Field(min_length=2)
    last_name: str = Field(min_length=2)
    email: str = Field(pattern=EMAIL_PATTERN)
    phone: str = Field(min_length=10)

    messages: ClassVar[dict[str, str]] = {
        "first_name": "First name is required",
        "last_name": "Last name is required",
        "email": "Please enter a valid email",
        "phone": "Please enter a valid phone number",
    }


def validate_step(
    schema: type[StepSchema],
    fields: dict[str, Any],
    allowed: dict[str, set[str]] | None = None,
) -> StepSchema:
    """
    Validate one step's field values.
    Raises StepValidationError with one message per failing field.
    """
    try:
        return schema.model_validate(fields, context=allowed or {})
    except ValidationError as e:
        field_errors: dict[str, str] = {}
        for err in e.errors():
            name = str(err["loc"][0]) if err["loc"] else "__root__"
            field_errors.setdefault(name, schema.messages.get(name, err["msg"]))
        raise StepValidationError(field_errors) from e
