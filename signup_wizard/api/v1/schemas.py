from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ZipRequestSchema(BaseModel):
    zip_code: str | None = None


class ServiceRequestSchema(BaseModel):
    first_name: str | None = None
    phone: str | None = None
    number_of_dogs: str | None = None
    frequency: str | None = None
    last_cleaned: str | None = None


class ContactRequestSchema(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    gate_location: str | None = None
    gate_code: str | None = None


class DogRequestSchema(BaseModel):
    name: str | None = None
    breed: str | None = None
    is_safe: str | None = None
    comments: str | None = None


class NotificationsRequestSchema(BaseModel):
    notification_types: list[str] | None = None
    notification_channel: str | None = None


class CardSchema(BaseModel):
    """What the browser card widget reports: completeness plus its token or error."""

    complete: bool = False
    token: str | None = None
    error: str | None = None


class CardStateRequestSchema(BaseModel):
    complete: bool = False


class PaymentRequestSchema(BaseModel):
    name_on_card: str | None = None
    terms_accepted: bool = False
    card: CardSchema = Field(default_factory=CardSchema)


class OutOfAreaLeadRequestSchema(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None


class OptionSchema(BaseModel):
    value: str
    label: str


class ProgressSchema(BaseModel):
    number: int
    total: int
    label: str
    percent: float


class DogsProgressSchema(BaseModel):
    index: int
    count: int
    current: dict[str, Any]
    records: list[dict[str, Any]]


class WizardViewSchema(BaseModel):
    session_id: str
    step: str
    action: str | None = None
    zip_code: str
    in_service_area: bool | None = None
    zip_message: str | None = None
    service: dict[str, Any] | None = None
    pricing: dict[str, Any] | None = None
    quote_summary: str | None = None
    contact: dict[str, Any] | None = None
    dogs: DogsProgressSchema | None = None
    dog_records: list[dict[str, Any]] = Field(default_factory=list)
    notifications: dict[str, Any] | None = None
    has_payment_token: bool = False
    payment_can_continue: bool = False
    waitlisted: bool = False
    error: str | None = None
    field_errors: dict[str, str] = Field(default_factory=dict)
    busy: list[str] = Field(default_factory=list)
    progress: ProgressSchema | None = None
    options: dict[str, list[OptionSchema]] = Field(default_factory=dict)
