from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ZipCheckResponseDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    in_service_area: bool = Field(alias="inServiceArea")
    message: str | None = None
    error: str | None = None


class PricingDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    base_price: float = Field(default=0.0, alias="basePrice")
    recurring_price: float = Field(default=0.0, alias="recurringPrice")
    monthly_price: float | None = Field(default=None, alias="monthlyPrice")
    initial_cleanup_fee: float = Field(default=0.0, alias="initialCleanupFee")
    tax_rate: float = Field(default=0.0, alias="taxRate")
    billing_interval: str | None = Field(default=None, alias="billingInterval")
    category: str | None = None
    custom_price_description: str | None = Field(default=None, alias="customPriceDescription")
    price_not_configured: bool = Field(default=False, alias="priceNotConfigured")


class PricingResponseDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool = False
    pricing: PricingDTO | None = None


class FormFieldDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    slug: str
    value: Any = None  # comma-separated tokens; anything else falls back to defaults


class FormOptionsDocumentDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    form_fields: list[FormFieldDTO] = Field(default_factory=list)


class FormOptionsResponseDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    success: bool = False
    form_options: FormOptionsDocumentDTO | None = Field(default=None, alias="formOptions")


class SubmitResponseDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool = False
    error: str | None = None
