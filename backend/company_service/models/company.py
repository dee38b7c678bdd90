"""Company API models."""

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field, StrictBool

from backend.company_service.models.common import CamelModel, NonBlankStr
from backend.company_service.models.product import ProductRead


class CompanyFields(CamelModel):
    """Writable company fields and their constraints."""

    model_config = ConfigDict(extra="ignore")

    company_name: NonBlankStr = Field(..., max_length=255)
    street: NonBlankStr = Field(..., max_length=255)
    street_additional: str | None = Field(None, max_length=255)
    postal_code: NonBlankStr = Field(..., max_length=20)
    city: NonBlankStr = Field(..., max_length=255)
    iban: NonBlankStr = Field(..., min_length=15, max_length=34)
    bic: NonBlankStr = Field(..., min_length=8, max_length=11)
    registration_number: NonBlankStr = Field(..., max_length=20)
    vat_payer: StrictBool = False
    vat_id: str | None = Field(None, max_length=20)
    additional_info: str | None = None
    document_location: str | None = Field(None, max_length=255)
    reverse_charge: StrictBool = False


class CompanyRead(CamelModel):
    """Stored company as returned by the REST API."""

    id: UUID
    user_id: str
    company_name: str
    street: str
    street_additional: str | None = None
    postal_code: str
    city: str
    iban: str
    bic: str
    registration_number: str
    vat_payer: bool
    vat_id: str | None = None
    additional_info: str | None = None
    document_location: str | None = None
    reverse_charge: bool
    created_at: datetime
    updated_at: datetime


class CompanyWithProducts(CompanyRead):
    """Company with its products eagerly attached."""

    products: list[ProductRead] = []
