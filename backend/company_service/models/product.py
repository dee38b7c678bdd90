"""Product API models."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Annotated, Any
from uuid import UUID

from pydantic import BeforeValidator, ConfigDict, Field

from backend.company_service.models.common import CamelModel, NonBlankStr


def _round_to_scale(places: int) -> BeforeValidator:
    """Round numeric input half-up to ``places`` decimals, as a NUMERIC column does.

    Non-numeric input is passed through untouched so the field's own
    validation reports it.
    """
    exponent = Decimal(1).scaleb(-places)

    def _round(value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
            return value
        try:
            number = Decimal(str(value).strip())
            if not number.is_finite():
                return value
            return number.quantize(exponent, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            return value

    return BeforeValidator(_round)


Cost = Annotated[Decimal, _round_to_scale(2), Field(ge=0, max_digits=10, decimal_places=2)]
Percentage = Annotated[Decimal, _round_to_scale(2), Field(ge=0, max_digits=5, decimal_places=2)]


class ProductFields(CamelModel):
    """Writable product fields and their constraints."""

    model_config = ConfigDict(extra="ignore")

    name: NonBlankStr = Field(..., max_length=255)
    cost: Cost
    measuring_unit: NonBlankStr = Field(..., max_length=255)
    ddv_percentage: Percentage


class ProductRead(CamelModel):
    """Stored product as returned by the REST API."""

    id: UUID
    company_id: UUID
    name: str
    cost: Decimal
    measuring_unit: str
    ddv_percentage: Decimal
    created_at: datetime
    updated_at: datetime
