"""Models package - re-exports for convenience."""

from backend.company_service.models.company import (
    CompanyFields,
    CompanyRead,
    CompanyWithProducts,
)
from backend.company_service.models.product import ProductFields, ProductRead

__all__ = [
    # Company
    "CompanyFields",
    "CompanyRead",
    "CompanyWithProducts",
    # Product
    "ProductFields",
    "ProductRead",
]
