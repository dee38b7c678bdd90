"""Read-only gRPC servicers for companies and products."""

import logging
from datetime import datetime
from typing import Any

import grpc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.company_service.db.models import Company, Product
from backend.company_service.db.queries import find_company, find_products
from backend.company_service.grpc_app.stubs import (
    company_pb2,
    company_pb2_grpc,
    product_pb2,
    product_pb2_grpc,
)
from backend.company_service.utils.metrics import grpc_requests_total

logger = logging.getLogger(__name__)


def _text(value: object) -> str:
    return "" if value is None else str(value)


def _timestamp(value: datetime | None) -> str:
    return "" if value is None else value.isoformat()


def company_to_message(company: Company) -> Any:
    """Map a Company row to its wire projection."""
    return company_pb2.Company(
        id=str(company.id),
        userId=company.user_id,
        companyName=company.company_name,
        street=company.street,
        streetAdditional=_text(company.street_additional),
        postalCode=company.postal_code,
        city=company.city,
        iban=company.iban,
        bic=company.bic,
        registrationNumber=company.registration_number,
        vatPayer=bool(company.vat_payer),
        vatId=_text(company.vat_id),
        additionalInfo=_text(company.additional_info),
        documentLocation=_text(company.document_location),
        reverseCharge=bool(company.reverse_charge),
        createdAt=_timestamp(company.created_at),
        updatedAt=_timestamp(company.updated_at),
    )


def product_to_message(product: Product) -> Any:
    """Map a Product row to its wire projection."""
    return product_pb2.Product(
        id=str(product.id),
        companyId=_text(product.company_id),
        name=_text(product.name),
        cost=_text(product.cost),
        measuringUnit=_text(product.measuring_unit),
        ddvPercentage=_text(product.ddv_percentage),
        createdAt=_timestamp(product.created_at),
        updatedAt=_timestamp(product.updated_at),
    )


async def _abort(context: grpc.aio.ServicerContext, method: str, code: grpc.StatusCode, message: str) -> None:
    grpc_requests_total.labels(method=method, code=code.name).inc()
    await context.abort(code, message)


class CompanyServicer(company_pb2_grpc.CompanyServiceServicer):
    """company.CompanyService - single-company lookup by id."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def GetCompany(self, request: Any, context: grpc.aio.ServicerContext) -> Any:
        if not request.id:
            await _abort(
                context, "GetCompany", grpc.StatusCode.INVALID_ARGUMENT, "Company ID is required"
            )

        try:
            async with self._session_factory() as session:
                company = await find_company(session, request.id)
                reply = None if company is None else company_to_message(company)
        except Exception:
            logger.error(f"[GetCompany] id={request.id} failed", exc_info=True)
            await _abort(context, "GetCompany", grpc.StatusCode.INTERNAL, "Internal server error")

        if reply is None:
            await _abort(context, "GetCompany", grpc.StatusCode.NOT_FOUND, "Company not found")

        grpc_requests_total.labels(method="GetCompany", code="OK").inc()
        return reply


class ProductServicer(product_pb2_grpc.ProductServiceServicer):
    """product.ProductService - bulk product lookup by ids."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def GetProducts(self, request: Any, context: grpc.aio.ServicerContext) -> Any:
        ids = list(request.ids)
        if not ids:
            await _abort(
                context,
                "GetProducts",
                grpc.StatusCode.INVALID_ARGUMENT,
                "At least one Product ID is required",
            )

        try:
            async with self._session_factory() as session:
                products = await find_products(session, ids)
                reply = product_pb2.GetProductsResponse(
                    products=[product_to_message(product) for product in products]
                )
        except Exception:
            logger.error(f"[GetProducts] ids={ids} failed", exc_info=True)
            await _abort(context, "GetProducts", grpc.StatusCode.INTERNAL, "Internal server error")

        grpc_requests_total.labels(method="GetProducts", code="OK").inc()
        return reply
