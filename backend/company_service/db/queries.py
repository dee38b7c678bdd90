"""Ownership-safe query helpers."""

import uuid
from collections.abc import Iterable

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from backend.company_service.db.context import RequestContext
from backend.company_service.db.models import Company, Product


def parse_id(value: str | uuid.UUID) -> uuid.UUID | None:
    """Parse a primary key, returning None for malformed ids.

    A malformed id can never match a row, so callers treat it as absent.
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(value)
    except (ValueError, AttributeError, TypeError):
        return None


def select_companies(ctx: RequestContext) -> Select[tuple[Company]]:
    """Select companies with owner scoping enforced.

    Args:
        ctx: Request context with the caller identity

    Returns:
        Select filtered by the owning identity
    """
    return select(Company).where(Company.user_id == ctx.user_id)


async def find_owned_company(
    session: AsyncSession,
    company_id: str | uuid.UUID,
    ctx: RequestContext,
    *,
    with_products: bool = False,
) -> Company | None:
    """Ownership-scoped lookup: id and owner are matched in one query."""
    company_uuid = parse_id(company_id)
    if company_uuid is None:
        return None

    query = select_companies(ctx).where(Company.id == company_uuid)
    if with_products:
        query = query.options(selectinload(Company.products))

    result = await session.execute(query)
    return result.scalar_one_or_none()


async def find_company(session: AsyncSession, company_id: str) -> Company | None:
    """Unscoped lookup by id (service-to-service callers only)."""
    company_uuid = parse_id(company_id)
    if company_uuid is None:
        return None

    result = await session.execute(select(Company).where(Company.id == company_uuid))
    return result.scalar_one_or_none()


async def find_product(session: AsyncSession, product_id: str) -> Product | None:
    """Unscoped lookup by product id."""
    product_uuid = parse_id(product_id)
    if product_uuid is None:
        return None

    result = await session.execute(select(Product).where(Product.id == product_uuid))
    return result.scalar_one_or_none()


async def find_products(session: AsyncSession, product_ids: Iterable[str]) -> list[Product]:
    """Unscoped lookup of every product whose id is in ``product_ids``.

    Ids without a match (or malformed ids) are omitted.
    """
    uuids = {parsed for parsed in map(parse_id, product_ids) if parsed is not None}
    if not uuids:
        return []

    result = await session.execute(select(Product).where(Product.id.in_(uuids)))
    return list(result.scalars().all())
