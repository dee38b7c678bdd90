"""Company and product stores with ownership enforcement.

Companies are resolved with an ownership-scoped lookup (id and owner in one
query), so "missing" and "not yours" are both ``NotFound``. Products are
resolved with a two-step lookup (id first, then the parent company's owner),
so a product that exists under another owner is ``Forbidden``.
"""

import logging
import uuid
from collections.abc import Mapping
from typing import Any, Literal

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from backend.company_service.db.context import RequestContext
from backend.company_service.db.models import Company, Product
from backend.company_service.db.queries import (
    find_owned_company,
    find_product,
    select_companies,
)
from backend.company_service.errors import Conflict, Forbidden, NotFound
from backend.company_service.models import CompanyFields, ProductFields
from backend.company_service.models.common import current_values, validate_fields
from backend.company_service.utils.metrics import ownership_denials_total

logger = logging.getLogger(__name__)

DeletePolicy = Literal["reject", "cascade"]


class CompanyStore:
    """CRUD over companies scoped to the caller identity."""

    def __init__(self, session: AsyncSession, delete_policy: DeletePolicy = "reject") -> None:
        self._session = session
        self._delete_policy = delete_policy

    async def list_companies(self, ctx: RequestContext) -> list[Company]:
        """List the caller's companies with products attached."""
        result = await self._session.execute(
            select_companies(ctx).options(selectinload(Company.products))
        )
        return list(result.scalars().all())

    async def get_company(
        self, company_id: str, ctx: RequestContext, *, with_products: bool = True
    ) -> Company:
        """Get an owned company.

        Raises:
            NotFound: If the company is absent or owned by someone else
        """
        company = await find_owned_company(
            self._session, company_id, ctx, with_products=with_products
        )
        if company is None:
            ownership_denials_total.labels(entity="company", outcome="not_found").inc()
            raise NotFound("Company not found")
        return company

    async def create_company(self, payload: Mapping[str, Any], ctx: RequestContext) -> Company:
        """Validate and persist a company owned by the caller.

        Any owner supplied in ``payload`` is ignored.
        """
        fields = validate_fields(CompanyFields, payload)
        company = Company(id=uuid.uuid4(), user_id=ctx.user_id, **fields.model_dump())

        self._session.add(company)
        await self._session.commit()
        await self._session.refresh(company)

        logger.info(f"Created company {company.id} for user {ctx.user_id}")
        return company

    async def update_company(
        self, company_id: str, payload: Mapping[str, Any], ctx: RequestContext
    ) -> Company:
        """Shallow-merge ``payload`` over an owned company and re-validate."""
        company = await self.get_company(company_id, ctx, with_products=False)

        fields = validate_fields(
            CompanyFields, payload, current=current_values(CompanyFields, company)
        )
        for name, value in fields.model_dump().items():
            setattr(company, name, value)

        await self._session.commit()
        await self._session.refresh(company)

        logger.info(f"Updated company {company.id}")
        return company

    async def delete_company(self, company_id: str, ctx: RequestContext) -> None:
        """Hard-delete an owned company.

        Child products are handled by the delete policy: ``reject`` refuses
        while products exist, ``cascade`` removes them first.

        Raises:
            NotFound: If the company is absent or not owned
            Conflict: If products exist and the policy is ``reject``
        """
        company = await self.get_company(company_id, ctx, with_products=False)

        product_count = await self._session.scalar(
            select(func.count()).select_from(Product).where(Product.company_id == company.id)
        )
        if product_count:
            if self._delete_policy == "reject":
                raise Conflict(
                    "Company has products",
                    details={"productCount": product_count},
                )
            await self._session.execute(delete(Product).where(Product.company_id == company.id))
            logger.info(f"Cascade-deleted {product_count} products of company {company.id}")

        await self._session.delete(company)
        await self._session.commit()

        logger.info(f"Deleted company {company.id}")


class ProductStore:
    """CRUD over products, transitively scoped through the parent company."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._companies = CompanyStore(session)

    async def _get_accessible_product(self, product_id: str, ctx: RequestContext) -> Product:
        """Two-step lookup: existence first, then parent ownership.

        Raises:
            NotFound: If no product has this id
            Forbidden: If the product's company belongs to someone else
        """
        product = await find_product(self._session, product_id)
        if product is None:
            ownership_denials_total.labels(entity="product", outcome="not_found").inc()
            raise NotFound("Product not found")

        company = await find_owned_company(self._session, product.company_id, ctx)
        if company is None:
            ownership_denials_total.labels(entity="product", outcome="forbidden").inc()
            logger.warning(f"User {ctx.user_id} denied access to product {product.id}")
            raise Forbidden()

        return product

    async def list_products(self, company_id: str, ctx: RequestContext) -> list[Product]:
        """List the products of an owned company."""
        company = await self._companies.get_company(company_id, ctx, with_products=False)

        result = await self._session.execute(
            select(Product).where(Product.company_id == company.id)
        )
        return list(result.scalars().all())

    async def get_product(self, product_id: str, ctx: RequestContext) -> Product:
        return await self._get_accessible_product(product_id, ctx)

    async def create_product(
        self, company_id: str, payload: Mapping[str, Any], ctx: RequestContext
    ) -> Product:
        """Validate and persist a product under an owned company."""
        company = await self._companies.get_company(company_id, ctx, with_products=False)

        fields = validate_fields(ProductFields, payload)
        product = Product(id=uuid.uuid4(), company_id=company.id, **fields.model_dump())

        self._session.add(product)
        await self._session.commit()
        await self._session.refresh(product)

        logger.info(f"Created product {product.id} for company {company.id}")
        return product

    async def update_product(
        self, product_id: str, payload: Mapping[str, Any], ctx: RequestContext
    ) -> Product:
        """Shallow-merge ``payload`` over an accessible product and re-validate."""
        product = await self._get_accessible_product(product_id, ctx)

        fields = validate_fields(
            ProductFields, payload, current=current_values(ProductFields, product)
        )
        for name, value in fields.model_dump().items():
            setattr(product, name, value)

        await self._session.commit()
        await self._session.refresh(product)

        logger.info(f"Updated product {product.id}")
        return product

    async def delete_product(self, product_id: str, ctx: RequestContext) -> None:
        """Hard-delete an accessible product."""
        product = await self._get_accessible_product(product_id, ctx)

        await self._session.delete(product)
        await self._session.commit()

        logger.info(f"Deleted product {product.id}")
