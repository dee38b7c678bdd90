"""Product endpoints nested under /companies/{company_id}/products.

The single-product routes look products up by ``product_id`` alone; the
``company_id`` path segment is not part of the lookup key.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Response, status

from backend.company_service.api.auth import get_current_context
from backend.company_service.api.deps import get_product_store
from backend.company_service.db.context import RequestContext
from backend.company_service.db.stores import ProductStore
from backend.company_service.models import ProductRead

router = APIRouter(prefix="/companies/{company_id}/products", tags=["products"])


@router.get("", response_model=list[ProductRead])
async def list_products(
    company_id: str,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    store: Annotated[ProductStore, Depends(get_product_store)],
) -> list[ProductRead]:
    products = await store.list_products(company_id, ctx)
    return [ProductRead.model_validate(product) for product in products]


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(
    company_id: str,
    product_id: str,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    store: Annotated[ProductStore, Depends(get_product_store)],
) -> ProductRead:
    product = await store.get_product(product_id, ctx)
    return ProductRead.model_validate(product)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    company_id: str,
    payload: Annotated[dict[str, Any], Body()],
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    store: Annotated[ProductStore, Depends(get_product_store)],
) -> ProductRead:
    product = await store.create_product(company_id, payload, ctx)
    return ProductRead.model_validate(product)


@router.put("/{product_id}", response_model=ProductRead)
async def update_product(
    company_id: str,
    product_id: str,
    payload: Annotated[dict[str, Any], Body()],
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    store: Annotated[ProductStore, Depends(get_product_store)],
) -> ProductRead:
    product = await store.update_product(product_id, payload, ctx)
    return ProductRead.model_validate(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    company_id: str,
    product_id: str,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    store: Annotated[ProductStore, Depends(get_product_store)],
) -> Response:
    await store.delete_product(product_id, ctx)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
