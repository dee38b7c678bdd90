"""Company endpoints - /companies CRUD and the cebelca.biz search passthrough."""

import logging
from typing import Annotated, Any

import httpx
from fastapi import APIRouter, Body, Depends, Query, Response, status

from backend.company_service.adapters.cebelca import search_companies
from backend.company_service.api.auth import get_current_context
from backend.company_service.api.deps import (
    get_app_settings,
    get_cebelca_client,
    get_company_store,
)
from backend.company_service.config import Settings
from backend.company_service.db.context import RequestContext
from backend.company_service.db.stores import CompanyStore
from backend.company_service.errors import BadRequest
from backend.company_service.models import CompanyRead, CompanyWithProducts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("", response_model=list[CompanyWithProducts])
async def list_companies(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    store: Annotated[CompanyStore, Depends(get_company_store)],
) -> list[CompanyWithProducts]:
    """List the caller's companies, each with its products."""
    companies = await store.list_companies(ctx)
    return [CompanyWithProducts.model_validate(company) for company in companies]


@router.get("/search/cebelca")
async def search_cebelca(
    settings: Annotated[Settings, Depends(get_app_settings)],
    client: Annotated[httpx.AsyncClient, Depends(get_cebelca_client)],
    q: Annotated[str | None, Query()] = None,
) -> Any:
    """Search the cebelca.biz company directory.

    No authentication. The upstream JSON is passed through unchanged.
    """
    if not q:
        raise BadRequest('Query parameter "q" is required')

    logger.info(f"[GET /companies/search/cebelca] q={q!r}")
    return await search_companies(q, client, base_url=settings.cebelca_url)


@router.get("/{company_id}", response_model=CompanyWithProducts)
async def get_company(
    company_id: str,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    store: Annotated[CompanyStore, Depends(get_company_store)],
) -> CompanyWithProducts:
    """Get one of the caller's companies with its products."""
    company = await store.get_company(company_id, ctx)
    return CompanyWithProducts.model_validate(company)


@router.post("", response_model=CompanyRead, status_code=status.HTTP_201_CREATED)
async def create_company(
    payload: Annotated[dict[str, Any], Body()],
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    store: Annotated[CompanyStore, Depends(get_company_store)],
) -> CompanyRead:
    """Create a company owned by the caller."""
    company = await store.create_company(payload, ctx)
    return CompanyRead.model_validate(company)


@router.put("/{company_id}", response_model=CompanyRead)
async def update_company(
    company_id: str,
    payload: Annotated[dict[str, Any], Body()],
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    store: Annotated[CompanyStore, Depends(get_company_store)],
) -> CompanyRead:
    """Partially update one of the caller's companies."""
    company = await store.update_company(company_id, payload, ctx)
    return CompanyRead.model_validate(company)


@router.delete("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_company(
    company_id: str,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    store: Annotated[CompanyStore, Depends(get_company_store)],
) -> Response:
    """Delete one of the caller's companies."""
    await store.delete_company(company_id, ctx)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
