"""Shared FastAPI dependencies."""

from collections.abc import AsyncGenerator
from typing import Annotated

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from backend.company_service.config import Settings
from backend.company_service.db.engine import get_session
from backend.company_service.db.stores import CompanyStore, ProductStore


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    settings: Settings = request.app.state.settings
    return settings


def get_company_store(
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CompanyStore:
    return CompanyStore(session, delete_policy=settings.company_delete_policy)


def get_product_store(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProductStore:
    return ProductStore(session)


def build_cebelca_client(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """HTTP client for the external directory.

    Redirects are followed so a moved directory URL still yields its JSON.
    """
    return httpx.AsyncClient(
        timeout=settings.cebelca_timeout_seconds,
        follow_redirects=True,
        transport=transport,
    )


async def get_cebelca_client(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with build_cebelca_client(settings) as client:
        yield client
