"""Shared pytest fixtures for all test suites."""

import base64
import json
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from backend.company_service.config import Settings
from backend.company_service.db.engine import Database
from backend.company_service.db.models import Base
from backend.company_service.main import create_app


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _encode_token(payload: Any, header: dict[str, str] | None = None) -> str:
    """Build an unsigned JWT-shaped token (signature is never checked)."""
    header = header or {"alg": "HS256", "typ": "JWT"}
    return ".".join(
        [
            _b64url(json.dumps(header).encode()),
            _b64url(json.dumps(payload).encode()),
            "not-a-real-signature",
        ]
    )


@pytest.fixture
def encode_jwt() -> Callable[..., str]:
    """Expose the unsigned token builder to tests."""
    return _encode_token


@pytest.fixture
def make_headers() -> Callable[[str], dict[str, str]]:
    """Factory for Authorization headers carrying a given userId."""

    def _make(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {_encode_token({'userId': user_id})}"}

    return _make


@pytest.fixture
def company_payload() -> dict[str, Any]:
    """A valid company creation body (camelCase, as the REST API expects)."""
    return {
        "companyName": "Acme d.o.o.",
        "street": "Slovenska cesta 1",
        "streetAdditional": "Floor 3",
        "postalCode": "1000",
        "city": "Ljubljana",
        "iban": "SI56 1910 0000 0123 438",
        "bic": "BAKOSI2X",
        "registrationNumber": "1234567000",
        "vatPayer": True,
        "vatId": "SI12345678",
        "additionalInfo": "Primary invoicing entity",
        "documentLocation": "s3://invoices/acme",
        "reverseCharge": False,
    }


@pytest.fixture
def product_payload() -> dict[str, Any]:
    """A valid product creation body."""
    return {
        "name": "Consulting hour",
        "cost": 85.5,
        "measuringUnit": "h",
        "ddvPercentage": 22,
    }


@pytest_asyncio.fixture
async def test_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create test async engine on a per-test SQLite file."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'companies.db'}",
        poolclass=NullPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def database(test_engine: AsyncEngine) -> Database:
    return Database(test_engine)


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url="sqlite+aiosqlite:///:memory:", grpc_enabled=False)


@pytest.fixture
def app(settings: Settings, database: Database) -> FastAPI:
    """App wired to the test database (lifespan is not run by ASGITransport)."""
    application = create_app(settings)
    application.state.database = database
    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
