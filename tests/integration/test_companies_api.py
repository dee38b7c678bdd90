"""Integration tests for /companies endpoints."""

from collections.abc import Callable
from typing import Any

import pytest
from httpx import AsyncClient

USER_A = "user-a"
USER_B = "user-b"

Headers = Callable[[str], dict[str, str]]


async def _create_company(
    client: AsyncClient, headers: dict[str, str], payload: dict[str, Any]
) -> dict[str, Any]:
    response = await client.post("/companies", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    data: dict[str, Any] = response.json()
    return data


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_company_returns_201_with_generated_fields(
    client: AsyncClient, make_headers: Headers, company_payload: dict[str, Any]
) -> None:
    data = await _create_company(client, make_headers(USER_A), company_payload)

    assert data["id"]
    assert data["userId"] == USER_A
    assert data["createdAt"]
    assert data["updatedAt"]
    for key, value in company_payload.items():
        assert data[key] == value


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_company_ignores_client_supplied_owner(
    client: AsyncClient, make_headers: Headers, company_payload: dict[str, Any]
) -> None:
    """Test the owner is always the caller, never the body's userId."""
    company_payload["userId"] = USER_B

    data = await _create_company(client, make_headers(USER_A), company_payload)

    assert data["userId"] == USER_A
    listed = await client.get("/companies", headers=make_headers(USER_B))
    assert listed.json() == []


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_then_get_round_trip(
    client: AsyncClient, make_headers: Headers, company_payload: dict[str, Any]
) -> None:
    created = await _create_company(client, make_headers(USER_A), company_payload)

    response = await client.get(f"/companies/{created['id']}", headers=make_headers(USER_A))

    assert response.status_code == 200
    data = response.json()
    for key, value in company_payload.items():
        assert data[key] == value
    assert data["id"] == created["id"]
    assert data["products"] == []


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_company_validation_error_lists_all_fields(
    client: AsyncClient, make_headers: Headers, company_payload: dict[str, Any]
) -> None:
    company_payload["iban"] = "too-short"
    company_payload["bic"] = "X"
    del company_payload["companyName"]

    response = await client.post("/companies", json=company_payload, headers=make_headers(USER_A))

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert {error["field"] for error in body["errors"]} == {"iban", "bic", "companyName"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_non_object_body_is_400(client: AsyncClient, make_headers: Headers) -> None:
    response = await client.post("/companies", json=["not", "an", "object"], headers=make_headers(USER_A))

    assert response.status_code == 400
    assert "message" in response.json()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_list_companies_only_returns_callers_companies_with_products(
    client: AsyncClient,
    make_headers: Headers,
    company_payload: dict[str, Any],
    product_payload: dict[str, Any],
) -> None:
    mine = await _create_company(client, make_headers(USER_A), company_payload)
    await _create_company(client, make_headers(USER_B), {**company_payload, "companyName": "Other"})
    product = await client.post(
        f"/companies/{mine['id']}/products", json=product_payload, headers=make_headers(USER_A)
    )
    assert product.status_code == 201

    response = await client.get("/companies", headers=make_headers(USER_A))

    assert response.status_code == 200
    data = response.json()
    assert [company["id"] for company in data] == [mine["id"]]
    assert [p["id"] for p in data[0]["products"]] == [product.json()["id"]]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_partial_update_keeps_other_fields(
    client: AsyncClient, make_headers: Headers, company_payload: dict[str, Any]
) -> None:
    """Test updating only {city} leaves every other field untouched."""
    created = await _create_company(client, make_headers(USER_A), company_payload)

    response = await client.put(
        f"/companies/{created['id']}", json={"city": "X"}, headers=make_headers(USER_A)
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["city"] == "X"
    for key, value in company_payload.items():
        if key != "city":
            assert updated[key] == value
    assert updated["id"] == created["id"]
    assert updated["createdAt"] == created["createdAt"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_update_cannot_change_owner(
    client: AsyncClient, make_headers: Headers, company_payload: dict[str, Any]
) -> None:
    created = await _create_company(client, make_headers(USER_A), company_payload)

    response = await client.put(
        f"/companies/{created['id']}",
        json={"userId": USER_B, "city": "Celje"},
        headers=make_headers(USER_A),
    )

    assert response.status_code == 200
    assert response.json()["userId"] == USER_A
    fetched = await client.get(f"/companies/{created['id']}", headers=make_headers(USER_B))
    assert fetched.status_code == 404


@pytest.mark.integration
@pytest.mark.asyncio
async def test_update_revalidates_merged_record(
    client: AsyncClient, make_headers: Headers, company_payload: dict[str, Any]
) -> None:
    created = await _create_company(client, make_headers(USER_A), company_payload)

    response = await client.put(
        f"/companies/{created['id']}", json={"bic": "SHORT"}, headers=make_headers(USER_A)
    )

    assert response.status_code == 400
    assert [error["field"] for error in response.json()["errors"]] == ["bic"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_other_users_company_is_not_found_never_forbidden(
    client: AsyncClient, make_headers: Headers, company_payload: dict[str, Any]
) -> None:
    """Test Get/Update/Delete by a non-owner return 404 and leak nothing."""
    created = await _create_company(client, make_headers(USER_A), company_payload)
    url = f"/companies/{created['id']}"
    intruder = make_headers(USER_B)

    get_response = await client.get(url, headers=intruder)
    put_response = await client.put(url, json={"city": "Hacked"}, headers=intruder)
    delete_response = await client.delete(url, headers=intruder)

    for response in (get_response, put_response, delete_response):
        assert response.status_code == 404
        assert response.json() == {"message": "Company not found"}

    still_there = await client.get(url, headers=make_headers(USER_A))
    assert still_there.status_code == 200
    assert still_there.json()["city"] == company_payload["city"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_unknown_or_malformed_company_id_is_404(
    client: AsyncClient, make_headers: Headers
) -> None:
    for company_id in ("00000000-0000-4000-8000-000000000000", "not-a-uuid"):
        response = await client.get(f"/companies/{company_id}", headers=make_headers(USER_A))
        assert response.status_code == 404


@pytest.mark.integration
@pytest.mark.asyncio
async def test_delete_company_returns_204_and_removes_it(
    client: AsyncClient, make_headers: Headers, company_payload: dict[str, Any]
) -> None:
    created = await _create_company(client, make_headers(USER_A), company_payload)

    response = await client.delete(f"/companies/{created['id']}", headers=make_headers(USER_A))

    assert response.status_code == 204
    assert response.content == b""
    fetched = await client.get(f"/companies/{created['id']}", headers=make_headers(USER_A))
    assert fetched.status_code == 404


@pytest.mark.integration
@pytest.mark.asyncio
async def test_jwt_cookie_authenticates(
    client: AsyncClient, encode_jwt: Callable[..., str], company_payload: dict[str, Any]
) -> None:
    token = encode_jwt({"userId": USER_A})

    response = await client.post(
        "/companies", json=company_payload, headers={"Cookie": f"jwt={token}"}
    )

    assert response.status_code == 201
    assert response.json()["userId"] == USER_A


@pytest.mark.integration
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Bearer not-a-jwt"},
        {"Authorization": "Bearer a.b"},
        {"Authorization": "Bearer a.%%%.c"},
        {"Authorization": "Token abc.def.ghi"},
    ],
)
async def test_protected_routes_require_identity(
    client: AsyncClient, headers: dict[str, str], company_payload: dict[str, Any]
) -> None:
    """Test every protected route answers 401 without a usable token."""
    some_id = "00000000-0000-4000-8000-000000000000"
    requests = [
        ("GET", "/companies", None),
        ("GET", f"/companies/{some_id}", None),
        ("POST", "/companies", company_payload),
        ("PUT", f"/companies/{some_id}", {"city": "X"}),
        ("DELETE", f"/companies/{some_id}", None),
        ("GET", f"/companies/{some_id}/products", None),
        ("GET", f"/companies/{some_id}/products/{some_id}", None),
        ("POST", f"/companies/{some_id}/products", {"name": "x"}),
        ("PUT", f"/companies/{some_id}/products/{some_id}", {"name": "x"}),
        ("DELETE", f"/companies/{some_id}/products/{some_id}", None),
    ]

    for method, url, body in requests:
        response = await client.request(method, url, json=body, headers=headers)
        assert response.status_code == 401, f"{method} {url}"
        assert response.json() == {"message": "Unauthorized"}
