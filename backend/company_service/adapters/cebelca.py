"""Company directory search via cebelca.biz (passthrough)."""

import logging
from typing import Any

import httpx

from backend.company_service.errors import UpstreamError
from backend.company_service.utils.metrics import cebelca_requests_total

logger = logging.getLogger(__name__)


async def search_companies(
    query: str,
    client: httpx.AsyncClient,
    base_url: str = "https://www.cebelca.biz/companies",
) -> Any:
    """Search the cebelca.biz company directory.

    The upstream JSON is returned unchanged. The caller's client carries the
    timeout; nothing is retried.

    Args:
        query: Free-text search string
        client: httpx client
        base_url: Directory search endpoint

    Returns:
        Decoded upstream JSON body

    Raises:
        UpstreamError: On timeout, network error, non-2xx status or non-JSON body
    """
    try:
        response = await client.get(base_url, params={"q": query})
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        cebelca_requests_total.labels(outcome="http_error").inc()
        logger.error(f"cebelca.biz returned {e.response.status_code} for q={query!r}")
        raise UpstreamError(e.response.status_code, str(e)) from e
    except httpx.HTTPError as e:
        cebelca_requests_total.labels(outcome="transport_error").inc()
        logger.error(f"cebelca.biz request failed: {type(e).__name__}: {e}")
        raise UpstreamError(None, f"{type(e).__name__}: {e}") from e
    except ValueError as e:
        cebelca_requests_total.labels(outcome="invalid_body").inc()
        logger.error(f"cebelca.biz returned a non-JSON body: {e}")
        raise UpstreamError(None, "Upstream response is not valid JSON") from e

    cebelca_requests_total.labels(outcome="success").inc()
    return data
