"""
Product repository client.

The repository is a list-returning read plus a full-replace write behind
two HTTP endpoints:

    GET  /api/get-products      -> {"data": [record, ...]}
    POST /api/upload-products   <- {"products": [row, ...]}   (replaces all)

Failures come back as {"error": "..."} with a non-2xx status and are
raised as RepositoryError.
"""

from __future__ import annotations

from typing import Iterable

import httpx
from pydantic import ValidationError

from size_carton.core.errors import RepositoryError
from size_carton.core.models import Product
from size_carton.data.schemas import ProductListResponse, UploadResponse
from size_carton.utils.logger import get_logger

logger = get_logger(__name__)

LIST_PATH = "/api/get-products"
UPLOAD_PATH = "/api/upload-products"


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return resp.reason_phrase


class ProductRepository:
    """Async client for the product repository.

    Args:
        base_url: Repository root, e.g. "http://localhost:3000".
        timeout: Request timeout in seconds.
        client: Pre-built httpx.AsyncClient (tests pass one with a
            MockTransport). The repository does not close a client it
            did not create.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def __aenter__(self) -> "ProductRepository":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        logger.info("%s %s%s", method, self.base_url, path)
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Repository request failed: %s", exc)
            raise RepositoryError(f"Repository unreachable: {exc}") from exc

        if resp.is_error:
            message = _error_message(resp)
            logger.error("Repository returned %d: %s", resp.status_code, message)
            raise RepositoryError(message, status_code=resp.status_code)
        return resp

    async def list_products(self) -> list[Product]:
        """Fetch every stored product, ordered by id."""
        resp = await self._request("GET", LIST_PATH)
        try:
            body = ProductListResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise RepositoryError(f"Malformed product list: {exc}", resp.status_code) from exc

        products = [record.to_product() for record in body.data]
        products.sort(key=lambda p: p.id)
        return products

    async def replace_products(self, products: Iterable[Product]) -> str:
        """Replace the stored product list.

        Returns:
            The server's confirmation message.
        """
        rows = []
        for p in products:
            d = p.to_dict()
            del d["id"]
            rows.append(d)

        resp = await self._request("POST", UPLOAD_PATH, json={"products": rows})
        try:
            body = UploadResponse.model_validate(resp.json())
        except (ValueError, ValidationError):
            body = UploadResponse()
        logger.info("Uploaded %d products", len(rows))
        return body.message
