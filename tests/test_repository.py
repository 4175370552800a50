"""Tests for the product repository client (httpx MockTransport)."""

import json

import httpx
import pytest

from size_carton.core.errors import RepositoryError
from size_carton.core.models import Category
from size_carton.data.repository import LIST_PATH, UPLOAD_PATH, ProductRepository

RECORDS = [
    {"id": 7, "productname": "EVA-Wall", "type": "EVAPORATOR",
     "width": 900, "height": 300, "length": 200, "weight": 12, "cbm": 0.054},
    {"id": 3, "productname": "CU-9000", "type": "CONDENSER",
     "width": 800, "height": 600, "length": 300, "weight": 35.5, "cbm": 0.144},
]


def make_repo(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")
    return ProductRepository("http://test", client=client), client


@pytest.mark.asyncio
async def test_list_products_sorted_by_id():
    seen = []

    def handler(request):
        seen.append((request.method, request.url.path))
        return httpx.Response(200, json={"data": RECORDS})

    repo, client = make_repo(handler)
    async with client:
        products = await repo.list_products()

    assert seen == [("GET", LIST_PATH)]
    assert [p.id for p in products] == [3, 7]
    assert products[0].category is Category.CONDENSER
    assert products[1].name == "EVA-Wall"


@pytest.mark.asyncio
async def test_list_products_empty():
    repo, client = make_repo(lambda request: httpx.Response(200, json={"data": []}))
    async with client:
        assert await repo.list_products() == []


@pytest.mark.asyncio
async def test_replace_products_posts_rows_without_ids(make_product):
    captured = {}

    def handler(request):
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"message": "Uploaded 2 products"})

    products = [make_product(name="A"), make_product(name="B", category=Category.EVAPORATOR)]
    repo, client = make_repo(handler)
    async with client:
        message = await repo.replace_products(products)

    assert message == "Uploaded 2 products"
    assert captured["path"] == UPLOAD_PATH
    rows = captured["body"]["products"]
    assert [r["productname"] for r in rows] == ["A", "B"]
    assert rows[1]["type"] == "EVAPORATOR"
    assert all("id" not in r for r in rows)


@pytest.mark.asyncio
async def test_server_error_uses_error_field():
    repo, client = make_repo(
        lambda request: httpx.Response(500, json={"error": "Failed to fetch products"})
    )
    async with client:
        with pytest.raises(RepositoryError) as exc_info:
            await repo.list_products()

    assert str(exc_info.value) == "Failed to fetch products"
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_malformed_list_raises():
    bad = [{**RECORDS[0], "width": -1}]
    repo, client = make_repo(lambda request: httpx.Response(200, json={"data": bad}))
    async with client:
        with pytest.raises(RepositoryError, match="Malformed"):
            await repo.list_products()


@pytest.mark.asyncio
async def test_transport_failure_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    repo, client = make_repo(handler)
    async with client:
        with pytest.raises(RepositoryError, match="unreachable"):
            await repo.list_products()


@pytest.mark.asyncio
async def test_injected_client_not_closed():
    repo, client = make_repo(lambda request: httpx.Response(200, json={"data": []}))
    async with repo:
        await repo.list_products()
    assert not client.is_closed
    await client.aclose()
