"""
Tests for ProductRepository's mapping of catalog responses.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from storefront.api.catalog_client import CatalogClient
from storefront.errors import RemoteStatusError, TransportError
from storefront.models import ApiResponse, ProductRequest, ResponseKind
from storefront.services.product_repository import ProductRepository

from tests.conftest import category_data, product_data


def payload(data, status=200):
    return ApiResponse(status=status, kind=ResponseKind.PAYLOAD, payload=data)


def failure(status, body=""):
    return ApiResponse(status=status, kind=ResponseKind.FAILURE, error_body=body)


def empty(status=204):
    return ApiResponse(status=status, kind=ResponseKind.EMPTY)


@pytest.fixture
def client():
    return MagicMock(spec=CatalogClient)


@pytest.fixture
def repository(client):
    return ProductRepository(client)


REQUEST = ProductRequest(
    name="Péndulo", description="De cuarzo", price=10, stock=0, img="u", categoria_id=1
)


@pytest.mark.asyncio
async def test_products_are_parsed(repository, client):
    client.get_products = AsyncMock(return_value=payload([product_data(1), product_data(2, "Velas")]))
    products = await repository.get_products()

    assert [p.name for p in products] == ["Tablero Ouija", "Velas"]
    assert products[0].image_ref == "https://example.com/ouija.jpg"
    assert products[0].category.name == "Juegos de mesa"


@pytest.mark.asyncio
async def test_empty_product_list(repository, client):
    client.get_products = AsyncMock(return_value=empty(200))
    assert await repository.get_products() == []


@pytest.mark.asyncio
async def test_products_failure_raises_with_status(repository, client):
    client.get_products = AsyncMock(return_value=failure(503, "down"))
    with pytest.raises(RemoteStatusError) as excinfo:
        await repository.get_products()
    assert excinfo.value.status == 503
    assert "503" in str(excinfo.value)


@pytest.mark.asyncio
async def test_missing_product_is_none(repository, client):
    client.get_product_by_id = AsyncMock(return_value=failure(404, "Not Found"))
    assert await repository.get_product_by_id(99) is None


@pytest.mark.asyncio
async def test_product_by_id(repository, client):
    client.get_product_by_id = AsyncMock(return_value=payload(product_data(5, "Runas")))
    product = await repository.get_product_by_id(5)
    assert product.id == 5


@pytest.mark.asyncio
async def test_create_failure_message_has_status_and_body(repository, client):
    client.create_product = AsyncMock(return_value=failure(400, "duplicate name"))
    with pytest.raises(RemoteStatusError) as excinfo:
        await repository.create_product(REQUEST)
    assert str(excinfo.value) == "Error 400: duplicate name"
    assert excinfo.value.body == "duplicate name"


@pytest.mark.asyncio
async def test_create_failure_without_body(repository, client):
    client.create_product = AsyncMock(return_value=failure(500, ""))
    with pytest.raises(RemoteStatusError, match="Error 500: Sin mensaje de error"):
        await repository.create_product(REQUEST)


@pytest.mark.asyncio
async def test_create_transport_fault_is_prefixed(repository, client):
    client.create_product = AsyncMock(side_effect=TransportError("Connection refused"))
    with pytest.raises(TransportError, match="^Error de red: Connection refused$"):
        await repository.create_product(REQUEST)


@pytest.mark.asyncio
async def test_create_returns_product(repository, client):
    client.create_product = AsyncMock(return_value=payload(product_data(8, "Péndulo"), status=201))
    created = await repository.create_product(REQUEST)
    assert created.id == 8


@pytest.mark.asyncio
@pytest.mark.parametrize("response, expected", [
    (empty(204), True),
    (empty(200), True),
    (failure(404), False),
    (failure(500, "boom"), False),
])
async def test_delete_confirmation(repository, client, response, expected):
    client.delete_product = AsyncMock(return_value=response)
    assert await repository.delete_product(1) is expected


@pytest.mark.asyncio
async def test_delete_transport_fault(repository, client):
    client.delete_product = AsyncMock(side_effect=TransportError("timeout"))
    with pytest.raises(TransportError, match="Error al eliminar producto"):
        await repository.delete_product(1)


@pytest.mark.asyncio
async def test_categories(repository, client):
    client.get_categories = AsyncMock(return_value=payload([category_data(2, "Cartas")]))
    categories = await repository.get_categories()
    assert categories[0].id == 2
    assert categories[0].name == "Cartas"


@pytest.mark.asyncio
async def test_categories_failure(repository, client):
    client.get_categories = AsyncMock(return_value=failure(500))
    with pytest.raises(RemoteStatusError, match="Error al obtener categorías: 500"):
        await repository.get_categories()


@pytest.mark.asyncio
async def test_create_with_partial_reply_still_succeeds(repository, client):
    client.create_product = AsyncMock(
        return_value=payload({"id": 7, "name": "x", "categoriaId": 1}, status=201)
    )
    assert await repository.create_product(REQUEST) is None
