"""
Shared fixtures for the storefront test suite.
"""

from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest

from storefront.models import Category, Product
from storefront.services.product_repository import ProductRepository
from storefront.viewmodels.product_view_model import ProductViewModel


def category_data(category_id: int = 1, nombre: str = "Juegos de mesa") -> Dict[str, Any]:
    return {"id": category_id, "nombre": nombre, "descripcion": f"Categoría {nombre}"}


def product_data(product_id: int = 1, name: str = "Tablero Ouija", **overrides) -> Dict[str, Any]:
    data = {
        "id": product_id,
        "name": name,
        "description": "Tablero clásico de madera",
        "price": 19990,
        "stock": 5,
        "img": "https://example.com/ouija.jpg",
        "resenias": [],
        "categoria": category_data(),
    }
    data.update(overrides)
    return data


def make_category(category_id: int = 1, nombre: str = "Juegos de mesa") -> Category:
    return Category.model_validate(category_data(category_id, nombre))


def make_product(product_id: int = 1, name: str = "Tablero Ouija") -> Product:
    return Product.model_validate(product_data(product_id, name))


@pytest.fixture
def categories() -> List[Category]:
    return [make_category(3, "Cartas"), make_category(1, "Juegos de mesa")]


@pytest.fixture
def repository(categories):
    """ProductRepository double with successful defaults"""
    repo = MagicMock(spec=ProductRepository)
    repo.get_products = AsyncMock(return_value=[make_product(1), make_product(2, "Velas")])
    repo.get_categories = AsyncMock(return_value=categories)
    repo.get_product_by_id = AsyncMock(return_value=make_product(1))
    repo.create_product = AsyncMock(return_value=make_product(9, "Nuevo"))
    repo.delete_product = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def image_service():
    service = MagicMock()
    service.resolve = AsyncMock(return_value="https://cdn.example.com/picked.jpg")
    return service


@pytest.fixture
def view_model(repository, image_service) -> ProductViewModel:
    return ProductViewModel(repository, image_service)


def fill_valid_draft(view_model: ProductViewModel, categoria_id: str = "1"):
    view_model.on_name_change("Tablero Ouija")
    view_model.on_description_change("Tablero clásico de madera")
    view_model.on_price_change("19990")
    view_model.on_stock_change("5")
    view_model.on_img_change("https://example.com/ouija.jpg")
    view_model.on_categoria_id_change(categoria_id)
