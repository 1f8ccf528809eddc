# storefront/models/product.py
from typing import Any, List
from pydantic import Field
from .base import CatalogModel
from .category import Category

class Product(CatalogModel):
    """Product model as delivered by the catalog"""
    id: int
    name: str
    description: str
    price: int
    stock: int
    image_ref: str = Field(alias="img")
    category: Category = Field(alias="categoria")

    # Reviews are carried through untouched
    reviews: List[Any] = Field(default_factory=list, alias="resenias")

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

class ProductRequest(CatalogModel):
    """Body of the create-product call"""
    name: str
    description: str
    price: int
    stock: int
    img: str
    categoria_id: int = Field(alias="categoriaId")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
