# storefront/models/category.py
from typing import Optional
from pydantic import Field
from .base import CatalogModel

class Category(CatalogModel):
    """Product category as delivered by the catalog"""
    id: int
    name: str = Field(alias="nombre")
    description: Optional[str] = Field(default="", alias="descripcion")
