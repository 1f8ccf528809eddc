# storefront/services/product_repository.py
import logging
from typing import List, Optional
from pydantic import ValidationError
from ..api.catalog_client import CatalogClient
from ..errors import RemoteStatusError, TransportError
from ..models.category import Category
from ..models.product import Product, ProductRequest
from ..models.status import ResponseKind

logger = logging.getLogger(__name__)

class ProductRepository:
    """Turns classified catalog responses into products or errors"""

    def __init__(self, client: CatalogClient):
        self.client = client

    async def get_products(self) -> List[Product]:
        response = await self.client.get_products()
        if not response.is_successful:
            raise RemoteStatusError(
                f"Error al obtener productos: {response.status}",
                response.status,
                response.error_body
            )
        return [Product.model_validate(item) for item in response.payload or []]

    async def get_product_by_id(self, product_id: int) -> Optional[Product]:
        """Missing or failed lookups come back as None"""
        response = await self.client.get_product_by_id(product_id)
        if response.kind != ResponseKind.PAYLOAD:
            return None
        return Product.model_validate(response.payload)

    async def create_product(self, product: ProductRequest) -> Optional[Product]:
        try:
            response = await self.client.create_product(product)
        except TransportError as e:
            raise TransportError(f"Error de red: {e}") from e

        if not response.is_successful:
            error_body = response.error_body or "Sin mensaje de error"
            raise RemoteStatusError(
                f"Error {response.status}: {error_body}",
                response.status,
                response.error_body
            )

        if response.kind == ResponseKind.EMPTY:
            return None
        # The product exists once the server accepted it, whatever the reply looks like
        try:
            return Product.model_validate(response.payload)
        except ValidationError as e:
            logger.warning("Created product reply not understood: %s", e)
            return None

    async def delete_product(self, product_id: int) -> bool:
        try:
            response = await self.client.delete_product(product_id)
        except TransportError as e:
            raise TransportError(f"Error al eliminar producto: {e}") from e
        return response.is_successful

    async def get_categories(self) -> List[Category]:
        response = await self.client.get_categories()
        if not response.is_successful:
            raise RemoteStatusError(
                f"Error al obtener categorías: {response.status}",
                response.status,
                response.error_body
            )
        return [Category.model_validate(item) for item in response.payload or []]
