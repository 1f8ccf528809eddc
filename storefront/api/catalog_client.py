# storefront/api/catalog_client.py
import asyncio
import json
import logging
from typing import Any, Optional
import aiohttp
from ..errors import TransportError
from ..models.product import ProductRequest
from ..models.status import ApiResponse, ResponseKind

logger = logging.getLogger(__name__)

class CatalogClient:
    """JSON client for the remote product catalog"""

    def __init__(self, session: aiohttp.ClientSession, base_url: str, log_bodies: bool = False):
        self.session = session
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.log_bodies = log_bodies

    async def get_products(self) -> ApiResponse:
        return await self._request("GET", "products")

    async def get_product_by_id(self, product_id: int) -> ApiResponse:
        return await self._request("GET", f"products/{product_id}")

    async def create_product(self, product: ProductRequest) -> ApiResponse:
        return await self._request("POST", "products", body=product.to_payload())

    async def delete_product(self, product_id: int) -> ApiResponse:
        return await self._request("DELETE", f"products/{product_id}")

    async def get_categories(self) -> ApiResponse:
        return await self._request("GET", "categories")

    async def _request(self, method: str, path: str, body: Optional[Any] = None) -> ApiResponse:
        """Send one request and classify the response"""
        url = f"{self.base_url}{path}"
        if self.log_bodies:
            logger.debug("--> %s %s %s", method, url, json.dumps(body) if body is not None else "")

        try:
            async with self.session.request(method, url, json=body) as response:
                status = response.status
                text = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("%s %s failed: %r", method, url, e)
            raise TransportError(str(e) or e.__class__.__name__) from e

        if self.log_bodies:
            logger.debug("<-- %s %s %s", status, url, text)

        if not 200 <= status < 300:
            return ApiResponse(status=status, kind=ResponseKind.FAILURE, error_body=text)

        if not text.strip():
            return ApiResponse(status=status, kind=ResponseKind.EMPTY)

        try:
            payload = json.loads(text)
        except ValueError as e:
            raise TransportError(f"Respuesta no válida del servidor: {e}") from e

        return ApiResponse(status=status, kind=ResponseKind.PAYLOAD, payload=payload)
