"""Product catalog client."""

from typing import Any, Dict

from .base_client import BaseServiceClient


class ProductCatalogClient(BaseServiceClient):
    """HTTP client for the product catalog."""

    service_name = "product-catalog"

    async def get_product(self, product_id: str) -> Dict[str, Any]:
        return await self._get(f"/api/v1/products/{product_id}")
