from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..models import Product, ProductListResponse
from .base import BaseClient, unwrap


@dataclass
class ProductClient(BaseClient):
    module: str = "products"

    def list_products(self, **params: Any) -> ProductListResponse:
        query = {key: value for key, value in params.items() if value not in (None, "")}
        data = self._request("GET", "/products", params=query or None, operation="list")
        if isinstance(data, list):
            return ProductListResponse(products=[Product.model_validate(row) for row in data])
        if not isinstance(data, dict):
            raise ValueError("Expected products response to be a JSON object")
        return ProductListResponse.model_validate(data)

    def get_product(self, product_id: str | int) -> Product:
        data = self._request("GET", f"/products/{product_id}", operation="get")
        return Product.model_validate(unwrap(data, "product"))

    def create_product(self, data: dict[str, Any]) -> Product:
        payload = self._request("POST", "/products", json_body=data, operation="create")
        return Product.model_validate(unwrap(payload, "product"))

    def update_product(self, product_id: str | int, data: dict[str, Any]) -> Product:
        payload = self._request("PUT", f"/products/{product_id}", json_body=data, operation="update")
        return Product.model_validate(unwrap(payload, "product"))

    def delete_product(self, product_id: str | int) -> None:
        self._request("DELETE", f"/products/{product_id}", operation="delete")

    def product_history(self, product_id: str | int, **params: Any) -> dict[str, Any]:
        query = {key: value for key, value in params.items() if value not in (None, "")}
        data = self._request(
            "GET", f"/products/{product_id}/history", params=query or None, operation="history"
        )
        return data if isinstance(data, dict) else {"history": data or []}
