from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models import StockAdjustmentRequest
from ..stock_delta import validate_adjustment_request
from .base import BaseClient


@dataclass
class InventoryClient(BaseClient):
    module: str = "inventory"

    def update_stock(self, request: StockAdjustmentRequest | Mapping[str, Any]) -> dict[str, Any]:
        adjustment = validate_adjustment_request(request)
        data = self._request(
            "POST",
            "/inventory/update",
            json_body=adjustment.to_payload(),
            operation="update_stock",
        )
        return data if isinstance(data, dict) else {}
