from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..models import ReportFilters
from .base import BaseClient


@dataclass
class ReportClient(BaseClient):
    module: str = "reports"

    def inventory_summary(self, filters: ReportFilters | None = None) -> dict[str, Any]:
        return self._report("/reports/inventory-summary", filters)

    def low_stock(self, filters: ReportFilters | None = None) -> dict[str, Any]:
        return self._report("/reports/low-stock", filters)

    def inventory_movements(self, filters: ReportFilters | None = None) -> dict[str, Any]:
        return self._report("/reports/inventory-movements", filters)

    def _report(self, path: str, filters: ReportFilters | None) -> dict[str, Any]:
        params = filters.to_params() if filters else None
        data = self._request("GET", path, params=params or None, operation=path.rsplit("/", 1)[-1])
        if not isinstance(data, dict):
            raise ValueError(f"Expected {path} response to be a JSON object")
        return data
