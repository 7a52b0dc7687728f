from .auth import AuthClient
from .health import HealthClient, HealthMonitor
from .inventory import InventoryClient
from .products import ProductClient
from .reports import ReportClient

__all__ = [
    "AuthClient",
    "HealthClient",
    "HealthMonitor",
    "InventoryClient",
    "ProductClient",
    "ReportClient",
]
