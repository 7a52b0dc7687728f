from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from . import authorization
from .auth_store import AuthStore
from .clients.auth import AuthClient
from .clients.health import HealthClient, HealthMonitor
from .clients.inventory import InventoryClient
from .clients.products import ProductClient
from .clients.reports import ReportClient
from .config import ClientConfig
from .exceptions import ApiError
from .http_client import HttpClient
from .models import Actor, Product, StockAdjustmentRequest
from .notifications import Notifier
from .session_store import SessionStore
from .stock_delta import (
    ClientValidationError,
    StockDeltaResult,
    ValidationIssue,
    preview_adjustment,
    validate_adjustment_request,
)

logger = logging.getLogger(__name__)


@dataclass
class ApiSession:
    """Explicit client context: one store, one pipeline, many resource clients."""

    config: ClientConfig
    store: SessionStore | None = None
    notifier: Notifier | None = None
    on_session_expired: Callable[[], None] | None = None
    http: HttpClient | None = field(default=None)

    def __post_init__(self) -> None:
        if self.store is None:
            self.store = SessionStore(AuthStore(base_dir=self.config.storage_dir))
        self.store.rehydrate()
        if self.http is None:
            self.http = HttpClient(
                config=self.config,
                store=self.store,
                notifier=self.notifier,
                on_session_expired=self.on_session_expired,
            )

    @property
    def actor(self) -> Actor | None:
        return self.store.actor

    @property
    def is_authenticated(self) -> bool:
        return self.store.is_authenticated

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http)

    def product_client(self) -> ProductClient:
        return ProductClient(http=self.http)

    def inventory_client(self) -> InventoryClient:
        return InventoryClient(http=self.http)

    def report_client(self) -> ReportClient:
        return ReportClient(http=self.http)

    def health_client(self) -> HealthClient:
        return HealthClient(http=self.http)

    def health_monitor(self, on_change: Callable[[bool], None] | None = None) -> HealthMonitor:
        return HealthMonitor(
            self.health_client(),
            interval_seconds=self.config.health_interval_seconds,
            timeout_seconds=self.config.health_timeout_seconds,
            on_change=on_change,
        )

    def login(self, email: str, password: str) -> Actor:
        logger.info("login_attempt")
        result = self.auth_client().login(email, password)
        self.store.login(result.user, result.access_token, result.refresh_token)
        logger.info("login_success", extra={"user_id": str(result.user.id)})
        return result.user

    def logout(self, *, notify_backend: bool = True, background: bool = True) -> threading.Thread | None:
        refresh_token = self.store.refresh_token
        access_token = self.store.access_token
        self.store.logout()
        if not notify_backend or refresh_token is None:
            return None
        if background:
            worker = threading.Thread(
                target=self._notify_logout,
                args=(refresh_token, access_token),
                name="smartstock-logout",
                daemon=True,
            )
            worker.start()
            return worker
        self._notify_logout(refresh_token, access_token)
        return None

    def _notify_logout(self, refresh_token: str, access_token: str | None) -> None:
        try:
            self.auth_client().logout(refresh_token, access_token)
        except ApiError as exc:
            logger.warning("logout_notify_failed", extra={"code": exc.code})

    def refresh_profile(self) -> Actor:
        actor = self.auth_client().me()
        self.store.update_user(**actor.model_dump())
        return self.store.actor

    def can_edit(self, resource: Any) -> bool:
        return authorization.can_edit(self.store.actor, resource)

    def can_delete(self) -> bool:
        return authorization.can_delete(self.store.actor)

    def preview_adjustment(
        self,
        product: Product,
        request: StockAdjustmentRequest | Mapping[str, Any],
    ) -> StockDeltaResult:
        return preview_adjustment(request, product.quantity_in_stock)

    def adjust_stock(
        self,
        product: Product,
        request: StockAdjustmentRequest | Mapping[str, Any],
    ) -> dict[str, Any]:
        authorization.require_edit(self.store.actor, product, action="adjust_stock")
        adjustment = validate_adjustment_request(request)
        if str(adjustment.product_id) != str(product.id):
            raise ClientValidationError(
                [ValidationIssue(field="productId", reason="productId does not match the product being adjusted")]
            )
        return self.inventory_client().update_stock(adjustment)

    def update_product(self, product: Product, data: dict[str, Any]) -> Product:
        authorization.require_edit(self.store.actor, product, action="edit")
        return self.product_client().update_product(product.id, data)

    def delete_product(self, product: Product) -> None:
        authorization.require_delete(self.store.actor)
        self.product_client().delete_product(product.id)
