from .auth_store import AuthStore
from .authorization import can_adjust_stock, can_delete, can_edit, denial_reason
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ActionDeniedError,
    ApiError,
    AuthError,
    BackendUnreachableError,
    NotFoundError,
    PermissionDeniedError,
    SessionExpiredError,
    ValidationError,
)
from .http_client import HttpClient
from .models import (
    Actor,
    ChangeType,
    LoginResponse,
    Product,
    ReportFilters,
    Role,
    SessionData,
    StockAdjustmentRequest,
)
from .notifications import LoggingNotifier, Notifier, to_user_facing_error
from .session import ApiSession
from .session_store import SessionStore
from .stock_delta import (
    ClientValidationError,
    StockDeltaResult,
    ValidationIssue,
    compute_stock_delta,
    preview_adjustment,
    validate_adjustment_request,
)

__version__ = "0.1.0"

__all__ = [
    "ActionDeniedError",
    "Actor",
    "ApiError",
    "ApiSession",
    "AuthError",
    "AuthStore",
    "BackendUnreachableError",
    "ChangeType",
    "ClientConfig",
    "ClientValidationError",
    "ConfigError",
    "HttpClient",
    "LoggingNotifier",
    "LoginResponse",
    "NotFoundError",
    "Notifier",
    "PermissionDeniedError",
    "Product",
    "ReportFilters",
    "Role",
    "SessionData",
    "SessionExpiredError",
    "SessionStore",
    "StockAdjustmentRequest",
    "StockDeltaResult",
    "ValidationError",
    "ValidationIssue",
    "can_adjust_stock",
    "can_delete",
    "can_edit",
    "compute_stock_delta",
    "denial_reason",
    "load_config",
    "preview_adjustment",
    "to_user_facing_error",
    "validate_adjustment_request",
]
