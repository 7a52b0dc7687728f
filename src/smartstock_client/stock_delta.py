from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from .models import ChangeType, StockAdjustmentRequest

_INCREMENTS = {ChangeType.RESTOCK, ChangeType.RETURN}


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    reason: str


class ClientValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.issues:
            return "Validation failed"
        issue = self.issues[0]
        return f"{issue.field}: {issue.reason}"


@dataclass(frozen=True)
class StockDeltaResult:
    previous_quantity: int
    new_quantity: int
    signed_change: int


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _raise_issue(field: str, reason: str) -> None:
    raise ClientValidationError([ValidationIssue(field=field, reason=reason)])


def compute_stock_delta(
    previous_quantity: int,
    change_type: ChangeType | str,
    quantity_changed: int,
) -> StockDeltaResult:
    """Apply a movement to the current quantity.

    ``adjustment`` decrements when the amount fits in the current stock and
    increments otherwise. This mirrors the existing preview and is unresolved
    as policy; keep it until the backend's rule is confirmed.
    """
    if not _is_positive_int(quantity_changed):
        _raise_issue("quantityChanged", "quantityChanged must be a positive integer")
    if isinstance(previous_quantity, bool) or not isinstance(previous_quantity, int):
        _raise_issue("previousQuantity", "previousQuantity must be an integer")
    try:
        movement = ChangeType(change_type)
    except ValueError:
        _raise_issue("changeType", f"unsupported change type {change_type!r}")
        raise

    if movement in _INCREMENTS:
        signed = quantity_changed
    elif movement is ChangeType.SALE:
        signed = -quantity_changed
    elif quantity_changed <= previous_quantity:
        signed = -quantity_changed
    else:
        signed = quantity_changed

    # never clamped; the backend decides whether a negative result is acceptable
    return StockDeltaResult(
        previous_quantity=previous_quantity,
        new_quantity=previous_quantity + signed,
        signed_change=signed,
    )


def validate_adjustment_request(
    request: StockAdjustmentRequest | Mapping[str, Any],
) -> StockAdjustmentRequest:
    if isinstance(request, StockAdjustmentRequest):
        data = request
    else:
        try:
            data = StockAdjustmentRequest.model_validate(request)
        except PydanticValidationError as exc:
            issue = exc.errors()[0] if exc.errors() else {"loc": ("request",), "msg": "Invalid request"}
            field = ".".join(str(part) for part in issue.get("loc", ("request",)))
            _raise_issue(field, issue.get("msg", "Invalid request"))
            raise
    if not _is_positive_int(data.quantity_changed):
        _raise_issue("quantityChanged", "quantityChanged must be a positive integer")
    if data.product_id in (None, ""):
        _raise_issue("productId", "productId is required")
    return data


def preview_adjustment(
    request: StockAdjustmentRequest | Mapping[str, Any],
    previous_quantity: int,
) -> StockDeltaResult:
    data = validate_adjustment_request(request)
    return compute_stock_delta(previous_quantity, data.change_type, data.quantity_changed)
