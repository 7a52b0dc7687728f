from __future__ import annotations

import pytest

from smartstock_client.models import ChangeType, StockAdjustmentRequest
from smartstock_client.stock_delta import (
    ClientValidationError,
    StockDeltaResult,
    compute_stock_delta,
    preview_adjustment,
    validate_adjustment_request,
)


@pytest.mark.parametrize(
    ("previous", "change_type", "quantity", "expected"),
    [
        (10, "restock", 5, 15),
        (10, "return", 2, 12),
        (10, "sale", 3, 7),
        (10, "adjustment", 3, 7),
        (10, "adjustment", 10, 0),
        (10, "adjustment", 15, 25),
    ],
)
def test_compute_stock_delta(previous: int, change_type: str, quantity: int, expected: int) -> None:
    result = compute_stock_delta(previous, change_type, quantity)
    assert result.previous_quantity == previous
    assert result.new_quantity == expected
    assert result.signed_change == expected - previous


def test_sale_is_not_clamped() -> None:
    assert compute_stock_delta(2, ChangeType.SALE, 5) == StockDeltaResult(
        previous_quantity=2, new_quantity=-3, signed_change=-5
    )


@pytest.mark.parametrize("quantity", [0, -1, 2.5, 3.0, "3", True, None])
def test_non_positive_or_non_integer_quantity_is_rejected(quantity: object) -> None:
    with pytest.raises(ClientValidationError) as excinfo:
        compute_stock_delta(10, "restock", quantity)  # type: ignore[arg-type]
    assert excinfo.value.issues[0].field == "quantityChanged"


def test_unknown_change_type_is_rejected() -> None:
    with pytest.raises(ClientValidationError, match="changeType"):
        compute_stock_delta(10, "transfer", 1)


def test_validate_adjustment_request_from_form_mapping() -> None:
    request = validate_adjustment_request(
        {
            "productId": "p-1",
            "changeType": "restock",
            "quantityChanged": 4,
            "reason": "Delivery",
            "referenceNumber": "PO-77",
        }
    )
    assert request.change_type is ChangeType.RESTOCK
    assert request.to_payload() == {
        "productId": "p-1",
        "changeType": "restock",
        "quantityChanged": 4,
        "reason": "Delivery",
        "referenceNumber": "PO-77",
    }


@pytest.mark.parametrize(
    "payload",
    [
        {"productId": "p-1", "changeType": "sale", "quantityChanged": 0},
        {"productId": "p-1", "changeType": "sale", "quantityChanged": 1.5},
        {"productId": "p-1", "changeType": "sale", "quantityChanged": "2"},
        {"productId": "p-1", "changeType": "gift", "quantityChanged": 2},
        {"changeType": "sale", "quantityChanged": 2},
        {"productId": "", "changeType": "sale", "quantityChanged": 2},
    ],
)
def test_validate_adjustment_request_rejects_bad_input(payload: dict) -> None:
    with pytest.raises(ClientValidationError):
        validate_adjustment_request(payload)


def test_preview_adjustment_uses_current_quantity() -> None:
    request = StockAdjustmentRequest(product_id="p-1", change_type="adjustment", quantity_changed=3)
    assert preview_adjustment(request, 10).new_quantity == 7
    assert preview_adjustment(request, 2).new_quantity == 5
