from __future__ import annotations

from smartstock_client.error_mapper import map_error
from smartstock_client.exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ServerError,
    ValidationError,
)


def test_error_mapper_classes() -> None:
    assert isinstance(map_error(401, {"error": "Token expired"}), AuthError)
    assert isinstance(map_error(403, {"error": "Forbidden"}), PermissionDeniedError)
    assert isinstance(map_error(404, {"error": "Product not found"}), NotFoundError)
    assert isinstance(map_error(422, {"message": "bad"}), ValidationError)
    assert isinstance(map_error(409, {"error": "duplicate"}), ConflictError)
    assert isinstance(map_error(503, None), ServerError)
    assert type(map_error(418, {})) is ApiError


def test_error_mapper_reads_error_then_message() -> None:
    err = map_error(400, {"error": "SKU already exists", "message": "ignored", "details": {"field": "sku"}})
    assert err.message == "SKU already exists"
    assert err.code == "HTTP_400"
    assert err.details == {"field": "sku"}
    assert str(err) == "[400] HTTP_400: SKU already exists"


def test_error_mapper_defaults() -> None:
    err = map_error(500, {"code": "DB_DOWN"})
    assert err.code == "DB_DOWN"
    assert err.message == "Request failed"
    assert err.raw_payload == {"code": "DB_DOWN"}
