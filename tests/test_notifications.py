from __future__ import annotations

from smartstock_client.error_mapper import map_error
from smartstock_client.notifications import is_silent, to_user_facing_error


def test_user_facing_error_includes_code_status_and_details() -> None:
    err = map_error(400, {"error": "SKU already exists", "details": {"field": "sku"}})

    facing = to_user_facing_error(err)

    assert facing.message == "SKU already exists"
    assert facing.technical_details == "HTTP_400 (HTTP 400): {'field': 'sku'}"


def test_user_facing_error_falls_back_to_generic_message() -> None:
    err = map_error(500, {"error": "   "})

    assert to_user_facing_error(err).message == "Request failed"


def test_is_silent_matches_backend_error_text() -> None:
    err = map_error(401, {"error": "Invalid credentials"})

    assert is_silent(err, ["Invalid credentials"])
    assert not is_silent(err, ["User not found"])
