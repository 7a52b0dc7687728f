from __future__ import annotations

from dataclasses import dataclass

from ..models import Actor, LoginResponse
from .base import BaseClient, unwrap


@dataclass
class AuthClient(BaseClient):
    module: str = "auth"

    def login(self, email: str, password: str) -> LoginResponse:
        payload = {"email": email, "password": password}
        data = self._request(
            "POST",
            "/auth/login",
            json_body=payload,
            authenticated=False,
            operation="login",
        )
        return LoginResponse.model_validate(data)

    def logout(self, refresh_token: str, access_token: str | None = None) -> None:
        # sent after the store is cleared, so the old access token is passed explicitly
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else None
        self._request(
            "POST",
            "/auth/logout",
            json_body={"refreshToken": refresh_token},
            headers=headers,
            authenticated=False,
            notify_errors=False,
            operation="logout",
        )

    def me(self) -> Actor:
        data = self._request("GET", "/auth/me", operation="me")
        return Actor.model_validate(unwrap(data, "user"))
