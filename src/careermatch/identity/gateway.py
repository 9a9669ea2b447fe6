from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

import requests

from careermatch.config import Settings, get_settings
from careermatch.errors import AuthError
from careermatch.identity.events import SessionEventChannel, SessionListener
from careermatch.types import AuthSession, AuthUser, SessionEvent

logger = logging.getLogger(__name__)


class IdentityGateway:
    """Client for a GoTrue-compatible identity provider.

    Holds at most one current session. Every change to it is published on the
    session channel so views can follow sign-in, refresh and sign-out without
    polling.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        http: requests.Session | None = None,
        channel: SessionEventChannel | None = None,
    ):
        self.settings = settings or get_settings()
        self._owns_http = http is None
        self.http = http or requests.Session()
        self.channel = channel or SessionEventChannel()
        self._session: AuthSession | None = None

    def sign_up(self, email: str, password: str, display_name: str) -> AuthUser | None:
        payload = {
            "email": email,
            "password": password,
            "data": {"full_name": display_name},
        }
        try:
            data = self._request(
                "POST",
                "/signup",
                json=payload,
                params={"redirect_to": self.settings.auth_redirect_url},
            )
        except AuthError as exc:
            if _is_delivery_failure(exc.message):
                logger.warning("Account created for %s but verification email failed: %s", email, exc)
                return None
            raise

        user_data = data.get("user") if isinstance(data.get("user"), dict) else data
        if not user_data.get("id"):
            return None
        return _parse_user(user_data)

    def sign_in(self, email: str, password: str) -> AuthSession:
        data = self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        session = _parse_session(data)
        self._set_session(session, kind="SIGNED_IN")
        return session

    def refresh_session(self) -> AuthSession:
        if self._session is None or not self._session.refresh_token:
            raise AuthError("No session to refresh")

        data = self._request(
            "POST",
            "/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": self._session.refresh_token},
        )
        session = _parse_session(data)
        self._set_session(session, kind="TOKEN_REFRESHED")
        return session

    def restore_session(self, access_token: str, refresh_token: str = "") -> AuthSession:
        user = self.get_user(access_token)
        session = AuthSession(access_token=access_token, refresh_token=refresh_token, user=user)
        self._set_session(session, kind="SIGNED_IN")
        return session

    def get_current_session(self) -> AuthSession | None:
        return self._session

    def get_user(self, access_token: str) -> AuthUser:
        if not access_token:
            raise AuthError("Missing access token", status_code=401)
        data = self._request("GET", "/user", token=access_token)
        return _parse_user(data)

    def sign_out(self) -> None:
        session = self._session
        if session is None:
            return

        try:
            self._request("POST", "/logout", token=session.access_token)
        except AuthError as exc:
            logger.warning("Provider sign-out failed for user=%s: %s", session.user.id, exc)

        self._session = None
        self.channel.publish(SessionEvent(kind="SIGNED_OUT"))

    def on_session_change(self, callback: SessionListener) -> Callable[[], None]:
        return self.channel.subscribe(callback)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> IdentityGateway:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _set_session(self, session: AuthSession, *, kind: str) -> None:
        self._session = session
        self.channel.publish(SessionEvent(kind=kind, session=session))

    def _request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        headers = {"apikey": self.settings.auth_anon_key, "Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        url = f"{self.settings.auth_base_url}{path}"
        try:
            response = self.http.request(
                method,
                url,
                headers=headers,
                params=params,
                json=json,
                timeout=self.settings.auth_timeout_sec,
            )
        except requests.RequestException as exc:
            logger.error("Identity provider unreachable url=%s error=%s", url, exc)
            raise AuthError(f"Identity provider unavailable: {exc}") from exc

        try:
            data = response.json() if response.content else {}
        except ValueError:
            data = {}

        if response.status_code >= 400:
            raise AuthError(_error_message(data, response), status_code=response.status_code)
        return data if isinstance(data, dict) else {}


def _error_message(data: Any, response: requests.Response) -> str:
    if isinstance(data, dict):
        for key in ("error_description", "msg", "message", "error"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
    return response.reason or f"Identity provider error {response.status_code}"


def _is_delivery_failure(message: str) -> bool:
    lowered = message.lower()
    return "sending" in lowered and ("confirmation" in lowered or "mail" in lowered)


def _parse_user(data: dict[str, Any]) -> AuthUser:
    if not data.get("id"):
        raise AuthError("Identity provider returned no user", status_code=401)
    metadata = data.get("user_metadata") or {}
    return AuthUser(
        id=str(data["id"]),
        email=str(data.get("email") or ""),
        display_name=str(metadata.get("full_name") or ""),
    )


def _parse_session(data: dict[str, Any]) -> AuthSession:
    access_token = data.get("access_token")
    if not access_token:
        raise AuthError("Identity provider returned no session")

    expires_at = data.get("expires_at")
    if expires_at is None and data.get("expires_in"):
        expires_at = int(time.time()) + int(data["expires_in"])

    return AuthSession(
        access_token=str(access_token),
        refresh_token=str(data.get("refresh_token") or ""),
        expires_at=expires_at,
        user=_parse_user(data.get("user") or {}),
    )
