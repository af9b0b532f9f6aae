"""Async API client that refreshes an expired access token once per request."""
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

ACCESS_EXPIRED_MESSAGE = "Access token expired"


class SessionExpired(Exception):
    """The refresh token was rejected; the user has to log in again."""


class HandbookClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        access_token: str | None = None,
        refresh_token: str | None = None,
    ):
        self.http = http
        self.access_token = access_token
        self.refresh_token = refresh_token

    def _store_tokens(self, data: dict[str, Any]) -> None:
        self.access_token = data.get("accessToken")
        self.refresh_token = data.get("refreshToken")

    async def login(self, username: str, password: str) -> dict[str, Any]:
        response = await self.http.post("/auth/login", json={"username": username, "password": password})
        data = response.json()
        if response.status_code == 200:
            self._store_tokens(data)
        return data

    async def refresh(self) -> None:
        if not self.refresh_token:
            raise SessionExpired("No refresh token")
        response = await self.http.post(
            "/auth/refreshToken",
            headers={"Authorization": f"Bearer {self.refresh_token}"},
        )
        if response.status_code != 200:
            self.access_token = None
            self.refresh_token = None
            raise SessionExpired(response.json().get("message", "Refresh failed"))
        self._store_tokens(response.json())

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        headers = dict(kwargs.pop("headers", None) or {})
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return await self.http.request(method, url, headers=headers, **kwargs)

    @staticmethod
    def _access_expired(response: httpx.Response) -> bool:
        if response.status_code != 401:
            return False
        try:
            return response.json().get("message") == ACCESS_EXPIRED_MESSAGE
        except ValueError:
            return False

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send with the access token; on expiry refresh once and replay."""
        response = await self._send(method, url, **kwargs)
        if self._access_expired(response) and self.refresh_token:
            logger.debug("Access token expired, refreshing before replaying %s %s", method, url)
            await self.refresh()
            body = kwargs.get("json")
            # comment endpoints carry the access token in the JSON body
            if isinstance(body, dict) and "token" in body:
                kwargs["json"] = {**body, "token": self.access_token}
            response = await self._send(method, url, **kwargs)
        return response

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)
