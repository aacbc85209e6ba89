"""Matrix send intent: posts room messages via the client-server API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import quote
from uuid import uuid4

from roombridge.home.base import HomeSendIntent
from roombridge.home.config import MatrixConfig
from roombridge.models.delivery import SendResult
from roombridge.models.message import HomeMessageContent

if TYPE_CHECKING:
    import httpx


class MatrixSendIntent(HomeSendIntent):
    """Send ``m.room.message`` events, optionally as an appservice ghost.

    When ``user_id`` is given, requests carry ``?user_id=`` so that an
    application service token can act on behalf of one of its ghosts.
    """

    def __init__(self, config: MatrixConfig, user_id: str | None = None) -> None:
        try:
            import httpx as _httpx
        except ImportError as exc:
            raise ImportError(
                "httpx is required for MatrixSendIntent. "
                "Install it with: pip install httpx"
            ) from exc
        self._config = config
        self._user_id = user_id
        self._httpx = _httpx
        self._client: httpx.AsyncClient = _httpx.AsyncClient(timeout=config.timeout)

    @property
    def user_id(self) -> str | None:
        return self._user_id

    def as_user(self, user_id: str) -> MatrixSendIntent:
        """Return an intent that shares this connection but sends as *user_id*."""
        intent = MatrixSendIntent.__new__(MatrixSendIntent)
        intent._config = self._config
        intent._user_id = user_id
        intent._httpx = self._httpx
        intent._client = self._client
        return intent

    async def send_message(self, room_id: str, content: HomeMessageContent) -> SendResult:
        txn_id = uuid4().hex
        url = (
            f"{self._config.base_url}/rooms/{quote(room_id, safe='')}"
            f"/send/m.room.message/{txn_id}"
        )
        params: dict[str, str] = {}
        if self._user_id:
            params["user_id"] = self._user_id
        headers = {"Authorization": f"Bearer {self._config.access_token.get_secret_value()}"}
        try:
            resp = await self._client.put(
                url, json=content.to_payload(), params=params, headers=headers
            )
            resp.raise_for_status()
            data = resp.json()
        except self._httpx.TimeoutException:
            return SendResult(success=False, error="timeout")
        except self._httpx.HTTPStatusError as exc:
            return self._parse_error(exc)
        except self._httpx.HTTPError as exc:
            return SendResult(success=False, error=str(exc))

        return SendResult(success=True, event_id=data.get("event_id"))

    @staticmethod
    def _parse_error(exc: Any) -> SendResult:
        """Extract the Matrix ``errcode`` when the server sent one."""
        try:
            body = exc.response.json()
            return SendResult(
                success=False,
                error=body.get("errcode", f"http_{exc.response.status_code}"),
                metadata={"description": body.get("error", "")},
            )
        except Exception:
            return SendResult(success=False, error=f"http_{exc.response.status_code}")

    async def close(self) -> None:
        await self._client.aclose()
