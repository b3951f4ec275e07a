from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from otp_service.domain.ports.message_gateway import MessageGatewayPort


class Fast2SmsGateway(MessageGatewayPort):
    """Delivers messages through the Fast2SMS bulk API (quick route)."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
        send_path: str = "/dev/bulkV2",
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required")
        self._base_url = base_url.rstrip("/")
        self._send_path = send_path if send_path.startswith("/") else f"/{send_path}"
        self._api_key = api_key
        self._owns_client: bool = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)

    async def send(self, *, to: str, message: str) -> None:
        headers: Dict[str, str] = {"authorization": self._api_key}
        url = f"{self._base_url}{self._send_path}"
        payload: Dict[str, Any] = {
            "route": "q",
            "message": message,
            "language": "english",
            "flash": 0,
            "numbers": to,
        }

        try:
            resp = await self._client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise RuntimeError(f"Fast2SMS HTTP error: {e}") from e
        if not (200 <= resp.status_code < 300):
            text = resp.text[:200]
            raise RuntimeError(f"Fast2SMS responded {resp.status_code}: {text}")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
