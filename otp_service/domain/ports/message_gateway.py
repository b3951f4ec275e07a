from __future__ import annotations

from typing import Protocol


class MessageGatewayPort(Protocol):
    async def send(self, *, to: str, message: str) -> None:
        """Deliver a plain-text message. Raises on failure."""
