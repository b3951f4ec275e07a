"""
Console gateway: logs outgoing messages instead of delivering them.

Meant for local development, where the passcode is read from the logs.
"""

import logging

from otp_service.domain.ports.message_gateway import MessageGatewayPort

logger = logging.getLogger(__name__)


class ConsoleGateway(MessageGatewayPort):
    async def send(self, *, to: str, message: str) -> None:
        logger.info("[OTP] to=%s message=%s", to, message)

    async def aclose(self) -> None:
        return None
