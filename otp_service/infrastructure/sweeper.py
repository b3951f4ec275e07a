from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable

from otp_service.domain.clock import utc_now
from otp_service.domain.ports.passcode_store import PasscodeStorePort

logger = logging.getLogger(__name__)


class PasscodeSweeper:
    """
    Periodically drops expired passcodes from the store.

    Expired records are already rejected at verification time; this only
    keeps the mapping from growing with abandoned issuances.
    """

    def __init__(
        self,
        *,
        store: PasscodeStorePort,
        interval: float = 60.0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.store = store
        self.interval = interval
        self.clock = clock

    async def run_forever(self) -> None:
        logger.info("passcode sweeper started", extra={"interval": self.interval})
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.sweep_once()
            except Exception:  # noqa: BLE001
                logger.exception("passcode sweep failed")

    async def sweep_once(self) -> int:
        removed = await self.store.purge_expired(self.clock())
        if removed:
            logger.info("purged expired passcodes", extra={"count": removed})
        return removed
