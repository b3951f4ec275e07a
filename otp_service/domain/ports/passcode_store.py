from __future__ import annotations

from datetime import datetime
from typing import AsyncContextManager, Optional, Protocol

from otp_service.domain.entities import PasscodeRecord


class PasscodeStorePort(Protocol):
    """
    Owns the subject -> PasscodeRecord mapping.

    get/put/delete do not lock; combine them inside `locked(subject)`:

        async with store.locked(subject):
            record = await store.get(subject)
            ...
            await store.delete(subject)
    """

    def locked(self, subject: str) -> AsyncContextManager[object]:
        """Exclusive access to `subject`'s record (may be coarser)."""

    async def get(self, subject: str) -> Optional[PasscodeRecord]:
        """Return the current record, expired or not, or None."""

    async def put(self, record: PasscodeRecord) -> None:
        """Store/replace the record for record.subject."""

    async def delete(self, subject: str) -> None:
        """Drop the record if any."""

    async def purge_expired(self, now: datetime) -> int:
        """
        Drop every record expired at `now`; return how many were dropped.

        Takes the store lock itself, so never call it inside `locked(...)`.
        """
