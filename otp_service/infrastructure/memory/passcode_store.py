from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Dict, Optional

from otp_service.domain.entities import PasscodeRecord
from otp_service.domain.ports.passcode_store import PasscodeStorePort


class InMemoryPasscodeStore(PasscodeStorePort):
    """
    Process-local store. One lock guards the whole mapping, which is
    enough at the expected request rate.
    """

    def __init__(self) -> None:
        self._records: Dict[str, PasscodeRecord] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def locked(self, subject: str) -> asyncio.Lock:
        return self._lock

    async def get(self, subject: str) -> Optional[PasscodeRecord]:
        return self._records.get(subject)

    async def put(self, record: PasscodeRecord) -> None:
        self._records[record.subject] = record

    async def delete(self, subject: str) -> None:
        self._records.pop(subject, None)

    async def purge_expired(self, now: datetime) -> int:
        async with self._lock:
            stale = [s for s, r in self._records.items() if r.is_expired(now)]
            for subject in stale:
                del self._records[subject]
        return len(stale)
