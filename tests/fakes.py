import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any

from otp_service.infrastructure.memory.passcode_store import InMemoryPasscodeStore


class FakeClock:
    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class FakeGatewayOK:
    def __init__(self):
        self.calls: list[dict[str, Any]] = []

    async def send(self, *, to: str, message: str) -> None:
        self.calls.append({"to": to, "message": message})


class FakeGatewayFailing:
    def __init__(self, fail_times: int = 1):
        self.calls: int = 0
        self.fail_times = fail_times

    async def send(self, *, to: str, message: str) -> None:
        self.calls += 1
        if self.calls <= self.fail_times:
            raise RuntimeError("gateway down")


class YieldingPasscodeStore(InMemoryPasscodeStore):
    """Gives the event loop a turn on every read, like a networked store would."""

    async def get(self, subject: str):
        record = await super().get(subject)
        await asyncio.sleep(0)
        return record


class FailingPurgeStore(InMemoryPasscodeStore):
    def __init__(self, fail_times: int = 1_000_000):
        super().__init__()
        self.purge_calls: int = 0
        self.fail_times = fail_times

    async def purge_expired(self, now: datetime) -> int:
        self.purge_calls += 1
        if self.purge_calls <= self.fail_times:
            raise RuntimeError("store broke")
        return await super().purge_expired(now)
