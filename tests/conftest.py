import pytest

from otp_service.infrastructure.memory.passcode_store import InMemoryPasscodeStore
from tests.fakes import FakeClock, FakeGatewayFailing, FakeGatewayOK


@pytest.fixture()
def store():
    return InMemoryPasscodeStore()


@pytest.fixture()
def gateway():
    return FakeGatewayOK()


@pytest.fixture()
def failing_gateway():
    return FakeGatewayFailing(fail_times=1)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def patch_code(monkeypatch):
    """
    Make the 6-digit code deterministic in all tests.
    You can override in a specific test by re-monkeypatching.
    """
    from otp_service.domain import services as domain_services

    monkeypatch.setattr(domain_services, "generate_6digit_code", lambda: "123456")
    yield
