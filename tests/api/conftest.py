import pytest
from fastapi.testclient import TestClient

from otp_service.main import create_app
from otp_service.presentation.dependencies import (
    get_allowed_domains,
    get_clock,
    get_code_attempts,
    get_code_ttl_seconds,
    get_message_gateway,
    get_passcode_store,
)
from otp_service.infrastructure.memory.passcode_store import InMemoryPasscodeStore
from tests.fakes import FakeClock, FakeGatewayOK


@pytest.fixture()
def app_and_deps():
    app = create_app()
    store = InMemoryPasscodeStore()
    gateway = FakeGatewayOK()
    clock = FakeClock()

    app.dependency_overrides[get_passcode_store] = lambda: store
    app.dependency_overrides[get_message_gateway] = lambda: gateway
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_allowed_domains] = lambda: ["gmail.com"]
    app.dependency_overrides[get_code_ttl_seconds] = lambda: 300
    app.dependency_overrides[get_code_attempts] = lambda: 5

    try:
        yield app, store, gateway, clock
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app_and_deps):
    app, _, _, _ = app_and_deps
    return TestClient(app, raise_server_exceptions=False)
