from datetime import datetime
from typing import Callable

from fastapi import Request

from otp_service.domain.clock import utc_now
from otp_service.domain.ports.message_gateway import MessageGatewayPort
from otp_service.domain.ports.passcode_store import PasscodeStorePort
from otp_service.settings import Settings


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_passcode_store(request: Request) -> PasscodeStorePort:
    # Created in otp_service.main.create_app()
    return request.app.state.passcode_store


def get_message_gateway(request: Request) -> MessageGatewayPort:
    # This is set in otp_service.main lifespan()
    return request.app.state.message_gateway


def get_clock() -> Callable[[], datetime]:
    return utc_now


def get_allowed_domains(request: Request) -> list[str]:
    return get_app_settings(request).allowed_email_domains


def get_code_ttl_seconds(request: Request) -> int:
    return get_app_settings(request).code_ttl_seconds


def get_code_attempts(request: Request) -> int:
    return get_app_settings(request).code_attempts
