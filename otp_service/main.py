import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import Optional

from fastapi import FastAPI

from otp_service.infrastructure.gateway.console import ConsoleGateway
from otp_service.infrastructure.gateway.fast2sms import Fast2SmsGateway
from otp_service.infrastructure.memory.passcode_store import InMemoryPasscodeStore
from otp_service.infrastructure.sweeper import PasscodeSweeper
from otp_service.logging import setup_logging
from otp_service.presentation.api import api
from otp_service.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def build_gateway(settings: Settings):
    if settings.gateway_backend == "fast2sms":
        if settings.gateway_api_key is None:
            raise RuntimeError("GATEWAY_API_KEY is required for the fast2sms backend")
        return Fast2SmsGateway(
            base_url=settings.gateway_base_url,
            api_key=settings.gateway_api_key.get_secret_value(),
            timeout=settings.gateway_timeout_seconds,
            send_path=settings.gateway_send_path,
        )
    return ConsoleGateway()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    settings: Settings = app.state.settings
    gateway = build_gateway(settings)
    app.state.message_gateway = gateway  # expose to dependencies

    sweeper_task: Optional[asyncio.Task] = None
    if settings.sweep_interval_seconds > 0:
        sweeper = PasscodeSweeper(
            store=app.state.passcode_store,
            interval=settings.sweep_interval_seconds,
        )
        sweeper_task = asyncio.create_task(sweeper.run_forever())

    logger.info(
        "otp service started",
        extra={"gateway": settings.gateway_backend, "env": settings.app_env},
    )
    try:
        yield
    finally:
        # shutdown
        try:
            if sweeper_task is not None:
                sweeper_task.cancel()
                with suppress(asyncio.CancelledError):
                    await sweeper_task
        finally:
            await gateway.aclose()
            logger.info("otp service stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    app = FastAPI(title="OTP API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    # one store per application instance
    app.state.passcode_store = InMemoryPasscodeStore()
    app.include_router(api)
    return app


app = create_app()
