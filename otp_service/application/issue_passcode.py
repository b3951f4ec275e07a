import logging
from datetime import datetime, timedelta
from typing import Callable, Iterable

import otp_service.domain.services as domain_services
from otp_service.domain.clock import utc_now
from otp_service.domain.entities import PasscodeRecord
from otp_service.domain.errors import DeliveryError, InvalidSubjectError
from otp_service.domain.ports.message_gateway import MessageGatewayPort
from otp_service.domain.ports.passcode_store import PasscodeStorePort

logger = logging.getLogger(__name__)


async def issue_passcode(
    store: PasscodeStorePort,
    gateway: MessageGatewayPort,
    subject: str,
    *,
    allowed_domains: Iterable[str],
    ttl_seconds: int = 300,
    clock: Callable[[], datetime] = utc_now,
) -> None:
    normalized_subject = domain_services.normalize_subject(subject)
    if not domain_services.is_allowed_subject(normalized_subject, allowed_domains):
        logger.info("passcode refused", extra={"subject": normalized_subject})
        raise InvalidSubjectError("Only allowed email domains may request an OTP.")

    generated_code = domain_services.generate_6digit_code()
    record = PasscodeRecord(
        subject=normalized_subject,
        code=generated_code,
        expires_at=clock() + timedelta(seconds=ttl_seconds),
    )

    async with store.locked(normalized_subject):
        await store.put(record)

    # delivery happens outside the lock
    message = domain_services.build_passcode_message(generated_code, ttl_seconds)
    try:
        await gateway.send(to=normalized_subject, message=message)
    except Exception as e:  # noqa: BLE001
        logger.warning(
            "passcode delivery failed",
            extra={"subject": normalized_subject, "error": str(e)},
        )
        raise DeliveryError("Failed to send OTP. Please try again.") from e

    logger.info(
        "passcode issued",
        extra={
            "subject": normalized_subject,
            "expires_at": record.expires_at.isoformat(),
        },
    )
