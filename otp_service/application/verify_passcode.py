import dataclasses
import logging
from datetime import datetime
from typing import Callable

from otp_service.domain.clock import utc_now
from otp_service.domain.errors import ExpiredError, MismatchError, NotFoundError
from otp_service.domain.ports.passcode_store import PasscodeStorePort
from otp_service.domain.services import normalize_subject

logger = logging.getLogger(__name__)


async def verify_passcode(
    store: PasscodeStorePort,
    subject: str,
    candidate_code: str,
    *,
    max_attempts: int = 5,
    clock: Callable[[], datetime] = utc_now,
) -> bool:
    """
    Check `candidate_code` against the live passcode for `subject`.

    A match or an expired record removes the record. A wrong code keeps
    it until `max_attempts` failed tries, then removes it as well.
    """
    normalized_subject = normalize_subject(subject)

    async with store.locked(normalized_subject):
        record = await store.get(normalized_subject)
        if record is None:
            raise NotFoundError("No OTP found for this email.")

        if record.is_expired(clock()):
            await store.delete(normalized_subject)
            logger.info("passcode expired", extra={"subject": normalized_subject})
            raise ExpiredError("OTP has expired.")

        if not record.matches(candidate_code):
            attempts = record.attempts + 1
            remaining = max(max_attempts - attempts, 0)
            if remaining == 0:
                await store.delete(normalized_subject)
            else:
                await store.put(dataclasses.replace(record, attempts=attempts))
            logger.info(
                "passcode mismatch",
                extra={"subject": normalized_subject, "attempts": attempts},
            )
            raise MismatchError(attempts_remaining=remaining)

        await store.delete(normalized_subject)

    logger.info("passcode verified", extra={"subject": normalized_subject})
    return True
