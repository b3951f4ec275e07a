from datetime import datetime
from typing import Annotated, Callable, Union

from fastapi import APIRouter, Depends, HTTPException, status

from otp_service.application.issue_passcode import issue_passcode
from otp_service.application.verify_passcode import verify_passcode
from otp_service.domain.errors import (
    DeliveryError,
    ExpiredError,
    InvalidSubjectError,
    MismatchError,
    NotFoundError,
    PasscodeError,
)
from otp_service.domain.ports.message_gateway import MessageGatewayPort
from otp_service.domain.ports.passcode_store import PasscodeStorePort
from otp_service.presentation.dependencies import (
    get_allowed_domains,
    get_clock,
    get_code_attempts,
    get_code_ttl_seconds,
    get_message_gateway,
    get_passcode_store,
)
from otp_service.schemas.requests import OtpIn
from otp_service.schemas.responses import ErrorOut, SentOut, VerifiedOut

router = APIRouter(prefix="/otp", tags=["OTP"])

_STATUS_BY_ERROR: dict[type[PasscodeError], int] = {
    InvalidSubjectError: status.HTTP_400_BAD_REQUEST,
    MismatchError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ExpiredError: status.HTTP_410_GONE,
    DeliveryError: status.HTTP_502_BAD_GATEWAY,
}


def _to_http(exc: PasscodeError) -> HTTPException:
    detail: dict = {"error": exc.kind, "message": str(exc)}
    if isinstance(exc, MismatchError):
        detail["attempts_remaining"] = exc.attempts_remaining
    return HTTPException(
        status_code=_STATUS_BY_ERROR.get(
            type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
        ),
        detail=detail,
    )


@router.post(
    "",
    response_model=Union[SentOut, VerifiedOut],
    responses={
        400: {"model": ErrorOut},
        404: {"model": ErrorOut},
        410: {"model": ErrorOut},
        502: {"model": ErrorOut},
    },
)
async def post_otp(
    body: OtpIn,
    store: Annotated[PasscodeStorePort, Depends(get_passcode_store)],
    gateway: Annotated[MessageGatewayPort, Depends(get_message_gateway)],
    clock: Annotated[Callable[[], datetime], Depends(get_clock)],
    allowed_domains: Annotated[list[str], Depends(get_allowed_domains)],
    code_ttl_seconds: Annotated[int, Depends(get_code_ttl_seconds)],
    code_attempts: Annotated[int, Depends(get_code_attempts)],
):
    try:
        if body.otp:
            await verify_passcode(
                store,
                body.email,
                body.otp,
                max_attempts=code_attempts,
                clock=clock,
            )
            return VerifiedOut(success=True)

        await issue_passcode(
            store,
            gateway,
            body.email,
            allowed_domains=allowed_domains,
            ttl_seconds=code_ttl_seconds,
            clock=clock,
        )
    except PasscodeError as e:
        raise _to_http(e) from e

    return SentOut(expires_in_seconds=code_ttl_seconds)
