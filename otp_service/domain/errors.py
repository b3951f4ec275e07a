class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class PasscodeError(DomainError):
    """Base class for passcode issuance/verification failures."""

    kind: str = "passcode_error"


class InvalidSubjectError(PasscodeError):
    """Subject is not allowed to request a passcode (allowlist)."""

    kind = "invalid_subject"


class DeliveryError(PasscodeError):
    """The gateway failed to deliver the passcode. The record is kept."""

    kind = "delivery_failed"


class NotFoundError(PasscodeError):
    """No live passcode for the subject."""

    kind = "not_found"


class ExpiredError(PasscodeError):
    """The passcode was past its validity window; it has been discarded."""

    kind = "expired"


class MismatchError(PasscodeError):
    """Candidate code does not match the live passcode."""

    kind = "mismatch"

    def __init__(self, message: str = "Invalid OTP.", *, attempts_remaining: int = 0):
        super().__init__(message)
        self.attempts_remaining = attempts_remaining
