from dataclasses import dataclass
from datetime import datetime

from otp_service.domain.services import secure_compare


@dataclass(frozen=True)
class PasscodeRecord:
    subject: str
    code: str
    expires_at: datetime
    attempts: int = 0

    def __post_init__(self):
        if not self.subject:
            raise ValueError("subject is required")
        if len(self.code) != 6 or not self.code.isdigit():
            raise ValueError("code must be 6 digits")

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def matches(self, candidate: str) -> bool:
        return secure_compare(self.code, candidate)
