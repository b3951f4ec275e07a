from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class OtpIn(BaseModel):
    email: EmailStr = Field(..., description="Address the passcode is bound to", max_length=255)
    otp: Optional[str] = Field(
        default=None,
        description="Candidate code; omit or leave empty to request a new passcode",
        min_length=6,
        max_length=6,
        pattern=r"^[0-9]{6}$",
    )

    @field_validator("otp", mode="before")
    @classmethod
    def empty_otp_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value
