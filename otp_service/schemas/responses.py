from typing import Literal

from pydantic import BaseModel, Field


class SentOut(BaseModel):
    status: Literal["sent"] = "sent"
    expires_in_seconds: int = Field(..., description="Validity window of the passcode")


class VerifiedOut(BaseModel):
    success: bool = True


class ErrorOut(BaseModel):
    error: str = Field(..., description="Machine-readable failure kind")
    message: str
