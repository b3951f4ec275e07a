# otp_service/domain/services.py
from __future__ import annotations

import hmac
import secrets
from typing import Iterable

CODE_MIN = 100_000
CODE_MAX = 999_999


def generate_6digit_code() -> str:
    """6-digit numeric code, uniform over 100000..999999."""
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


def secure_compare(a: str, b: str) -> bool:
    """
    Constant-time comparison for secrets.
    Accepts strings; falls back to bytes if needed.
    """
    try:
        # hmac.compare_digest supports str if both are ASCII
        return hmac.compare_digest(a, b)
    except TypeError:
        return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def normalize_subject(subject: str) -> str:
    return subject.strip().lower()


def is_allowed_subject(subject: str, allowed_domains: Iterable[str]) -> bool:
    """
    True if `subject` is a plain address under one of `allowed_domains`.
    """
    normalized = normalize_subject(subject)
    if normalized.count("@") != 1:
        return False
    local, _, domain = normalized.partition("@")
    if not local:
        return False
    return any(domain == d.strip().lower().lstrip("@") for d in allowed_domains)


def format_validity(ttl_seconds: int) -> str:
    if ttl_seconds >= 60 and ttl_seconds % 60 == 0:
        minutes = ttl_seconds // 60
        return f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"
    return f"{ttl_seconds} second" if ttl_seconds == 1 else f"{ttl_seconds} seconds"


def build_passcode_message(code: str, ttl_seconds: int) -> str:
    return f"Your OTP is {code}. It is valid for {format_validity(ttl_seconds)}."
