from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"

    # Passcode policy
    allowed_email_domains: List[str] = ["gmail.com"]
    code_ttl_seconds: int = Field(default=300, gt=0)
    code_attempts: int = Field(default=5, gt=0)
    sweep_interval_seconds: int = Field(default=60, ge=0)  # 0 disables the sweeper

    # Delivery gateway
    gateway_backend: Literal["console", "fast2sms"] = "console"
    gateway_base_url: str = "https://www.fast2sms.com"
    gateway_send_path: str = "/dev/bulkV2"
    gateway_api_key: Optional[SecretStr] = None
    gateway_timeout_seconds: float = Field(default=10.0, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
