# contact_relay/core/settings.py
from functools import lru_cache
from typing import List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PORT = 3000


def resolve_smtp_port(raw: Union[int, str, None], secure: bool) -> int:
    """
    Port to dial for the SMTP server.

    Blank or missing falls back to 465 (SSL) / 587. Anything that is not a
    positive number raises ValueError, which callers hit at send time.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return 465 if secure else 587
    try:
        port = int(str(raw).strip())
    except ValueError:
        raise ValueError(f"EMAIL_PORT is not a number: {raw!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"EMAIL_PORT out of range: {port}")
    return port


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    api_title: str = Field(default="Contact Relay", alias="API_TITLE")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=DEFAULT_PORT, alias="PORT")

    # SMTP provider
    email_host: str = Field(default="localhost", alias="EMAIL_HOST")
    # kept raw; checked by resolve_smtp_port when a message goes out
    email_port: Optional[str] = Field(default=None, alias="EMAIL_PORT")
    # only the literal "true" turns SSL on
    email_secure: str = Field(default="false", alias="EMAIL_SECURE")
    email_user: str = Field(default="", alias="EMAIL_USER")
    email_pass: str = Field(default="", alias="EMAIL_PASS")

    receiver_email: str = Field(default="", alias="RECEIVER_EMAIL")
    sender_name: str = Field(default="Contato Site", alias="SENDER_NAME")
    email_subject: str = Field(default="Novo contato pelo site", alias="EMAIL_SUBJECT")

    @field_validator("port", mode="before")
    @classmethod
    def _blank_http_port(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_PORT
        return v

    @field_validator("email_port", mode="before")
    @classmethod
    def _raw_smtp_port(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @property
    def secure(self) -> bool:
        return self.email_secure.strip().lower() == "true"

    @property
    def smtp_port(self) -> int:
        return resolve_smtp_port(self.email_port, self.secure)

    @property
    def allowed_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Settings for this process, read from the environment once."""
    return Settings()
