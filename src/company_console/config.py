"""
Runtime configuration for the Company Console.

All settings come from environment variables and are read once into a
frozen Settings instance. Flags accept "1", "true" or "yes".

Environment variables:
- COMPANY_CONSOLE_API_URL: Base URL of the companies API
- COMPANY_CONSOLE_PAYMENT_API_URL: Base URL of the payments API
- COMPANY_CONSOLE_SERVICE: Company service kind ("impl" or "demo")
- COMPANY_CONSOLE_FALLBACK: Use demo companies when the API is unreachable
- COMPANY_CONSOLE_TRUSTED_ORIGINS: Comma separated origins allowed to
  inject credentials through the auth bridge (empty accepts any origin)
- COMPANY_CONSOLE_DEFAULT_ROLE: Role used until the session resolves one
- COMPANY_CONSOLE_PORT: Port for the development server
"""

import os
from dataclasses import dataclass, field
from functools import cache

_TRUTHY = {"1", "true", "yes"}

DEFAULT_API_URL = "http://localhost:3001/api"
DEFAULT_PAYMENT_API_URL = "http://localhost:3002/api"
PAYMENT_API_PREFIX = "/payment/v1"


def _env_flag(key: str, default: str) -> bool:
    return os.getenv(key, default).lower() in _TRUTHY


def _env_list(key: str) -> tuple[str, ...]:
    raw = os.getenv(key, "")
    return tuple(item.strip().rstrip("/") for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Resolved application settings."""

    api_url: str = DEFAULT_API_URL
    payment_api_url: str = DEFAULT_PAYMENT_API_URL
    service_kind: str = "impl"
    fallback_enabled: bool = True
    trusted_origins: tuple[str, ...] = field(default_factory=tuple)
    default_role: str = "MEMBER"
    port: int = 8000

    @property
    def payment_base_url(self) -> str:
        """Payments API base including the versioned prefix."""
        return self.payment_api_url.rstrip("/") + PAYMENT_API_PREFIX

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current environment."""
        return cls(
            api_url=os.getenv("COMPANY_CONSOLE_API_URL", DEFAULT_API_URL).rstrip("/"),
            payment_api_url=os.getenv(
                "COMPANY_CONSOLE_PAYMENT_API_URL", DEFAULT_PAYMENT_API_URL
            ).rstrip("/"),
            service_kind=os.getenv("COMPANY_CONSOLE_SERVICE", "impl").lower(),
            fallback_enabled=_env_flag("COMPANY_CONSOLE_FALLBACK", "true"),
            trusted_origins=_env_list("COMPANY_CONSOLE_TRUSTED_ORIGINS"),
            default_role=os.getenv("COMPANY_CONSOLE_DEFAULT_ROLE", "MEMBER").upper(),
            port=int(os.getenv("COMPANY_CONSOLE_PORT", "8000")),
        )


@cache
def get_settings() -> Settings:
    """Return the process-wide settings."""
    return Settings.from_env()
