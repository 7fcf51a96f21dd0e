"""
Service factory for the Company Console.

This module provides the factory functions that return the configured
service implementations.

Available company service implementations:
- demo: In-memory service with static company data (no API required)
- impl: REST client for the companies API

The services are cached at the module level, so the same instance is
reused across all requests. Configure via COMPANY_CONSOLE_SERVICE.
"""

from dataclasses import dataclass
from functools import cache
from typing import Callable, Dict

from company_console.config import get_settings
from company_console.lib import logs
from company_console.services.company_service import CompanyService
from company_console.services.company_service_demo import DemoCompanyService
from company_console.services.company_service_impl import CompanyServiceImpl
from company_console.services.errors import (
    ApiError,
    NetworkError,
    NotFoundError,
    ServiceError,
)
from company_console.services.payment_service import PaymentService
from company_console.services.payment_service_impl import PaymentServiceImpl

LOG = logs.logger(__file__)

_SERVICE_REGISTRY: Dict[str, Callable[[], CompanyService]] = {
    "demo": lambda: DemoCompanyService(),
    "impl": lambda: CompanyServiceImpl(),
}


@dataclass(frozen=True)
class Services:
    """
    The collaborators handed to store thunks.

    Attributes:
        companies: Company, member and invitation access.
        payments: Account and ledger access.
        fallback: Service consulted for the company list when the
            primary one is unreachable, or None to disable fallback.
    """

    companies: CompanyService
    payments: PaymentService
    fallback: CompanyService | None = None


@cache
def get_company_service(kind: str | None = None) -> CompanyService:
    """Return the configured company service implementation."""
    resolved_kind = (kind or get_settings().service_kind).lower()
    LOG.info("get_company_service - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _SERVICE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown company service kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()


@cache
def get_payment_service() -> PaymentService:
    """Return the payments API client."""
    return PaymentServiceImpl()


@cache
def get_services() -> Services:
    """Return the process-wide service bundle."""
    settings = get_settings()
    companies = get_company_service()
    fallback = None
    if settings.fallback_enabled and not isinstance(companies, DemoCompanyService):
        fallback = get_company_service("demo")
    return Services(companies=companies, payments=get_payment_service(), fallback=fallback)


__all__ = [
    "ApiError",
    "CompanyService",
    "NetworkError",
    "NotFoundError",
    "PaymentService",
    "ServiceError",
    "Services",
    "get_company_service",
    "get_payment_service",
    "get_services",
]
