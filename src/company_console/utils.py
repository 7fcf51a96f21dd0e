"""
Utility functions for formatting and client-side filtering.

Provides helpers for:
- Date parsing (ISO timestamps and m/d/y dates)
- Currency and timestamp formatting
- Search query matching against company fields
- Company form validation
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Sequence

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl, ValidationError, field_validator

if TYPE_CHECKING:
    from company_console.models.company import Company, CompanyDraft


def parse_date(date_str: str | None) -> datetime | None:
    """
    Parse an ISO timestamp or an m/d/y date string.

    Args:
        date_str: e.g. "2024-12-25T10:00:00Z", "2024-12-25" or "12/25/2024".

    Returns:
        datetime object if parsing succeeds, None otherwise
    """
    if date_str:
        date_str = date_str.strip()
    if not date_str:
        return None

    # fromisoformat only accepts a trailing Z from Python 3.11 onwards
    if date_str.endswith("Z"):
        date_str = date_str[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(date_str)
    except ValueError:
        pass

    for fmt in ("%m/%d/%Y", "%m/%d/%y"):
        try:
            return datetime.strptime(date_str, fmt)
        except ValueError:
            pass

    return None


def format_currency(value: float, currency: str = "USD") -> str:
    """
    Format a currency amount with the currency code prefix.

    Args:
        value: Numeric amount to format.
        currency: Currency code (e.g., 'USD', 'EUR').

    Returns:
        Formatted string like 'USD 1,234.56'.
    """
    return f"{currency} {value:,.2f}"


def format_date(date_str: str | None, with_time: bool = False) -> str:
    """Format an API date string for display, or "N/A" when missing."""
    parsed = parse_date(date_str)
    if parsed is None:
        return date_str or "N/A"
    return parsed.strftime("%b %d, %Y %H:%M" if with_time else "%b %d, %Y")


def matches_query(company: "Company", query: str) -> bool:
    """
    Check if a company matches the search query.

    Performs case-insensitive substring matching against the company's
    name, address, phone and email.

    Args:
        company: Company to check.
        query: Search query string.

    Returns:
        True if query matches any searchable field, or if query is empty.
    """
    normalized = query.strip().lower()
    if not normalized:
        return True
    return any(normalized in value.lower() for value in company.searchable_terms())


def filter_companies(companies: Sequence["Company"], query: str) -> list["Company"]:
    """Return the companies matching the query, preserving order."""
    return [company for company in companies if matches_query(company, query)]


class CompanyForm(BaseModel):
    """Company form schema: name, address and phone are required, email and website optional."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    address: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    email: EmailStr | None = None
    website: HttpUrl | None = None

    @field_validator("email", "website", mode="before")
    @classmethod
    def blank_as_missing(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


FORM_MESSAGES = {
    "name": "Company name is required",
    "address": "Address is required",
    "phone": "Phone is required",
    "email": "Invalid email",
    "website": "Invalid website URL",
}


def validate_company_draft(draft: "CompanyDraft") -> dict[str, str]:
    """
    Validate the company form against CompanyForm.

    Returns:
        Field name to error message; empty when the draft is valid.
    """
    try:
        CompanyForm(
            name=draft.name,
            address=draft.address,
            phone=draft.phone,
            email=draft.email,
            website=draft.website,
        )
    except ValidationError as exc:
        errors: dict[str, str] = {}
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else ""
            errors.setdefault(field, FORM_MESSAGES.get(field, error["msg"]))
        return errors
    return {}
