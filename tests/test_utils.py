from datetime import datetime, timezone

import pytest

from company_console import utils
from company_console.data.demo_companies import DEMO_COMPANIES
from company_console.lib import logs
from company_console.models.company import CompanyDraft


def test_parse_date_formats():
    assert utils.parse_date("2024-12-25T10:00:00Z") == datetime(2024, 12, 25, 10, tzinfo=timezone.utc)
    assert utils.parse_date("2024-12-25") == datetime(2024, 12, 25)
    assert utils.parse_date("12/25/2024") == datetime(2024, 12, 25)
    assert utils.parse_date("12/25/24") == datetime(2024, 12, 25)


@pytest.mark.parametrize("value", [None, "", "   ", "not a date"])
def test_parse_date_invalid(value):
    assert utils.parse_date(value) is None


def test_format_currency():
    assert utils.format_currency(1234.5) == "USD 1,234.50"
    assert utils.format_currency(0, "EUR") == "EUR 0.00"


def test_format_date():
    assert utils.format_date("2024-01-05") == "Jan 05, 2024"
    assert utils.format_date("2024-01-05T09:30:00Z", with_time=True) == "Jan 05, 2024 09:30"
    assert utils.format_date(None) == "N/A"
    assert utils.format_date("someday") == "someday"


def test_filter_by_name_prefix():
    matches = utils.filter_companies(DEMO_COMPANIES, "tech")
    assert [company.name for company in matches] == ["Tech Solutions Ltd"]


@pytest.mark.parametrize(
    "query, expected_id",
    [
        ("LOGISTICS", "2"),
        ("los angeles", "3"),
        ("321-9876", "4"),
        ("old@company", "5"),
    ],
)
def test_filter_matches_every_field(query, expected_id):
    assert [company.id for company in utils.filter_companies(DEMO_COMPANIES, query)] == [expected_id]


def test_blank_query_keeps_everything_in_order():
    assert utils.filter_companies(DEMO_COMPANIES, "  ") == list(DEMO_COMPANIES)


def test_no_matches():
    assert utils.filter_companies(DEMO_COMPANIES, "zzz") == []


def test_valid_draft():
    draft = CompanyDraft(
        name="Acme", address="1 Rd", phone="555", email="a@acme.io", website="https://acme.io"
    )
    assert utils.validate_company_draft(draft) == {}


def test_blank_optional_fields_are_ignored():
    draft = CompanyDraft(name=" Acme ", address="1 Rd", phone="555", email="  ", website="")
    assert utils.validate_company_draft(draft) == {}


def test_required_fields():
    errors = utils.validate_company_draft(CompanyDraft(name=" "))
    assert errors == {
        "name": "Company name is required",
        "address": "Address is required",
        "phone": "Phone is required",
    }


@pytest.mark.parametrize("email", ["nope", "a@b", "a b@c.io", "a@b..c"])
def test_invalid_email(email):
    draft = CompanyDraft(name="A", address="B", phone="C", email=email)
    assert utils.validate_company_draft(draft) == {"email": "Invalid email"}


@pytest.mark.parametrize("website", ["acme.io", "ftp://acme.io", "https://", "http://exa mple.com"])
def test_invalid_website(website):
    draft = CompanyDraft(name="A", address="B", phone="C", website=website)
    assert utils.validate_company_draft(draft) == {"website": "Invalid website URL"}


def test_logger_names_follow_the_package_path():
    log = logs.logger("/srv/app/src/company_console/services/http.py")
    assert log.name == "company_console.services.http"
    assert logs.logger("/tmp/company_console/lib/__init__.py").name == "company_console.lib"
    assert logs.logger("/somewhere/else/script.py").name == "script"
    assert len(logs.logger("company_console.services.http").handlers) == 1
