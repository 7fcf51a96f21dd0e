"""Demo companies used when the companies API is unreachable."""

from company_console.models.company import Company, CompanyStatus

DEMO_COMPANIES: tuple[Company, ...] = (
    Company(
        id="1",
        name="Tech Solutions Ltd",
        address="123 Tech Street, Silicon Valley, CA 94000",
        phone="+1 (555) 123-4567",
        email="contact@techsolutions.com",
        website="https://techsolutions.com",
        status=CompanyStatus.ACTIVE.value,
    ),
    Company(
        id="2",
        name="Global Logistics Corp",
        address="456 Logistics Ave, New York, NY 10001",
        phone="+1 (555) 987-6543",
        email="info@globallogistics.com",
        website="https://globallogistics.com",
        status=CompanyStatus.ACTIVE.value,
    ),
    Company(
        id="3",
        name="Creative Design Studio",
        address="789 Design Blvd, Los Angeles, CA 90210",
        phone="+1 (555) 456-7890",
        email="hello@creativedesign.com",
        website="https://creativedesign.com",
        status=CompanyStatus.ACTIVE.value,
    ),
    Company(
        id="4",
        name="Financial Services Inc",
        address="321 Finance Way, Boston, MA 02101",
        phone="+1 (555) 321-9876",
        email="support@financialservices.com",
        website="https://financialservices.com",
        status=CompanyStatus.ACTIVE.value,
    ),
    Company(
        id="5",
        name="Old Company Name",
        address="999 Obsolete Road, Nowhere, TX 00000",
        phone="+1 (555) 000-0000",
        email="old@company.com",
        website="https://oldcompany.com",
        status=CompanyStatus.DELETED.value,
    ),
)
