"""
Static and demo data for the Company Console.

This package contains fixture data used by DemoCompanyService for
development and as the offline fallback for the company list.

Modules:
- demo_companies: Pre-populated Company objects
"""
