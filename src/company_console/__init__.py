"""
Company Console: a Reflex admin console for companies, members and finances.

This package provides a web interface over the companies and payments
REST APIs, with role-based access control applied before every action.

Subpackages:
- components: Reflex UI components
- models: Data models and serialization
- services: API clients and the in-memory demo service
- store: Client-side state store (slices, thunks)
- data: Static demo fixtures

Main entry points:
- app.main(): Start the development server
- app.app: The Reflex application instance
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
