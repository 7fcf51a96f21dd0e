"""Reflex configuration for the Company Console."""

import reflex as rx

config = rx.Config(
    app_name="company_console",
    # Use the src directory structure
    app_module_import="company_console.app",
)
