"""Dependency specifications, registration options, container protocols and structured errors."""

__version__ = "0.1.0"