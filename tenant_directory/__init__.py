# tenant_directory/__init__.py
"""Tenant directory backed by a hierarchical coordination store."""

__version__ = "0.1.0"
