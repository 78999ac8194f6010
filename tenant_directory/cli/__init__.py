# tenant_directory/cli/__init__.py
"""Command line interface for operating the tenant directory."""
