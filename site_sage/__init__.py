# site_sage/__init__.py
"""
SiteSage package initializer.
Defines the package version; the CLI lives in :mod:`site_sage.cli`.
"""
__version__ = "0.1.0"

__all__ = ["__version__"]
