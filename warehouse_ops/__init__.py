"""
Warehouse Read API Operations Package

This package contains configuration and operational tooling for the
warehouse read API.

Modules:
- config: Environment configuration and settings
- cli: Command-line interface (serve, init-db, health, show)
"""

__version__ = "0.1.0"
