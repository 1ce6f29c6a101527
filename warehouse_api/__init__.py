"""
Warehouse Read API Package

This package contains the database client and API components for reading
warehouse stock and order records.

Modules:
- models: SQLAlchemy ORM entities (stock by warehouse, orders, order lines)
- db_client: Engine and session management with ERP bind routing
- lookups: Read-only list/get services with typed results
- envelope: Standard success/error response envelope
- fastapi_server: REST API server
- utils: Utility functions and helpers
"""

__version__ = "0.1.0"
