"""
Pytest configuration and shared fixtures for Warehouse Read API tests.

Provides database fixtures, test data, and common test utilities.
"""

import os
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from warehouse_ops.config import reload_settings
from warehouse_api.db_client import WarehouseDB
from warehouse_api.fastapi_server import create_app, get_db
from warehouse_api.models import Base, StockByWarehouse, WarehouseOrder, WarehouseOrderLine


USE_POSTGRES = os.getenv("TEST_USE_POSTGRES", "").lower() in ("1", "true", "yes")

ENV_KEYS = [
    "DATABASE_URL", "ERP_DATABASE_URL", "EXPOSE_ERROR_DETAILS",
    "LOG_LEVEL", "LOG_FILE", "API_PREFIX", "FAILURE_STATUS_CODE",
]


@pytest.fixture(scope="session")
def postgres_container():
    """
    Provide a PostgreSQL test container for the test session.

    Only started when TEST_USE_POSTGRES is set; SQLite is used otherwise.
    """
    if not USE_POSTGRES:
        pytest.skip("PostgreSQL container disabled (set TEST_USE_POSTGRES=1)")

    from testcontainers.postgres import PostgresContainer

    with PostgresContainer("postgres:15-alpine") as postgres:
        yield postgres


@pytest.fixture
def test_database_url(request, tmp_path: Path) -> str:
    """
    Get database URL for the test database.
    """
    if USE_POSTGRES:
        container = request.getfixturevalue("postgres_container")
        return container.get_connection_url()
    return f"sqlite:///{tmp_path / 'warehouse_test.db'}"


def _apply_env(monkeypatch, database_url: str) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DATABASE_URL", database_url)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")


@pytest.fixture
def test_settings(test_database_url: str, monkeypatch):
    """
    Override settings for testing.
    """
    _apply_env(monkeypatch, test_database_url)

    settings = reload_settings()

    yield settings

    monkeypatch.undo()
    reload_settings()


@pytest.fixture
def db_client(test_settings) -> Generator[WarehouseDB, None, None]:
    """
    Provide database client with the entity schema created.
    """
    db = WarehouseDB(test_settings.database_url)
    db.create_schema()

    yield db

    Base.metadata.drop_all(db.engine)
    db.dispose()


@pytest.fixture
def seed_test_data(db_client: WarehouseDB) -> WarehouseDB:
    """
    Seed test database with sample data.
    """
    with db_client.session() as session:
        session.add_all([
            StockByWarehouse(
                id=1, warehouse="A", partno="P-100", partname="Bracket",
                onhand=Decimal("10"), allocated=Decimal("2"), unit="PCS",
            ),
            StockByWarehouse(
                id=2, warehouse="B", partno="P-200", partname="Bolt",
                onhand=Decimal("250.50"), unit="PCS",
            ),
            WarehouseOrder(
                id=1, order_origin="SO", trx_type="OUT",
                order_date=date(2025, 1, 15), plan_delivery_date=date(2025, 1, 20),
                ship_from="WH-A", ship_to="CUST-01",
            ),
            WarehouseOrderLine(
                id=1, order_no="WO-0001", line_no=1, item_code="P-100",
                order_qty=Decimal("5"), ship_qty=Decimal("0"), line_status="OPEN",
            ),
        ])

    return db_client


@pytest.fixture
def api_client(db_client: WarehouseDB, test_settings) -> Generator[TestClient, None, None]:
    """
    Provide an HTTP client wired to the test database.
    """
    app = create_app(test_settings)
    app.dependency_overrides[get_db] = lambda: db_client

    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_failing_db(db_client: WarehouseDB, monkeypatch):
    """
    Provide a factory that makes the client's sessions raise the given exception.
    """
    def _make(exc: Exception) -> WarehouseDB:
        def factory():
            raise exc

        monkeypatch.setattr(db_client, "SessionLocal", factory)
        return db_client

    return _make


@pytest.fixture
def failing_db(make_failing_db) -> WarehouseDB:
    """
    Database client whose sessions fail with a database error.
    """
    return make_failing_db(OperationalError("SELECT 1", {}, Exception("connection refused")))
