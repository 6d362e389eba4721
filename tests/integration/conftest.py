# tests/integration/conftest.py
from __future__ import annotations

from collections.abc import Generator

import duckdb
import pytest
from fastapi.testclient import TestClient

from jeton.infrastructure.cache import NullValuationCache
from jeton.infrastructure.duckdb_connection import init_schema


def _seed_valuation_sources(conn: duckdb.DuckDBPyConnection) -> None:
    """Strategic value of the seed data: 200000.00.

    assets book value 40000 (the over-depreciated laptop counts as 0, the
    disposed asset is ignored), liabilities 20000, IP 130000, infra 50000.
    """
    conn.execute("""
        INSERT INTO assets_accounting VALUES
        (1, 'Servers', 50000.00, 10000.00, 'active'),
        (2, 'Old laptop', 3000.00, 5000.00, 'active'),
        (3, 'Sold van', 99999.00, 0.00, 'disposed')
    """)
    conn.execute("""
        INSERT INTO liabilities VALUES
        (1, 'Bank loan', 15000.00, 'ACTIVE'),
        (2, 'Supplier', 5000.00, 'DEFERRED'),
        (3, 'Old loan', 1000000.00, 'PAID')
    """)
    conn.execute("""
        INSERT INTO intellectual_property VALUES
        (1, 'Core platform', 100000.00, 'active'),
        (2, 'Mobile app', 30000.00, 'scaling'),
        (3, 'Abandoned patent', 7777.00, 'abandoned')
    """)
    conn.execute("""
        INSERT INTO infrastructure VALUES
        (1, 'Data center rack', 50000.00, 'active'),
        (2, 'Retired switch', 1.00, 'retired')
    """)


@pytest.fixture()
def test_db() -> Generator[duckdb.DuckDBPyConnection, None, None]:
    """Fresh in-memory DuckDB per test: every equity test mutates state."""
    conn = duckdb.connect(":memory:")
    init_schema(conn)
    _seed_valuation_sources(conn)
    yield conn
    conn.close()


@pytest.fixture()
def client(test_db: duckdb.DuckDBPyConnection) -> Generator[TestClient, None, None]:
    """FastAPI TestClient with the in-memory DuckDB injected and caching off."""
    from jeton.infrastructure import duckdb_connection
    duckdb_connection.set_connection(test_db)

    from jeton.infrastructure.config import get_settings
    get_settings.cache_clear()

    from jeton.interfaces.api.dependencies import get_valuation_cache
    from jeton.interfaces.api.main import app
    app.dependency_overrides[get_valuation_cache] = NullValuationCache
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
