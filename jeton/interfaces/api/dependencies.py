from collections.abc import Generator
from functools import lru_cache

import duckdb
from fastapi import Depends

from jeton.application.services.cap_table_service import CapTableService
from jeton.application.services.equity_service import EquityService
from jeton.application.services.shares_service import SharesService
from jeton.application.services.valuation_bridge import ValuationBridge
from jeton.domain.valuation.entities import ValuationSummary
from jeton.infrastructure.cache import NullValuationCache, TTLValuationCache, ValuationCache
from jeton.infrastructure.config import get_settings
from jeton.infrastructure.duckdb_connection import get_connection
from jeton.infrastructure.repositories.duckdb_issuance_repo import DuckDBIssuanceProposalRepo
from jeton.infrastructure.repositories.duckdb_shareholding_repo import DuckDBShareholdingRepo
from jeton.infrastructure.repositories.duckdb_shares_config_repo import DuckDBSharesConfigRepo
from jeton.infrastructure.repositories.duckdb_transaction_repo import DuckDBShareTransactionRepo
from jeton.infrastructure.repositories.duckdb_valuation_repo import (
    DuckDBValuationSnapshotRepo,
    DuckDBValuationSourceRepo,
)
from jeton.infrastructure.unit_of_work import DuckDBUnitOfWork


def get_db() -> Generator[duckdb.DuckDBPyConnection, None, None]:
    """One cursor per request: its own transaction scope on the shared database."""
    cursor = get_connection().cursor()
    try:
        yield cursor
    finally:
        cursor.close()


@lru_cache(maxsize=1)
def get_valuation_cache() -> ValuationCache[ValuationSummary]:
    ttl = get_settings().valuation_cache_ttl_seconds
    if ttl <= 0:
        return NullValuationCache()
    return TTLValuationCache(ttl)


def get_valuation_bridge(
    conn: duckdb.DuckDBPyConnection = Depends(get_db),  # noqa: B008
    cache: ValuationCache[ValuationSummary] = Depends(get_valuation_cache),  # noqa: B008
) -> ValuationBridge:
    return ValuationBridge(source_repo=DuckDBValuationSourceRepo(conn), cache=cache)


def get_shares_service(
    conn: duckdb.DuckDBPyConnection = Depends(get_db),  # noqa: B008
    bridge: ValuationBridge = Depends(get_valuation_bridge),  # noqa: B008
) -> SharesService:
    settings = get_settings()
    return SharesService(
        config_repo=DuckDBSharesConfigRepo(conn),
        holding_repo=DuckDBShareholdingRepo(conn),
        bridge=bridge,
        uow=DuckDBUnitOfWork(conn),
        default_authorized_shares=settings.default_authorized_shares,
        default_par_value=settings.default_par_value,
    )


def get_cap_table_service(
    conn: duckdb.DuckDBPyConnection = Depends(get_db),  # noqa: B008
    shares_service: SharesService = Depends(get_shares_service),  # noqa: B008
    bridge: ValuationBridge = Depends(get_valuation_bridge),  # noqa: B008
) -> CapTableService:
    return CapTableService(
        shares_service=shares_service,
        holding_repo=DuckDBShareholdingRepo(conn),
        bridge=bridge,
    )


def get_equity_service(
    conn: duckdb.DuckDBPyConnection = Depends(get_db),  # noqa: B008
    shares_service: SharesService = Depends(get_shares_service),  # noqa: B008
    bridge: ValuationBridge = Depends(get_valuation_bridge),  # noqa: B008
) -> EquityService:
    return EquityService(
        shares_service=shares_service,
        config_repo=DuckDBSharesConfigRepo(conn),
        holding_repo=DuckDBShareholdingRepo(conn),
        transaction_repo=DuckDBShareTransactionRepo(conn),
        proposal_repo=DuckDBIssuanceProposalRepo(conn),
        snapshot_repo=DuckDBValuationSnapshotRepo(conn),
        bridge=bridge,
        uow=DuckDBUnitOfWork(conn),
    )
