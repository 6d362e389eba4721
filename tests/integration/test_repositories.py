# tests/integration/test_repositories.py
from decimal import Decimal

import duckdb
import pytest

from jeton.domain.equity.entities import SharesConfigPatch
from jeton.domain.equity.enums import EquityType, TransactionType
from jeton.domain.equity.shares import price_round
from jeton.infrastructure.repositories.duckdb_issuance_repo import DuckDBIssuanceProposalRepo
from jeton.infrastructure.repositories.duckdb_shares_config_repo import DuckDBSharesConfigRepo
from jeton.infrastructure.repositories.duckdb_transaction_repo import DuckDBShareTransactionRepo
from jeton.infrastructure.repositories.duckdb_valuation_repo import DuckDBValuationSnapshotRepo


class _EmptyResult:
    def fetchone(self) -> None:
        return None


class _SilentConnection:
    """Every statement succeeds and returns no row."""

    def execute(self, *args: object, **kwargs: object) -> _EmptyResult:
        return _EmptyResult()


def test_insert_without_returned_row_raises() -> None:
    conn = _SilentConnection()
    with pytest.raises(RuntimeError, match="share_transactions"):
        DuckDBShareTransactionRepo(conn).append(TransactionType.ISSUANCE, 10)  # type: ignore[arg-type]
    with pytest.raises(RuntimeError, match="shares_config"):
        DuckDBSharesConfigRepo(conn).create(100, Decimal("1"), "x")  # type: ignore[arg-type]
    with pytest.raises(RuntimeError, match="share_issuances"):
        DuckDBIssuanceProposalRepo(conn).create(10, EquityType.GRANTED, 0, Decimal("100"))  # type: ignore[arg-type]
    with pytest.raises(RuntimeError, match="valuation_snapshots"):
        DuckDBValuationSnapshotRepo(conn).create(  # type: ignore[arg-type]
            Decimal("10"), Decimal("5"), price_round(Decimal("10"), Decimal("5"), 1)
        )


def test_update_of_missing_config_raises(test_db: duckdb.DuckDBPyConnection) -> None:
    with pytest.raises(RuntimeError, match="shares_config"):
        DuckDBSharesConfigRepo(test_db).update(SharesConfigPatch(authorized_shares=10))


def test_update_keeps_absent_fields(test_db: duckdb.DuckDBPyConnection) -> None:
    repo = DuckDBSharesConfigRepo(test_db)
    repo.create(100, Decimal("1"), "x")
    assert repo.update(SharesConfigPatch(class_type="preferred")).class_type == "preferred"
    assert repo.update(SharesConfigPatch(par_value=Decimal("2"))).class_type == "preferred"
