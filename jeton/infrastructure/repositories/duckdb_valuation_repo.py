from __future__ import annotations

from decimal import Decimal

import duckdb

from jeton.domain.equity.entities import ValuationSnapshot
from jeton.domain.equity.shares import RoundPricing
from jeton.domain.valuation.entities import AssetBookEntry, ValuationInputs

_SNAPSHOT_COLUMNS = (
    "id, pre_money_valuation, investment_amount, share_price, shares_to_issue, "
    "issued_shares_after, round_name, investor_name, notes, created_at"
)


def _dec(value: object) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


class DuckDBValuationSourceRepo:
    """Reads the accounting, IP and infrastructure tables. Only the needed columns."""

    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn

    def load_inputs(self) -> ValuationInputs:
        assets = self._conn.execute(
            """SELECT acquisition_cost, accumulated_depreciation
               FROM assets_accounting
               WHERE status != 'disposed'"""
        ).fetchall()
        liabilities = self._conn.execute(
            """SELECT COALESCE(SUM(outstanding_amount), 0)
               FROM liabilities
               WHERE status IN ('ACTIVE', 'DEFERRED')"""
        ).fetchone()
        ip = self._conn.execute(
            """SELECT valuation_estimate
               FROM intellectual_property
               WHERE status IN ('active', 'scaling', 'maintenance')"""
        ).fetchall()
        infra = self._conn.execute(
            "SELECT replacement_cost FROM infrastructure WHERE status = 'active'"
        ).fetchall()

        return ValuationInputs(
            assets=tuple(AssetBookEntry(_dec(r[0]), _dec(r[1])) for r in assets),
            total_liabilities=_dec(liabilities[0]) if liabilities else Decimal("0"),
            ip_valuations=tuple(_dec(r[0]) for r in ip),
            infrastructure_costs=tuple(_dec(r[0]) for r in infra),
        )


class DuckDBValuationSnapshotRepo:
    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn

    def latest(self) -> ValuationSnapshot | None:
        row = self._conn.execute(
            f"""SELECT {_SNAPSHOT_COLUMNS} FROM valuation_snapshots
                ORDER BY created_at DESC, id DESC LIMIT 1"""  # noqa: S608
        ).fetchone()
        if row is None:
            return None
        return self._hydrate(row)

    def create(
        self,
        pre_money_valuation: Decimal,
        investment_amount: Decimal,
        pricing: RoundPricing,
        round_name: str | None = None,
        investor_name: str | None = None,
        notes: str | None = None,
    ) -> ValuationSnapshot:
        row = self._conn.execute(
            f"""INSERT INTO valuation_snapshots (
                    pre_money_valuation, investment_amount, post_money_valuation,
                    share_price, shares_to_issue, issued_shares_after,
                    round_name, investor_name, notes
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                RETURNING {_SNAPSHOT_COLUMNS}""",  # noqa: S608
            [
                pre_money_valuation,
                investment_amount,
                pricing.post_money_valuation,
                pricing.share_price,
                pricing.shares_to_issue,
                pricing.issued_shares_after,
                round_name,
                investor_name,
                notes,
            ],
        ).fetchone()
        if row is None:
            raise RuntimeError("INSERT ... RETURNING valuation_snapshots returned no row")
        return self._hydrate(row)

    def _hydrate(self, row: tuple) -> ValuationSnapshot:  # type: ignore[type-arg]
        return ValuationSnapshot(
            id=int(row[0]),
            pre_money_valuation=_dec(row[1]),
            investment_amount=_dec(row[2]),
            share_price=_dec(row[3]),
            shares_to_issue=int(row[4]),
            issued_shares_after=int(row[5]),
            round_name=str(row[6]) if row[6] else None,
            investor_name=str(row[7]) if row[7] else None,
            notes=str(row[8]) if row[8] else None,
            created_at=row[9],
        )
