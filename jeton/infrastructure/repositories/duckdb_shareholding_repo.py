from __future__ import annotations

from datetime import date
from decimal import Decimal

import duckdb

from jeton.domain.equity.entities import NewShareholding, Shareholding
from jeton.domain.equity.enums import EquityType, HoldingStatus
from jeton.domain.equity.errors import NotFoundError

_COLUMNS = (
    "id, shareholder_id, shareholder_name, shareholder_email, holder_type, "
    "shares_owned, equity_type, vesting_start_date, vesting_end_date, "
    "vesting_percentage, acquisition_date, acquisition_price, investment_total, "
    "status, created_at, updated_at"
)


class DuckDBShareholdingRepo:
    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn

    def find_by_shareholder(self, shareholder_id: str) -> Shareholding | None:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM shareholdings WHERE shareholder_id = ?",  # noqa: S608
            [shareholder_id],
        ).fetchone()
        if row is None:
            return None
        return self._hydrate(row)

    def list_active(self, holder_type: str | None = None) -> list[Shareholding]:
        rows = self._conn.execute(
            f"""SELECT {_COLUMNS} FROM shareholdings
                WHERE status = 'active'
                  AND (CAST(? AS VARCHAR) IS NULL OR holder_type = ?)
                ORDER BY shares_owned DESC, id""",  # noqa: S608
            [holder_type, holder_type],
        ).fetchall()
        return [self._hydrate(r) for r in rows]

    def total_allocated(self) -> int:
        row = self._conn.execute(
            "SELECT COALESCE(SUM(shares_owned), 0) FROM shareholdings WHERE status = 'active'"
        ).fetchone()
        return int(row[0]) if row else 0

    def credit(self, holder: NewShareholding, shares: int) -> Shareholding:
        """Adds shares to an existing holding (reactivating it) or creates a new one."""
        investment = Decimal(shares) * holder.acquisition_price if holder.acquisition_price else Decimal("0")
        if self.find_by_shareholder(holder.shareholder_id) is not None:
            self._conn.execute(
                """UPDATE shareholdings
                   SET shares_owned = shares_owned + ?,
                       investment_total = investment_total + ?,
                       status = 'active',
                       updated_at = current_timestamp
                   WHERE shareholder_id = ?""",
                [shares, investment, holder.shareholder_id],
            )
        else:
            self._conn.execute(
                """INSERT INTO shareholdings (
                       shareholder_id, shareholder_name, shareholder_email, holder_type,
                       shares_owned, equity_type, vesting_start_date, vesting_end_date,
                       vesting_percentage, acquisition_price, investment_total
                   ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                [
                    holder.shareholder_id,
                    holder.shareholder_name,
                    holder.shareholder_email,
                    holder.holder_type,
                    shares,
                    holder.equity_type.value,
                    holder.vesting_start_date,
                    holder.vesting_end_date,
                    holder.vesting_percentage,
                    holder.acquisition_price,
                    investment,
                ],
            )
        return self._require(holder.shareholder_id)

    def debit(self, shareholder_id: str, shares: int) -> Shareholding:
        """shares_owned -= shares. The table CHECK rejects a negative balance."""
        self._conn.execute(
            """UPDATE shareholdings
               SET shares_owned = shares_owned - ?, updated_at = current_timestamp
               WHERE shareholder_id = ?""",
            [shares, shareholder_id],
        )
        return self._require(shareholder_id)

    def _require(self, shareholder_id: str) -> Shareholding:
        holding = self.find_by_shareholder(shareholder_id)
        if holding is None:
            raise NotFoundError(f"Shareholder {shareholder_id} not found")
        return holding

    def _hydrate(self, row: tuple) -> Shareholding:  # type: ignore[type-arg]
        """Columns: id(0), shareholder_id(1), shareholder_name(2),
        shareholder_email(3), holder_type(4), shares_owned(5), equity_type(6),
        vesting_start_date(7), vesting_end_date(8), vesting_percentage(9),
        acquisition_date(10), acquisition_price(11), investment_total(12),
        status(13), created_at(14), updated_at(15)"""
        return Shareholding(
            id=int(row[0]),
            shareholder_id=str(row[1]),
            shareholder_name=str(row[2]) if row[2] else None,
            shareholder_email=str(row[3]) if row[3] else None,
            holder_type=str(row[4]),
            shares_owned=int(row[5]),
            equity_type=EquityType(str(row[6])) if row[6] else EquityType.PURCHASED,
            vesting_start_date=row[7] if isinstance(row[7], date) else None,
            vesting_end_date=row[8] if isinstance(row[8], date) else None,
            vesting_percentage=Decimal(str(row[9])) if row[9] is not None else Decimal("100"),
            acquisition_date=row[10] if isinstance(row[10], date) else None,
            acquisition_price=Decimal(str(row[11])) if row[11] is not None else None,
            investment_total=Decimal(str(row[12])) if row[12] is not None else Decimal("0"),
            status=HoldingStatus(str(row[13])),
            created_at=row[14],
            updated_at=row[15],
        )
