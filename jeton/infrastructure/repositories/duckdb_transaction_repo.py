from __future__ import annotations

from decimal import Decimal

import duckdb

from jeton.domain.equity.entities import ShareTransaction
from jeton.domain.equity.enums import EquityType, TransactionType

_COLUMNS = (
    "id, transaction_type, from_shareholder_id, to_shareholder_id, shares_amount, "
    "price_per_share, total_value, equity_type, reason, created_at"
)


class DuckDBShareTransactionRepo:
    """Append-only: exposes no update or delete."""

    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn

    def append(
        self,
        transaction_type: TransactionType,
        shares_amount: int,
        from_shareholder_id: str | None = None,
        to_shareholder_id: str | None = None,
        price_per_share: Decimal | None = None,
        equity_type: EquityType | None = None,
        reason: str | None = None,
    ) -> ShareTransaction:
        total_value = Decimal(shares_amount) * price_per_share if price_per_share is not None else None
        row = self._conn.execute(
            f"""INSERT INTO share_transactions (
                    transaction_type, from_shareholder_id, to_shareholder_id,
                    shares_amount, price_per_share, total_value, equity_type, reason
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                RETURNING {_COLUMNS}""",  # noqa: S608
            [
                transaction_type.value,
                from_shareholder_id,
                to_shareholder_id,
                shares_amount,
                price_per_share,
                total_value,
                equity_type.value if equity_type else None,
                reason,
            ],
        ).fetchone()
        if row is None:
            raise RuntimeError("INSERT ... RETURNING share_transactions returned no row")
        return self._hydrate(row)

    def list_recent(self, limit: int) -> list[ShareTransaction]:
        rows = self._conn.execute(
            f"SELECT {_COLUMNS} FROM share_transactions ORDER BY id DESC LIMIT ?",  # noqa: S608
            [limit],
        ).fetchall()
        return [self._hydrate(r) for r in rows]

    def _hydrate(self, row: tuple) -> ShareTransaction:  # type: ignore[type-arg]
        return ShareTransaction(
            id=int(row[0]),
            transaction_type=TransactionType(str(row[1])),
            from_shareholder_id=str(row[2]) if row[2] is not None else None,
            to_shareholder_id=str(row[3]) if row[3] is not None else None,
            shares_amount=int(row[4]),
            price_per_share=Decimal(str(row[5])) if row[5] is not None else None,
            total_value=Decimal(str(row[6])) if row[6] is not None else None,
            equity_type=EquityType(str(row[7])) if row[7] else None,
            reason=str(row[8]) if row[8] else None,
            created_at=row[9],
        )
