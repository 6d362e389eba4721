from __future__ import annotations

from datetime import date
from decimal import Decimal

import duckdb

from jeton.domain.equity.entities import IssuanceProposal
from jeton.domain.equity.enums import ApprovalStatus, EquityType
from jeton.domain.equity.errors import NotFoundError

_COLUMNS = (
    "id, shares_issued, equity_type, approval_status, previous_issued_shares, "
    "dilution_percentage, recipient_id, recipient_name, recipient_type, "
    "issued_at_price, vesting_start_date, vesting_end_date, vesting_percentage, "
    "reason, created_at, decided_at"
)


class DuckDBIssuanceProposalRepo:
    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn

    def get(self, proposal_id: int) -> IssuanceProposal | None:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM share_issuances WHERE id = ?",  # noqa: S608
            [proposal_id],
        ).fetchone()
        if row is None:
            return None
        return self._hydrate(row)

    def list_by_status(self, status: ApprovalStatus) -> list[IssuanceProposal]:
        rows = self._conn.execute(
            f"""SELECT {_COLUMNS} FROM share_issuances
                WHERE approval_status = ?
                ORDER BY created_at DESC, id DESC""",  # noqa: S608
            [status.value],
        ).fetchall()
        return [self._hydrate(r) for r in rows]

    def create(
        self,
        shares_issued: int,
        equity_type: EquityType,
        previous_issued_shares: int,
        dilution_percentage: Decimal,
        recipient_id: str | None = None,
        recipient_name: str | None = None,
        recipient_type: str = "investor",
        issued_at_price: Decimal | None = None,
        vesting_start_date: date | None = None,
        vesting_end_date: date | None = None,
        vesting_percentage: Decimal = Decimal("100"),
        reason: str | None = None,
    ) -> IssuanceProposal:
        row = self._conn.execute(
            f"""INSERT INTO share_issuances (
                    shares_issued, equity_type, previous_issued_shares, dilution_percentage,
                    recipient_id, recipient_name, recipient_type, issued_at_price,
                    vesting_start_date, vesting_end_date, vesting_percentage, reason
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                RETURNING {_COLUMNS}""",  # noqa: S608
            [
                shares_issued,
                equity_type.value,
                previous_issued_shares,
                dilution_percentage,
                recipient_id,
                recipient_name,
                recipient_type,
                issued_at_price,
                vesting_start_date,
                vesting_end_date,
                vesting_percentage,
                reason,
            ],
        ).fetchone()
        if row is None:
            raise RuntimeError("INSERT ... RETURNING share_issuances returned no row")
        return self._hydrate(row)

    def mark(self, proposal_id: int, status: ApprovalStatus) -> IssuanceProposal:
        self._conn.execute(
            """UPDATE share_issuances
               SET approval_status = ?, decided_at = current_timestamp
               WHERE id = ?""",
            [status.value, proposal_id],
        )
        proposal = self.get(proposal_id)
        if proposal is None:
            raise NotFoundError(f"Issuance {proposal_id} not found")
        return proposal

    def _hydrate(self, row: tuple) -> IssuanceProposal:  # type: ignore[type-arg]
        """Columns: id(0), shares_issued(1), equity_type(2), approval_status(3),
        previous_issued_shares(4), dilution_percentage(5), recipient_id(6),
        recipient_name(7), recipient_type(8), issued_at_price(9),
        vesting_start_date(10), vesting_end_date(11), vesting_percentage(12),
        reason(13), created_at(14), decided_at(15)"""
        return IssuanceProposal(
            id=int(row[0]),
            shares_issued=int(row[1]),
            equity_type=EquityType(str(row[2])),
            approval_status=ApprovalStatus(str(row[3])),
            previous_issued_shares=int(row[4]),
            dilution_percentage=Decimal(str(row[5])),
            recipient_id=str(row[6]) if row[6] is not None else None,
            recipient_name=str(row[7]) if row[7] else None,
            recipient_type=str(row[8]),
            issued_at_price=Decimal(str(row[9])) if row[9] is not None else None,
            vesting_start_date=row[10] if isinstance(row[10], date) else None,
            vesting_end_date=row[11] if isinstance(row[11], date) else None,
            vesting_percentage=Decimal(str(row[12])),
            reason=str(row[13]) if row[13] else None,
            created_at=row[14],
            decided_at=row[15],
        )
