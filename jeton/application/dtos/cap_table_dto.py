from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from jeton.domain.equity.entities import Shareholding
from jeton.domain.equity.shares import ownership_percentage, share_value
from jeton.domain.equity.vesting import vested_shares


class CapTableRowDTO(BaseModel):
    id: int
    shareholder_id: str
    shareholder_name: str | None
    shareholder_email: str | None
    holder_type: str
    equity_type: str
    status: str
    shares_owned: int
    vested_shares: int
    unvested_shares: int
    ownership_percentage: str
    vested_ownership_percentage: str
    share_value: str
    investment_total: str
    acquisition_date: str | None
    vesting_start_date: str | None
    vesting_end_date: str | None
    vesting_percentage: str

    @classmethod
    def from_domain(
        cls,
        holding: Shareholding,
        authorized_shares: int,
        price: Decimal,
        as_of: date,
    ) -> CapTableRowDTO:
        vested = vested_shares(holding, as_of)
        return cls(
            id=holding.id,
            shareholder_id=holding.shareholder_id,
            shareholder_name=holding.shareholder_name,
            shareholder_email=holding.shareholder_email,
            holder_type=holding.holder_type,
            equity_type=holding.equity_type.value,
            status=holding.status.value,
            shares_owned=holding.shares_owned,
            vested_shares=vested,
            unvested_shares=holding.shares_owned - vested,
            ownership_percentage=str(ownership_percentage(holding.shares_owned, authorized_shares)),
            vested_ownership_percentage=str(ownership_percentage(vested, authorized_shares)),
            share_value=str(share_value(holding.shares_owned, price)),
            investment_total=str(holding.investment_total),
            acquisition_date=holding.acquisition_date.isoformat() if holding.acquisition_date else None,
            vesting_start_date=holding.vesting_start_date.isoformat() if holding.vesting_start_date else None,
            vesting_end_date=holding.vesting_end_date.isoformat() if holding.vesting_end_date else None,
            vesting_percentage=str(holding.vesting_percentage),
        )


class CapTableSummaryDTO(BaseModel):
    total_shareholders: int
    total_shares_allocated: int
    total_vested_shares: int
    total_investment: str
    total_value: str
    price_per_share: str
    authorized_shares: int
    issued_shares: int


class CapTableDTO(BaseModel):
    data: list[CapTableRowDTO]
    summary: CapTableSummaryDTO
