from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Protocol

from .entities import (
    IssuanceProposal,
    NewShareholding,
    SharesConfig,
    SharesConfigPatch,
    ShareTransaction,
    Shareholding,
    ValuationSnapshot,
)
from .enums import ApprovalStatus, EquityType, TransactionType
from .shares import RoundPricing


class SharesConfigRepository(Protocol):
    def get(self) -> SharesConfig | None: ...
    def create(self, authorized_shares: int, par_value: Decimal, description: str) -> SharesConfig: ...
    def update(self, patch: SharesConfigPatch) -> SharesConfig: ...
    def adjust_issued(self, delta: int) -> None: ...


class ShareholdingRepository(Protocol):
    def find_by_shareholder(self, shareholder_id: str) -> Shareholding | None: ...
    def list_active(self, holder_type: str | None = None) -> list[Shareholding]: ...
    def total_allocated(self) -> int: ...
    def credit(self, holder: NewShareholding, shares: int) -> Shareholding: ...
    def debit(self, shareholder_id: str, shares: int) -> Shareholding: ...


class ShareTransactionRepository(Protocol):
    def append(
        self,
        transaction_type: TransactionType,
        shares_amount: int,
        from_shareholder_id: str | None = None,
        to_shareholder_id: str | None = None,
        price_per_share: Decimal | None = None,
        equity_type: EquityType | None = None,
        reason: str | None = None,
    ) -> ShareTransaction: ...
    def list_recent(self, limit: int) -> list[ShareTransaction]: ...


class IssuanceProposalRepository(Protocol):
    def get(self, proposal_id: int) -> IssuanceProposal | None: ...
    def list_by_status(self, status: ApprovalStatus) -> list[IssuanceProposal]: ...
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
    ) -> IssuanceProposal: ...
    def mark(self, proposal_id: int, status: ApprovalStatus) -> IssuanceProposal: ...


class ValuationSnapshotRepository(Protocol):
    def latest(self) -> ValuationSnapshot | None: ...
    def create(
        self,
        pre_money_valuation: Decimal,
        investment_amount: Decimal,
        pricing: RoundPricing,
        round_name: str | None = None,
        investor_name: str | None = None,
        notes: str | None = None,
    ) -> ValuationSnapshot: ...
