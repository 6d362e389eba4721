from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from .enums import ApprovalStatus, EquityType, HoldingStatus, TransactionType


@dataclass(frozen=True)
class SharesConfig:
    """Company-wide share ceiling. Single row; issued never exceeds authorized."""

    id: int
    authorized_shares: int
    issued_shares: int
    par_value: Decimal
    class_type: str = "common"
    status: str = "active"
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.authorized_shares <= 0:
            raise ValueError("authorized_shares must be positive")
        if self.issued_shares < 0:
            raise ValueError("issued_shares cannot be negative")
        if self.issued_shares > self.authorized_shares:
            raise ValueError("issued_shares cannot exceed authorized_shares")

    @property
    def unissued_shares(self) -> int:
        return self.authorized_shares - self.issued_shares


@dataclass(frozen=True)
class SharesConfigPatch:
    """Typed partial update. None means "leave as is"."""

    authorized_shares: int | None = None
    class_type: str | None = None
    par_value: Decimal | None = None

    def is_empty(self) -> bool:
        return self.authorized_shares is None and self.class_type is None and self.par_value is None


@dataclass(frozen=True)
class Shareholding:
    id: int
    shareholder_id: str
    shares_owned: int
    equity_type: EquityType
    status: HoldingStatus = HoldingStatus.ACTIVE
    shareholder_name: str | None = None
    shareholder_email: str | None = None
    holder_type: str = "investor"
    vesting_start_date: date | None = None
    vesting_end_date: date | None = None
    vesting_percentage: Decimal = Decimal("100")
    acquisition_date: date | None = None
    acquisition_price: Decimal | None = None
    investment_total: Decimal = Decimal("0")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.shares_owned < 0:
            raise ValueError("shares_owned cannot be negative")
        if not Decimal("0") <= self.vesting_percentage <= Decimal("100"):
            raise ValueError("vesting_percentage must be between 0 and 100")

    @property
    def is_active(self) -> bool:
        return self.status == HoldingStatus.ACTIVE


@dataclass(frozen=True)
class NewShareholding:
    """Attributes for a holding that does not exist yet. Id is assigned by the repo."""

    shareholder_id: str
    equity_type: EquityType
    shareholder_name: str | None = None
    shareholder_email: str | None = None
    holder_type: str = "investor"
    vesting_start_date: date | None = None
    vesting_end_date: date | None = None
    vesting_percentage: Decimal = Decimal("100")
    acquisition_price: Decimal | None = None


@dataclass(frozen=True)
class ShareTransaction:
    """Audit trail row. Append-only: created once per operation, never changed."""

    id: int
    transaction_type: TransactionType
    shares_amount: int
    from_shareholder_id: str | None = None
    to_shareholder_id: str | None = None
    price_per_share: Decimal | None = None
    total_value: Decimal | None = None
    equity_type: EquityType | None = None
    reason: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class IssuanceProposal:
    """Pending issuance awaiting approval. Records the dilution it will cause."""

    id: int
    shares_issued: int
    equity_type: EquityType
    approval_status: ApprovalStatus
    previous_issued_shares: int
    dilution_percentage: Decimal
    recipient_id: str | None = None
    recipient_name: str | None = None
    recipient_type: str = "investor"
    issued_at_price: Decimal | None = None
    vesting_start_date: date | None = None
    vesting_end_date: date | None = None
    vesting_percentage: Decimal = Decimal("100")
    reason: str | None = None
    created_at: datetime | None = None
    decided_at: datetime | None = None


@dataclass(frozen=True)
class ValuationSnapshot:
    """Priced funding round. Immutable once created; post-money and price are derived."""

    id: int
    pre_money_valuation: Decimal
    investment_amount: Decimal
    share_price: Decimal
    shares_to_issue: int
    issued_shares_after: int
    round_name: str | None = None
    investor_name: str | None = None
    notes: str | None = None
    created_at: datetime | None = None

    @property
    def post_money_valuation(self) -> Decimal:
        return self.pre_money_valuation + self.investment_amount
