from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from jeton.domain.equity.entities import (
    IssuanceProposal,
    NewShareholding,
    ShareTransaction,
    Shareholding,
    ValuationSnapshot,
)
from jeton.domain.equity.enums import EquityType
from jeton.domain.equity.vesting import VestingProgress

from .shares_dto import SharesConfigDTO

# ---------- requests ----------


class HolderFields(BaseModel):
    """Attributes shared by every request that may create a shareholding."""

    shareholder_name: str | None = None
    shareholder_email: str | None = None
    holder_type: str = "investor"
    equity_type: EquityType = EquityType.GRANTED
    vesting_start_date: date | None = None
    vesting_end_date: date | None = None
    vesting_percentage: Decimal = Decimal("100")

    def to_holder(self, shareholder_id: str, acquisition_price: Decimal | None) -> NewShareholding:
        return NewShareholding(
            shareholder_id=shareholder_id,
            equity_type=self.equity_type,
            shareholder_name=self.shareholder_name,
            shareholder_email=self.shareholder_email,
            holder_type=self.holder_type,
            vesting_start_date=self.vesting_start_date,
            vesting_end_date=self.vesting_end_date,
            vesting_percentage=self.vesting_percentage,
            acquisition_price=acquisition_price,
        )


class IssueSharesRequest(HolderFields):
    to_shareholder_id: str
    shares_amount: int
    purchase_price: Decimal | None = None
    reason: str | None = None


class AddShareholderRequest(HolderFields):
    shareholder_id: str
    shares_owned: int
    acquisition_price: Decimal | None = None
    equity_type: EquityType = EquityType.PURCHASED


class ProposeIssuanceRequest(HolderFields):
    shares_issued: int
    recipient_id: str | None = None
    issued_at_price: Decimal | None = None
    reason: str | None = None


class TransferRequest(BaseModel):
    from_shareholder_id: str
    to_shareholder_id: str
    shares_amount: int
    price_per_share: Decimal | None = None
    to_shareholder_name: str | None = None
    to_shareholder_email: str | None = None
    reason: str | None = None


class BuybackRequest(BaseModel):
    shareholder_id: str
    shares_amount: int
    price_per_share: Decimal | None = None
    reason: str | None = None


class ValuationRoundRequest(BaseModel):
    pre_money_valuation: Decimal
    investment_amount: Decimal
    round_name: str | None = None
    investor_name: str | None = None
    notes: str | None = None


# ---------- responses ----------


class ShareholdingDTO(BaseModel):
    id: int
    shareholder_id: str
    shareholder_name: str | None
    shareholder_email: str | None
    holder_type: str
    shares_owned: int
    equity_type: str
    status: str
    vesting_start_date: str | None
    vesting_end_date: str | None
    vesting_percentage: str
    acquisition_date: str | None
    acquisition_price: str | None
    investment_total: str

    @classmethod
    def from_domain(cls, h: Shareholding) -> ShareholdingDTO:
        return cls(
            id=h.id,
            shareholder_id=h.shareholder_id,
            shareholder_name=h.shareholder_name,
            shareholder_email=h.shareholder_email,
            holder_type=h.holder_type,
            shares_owned=h.shares_owned,
            equity_type=h.equity_type.value,
            status=h.status.value,
            vesting_start_date=h.vesting_start_date.isoformat() if h.vesting_start_date else None,
            vesting_end_date=h.vesting_end_date.isoformat() if h.vesting_end_date else None,
            vesting_percentage=str(h.vesting_percentage),
            acquisition_date=h.acquisition_date.isoformat() if h.acquisition_date else None,
            acquisition_price=str(h.acquisition_price) if h.acquisition_price is not None else None,
            investment_total=str(h.investment_total),
        )


class TransactionDTO(BaseModel):
    id: int
    transaction_type: str
    from_shareholder_id: str | None
    to_shareholder_id: str | None
    shares_amount: int
    price_per_share: str | None
    total_value: str | None
    equity_type: str | None
    reason: str | None
    created_at: str | None

    @classmethod
    def from_domain(cls, t: ShareTransaction) -> TransactionDTO:
        return cls(
            id=t.id,
            transaction_type=t.transaction_type.value,
            from_shareholder_id=t.from_shareholder_id,
            to_shareholder_id=t.to_shareholder_id,
            shares_amount=t.shares_amount,
            price_per_share=str(t.price_per_share) if t.price_per_share is not None else None,
            total_value=str(t.total_value) if t.total_value is not None else None,
            equity_type=t.equity_type.value if t.equity_type else None,
            reason=t.reason,
            created_at=t.created_at.isoformat() if t.created_at else None,
        )


class IssuanceResultDTO(BaseModel):
    shareholding: ShareholdingDTO | None
    config: SharesConfigDTO
    transaction: TransactionDTO
    dilution_percentage: str
    message: str


class TransferResultDTO(BaseModel):
    message: str
    from_new_balance: int
    to_new_balance: int
    shares_transferred: int
    transaction: TransactionDTO


class BuybackResultDTO(BaseModel):
    message: str
    new_balance: int
    total_value: str
    config: SharesConfigDTO
    transaction: TransactionDTO


class ProposalDTO(BaseModel):
    id: int
    shares_issued: int
    equity_type: str
    approval_status: str
    previous_issued_shares: int
    dilution_percentage: str
    recipient_id: str | None
    recipient_name: str | None
    recipient_type: str
    issued_at_price: str | None
    vesting_start_date: str | None
    vesting_end_date: str | None
    vesting_percentage: str
    reason: str | None
    created_at: str | None
    decided_at: str | None

    @classmethod
    def from_domain(cls, p: IssuanceProposal) -> ProposalDTO:
        return cls(
            id=p.id,
            shares_issued=p.shares_issued,
            equity_type=p.equity_type.value,
            approval_status=p.approval_status.value,
            previous_issued_shares=p.previous_issued_shares,
            dilution_percentage=str(p.dilution_percentage),
            recipient_id=p.recipient_id,
            recipient_name=p.recipient_name,
            recipient_type=p.recipient_type,
            issued_at_price=str(p.issued_at_price) if p.issued_at_price is not None else None,
            vesting_start_date=p.vesting_start_date.isoformat() if p.vesting_start_date else None,
            vesting_end_date=p.vesting_end_date.isoformat() if p.vesting_end_date else None,
            vesting_percentage=str(p.vesting_percentage),
            reason=p.reason,
            created_at=p.created_at.isoformat() if p.created_at else None,
            decided_at=p.decided_at.isoformat() if p.decided_at else None,
        )


class ProposalResultDTO(BaseModel):
    issuance: ProposalDTO
    dilution_warning: str
    new_issued_total: int
    requires_confirmation: bool = True


class VestingStatusDTO(BaseModel):
    shareholder_id: str
    total_shares: int
    vested_shares: int
    unvested_shares: int
    equity_type: str
    vesting_start_date: str | None
    vesting_end_date: str | None
    vesting_percentage: str
    is_fully_vested: bool
    progress_percentage: int
    time_elapsed_days: int
    total_vesting_days: int
    remaining_days: int
    status: str

    @classmethod
    def from_domain(cls, shareholder_id: str, v: VestingProgress) -> VestingStatusDTO:
        return cls(
            shareholder_id=shareholder_id,
            total_shares=v.total_shares,
            vested_shares=v.vested_shares,
            unvested_shares=v.unvested_shares,
            equity_type=v.equity_type.value,
            vesting_start_date=v.vesting_start_date.isoformat() if v.vesting_start_date else None,
            vesting_end_date=v.vesting_end_date.isoformat() if v.vesting_end_date else None,
            vesting_percentage=str(v.vesting_percentage),
            is_fully_vested=v.is_fully_vested,
            progress_percentage=v.progress_percentage,
            time_elapsed_days=v.time_elapsed_days,
            total_vesting_days=v.total_vesting_days,
            remaining_days=v.remaining_days,
            status=v.status.value,
        )


class ValuationSnapshotDTO(BaseModel):
    id: int
    pre_money_valuation: str
    investment_amount: str
    post_money_valuation: str
    share_price: str
    shares_to_issue: int
    issued_shares_after: int
    round_name: str | None
    investor_name: str | None
    notes: str | None
    created_at: str | None

    @classmethod
    def from_domain(cls, s: ValuationSnapshot) -> ValuationSnapshotDTO:
        return cls(
            id=s.id,
            pre_money_valuation=str(s.pre_money_valuation),
            investment_amount=str(s.investment_amount),
            post_money_valuation=str(s.post_money_valuation),
            share_price=str(s.share_price),
            shares_to_issue=s.shares_to_issue,
            issued_shares_after=s.issued_shares_after,
            round_name=s.round_name,
            investor_name=s.investor_name,
            notes=s.notes,
            created_at=s.created_at.isoformat() if s.created_at else None,
        )


class ValuationStatusDTO(BaseModel):
    latest_round: ValuationSnapshotDTO | None
    shares_config: SharesConfigDTO
