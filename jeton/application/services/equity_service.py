# jeton/application/services/equity_service.py
#
# Mutating equity operations: issuance, transfer, buyback, allocation,
# issuance proposals and priced valuation rounds.
#
# Design decisions:
#   - Every operation validates against a fresh read BEFORE opening the unit
#     of work. A validation failure therefore never begins a transaction.
#   - All writes of one operation (config, holdings, log row, proposal status)
#     run inside one DuckDBUnitOfWork. Any exception inside the block rolls
#     the whole operation back and propagates unchanged to the caller.
#   - The schema CHECK constraints (shares_owned >= 0, issued <= authorized)
#     are the last line of defence when two requests race between validation
#     and write; the losing request fails inside the unit of work and rolls
#     back.
#   - The transaction log row is written in the same unit of work as the
#     balance change, so the audit trail never drifts from the balances.
#
# Invariants (after every committed operation):
#   - shares_config.issued_shares <= shares_config.authorized_shares
#   - sum(shares_owned of active holdings) <= issued_shares
#   - transfers leave sum(shares_owned) unchanged
from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal

from jeton.domain.equity.entities import (
    IssuanceProposal,
    NewShareholding,
    SharesConfig,
    ShareTransaction,
    Shareholding,
)
from jeton.domain.equity.enums import ApprovalStatus, EquityType, TransactionType
from jeton.domain.equity.errors import ConflictError, NotFoundError, ValidationError
from jeton.domain.equity.repository import (
    IssuanceProposalRepository,
    SharesConfigRepository,
    ShareholdingRepository,
    ShareTransactionRepository,
    ValuationSnapshotRepository,
)
from jeton.domain.equity.shares import PRICE_QUANTUM, dilution_percentage, price_round
from jeton.domain.equity.vesting import vesting_progress
from jeton.infrastructure.unit_of_work import DuckDBUnitOfWork

from ..dtos.equity_dto import (
    BuybackResultDTO,
    IssuanceResultDTO,
    ProposalDTO,
    ProposalResultDTO,
    ShareholdingDTO,
    TransactionDTO,
    TransferResultDTO,
    ValuationSnapshotDTO,
    ValuationStatusDTO,
    VestingStatusDTO,
)
from .shares_service import SharesService
from .valuation_bridge import ValuationBridge

_HUNDRED = Decimal("100")


class EquityService:
    """Imperative shell: validates, then writes through repos inside a unit of work."""

    def __init__(
        self,
        shares_service: SharesService,
        config_repo: SharesConfigRepository,
        holding_repo: ShareholdingRepository,
        transaction_repo: ShareTransactionRepository,
        proposal_repo: IssuanceProposalRepository,
        snapshot_repo: ValuationSnapshotRepository,
        bridge: ValuationBridge,
        uow: DuckDBUnitOfWork,
    ) -> None:
        self._shares_service = shares_service
        self._config_repo = config_repo
        self._holding_repo = holding_repo
        self._transaction_repo = transaction_repo
        self._proposal_repo = proposal_repo
        self._snapshot_repo = snapshot_repo
        self._bridge = bridge
        self._uow = uow

    # ---------- issuance ----------

    def issue_shares(
        self,
        holder: NewShareholding,
        shares_amount: int,
        reason: str | None = None,
        today: date | None = None,
    ) -> IssuanceResultDTO:
        holder = _validate_holder(holder, today or date.today())
        config = self._shares_service.get_configuration()
        _check_capacity(shares_amount, config)

        with self._uow:
            holding, tx = self._execute_issuance(holder, shares_amount, reason)

        dilution = dilution_percentage(shares_amount, config.issued_shares)
        return IssuanceResultDTO(
            shareholding=ShareholdingDTO.from_domain(holding) if holding else None,
            config=self._shares_service.describe(),
            transaction=TransactionDTO.from_domain(tx),
            dilution_percentage=str(dilution),
            message=f"Issued {shares_amount} new shares",
        )

    def propose_issuance(
        self,
        shares_issued: int,
        recipient: NewShareholding | None = None,
        reason: str | None = None,
        today: date | None = None,
    ) -> ProposalResultDTO:
        if recipient is not None:
            recipient = _validate_holder(recipient, today or date.today())
        config = self._shares_service.get_configuration()
        _check_capacity(shares_issued, config)

        dilution = dilution_percentage(shares_issued, config.issued_shares)
        proposal = self._proposal_repo.create(
            shares_issued=shares_issued,
            equity_type=recipient.equity_type if recipient else EquityType.GRANTED,
            previous_issued_shares=config.issued_shares,
            dilution_percentage=dilution,
            recipient_id=recipient.shareholder_id if recipient else None,
            recipient_name=recipient.shareholder_name if recipient else None,
            recipient_type=recipient.holder_type if recipient else "investor",
            issued_at_price=recipient.acquisition_price if recipient else None,
            vesting_start_date=recipient.vesting_start_date if recipient else None,
            vesting_end_date=recipient.vesting_end_date if recipient else None,
            vesting_percentage=recipient.vesting_percentage if recipient else _HUNDRED,
            reason=reason,
        )
        return ProposalResultDTO(
            issuance=ProposalDTO.from_domain(proposal),
            dilution_warning=(
                f"Issuing {shares_issued} new shares will dilute existing "
                f"shareholders by {dilution}%"
            ),
            new_issued_total=config.issued_shares + shares_issued,
        )

    def list_proposals(self, status: ApprovalStatus = ApprovalStatus.PENDING) -> list[ProposalDTO]:
        return [ProposalDTO.from_domain(p) for p in self._proposal_repo.list_by_status(status)]

    def approve_issuance(self, proposal_id: int) -> IssuanceResultDTO:
        proposal = self._pending_proposal(proposal_id)
        config = self._shares_service.get_configuration()
        if proposal.shares_issued > config.unissued_shares:
            raise ValidationError("Insufficient authorized shares available")

        recipient = None
        if proposal.recipient_id is not None:
            recipient = NewShareholding(
                shareholder_id=proposal.recipient_id,
                equity_type=proposal.equity_type,
                shareholder_name=proposal.recipient_name,
                holder_type=proposal.recipient_type,
                vesting_start_date=proposal.vesting_start_date,
                vesting_end_date=proposal.vesting_end_date,
                vesting_percentage=proposal.vesting_percentage,
                acquisition_price=proposal.issued_at_price,
            )

        with self._uow:
            holding, tx = self._execute_issuance(recipient, proposal.shares_issued, proposal.reason)
            self._proposal_repo.mark(proposal_id, ApprovalStatus.EXECUTED)

        return IssuanceResultDTO(
            shareholding=ShareholdingDTO.from_domain(holding) if holding else None,
            config=self._shares_service.describe(),
            transaction=TransactionDTO.from_domain(tx),
            dilution_percentage=str(proposal.dilution_percentage),
            message=f"Successfully issued {proposal.shares_issued} new shares",
        )

    def reject_issuance(self, proposal_id: int) -> ProposalDTO:
        self._pending_proposal(proposal_id)
        return ProposalDTO.from_domain(self._proposal_repo.mark(proposal_id, ApprovalStatus.REJECTED))

    # ---------- allocation of already-issued shares ----------

    def add_shareholder(
        self,
        holder: NewShareholding,
        shares_owned: int,
        today: date | None = None,
    ) -> ShareholdingDTO:
        holder = _validate_holder(holder, today or date.today())
        if shares_owned <= 0:
            raise ValidationError("Shares owned must be positive")
        if self._holding_repo.find_by_shareholder(holder.shareholder_id) is not None:
            raise ConflictError(f"Shareholder {holder.shareholder_id} already exists")

        config = self._shares_service.get_configuration()
        available = config.issued_shares - self._holding_repo.total_allocated()
        if shares_owned > available:
            raise ValidationError(
                f"Cannot allocate {shares_owned} shares. "
                f"Only {available} unallocated shares available."
            )

        with self._uow:
            holding = self._holding_repo.credit(holder, shares_owned)
            self._transaction_repo.append(
                TransactionType.TRANSFER,
                shares_owned,
                to_shareholder_id=holder.shareholder_id,
                price_per_share=holder.acquisition_price,
                equity_type=holder.equity_type,
                reason="Allocation of issued shares",
            )
        return ShareholdingDTO.from_domain(holding)

    # ---------- transfer ----------

    def transfer_shares(
        self,
        from_shareholder_id: str,
        to_shareholder_id: str,
        shares_amount: int,
        price_per_share: Decimal | None = None,
        to_shareholder_name: str | None = None,
        to_shareholder_email: str | None = None,
        reason: str | None = None,
    ) -> TransferResultDTO:
        if shares_amount <= 0:
            raise ValidationError("Shares amount must be positive")
        if from_shareholder_id == to_shareholder_id:
            raise ValidationError("Sender and recipient must be different shareholders")
        if price_per_share is not None and price_per_share < 0:
            raise ValidationError("Price per share cannot be negative")

        sender = self._active_holding(from_shareholder_id, "Sender not found or inactive")
        if sender.shares_owned < shares_amount:
            raise ValidationError(
                f"Insufficient shares. Sender has {sender.shares_owned}, "
                f"trying to transfer {shares_amount}"
            )

        recipient = NewShareholding(
            shareholder_id=to_shareholder_id,
            equity_type=sender.equity_type,
            shareholder_name=to_shareholder_name,
            shareholder_email=to_shareholder_email,
            vesting_start_date=sender.vesting_start_date,
            vesting_end_date=sender.vesting_end_date,
            vesting_percentage=sender.vesting_percentage,
            acquisition_price=price_per_share,
        )

        with self._uow:
            sender_after = self._holding_repo.debit(from_shareholder_id, shares_amount)
            recipient_after = self._holding_repo.credit(recipient, shares_amount)
            tx = self._transaction_repo.append(
                TransactionType.TRANSFER,
                shares_amount,
                from_shareholder_id=from_shareholder_id,
                to_shareholder_id=to_shareholder_id,
                price_per_share=price_per_share,
                equity_type=sender.equity_type,
                reason=reason,
            )

        return TransferResultDTO(
            message=f"Transferred {shares_amount} shares from sender to recipient",
            from_new_balance=sender_after.shares_owned,
            to_new_balance=recipient_after.shares_owned,
            shares_transferred=shares_amount,
            transaction=TransactionDTO.from_domain(tx),
        )

    # ---------- buyback ----------

    def buyback_shares(
        self,
        shareholder_id: str,
        shares_amount: int,
        price_per_share: Decimal | None = None,
        reason: str | None = None,
    ) -> BuybackResultDTO:
        if shares_amount <= 0:
            raise ValidationError("Shares amount must be positive")
        if price_per_share is not None and price_per_share < 0:
            raise ValidationError("Price per share cannot be negative")

        holder = self._active_holding(shareholder_id, "Shareholder not found")
        if holder.shares_owned < shares_amount:
            raise ValidationError(
                f"Shareholder has {holder.shares_owned} shares, "
                f"trying to buy back {shares_amount}"
            )

        if price_per_share is None:
            config = self._shares_service.get_configuration()
            price_per_share = self._bridge.price_per_share(config.authorized_shares).quantize(PRICE_QUANTUM)

        with self._uow:
            holder_after = self._holding_repo.debit(shareholder_id, shares_amount)
            self._config_repo.adjust_issued(-shares_amount)
            tx = self._transaction_repo.append(
                TransactionType.BUYBACK,
                shares_amount,
                from_shareholder_id=shareholder_id,
                price_per_share=price_per_share,
                equity_type=holder.equity_type,
                reason=reason,
            )

        return BuybackResultDTO(
            message=f"Successfully repurchased {shares_amount} shares",
            new_balance=holder_after.shares_owned,
            total_value=str(tx.total_value if tx.total_value is not None else Decimal("0")),
            config=self._shares_service.describe(),
            transaction=TransactionDTO.from_domain(tx),
        )

    # ---------- reads ----------

    def get_shareholder(self, shareholder_id: str) -> ShareholdingDTO:
        holding = self._holding_repo.find_by_shareholder(shareholder_id)
        if holding is None:
            raise NotFoundError("Shareholder not found")
        return ShareholdingDTO.from_domain(holding)

    def list_shareholders(self) -> list[ShareholdingDTO]:
        return [ShareholdingDTO.from_domain(h) for h in self._holding_repo.list_active()]

    def vesting_status(self, shareholder_id: str, today: date | None = None) -> VestingStatusDTO:
        holding = self._holding_repo.find_by_shareholder(shareholder_id)
        if holding is None:
            raise NotFoundError("Shareholder not found")
        return VestingStatusDTO.from_domain(shareholder_id, vesting_progress(holding, today or date.today()))

    def list_transactions(self, limit: int = 100) -> list[TransactionDTO]:
        return [TransactionDTO.from_domain(t) for t in self._transaction_repo.list_recent(limit)]

    # ---------- valuation rounds ----------

    def record_valuation_round(
        self,
        pre_money_valuation: Decimal,
        investment_amount: Decimal,
        round_name: str | None = None,
        investor_name: str | None = None,
        notes: str | None = None,
    ) -> ValuationSnapshotDTO:
        config = self._shares_service.get_configuration()
        try:
            pricing = price_round(pre_money_valuation, investment_amount, config.issued_shares)
        except ValueError as err:
            raise ValidationError(str(err)) from err
        snapshot = self._snapshot_repo.create(
            pre_money_valuation,
            investment_amount,
            pricing,
            round_name=round_name,
            investor_name=investor_name,
            notes=notes,
        )
        return ValuationSnapshotDTO.from_domain(snapshot)

    def current_valuation(self) -> ValuationStatusDTO:
        latest = self._snapshot_repo.latest()
        return ValuationStatusDTO(
            latest_round=ValuationSnapshotDTO.from_domain(latest) if latest else None,
            shares_config=self._shares_service.describe(),
        )

    # ---------- internals ----------

    def _execute_issuance(
        self,
        holder: NewShareholding | None,
        shares_amount: int,
        reason: str | None,
    ) -> tuple[Shareholding | None, ShareTransaction]:
        """Must run inside the unit of work."""
        self._config_repo.adjust_issued(shares_amount)
        holding = self._holding_repo.credit(holder, shares_amount) if holder else None
        tx = self._transaction_repo.append(
            TransactionType.ISSUANCE,
            shares_amount,
            to_shareholder_id=holder.shareholder_id if holder else None,
            price_per_share=holder.acquisition_price if holder else None,
            equity_type=holder.equity_type if holder else None,
            reason=reason,
        )
        return holding, tx

    def _active_holding(self, shareholder_id: str, missing_message: str) -> Shareholding:
        holding = self._holding_repo.find_by_shareholder(shareholder_id)
        if holding is None or not holding.is_active:
            raise NotFoundError(missing_message)
        return holding

    def _pending_proposal(self, proposal_id: int) -> IssuanceProposal:
        proposal = self._proposal_repo.get(proposal_id)
        if proposal is None:
            raise NotFoundError("Issuance not found")
        if proposal.approval_status != ApprovalStatus.PENDING:
            raise ConflictError(
                f"Cannot execute issuance with status: {proposal.approval_status.value}"
            )
        return proposal


def _check_capacity(shares_amount: int, config: SharesConfig) -> None:
    if shares_amount <= 0:
        raise ValidationError("Shares amount must be positive")
    if shares_amount > config.unissued_shares:
        raise ValidationError(
            f"Cannot issue {shares_amount} shares. "
            f"Only {config.unissued_shares} unissued shares available."
        )


def _validate_holder(holder: NewShareholding, today: date) -> NewShareholding:
    """Checks the holder attributes and fills the vesting start of a grant with today."""
    if not holder.shareholder_id.strip():
        raise ValidationError("shareholder_id is required")
    if not Decimal("0") <= holder.vesting_percentage <= _HUNDRED:
        raise ValidationError("vesting_percentage must be between 0 and 100")
    if holder.acquisition_price is not None and holder.acquisition_price < 0:
        raise ValidationError("Price per share cannot be negative")
    if holder.equity_type != EquityType.GRANTED:
        return holder

    if holder.vesting_end_date is None:
        raise ValidationError("GRANTED equity must have vesting_end_date")
    start = holder.vesting_start_date or today
    if holder.vesting_end_date <= start:
        raise ValidationError("vesting_end_date must be after vesting_start_date")
    return replace(holder, vesting_start_date=start)
