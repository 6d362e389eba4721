from fastapi import APIRouter, Depends, Query

from jeton.application.dtos.cap_table_dto import CapTableDTO
from jeton.application.dtos.equity_dto import (
    AddShareholderRequest,
    BuybackRequest,
    BuybackResultDTO,
    IssuanceResultDTO,
    IssueSharesRequest,
    ProposalDTO,
    ProposalResultDTO,
    ProposeIssuanceRequest,
    ShareholdingDTO,
    TransactionDTO,
    TransferRequest,
    TransferResultDTO,
    ValuationRoundRequest,
    ValuationSnapshotDTO,
    ValuationStatusDTO,
    VestingStatusDTO,
)
from jeton.application.dtos.shares_dto import SharesConfigDTO
from jeton.application.services.cap_table_service import CapTableService
from jeton.application.services.equity_service import EquityService
from jeton.application.services.shares_service import SharesService
from jeton.domain.equity.enums import ApprovalStatus
from jeton.interfaces.api.dependencies import (
    get_cap_table_service,
    get_equity_service,
    get_shares_service,
)

router = APIRouter(prefix="/equity")


@router.get("/config", response_model=SharesConfigDTO)
def get_config(
    service: SharesService = Depends(get_shares_service),  # noqa: B008
) -> SharesConfigDTO:
    return service.describe()


@router.get("/cap-table", response_model=CapTableDTO)
def get_cap_table(
    holder_type: str | None = Query(default=None, alias="type"),
    service: CapTableService = Depends(get_cap_table_service),  # noqa: B008
) -> CapTableDTO:
    return service.get_cap_table(holder_type=holder_type)


@router.get("/shareholders", response_model=list[ShareholdingDTO])
def list_shareholders(
    service: EquityService = Depends(get_equity_service),  # noqa: B008
) -> list[ShareholdingDTO]:
    return service.list_shareholders()


@router.get("/shareholders/{shareholder_id}", response_model=ShareholdingDTO)
def get_shareholder(
    shareholder_id: str,
    service: EquityService = Depends(get_equity_service),  # noqa: B008
) -> ShareholdingDTO:
    return service.get_shareholder(shareholder_id)


@router.post("/shareholders", response_model=ShareholdingDTO, status_code=201)
def add_shareholder(
    body: AddShareholderRequest,
    service: EquityService = Depends(get_equity_service),  # noqa: B008
) -> ShareholdingDTO:
    holder = body.to_holder(body.shareholder_id, body.acquisition_price)
    return service.add_shareholder(holder, body.shares_owned)


@router.post("/issue-shares", response_model=IssuanceResultDTO)
def issue_shares(
    body: IssueSharesRequest,
    service: EquityService = Depends(get_equity_service),  # noqa: B008
) -> IssuanceResultDTO:
    holder = body.to_holder(body.to_shareholder_id, body.purchase_price)
    return service.issue_shares(holder, body.shares_amount, reason=body.reason)


@router.get("/issuance", response_model=list[ProposalDTO])
def list_issuances(
    status: ApprovalStatus = Query(default=ApprovalStatus.PENDING),  # noqa: B008
    service: EquityService = Depends(get_equity_service),  # noqa: B008
) -> list[ProposalDTO]:
    return service.list_proposals(status)


@router.post("/issuance", response_model=ProposalResultDTO, status_code=201)
def propose_issuance(
    body: ProposeIssuanceRequest,
    service: EquityService = Depends(get_equity_service),  # noqa: B008
) -> ProposalResultDTO:
    recipient = body.to_holder(body.recipient_id, body.issued_at_price) if body.recipient_id else None
    return service.propose_issuance(body.shares_issued, recipient, reason=body.reason)


@router.post("/issuance/{proposal_id}/approve", response_model=IssuanceResultDTO)
def approve_issuance(
    proposal_id: int,
    service: EquityService = Depends(get_equity_service),  # noqa: B008
) -> IssuanceResultDTO:
    return service.approve_issuance(proposal_id)


@router.post("/issuance/{proposal_id}/reject", response_model=ProposalDTO)
def reject_issuance(
    proposal_id: int,
    service: EquityService = Depends(get_equity_service),  # noqa: B008
) -> ProposalDTO:
    return service.reject_issuance(proposal_id)


@router.post("/transfer", response_model=TransferResultDTO)
def transfer_shares(
    body: TransferRequest,
    service: EquityService = Depends(get_equity_service),  # noqa: B008
) -> TransferResultDTO:
    return service.transfer_shares(
        from_shareholder_id=body.from_shareholder_id,
        to_shareholder_id=body.to_shareholder_id,
        shares_amount=body.shares_amount,
        price_per_share=body.price_per_share,
        to_shareholder_name=body.to_shareholder_name,
        to_shareholder_email=body.to_shareholder_email,
        reason=body.reason,
    )


@router.post("/buyback", response_model=BuybackResultDTO)
def buyback_shares(
    body: BuybackRequest,
    service: EquityService = Depends(get_equity_service),  # noqa: B008
) -> BuybackResultDTO:
    return service.buyback_shares(
        shareholder_id=body.shareholder_id,
        shares_amount=body.shares_amount,
        price_per_share=body.price_per_share,
        reason=body.reason,
    )


@router.get("/vesting-status", response_model=VestingStatusDTO)
def get_vesting_status(
    shareholder_id: str = Query(...),
    service: EquityService = Depends(get_equity_service),  # noqa: B008
) -> VestingStatusDTO:
    return service.vesting_status(shareholder_id)


@router.get("/valuation", response_model=ValuationStatusDTO)
def get_valuation(
    service: EquityService = Depends(get_equity_service),  # noqa: B008
) -> ValuationStatusDTO:
    return service.current_valuation()


@router.post("/valuation", response_model=ValuationSnapshotDTO, status_code=201)
def record_valuation(
    body: ValuationRoundRequest,
    service: EquityService = Depends(get_equity_service),  # noqa: B008
) -> ValuationSnapshotDTO:
    return service.record_valuation_round(
        pre_money_valuation=body.pre_money_valuation,
        investment_amount=body.investment_amount,
        round_name=body.round_name,
        investor_name=body.investor_name,
        notes=body.notes,
    )


@router.get("/transactions", response_model=list[TransactionDTO])
def list_transactions(
    limit: int = Query(default=100, ge=1, le=1000),
    service: EquityService = Depends(get_equity_service),  # noqa: B008
) -> list[TransactionDTO]:
    return service.list_transactions(limit)
