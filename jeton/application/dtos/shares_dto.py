from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from jeton.domain.equity.entities import SharesConfig
from jeton.domain.equity.shares import ownership_percentage
from jeton.domain.valuation.entities import ValuationSummary


class ValuationDTO(BaseModel):
    accounting_net_worth: str
    strategic_company_value: str
    total_ip_valuation: str
    infrastructure_value: str
    total_liabilities: str
    total_assets_book_value: str
    valuation_difference: str

    @classmethod
    def from_domain(cls, summary: ValuationSummary) -> ValuationDTO:
        return cls(
            accounting_net_worth=str(summary.accounting_net_worth),
            strategic_company_value=str(summary.strategic_company_value),
            total_ip_valuation=str(summary.total_ip_valuation),
            infrastructure_value=str(summary.infrastructure_value),
            total_liabilities=str(summary.total_liabilities),
            total_assets_book_value=str(summary.total_assets_book_value),
            valuation_difference=str(summary.valuation_difference),
        )


class SharesOverviewDTO(BaseModel):
    id: int
    authorized_shares: int
    issued_shares: int
    class_type: str
    status: str
    par_value: str
    created_at: str | None
    updated_at: str | None
    valuation: ValuationDTO
    shares_allocated: int
    shares_remaining: int
    price_per_share: str
    allocation_percentage: str


class SharesConfigDTO(BaseModel):
    id: int
    authorized_shares: int
    issued_shares: int
    unissued_shares: int
    par_value: str
    class_type: str
    status: str
    description: str | None
    allocated_shares: int
    unallocated_issued: int
    allocation_percentage: str

    @classmethod
    def from_domain(cls, config: SharesConfig, allocated: int) -> SharesConfigDTO:
        return cls(
            id=config.id,
            authorized_shares=config.authorized_shares,
            issued_shares=config.issued_shares,
            unissued_shares=config.unissued_shares,
            par_value=str(config.par_value),
            class_type=config.class_type,
            status=config.status,
            description=config.description,
            allocated_shares=allocated,
            unallocated_issued=config.issued_shares - allocated,
            allocation_percentage=str(ownership_percentage(allocated, config.issued_shares)),
        )


class UpdateSharesRequest(BaseModel):
    """PUT /api/shares body. company_valuation is rejected before this model is built."""

    model_config = ConfigDict(extra="ignore")

    authorized_shares: int | None = None
    class_type: str | None = None
    par_value: Decimal | None = None
