from __future__ import annotations

from datetime import date
from decimal import Decimal

from jeton.domain.equity.repository import ShareholdingRepository
from jeton.domain.equity.shares import PRICE_QUANTUM, share_value

from ..dtos.cap_table_dto import CapTableDTO, CapTableRowDTO, CapTableSummaryDTO
from .shares_service import SharesService
from .valuation_bridge import ValuationBridge


class CapTableService:
    """Joins active holdings to the configuration and the current share price."""

    def __init__(
        self,
        shares_service: SharesService,
        holding_repo: ShareholdingRepository,
        bridge: ValuationBridge,
    ) -> None:
        self._shares_service = shares_service
        self._holding_repo = holding_repo
        self._bridge = bridge

    def get_cap_table(self, holder_type: str | None = None, today: date | None = None) -> CapTableDTO:
        as_of = today or date.today()
        config = self._shares_service.get_configuration()
        price = self._bridge.price_per_share(config.authorized_shares)

        holdings = self._holding_repo.list_active(holder_type)
        rows = [
            CapTableRowDTO.from_domain(h, config.authorized_shares, price, as_of)
            for h in holdings
        ]

        total_shares = sum(h.shares_owned for h in holdings)
        summary = CapTableSummaryDTO(
            total_shareholders=len(rows),
            total_shares_allocated=total_shares,
            total_vested_shares=sum(r.vested_shares for r in rows),
            total_investment=str(sum((h.investment_total for h in holdings), Decimal("0"))),
            total_value=str(share_value(total_shares, price)),
            price_per_share=str(price.quantize(PRICE_QUANTUM)),
            authorized_shares=config.authorized_shares,
            issued_shares=config.issued_shares,
        )
        return CapTableDTO(data=rows, summary=summary)
