from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class AssetBookEntry:
    acquisition_cost: Decimal
    accumulated_depreciation: Decimal = Decimal("0")

    @property
    def book_value(self) -> Decimal:
        """Carrying value. Never negative, even when over-depreciated."""
        return max(Decimal("0"), self.acquisition_cost - self.accumulated_depreciation)


@dataclass(frozen=True)
class ValuationInputs:
    """Raw figures pulled from the accounting, IP and infrastructure modules."""

    assets: tuple[AssetBookEntry, ...] = ()
    total_liabilities: Decimal = Decimal("0")
    ip_valuations: tuple[Decimal, ...] = ()
    infrastructure_costs: tuple[Decimal, ...] = ()


@dataclass(frozen=True)
class ValuationSummary:
    total_assets_book_value: Decimal
    total_liabilities: Decimal
    total_ip_valuation: Decimal
    infrastructure_value: Decimal

    @property
    def accounting_net_worth(self) -> Decimal:
        return self.total_assets_book_value - self.total_liabilities

    @property
    def strategic_company_value(self) -> Decimal:
        return self.accounting_net_worth + self.total_ip_valuation + self.infrastructure_value

    @property
    def valuation_difference(self) -> Decimal:
        return self.strategic_company_value - self.accounting_net_worth
