# jeton/domain/valuation/services.py
#
# Pure valuation core: turns raw module figures into a ValuationSummary.
#
# Design decisions:
#   - No IO. DuckDBValuationSourceRepo fetches the figures, ValuationBridge
#     (application layer) handles caching; this module only does arithmetic.
#   - Strategic company value = accounting net worth + IP valuation +
#     infrastructure replacement cost. Net worth may be negative; the asset
#     book value of each individual asset may not.
from __future__ import annotations

from decimal import Decimal

from .entities import ValuationInputs, ValuationSummary


def summarize(inputs: ValuationInputs) -> ValuationSummary:
    return ValuationSummary(
        total_assets_book_value=sum((a.book_value for a in inputs.assets), Decimal("0")),
        total_liabilities=inputs.total_liabilities,
        total_ip_valuation=sum(inputs.ip_valuations, Decimal("0")),
        infrastructure_value=sum(inputs.infrastructure_costs, Decimal("0")),
    )
