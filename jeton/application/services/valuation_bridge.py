# jeton/application/services/valuation_bridge.py
#
# Imperative shell around the pure valuation core.
#
# Design decisions:
#   - The cache is injected, not module state. The app wires one
#     TTLValuationCache per process (dependencies.get_valuation_cache); tests
#     pass NullValuationCache or a cache with a fake clock.
#   - Bursts of requests inside one TTL window share one computation. The
#     cached summary is immutable (frozen dataclass), so handing the same
#     instance to several callers is safe.
from __future__ import annotations

from decimal import Decimal

from jeton.domain.equity.shares import price_per_share
from jeton.domain.valuation.entities import ValuationSummary
from jeton.domain.valuation.repository import ValuationSourceRepository
from jeton.domain.valuation.services import summarize
from jeton.infrastructure.cache import ValuationCache


class ValuationBridge:
    def __init__(
        self,
        source_repo: ValuationSourceRepository,
        cache: ValuationCache[ValuationSummary],
    ) -> None:
        self._source_repo = source_repo
        self._cache = cache

    def compute_strategic_value(self) -> ValuationSummary:
        cached = self._cache.get()
        if cached is not None:
            return cached
        summary = summarize(self._source_repo.load_inputs())
        self._cache.set(summary)
        return summary

    def price_per_share(self, authorized_shares: int) -> Decimal:
        return price_per_share(self.compute_strategic_value().strategic_company_value, authorized_shares)
