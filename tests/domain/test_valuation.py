# tests/domain/test_valuation.py
from decimal import Decimal

import pytest

from jeton.application.services.valuation_bridge import ValuationBridge
from jeton.domain.valuation.entities import AssetBookEntry, ValuationInputs
from jeton.domain.valuation.services import summarize
from jeton.infrastructure.cache import NullValuationCache, TTLValuationCache


def _inputs() -> ValuationInputs:
    return ValuationInputs(
        assets=(
            AssetBookEntry(Decimal("50000"), Decimal("10000")),
            AssetBookEntry(Decimal("3000"), Decimal("5000")),
        ),
        total_liabilities=Decimal("20000"),
        ip_valuations=(Decimal("100000"), Decimal("30000")),
        infrastructure_costs=(Decimal("50000"),),
    )


class _CountingSource:
    def __init__(self, inputs: ValuationInputs) -> None:
        self.inputs = inputs
        self.calls = 0

    def load_inputs(self) -> ValuationInputs:
        self.calls += 1
        return self.inputs


class _FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_book_value_is_never_negative() -> None:
    assert AssetBookEntry(Decimal("3000"), Decimal("5000")).book_value == Decimal("0")
    assert AssetBookEntry(Decimal("3000")).book_value == Decimal("3000")


def test_summarize() -> None:
    summary = summarize(_inputs())
    assert summary.total_assets_book_value == Decimal("40000")
    assert summary.accounting_net_worth == Decimal("20000")
    assert summary.strategic_company_value == Decimal("200000")
    assert summary.valuation_difference == Decimal("180000")


def test_summarize_empty_company() -> None:
    summary = summarize(ValuationInputs())
    assert summary.strategic_company_value == Decimal("0")


def test_net_worth_can_be_negative() -> None:
    summary = summarize(ValuationInputs(total_liabilities=Decimal("500")))
    assert summary.accounting_net_worth == Decimal("-500")
    assert summary.strategic_company_value == Decimal("-500")


# ---------- cache ----------


def test_ttl_cache_expires() -> None:
    clock = _FakeClock()
    cache: TTLValuationCache[str] = TTLValuationCache(5, clock=clock)
    assert cache.get() is None

    cache.set("v1")
    clock.now += 4
    assert cache.get() == "v1"
    clock.now += 1
    assert cache.get() is None


def test_ttl_cache_invalidate() -> None:
    cache: TTLValuationCache[str] = TTLValuationCache(60, clock=_FakeClock())
    cache.set("v1")
    cache.invalidate()
    assert cache.get() is None


def test_ttl_cache_rejects_negative_ttl() -> None:
    with pytest.raises(ValueError):
        TTLValuationCache(-1)


def test_null_cache_never_stores() -> None:
    cache: NullValuationCache[str] = NullValuationCache()
    cache.set("v1")
    assert cache.get() is None


# ---------- bridge ----------


def test_bridge_reuses_value_within_ttl() -> None:
    clock = _FakeClock()
    source = _CountingSource(_inputs())
    bridge = ValuationBridge(source, TTLValuationCache(5, clock=clock))

    first = bridge.compute_strategic_value()
    second = bridge.compute_strategic_value()
    assert first is second
    assert source.calls == 1

    clock.now += 5
    bridge.compute_strategic_value()
    assert source.calls == 2


def test_bridge_without_cache_recomputes() -> None:
    source = _CountingSource(_inputs())
    bridge = ValuationBridge(source, NullValuationCache())
    bridge.compute_strategic_value()
    bridge.compute_strategic_value()
    assert source.calls == 2


def test_bridge_price_per_share() -> None:
    bridge = ValuationBridge(_CountingSource(_inputs()), NullValuationCache())
    assert bridge.price_per_share(1_000_000) == Decimal("0.2")
    assert bridge.price_per_share(0) == Decimal("0")
