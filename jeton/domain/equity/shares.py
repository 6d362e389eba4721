# jeton/domain/equity/shares.py
#
# Share arithmetic: price per share, ownership, dilution, round pricing.
#
# All functions are pure and work on Decimal. Division by a zero or negative
# share count yields Decimal("0") instead of raising, because an empty company
# (no authorized or issued shares yet) is a legitimate state to display.
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")
CENTS = Decimal("0.01")
PRICE_QUANTUM = Decimal("0.0001")


def price_per_share(strategic_value: Decimal, authorized_shares: int) -> Decimal:
    """strategic_value / authorized_shares, or 0 when there are no authorized shares."""
    if authorized_shares <= 0:
        return _ZERO
    return strategic_value / Decimal(authorized_shares)


def ownership_percentage(shares_owned: int, total_shares: int) -> Decimal:
    if total_shares <= 0:
        return _ZERO
    pct = Decimal(shares_owned) / Decimal(total_shares) * _HUNDRED
    return pct.quantize(CENTS, rounding=ROUND_HALF_UP)


def share_value(shares_owned: int, price: Decimal) -> Decimal:
    return (Decimal(shares_owned) * price).quantize(CENTS, rounding=ROUND_HALF_UP)


def dilution_percentage(new_shares: int, issued_before: int) -> Decimal:
    """Ownership lost by every existing holder when new_shares are issued."""
    total_after = issued_before + new_shares
    if total_after <= 0:
        return _ZERO
    pct = Decimal(new_shares) / Decimal(total_after) * _HUNDRED
    return pct.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class RoundPricing:
    post_money_valuation: Decimal
    share_price: Decimal
    shares_to_issue: int
    issued_shares_after: int


def price_round(pre_money: Decimal, investment: Decimal, issued_shares: int) -> RoundPricing:
    """Prices a funding round against the shares issued before it.

    share_price is pre-money over issued shares (0 when nothing is issued);
    shares_to_issue is the whole number of shares the investment buys at that
    price (0 when the price is 0).
    """
    if pre_money <= _ZERO or investment <= _ZERO:
        raise ValueError("Valuations and investment must be positive")
    price = pre_money / Decimal(issued_shares) if issued_shares > 0 else _ZERO
    shares = int((investment / price).to_integral_value(rounding=ROUND_FLOOR)) if price > _ZERO else 0
    return RoundPricing(
        post_money_valuation=pre_money + investment,
        share_price=price.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP),
        shares_to_issue=shares,
        issued_shares_after=issued_shares + shares,
    )
