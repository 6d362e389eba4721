# jeton/domain/equity/vesting.py
#
# Pure vesting arithmetic for granted equity.
#
# Design decisions:
#   - The reference date is always a parameter. Nothing here calls
#     date.today(); the application layer decides what "today" is.
#   - Progress is measured in whole days so the result is stable over a
#     request and easy to assert in tests.
#   - All arithmetic is exact (integer days, Decimal percentages). The floor
#     is taken once, on the final product, so a whole-share result is never
#     lost to rounding.
#   - PURCHASED equity, holdings with a missing date, and holdings whose end
#     date is not after the start date are treated as fully vested. This
#     fallback is a policy default, not a derived business rule (see
#     DESIGN.md, open questions).
#
# Invariants:
#   - 0 <= vested_shares(h, d) <= h.shares_owned for every holding and date.
#   - vested_shares is monotonically non-decreasing in the reference date.
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from .entities import Shareholding
from .enums import EquityType, VestingStatus

_ONE = Decimal("1")
_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class VestingProgress:
    total_shares: int
    vested_shares: int
    equity_type: EquityType
    vesting_start_date: date | None
    vesting_end_date: date | None
    vesting_percentage: Decimal
    progress_percentage: int
    time_elapsed_days: int
    total_vesting_days: int
    remaining_days: int
    status: VestingStatus

    @property
    def unvested_shares(self) -> int:
        return self.total_shares - self.vested_shares

    @property
    def is_fully_vested(self) -> bool:
        return self.vested_shares == self.total_shares


def vesting_schedule(holding: Shareholding) -> tuple[date, date] | None:
    """(start, end) when the holding vests over time, None when vested outright."""
    start, end = holding.vesting_start_date, holding.vesting_end_date
    if holding.equity_type != EquityType.GRANTED or start is None or end is None or end <= start:
        return None
    return start, end


def has_schedule(holding: Shareholding) -> bool:
    return vesting_schedule(holding) is not None


def _days(start: date, end: date, today: date) -> tuple[int, int]:
    """(elapsed days clamped to [0, total], total days)."""
    total = (end - start).days
    elapsed = min(total, max(0, (today - start).days))
    return elapsed, total


def vesting_fraction(holding: Shareholding, today: date) -> Decimal:
    """Elapsed share of the schedule in [0, 1]. 1 without a schedule."""
    schedule = vesting_schedule(holding)
    if schedule is None:
        return _ONE
    elapsed, total = _days(*schedule, today)
    return Decimal(elapsed) / Decimal(total)


def vested_shares(holding: Shareholding, today: date) -> int:
    schedule = vesting_schedule(holding)
    if schedule is None:
        return holding.shares_owned
    elapsed, total = _days(*schedule, today)
    numerator = Decimal(holding.shares_owned) * elapsed * holding.vesting_percentage
    return int(numerator // (Decimal(total) * _HUNDRED))


def vesting_progress(holding: Shareholding, today: date) -> VestingProgress:
    vested = vested_shares(holding, today)
    schedule = vesting_schedule(holding)
    if schedule is None:
        return VestingProgress(
            total_shares=holding.shares_owned,
            vested_shares=vested,
            equity_type=holding.equity_type,
            vesting_start_date=holding.vesting_start_date,
            vesting_end_date=holding.vesting_end_date,
            vesting_percentage=holding.vesting_percentage,
            progress_percentage=100,
            time_elapsed_days=0,
            total_vesting_days=0,
            remaining_days=0,
            status=VestingStatus.NOT_APPLICABLE,
        )

    start, end = schedule
    elapsed, total_days = _days(start, end, today)
    remaining_days = total_days - elapsed
    return VestingProgress(
        total_shares=holding.shares_owned,
        vested_shares=vested,
        equity_type=holding.equity_type,
        vesting_start_date=start,
        vesting_end_date=end,
        vesting_percentage=holding.vesting_percentage,
        progress_percentage=elapsed * 100 // total_days,
        time_elapsed_days=max(0, (today - start).days),
        total_vesting_days=total_days,
        remaining_days=remaining_days,
        status=VestingStatus.FULLY_VESTED if remaining_days == 0 else VestingStatus.VESTING,
    )
