# jeton/domain/equity/errors.py
#
# Exception taxonomy for the equity core.
#
# Design decisions:
#   - Every domain error subclasses ValueError so pure functions keep the
#     plain "raise ValueError on bad input" contract; callers that only care
#     about bad input can still catch ValueError.
#   - The HTTP mapping lives in the interface layer (main.py exception
#     handlers). The domain never knows about status codes.
#   - ConflictError is separate from ValidationError even though both map to
#     400: the message of a ConflictError always names the current capacity
#     figure that blocked the operation.
from __future__ import annotations


class EquityError(ValueError):
    """Base for every business-rule failure raised by the equity core."""


class ValidationError(EquityError):
    """Bad input: non-positive amounts, unknown equity type, exceeded capacity."""


class ConflictError(EquityError):
    """Operation collides with current state (e.g. shrinking authorized shares)."""


class NotFoundError(EquityError):
    pass
