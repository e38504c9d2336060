"""Exception types for the constant-product pool engine.

Every failure a pool operation can produce is an ``AmmError`` subclass with a
stable ``code``. ``step()`` in ``engine.py`` returns these as values inside a
``StepResult``; ``step_or_raise()`` and the ``PoolManager`` raise them.
"""

from __future__ import annotations


class AmmError(Exception):
    """Base class for all typed pool failures."""

    code = "amm_error"


class InvalidAuthority(AmmError):
    """Caller is not the pool authority."""

    code = "invalid_authority"


class NoAuthoritySet(InvalidAuthority):
    """Pool was created without an authority; its config can never change."""

    code = "no_authority_set"


class InvalidFee(AmmError):
    """fee_bps outside [0, 10000)."""

    code = "invalid_fee"


class PoolLocked(AmmError):
    code = "pool_locked"


class Expired(AmmError):
    """Request deadline is not in the future."""

    code = "expired"


class ZeroAmount(AmmError):
    code = "zero_amount"


class SlippageExceeded(AmmError):
    code = "slippage_exceeded"


class InsufficientLiquidity(AmmError):
    """Swap would drain (or cannot price against) a reserve."""

    code = "insufficient_liquidity"


class InsufficientShares(AmmError):
    """Holder does not own enough LP shares for the burn."""

    code = "insufficient_shares"


class ArithmeticOverflow(AmmError):
    """A value left its u64/u128 domain."""

    code = "arithmetic_overflow"


class InvariantViolation(AmmError):
    """Raised when a post-state violates one or more pool invariants."""

    code = "invariant_violation"

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")


class PoolNotFound(AmmError):
    code = "pool_not_found"


class PoolExists(AmmError):
    code = "pool_exists"
