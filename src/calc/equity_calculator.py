"""Calculator for the current value of an equity grant."""

from calc.amounts import finite_or_zero
from model.OfferData import EquityGrant


def compute_equity_value(grant: EquityGrant) -> float:
    """Return the value of the grant at its current fair market value.

    Value is shares x (fair market value - strike price). It is not floored
    at zero: an underwater grant has a negative value.

    Args:
        grant: The equity grant terms.

    Returns:
        The signed grant value, or 0 if the grant is disabled or the value
        overflows.
    """
    if not grant.enabled:
        return 0.0
    shares = finite_or_zero(grant.shares)
    strike = finite_or_zero(grant.strike_price)
    fmv = finite_or_zero(grant.fair_market_value)
    return finite_or_zero(shares * (fmv - strike))
