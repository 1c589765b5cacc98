"""Calculator for the employer retirement match and its contribution limit."""

from calc.amounts import finite_or_zero
from model.OfferData import MatchMode, RetirementMatch
from model.ReferenceData import ContributionLimitSet


def compute_retirement_match(match: RetirementMatch, cash_salary: float) -> float:
    """Return the annual employer match.

    In percentage mode the value is a percent of the cash salary (5 means 5%).
    In fixed-amount mode the value is the annual match itself.
    """
    if not match.enabled:
        return 0.0
    value = finite_or_zero(match.value)
    if match.mode == MatchMode.PERCENTAGE:
        return finite_or_zero(finite_or_zero(cash_salary) * (value / 100))
    return value


def check_retirement_limit(match_amount: float, limits: ContributionLimitSet) -> bool:
    """True if the match is strictly above the combined employee + employer limit."""
    return finite_or_zero(match_amount) > limits.combined_401k
