import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
from calc.retirement_calculator import check_retirement_limit, compute_retirement_match
from model.OfferData import MatchMode, RetirementMatch, switch_match_mode
from model.ReferenceData import ContributionLimitSet


LIMITS_2025 = ContributionLimitSet(year=2025, hsa_individual=4300, hsa_family=8550, fsa=3300,
                                   employee_401k=23500, combined_401k=70000)


def test_percentage_match():
    match = RetirementMatch(enabled=True, mode=MatchMode.PERCENTAGE, value=5)
    assert compute_retirement_match(match, 150000) == 7500


def test_fixed_amount_match_ignores_salary():
    match = RetirementMatch(enabled=True, mode=MatchMode.FIXED_AMOUNT, value=6000)
    assert compute_retirement_match(match, 150000) == 6000
    assert compute_retirement_match(match, 0) == 6000


def test_disabled_match_is_zero():
    match = RetirementMatch(enabled=False, mode=MatchMode.FIXED_AMOUNT, value=6000)
    assert compute_retirement_match(match, 150000) == 0


def test_limit_is_strictly_greater_than():
    assert check_retirement_limit(70001, LIMITS_2025) is True
    assert check_retirement_limit(70000, LIMITS_2025) is False
    assert check_retirement_limit(0, LIMITS_2025) is False


def test_switching_mode_clears_value():
    match = RetirementMatch(enabled=True, mode=MatchMode.PERCENTAGE, value=5)
    switched = switch_match_mode(match, MatchMode.FIXED_AMOUNT)
    assert switched.mode == MatchMode.FIXED_AMOUNT
    assert switched.value == 0
    assert switched.enabled is True
    assert compute_retirement_match(switched, 150000) == 0


def test_switching_to_same_mode_keeps_value():
    match = RetirementMatch(enabled=True, mode=MatchMode.PERCENTAGE, value=5)
    assert switch_match_mode(match, 'percentage') == match


def test_overflowing_percentage_match_is_zero():
    match = RetirementMatch(enabled=True, mode=MatchMode.PERCENTAGE, value=1e300)
    assert compute_retirement_match(match, 1e300) == 0
    assert check_retirement_limit(compute_retirement_match(match, 1e300), LIMITS_2025) is False
