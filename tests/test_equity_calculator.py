import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
from calc.amounts import finite_or_zero
from calc.equity_calculator import compute_equity_value
from model.OfferData import EquityGrant


def test_equity_value_in_the_money():
    grant = EquityGrant(enabled=True, shares=1000, strike_price=10, fair_market_value=25)
    assert compute_equity_value(grant) == 15000


def test_equity_value_underwater_is_negative():
    # Not floored at zero
    grant = EquityGrant(enabled=True, shares=1000, strike_price=30, fair_market_value=25)
    assert compute_equity_value(grant) == -5000


def test_disabled_grant_is_zero():
    grant = EquityGrant(enabled=False, shares=1000, strike_price=10, fair_market_value=25)
    assert compute_equity_value(grant) == 0


def test_malformed_values_count_as_zero():
    grant = EquityGrant(enabled=True, shares=float('nan'), strike_price=10, fair_market_value=25)
    assert compute_equity_value(grant) == 0
    grant = EquityGrant(enabled=True, shares=100, strike_price=None, fair_market_value=float('inf'))
    assert compute_equity_value(grant) == 0


def test_equity_value_is_linear_in_price_difference():
    assert compute_equity_value(EquityGrant(enabled=True, shares=1000, strike_price=2, fair_market_value=5)) == 3000
    assert compute_equity_value(EquityGrant(enabled=True, shares=1000, strike_price=5, fair_market_value=2)) == -3000


def test_overflowing_equity_value_is_zero():
    grant = EquityGrant(enabled=True, shares=1e200, strike_price=0, fair_market_value=1e200)
    assert compute_equity_value(grant) == 0


def test_huge_integer_inputs_are_treated_as_zero():
    grant = EquityGrant(enabled=True, shares=10**400, strike_price=0, fair_market_value=25)
    assert compute_equity_value(grant) == 0
    assert finite_or_zero(10**400) == 0
