import os
import sys
from dataclasses import replace

import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
from calc.compensation_calculator import (
    CompensationCalculator,
    compute_composition_shares,
    compute_total_compensation,
)
from catalog.BenefitCatalog import BenefitCatalog
from catalog.ContributionLimits import ContributionLimits
from catalog.SalaryCatalog import SalaryCatalog
from model.OfferData import (
    BenefitSelection,
    CustomBenefit,
    EquityGrant,
    MatchMode,
    OfferInputs,
    RetirementMatch,
)


@pytest.fixture(scope="module")
def benefit_catalog():
    return BenefitCatalog()


@pytest.fixture(scope="module")
def calculator(benefit_catalog):
    return CompensationCalculator(SalaryCatalog(), benefit_catalog, ContributionLimits().for_year(2025))


def make_offer(benefit_catalog, cash=0.0, benefits=None, **kwargs) -> OfferInputs:
    """Create an offer with every benefit disabled except the ones given."""
    selections = benefit_catalog.default_selections()
    for benefit_id, amount in (benefits or {}).items():
        selections[benefit_id] = BenefitSelection(enabled=True, amount=amount)
    return OfferInputs(cash_salary=cash, benefits=selections, **kwargs)


def test_total_is_sum_of_components():
    assert compute_total_compensation(150000, 15000, 7500, 13500) == 186000


def test_total_treats_non_finite_as_zero():
    assert compute_total_compensation(float('nan'), 100, float('inf'), None) == 100


def test_composition_shares():
    shares = compute_composition_shares(150000, 0, 12000, 162000)
    assert shares.cash_pct == pytest.approx(92.5926, abs=0.0001)
    assert shares.equity_pct == 0
    assert shares.benefits_pct == pytest.approx(7.4074, abs=0.0001)


def test_composition_of_zero_total_is_all_zero():
    shares = compute_composition_shares(0, 0, 0, 0)
    assert (shares.cash_pct, shares.equity_pct, shares.benefits_pct) == (0, 0, 0)


def test_cash_and_health_only(calculator, benefit_catalog):
    result = calculator.calculate(make_offer(benefit_catalog, 150000, {'health': 12000}))
    assert result.total_compensation == 162000
    assert round(result.cash_share, 2) == 92.59
    assert round(result.benefits_share, 2) == 7.41
    assert result.market is None
    assert result.cost_of_living is None
    assert not result.has_market_comparison


def test_empty_offer_is_all_zero(calculator, benefit_catalog):
    result = calculator.calculate(make_offer(benefit_catalog))
    assert result.total_compensation == 0
    assert (result.cash_share, result.equity_share, result.benefits_share) == (0, 0, 0)
    assert result.benefit_lines == []


def test_retirement_match_counted_once(calculator, benefit_catalog):
    offer = make_offer(
        benefit_catalog, 100000,
        retirement_match=RetirementMatch(enabled=True, mode=MatchMode.PERCENTAGE, value=5),
    )
    # Enabling the catalog 401(k) entry must not add the match a second time
    offer.benefits['401k'] = BenefitSelection(enabled=True, amount=7500)
    result = calculator.calculate(offer)
    assert result.retirement_match == 5000
    assert result.benefits_total == 0
    assert result.total_compensation == 105000
    assert result.total_benefits == 5000


def test_full_offer(calculator, benefit_catalog):
    offer = make_offer(
        benefit_catalog, 150000, {'health': 12000, 'dental': 1500},
        equity=EquityGrant(enabled=True, shares=1000, strike_price=10, fair_market_value=25),
        retirement_match=RetirementMatch(enabled=True, mode=MatchMode.PERCENTAGE, value=5),
        custom_benefits=(CustomBenefit(id='c1', name='Pet insurance', amount=600),),
    )
    result = calculator.calculate(offer)
    assert result.equity_value == 15000
    assert result.retirement_match == 7500
    assert result.benefits_total == 14100
    assert result.total_compensation == 186600
    assert result.cash_share + result.equity_share + result.benefits_share == pytest.approx(100)
    assert [line.name for line in result.benefit_lines] == ['Health Insurance', 'Dental Insurance', 'Pet insurance']


def test_underwater_equity_reduces_total(calculator, benefit_catalog):
    offer = make_offer(
        benefit_catalog, 100000,
        equity=EquityGrant(enabled=True, shares=1000, strike_price=30, fair_market_value=25),
    )
    result = calculator.calculate(offer)
    assert result.equity_value == -5000
    assert result.total_compensation == 95000


def test_retirement_limit_flag_does_not_change_total(calculator, benefit_catalog):
    offer = make_offer(
        benefit_catalog, 100000,
        retirement_match=RetirementMatch(enabled=True, mode=MatchMode.FIXED_AMOUNT, value=70001),
    )
    result = calculator.calculate(offer)
    assert result.exceeds_retirement_limit is True
    assert result.total_compensation == 170001

    at_limit = replace(offer, retirement_match=RetirementMatch(enabled=True, mode=MatchMode.FIXED_AMOUNT, value=70000))
    assert calculator.calculate(at_limit).exceeds_retirement_limit is False


def test_hsa_limit_flag(calculator, benefit_catalog):
    result = calculator.calculate(make_offer(benefit_catalog, 100000, {'hsa': 9000}))
    assert result.hsa_fsa_amount == 9000
    assert result.exceeds_hsa_fsa_limit is True
    assert result.total_compensation == 109000
    assert result.limits_year == 2025


def test_market_comparison_with_metro(calculator, benefit_catalog):
    offer = make_offer(benefit_catalog, 150000, occupation_id='software-engineer',
                       metro_id='seattle', region_id='west')
    result = calculator.calculate(offer)
    assert result.job_title == 'Software Engineer'
    assert result.market_salary == 195750
    assert result.salary_difference == -45750
    assert result.has_market_comparison
    assert result.cost_of_living_index == 145
    assert result.cost_of_living_equivalent == pytest.approx(150000 / 1.45)


def test_metro_wins_over_inconsistent_region(calculator, benefit_catalog):
    offer = make_offer(benefit_catalog, 150000, occupation_id='software-engineer',
                       metro_id='seattle', region_id='south')
    assert calculator.calculate(offer).market_salary == 195750


def test_market_comparison_with_region_only(calculator, benefit_catalog):
    offer = make_offer(benefit_catalog, 150000, occupation_id='software-engineer', region_id='northeast')
    result = calculator.calculate(offer)
    assert result.market_salary == 135000
    assert result.salary_difference_percent == pytest.approx(11.111, abs=0.001)
    assert result.cost_of_living is None


def test_other_occupation_uses_custom_title(calculator, benefit_catalog):
    offer = make_offer(benefit_catalog, 90000, occupation_id='other', custom_job_title='Lighthouse Keeper')
    result = calculator.calculate(offer)
    assert result.job_title == 'Lighthouse Keeper'
    assert result.market_salary == 95000


def test_no_market_comparison_without_cash(calculator, benefit_catalog):
    offer = make_offer(benefit_catalog, 0, occupation_id='software-engineer')
    result = calculator.calculate(offer)
    assert result.market is not None
    assert not result.has_market_comparison


def test_calculation_is_idempotent(calculator, benefit_catalog):
    offer = make_offer(
        benefit_catalog, 150000, {'health': 12000},
        retirement_match=RetirementMatch(enabled=True, mode=MatchMode.PERCENTAGE, value=4),
        occupation_id='data-scientist', metro_id='austin',
    )
    first = calculator.calculate(offer)
    second = calculator.calculate(offer)
    assert first == second


def test_non_finite_cash_is_zero(calculator, benefit_catalog):
    result = calculator.calculate(make_offer(benefit_catalog, float('nan'), {'gym': 1200}))
    assert result.cash_salary == 0
    assert result.total_compensation == 1200
    assert result.benefits_share == 100


def test_overflowing_components_never_produce_infinity(calculator, benefit_catalog):
    offer = make_offer(
        benefit_catalog, 100000,
        equity=EquityGrant(enabled=True, shares=1e200, strike_price=0, fair_market_value=1e200),
    )
    result = calculator.calculate(offer)
    assert result.equity_value == 0
    assert result.total_compensation == 100000
    assert result.cash_share == 100
    assert compute_total_compensation(1e308, 1e308, 0, 0) == 0
    shares = compute_composition_shares(1e308, 0, 0, 1e-10)
    assert shares.cash_pct == 0


def test_retirement_match_id_comes_from_the_catalog():
    salary_catalog = SalaryCatalog()
    limits = ContributionLimits().for_year(2025)
    catalog = BenefitCatalog()
    catalog.retirement_match_id = 'gym'
    offer = make_offer(catalog, 100000, {'gym': 1200, 'health': 12000})
    result = CompensationCalculator(salary_catalog, catalog, limits).calculate(offer)
    assert result.benefits_total == 12000
