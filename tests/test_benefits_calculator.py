import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
from calc.benefits_calculator import (
    benefit_lines,
    check_hsa_fsa_limit,
    compute_benefits_total,
    compute_catalog_benefits_total,
    hsa_fsa_amount,
)
from catalog.BenefitCatalog import BenefitCatalog
from model.OfferData import BenefitSelection, CustomBenefit
from model.ReferenceData import ContributionLimitSet


LIMITS_2025 = ContributionLimitSet(year=2025, hsa_individual=4300, hsa_family=8550, fsa=3300,
                                   employee_401k=23500, combined_401k=70000)


def test_only_enabled_benefits_count():
    selections = {
        'dental': BenefitSelection(enabled=False, amount=1500),
        'gym': BenefitSelection(enabled=True, amount=1200),
    }
    custom = (CustomBenefit(id='c1', name='Parking cost', amount=-500),)
    # Negative custom benefits reduce the total
    assert compute_benefits_total(selections, custom) == 700


def test_retirement_match_benefit_never_counts():
    selections = {
        '401k': BenefitSelection(enabled=True, amount=7500),
        'health': BenefitSelection(enabled=True, amount=12000),
    }
    assert compute_catalog_benefits_total(selections, BenefitCatalog().retirement_match_id) == 12000
    assert compute_benefits_total(selections, (), '401k') == 12000
    # Without a retirement match entry every enabled benefit counts
    assert compute_catalog_benefits_total(selections) == 19500


def test_empty_benefits():
    assert compute_benefits_total({}, ()) == 0


def test_hsa_amount_only_when_enabled():
    assert hsa_fsa_amount({'hsa': BenefitSelection(enabled=True, amount=2000)}) == 2000
    assert hsa_fsa_amount({'hsa': BenefitSelection(enabled=False, amount=2000)}) == 0
    assert hsa_fsa_amount({}) == 0


def test_hsa_limit_uses_family_ceiling():
    # Above the individual and FSA limits but not the family limit
    assert check_hsa_fsa_limit(5000, LIMITS_2025) is False
    assert check_hsa_fsa_limit(8550, LIMITS_2025) is False
    assert check_hsa_fsa_limit(8551, LIMITS_2025) is True


def test_benefit_lines_in_catalog_order():
    info = BenefitCatalog().benefit_info()
    selections = {
        'gym': BenefitSelection(enabled=True, amount=1200),
        'health': BenefitSelection(enabled=True, amount=12000),
        'dental': BenefitSelection(enabled=False, amount=1500),
        'vision': BenefitSelection(enabled=True, amount=0),
    }
    custom = (
        CustomBenefit(id='c1', name='', amount=300),
        CustomBenefit(id='c2', name='Parking cost', amount=-500),
    )
    lines = benefit_lines(selections, custom, info)
    assert [line.id for line in lines] == ['health', 'gym', 'c1']
    assert lines[-1].name == 'Custom Benefit'
    assert lines[-1].is_custom
