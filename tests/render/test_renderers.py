"""Tests for the compensation renderers."""

import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from render.renderers import (
    BenefitsRenderer,
    CatalogRenderer,
    CompositionRenderer,
    FieldsRenderer,
    MarketComparisonRenderer,
    SummaryRenderer,
    RENDERER_REGISTRY,
    format_currency,
    format_field,
    format_percent,
    limit_warnings,
)
from model.OfferData import BenefitSelection, CustomBenefit, EquityGrant, MatchMode, OfferInputs, RetirementMatch
from offer_loader import OfferContext


@pytest.fixture(scope="module")
def context():
    return OfferContext()


def calculate(context, cash=0.0, benefits=None, **kwargs):
    selections = context.benefit_catalog.default_selections()
    for benefit_id, amount in (benefits or {}).items():
        selections[benefit_id] = BenefitSelection(enabled=True, amount=amount)
    return context.calculate(OfferInputs(cash_salary=cash, benefits=selections, **kwargs), 2025)


class TestFormatting:
    """Currency and percentage formatting."""

    def test_format_currency(self):
        assert format_currency(150000) == "$150,000"
        assert format_currency(1234567.4) == "$1,234,567"
        assert format_currency(2.5) == "$3"
        assert format_currency(0) == "$0"

    def test_format_negative_currency(self):
        assert format_currency(-500) == "-$500"
        assert format_currency(-0.2) == "$0"

    def test_format_percent(self):
        assert format_percent(11.1111) == "+11.1%"
        assert format_percent(-23.37) == "-23.4%"
        assert format_percent(0) == "0.0%"

    def test_format_field(self):
        assert format_field('cash_salary', 150000.0) == "$150,000"
        assert format_field('cash_share', 92.5926) == "92.6%"
        assert format_field('market_salary', None) == "-"
        assert format_field('exceeds_retirement_limit', True) == "Yes"
        assert format_field('limits_year', 2025) == "2025"


class TestLimitWarnings:
    """Warning text for exceeded contribution limits."""

    def test_no_warnings_within_limits(self, context):
        result = calculate(context, 100000, {'hsa': 1000})
        assert limit_warnings(result) == []

    def test_retirement_warning(self, context):
        result = calculate(context, 100000,
                           retirement_match=RetirementMatch(True, MatchMode.FIXED_AMOUNT, 75000))
        warnings = limit_warnings(result)
        assert len(warnings) == 1
        assert "($75,000)" in warnings[0]
        assert "$70,000" in warnings[0]
        assert "(2025)" in warnings[0]

    def test_hsa_warning_mentions_all_ceilings(self, context):
        result = calculate(context, 100000, {'hsa': 9000})
        warnings = limit_warnings(result)
        assert len(warnings) == 1
        assert "$8,550" in warnings[0]
        assert "$4,300" in warnings[0]
        assert "$3,300" in warnings[0]


class TestSummaryRenderer:
    """Tests for the total compensation summary."""

    def test_summary_shows_total_and_composition(self, context, capsys):
        SummaryRenderer().render(calculate(context, 150000, {'health': 12000}))
        output = capsys.readouterr().out
        assert "TOTAL COMPENSATION" in output
        assert "$162,000" in output
        assert "Health Insurance" in output
        assert "92.6%" in output
        assert "7.4%" in output
        assert "MARKET COMPARISON" not in output

    def test_summary_of_empty_offer_has_no_composition(self, context, capsys):
        SummaryRenderer().render(calculate(context))
        output = capsys.readouterr().out
        assert "$0" in output
        assert "COMPOSITION" not in output

    def test_summary_includes_warnings(self, context, capsys):
        SummaryRenderer().render(calculate(context, 100000, {'hsa': 9000}))
        output = capsys.readouterr().out
        assert "WARNINGS" in output
        assert "HSA family limit" in output

    def test_summary_of_overflowing_equity(self, context, capsys):
        SummaryRenderer().render(calculate(context, 100000, equity=EquityGrant(True, 1e200, 0, 1e200)))
        output = capsys.readouterr().out
        assert "$100,000" in output

    def test_summary_includes_market_comparison(self, context, capsys):
        SummaryRenderer().render(calculate(context, 150000, occupation_id='software-engineer',
                                           metro_id='seattle', region_id='west'))
        output = capsys.readouterr().out
        assert "MARKET COMPARISON: SOFTWARE ENGINEER" in output


class TestMarketComparisonRenderer:
    """Tests for the market comparison output."""

    def test_below_market(self, context, capsys):
        MarketComparisonRenderer().render(calculate(context, 150000, occupation_id='software-engineer',
                                                    metro_id='seattle', region_id='west'))
        output = capsys.readouterr().out
        assert "$195,750" in output
        assert "-23.4%" in output
        assert "$45,750 below market" in output
        assert "The market average is $195,750 for Seattle." in output
        assert "cost of living index of 145 (+45% vs national average)" in output
        assert "$103,448" in output
        assert "https://www.coli.org/" in output

    def test_above_market_for_other_occupation(self, context, capsys):
        MarketComparisonRenderer().render(calculate(context, 100000, occupation_id='other'))
        output = capsys.readouterr().out
        assert "+5.3%" in output
        assert "higher than the regional average." in output
        assert "COST OF LIVING" not in output

    def test_no_occupation(self, context, capsys):
        MarketComparisonRenderer().render(calculate(context, 100000))
        output = capsys.readouterr().out
        assert "Select an occupation" in output


class TestOtherRenderers:
    """Benefits, composition and field renderers."""

    def test_benefits_renderer(self, context, capsys):
        result = calculate(context, 100000, {'gym': 1200},
                           custom_benefits=(CustomBenefit('c1', 'Parking cost', -500),),
                           retirement_match=RetirementMatch(True, MatchMode.PERCENTAGE, 5))
        BenefitsRenderer().render(result)
        output = capsys.readouterr().out
        assert "Gym Membership" in output
        assert "Custom Benefit Costs" in output
        assert "-$500" in output
        assert "$5,700" in output

    def test_benefits_renderer_with_nothing_selected(self, context, capsys):
        BenefitsRenderer().render(calculate(context, 100000))
        assert "No benefits selected" in capsys.readouterr().out

    def test_composition_of_zero_total(self, context, capsys):
        CompositionRenderer().render(calculate(context))
        assert "total compensation is zero" in capsys.readouterr().out

    def test_fields_renderer(self, context, capsys):
        FieldsRenderer(['total_compensation', 'cash_share']).render(calculate(context, 150000, {'health': 12000}))
        output = capsys.readouterr().out
        assert "Total Comp" in output
        assert "$162,000" in output
        assert "92.6%" in output

    def test_registry(self):
        assert set(RENDERER_REGISTRY) == {'Summary', 'Benefits', 'MarketComparison', 'Composition'}


class TestCatalogRenderer:
    """Tests for the reference table listings."""

    @pytest.fixture
    def renderer(self, context):
        return CatalogRenderer(context.salary_catalog, context.benefit_catalog, context.contribution_limits)

    def test_occupations(self, renderer, capsys):
        renderer.render('occupations')
        output = capsys.readouterr().out
        assert "ENGINEERING" in output
        assert "software-engineer" in output
        assert "$120,000" in output

    def test_metros_for_region(self, renderer, capsys):
        renderer.render_metro_areas('midwest')
        output = capsys.readouterr().out
        assert "chicago" in output
        assert "seattle" not in output

    def test_benefits_exclude_retirement_match(self, renderer, capsys):
        renderer.render('benefits')
        output = capsys.readouterr().out
        assert "health" in output
        assert "401(k) Match" not in output

    def test_limits(self, renderer, capsys):
        renderer.render('limits')
        output = capsys.readouterr().out
        assert "2024" in output
        assert "$70,000" in output

    def test_unknown_table(self, renderer):
        with pytest.raises(ValueError, match="Unknown table"):
            renderer.render('planets')
