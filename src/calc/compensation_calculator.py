"""Total compensation calculator.

Combines cash salary, equity, retirement match and benefits into a single
`CompensationBreakdown`, checks the contribution limits and, when an
occupation is selected, compares the cash salary to the market.

Every calculation is a pure function of the offer and the reference data;
nothing is cached between calls.
"""

from calc.amounts import finite_or_zero
from calc.benefits_calculator import (
    benefit_lines,
    check_hsa_fsa_limit,
    compute_catalog_benefits_total,
    compute_custom_benefits_total,
    hsa_fsa_amount,
)
from calc.equity_calculator import compute_equity_value
from calc.market_calculator import compute_cost_of_living_adjustment, compute_market_comparison
from calc.retirement_calculator import check_retirement_limit, compute_retirement_match
from catalog.BenefitCatalog import BenefitCatalog
from catalog.SalaryCatalog import SalaryCatalog
from model.CompensationResult import CompensationBreakdown, CompositionShares
from model.OfferData import OfferInputs
from model.ReferenceData import ContributionLimitSet


def compute_total_compensation(cash: float, equity_value: float,
                               retirement_match: float, benefits_total: float) -> float:
    """Cash + equity + retirement match + benefits.

    `benefits_total` must not already contain the retirement match; the
    benefits calculator leaves the match entry out so it is added only here.
    """
    return finite_or_zero(finite_or_zero(cash) + finite_or_zero(equity_value)
                          + finite_or_zero(retirement_match) + finite_or_zero(benefits_total))


def compute_composition_shares(cash: float, equity_value: float,
                               benefits_total: float, total: float) -> CompositionShares:
    """Each component as a percentage of the total. All zero when the total is zero."""
    total = finite_or_zero(total)
    if total == 0:
        return CompositionShares()
    return CompositionShares(
        cash_pct=finite_or_zero(finite_or_zero(cash) / total * 100),
        equity_pct=finite_or_zero(finite_or_zero(equity_value) / total * 100),
        benefits_pct=finite_or_zero(finite_or_zero(benefits_total) / total * 100),
    )


class CompensationCalculator:
    """Calculator that builds a CompensationBreakdown from an offer.

    Pass hydrated catalogs and the contribution limits for the year of
    interest into the constructor. This keeps file I/O in the caller and
    makes the calculation easy to unit test.
    """

    def __init__(self, salary_catalog: SalaryCatalog, benefit_catalog: BenefitCatalog,
                 limits: ContributionLimitSet):
        self.salary_catalog = salary_catalog
        self.benefit_catalog = benefit_catalog
        self.limits = limits

    def calculate(self, offer: OfferInputs) -> CompensationBreakdown:
        """Calculate the full breakdown for an offer.

        Args:
            offer: The offer inputs

        Returns:
            CompensationBreakdown with totals, limit flags and market comparison
        """
        cash = finite_or_zero(offer.cash_salary)
        equity_value = compute_equity_value(offer.equity)

        match = compute_retirement_match(offer.retirement_match, cash)

        catalog_total = compute_catalog_benefits_total(offer.benefits, self.benefit_catalog.retirement_match_id)
        custom_total = compute_custom_benefits_total(offer.custom_benefits)
        benefits_total = finite_or_zero(catalog_total + custom_total)
        hsa_amount = hsa_fsa_amount(offer.benefits)

        total = compute_total_compensation(cash, equity_value, match, benefits_total)
        # The match is shown as part of the benefits category
        total_benefits = finite_or_zero(benefits_total + match)
        shares = compute_composition_shares(cash, equity_value, total_benefits, total)

        result = CompensationBreakdown(
            cash_salary=cash,
            equity_enabled=offer.equity.enabled,
            equity_value=equity_value,
            retirement_match_enabled=offer.retirement_match.enabled,
            retirement_match=match,
            exceeds_retirement_limit=check_retirement_limit(match, self.limits),
            catalog_benefits_total=catalog_total,
            custom_benefits_total=custom_total,
            benefits_total=benefits_total,
            total_benefits=total_benefits,
            hsa_fsa_amount=hsa_amount,
            exceeds_hsa_fsa_limit=check_hsa_fsa_limit(hsa_amount, self.limits),
            total_compensation=total,
            cash_share=shares.cash_pct,
            equity_share=shares.equity_pct,
            benefits_share=shares.benefits_pct,
            occupation_id=offer.occupation_id,
            job_title=self.salary_catalog.display_job_title(offer.occupation_id, offer.custom_job_title),
            limits_year=self.limits.year,
            benefit_lines=benefit_lines(offer.benefits, offer.custom_benefits, self.benefit_catalog.benefit_info()),
            limits=self.limits,
        )

        occupation = self.salary_catalog.find_occupation(offer.occupation_id)
        if occupation is not None:
            market_salary = self.salary_catalog.resolve_market_salary(occupation, offer.metro_id, offer.region_id)
            comparison = compute_market_comparison(cash, market_salary)
            result.market = comparison
            result.market_salary = comparison.market_salary
            result.salary_difference = comparison.difference
            result.salary_difference_percent = comparison.percent_difference

        metro = self.salary_catalog.find_metro_area(offer.metro_id)
        if metro is not None:
            adjustment = compute_cost_of_living_adjustment(cash, metro)
            result.cost_of_living = adjustment
            result.cost_of_living_index = adjustment.cost_of_living_index
            result.cost_of_living_equivalent = adjustment.equivalent_salary

        return result
