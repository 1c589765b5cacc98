"""Renderer classes for displaying compensation results.

Each renderer takes a CompensationBreakdown and prints the part of it it is
responsible for. The catalog renderers print the reference tables.
"""

import math
from abc import ABC, abstractmethod
from typing import List, Optional

from catalog.BenefitCatalog import BenefitCatalog
from catalog.ContributionLimits import ContributionLimits
from catalog.SalaryCatalog import OTHER_OCCUPATION_ID, SalaryCatalog
from model.CompensationResult import CompensationBreakdown
from model.field_metadata import PERCENT_FIELDS, get_short_name


def format_currency(value: float) -> str:
    """Format as whole US dollars, e.g. 150000 -> '$150,000', -500 -> '-$500'.

    Halves round away from zero.
    """
    whole = int(math.floor(abs(value) + 0.5))
    sign = "-" if value < 0 and whole != 0 else ""
    return f"{sign}${whole:,}"


def format_percent(value: float) -> str:
    """Format a signed percentage with one decimal, e.g. '+11.1%' or '-5.0%'."""
    return f"{'+' if value > 0 else ''}{value:.1f}%"


def format_field(field_name: str, value) -> str:
    """Format a breakdown field value for display."""
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, str):
        return value
    if field_name in PERCENT_FIELDS:
        return f"{value:.1f}%"
    if field_name in ("limits_year", "cost_of_living_index"):
        return f"{value:g}"
    return format_currency(value)


def limit_warnings(data: CompensationBreakdown) -> List[str]:
    """Warning messages for contribution limits the offer exceeds.

    The totals are never changed; these are informational only.
    """
    limits = data.limits
    if limits is None:
        return []
    warnings = []
    if data.exceeds_retirement_limit:
        warnings.append(
            f"This 401(k) contribution ({format_currency(data.retirement_match)}) exceeds the IRS annual limit "
            f"of {format_currency(limits.combined_401k)} for combined employee and employer contributions "
            f"({limits.year})."
        )
    if data.exceeds_hsa_fsa_limit:
        warnings.append(
            f"This exceeds the IRS annual HSA family limit of {format_currency(limits.hsa_family)} "
            f"(individual: {format_currency(limits.hsa_individual)}) or FSA limit of "
            f"{format_currency(limits.fsa)} ({limits.year})."
        )
    return warnings


def market_message(data: CompensationBreakdown) -> List[str]:
    """Headline and advice lines for the market comparison."""
    comparison = data.market
    metro_name = data.cost_of_living.metro_name if data.cost_of_living else None
    is_other = data.occupation_id == OTHER_OCCUPATION_ID
    if comparison.difference >= 0:
        baseline = "regional average" if is_other else f"typical {data.job_title}"
        where = f" in {metro_name}" if metro_name else ""
        return [
            "You're earning above the market average!",
            f"Your cash compensation is {format_percent(comparison.percent_difference)} higher than the {baseline}{where}.",
        ]
    baseline = "regional average" if is_other else "market average"
    where = f" for {metro_name}" if metro_name else ""
    return [
        "Your base salary is below market average",
        f"Consider negotiating or focusing on total comp (equity + benefits). "
        f"The {baseline} is {format_currency(comparison.market_salary)}{where}.",
    ]


def _banner(title: str) -> None:
    print()
    print("=" * 60)
    print(f"{title:^60}")
    print("=" * 60)


def _section(title: str) -> None:
    print()
    print("-" * 60)
    print(title)
    print("-" * 60)


def _line(label: str, value: str) -> None:
    print(f"  {label + ':':<40} {value:>15}")


class BaseRenderer(ABC):
    """Abstract base class for all renderers."""

    @abstractmethod
    def render(self, data: CompensationBreakdown) -> None:
        """Render the data to output.

        Args:
            data: The calculated breakdown for one offer
        """
        pass


class SummaryRenderer(BaseRenderer):
    """Renderer for the total compensation breakdown."""

    def render(self, data: CompensationBreakdown) -> None:
        _banner("TOTAL COMPENSATION")

        _section("BREAKDOWN")
        _line("Cash Salary", format_currency(data.cash_salary))
        if data.equity_enabled:
            _line("Equity Value", format_currency(data.equity_value))
        if data.retirement_match_enabled:
            _line("401(k) Match", format_currency(data.retirement_match))
        _line("Benefits", format_currency(data.benefits_total))
        for line in data.benefit_lines:
            _line(f"  {line.name}", format_currency(line.amount))
        print(f"  {'-' * 40}")
        _line("Total Compensation", format_currency(data.total_compensation))

        warnings = limit_warnings(data)
        if warnings:
            _section("WARNINGS")
            for warning in warnings:
                print(f"  Warning: {warning}")

        if data.total_compensation > 0:
            CompositionRenderer().render_shares(data)

        if data.has_market_comparison:
            MarketComparisonRenderer().render(data)
        print()


class BenefitsRenderer(BaseRenderer):
    """Renderer listing each benefit counted in the total."""

    def render(self, data: CompensationBreakdown) -> None:
        _banner("BENEFITS")
        if not data.benefit_lines and not data.retirement_match_enabled:
            print("  No benefits selected")
            print()
            return
        print()
        for line in data.benefit_lines:
            label = f"{line.name} (custom)" if line.is_custom else line.name
            _line(label, format_currency(line.amount))
        # Negative custom benefits are not listed individually
        costs = data.custom_benefits_total - sum(line.amount for line in data.benefit_lines if line.is_custom)
        if costs < 0:
            _line("Custom Benefit Costs", format_currency(costs))
        if data.retirement_match_enabled:
            _line("401(k) Match", format_currency(data.retirement_match))
        print(f"  {'-' * 40}")
        _line("Total Benefits", format_currency(data.total_benefits))

        warnings = limit_warnings(data)
        for warning in warnings:
            print(f"  Warning: {warning}")
        print()


class CompositionRenderer(BaseRenderer):
    """Renderer for the share of each component in the total."""

    def render(self, data: CompensationBreakdown) -> None:
        _banner("COMPENSATION COMPOSITION")
        if data.total_compensation == 0:
            print("  Nothing to show: total compensation is zero")
            print()
            return
        self.render_shares(data)
        print()

    def render_shares(self, data: CompensationBreakdown) -> None:
        _section("COMPOSITION")
        _line("Cash", f"{data.cash_share:.1f}%")
        if data.equity_enabled:
            _line("Equity", f"{data.equity_share:.1f}%")
        _line("Benefits", f"{data.benefits_share:.1f}%")


class MarketComparisonRenderer(BaseRenderer):
    """Renderer for the market salary comparison and cost-of-living adjustment."""

    def render(self, data: CompensationBreakdown) -> None:
        if not data.has_market_comparison:
            _banner("MARKET COMPARISON")
            print("  Select an occupation and enter a cash salary to compare against the market")
            print()
            return

        title = "MARKET COMPARISON"
        if data.job_title:
            title += f": {data.job_title.upper()}"
        _section(title)
        comparison = data.market
        _line("Your Cash Salary", format_currency(data.cash_salary))
        _line("Market Average", format_currency(comparison.market_salary))
        _line("Difference", format_percent(comparison.percent_difference))
        direction = "above" if comparison.difference >= 0 else "below"
        print(f"  {format_currency(abs(comparison.difference))} {direction} market")
        for message in market_message(data):
            print(f"  {message}")

        col = data.cost_of_living
        if col is not None and col.cost_of_living_index != 100:
            _section("COST OF LIVING ADJUSTMENT")
            sign = "+" if col.difference_from_national > 0 else ""
            print(f"  {col.metro_name} has a cost of living index of {col.cost_of_living_index:g} "
                  f"({sign}{col.difference_from_national:g}% vs national average).")
            print(f"  Your {format_currency(data.cash_salary)} has roughly the same purchasing power as "
                  f"{format_currency(col.equivalent_salary)} in an average-cost US city.")
            print(f"  Source: {col.source_name} ({col.source_url})")


class FieldsRenderer(BaseRenderer):
    """Renderer for a chosen set of breakdown fields, one per line."""

    def __init__(self, fields: List[str], title: Optional[str] = None):
        self.fields = fields
        self.title = title or "SELECTED FIELDS"

    def render(self, data: CompensationBreakdown) -> None:
        _banner(self.title)
        print()
        for name in self.fields:
            _line(get_short_name(name), format_field(name, getattr(data, name, None)))
        print()


class CatalogRenderer:
    """Prints the reference tables: occupations, metro areas, regions, benefits and limits."""

    def __init__(self, salary_catalog: SalaryCatalog, benefit_catalog: BenefitCatalog,
                 contribution_limits: ContributionLimits):
        self.salary_catalog = salary_catalog
        self.benefit_catalog = benefit_catalog
        self.contribution_limits = contribution_limits

    def render(self, table: str) -> None:
        renderers = {
            'occupations': self.render_occupations,
            'metros': self.render_metro_areas,
            'regions': self.render_regions,
            'benefits': self.render_benefits,
            'limits': self.render_limits,
        }
        if table not in renderers:
            raise ValueError(f"Unknown table '{table}'. Expected one of: {list(renderers)}")
        renderers[table]()

    def render_occupations(self) -> None:
        _banner("OCCUPATIONS")
        for category, occupations in self.salary_catalog.occupations_by_category().items():
            _section(category.upper())
            for occ in occupations:
                national = occ.salary_by_region["national"]
                print(f"  {occ.id:<28} {occ.title:<32} {format_currency(national):>10}")
        print()

    def render_metro_areas(self, region_id: Optional[str] = None) -> None:
        _banner("METRO AREAS")
        print(f"  {'Id':<16} {'Name':<26} {'Region':<10} {'COL':>5} {'Mult':>6}")
        print(f"  {'-' * 16} {'-' * 26} {'-' * 10} {'-' * 5} {'-' * 6}")
        metros = (self.salary_catalog.metro_areas_by_region(region_id) if region_id
                  else self.salary_catalog.list_metro_areas())
        for metro in metros:
            name = f"{metro.name}, {metro.state}"
            print(f"  {metro.id:<16} {name:<26} {metro.region:<10} "
                  f"{metro.cost_of_living_index:>5g} {metro.salary_multiplier:>6.2f}")
        print()

    def render_regions(self) -> None:
        _banner("REGIONS")
        print()
        for region in self.salary_catalog.list_regions():
            print(f"  {region.id:<16} {region.name}")
        print()

    def render_benefits(self) -> None:
        _banner("BENEFITS")
        print()
        for benefit in self.benefit_catalog.list_benefits():
            print(f"  {benefit.id:<14} {benefit.name:<30} {format_currency(benefit.default_amount):>10}")
            if benefit.description:
                print(f"  {'':<14} {benefit.description}")
        print()

    def render_limits(self) -> None:
        _banner("CONTRIBUTION LIMITS")
        for year in self.contribution_limits.years():
            limits = self.contribution_limits.for_year(year)
            _section(str(year))
            _line("HSA (Individual)", format_currency(limits.hsa_individual))
            _line("HSA (Family)", format_currency(limits.hsa_family))
            _line("FSA", format_currency(limits.fsa))
            _line("401(k) Employee", format_currency(limits.employee_401k))
            _line("401(k) Combined", format_currency(limits.combined_401k))
        print()


# Registry mapping mode names to renderer classes
RENDERER_REGISTRY = {
    'Summary': SummaryRenderer,
    'Benefits': BenefitsRenderer,
    'MarketComparison': MarketComparisonRenderer,
    'Composition': CompositionRenderer,
}
