"""Result data model for a compensation calculation.

`CompensationBreakdown` holds every figure calculated for an offer as flat
fields so renderers and the shell `get` command can pull out what they need.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from model.ReferenceData import ContributionLimitSet


@dataclass(frozen=True)
class MarketComparison:
    market_salary: float
    difference: float  # cash - market
    percent_difference: float  # 0 when no market salary


@dataclass(frozen=True)
class CostOfLivingAdjustment:
    metro_name: str
    cost_of_living_index: float
    difference_from_national: float  # index - 100
    equivalent_salary: float  # purchasing power in an average-cost location
    source_name: str
    source_url: str


@dataclass(frozen=True)
class CompositionShares:
    cash_pct: float = 0.0
    equity_pct: float = 0.0
    benefits_pct: float = 0.0


@dataclass(frozen=True)
class BenefitLine:
    """A single benefit shown in the breakdown."""
    id: str
    name: str
    amount: float
    is_custom: bool = False


@dataclass
class CompensationBreakdown:
    """All calculated figures for a single offer."""

    # Cash and equity
    cash_salary: float = 0.0
    equity_enabled: bool = False
    equity_value: float = 0.0  # signed; negative when underwater

    # Retirement match
    retirement_match_enabled: bool = False
    retirement_match: float = 0.0
    exceeds_retirement_limit: bool = False

    # Benefits
    catalog_benefits_total: float = 0.0
    custom_benefits_total: float = 0.0
    benefits_total: float = 0.0  # catalog + custom
    total_benefits: float = 0.0  # benefits_total + retirement_match
    hsa_fsa_amount: float = 0.0
    exceeds_hsa_fsa_limit: bool = False

    # Total
    total_compensation: float = 0.0

    # Composition (percent of total)
    cash_share: float = 0.0
    equity_share: float = 0.0
    benefits_share: float = 0.0

    # Market benchmark (None when no occupation is selected)
    occupation_id: Optional[str] = None
    job_title: str = ""
    market_salary: Optional[float] = None
    salary_difference: Optional[float] = None
    salary_difference_percent: Optional[float] = None

    # Cost of living (None when no metro is selected)
    cost_of_living_index: Optional[float] = None
    cost_of_living_equivalent: Optional[float] = None

    # Year of the contribution limits used for the warnings
    limits_year: int = 0

    benefit_lines: List[BenefitLine] = field(default_factory=list)
    limits: Optional[ContributionLimitSet] = None
    market: Optional[MarketComparison] = None
    cost_of_living: Optional[CostOfLivingAdjustment] = None

    @property
    def composition(self) -> CompositionShares:
        return CompositionShares(self.cash_share, self.equity_share, self.benefits_share)

    @property
    def has_market_comparison(self) -> bool:
        """True when there is a benchmark and a salary to compare against it."""
        return self.market is not None and self.market.market_salary > 0 and self.cash_salary > 0
