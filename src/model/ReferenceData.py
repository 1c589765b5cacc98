"""Static reference records: occupations, metro areas, regions, benefits and limits.

These records are built once from the JSON files in `reference/` and are
never mutated afterwards.
"""

from dataclasses import dataclass, field
from typing import Dict

NATIONAL = "national"

# Regions a metro area can belong to. `national` is only a selector value.
METRO_REGION_IDS = ("northeast", "midwest", "south", "west")

REGION_IDS = (NATIONAL,) + METRO_REGION_IDS


@dataclass(frozen=True)
class Region:
    id: str
    name: str


@dataclass(frozen=True)
class Occupation:
    """An occupation with an average annual base salary for every region."""
    id: str
    title: str
    category: str  # grouping only
    salary_by_region: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class CostOfLivingSource:
    name: str
    url: str


@dataclass(frozen=True)
class MetroArea:
    """A metro area with its region, cost-of-living index and salary multiplier."""
    id: str
    name: str
    state: str
    region: str
    cost_of_living_index: float  # 100 = national average
    salary_multiplier: float  # applied to the region's base salary
    cost_of_living_source: CostOfLivingSource


@dataclass(frozen=True)
class BenefitInfo:
    """Read-only description of a catalog benefit type."""
    id: str
    name: str
    default_amount: float
    description: str
    estimate_guidance: str  # informational only


@dataclass(frozen=True)
class ContributionLimitSet:
    """Regulatory contribution ceilings for a single year."""
    year: int
    hsa_individual: float
    hsa_family: float
    fsa: float
    employee_401k: float
    combined_401k: float  # employee + employer
