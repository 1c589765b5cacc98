import json
import logging
import os
from typing import Dict, List, Optional, Tuple

from calc.amounts import round_half_up
from model.ReferenceData import (
    METRO_REGION_IDS,
    NATIONAL,
    REGION_IDS,
    CostOfLivingSource,
    MetroArea,
    Occupation,
    Region,
)

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE_DIR = os.path.normpath(os.path.join(os.path.dirname(__file__), '..', '..', 'reference'))

# Occupation id for a user-supplied job title
OTHER_OCCUPATION_ID = "other"


class SalaryCatalog:
    """Holds occupation salary benchmarks, metro areas and regions.

    Loads the tables from `reference/salary-data.json` once at construction.
    The data is never modified afterwards, so a single instance can be shared
    by any number of calculations.
    """

    def __init__(self, reference_dir: Optional[str] = None):
        """Initialize by loading and validating the salary reference file.

        Args:
            reference_dir: Directory holding salary-data.json. Defaults to the
                repository's `reference` directory.
        """
        self.reference_dir = reference_dir or DEFAULT_REFERENCE_DIR
        self._regions: List[Region] = []
        self._occupations: Dict[str, Occupation] = {}
        self._metro_areas: Dict[str, MetroArea] = {}
        self._load_data()

    def _load_data(self):
        """Load data from JSON and check the table invariants."""
        ref_path = os.path.join(self.reference_dir, 'salary-data.json')
        with open(ref_path, 'r') as f:
            data = json.load(f)

        region_ids = [r["id"] for r in data.get("regions", [])]
        if tuple(region_ids) != REGION_IDS:
            raise ValueError(f"salary-data.json must define exactly the regions {list(REGION_IDS)}, got {region_ids}")
        self._regions = [Region(r["id"], r["name"]) for r in data["regions"]]

        for occ in data.get("occupations", []):
            occ_id = occ["id"]
            if occ_id in self._occupations:
                raise ValueError(f"Duplicate occupation id '{occ_id}'")
            salaries = occ.get("salaryByRegion", {})
            missing = [r for r in REGION_IDS if r not in salaries]
            if missing:
                raise ValueError(f"Occupation '{occ_id}' is missing salaries for regions: {missing}")
            for region, salary in salaries.items():
                if salary <= 0:
                    raise ValueError(f"Occupation '{occ_id}' has a non-positive salary for region '{region}'")
            self._occupations[occ_id] = Occupation(
                id=occ_id,
                title=occ["title"],
                category=occ.get("category", ""),
                salary_by_region={r: salaries[r] for r in REGION_IDS},
            )
        if OTHER_OCCUPATION_ID not in self._occupations:
            raise ValueError(f"salary-data.json must define the '{OTHER_OCCUPATION_ID}' occupation")

        sources = data.get("costOfLivingSources", {})
        for metro in data.get("metroAreas", []):
            metro_id = metro["id"]
            if metro_id in self._metro_areas:
                raise ValueError(f"Duplicate metro area id '{metro_id}'")
            if metro["region"] not in METRO_REGION_IDS:
                raise ValueError(f"Metro area '{metro_id}' has invalid region '{metro['region']}'")
            if metro["costOfLivingIndex"] <= 0 or metro["salaryMultiplier"] <= 0:
                raise ValueError(f"Metro area '{metro_id}' must have a positive cost-of-living index and salary multiplier")
            source = sources.get(metro["costOfLivingSource"])
            if source is None:
                raise ValueError(f"Metro area '{metro_id}' references unknown source '{metro['costOfLivingSource']}'")
            self._metro_areas[metro_id] = MetroArea(
                id=metro_id,
                name=metro["name"],
                state=metro["state"],
                region=metro["region"],
                cost_of_living_index=metro["costOfLivingIndex"],
                salary_multiplier=metro["salaryMultiplier"],
                cost_of_living_source=CostOfLivingSource(source["name"], source["url"]),
            )

        logger.debug("Loaded %d occupations and %d metro areas from %s",
                     len(self._occupations), len(self._metro_areas), ref_path)

    def list_occupations(self) -> List[Occupation]:
        return list(self._occupations.values())

    def list_metro_areas(self) -> List[MetroArea]:
        return list(self._metro_areas.values())

    def list_regions(self) -> List[Region]:
        return list(self._regions)

    def find_occupation(self, occupation_id: Optional[str]) -> Optional[Occupation]:
        """Look up an occupation by id. Returns None if there is no match."""
        if not occupation_id:
            return None
        return self._occupations.get(occupation_id)

    def find_metro_area(self, metro_id: Optional[str]) -> Optional[MetroArea]:
        """Look up a metro area by id. Returns None if there is no match."""
        if not metro_id:
            return None
        return self._metro_areas.get(metro_id)

    def find_region(self, region_id: Optional[str]) -> Optional[Region]:
        for region in self._regions:
            if region.id == region_id:
                return region
        return None

    def market_salary_basis(self, occupation: Occupation,
                            metro_id: Optional[str] = None,
                            region_id: Optional[str] = None) -> Tuple[str, Optional[MetroArea]]:
        """Pick the location a benchmark salary is based on.

        Precedence is metro, then region, then national. Returns the region
        whose salary is used and the metro whose multiplier applies (None
        unless a known metro was given). The metro always wins, even if the
        region passed alongside it disagrees with the metro's own region.
        """
        metro = self.find_metro_area(metro_id)
        if metro is not None:
            return metro.region, metro
        if region_id and region_id != NATIONAL and region_id in occupation.salary_by_region:
            return region_id, None
        return NATIONAL, None

    def resolve_market_salary(self, occupation: Occupation,
                              metro_id: Optional[str] = None,
                              region_id: Optional[str] = None) -> float:
        """Return the benchmark salary for an occupation at a location.

        A metro salary is the metro region's salary times the metro
        multiplier, rounded half-up to a whole unit. See `market_salary_basis`
        for which location applies.
        """
        basis_region, metro = self.market_salary_basis(occupation, metro_id, region_id)
        regional_salary = occupation.salary_by_region[basis_region]
        if metro is not None:
            return round_half_up(regional_salary * metro.salary_multiplier)
        return regional_salary

    def occupations_by_category(self) -> Dict[str, List[Occupation]]:
        """Group occupations by category, keeping the table order."""
        grouped: Dict[str, List[Occupation]] = {}
        for occ in self._occupations.values():
            grouped.setdefault(occ.category, []).append(occ)
        return grouped

    def metro_areas_by_region(self, region_id: str) -> List[MetroArea]:
        return [m for m in self._metro_areas.values() if m.region == region_id]

    def display_job_title(self, occupation_id: Optional[str], custom_title: str = "") -> str:
        """Title to show for the selection: the custom title for 'other', else the occupation title."""
        if occupation_id == OTHER_OCCUPATION_ID and custom_title:
            return custom_title
        occupation = self.find_occupation(occupation_id)
        return occupation.title if occupation else ""
