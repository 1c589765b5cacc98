import json
import logging
import os
from typing import Dict, List, Optional

from model.ReferenceData import ContributionLimitSet

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE_DIR = os.path.normpath(os.path.join(os.path.dirname(__file__), '..', '..', 'reference'))


class ContributionLimits:
    """Holds the year-stamped HSA, FSA and 401(k) contribution limits.

    Loads statutory values from `reference/contribution-limits.json`. The
    limits are thresholds for warnings only; nothing is ever capped to them.
    """

    def __init__(self, reference_dir: Optional[str] = None):
        self.reference_dir = reference_dir or DEFAULT_REFERENCE_DIR
        self.limits_by_year: Dict[int, ContributionLimitSet] = {}
        self._load_data()

    def _load_data(self):
        """Load data from JSON, checking the years are sequential."""
        ref_path = os.path.join(self.reference_dir, 'contribution-limits.json')
        with open(ref_path, 'r') as f:
            data = json.load(f)

        tax_years = data.get("taxYears", [])
        if not tax_years:
            raise ValueError("contribution-limits.json must contain a 'taxYears' array with at least one entry")

        # Sort tax years to ensure they're in order
        tax_years = sorted(tax_years, key=lambda x: x["year"])

        for i in range(1, len(tax_years)):
            if tax_years[i]["year"] != tax_years[i-1]["year"] + 1:
                raise ValueError(f"Tax years must be sequential. Gap found between {tax_years[i-1]['year']} and {tax_years[i]['year']}")

        for year_data in tax_years:
            year = year_data["year"]
            self.limits_by_year[year] = ContributionLimitSet(
                year=year,
                hsa_individual=year_data.get("hsaIndividual", 0),
                hsa_family=year_data.get("hsaFamily", 0),
                fsa=year_data.get("fsa", 0),
                employee_401k=year_data.get("employee401k", 0),
                combined_401k=year_data.get("combined401k", 0),
            )

        self.latest_year = tax_years[-1]["year"]
        logger.debug("Loaded contribution limits for %s", self.years())

    def years(self) -> List[int]:
        return sorted(self.limits_by_year)

    def for_year(self, year: Optional[int] = None) -> ContributionLimitSet:
        """Get the limits for a year, or the most recent year if none is given.

        Raises:
            ValueError: If there is no data for the year.
        """
        if year is None:
            year = self.latest_year
        if year not in self.limits_by_year:
            raise ValueError(f"No contribution limits available for year {year}")
        return self.limits_by_year[year]
