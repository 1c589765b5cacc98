import json
import logging
import os
from typing import Dict, List, Optional

from model.OfferData import BenefitSelection
from model.ReferenceData import BenefitInfo

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE_DIR = os.path.normpath(os.path.join(os.path.dirname(__file__), '..', '..', 'reference'))


class BenefitCatalog:
    """The fixed list of common employer-paid benefit types.

    Loaded from `reference/benefits.json`. Holds only the static description
    of each benefit; what the user has enabled lives in a separate mapping of
    `BenefitSelection` values keyed by the same ids.
    """

    def __init__(self, reference_dir: Optional[str] = None):
        self.reference_dir = reference_dir or DEFAULT_REFERENCE_DIR
        self._benefits: Dict[str, BenefitInfo] = {}
        self.retirement_match_id: Optional[str] = None
        self._load_data()

    def _load_data(self):
        ref_path = os.path.join(self.reference_dir, 'benefits.json')
        with open(ref_path, 'r') as f:
            data = json.load(f)

        benefits = data.get("benefits", [])
        if not benefits:
            raise ValueError("benefits.json must contain a 'benefits' array with at least one entry")

        for b in benefits:
            if b["id"] in self._benefits:
                raise ValueError(f"Duplicate benefit id '{b['id']}'")
            if b.get("defaultAmount", 0) < 0:
                raise ValueError(f"Benefit '{b['id']}' has a negative default amount")
            self._benefits[b["id"]] = BenefitInfo(
                id=b["id"],
                name=b["name"],
                default_amount=b.get("defaultAmount", 0),
                description=b.get("description", ""),
                estimate_guidance=b.get("estimateGuidance", ""),
            )

        self.retirement_match_id = data.get("retirementMatchBenefit")
        if self.retirement_match_id is not None and self.retirement_match_id not in self._benefits:
            raise ValueError(f"retirementMatchBenefit '{self.retirement_match_id}' is not a listed benefit")

        logger.debug("Loaded %d benefit types from %s", len(self._benefits), ref_path)

    def list_benefits(self, include_retirement_match: bool = False) -> List[BenefitInfo]:
        """List benefit types in catalog order.

        The retirement match entry is left out unless asked for, since the
        match is entered separately rather than as a selectable benefit.
        """
        return [b for b in self._benefits.values()
                if include_retirement_match or b.id != self.retirement_match_id]

    def find_benefit(self, benefit_id: str) -> Optional[BenefitInfo]:
        return self._benefits.get(benefit_id)

    def benefit_info(self) -> Dict[str, BenefitInfo]:
        """Selectable benefits keyed by id, in catalog order."""
        return {b.id: b for b in self.list_benefits()}

    def default_selections(self) -> Dict[str, BenefitSelection]:
        """Every selectable benefit, disabled, seeded with its default amount."""
        return {b.id: BenefitSelection(enabled=False, amount=b.default_amount) for b in self.list_benefits()}
