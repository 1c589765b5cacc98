"""Loading offers from `input-parameters/<offer>/offer.json`.

Offer files use camelCase keys:

    {
      "cashCompensation": 150000,
      "equity": {"enabled": true, "numberOfShares": 1000,
                 "strikePrice": 10, "fairMarketValue": 25},
      "retirementMatch": {"enabled": true, "mode": "percentage", "value": 5},
      "benefits": {"health": {"enabled": true, "amount": 12000}},
      "customBenefits": [{"name": "Pet insurance", "amount": 600}],
      "occupation": {"id": "software-engineer", "customTitle": ""},
      "location": {"metroArea": "seattle", "region": "west"},
      "limitsYear": 2025
    }

Every section is optional. Benefits missing from the file start disabled at
their catalog default amount.
"""

import json
import logging
import os
from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

from calc.amounts import finite_or_zero
from calc.compensation_calculator import CompensationCalculator
from catalog.BenefitCatalog import BenefitCatalog
from catalog.ContributionLimits import ContributionLimits
from catalog.SalaryCatalog import SalaryCatalog
from model.CompensationResult import CompensationBreakdown
from model.OfferData import (
    BenefitSelection,
    EquityGrant,
    MatchMode,
    OfferInputs,
    RetirementMatch,
    new_custom_benefit,
)
from model.ReferenceData import NATIONAL, REGION_IDS

logger = logging.getLogger(__name__)

DEFAULT_BASE_PATH = os.path.normpath(os.path.join(os.path.dirname(__file__), '..'))
OFFER_FILE_NAME = 'offer.json'


def parse_amount(text: Any, allow_negative: bool = False) -> float:
    """Parse a user-entered amount, treating anything unusable as 0.

    Accepts numbers or strings such as "150,000" or "$1,200.50". Negative
    values become 0 unless `allow_negative` is set (custom benefits only).
    """
    if isinstance(text, str):
        text = text.strip().replace(',', '').replace('$', '')
    value = finite_or_zero(text)
    if value < 0 and not allow_negative:
        return 0.0
    return value


def offer_path(offer_name: str, base_path: Optional[str] = None) -> str:
    return os.path.join(base_path or DEFAULT_BASE_PATH, 'input-parameters', offer_name, OFFER_FILE_NAME)


def load_offer_spec(offer_name: str, base_path: Optional[str] = None) -> dict:
    """Read the raw offer dictionary.

    Raises:
        FileNotFoundError: If the offer file does not exist.
    """
    path = offer_path(offer_name, base_path)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Offer file not found: {path}")
    with open(path, 'r') as f:
        return json.load(f)


def _section(value, name: str, expected: type = dict):
    """Return an offer section, checking that it has the expected JSON shape."""
    if not isinstance(value, expected):
        kind = "a list" if expected is list else "an object"
        raise ValueError(f"Offer section '{name}' must be {kind}, got {type(value).__name__}")
    return value


def _build_equity(data: dict) -> EquityGrant:
    return EquityGrant(
        enabled=bool(data.get('enabled', False)),
        shares=parse_amount(data.get('numberOfShares', 0)),
        strike_price=parse_amount(data.get('strikePrice', 0)),
        fair_market_value=parse_amount(data.get('fairMarketValue', 0)),
    )


def _build_retirement_match(data: dict) -> RetirementMatch:
    mode_name = data.get('mode', MatchMode.PERCENTAGE.value)
    try:
        mode = MatchMode(mode_name)
    except ValueError:
        raise ValueError(f"Unknown retirement match mode '{mode_name}'. "
                         f"Expected one of: {[m.value for m in MatchMode]}") from None
    return RetirementMatch(
        enabled=bool(data.get('enabled', False)),
        mode=mode,
        value=parse_amount(data.get('value', 0)),
    )


def _build_benefits(data: dict, benefit_catalog: BenefitCatalog) -> Dict[str, BenefitSelection]:
    selections = benefit_catalog.default_selections()
    for benefit_id, entry in data.items():
        entry = _section(entry, f"benefits.{benefit_id}")
        if benefit_id == benefit_catalog.retirement_match_id:
            raise ValueError(f"Benefit '{benefit_id}' is entered as retirementMatch, not as a benefit")
        if benefit_id not in selections:
            raise ValueError(f"Unknown benefit '{benefit_id}'")
        current = selections[benefit_id]
        selections[benefit_id] = BenefitSelection(
            enabled=bool(entry.get('enabled', current.enabled)),
            amount=parse_amount(entry['amount']) if 'amount' in entry else current.amount,
        )
    return selections


def build_offer_inputs(spec: dict, benefit_catalog: BenefitCatalog) -> OfferInputs:
    """Turn a raw offer dictionary into an OfferInputs record.

    Args:
        spec: The offer dictionary as read from offer.json
        benefit_catalog: Catalog used to seed and check the benefits section

    Returns:
        OfferInputs ready for CompensationCalculator.calculate

    Raises:
        ValueError: For a section of the wrong shape, or an unknown benefit,
            match mode or region.
    """
    spec = _section(spec, "offer file")
    occupation = _section(spec.get('occupation', {}), 'occupation')
    location = _section(spec.get('location', {}), 'location')
    custom_entries = _section(spec.get('customBenefits', []), 'customBenefits', list)

    region_id = location.get('region') or NATIONAL
    if region_id not in REGION_IDS:
        raise ValueError(f"Unknown region '{region_id}'. Expected one of: {list(REGION_IDS)}")

    custom_benefits = []
    for i, entry in enumerate(custom_entries):
        entry = _section(entry, f"customBenefits[{i}]")
        custom_benefits.append(new_custom_benefit(
            name=entry.get('name', ''),
            amount=parse_amount(entry.get('amount', 0), allow_negative=True),
        ))

    return OfferInputs(
        cash_salary=parse_amount(spec.get('cashCompensation', 0)),
        equity=_build_equity(_section(spec.get('equity', {}), 'equity')),
        retirement_match=_build_retirement_match(_section(spec.get('retirementMatch', {}), 'retirementMatch')),
        benefits=_build_benefits(_section(spec.get('benefits', {}), 'benefits'), benefit_catalog),
        custom_benefits=tuple(custom_benefits),
        occupation_id=occupation.get('id') or None,
        custom_job_title=occupation.get('customTitle', ''),
        metro_id=location.get('metroArea') or None,
        region_id=region_id,
    )


class OfferContext:
    """Catalogs and limits loaded once and shared by every offer calculation."""

    def __init__(self, base_path: Optional[str] = None):
        self.base_path = base_path or DEFAULT_BASE_PATH
        reference_dir = os.path.join(self.base_path, 'reference')
        self.salary_catalog = SalaryCatalog(reference_dir)
        self.benefit_catalog = BenefitCatalog(reference_dir)
        self.contribution_limits = ContributionLimits(reference_dir)

    def calculator(self, limits_year: Optional[int] = None) -> CompensationCalculator:
        limits = self.contribution_limits.for_year(limits_year)
        return CompensationCalculator(self.salary_catalog, self.benefit_catalog, limits)

    def empty_offer(self) -> OfferInputs:
        """A blank offer with every catalog benefit present but disabled."""
        return OfferInputs(benefits=self.benefit_catalog.default_selections())

    def load_offer(self, offer_name: str) -> Tuple[OfferInputs, Optional[int]]:
        """Load an offer and the limits year it asks for (None for the latest)."""
        spec = load_offer_spec(offer_name, self.base_path)
        offer = build_offer_inputs(spec, self.benefit_catalog)
        limits_year = spec.get('limitsYear')
        logger.info("Loaded offer '%s'", offer_name)
        return offer, limits_year

    def calculate(self, offer: OfferInputs, limits_year: Optional[int] = None) -> CompensationBreakdown:
        return self.calculator(limits_year).calculate(offer)

    def calculate_offer(self, offer_name: str) -> CompensationBreakdown:
        offer, limits_year = self.load_offer(offer_name)
        return self.calculate(offer, limits_year)


def with_region_for_metro(offer: OfferInputs, salary_catalog: SalaryCatalog, metro_id: Optional[str]) -> OfferInputs:
    """Select a metro area and set the region to the metro's region.

    Clearing the metro (None or empty) keeps the current region.
    """
    metro = salary_catalog.find_metro_area(metro_id)
    if metro is None:
        return replace(offer, metro_id=None)
    return replace(offer, metro_id=metro.id, region_id=metro.region)
