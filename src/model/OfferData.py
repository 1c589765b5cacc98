"""Input records describing a single compensation offer.

An `OfferInputs` value holds everything the user has entered. It is passed
whole into the calculator; editing an offer means building a new record with
`dataclasses.replace`.
"""

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Tuple

from model.ReferenceData import NATIONAL


class MatchMode(str, Enum):
    """How the retirement match value is interpreted."""
    PERCENTAGE = "percentage"  # percent of cash salary
    FIXED_AMOUNT = "fixed-amount"  # annual amount


@dataclass(frozen=True)
class RetirementMatch:
    enabled: bool = False
    mode: MatchMode = MatchMode.PERCENTAGE
    value: float = 0.0


def switch_match_mode(match: RetirementMatch, mode: MatchMode) -> RetirementMatch:
    """Return `match` in the given mode.

    Changing the mode clears the value so a percentage is never read as an
    amount or the other way round.
    """
    mode = MatchMode(mode)
    if mode == match.mode:
        return match
    return replace(match, mode=mode, value=0.0)


@dataclass(frozen=True)
class EquityGrant:
    enabled: bool = False
    shares: float = 0.0
    strike_price: float = 0.0
    fair_market_value: float = 0.0


@dataclass(frozen=True)
class BenefitSelection:
    """The user's state for one catalog benefit."""
    enabled: bool = False
    amount: float = 0.0


@dataclass(frozen=True)
class CustomBenefit:
    """A free-form benefit entered by the user. Always counted."""
    id: str
    name: str = ""
    amount: float = 0.0


def new_custom_benefit(name: str = "", amount: float = 0.0) -> CustomBenefit:
    """Create a custom benefit with a freshly generated id."""
    return CustomBenefit(id=uuid.uuid4().hex, name=name, amount=amount)


@dataclass(frozen=True)
class OfferInputs:
    """Everything entered for one offer."""
    cash_salary: float = 0.0
    equity: EquityGrant = field(default_factory=EquityGrant)
    retirement_match: RetirementMatch = field(default_factory=RetirementMatch)
    benefits: Dict[str, BenefitSelection] = field(default_factory=dict)
    custom_benefits: Tuple[CustomBenefit, ...] = ()

    # Benchmark selection
    occupation_id: Optional[str] = None
    custom_job_title: str = ""
    metro_id: Optional[str] = None
    region_id: str = NATIONAL
