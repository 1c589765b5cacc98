"""Calculator for employer-paid benefits.

Catalog benefits only count when enabled. Custom benefits always count,
including negative amounts, which let a user model a benefit cost.
"""

from typing import Dict, Iterable, List, Mapping, Optional

from calc.amounts import finite_or_zero
from model.CompensationResult import BenefitLine
from model.OfferData import BenefitSelection, CustomBenefit
from model.ReferenceData import BenefitInfo, ContributionLimitSet

HSA_FSA_BENEFIT_ID = "hsa"


def compute_catalog_benefits_total(selections: Mapping[str, BenefitSelection],
                                   retirement_match_id: Optional[str] = None) -> float:
    """Sum the amounts of the enabled catalog benefits.

    The retirement match is calculated on its own, so the catalog entry named
    by `retirement_match_id` never counts as a benefit.
    """
    total = 0.0
    for benefit_id, selection in selections.items():
        if benefit_id == retirement_match_id or not selection.enabled:
            continue
        total += finite_or_zero(selection.amount)
    return finite_or_zero(total)


def compute_custom_benefits_total(custom_benefits: Iterable[CustomBenefit]) -> float:
    """Sum the amounts of all custom benefits."""
    return finite_or_zero(sum((finite_or_zero(b.amount) for b in custom_benefits), 0.0))


def compute_benefits_total(selections: Mapping[str, BenefitSelection],
                           custom_benefits: Iterable[CustomBenefit],
                           retirement_match_id: Optional[str] = None) -> float:
    """Total of enabled catalog benefits plus all custom benefits."""
    return finite_or_zero(compute_catalog_benefits_total(selections, retirement_match_id)
                          + compute_custom_benefits_total(custom_benefits))


def hsa_fsa_amount(selections: Mapping[str, BenefitSelection]) -> float:
    """Amount of the HSA/FSA benefit, or 0 if it is not enabled."""
    selection = selections.get(HSA_FSA_BENEFIT_ID)
    if selection is None or not selection.enabled:
        return 0.0
    return finite_or_zero(selection.amount)


def check_hsa_fsa_limit(hsa_amount: float, limits: ContributionLimitSet) -> bool:
    """True if the HSA/FSA amount is above the family HSA limit.

    The coverage type is unknown, so the higher family ceiling is the only
    trigger. The individual and FSA ceilings are mentioned in the warning text.
    """
    return finite_or_zero(hsa_amount) > limits.hsa_family


def benefit_lines(selections: Mapping[str, BenefitSelection],
                  custom_benefits: Iterable[CustomBenefit],
                  benefit_info: Dict[str, BenefitInfo]) -> List[BenefitLine]:
    """Join selections with catalog metadata for display.

    Lists enabled catalog benefits and custom benefits with a positive amount,
    in catalog order followed by entry order.
    """
    lines = []
    for benefit_id, info in benefit_info.items():
        selection = selections.get(benefit_id)
        if selection is None or not selection.enabled:
            continue
        amount = finite_or_zero(selection.amount)
        if amount > 0:
            lines.append(BenefitLine(benefit_id, info.name, amount))
    for custom in custom_benefits:
        amount = finite_or_zero(custom.amount)
        if amount > 0:
            lines.append(BenefitLine(custom.id, custom.name or "Custom Benefit", amount, is_custom=True))
    return lines
