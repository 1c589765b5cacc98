"""Compensation Calculator Tools for MCP Server.

This module provides the tool implementations that wrap the compensation
calculator and the reference catalogs and expose them through MCP.
"""

import os
import sys
import logging
from typing import Any, Dict, List, Optional

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from model.CompensationResult import CompensationBreakdown
from model.OfferData import OfferInputs
from model.ReferenceData import NATIONAL
from offer_loader import OFFER_FILE_NAME, OfferContext, build_offer_inputs
from render.renderers import limit_warnings

logger = logging.getLogger(__name__)


def _round(value: Optional[float]) -> Optional[float]:
    return None if value is None else round(value, 2)


def breakdown_to_dict(breakdown: CompensationBreakdown) -> dict:
    """JSON-friendly view of a breakdown."""
    result = {
        "total_compensation": _round(breakdown.total_compensation),
        "components": {
            "cash_salary": _round(breakdown.cash_salary),
            "equity_value": _round(breakdown.equity_value),
            "retirement_match": _round(breakdown.retirement_match),
            "benefits": _round(breakdown.benefits_total),
        },
        "benefits": {
            "selected_total": _round(breakdown.catalog_benefits_total),
            "custom_total": _round(breakdown.custom_benefits_total),
            "total_including_match": _round(breakdown.total_benefits),
            "items": [
                {"id": line.id, "name": line.name, "amount": _round(line.amount), "custom": line.is_custom}
                for line in breakdown.benefit_lines
            ],
        },
        "composition_percent": {
            "cash": round(breakdown.cash_share, 1),
            "equity": round(breakdown.equity_share, 1),
            "benefits": round(breakdown.benefits_share, 1),
        },
        "limits": {
            "year": breakdown.limits_year,
            "exceeds_retirement_limit": breakdown.exceeds_retirement_limit,
            "exceeds_hsa_fsa_limit": breakdown.exceeds_hsa_fsa_limit,
            "warnings": limit_warnings(breakdown),
        },
    }
    if breakdown.market is not None:
        result["market_comparison"] = market_to_dict(breakdown)
    return result


def market_to_dict(breakdown: CompensationBreakdown) -> dict:
    result = {
        "job_title": breakdown.job_title,
        "cash_salary": _round(breakdown.cash_salary),
        "market_salary": _round(breakdown.market_salary),
        "difference": _round(breakdown.salary_difference),
        "percent_difference": round(breakdown.salary_difference_percent, 1),
        "above_market": breakdown.salary_difference >= 0,
    }
    col = breakdown.cost_of_living
    if col is not None:
        result["cost_of_living"] = {
            "metro_area": col.metro_name,
            "index": col.cost_of_living_index,
            "difference_from_national_percent": col.difference_from_national,
            "equivalent_salary": _round(col.equivalent_salary),
            "source": {"name": col.source_name, "url": col.source_url},
        }
    return result


class OfferTools:
    """Tools for a single offer loaded from input-parameters."""

    def __init__(self, context: OfferContext, offer_name: str):
        """Load and calculate the offer.

        Args:
            context: Shared catalogs and contribution limits
            offer_name: Name of the offer folder in input-parameters
        """
        self.context = context
        self.offer_name = offer_name
        self.offer, self.limits_year = context.load_offer(offer_name)
        self.breakdown: CompensationBreakdown = context.calculate(self.offer, self.limits_year)

    def get_offer_summary(self) -> dict:
        result = breakdown_to_dict(self.breakdown)
        result["offer"] = self.offer_name
        return result

    def get_market_comparison(self) -> dict:
        if self.breakdown.market is None:
            return {
                "offer": self.offer_name,
                "message": "No occupation selected for this offer, so there is no market comparison."
            }
        result = market_to_dict(self.breakdown)
        result["offer"] = self.offer_name
        return result


class MultiOfferTools:
    """Manager for multiple offers plus the reference catalogs.

    Discovers all offers under input-parameters and caches their
    calculations, allowing queries to specify which offer to use.
    """

    def __init__(self, base_path: str, default_offer: Optional[str] = None):
        """Initialize the catalogs and discover all available offers.

        Args:
            base_path: Path to the repository root
            default_offer: Default offer to use when none specified
        """
        self.base_path = base_path
        self.context = OfferContext(base_path)
        self.offers: Dict[str, OfferTools] = {}
        self.default_offer = default_offer
        self._discover_offers()

    def _discover_offers(self):
        """Discover and load all available offers."""
        input_params_path = os.path.join(self.base_path, 'input-parameters')

        if not os.path.exists(input_params_path):
            return

        for name in sorted(os.listdir(input_params_path)):
            offer_dir = os.path.join(input_params_path, name)
            if os.path.isdir(offer_dir) and os.path.exists(os.path.join(offer_dir, OFFER_FILE_NAME)):
                try:
                    self.offers[name] = OfferTools(self.context, name)
                except (ValueError, KeyError, OSError) as e:
                    # Log but don't fail on individual offer errors
                    logger.warning("Failed to load offer '%s': %s", name, e)

        # Set default if not specified
        if self.default_offer is None and self.offers:
            self.default_offer = list(self.offers.keys())[0]

    def _get_offer(self, offer: Optional[str] = None) -> OfferTools:
        """Get the specified offer or the default."""
        offer_name = offer or self.default_offer
        if offer_name not in self.offers:
            raise ValueError(f"Offer '{offer_name}' not found. Available offers: {list(self.offers.keys())}")
        return self.offers[offer_name]

    def list_offers(self) -> dict:
        """List all available offers with their headline figures."""
        offers_info = {}
        for name, tools in self.offers.items():
            offers_info[name] = {
                "cash_salary": _round(tools.breakdown.cash_salary),
                "total_compensation": _round(tools.breakdown.total_compensation),
                "job_title": tools.breakdown.job_title,
            }
        return {
            "available_offers": list(self.offers.keys()),
            "default_offer": self.default_offer,
            "offers_info": offers_info
        }

    def reload_offers(self) -> dict:
        """Reload all offers from disk, refreshing the cache."""
        old_offers = set(self.offers.keys())
        self.offers.clear()
        self.default_offer = None
        self._discover_offers()
        new_offers = set(self.offers.keys())

        return {
            "status": "success",
            "message": f"Reloaded {len(self.offers)} offers",
            "offers_loaded": list(self.offers.keys()),
            "default_offer": self.default_offer,
            "changes": {
                "added": sorted(new_offers - old_offers),
                "removed": sorted(old_offers - new_offers),
                "reloaded": sorted(old_offers & new_offers)
            }
        }

    def get_offer_summary(self, offer: Optional[str] = None) -> dict:
        return self._get_offer(offer).get_offer_summary()

    def get_market_comparison(self, offer: Optional[str] = None) -> dict:
        return self._get_offer(offer).get_market_comparison()

    def calculate_compensation(self, offer_spec: Dict[str, Any]) -> dict:
        """Calculate an ad hoc offer given in the offer.json format."""
        inputs: OfferInputs = build_offer_inputs(offer_spec, self.context.benefit_catalog)
        breakdown = self.context.calculate(inputs, offer_spec.get('limitsYear'))
        return breakdown_to_dict(breakdown)

    def compare_offers(self, offer1: str, offer2: str) -> dict:
        """Compare two offers component by component.

        Args:
            offer1: First offer name to compare
            offer2: Second offer name to compare
        """
        if offer1 not in self.offers:
            return {"error": f"Offer '{offer1}' not found. Available: {list(self.offers.keys())}"}
        if offer2 not in self.offers:
            return {"error": f"Offer '{offer2}' not found. Available: {list(self.offers.keys())}"}

        b1 = self.offers[offer1].breakdown
        b2 = self.offers[offer2].breakdown

        def compare_metric(val1: float, val2: float) -> dict:
            """Compare a metric and determine which offer is higher."""
            diff = val2 - val1
            if val1 != 0:
                pct_diff = (diff / abs(val1)) * 100
            else:
                pct_diff = 100 if val2 > 0 else (-100 if val2 < 0 else 0)
            winner = offer1 if val1 > val2 else (offer2 if val2 > val1 else "tie")
            return {
                offer1: round(val1, 2),
                offer2: round(val2, 2),
                "difference": round(diff, 2),
                "percent_difference": round(pct_diff, 1),
                "better": winner,
            }

        all_metrics = {
            "total_compensation": ("Total Compensation", b1.total_compensation, b2.total_compensation),
            "cash_salary": ("Cash Salary", b1.cash_salary, b2.cash_salary),
            "equity_value": ("Equity Value", b1.equity_value, b2.equity_value),
            "retirement_match": ("401(k) Match", b1.retirement_match, b2.retirement_match),
            "benefits": ("Benefits", b1.benefits_total, b2.benefits_total),
        }
        # Purchasing power only compares when both offers have a metro area
        if b1.cost_of_living_equivalent is not None and b2.cost_of_living_equivalent is not None:
            all_metrics["cost_of_living_equivalent"] = (
                "Cash Salary Adjusted for Cost of Living",
                b1.cost_of_living_equivalent, b2.cost_of_living_equivalent,
            )

        comparison = {"offers": [offer1, offer2], "metrics": {}}
        wins = {offer1: 0, offer2: 0, "tie": 0}
        for key, (description, val1, val2) in all_metrics.items():
            result = compare_metric(val1, val2)
            comparison["metrics"][key] = {"description": description, **result}
            wins[result["better"]] += 1

        total_better = comparison["metrics"]["total_compensation"]["better"]
        comparison["summary"] = {
            "metrics_compared": len(all_metrics),
            "wins": {offer1: wins[offer1], offer2: wins[offer2], "tied": wins["tie"]},
            "higher_total_compensation": total_better,
        }

        if total_better == "tie":
            recommendation = "Both offers have the same total compensation."
        else:
            diff = comparison["metrics"]["total_compensation"]["difference"]
            recommendation = f"'{total_better}' pays ${abs(diff):,.0f} more in total compensation."
            cash_better = comparison["metrics"]["cash_salary"]["better"]
            if cash_better not in ("tie", total_better):
                recommendation += f" '{cash_better}' has the higher cash salary, so the difference comes from equity and benefits."
        comparison["recommendation"] = recommendation
        return comparison

    # Reference catalogs

    def list_occupations(self, category: Optional[str] = None) -> dict:
        salary_catalog = self.context.salary_catalog
        occupations = [
            {
                "id": occ.id,
                "title": occ.title,
                "category": occ.category,
                "salary_by_region": dict(occ.salary_by_region),
            }
            for occ in salary_catalog.list_occupations()
            if category is None or occ.category == category
        ]
        return {
            "categories": list(salary_catalog.occupations_by_category().keys()),
            "occupations": occupations
        }

    def list_metro_areas(self, region: Optional[str] = None) -> dict:
        metros = self.context.salary_catalog.list_metro_areas()
        return {
            "metro_areas": [
                {
                    "id": m.id,
                    "name": m.name,
                    "state": m.state,
                    "region": m.region,
                    "cost_of_living_index": m.cost_of_living_index,
                    "salary_multiplier": m.salary_multiplier,
                    "cost_of_living_source": {"name": m.cost_of_living_source.name, "url": m.cost_of_living_source.url},
                }
                for m in metros if region is None or m.region == region
            ]
        }

    def list_regions(self) -> dict:
        return {"regions": [{"id": r.id, "name": r.name} for r in self.context.salary_catalog.list_regions()]}

    def list_benefits(self) -> dict:
        return {
            "benefits": [
                {
                    "id": b.id,
                    "name": b.name,
                    "default_amount": b.default_amount,
                    "description": b.description,
                    "estimate_guidance": b.estimate_guidance,
                }
                for b in self.context.benefit_catalog.list_benefits()
            ],
            "note": "The employer 401(k) match is entered as retirementMatch, not as a benefit."
        }

    def get_contribution_limits(self, year: Optional[int] = None) -> dict:
        limits = self.context.contribution_limits.for_year(year)
        return {
            "year": limits.year,
            "available_years": self.context.contribution_limits.years(),
            "hsa_individual": limits.hsa_individual,
            "hsa_family": limits.hsa_family,
            "fsa": limits.fsa,
            "employee_401k": limits.employee_401k,
            "combined_401k": limits.combined_401k,
        }

    def resolve_market_salary(self, occupation: str, metro_area: Optional[str] = None,
                              region: Optional[str] = None) -> dict:
        salary_catalog = self.context.salary_catalog
        occ = salary_catalog.find_occupation(occupation)
        if occ is None:
            raise ValueError(f"Unknown occupation '{occupation}'")
        basis_region, metro = salary_catalog.market_salary_basis(occ, metro_area, region)
        if metro is not None:
            basis = f"{basis_region} salary x {metro.salary_multiplier} for {metro.name}"
        elif basis_region == NATIONAL:
            basis = "national average"
        else:
            basis = f"{basis_region} regional average"
        return {
            "occupation": occ.id,
            "title": occ.title,
            "market_salary": salary_catalog.resolve_market_salary(occ, metro_area, region),
            "basis": basis,
        }
