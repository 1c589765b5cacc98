"""Field metadata for CompensationBreakdown fields.

This module provides descriptions and short names for the flat fields of
`CompensationBreakdown`. Short names are used as labels by the renderers and
the shell 'get' command.
"""

from dataclasses import dataclass
from typing import Dict, List


@dataclass
class FieldInfo:
    """Metadata for a single field."""
    short_name: str  # Label (unique, concise)
    description: str  # Full description of the field


# Field metadata dictionary mapping field names to their info
FIELD_METADATA: Dict[str, FieldInfo] = {
    # Cash and Equity
    "cash_salary": FieldInfo("Cash Salary", "Annual base salary before taxes"),
    "equity_value": FieldInfo("Equity", "Shares x (fair market value - strike price); negative when underwater"),

    # Retirement
    "retirement_match": FieldInfo("401(k) Match", "Annual employer retirement match"),
    "exceeds_retirement_limit": FieldInfo("Over 401(k) Limit", "True if the match exceeds the combined contribution limit"),

    # Benefits
    "catalog_benefits_total": FieldInfo("Selected Benefits", "Total of the enabled employer-paid benefits"),
    "custom_benefits_total": FieldInfo("Custom Benefits", "Total of the user-defined benefits (may be negative)"),
    "benefits_total": FieldInfo("Benefits", "Selected benefits plus custom benefits"),
    "total_benefits": FieldInfo("Total Benefits", "Benefits plus the retirement match"),
    "hsa_fsa_amount": FieldInfo("HSA/FSA", "Employer HSA/FSA contribution when enabled"),
    "exceeds_hsa_fsa_limit": FieldInfo("Over HSA Limit", "True if the HSA/FSA amount exceeds the family HSA limit"),

    # Total
    "total_compensation": FieldInfo("Total Comp", "Cash + equity + benefits + retirement match"),

    # Composition
    "cash_share": FieldInfo("Cash %", "Cash salary as a percentage of total compensation"),
    "equity_share": FieldInfo("Equity %", "Equity as a percentage of total compensation"),
    "benefits_share": FieldInfo("Benefits %", "Benefits (including match) as a percentage of total compensation"),

    # Market
    "job_title": FieldInfo("Job Title", "Selected occupation or custom job title"),
    "market_salary": FieldInfo("Market Salary", "Benchmark salary for the occupation and location"),
    "salary_difference": FieldInfo("Vs Market", "Cash salary minus market salary"),
    "salary_difference_percent": FieldInfo("Vs Market %", "Difference from market as a percentage of market salary"),

    # Cost of Living
    "cost_of_living_index": FieldInfo("COL Index", "Metro cost-of-living index (100 = national average)"),
    "cost_of_living_equivalent": FieldInfo("COL Equivalent", "Salary with the same purchasing power in an average-cost city"),

    "limits_year": FieldInfo("Limits Year", "Year of the contribution limits used for warnings"),
}

# Fields grouped for the shell 'fields' listing
FIELD_CATEGORIES: Dict[str, List[str]] = {
    "Cash and Equity": ["cash_salary", "equity_value"],
    "Retirement": ["retirement_match", "exceeds_retirement_limit"],
    "Benefits": ["catalog_benefits_total", "custom_benefits_total", "benefits_total",
                 "total_benefits", "hsa_fsa_amount", "exceeds_hsa_fsa_limit"],
    "Total": ["total_compensation"],
    "Composition": ["cash_share", "equity_share", "benefits_share"],
    "Market": ["job_title", "market_salary", "salary_difference", "salary_difference_percent"],
    "Cost of Living": ["cost_of_living_index", "cost_of_living_equivalent"],
    "Reference": ["limits_year"],
}

# Fields holding percentages rather than currency amounts
PERCENT_FIELDS = ("cash_share", "equity_share", "benefits_share", "salary_difference_percent")


def get_short_name(field_name: str) -> str:
    """Get the short name for a field, or the field name if not found."""
    info = FIELD_METADATA.get(field_name)
    return info.short_name if info else field_name


def get_description(field_name: str) -> str:
    """Get the description for a field, or empty string if not found."""
    info = FIELD_METADATA.get(field_name)
    return info.description if info else ""


def get_field_info(field_name: str) -> FieldInfo | None:
    """Get the full FieldInfo for a field, or None if not found."""
    return FIELD_METADATA.get(field_name)
