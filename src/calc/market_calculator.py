"""Market salary comparison and cost-of-living adjustment."""

from calc.amounts import finite_or_zero
from model.CompensationResult import CostOfLivingAdjustment, MarketComparison
from model.ReferenceData import MetroArea


def compute_market_comparison(cash: float, market_salary: float) -> MarketComparison:
    """Compare the cash salary with the market salary.

    The percentage is relative to the market salary and is 0 when there is
    no market salary to compare against.
    """
    cash = finite_or_zero(cash)
    market_salary = finite_or_zero(market_salary)
    difference = finite_or_zero(cash - market_salary)
    percent = finite_or_zero(difference / market_salary * 100) if market_salary > 0 else 0.0
    return MarketComparison(market_salary=market_salary, difference=difference, percent_difference=percent)


def compute_cost_of_living_equivalent(cash: float, cost_of_living_index: float) -> float:
    """Salary with the same purchasing power in an average-cost location (index 100)."""
    index = finite_or_zero(cost_of_living_index)
    if index <= 0:
        return 0.0
    return finite_or_zero(finite_or_zero(cash) / (index / 100))


def compute_cost_of_living_adjustment(cash: float, metro: MetroArea) -> CostOfLivingAdjustment:
    return CostOfLivingAdjustment(
        metro_name=metro.name,
        cost_of_living_index=metro.cost_of_living_index,
        difference_from_national=metro.cost_of_living_index - 100,
        equivalent_salary=compute_cost_of_living_equivalent(cash, metro.cost_of_living_index),
        source_name=metro.cost_of_living_source.name,
        source_url=metro.cost_of_living_source.url,
    )
