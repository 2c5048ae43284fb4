"""
Buy-It-For-Life arithmetic: cost per use, cost per year, and a budget vs
durable purchase comparison over a fixed horizon.
"""
import logging
from math import ceil
from typing import Union

from .audit import audit_logger
from .constants import DEFAULT_COMPARE_YEARS, WEEKS_PER_YEAR
from .models import BIFLProduct, BudgetBiflComparison, BudgetProduct, TotalCost
from .utils.calculations import require_non_negative, require_positive

logger = logging.getLogger(__name__)

PricedProduct = Union[BudgetProduct, BIFLProduct]


def cost_per_use(price: float, lifespan_years: float, uses_per_week: float) -> float:
    """
    Price spread over every use in the product's life.
    A product that is never used costs its full price per use.
    """
    require_non_negative("price", price)
    require_positive("lifespan_years", lifespan_years)
    require_non_negative("uses_per_week", uses_per_week)
    total_uses = lifespan_years * WEEKS_PER_YEAR * uses_per_week
    if total_uses == 0:
        return price
    return price / total_uses


def cost_per_year(price: float, lifespan_years: float) -> float:
    require_non_negative("price", price)
    require_positive("lifespan_years", lifespan_years)
    return price / lifespan_years


def total_cost_over_years(price: float, lifespan_years: float, years: float) -> TotalCost:
    """Number of purchases needed to cover `years`, and what they cost."""
    require_non_negative("price", price)
    require_positive("lifespan_years", lifespan_years)
    require_positive("years", years)
    purchases = ceil(years / lifespan_years)
    return TotalCost(total=price * purchases, purchases=purchases)


def compare_budget_vs_bifl(
    budget: PricedProduct,
    bifl: PricedProduct,
    compare_years: float = DEFAULT_COMPARE_YEARS,
) -> BudgetBiflComparison:
    """
    Compare repeatedly buying the budget product against buying the durable
    one over compare_years. Both arguments only need `price` and
    `lifespan_years`. savings never goes negative; when the durable product
    costs more, bifl_costs_more is set instead.
    """
    budget_cost = total_cost_over_years(budget.price, budget.lifespan_years, compare_years)
    bifl_cost = total_cost_over_years(bifl.price, bifl.lifespan_years, compare_years)

    raw_savings = budget_cost.total - bifl_cost.total
    savings_percent = raw_savings / budget_cost.total * 100 if raw_savings > 0 else 0.0

    audit_logger.log_calculation(
        context=f"BIFL comparison over {compare_years} years",
        formula="Budget.price * ceil(Y/Budget.life) - BIFL.price * ceil(Y/BIFL.life)",
        variables={
            "Budget_price": budget.price,
            "Budget_life": budget.lifespan_years,
            "BIFL_price": bifl.price,
            "BIFL_life": bifl.lifespan_years,
            "Years": compare_years,
        },
        result=raw_savings,
        unit="INR",
    )

    return BudgetBiflComparison(
        budget_total=budget_cost.total,
        budget_purchases=budget_cost.purchases,
        bifl_total=bifl_cost.total,
        bifl_purchases=bifl_cost.purchases,
        savings=max(0, raw_savings),
        savings_percent=savings_percent,
        products_saved=max(0, budget_cost.purchases - bifl_cost.purchases),
        bifl_costs_more=bifl_cost.total > budget_cost.total,
    )
