import pytest

from ecovision.bifl import compare_budget_vs_bifl, cost_per_use, cost_per_year, total_cost_over_years
from ecovision.catalog import (
    BIFL_CATEGORIES, get_category_by_slug, get_product_by_id, match_product_to_category
)
from ecovision.errors import InvalidInputError
from ecovision.models import BudgetProduct
from ecovision.scenarios import run_bifl_scenario


def test_cost_per_use():
    # 2999 / (8 years * 52 weeks * 5 uses)
    assert cost_per_use(2999, 8, 5) == pytest.approx(2999 / 2080)
    # never used: the whole price is the cost of the one "use"
    assert cost_per_use(500, 2, 0) == 500


def test_cost_per_year_and_total():
    assert cost_per_year(3000, 6) == 500
    total = total_cost_over_years(2999, 8, 10)
    assert total.purchases == 2
    assert total.total == 5998


def test_zero_lifespan_rejected():
    with pytest.raises(InvalidInputError):
        cost_per_year(100, 0)
    with pytest.raises(InvalidInputError):
        total_cost_over_years(100, 1, 0)


def test_budget_vs_bifl_backpack():
    cmp = compare_budget_vs_bifl(BudgetProduct("Generic", 799, 1), BudgetProduct("Alpine", 2999, 8), 10)
    assert cmp.budget_total == 7990
    assert cmp.bifl_total == 5998
    assert cmp.savings == 1992
    assert cmp.savings_percent == pytest.approx(24.93, abs=0.01)
    assert cmp.products_saved == 8
    assert not cmp.bifl_costs_more


def test_savings_never_negative():
    cmp = compare_budget_vs_bifl(BudgetProduct("Cheap", 100, 5), BudgetProduct("Pricey", 5000, 10), 10)
    assert cmp.savings == 0
    assert cmp.savings_percent == 0
    assert cmp.bifl_costs_more


def test_no_recommendation_when_nothing_saves():
    result = run_bifl_scenario(
        BudgetProduct("Cheap", 100, 5),
        get_category_by_slug("tech").products,
        compare_years=10,
    )
    assert result.recommended_id is None
    assert result.get("budget").highlight == "cheapest"


def test_catalog_lookups():
    assert len(BIFL_CATEGORIES) == 6
    product, category = get_product_by_id("wildcraft-alpine")
    assert product.brand == "Wildcraft"
    assert category.slug == "backpacks"
    assert get_product_by_id("nope") is None
    assert get_category_by_slug("nope") is None


def test_match_scanned_product():
    category, products = match_product_to_category("Nike Running Sneakers")
    assert category.slug == "shoes"
    assert len(products) <= 2
    category, _ = match_product_to_category("Something", "Travel Luggage")
    assert category.slug == "backpacks"
    assert match_product_to_category("Bananas", "Fruit") is None
