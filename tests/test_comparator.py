import pytest

from ecovision.comparator import (
    ComparatorConfig, assign_highlights, find_highlight_winners, mark_recommended, pick_max, pick_min,
    project_savings, rank_options
)
from ecovision.errors import InvalidInputError, UnknownKeyError
from ecovision.models import Option


def opt(id, cost, time=10, co2=1.0, calories=0.0, human_powered=False, **extra):
    return Option(id=id, name=id.title(), cost=cost, time=time, co2=co2, calories=calories,
                  human_powered=human_powered, extra=extra)


def test_pick_min_first_wins_on_ties():
    options = [opt("a", 10), opt("b", 5), opt("c", 5)]
    assert pick_min(options, lambda o: o.cost).id == "b"
    assert pick_min(options, lambda o: o.cost, tie_break="last").id == "c"
    assert pick_max([opt("x", 1), opt("y", 1)], lambda o: o.cost).id == "x"
    assert pick_min([], lambda o: o.cost) is None


def test_free_options_never_cheapest_by_default():
    options = [opt("ride", 118), opt("metro", 20), opt("walk", 0, human_powered=True)]
    winners = find_highlight_winners(options)
    assert winners["cheapest"].id == "metro"


def test_cheapest_absent_when_everything_is_free():
    options = [opt("a", 0), opt("b", 0)]
    assert "cheapest" not in find_highlight_winners(options)


def test_fastest_skips_human_powered_only_when_motorised_exists():
    options = [opt("car", 50, time=12), opt("sprint", 0, time=5, human_powered=True)]
    assert find_highlight_winners(options)["fastest"].id == "car"

    only_active = [opt("walk", 0, time=60, human_powered=True), opt("cycle", 0, time=20, human_powered=True)]
    assert find_highlight_winners(only_active)["fastest"].id == "cycle"


def test_healthiest_requires_positive_calories():
    options = [opt("a", 10), opt("b", 20)]
    assert "healthiest" not in find_highlight_winners(options)


def test_greenest_can_include_free_options():
    options = [opt("4k", 0, co2=0.44), opt("audio", 0, co2=0.01)]
    assert "greenest" not in find_highlight_winners(options)
    config = ComparatorConfig(categories=("greenest",), exclude_zero_cost_from_greenest=False)
    assert find_highlight_winners(options, config)["greenest"].id == "audio"


def test_one_highlight_per_option_in_precedence_order():
    # metro wins cheapest and greenest but only keeps cheapest
    options = [
        opt("ride", 118, time=12, co2=0.875),
        opt("metro", 20, time=17, co2=0.11, calories=33),
        opt("walk", 0, time=60, co2=0, calories=325, human_powered=True),
    ]
    labelled = {o.id: o.highlight for o in assign_highlights(options)}
    assert labelled == {"ride": "fastest", "metro": "cheapest", "walk": "healthiest"}


def test_assign_highlights_does_not_mutate_inputs():
    options = [opt("a", 1), opt("b", 2)]
    assign_highlights(options)
    assert all(o.highlight is None for o in options)


def test_duplicate_ids_rejected():
    with pytest.raises(InvalidInputError):
        assign_highlights([opt("a", 1), opt("a", 2)])


def test_unknown_category_rejected():
    with pytest.raises(UnknownKeyError):
        find_highlight_winners([opt("a", 1)], ComparatorConfig(categories=("tastiest",)))


def test_mark_recommended_overrides_highlight():
    options = assign_highlights([opt("a", 1), opt("b", 2)])
    marked = mark_recommended(options, "a")
    assert marked[0].highlight == "recommended"
    assert mark_recommended(options, None) == options


def test_rank_options_is_stable():
    options = [opt("a", 5), opt("b", 1), opt("c", 5)]
    assert [o.id for o in rank_options(options)] == ["b", "a", "c"]
    assert [o.id for o in rank_options(options, "cost", descending=True)][0] == "a"
    assert [o.id for o in rank_options([opt("x", 1, watts=80), opt("y", 1, watts=28)], "watts")] == ["y", "x"]
    with pytest.raises(UnknownKeyError):
        rank_options(options, "flavour")


def test_project_savings():
    s = project_savings(opt("delivery", 62, co2=1.35), opt("pickup", 30, co2=1.05), events_per_month=10)
    assert s.per_event == 32
    assert s.per_month == 320
    assert s.per_year == 3840
    assert s.co2_kg_per_event == pytest.approx(0.3)
    assert (s.reference_id, s.chosen_id) == ("delivery", "pickup")

    once = project_savings(opt("a", 10), opt("b", 4))
    assert once.per_event == 6
    assert once.per_month is None and once.per_year is None
