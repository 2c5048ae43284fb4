"""
Option comparator: highlight badges, ranking and savings over a finite,
ordered list of Options.

Each scenario is a thin configuration over the same rules:
  - cheapest:   minimum cost (free options optionally excluded)
  - fastest:    minimum time (human-powered options optionally excluded,
                but only when a motorised option exists)
  - healthiest: maximum calories, awarded only when someone burns any
  - greenest:   minimum co2 (free options optionally excluded)
Ties go to the first option in enumeration order. An option carries a
single highlight; config.categories is the precedence order.
"""
import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Literal, Optional, Sequence, Tuple

from .audit import audit_logger
from .constants import MONTHS_PER_YEAR, Highlight
from .errors import InvalidInputError, UnknownKeyError
from .models import Option, SavingsProjection

logger = logging.getLogger(__name__)

TieBreak = Literal["first", "last"]
RANKABLE_METRICS = ("cost", "time", "co2", "calories")


@dataclass(frozen=True)
class ComparatorConfig:
    categories: Tuple[Highlight, ...] = ("healthiest", "cheapest", "fastest", "greenest")
    exclude_zero_cost_from_cheapest: bool = True
    exclude_human_powered_from_fastest: bool = True
    exclude_zero_cost_from_greenest: bool = True
    tie_break: TieBreak = "first"


DEFAULT_CONFIG = ComparatorConfig()


def _pick(options: Sequence[Option], key: Callable[[Option], float], better, tie_break: TieBreak) -> Optional[Option]:
    best = None
    for opt in options:
        if best is None:
            best = opt
            continue
        a, b = key(opt), key(best)
        if better(a, b) or (tie_break == "last" and a == b):
            best = opt
    return best


def pick_min(options: Sequence[Option], key: Callable[[Option], float], tie_break: TieBreak = "first") -> Optional[Option]:
    """Option with the smallest key; ties resolved by tie_break. None if empty."""
    return _pick(options, key, lambda a, b: a < b, tie_break)


def pick_max(options: Sequence[Option], key: Callable[[Option], float], tie_break: TieBreak = "first") -> Optional[Option]:
    return _pick(options, key, lambda a, b: a > b, tie_break)


def _paid(options: Sequence[Option]) -> List[Option]:
    return [o for o in options if o.cost > 0]


def find_highlight_winners(options: Sequence[Option], config: ComparatorConfig = DEFAULT_CONFIG) -> Dict[str, Option]:
    """
    Winner of every configured category, evaluated independently.
    A category with no eligible option is absent from the result.
    """
    winners: Dict[str, Option] = {}
    for category in config.categories:
        if category == "cheapest":
            pool = _paid(options) if config.exclude_zero_cost_from_cheapest else list(options)
            winner = pick_min(pool, lambda o: o.cost, config.tie_break)
        elif category == "fastest":
            pool = list(options)
            if config.exclude_human_powered_from_fastest:
                motorised = [o for o in options if not o.human_powered]
                if motorised:
                    pool = motorised
            winner = pick_min(pool, lambda o: o.time, config.tie_break)
        elif category == "healthiest":
            winner = pick_max(options, lambda o: o.calories, config.tie_break)
            if winner is not None and winner.calories <= 0:
                winner = None
        elif category == "greenest":
            pool = _paid(options) if config.exclude_zero_cost_from_greenest else list(options)
            winner = pick_min(pool, lambda o: o.co2, config.tie_break)
        else:
            raise UnknownKeyError("highlight category", category, ("cheapest", "fastest", "healthiest", "greenest"))

        if winner is not None:
            winners[category] = winner
    return winners


def assign_highlights(options: Sequence[Option], config: ComparatorConfig = DEFAULT_CONFIG) -> List[Option]:
    """
    Return new Options carrying at most one highlight each. When one option
    wins several categories it keeps the earliest in config.categories.
    """
    ids = [o.id for o in options]
    if len(set(ids)) != len(ids):
        raise InvalidInputError("option ids", ids, "must be unique within a comparison")

    winners = find_highlight_winners(options, config)
    labels: Dict[str, Highlight] = {}
    for category in config.categories:
        winner = winners.get(category)
        if winner is not None and winner.id not in labels:
            labels[winner.id] = category
    return [replace(o, highlight=labels.get(o.id)) for o in options]


def mark_recommended(options: Sequence[Option], option_id: Optional[str]) -> List[Option]:
    """The recommended option's badge replaces any category highlight."""
    if option_id is None:
        return list(options)
    return [replace(o, highlight="recommended") if o.id == option_id else o for o in options]


def _metric(option: Option, metric: str) -> float:
    if metric in RANKABLE_METRICS:
        return getattr(option, metric)
    if metric in option.extra:
        return option.extra[metric]
    raise UnknownKeyError("metric", metric, RANKABLE_METRICS + tuple(option.extra))


def rank_options(options: Sequence[Option], metric: str = "cost", descending: bool = False) -> List[Option]:
    """Stable sort by a metric; equal values keep enumeration order."""
    return sorted(options, key=lambda o: _metric(o, metric), reverse=descending)


def project_savings(
    reference: Option,
    chosen: Option,
    events_per_month: Optional[float] = None,
    months_per_year: int = MONTHS_PER_YEAR,
) -> SavingsProjection:
    """
    Savings of choosing `chosen` over `reference` once, optionally projected
    to a month and a year with a fixed usage multiplier.
    """
    per_event = reference.cost - chosen.cost
    per_month = per_event * events_per_month if events_per_month is not None else None
    per_year = per_month * months_per_year if per_month is not None else None

    audit_logger.log_calculation(
        context=f"Savings: {reference.id} -> {chosen.id}",
        formula="(Reference.cost - Chosen.cost) * EventsPerMonth * MonthsPerYear",
        variables={
            "Reference_cost": reference.cost,
            "Chosen_cost": chosen.cost,
            "EventsPerMonth": events_per_month,
            "MonthsPerYear": months_per_year,
        },
        result=per_year if per_year is not None else per_event,
        unit="INR",
    )

    return SavingsProjection(
        per_event=per_event,
        per_month=per_month,
        per_year=per_year,
        co2_kg_per_event=reference.co2 - chosen.co2,
        reference_id=reference.id,
        chosen_id=chosen.id,
    )
