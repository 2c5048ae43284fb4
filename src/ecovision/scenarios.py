"""
Comparison scenarios. Each domain is a thin configuration over the shared
comparator: build the fixed option set from the scenario inputs, assign
highlights, then project savings against the domain's reference option.

build_*_options return [] when a required input is missing or zero; callers
show an empty state rather than an error.
"""
import logging
from typing import Dict, List, Optional, Sequence, get_args

from .bifl import compare_budget_vs_bifl, cost_per_use
from .catalog import PROTEIN_SOURCES, get_appliance_variants, get_category_by_slug
from .comparator import (
    ComparatorConfig, assign_highlights, mark_recommended, pick_max, pick_min, project_savings
)
from .constants import (
    DEFAULT_COMPARE_YEARS, DELIVERY_ORDERS_PER_MONTH, DIET_SWAPS_PER_MONTH, METRO_STATION_WALK_KM,
    MOBILE_DATA_RATE_AVG, PICKUP_MAX_MINUTES, PICKUP_MIN_SAVINGS, PICKUP_ROUND_TRIP_FACTOR,
    STREAMING_DAYS_PER_MONTH, TRANSPORT_EMISSIONS_G_PER_KM,
    ApplianceCategory, City, HailingRideType, StreamingQuality, TransportMode
)
from .emissions import (
    calories_burned, delivery_emissions, energy_emissions, streaming_data_gb, streaming_emissions,
    transport_emissions
)
from .errors import InvalidInputError, UnknownKeyError
from .models import (
    BIFLProduct, BudgetProduct, Coordinates, Option, ProteinSource, ScenarioResult
)
from .pricing import (
    delivery_charges, electricity_cost, metro_fare, pickup_fuel_cost, pickup_time, ride_cost,
    streaming_data_cost
)
from .utils.calculations import (
    distance_km, estimate_travel_time, require_non_negative, require_positive, round_half_up
)

logger = logging.getLogger(__name__)

TRANSPORT_CONFIG = ComparatorConfig()
DELIVERY_CONFIG = ComparatorConfig()
DIET_CONFIG = ComparatorConfig(categories=("cheapest", "greenest"))
# Tiny loads can round to a zero bill, which is still a real cost
ENERGY_CONFIG = ComparatorConfig(
    categories=("cheapest", "greenest"),
    exclude_zero_cost_from_cheapest=False,
    exclude_zero_cost_from_greenest=False,
)
# On Wi-Fi every quality is free, yet emissions still differ
STREAMING_CONFIG = ComparatorConfig(categories=("cheapest", "greenest"), exclude_zero_cost_from_greenest=False)
BIFL_CONFIG = ComparatorConfig(categories=("cheapest",), exclude_zero_cost_from_cheapest=False)

STREAMING_QUALITY_NAMES: Dict[str, str] = {
    "4k": "4K Ultra HD",
    "1080p": "Full HD",
    "720p": "HD",
    "480p": "SD",
    "audio_only": "Audio Only",
}
STREAMING_RESOLUTIONS: Dict[str, str] = {
    "4k": "2160p",
    "1080p": "1080p",
    "720p": "720p",
    "480p": "480p",
    "audio_only": "Music",
}

MAX_HOURS_PER_DAY = 24


def _is_missing(value: Optional[float]) -> bool:
    return value is None or value == 0


def trip_distance(origin: Optional[Coordinates], destination: Optional[Coordinates]) -> Optional[float]:
    """Straight-line trip length, or None until both endpoints are known."""
    if origin is None or destination is None:
        return None
    return distance_km(origin, destination)


# ============================================================================
# TRANSPORT
# ============================================================================

def build_transport_options(
    distance: Optional[float],
    ride_type: HailingRideType = "ola_mini",
    metro_line: TransportMode = "metro_delhi",
) -> List[Option]:
    """
    Ride-hailing, auto, metro, cycle and walk for one trip.
    Ride and auto fares both take the car travel time as their time input.
    """
    if _is_missing(distance):
        return []
    require_non_negative("distance_km", distance)
    if ride_type not in get_args(HailingRideType):
        raise UnknownKeyError("ride type", ride_type, get_args(HailingRideType))
    if not metro_line.startswith("metro_") or metro_line not in TRANSPORT_EMISSIONS_G_PER_KM:
        raise UnknownKeyError(
            "metro system", metro_line, [m for m in TRANSPORT_EMISSIONS_G_PER_KM if m.startswith("metro_")]
        )

    car_time = estimate_travel_time(distance, "car")
    station_walk_kcal = round_half_up(calories_burned("walking", METRO_STATION_WALK_KM))

    options = [
        Option(
            id=ride_type,
            name=ride_type.replace("_", " ").title(),
            cost=ride_cost(ride_type, distance, car_time),
            time=car_time,
            co2=transport_emissions(ride_type, distance),
            description="AC, door-to-door",
        ),
        Option(
            id="auto_rickshaw",
            name="Auto Rickshaw",
            cost=ride_cost("auto_rickshaw", distance, car_time),
            time=estimate_travel_time(distance, "auto"),
            co2=transport_emissions("auto_rickshaw", distance),
            description="Affordable CNG",
        ),
        Option(
            id=metro_line,
            name="Metro",
            cost=metro_fare(distance),
            time=estimate_travel_time(distance, "metro"),
            co2=transport_emissions(metro_line, distance),
            calories=station_walk_kcal,
            description="Fast in traffic",
        ),
        Option(
            id="cycle",
            name="Cycle",
            cost=0,
            time=estimate_travel_time(distance, "cycle"),
            co2=transport_emissions("bicycle", distance),
            calories=round_half_up(calories_burned("cycling", distance)),
            description="Free + exercise",
            human_powered=True,
        ),
        Option(
            id="walk",
            name="Walk",
            cost=0,
            time=estimate_travel_time(distance, "walk"),
            co2=transport_emissions("walking", distance),
            calories=round_half_up(calories_burned("walking", distance)),
            description="Free + healthy",
            human_powered=True,
        ),
    ]
    return assign_highlights(options, TRANSPORT_CONFIG)


def run_transport_scenario(
    distance: Optional[float],
    ride_type: HailingRideType = "ola_mini",
    metro_line: TransportMode = "metro_delhi",
) -> ScenarioResult:
    """Savings are the ride fare minus the cheapest paid alternative."""
    logger.info("Running Scenario: Transport")
    options = build_transport_options(distance, ride_type, metro_line)
    if not options:
        return ScenarioResult(scenario_name="Transport", options=[])

    reference = options[0]
    cheapest_paid = pick_min([o for o in options if o.cost > 0], lambda o: o.cost)
    savings = project_savings(reference, cheapest_paid)
    return ScenarioResult(
        scenario_name="Transport",
        options=options,
        savings=savings,
        summary={"distance_km": distance},
    )


# ============================================================================
# DELIVERY VS PICKUP
# ============================================================================

def build_delivery_options(distance: Optional[float], peak_hour: bool = False) -> List[Option]:
    """
    One restaurant order fulfilled by app delivery, by driving over, or by
    cycling over. Time is the customer's own travel time. peak_hour applies
    the app's peak surge to the delivery fee.
    """
    if _is_missing(distance):
        return []
    require_non_negative("distance_km", distance)

    charges = delivery_charges(distance, peak_hour)
    co2 = delivery_emissions(distance)
    round_trip = distance * PICKUP_ROUND_TRIP_FACTOR

    options = [
        Option(
            id="delivery",
            name="Delivery",
            cost=charges.total,
            time=0,
            co2=co2.delivery,
            description="Doorstep, plus app fees",
            extra={
                "delivery_fee": charges.delivery_fee,
                "packaging": charges.packaging,
                "platform_fee": charges.platform_fee,
                "surge": charges.surge,
                "peak_hour": peak_hour,
            },
        ),
        Option(
            id="pickup_car",
            name="Pickup (drive)",
            cost=pickup_fuel_cost(distance),
            time=pickup_time(distance),
            co2=co2.pickup_car,
            description="Fuel for the round trip",
        ),
        Option(
            id="pickup_bike",
            name="Pickup (cycle)",
            cost=0,
            time=estimate_travel_time(round_trip, "cycle"),
            co2=co2.pickup_bike,
            calories=round_half_up(calories_burned("cycling", round_trip)),
            description="Free + exercise",
            human_powered=True,
        ),
    ]
    return assign_highlights(options, DELIVERY_CONFIG)


def run_delivery_scenario(distance: Optional[float], peak_hour: bool = False) -> ScenarioResult:
    """
    Savings are the delivery total minus the pickup fuel cost, projected
    over DELIVERY_ORDERS_PER_MONTH orders. Pickup is recommended when it
    saves more than PICKUP_MIN_SAVINGS and takes under PICKUP_MAX_MINUTES.
    """
    logger.info("Running Scenario: Delivery vs Pickup")
    options = build_delivery_options(distance, peak_hour)
    if not options:
        return ScenarioResult(scenario_name="Delivery vs Pickup", options=[])

    delivery, pickup = options[0], options[1]
    savings = project_savings(delivery, pickup, events_per_month=DELIVERY_ORDERS_PER_MONTH)
    worth_it = savings.per_event > PICKUP_MIN_SAVINGS and pickup.time < PICKUP_MAX_MINUTES
    recommended = pickup.id if worth_it else None

    return ScenarioResult(
        scenario_name="Delivery vs Pickup",
        options=mark_recommended(options, recommended),
        savings=savings,
        recommended_id=recommended,
        summary={
            "distance_km": distance,
            "delivery_total": delivery.cost,
            "surge": delivery.extra["surge"],
            "peak_hour": float(peak_hour),
            "pickup_worth_it": float(worth_it),
        },
    )


# ============================================================================
# DIET / PROTEIN
# ============================================================================

def build_protein_options(
    target_protein_g: Optional[float],
    sources: Sequence[ProteinSource] = PROTEIN_SOURCES,
) -> List[Option]:
    """Cost and emissions of hitting a daily protein target from each source."""
    if _is_missing(target_protein_g):
        return []
    require_non_negative("target_protein_g", target_protein_g)

    options = []
    for source in sources:
        require_positive(f"{source.id}.protein_per_100g", source.protein_per_100g)
        grams_needed = target_protein_g / source.protein_per_100g * 100
        options.append(Option(
            id=source.id,
            name=source.name,
            cost=round_half_up(source.price_per_kg / 1000 * grams_needed),
            time=0,
            co2=source.co2_per_kg / 1000 * grams_needed,
            description=source.health,
            extra={
                "grams_needed": round_half_up(grams_needed),
                "protein_per_100g": source.protein_per_100g,
            },
        ))
    return assign_highlights(options, DIET_CONFIG)


def run_diet_scenario(target_protein_g: Optional[float]) -> ScenarioResult:
    """Savings of swapping the priciest source for the cheapest, daily."""
    logger.info("Running Scenario: Protein Compare")
    options = build_protein_options(target_protein_g)
    if not options:
        return ScenarioResult(scenario_name="Protein Compare", options=[])

    priciest = pick_max(options, lambda o: o.cost)
    cheapest = pick_min(options, lambda o: o.cost)
    savings = project_savings(priciest, cheapest, events_per_month=DIET_SWAPS_PER_MONTH)
    return ScenarioResult(
        scenario_name="Protein Compare",
        options=options,
        savings=savings,
        summary={"target_protein_g": target_protein_g},
    )


# ============================================================================
# ENERGY
# ============================================================================

def build_energy_options(
    category: ApplianceCategory,
    hours_per_day: Optional[float],
    city: City = "average",
) -> List[Option]:
    """
    Every variant in an appliance category, costed at its monthly
    electricity bill and monthly grid emissions.
    """
    variants = get_appliance_variants(category)
    if _is_missing(hours_per_day):
        return []
    require_non_negative("hours_per_day", hours_per_day)
    if hours_per_day > MAX_HOURS_PER_DAY:
        raise InvalidInputError("hours_per_day", hours_per_day, f"must be at most {MAX_HOURS_PER_DAY}")

    options = []
    for variant in variants:
        kwh_per_day = variant.watts * hours_per_day / 1000
        bill = electricity_cost(kwh_per_day, city)
        co2 = energy_emissions(variant.watts, hours_per_day)
        options.append(Option(
            id=variant.id,
            name=variant.name,
            cost=bill.monthly,
            time=0,
            co2=co2.monthly,
            description=variant.description,
            extra={
                "watts": variant.watts,
                "kwh_per_day": kwh_per_day,
                "daily_cost": bill.daily,
                "yearly_cost": bill.yearly,
                "yearly_co2": co2.yearly,
            },
        ))
    return assign_highlights(options, ENERGY_CONFIG)


def run_energy_scenario(
    category: ApplianceCategory,
    variant_id: str,
    hours_per_day: Optional[float],
    city: City = "average",
) -> ScenarioResult:
    """
    Monthly (and yearly, x12) savings of switching the selected variant to
    the lowest-wattage one in its category.
    """
    logger.info("Running Scenario: Energy")
    variant_ids = [v.id for v in get_appliance_variants(category)]
    if variant_id not in variant_ids:
        raise UnknownKeyError(f"{category} variant", variant_id, variant_ids)

    options = build_energy_options(category, hours_per_day, city)
    if not options:
        return ScenarioResult(scenario_name="Energy", options=[])

    selected = next(o for o in options if o.id == variant_id)
    lowest = pick_min(options, lambda o: o.extra["watts"])
    savings = project_savings(selected, lowest, events_per_month=1)
    recommended = lowest.id if lowest.id != selected.id else None

    return ScenarioResult(
        scenario_name="Energy",
        options=mark_recommended(options, recommended),
        savings=savings,
        recommended_id=recommended,
        summary={
            "hours_per_day": hours_per_day,
            "selected_monthly_cost": selected.cost,
            "selected_yearly_cost": selected.extra["yearly_cost"],
            "selected_kwh_per_day": selected.extra["kwh_per_day"],
        },
    )


# ============================================================================
# STREAMING
# ============================================================================

def build_streaming_options(
    hours: Optional[float],
    is_mobile: bool = True,
    rate_per_gb: float = MOBILE_DATA_RATE_AVG,
) -> List[Option]:
    """Data, data cost (mobile only) and emissions for each stream quality."""
    if _is_missing(hours):
        return []
    require_non_negative("hours", hours)

    options = []
    for quality in get_args(StreamingQuality):
        data_gb = streaming_data_gb(quality, hours)
        options.append(Option(
            id=quality,
            name=STREAMING_QUALITY_NAMES[quality],
            cost=streaming_data_cost(data_gb, rate_per_gb) if is_mobile else 0,
            time=0,
            co2=streaming_emissions(quality, hours),
            description=STREAMING_RESOLUTIONS[quality],
            extra={"data_gb": data_gb},
        ))
    return assign_highlights(options, STREAMING_CONFIG)


def run_streaming_scenario(
    hours: Optional[float],
    is_mobile: bool = True,
    rate_per_gb: float = MOBILE_DATA_RATE_AVG,
) -> ScenarioResult:
    """Savings of the lowest-emission quality against 4K, every day of the month."""
    logger.info("Running Scenario: Streaming")
    options = build_streaming_options(hours, is_mobile, rate_per_gb)
    if not options:
        return ScenarioResult(scenario_name="Streaming", options=[])

    reference = options[0]
    greenest = pick_min(options, lambda o: o.co2)
    savings = project_savings(reference, greenest, events_per_month=STREAMING_DAYS_PER_MONTH)
    return ScenarioResult(
        scenario_name="Streaming",
        options=options,
        savings=savings,
        summary={"hours": hours, "is_mobile": float(is_mobile), "rate_per_gb": rate_per_gb},
    )


# ============================================================================
# BUY IT FOR LIFE
# ============================================================================

def build_bifl_options(
    budget: BudgetProduct,
    products: Sequence[BIFLProduct],
    compare_years: Optional[float] = DEFAULT_COMPARE_YEARS,
) -> List[Option]:
    """
    The budget product and each durable product, costed as the total spend
    needed to cover compare_years.
    """
    if _is_missing(compare_years):
        return []

    options = []
    budget_cmp = None
    for product in products:
        cmp = compare_budget_vs_bifl(budget, product, compare_years)
        budget_cmp = cmp
        options.append(Option(
            id=product.id,
            name=f"{product.brand} {product.name}",
            cost=cmp.bifl_total,
            time=0,
            co2=0.0,
            description=product.why_bifl,
            extra={
                "purchases": cmp.bifl_purchases,
                "lifespan_years": product.lifespan_years,
                "price": product.price,
                "cost_per_use": cost_per_use(product.price, product.lifespan_years, product.uses_per_week),
                "savings": cmp.savings,
                "savings_percent": cmp.savings_percent,
            },
        ))

    if budget_cmp is None:
        # No durable alternatives: still cost the budget product on its own
        budget_cmp = compare_budget_vs_bifl(budget, budget, compare_years)
    budget_option = Option(
        id="budget",
        name=budget.name,
        cost=budget_cmp.budget_total,
        time=0,
        co2=0.0,
        description="Cheaper, replaced more often",
        extra={
            "purchases": budget_cmp.budget_purchases,
            "lifespan_years": budget.lifespan_years,
            "price": budget.price,
        },
    )
    return assign_highlights([budget_option] + options, BIFL_CONFIG)


def run_bifl_scenario(
    budget: BudgetProduct,
    products: Sequence[BIFLProduct],
    compare_years: Optional[float] = DEFAULT_COMPARE_YEARS,
    name: str = "Buy It For Life",
) -> ScenarioResult:
    """
    The durable product with the largest savings over the horizon is
    recommended, provided it saves anything at all.
    """
    logger.info(f"Running Scenario: {name}")
    options = build_bifl_options(budget, products, compare_years)
    if not options:
        return ScenarioResult(scenario_name=name, options=[])

    budget_option = options[0]
    durable = options[1:]
    best = pick_max(durable, lambda o: o.extra["savings"])
    recommended = best.id if best is not None and best.extra["savings"] > 0 else None

    savings = None
    summary: Dict[str, float] = {"compare_years": compare_years, "budget_total": budget_option.cost}
    if best is not None:
        savings = project_savings(budget_option, best)
        summary.update({
            "bifl_total": best.cost,
            "savings": best.extra["savings"],
            "savings_percent": best.extra["savings_percent"],
            "products_saved": max(0, budget_option.extra["purchases"] - best.extra["purchases"]),
        })

    return ScenarioResult(
        scenario_name=name,
        options=mark_recommended(options, recommended),
        savings=savings,
        recommended_id=recommended,
        summary=summary,
    )


def run_bifl_category_scenario(slug: str, compare_years: Optional[float] = DEFAULT_COMPARE_YEARS) -> ScenarioResult:
    category = get_category_by_slug(slug)
    if category is None:
        raise UnknownKeyError("BIFL category", slug)
    return run_bifl_scenario(category.budget_option, category.products, compare_years, name=f"BIFL: {category.name}")
