"""
Pricing model: activity quantities -> cost in INR.
Mirrors emissions.py; rounding is to the nearest rupee, halves up.
"""
import logging

from .constants import (
    DAYS_PER_MONTH, DAYS_PER_YEAR, DELIVERY_FEE_AVG, ELECTRICITY_RATES, FOOD_PRICES,
    METRO_FARE_BANDS, MOBILE_DATA_RATE_AVG, MOBILE_DATA_RATES, PACKAGING_CHARGE_AVG, PEAK_SURGE_MULTIPLIER,
    PICKUP_FUEL_COST_PER_KM, PICKUP_MINUTES_PER_KM, PICKUP_ROUND_TRIP_FACTOR, PLATFORM_FEE_AVG,
    RIDE_FARES, SURGE_DISTANCE_THRESHOLD_KM, SURGE_PER_KM,
    City, DataOperator, DataPlan, FoodPriceItem, RideType
)
from .models import DeliveryCharges, EnergyFigures
from .utils.calculations import lookup, require_non_negative, round_half_up

logger = logging.getLogger(__name__)


def ride_cost(ride_type: RideType, distance_km: float, time_minutes: float) -> int:
    """Fare = base + per-km * distance + per-minute * time, rounded."""
    base, per_km, per_min = lookup(RIDE_FARES, ride_type, "ride type")
    require_non_negative("distance_km", distance_km)
    require_non_negative("time_minutes", time_minutes)
    return round_half_up(base + per_km * distance_km + per_min * time_minutes)


def metro_fare(distance_km: float) -> float:
    """
    Flat fare of the first distance band whose upper bound (inclusive)
    covers the trip.
    """
    require_non_negative("distance_km", distance_km)
    # Last band is unbounded, so a finite distance always matches
    return next(fare for upper_km, fare in METRO_FARE_BANDS if distance_km <= upper_km)


def electricity_cost(kwh_per_day: float, city: City = "average") -> EnergyFigures:
    rate = lookup(ELECTRICITY_RATES, city, "city")
    require_non_negative("kwh_per_day", kwh_per_day)
    daily = kwh_per_day * rate
    # Monthly/yearly scale the unrounded daily figure
    return EnergyFigures(
        daily=round_half_up(daily),
        monthly=round_half_up(daily * DAYS_PER_MONTH),
        yearly=round_half_up(daily * DAYS_PER_YEAR),
    )


def mobile_data_rate(operator: DataOperator, plan: DataPlan = "prepaid") -> float:
    plans = lookup(MOBILE_DATA_RATES, operator, "mobile operator")
    return lookup(plans, plan, "data plan")


def streaming_data_cost(gb_used: float, rate_per_gb: float = MOBILE_DATA_RATE_AVG) -> int:
    require_non_negative("gb_used", gb_used)
    require_non_negative("rate_per_gb", rate_per_gb)
    return round_half_up(gb_used * rate_per_gb)


def delivery_charges(distance_km: float, peak_hour: bool = False) -> DeliveryCharges:
    """
    Average app charges for one order. Surge kicks in beyond
    SURGE_DISTANCE_THRESHOLD_KM at SURGE_PER_KM over the whole distance.
    At peak hour the delivery fee is scaled by PEAK_SURGE_MULTIPLIER,
    independently of the distance surge.
    """
    require_non_negative("distance_km", distance_km)
    delivery_fee = round_half_up(DELIVERY_FEE_AVG * PEAK_SURGE_MULTIPLIER) if peak_hour else DELIVERY_FEE_AVG
    surge = round_half_up(distance_km * SURGE_PER_KM) if distance_km > SURGE_DISTANCE_THRESHOLD_KM else 0
    total = delivery_fee + PACKAGING_CHARGE_AVG + PLATFORM_FEE_AVG + surge
    return DeliveryCharges(
        delivery_fee=delivery_fee,
        packaging=PACKAGING_CHARGE_AVG,
        platform_fee=PLATFORM_FEE_AVG,
        surge=surge,
        total=total,
    )


def pickup_fuel_cost(distance_km: float) -> int:
    """Two-wheeler fuel for the round trip to the restaurant."""
    require_non_negative("distance_km", distance_km)
    return round_half_up(distance_km * PICKUP_ROUND_TRIP_FACTOR * PICKUP_FUEL_COST_PER_KM)


def pickup_time(distance_km: float) -> int:
    require_non_negative("distance_km", distance_km)
    return round_half_up(distance_km * PICKUP_ROUND_TRIP_FACTOR * PICKUP_MINUTES_PER_KM)


def food_price(item: FoodPriceItem) -> float:
    return lookup(FOOD_PRICES, item, "food price item")
