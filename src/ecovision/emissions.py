"""
Emissions model: activity quantities -> kg CO2e.

All factors are compiled-in constants (see constants.py). Every function is
pure; unknown activity keys raise UnknownActivityKind and negative quantities
raise InvalidInputError.
"""
import logging

from .constants import (
    APPLIANCE_POWER_W, CALORIE_BURN_KCAL_PER_KM, DAYS_PER_MONTH, DAYS_PER_YEAR,
    DELIVERY_BASE_EMISSION_G, DELIVERY_PER_KM_EMISSION_G, DELIVERY_ROUTE_FACTOR,
    DIET_EMISSIONS_KG_PER_KG, FASHION_EMISSIONS_KG_PER_ITEM, GRID_EMISSION_FACTOR_KG_PER_KWH,
    PICKUP_CAR_PER_KM_G, PICKUP_ROUND_TRIP_FACTOR, STREAMING_DATA_GB_PER_HOUR,
    STREAMING_EMISSIONS_G_PER_HOUR, TRANSPORT_EMISSIONS_G_PER_KM,
    ActiveMode, ApplianceType, FashionItem, FoodType, StreamingQuality, TransportMode
)
from .errors import UnknownActivityKind
from .models import DeliveryEmissions, EnergyFigures
from .utils.calculations import lookup, require_non_negative, scale_figures

logger = logging.getLogger(__name__)


def transport_emissions(mode: TransportMode, distance_km: float) -> float:
    """kg CO2 for travelling distance_km by mode."""
    factor = lookup(TRANSPORT_EMISSIONS_G_PER_KM, mode, "transport mode", UnknownActivityKind)
    require_non_negative("distance_km", distance_km)
    return factor * distance_km / 1000.0


def delivery_emissions(distance_km: float) -> DeliveryEmissions:
    """
    kg CO2 for one food order fulfilled three ways:
      - delivery: base + per-km leg scaled by DELIVERY_ROUTE_FACTOR
      - pickup_car: customer drives there and back
      - pickup_bike: human-powered, zero by definition
    """
    require_non_negative("distance_km", distance_km)
    delivery = (
        DELIVERY_BASE_EMISSION_G
        + DELIVERY_PER_KM_EMISSION_G * distance_km * DELIVERY_ROUTE_FACTOR
    ) / 1000.0
    pickup_car = PICKUP_CAR_PER_KM_G * distance_km * PICKUP_ROUND_TRIP_FACTOR / 1000.0
    return DeliveryEmissions(delivery=delivery, pickup_car=pickup_car, pickup_bike=0.0)


def energy_emissions(watts: float, hours_per_day: float) -> EnergyFigures:
    """
    Grid emissions for an appliance running hours_per_day.
    Monthly/yearly use fixed 30/365-day multipliers (an approximation).
    """
    require_non_negative("watts", watts)
    require_non_negative("hours_per_day", hours_per_day)
    kwh_per_day = watts * hours_per_day / 1000.0
    figures = scale_figures(kwh_per_day * GRID_EMISSION_FACTOR_KG_PER_KWH, DAYS_PER_MONTH, DAYS_PER_YEAR)
    return EnergyFigures(**figures)


def appliance_emissions(appliance: ApplianceType, hours_per_day: float) -> EnergyFigures:
    watts = lookup(APPLIANCE_POWER_W, appliance, "appliance", UnknownActivityKind)
    return energy_emissions(watts, hours_per_day)


def calories_burned(activity: ActiveMode, distance_km: float) -> float:
    """kcal burned over distance_km; linear, no incline or fatigue."""
    rate = lookup(CALORIE_BURN_KCAL_PER_KM, activity, "activity", UnknownActivityKind)
    require_non_negative("distance_km", distance_km)
    return rate * distance_km


def streaming_emissions(quality: StreamingQuality, hours: float) -> float:
    grams_per_hour = lookup(STREAMING_EMISSIONS_G_PER_HOUR, quality, "streaming quality", UnknownActivityKind)
    require_non_negative("hours", hours)
    return grams_per_hour * hours / 1000.0


def streaming_data_gb(quality: StreamingQuality, hours: float) -> float:
    gb_per_hour = lookup(STREAMING_DATA_GB_PER_HOUR, quality, "streaming quality", UnknownActivityKind)
    require_non_negative("hours", hours)
    return gb_per_hour * hours


def diet_emissions(food: FoodType, kg: float) -> float:
    factor = lookup(DIET_EMISSIONS_KG_PER_KG, food, "food", UnknownActivityKind)
    require_non_negative("kg", kg)
    return factor * kg


def fashion_emissions(item: FashionItem, count: float = 1) -> float:
    factor = lookup(FASHION_EMISSIONS_KG_PER_ITEM, item, "fashion item", UnknownActivityKind)
    require_non_negative("count", count)
    return factor * count
