import math

import pytest

from ecovision.emissions import (
    appliance_emissions, calories_burned, delivery_emissions, diet_emissions, energy_emissions,
    fashion_emissions, streaming_data_gb, streaming_emissions, transport_emissions
)
from ecovision.errors import InvalidInputError, UnknownActivityKind, UnknownKeyError
from ecovision.models import Coordinates, StreakState
from ecovision.pricing import (
    delivery_charges, electricity_cost, metro_fare, mobile_data_rate, pickup_fuel_cost,
    pickup_time, ride_cost, streaming_data_cost
)
from ecovision.utils.calculations import distance_km, estimate_travel_time, f2, round_half_up


# ---------------------------------------------------------------- emissions

def test_transport_emissions_grams_to_kg():
    assert transport_emissions("ola_mini", 10) == pytest.approx(1.75)
    assert transport_emissions("metro_delhi", 5) == pytest.approx(0.11)
    assert transport_emissions("walking", 12) == 0


def test_unknown_mode_is_an_error_not_zero():
    with pytest.raises(UnknownActivityKind) as exc:
        transport_emissions("hoverboard", 3)
    assert isinstance(exc.value, LookupError)
    assert "hoverboard" in str(exc.value)


def test_negative_distance_rejected():
    with pytest.raises(InvalidInputError):
        transport_emissions("auto_rickshaw", -1)
    with pytest.raises(ValueError):
        calories_burned("walking", -0.5)


def test_delivery_emissions():
    em = delivery_emissions(3)
    assert em.delivery == pytest.approx((300 + 140 * 3 * 2.5) / 1000)
    assert em.pickup_car == pytest.approx(1.05)
    assert em.pickup_bike == 0


def test_energy_emissions_scaling():
    em = energy_emissions(1800, 6)
    assert em.daily == pytest.approx(8.856)
    assert em.monthly == pytest.approx(265.68)
    assert em.yearly == pytest.approx(3232.44)


def test_appliance_emissions_uses_power_table():
    assert appliance_emissions("ac_1_5ton", 6) == energy_emissions(1800, 6)


def test_lookup_helpers():
    assert calories_burned("cycling", 4) == 140
    assert streaming_emissions("4k", 2) == pytest.approx(0.44)
    assert streaming_data_gb("480p", 2) == pytest.approx(1.4)
    assert diet_emissions("lentils_dal", 2) == pytest.approx(1.8)
    assert fashion_emissions("jeans_thrift", 3) == pytest.approx(3.0)


# ---------------------------------------------------------------- pricing

def test_round_half_up():
    assert round_half_up(32.5) == 33
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2
    assert round_half_up(-2.5) == -3
    assert f2(3.14159) == "3.14"


def test_ride_cost():
    # 40 + 12*5 + 1.5*12
    assert ride_cost("ola_mini", 5, 12) == 118
    assert ride_cost("auto_rickshaw", 5, 12) == 75
    with pytest.raises(UnknownKeyError):
        ride_cost("rapido", 5, 12)


def test_metro_fare_bands_are_inclusive():
    assert metro_fare(0) == 10
    assert metro_fare(2.0) == 10
    assert metro_fare(5.0) == 20
    assert metro_fare(5.01) == 30
    assert metro_fare(32) == 50
    assert metro_fare(250) == 60


def test_metro_fare_is_monotonic():
    fares = [metro_fare(d / 2) for d in range(0, 100)]
    assert fares == sorted(fares)


def test_electricity_cost_rounds_each_period_from_unrounded_daily():
    # 10.8 kWh * 6.0 = 64.8 per day
    cost = electricity_cost(10.8)
    assert cost.daily == 65
    assert cost.monthly == 1944
    assert cost.yearly == 23652
    assert electricity_cost(10.8, "delhi").monthly == round_half_up(10.8 * 5.5 * 30)


def test_electricity_cost_unknown_city():
    with pytest.raises(UnknownKeyError):
        electricity_cost(1, "gotham")


def test_delivery_charges_surge_only_beyond_threshold():
    assert delivery_charges(5).surge == 0
    assert delivery_charges(5).total == 62
    far = delivery_charges(6)
    assert far.surge == 18
    assert far.total == 80


def test_peak_hour_stacks_on_distance_surge():
    assert delivery_charges(5, peak_hour=True).total == 80
    peak_far = delivery_charges(6, peak_hour=True)
    assert peak_far.delivery_fee == 63
    assert peak_far.surge == 18
    assert peak_far.total == 98


def test_pickup_and_data_costs():
    assert pickup_fuel_cost(3) == 30
    assert pickup_time(3) == 18
    assert streaming_data_cost(14) == 140
    assert streaming_data_cost(0.25, 10) == 3
    assert mobile_data_rate("airtel", "postpaid") == 18


# ---------------------------------------------------------------- geo / time

def test_distance_is_symmetric_and_zero_for_same_point():
    a = Coordinates(28.6139, 77.2090)
    b = Coordinates(19.0760, 72.8777)
    assert distance_km(a, a) == 0
    assert distance_km(a, b) == pytest.approx(distance_km(b, a))


def test_one_degree_of_latitude():
    d = distance_km(Coordinates(0, 0), Coordinates(1, 0))
    assert d == pytest.approx(2 * math.pi * 6371.0 / 360, rel=1e-9)


def test_coordinates_validated():
    with pytest.raises(InvalidInputError):
        Coordinates(91, 0)
    with pytest.raises(InvalidInputError):
        Coordinates(0, -181)


def test_travel_time():
    assert estimate_travel_time(5, "car") == 12
    assert estimate_travel_time(5, "auto") == 15
    # round(8.57) + 8 minute buffer
    assert estimate_travel_time(5, "metro") == 17
    assert estimate_travel_time(0, "metro") == 8
    assert estimate_travel_time(5, "walk") == 60


# ---------------------------------------------------------------- streak

def test_streak_transitions():
    from datetime import date

    s = StreakState()
    s = s.advance(date(2024, 3, 1))
    assert s.streak_count == 1
    assert s.advance(date(2024, 3, 1)) is s
    s = s.advance(date(2024, 3, 2))
    assert s.streak_count == 2
    s = s.advance(date(2024, 3, 5))
    assert s.streak_count == 1
    assert s.last_event_date == date(2024, 3, 5)


def test_every_mode_is_free_of_emissions_at_zero_km():
    from ecovision.constants import TRANSPORT_EMISSIONS_G_PER_KM

    for mode in TRANSPORT_EMISSIONS_G_PER_KM:
        assert transport_emissions(mode, 0) == 0
        assert transport_emissions(mode, 3.2) >= 0
