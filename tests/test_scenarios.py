import pytest

from ecovision.errors import InvalidInputError, UnknownKeyError
from ecovision.models import Coordinates
from ecovision.scenarios import (
    build_delivery_options, build_energy_options, build_protein_options, build_streaming_options,
    build_transport_options, run_bifl_category_scenario, run_delivery_scenario, run_diet_scenario,
    run_energy_scenario, run_streaming_scenario, run_transport_scenario, trip_distance
)


def by_id(options):
    return {o.id: o for o in options}


# ---------------------------------------------------------------- transport

def test_transport_needs_a_distance():
    assert build_transport_options(0) == []
    assert build_transport_options(None) == []
    assert run_transport_scenario(0).options == []
    with pytest.raises(InvalidInputError):
        build_transport_options(-2)


def test_trip_distance_waits_for_both_ends():
    assert trip_distance(Coordinates(28.6, 77.2), None) is None
    assert trip_distance(Coordinates(28.6, 77.2), Coordinates(28.6, 77.2)) == 0


def test_transport_options_at_5km():
    opts = by_id(build_transport_options(5))
    assert list(opts) == ["ola_mini", "auto_rickshaw", "metro_delhi", "cycle", "walk"]

    assert opts["ola_mini"].cost == 118
    assert opts["ola_mini"].time == 12
    assert opts["auto_rickshaw"].cost == 75
    assert opts["auto_rickshaw"].cost < opts["ola_mini"].cost
    assert opts["metro_delhi"].cost == 20
    assert opts["metro_delhi"].time == 17
    # 0.5 km walk to the station, 32.5 kcal rounded half up
    assert opts["metro_delhi"].calories == 33
    assert opts["walk"].calories == 325
    assert opts["cycle"].co2 == 0


def test_transport_highlights():
    opts = by_id(build_transport_options(5))
    assert opts["ola_mini"].highlight == "fastest"
    assert opts["metro_delhi"].highlight == "cheapest"
    assert opts["walk"].highlight == "healthiest"
    # free options are never cheapest
    assert opts["cycle"].highlight is None
    assert opts["auto_rickshaw"].highlight is None


def test_transport_savings_vs_cheapest_paid():
    result = run_transport_scenario(5)
    assert result.savings.per_event == 98
    assert result.savings.chosen_id == "metro_delhi"


def test_transport_other_metro_and_ride():
    opts = by_id(build_transport_options(5, ride_type="uber_xl", metro_line="metro_mumbai"))
    assert "uber_xl" in opts and "metro_mumbai" in opts
    with pytest.raises(UnknownKeyError):
        build_transport_options(5, metro_line="bus_city")


def test_auto_rickshaw_is_not_a_hailing_tier():
    with pytest.raises(UnknownKeyError) as exc:
        run_transport_scenario(5.0, ride_type="auto_rickshaw")
    assert exc.value.kind == "ride type"
    assert "auto_rickshaw" not in exc.value.valid
    # every hailing tier gives a comparison with unique ids
    for ride in ("ola_prime", "uber_go", "uber_xl"):
        ids = [o.id for o in build_transport_options(5.0, ride_type=ride)]
        assert len(ids) == len(set(ids))


# ---------------------------------------------------------------- delivery

def test_delivery_pickup_recommended_when_worth_it():
    result = run_delivery_scenario(3)
    assert result.get("delivery").cost == 62
    assert result.get("pickup_car").cost == 30
    assert result.get("pickup_car").time == 18
    assert result.savings.per_event == 32
    assert result.savings.per_month == 320
    assert result.recommended_id == "pickup_car"
    assert result.get("pickup_car").highlight == "recommended"
    assert result.get("pickup_bike").human_powered


def test_delivery_pickup_not_recommended_when_too_slow():
    result = run_delivery_scenario(6)
    assert result.get("delivery").cost == 80
    assert result.get("pickup_car").time == 36
    assert result.recommended_id is None
    assert result.summary["pickup_worth_it"] == 0.0


def test_delivery_peak_hour_surges_the_fee():
    off_peak = run_delivery_scenario(3)
    peak = run_delivery_scenario(3, peak_hour=True)
    # 45 * 1.4 = 63 delivery fee, plus packaging and platform
    assert peak.get("delivery").extra["delivery_fee"] == 63
    assert peak.get("delivery").cost == 80
    assert peak.savings.per_event == 50
    assert peak.summary["peak_hour"] == 1.0
    assert off_peak.get("delivery").cost == 62
    assert peak.get("pickup_car").cost == off_peak.get("pickup_car").cost


def test_delivery_empty_for_zero_distance():
    assert build_delivery_options(0) == []


# ---------------------------------------------------------------- diet

def test_protein_options_for_50g():
    opts = by_id(build_protein_options(50))
    assert len(opts) == 7
    assert opts["chicken"].cost == 59
    assert opts["mutton"].cost == 130
    assert opts["dal"].cost == 32
    assert opts["dal"].extra["grams_needed"] == 227
    assert opts["mutton"].co2 == pytest.approx(2.4)
    assert opts["dal"].highlight == "cheapest"
    assert all(o.highlight is None for o in opts.values() if o.id != "dal")


def test_diet_savings_priciest_to_cheapest():
    result = run_diet_scenario(50)
    assert result.savings.reference_id == "mutton"
    assert result.savings.chosen_id == "dal"
    assert result.savings.per_event == 98
    assert result.savings.per_month == 2940


# ---------------------------------------------------------------- energy

def test_energy_options_and_savings():
    opts = by_id(build_energy_options("ac", 8))
    assert opts["ac_3star"].cost == 2160
    assert opts["ac_3star"].co2 == pytest.approx(295.2)
    assert opts["ac_inverter"].cost == 1152

    result = run_energy_scenario("ac", "ac_3star", 8)
    assert result.savings.per_event == 1008
    assert result.savings.per_year == 12096
    assert result.recommended_id == "ac_inverter"


def test_energy_already_most_efficient():
    result = run_energy_scenario("fan", "fan_bldc", 10)
    assert result.recommended_id is None
    assert result.savings.per_event == 0


def test_energy_rejects_bad_inputs():
    with pytest.raises(UnknownKeyError):
        run_energy_scenario("ac", "fan_bldc", 8)
    with pytest.raises(UnknownKeyError):
        build_energy_options("heater", 8)
    with pytest.raises(InvalidInputError):
        build_energy_options("tv", 25)
    assert build_energy_options("tv", 0) == []


# ---------------------------------------------------------------- streaming

def test_streaming_on_mobile():
    result = run_streaming_scenario(2)
    opts = by_id(result.options)
    assert opts["4k"].cost == 140
    assert opts["audio_only"].cost == 3
    assert opts["audio_only"].highlight == "cheapest"
    assert result.savings.per_event == 137
    assert result.savings.per_month == 4110
    assert result.savings.co2_kg_per_event == pytest.approx(0.43)


def test_streaming_on_wifi_is_free_but_not_equal():
    opts = by_id(build_streaming_options(2, is_mobile=False))
    assert all(o.cost == 0 for o in opts.values())
    assert opts["audio_only"].highlight == "greenest"


# ---------------------------------------------------------------- bifl

def test_bifl_backpacks_over_ten_years():
    result = run_bifl_category_scenario("backpacks")
    opts = by_id(result.options)
    assert opts["budget"].cost == 7990
    assert opts["budget"].extra["purchases"] == 10
    assert opts["wildcraft-alpine"].cost == 5998
    assert opts["wildcraft-alpine"].extra["savings"] == 1992
    assert result.recommended_id == "american-tourister-urban"
    assert result.summary["savings"] == 3592


def test_bifl_unknown_category():
    with pytest.raises(UnknownKeyError):
        run_bifl_category_scenario("spaceships")


def test_rebuilding_gives_identical_options():
    assert build_transport_options(7.3) == build_transport_options(7.3)
    assert run_streaming_scenario(1.5) == run_streaming_scenario(1.5)
