import requests

from ecovision.models import Coordinates
from ecovision.utils import input_helpers
from ecovision.utils.input_helpers import reverse_geocode, search_place, short_name, try_parse_lat_lon


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


def test_short_name_keeps_two_segments():
    assert short_name("Connaught Place, New Delhi, Delhi, 110001, India") == "Connaught Place, New Delhi"
    assert short_name("Mumbai") == "Mumbai"


def test_try_parse_lat_lon():
    assert try_parse_lat_lon("28.6139, 77.2090") == Coordinates(28.6139, 77.2090)
    assert try_parse_lat_lon("Connaught Place") is None
    assert try_parse_lat_lon("95, 10") is None


def test_short_queries_are_not_sent(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("no request expected")

    monkeypatch.setattr(input_helpers.requests, "get", fail)
    assert search_place("ab") == []


def test_search_place_parses_results(monkeypatch):
    calls = {}

    def fake_get(url, params=None, headers=None, timeout=None):
        calls["params"] = params
        calls["headers"] = headers
        return FakeResponse([
            {"display_name": "Hauz Khas, South Delhi, Delhi, India", "lat": "28.5494", "lon": "77.2001"},
        ])

    monkeypatch.setattr(input_helpers.requests, "get", fake_get)
    places = search_place("Hauz Khas")
    assert len(places) == 1
    assert places[0].short_name == "Hauz Khas, South Delhi"
    assert places[0].lat == 28.5494
    assert calls["params"]["countrycodes"] == "in"
    assert calls["headers"]["User-Agent"] == "EcoVision/1.0"


def test_search_place_swallows_network_errors(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(input_helpers.requests, "get", boom)
    assert search_place("Hauz Khas") == []


def test_reverse_geocode_falls_back(monkeypatch):
    monkeypatch.setattr(input_helpers.requests, "get", lambda *a, **k: FakeResponse({}, status_code=503))
    place = reverse_geocode(Coordinates(28.5, 77.2))
    assert place.name == "Current Location"
    assert (place.lat, place.lon) == (28.5, 77.2)


def test_reverse_geocode_names_the_place(monkeypatch):
    payload = {
        "display_name": "14, Press Enclave Marg, Saket, South Delhi, Delhi, 110017, India",
        "address": {"house_number": "14", "road": "Press Enclave Marg", "suburb": "Saket",
                    "city": "New Delhi", "state": "Delhi"},
    }
    monkeypatch.setattr(input_helpers.requests, "get", lambda *a, **k: FakeResponse(payload))
    place = reverse_geocode(Coordinates(28.52, 77.21))
    assert place.short_name == "Saket, New Delhi"
    assert place.name.startswith("14, Press Enclave Marg")


def test_reverse_geocode_label_falls_back_through_address_fields(monkeypatch):
    payload = {"address": {"neighbourhood": "Bandra West", "state": "Maharashtra"}}
    monkeypatch.setattr(input_helpers.requests, "get", lambda *a, **k: FakeResponse(payload))
    assert reverse_geocode(Coordinates(19.06, 72.83)).short_name == "Bandra West, Maharashtra"

    monkeypatch.setattr(input_helpers.requests, "get", lambda *a, **k: FakeResponse({"address": {"road": "NH 48"}}))
    assert reverse_geocode(Coordinates(19.06, 72.83)).name == "Current Location"


def test_prompt_float_reprompts(monkeypatch):
    answers = iter(["abc", "-1", "4.5"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    assert input_helpers.prompt_float("Distance (km)") == 4.5


def test_prompt_choice_by_number_or_default(monkeypatch):
    answers = iter(["2", ""])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    assert input_helpers.prompt_choice("Mode", ["a", "b"], default="a") == "b"
    assert input_helpers.prompt_choice("Mode", ["a", "b"], default="a") == "a"
