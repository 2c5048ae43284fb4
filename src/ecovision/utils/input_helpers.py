import logging
import requests
import pandas as pd
from typing import Optional, List, Sequence

import colorama
from colorama import Fore, Style, Back

from ..constants import GEOCODER_COUNTRY_CODE, GEOCODER_USER_AGENT
from ..errors import EcoVisionError
from ..models import Coordinates, Place, ScenarioResult
from .calculations import f2

colorama.init(autoreset=True)

logger = logging.getLogger(__name__)

# Style Constants
C_HEADER = Fore.CYAN + Style.BRIGHT
C_PROMPT = Fore.YELLOW
C_CHOICE = Fore.MAGENTA
C_ERROR = Fore.RED
C_SUCCESS = Fore.GREEN
C_RESET = Style.RESET_ALL

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"
NOMINATIM_REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"
MIN_QUERY_LENGTH = 3
SEARCH_LIMIT = 5
CURRENT_LOCATION_LABEL = "Current Location"

BADGES = {
    "cheapest": "CHEAPEST",
    "fastest": "FASTEST",
    "healthiest": "HEALTHIEST",
    "greenest": "GREENEST",
    "recommended": "RECOMMENDED",
}


def style_prompt(prompt_text: str) -> str:
    """Helper to wrap input prompt in color."""
    return f"{C_PROMPT}{prompt_text}{C_RESET}"


def print_header(text: str):
    """Print a styled header."""
    print(f"\n{C_HEADER}{'='*60}")
    print(f"{text.center(60)}")
    print(f"{'='*60}{C_RESET}")


# ============================================================================
# GEOCODING (OpenStreetMap Nominatim)
# ============================================================================

def short_name(display_name: str, segments: int = 2) -> str:
    """First `segments` comma-separated parts of an address, whitespace-trimmed."""
    parts = [p.strip() for p in display_name.split(",")]
    return ", ".join(parts[:segments])


def search_place(
    query: str,
    country_code: str = GEOCODER_COUNTRY_CODE,
    user_agent: str = GEOCODER_USER_AGENT,
) -> List[Place]:
    """
    Free-text place search. Queries shorter than three characters are not
    sent; network or parse failures yield no results.
    """
    query = query.strip()
    if len(query) < MIN_QUERY_LENGTH:
        return []

    params = {"q": query, "format": "json", "limit": SEARCH_LIMIT, "countrycodes": country_code}
    headers = {"User-Agent": user_agent}
    try:
        logger.debug(f"Searching places for '{query}' ...")
        resp = requests.get(NOMINATIM_SEARCH_URL, params=params, headers=headers, timeout=15)
        resp.raise_for_status()
        data = resp.json()
        return [
            Place(
                name=item["display_name"],
                short_name=short_name(item["display_name"]),
                lat=float(item["lat"]),
                lon=float(item["lon"]),
            )
            for item in data
        ]
    except (requests.RequestException, ValueError, KeyError, TypeError) as e:
        logger.warning(f"Place search failed: {e}")
        return []


def reverse_geocode(coords: Coordinates, user_agent: str = GEOCODER_USER_AGENT) -> Place:
    """Address for a position; falls back to a generic label on any failure."""
    fallback = Place(name=CURRENT_LOCATION_LABEL, short_name=CURRENT_LOCATION_LABEL, lat=coords.lat, lon=coords.lon)
    params = {"lat": coords.lat, "lon": coords.lon, "format": "json"}
    headers = {"User-Agent": user_agent}
    try:
        resp = requests.get(NOMINATIM_REVERSE_URL, params=params, headers=headers, timeout=15)
        resp.raise_for_status()
        data = resp.json()
        address = data.get("address") or {}
        area = address.get("suburb") or address.get("neighbourhood")
        locality = address.get("city") or address.get("town") or address.get("state")
    except (requests.RequestException, ValueError, AttributeError) as e:
        logger.warning(f"Reverse geocoding failed: {e}")
        return fallback
    label = ", ".join(p for p in (area, locality) if p)
    if not label:
        return fallback
    return Place(name=data.get("display_name") or label, short_name=label, lat=coords.lat, lon=coords.lon)


def try_parse_lat_lon(text: str) -> Optional[Coordinates]:
    """
    Try to parse 'lat,lon' text into Coordinates.
    """
    parts = text.split(",")
    if len(parts) != 2:
        return None
    try:
        lat = float(parts[0].strip())
        lon = float(parts[1].strip())
        return Coordinates(lat=lat, lon=lon)
    except (ValueError, EcoVisionError):
        return None


# ============================================================================
# PROMPTS
# ============================================================================

def prompt_location(label: str, country_code: str = GEOCODER_COUNTRY_CODE, user_agent: str = GEOCODER_USER_AGENT) -> Place:
    """
    Prompt user for either a place name or a 'lat,lon' pair and return a Place.
    """
    while True:
        s = input(style_prompt(f"Enter {label} (place name or 'lat,lon'): ")).strip()
        if not s:
            continue
        coords = try_parse_lat_lon(s)
        if coords is not None:
            place = reverse_geocode(coords, user_agent)
            logger.info(f"{label} set to {coords.lat:.6f}, {coords.lon:.6f} ({place.short_name})")
            return place
        matches = search_place(s, country_code, user_agent)
        if not matches:
            logger.warning("No places found. Try another name or 'lat,lon'.")
            continue
        if len(matches) == 1:
            place = matches[0]
        else:
            names = [m.short_name for m in matches]
            picked = prompt_choice(f"Matches for '{s}'", names, default=names[0])
            place = matches[names.index(picked)]
        logger.info(f"{label} set to {place.short_name} ({place.lat:.6f}, {place.lon:.6f})")
        return place


def prompt_float(label: str, default: Optional[float] = None, minimum: float = 0.0) -> float:
    """
    Prompt for a number >= minimum. Empty input returns the default when one is given.
    """
    hint = f" [default={default}]" if default is not None else ""
    while True:
        s = input(style_prompt(f"{label}{hint}: ")).strip()
        if not s and default is not None:
            return default
        try:
            value = float(s)
        except ValueError:
            logger.warning(f"'{s}' is not a number.")
            continue
        if value < minimum:
            logger.warning(f"Value must be at least {minimum}.")
            continue
        return value


def prompt_choice(label: str, options: Sequence[str], default: str) -> str:
    """
    Prompt user to pick one value from a list of options; returns the chosen option.
    Supports selecting by index (1-based) or typing the name.
    """
    display_parts = []
    for idx, opt in enumerate(options, 1):
        display_parts.append(f"[{C_SUCCESS}{idx}{C_PROMPT}] {C_CHOICE}{opt}{C_PROMPT}")

    opts_str = " / ".join(display_parts)

    while True:
        print(f"\n{C_PROMPT}{label} options:{C_RESET} {opts_str}")
        s = input(style_prompt(f"Select option (name or number) [default={default}]: ")).strip().lower()

        if not s:
            return default

        if s.isdigit():
            idx = int(s)
            if 1 <= idx <= len(options):
                return options[idx-1]

        for opt in options:
            if s == opt.lower():
                return opt

        logger.warning(f"Invalid choice '{s}'. Please enter a number 1-{len(options)} or the option name.")


def prompt_yes_no(label: str, default: bool) -> bool:
    """
    Prompt user for yes/no answer, returning True/False.
    """
    d = "y" if default else "n"
    opts = f"{C_CHOICE}y{C_PROMPT}/{C_CHOICE}n{C_PROMPT}"
    while True:
        s = input(style_prompt(f"{label} [{opts}] (default={d}): ")).strip().lower()
        if not s:
            return default
        if s in ("y", "yes"):
            return True
        if s in ("n", "no"):
            return False
        logger.warning("Please answer y or n.")


# ============================================================================
# REPORTING
# ============================================================================

def print_scenario_overview(result: ScenarioResult):
    """
    Common reporting for all scenarios.
    """
    print(f"\n{Back.BLACK}{C_HEADER}{'='*60}")
    print(f"   SCENARIO RESULT: {result.scenario_name.upper()}")
    print(f"{'='*60}{Style.RESET_ALL}")

    if not result.options:
        print(f"  {C_PROMPT}Not enough input to compare options.{C_RESET}")
        return

    print(f"\n{C_HEADER}{'Option':<24}{'Cost (INR)':>12}{'Time (min)':>12}{'CO2 (kg)':>10}{'kcal':>7}{C_RESET}")
    for opt in result.options:
        badge = f"  {C_SUCCESS}[{BADGES[opt.highlight]}]{C_RESET}" if opt.highlight else ""
        print(f"  {opt.name:<22}{f2(opt.cost):>12}{opt.time:>12.0f}{opt.co2:>10.3f}{opt.calories:>7.0f}{badge}")

    if result.savings is not None:
        s = result.savings
        print(f"{'-'*60}")
        print(f"  {Style.BRIGHT}Save {C_SUCCESS}INR {f2(s.per_event)}{C_RESET} choosing {s.chosen_id} over {s.reference_id}")
        if s.per_month is not None:
            print(f"  Per month: INR {f2(s.per_month)}   Per year: INR {f2(s.per_year)}")
        if s.co2_kg_per_event:
            print(f"  CO2 avoided: {s.co2_kg_per_event:.3f} kg")

    if result.recommended_id:
        opt = result.get(result.recommended_id)
        print(f"  {C_SUCCESS}Recommended: {opt.name if opt else result.recommended_id}{C_RESET}")
    print(f"{'='*60}\n")


REPORT_COLUMNS = [
    "Scenario", "Input", "Option ID", "Option", "Highlight",
    "Cost (INR)", "Time (min)", "CO2 (kg)", "Calories (kcal)",
    "Savings per Event (INR)", "Savings per Month (INR)", "Savings per Year (INR)",
]
METRIC_COLUMNS = [
    "Cost (INR)", "Time (min)", "CO2 (kg)", "Calories (kcal)",
    "Savings per Event (INR)", "Savings per Month (INR)", "Savings per Year (INR)",
]


def format_and_clean_report_dataframe(df: pd.DataFrame, decimals: int = 3) -> pd.DataFrame:
    """
    Put the known report columns first (extra columns keep their order after
    them), fill missing metrics with 0 and round numeric values.
    """
    df = df.copy()
    for col in REPORT_COLUMNS:
        if col not in df.columns:
            df[col] = 0.0 if col in METRIC_COLUMNS else ""

    df[METRIC_COLUMNS] = df[METRIC_COLUMNS].apply(pd.to_numeric, errors="coerce").fillna(0.0)
    df["Highlight"] = df["Highlight"].fillna("")

    extra = [c for c in df.columns if c not in REPORT_COLUMNS]
    df = df[REPORT_COLUMNS + extra]

    numeric_cols = df.select_dtypes(include="number").columns
    df[numeric_cols] = df[numeric_cols].round(decimals)
    return df
