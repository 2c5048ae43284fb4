import logging
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional, get_args

import pandas as pd

from .audit import audit_logger
from .catalog import APPLIANCE_CATEGORIES, BIFL_CATEGORIES, get_appliance_variants, get_category_by_slug
from .config import AppSettings, DEFAULT_CONFIG_PATH, load_settings, write_settings_template
from .constants import ELECTRICITY_RATES, TRANSPORT_EMISSIONS_G_PER_KM, HailingRideType
from .errors import EcoVisionError, UnknownKeyError
from .history import HistoryStore
from .logging_conf import setup_logging
from .models import BIFLProduct, BudgetProduct, ScenarioResult
from .scenarios import (
    run_bifl_category_scenario,
    run_bifl_scenario,
    run_delivery_scenario,
    run_diet_scenario,
    run_energy_scenario,
    run_streaming_scenario,
    run_transport_scenario,
    trip_distance,
)
from .utils.input_helpers import (
    C_HEADER, C_RESET, C_SUCCESS, format_and_clean_report_dataframe, print_header,
    print_scenario_overview, prompt_choice, prompt_float, prompt_location, prompt_yes_no, style_prompt
)
from .visualization import Visualizer

logger = logging.getLogger(__name__)

SCENARIO_NAMES = ["transport", "delivery", "diet", "energy", "streaming", "bifl"]
REPORT_BASENAME = "batch_analysis_report"
METRO_LINES = [m for m in TRANSPORT_EMISSIONS_G_PER_KM if m.startswith("metro_")]
CUSTOM_BIFL = "custom"


# ============================================================================
# BATCH MODE
# ============================================================================

def _value(row: pd.Series, key: str, default: Any = None) -> Any:
    """Cell value, or default when the column is absent or the cell is blank."""
    if key not in row.index:
        return default
    val = row[key]
    if val is None or (isinstance(val, float) and pd.isna(val)) or (isinstance(val, str) and not val.strip()):
        return default
    return val.strip() if isinstance(val, str) else val


def _flag(val: Any) -> bool:
    if isinstance(val, str):
        return val.strip().lower() in ("1", "true", "yes", "y")
    return bool(val)


def run_scenario_from_row(row: pd.Series, settings: AppSettings) -> ScenarioResult:
    """
    Dispatch one batch sheet row to its scenario. The 'Scenario' column picks
    the domain; the remaining columns are that domain's inputs.
    """
    scenario = str(_value(row, "Scenario", "")).lower()

    if scenario == "transport":
        return run_transport_scenario(
            float(_value(row, "distance_km", 0)),
            ride_type=_value(row, "ride_type", "ola_mini"),
            metro_line=_value(row, "metro_line", "metro_delhi"),
        )
    if scenario == "delivery":
        return run_delivery_scenario(
            float(_value(row, "distance_km", 0)),
            peak_hour=_flag(_value(row, "peak_hour", False)),
        )
    if scenario == "diet":
        return run_diet_scenario(float(_value(row, "target_protein_g", 0)))
    if scenario == "energy":
        category = _value(row, "category", "ac")
        variants = get_appliance_variants(category)
        return run_energy_scenario(
            category,
            _value(row, "variant", variants[0].id),
            float(_value(row, "hours", 0)),
            city=_value(row, "city", settings.city),
        )
    if scenario == "streaming":
        return run_streaming_scenario(
            float(_value(row, "hours", 0)),
            is_mobile=_flag(_value(row, "is_mobile", True)),
            rate_per_gb=float(_value(row, "rate_per_gb", settings.data_rate_per_gb)),
        )
    if scenario == "bifl":
        return run_bifl_category_scenario(
            _value(row, "bifl_category", ""),
            float(_value(row, "compare_years", settings.compare_years)),
        )
    raise UnknownKeyError("scenario", scenario, SCENARIO_NAMES)


def _describe_inputs(row: pd.Series) -> str:
    parts = []
    for key, val in row.items():
        if key == "Scenario":
            continue
        val = _value(row, key)
        if val is not None:
            parts.append(f"{key}={val}")
    return "; ".join(parts)


def result_to_rows(result: ScenarioResult, input_label: str = "") -> List[Dict[str, Any]]:
    """One report row per option, each carrying the scenario's savings."""
    savings = result.savings
    rows = []
    for opt in result.options:
        rows.append({
            "Scenario": result.scenario_name,
            "Input": input_label,
            "Option ID": opt.id,
            "Option": opt.name,
            "Highlight": opt.highlight or "",
            "Cost (INR)": opt.cost,
            "Time (min)": opt.time,
            "CO2 (kg)": opt.co2,
            "Calories (kcal)": opt.calories,
            "Savings per Event (INR)": savings.per_event if savings else 0.0,
            "Savings per Month (INR)": savings.per_month if savings and savings.per_month is not None else 0.0,
            "Savings per Year (INR)": savings.per_year if savings and savings.per_year is not None else 0.0,
        })
    return rows


def load_batch_sheet(path: str) -> pd.DataFrame:
    """Read a scenario sheet from CSV or Excel."""
    if path.lower().endswith((".xlsx", ".xls")):
        return pd.read_excel(path, engine="openpyxl")
    return pd.read_csv(path)


def execute_analysis_batch(
    df: pd.DataFrame,
    settings: AppSettings = AppSettings(),
    reports_dir: Optional[str] = None,
    plots: bool = True,
) -> Optional[pd.DataFrame]:
    """
    Run every row of the scenario sheet, write a formatted CSV report and
    return it. A failing row is logged and skipped.
    """
    reports_dir = reports_dir or settings.reports_dir
    os.makedirs(reports_dir, exist_ok=True)

    results = []
    print_header(f"Starting Analysis of {len(df)} scenario rows...")

    for idx, row in df.iterrows():
        label = _describe_inputs(row)
        try:
            print(f"Processing ({idx+1}/{len(df)}): {_value(row, 'Scenario', '?')} {label}")
            res = run_scenario_from_row(row, settings)
        except (EcoVisionError, ValueError, TypeError) as e:
            logger.error(f"Error processing row {idx}: {e}. Skipping row.")
            continue

        if not res.options:
            logger.warning(f"Row {idx}: not enough input for {res.scenario_name}. Skipping row.")
            continue
        results.extend(result_to_rows(res, label))

    if not results:
        print("No results to save.")
        return None

    report_df = format_and_clean_report_dataframe(pd.DataFrame(results))

    out_file = os.path.join(reports_dir, f"{REPORT_BASENAME}.csv")
    try:
        report_df.to_csv(out_file, index=False)
    except PermissionError:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        fallback_file = os.path.join(reports_dir, f"{REPORT_BASENAME}_{ts}.csv")
        logger.warning(f"Could not save to {out_file} (File Locked?). Saving to {fallback_file} instead.")
        report_df.to_csv(fallback_file, index=False)
        out_file = fallback_file
    print(f"Report saved to: {out_file}")

    print(report_df.groupby("Scenario")[["Cost (INR)", "CO2 (kg)"]].min())

    if plots:
        try:
            vis = Visualizer(mode="batch_run", output_root=reports_dir)
            vis.plot_batch_summary(report_df)
            print(f"\nCharts saved to: {vis.session_dir}")
        except Exception as e:
            logger.error(f"Batch visualization failed: {e}")

    return report_df


def run_batch_mode(settings: AppSettings):
    while True:
        path = input(style_prompt("Path to scenario sheet (CSV or Excel): ")).strip().strip('"')
        if os.path.exists(path):
            break
        logger.warning(f"File not found: {path}")
    try:
        df = load_batch_sheet(path)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read {path}: {e}")
        return
    execute_analysis_batch(df, settings)


# ============================================================================
# INTERACTIVE MODE
# ============================================================================

def _prompt_transport(settings: AppSettings) -> ScenarioResult:
    how = prompt_choice("Trip distance", ["locations", "manual"], default="locations")
    if how == "locations":
        origin = prompt_location("starting point", settings.country_code, settings.geocoder_user_agent)
        destination = prompt_location("destination", settings.country_code, settings.geocoder_user_agent)
        distance = trip_distance(origin.coordinates, destination.coordinates)
        logger.info(f"Distance {origin.short_name} -> {destination.short_name}: {distance:.2f} km")
    else:
        distance = prompt_float("Trip distance (km)")
    ride_type = prompt_choice("Ride-hailing service", list(get_args(HailingRideType)), default="ola_mini")
    metro_line = prompt_choice("Metro system", METRO_LINES, default="metro_delhi")
    return run_transport_scenario(distance, ride_type, metro_line)


def _prompt_delivery(settings: AppSettings) -> ScenarioResult:
    distance = prompt_float("Distance to restaurant (km)")
    peak_hour = prompt_yes_no("Ordering at peak hour?", default=False)
    return run_delivery_scenario(distance, peak_hour=peak_hour)


def _prompt_diet(settings: AppSettings) -> ScenarioResult:
    return run_diet_scenario(prompt_float("Daily protein target (g)", default=50))


def _prompt_energy(settings: AppSettings) -> ScenarioResult:
    category = prompt_choice("Appliance category", list(APPLIANCE_CATEGORIES), default="ac")
    variants = get_appliance_variants(category)
    variant = prompt_choice("Your current appliance", [v.id for v in variants], default=variants[0].id)
    hours = prompt_float("Hours used per day", default=8)
    city = prompt_choice("City tariff", list(ELECTRICITY_RATES), default=settings.city)
    return run_energy_scenario(category, variant, hours, city)


def _prompt_streaming(settings: AppSettings) -> ScenarioResult:
    hours = prompt_float("Hours streamed per day", default=2)
    is_mobile = prompt_yes_no("Streaming on mobile data?", default=True)
    return run_streaming_scenario(hours, is_mobile, settings.data_rate_per_gb)


def _prompt_bifl(settings: AppSettings, vis: Optional[Visualizer] = None) -> ScenarioResult:
    slugs = [c.slug for c in BIFL_CATEGORIES] + [CUSTOM_BIFL]
    slug = prompt_choice("Product category", slugs, default=slugs[0])
    years = prompt_float("Years to compare", default=settings.compare_years)

    if slug != CUSTOM_BIFL:
        category = get_category_by_slug(slug)
        result = run_bifl_category_scenario(slug, years)
        budget = category.budget_option
        durable = next((p for p in category.products if p.id == result.recommended_id), None)
    else:
        budget = BudgetProduct(
            name="Budget option",
            price=prompt_float("Budget option price (INR)"),
            lifespan_years=prompt_float("Budget option lifespan (years)"),
        )
        durable = BIFLProduct(
            id="quality",
            name="Quality option",
            brand="",
            price=prompt_float("Quality option price (INR)"),
            lifespan_years=prompt_float("Quality option lifespan (years)"),
            uses_per_week=prompt_float("Uses per week", default=7),
            warranty="",
            why_bifl="",
        )
        result = run_bifl_scenario(budget, [durable], years, name="BIFL: Custom")

    if vis is not None and durable is not None:
        vis.plot_bifl_comparison(budget, durable, years)
    return result


PROMPTERS = {
    "transport": _prompt_transport,
    "delivery": _prompt_delivery,
    "diet": _prompt_diet,
    "energy": _prompt_energy,
    "streaming": _prompt_streaming,
}


def _record_decision(result: ScenarioResult, history: HistoryStore, history_dir: str):
    s = result.savings
    if s is None or s.reference_id == s.chosen_id:
        return
    reference = result.get(s.reference_id)
    chosen = result.get(s.chosen_id)
    if reference is None or chosen is None:
        return
    if prompt_yes_no(f"Log switching from {reference.name} to {chosen.name}?", default=False):
        history.add_decision(reference.name, chosen.name, s.co2_kg_per_event, 0.0)
        history.save(history_dir)
        print(f"{C_SUCCESS}Total CO2 saved so far: {history.saved_co2:.3f} kg{C_RESET}")


def run_interactive(settings: AppSettings):
    history_dir = os.path.join(settings.reports_dir, "history")
    history = HistoryStore.load(history_dir) if os.path.isdir(history_dir) else HistoryStore()
    make_charts = prompt_yes_no("Save charts for each comparison?", default=False)
    vis = Visualizer(mode="single_run", output_root=settings.reports_dir) if make_charts else None

    while True:
        print_header("Choose a comparison")
        scenario = prompt_choice("Scenario", SCENARIO_NAMES, default="transport")
        try:
            if scenario == "bifl":
                result = _prompt_bifl(settings, vis)
            else:
                result = PROMPTERS[scenario](settings)
        except EcoVisionError as e:
            logger.error(f"{e}")
            continue

        print_scenario_overview(result)
        if vis is not None:
            vis.plot_option_comparison(result)
        _record_decision(result, history, history_dir)

        if not prompt_yes_no("Run another comparison?", default=True):
            break


def main():
    settings = load_settings(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_CONFIG_PATH)

    setup_logging(console_level=logging.INFO, file_path=settings.log_file or None)
    if settings.audit_enabled:
        audit_logger.enable(settings.reports_dir)

    print_header("EcoVision: compare the cost and carbon of everyday choices")
    print(f"{C_HEADER}Settings:{C_RESET} city={settings.city}, data rate={settings.data_rate_per_gb} INR/GB, "
          f"horizon={settings.compare_years:g} years")

    mode = prompt_choice(
        "Mode",
        ["Single Run (Interactive)", "Batch Analysis", "Write Settings Template"],
        default="Single Run (Interactive)",
    )
    if mode == "Batch Analysis":
        run_batch_mode(settings)
    elif mode == "Write Settings Template":
        path = write_settings_template(DEFAULT_CONFIG_PATH, settings)
        print(f"{C_SUCCESS}Edit {path} and restart to apply.{C_RESET}")
    else:
        run_interactive(settings)


if __name__ == "__main__":
    main()
