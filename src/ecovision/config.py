import os
import pandas as pd
import logging
from dataclasses import dataclass, replace
from typing import Dict, Any, List

from .constants import (
    DEFAULT_COMPARE_YEARS, ELECTRICITY_RATES, GEOCODER_COUNTRY_CODE, GEOCODER_USER_AGENT,
    MOBILE_DATA_RATE_AVG
)

logger = logging.getLogger(__name__)

# src/ecovision/config.py -> project root is three levels up
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "data", "settings.xlsx")
DEFAULT_REPORTS_DIR = os.path.join(PROJECT_ROOT, "reports")


@dataclass(frozen=True)
class AppSettings:
    """Runtime settings for the CLI and batch runner. Factor tables are not configurable."""
    city: str = "average"
    data_rate_per_gb: float = MOBILE_DATA_RATE_AVG
    compare_years: float = DEFAULT_COMPARE_YEARS
    reports_dir: str = DEFAULT_REPORTS_DIR
    geocoder_user_agent: str = GEOCODER_USER_AGENT
    country_code: str = GEOCODER_COUNTRY_CODE
    audit_enabled: bool = False
    log_file: str = ""


# Sheet Key -> (AppSettings field, Unit, Section, Description)
SETTINGS_KEYS: Dict[str, tuple] = {
    "DEFAULT_CITY": ("city", "Text", "1. Pricing", "City whose electricity tariff is used for energy comparisons."),
    "DATA_RATE_PER_GB": ("data_rate_per_gb", "INR/GB", "1. Pricing", "Mobile data price used for streaming costs."),
    "COMPARE_YEARS": ("compare_years", "Years", "2. Buy It For Life", "Horizon over which budget and durable products are compared."),
    "REPORTS_DIR": ("reports_dir", "Path", "3. Output", "Directory for CSV reports, charts and history."),
    "AUDIT_ENABLED": ("audit_enabled", "Boolean", "3. Output", "Write a calculation audit trail next to the reports."),
    "LOG_FILE": ("log_file", "Path", "3. Output", "Optional log file (empty for console only)."),
    "GEOCODER_USER_AGENT": ("geocoder_user_agent", "Text", "4. Geocoding", "User-agent string sent with OpenStreetMap place searches."),
    "GEOCODER_COUNTRY_CODE": ("country_code", "Text", "4. Geocoding", "Country filter for place searches."),
}


def load_excel_config(path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load configuration from Excel file.
    Expected columns: Key, Value (Unit, Section, Description are ignored)
    Returns a dictionary of Key -> Value
    """
    config = {}
    if not os.path.exists(path):
        logger.warning(f"Config file not found at {path}. Using defaults.")
        return config

    try:
        df = pd.read_excel(path, engine="openpyxl")
    except Exception as e:
        logger.warning(f"Failed to load config from {path}: {e}. Using defaults.")
        return config

    if "Key" not in df.columns or "Value" not in df.columns:
        logger.warning(f"Excel file {path} missing 'Key' or 'Value' columns. Using defaults.")
        return config

    for _, row in df.iterrows():
        key = str(row["Key"]).strip()
        val = row["Value"]
        if not key or pd.isna(val):
            continue
        config[key] = val
    logger.info(f"Loaded {len(config)} parameters from {path}")
    return config


def _coerce(value: Any, default: Any) -> Any:
    if isinstance(default, bool):
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "y")
        return bool(value)
    if isinstance(default, (int, float)):
        return float(value)
    return str(value).strip()


def load_settings(path: str = DEFAULT_CONFIG_PATH) -> AppSettings:
    """
    Build AppSettings from the Key/Value sheet. Unknown keys are ignored and
    unusable values keep their defaults.
    """
    raw = load_excel_config(path)
    defaults = AppSettings()
    overrides = {}

    for key, val in raw.items():
        if key not in SETTINGS_KEYS:
            logger.debug(f"Ignoring unknown setting '{key}'")
            continue
        field_name = SETTINGS_KEYS[key][0]
        default = getattr(defaults, field_name)
        try:
            overrides[field_name] = _coerce(val, default)
        except (TypeError, ValueError):
            logger.warning(f"Invalid value {val!r} for {key}. Using default {default!r}.")

    settings = replace(defaults, **overrides)

    if settings.city not in ELECTRICITY_RATES:
        logger.warning(f"Unknown city '{settings.city}'. Using 'average'.")
        settings = replace(settings, city="average")
    if settings.compare_years <= 0:
        logger.warning(f"COMPARE_YEARS must be positive. Using {DEFAULT_COMPARE_YEARS}.")
        settings = replace(settings, compare_years=DEFAULT_COMPARE_YEARS)
    if settings.data_rate_per_gb < 0:
        logger.warning(f"DATA_RATE_PER_GB must not be negative. Using {MOBILE_DATA_RATE_AVG}.")
        settings = replace(settings, data_rate_per_gb=MOBILE_DATA_RATE_AVG)

    return settings


def settings_rows(settings: AppSettings = AppSettings()) -> List[Dict[str, Any]]:
    """Rows for the settings sheet, in SETTINGS_KEYS order."""
    rows = []
    for key, (field_name, unit, section, description) in SETTINGS_KEYS.items():
        rows.append({
            "Section": section,
            "Key": key,
            "Value": getattr(settings, field_name),
            "Unit": unit,
            "Description": description,
        })
    return rows


def write_settings_template(path: str = DEFAULT_CONFIG_PATH, settings: AppSettings = AppSettings()) -> str:
    """Write a formatted, editable settings sheet and return its path."""
    rows = settings_rows(settings)
    df = pd.DataFrame(rows)[["Section", "Key", "Value", "Unit", "Description"]]

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with pd.ExcelWriter(path, engine="xlsxwriter") as writer:
        df.to_excel(writer, index=False, sheet_name="Settings")

        workbook = writer.book
        worksheet = writer.sheets["Settings"]

        header_fmt = workbook.add_format({
            'bold': True,
            'text_wrap': True,
            'valign': 'top',
            'fg_color': '#2E7D32',
            'font_color': '#FFFFFF',
            'border': 1
        })
        section_fmt = workbook.add_format({'bold': True, 'bg_color': '#E8F5E9', 'border': 1})
        key_fmt = workbook.add_format({'bold': True, 'font_color': '#333333', 'bg_color': '#F2F2F2', 'border': 1})
        value_fmt = workbook.add_format({'bg_color': '#FFFFCC', 'border': 1})  # editable
        text_fmt = workbook.add_format({'text_wrap': True, 'valign': 'top', 'border': 1})

        worksheet.set_column('A:A', 22)
        worksheet.set_column('B:B', 26)
        worksheet.set_column('C:C', 40, value_fmt)
        worksheet.set_column('D:D', 10)
        worksheet.set_column('E:E', 60, text_fmt)

        for col_num, value in enumerate(df.columns.values):
            worksheet.write(0, col_num, value, header_fmt)

        for r, row_data in enumerate(rows, start=1):
            worksheet.write(r, 0, row_data["Section"], section_fmt)
            worksheet.write(r, 1, row_data["Key"], key_fmt)
            worksheet.write(r, 2, row_data["Value"], value_fmt)
            worksheet.write(r, 3, row_data["Unit"], text_fmt)
            worksheet.write(r, 4, row_data["Description"], text_fmt)

    logger.info(f"Settings template written to {path}")
    return path
