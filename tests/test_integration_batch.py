import os

import pandas as pd
import pytest

from ecovision.config import AppSettings
from ecovision.errors import UnknownKeyError
from ecovision.main import execute_analysis_batch, load_batch_sheet, run_scenario_from_row


def _sheet():
    return pd.DataFrame([
        {"Scenario": "transport", "distance_km": 5},
        {"Scenario": "delivery", "distance_km": 3},
        {"Scenario": "teleport", "distance_km": 3},
        {"Scenario": "transport", "distance_km": 0},
        {"Scenario": "energy", "category": "ac", "variant": "ac_3star", "hours": 8},
        {"Scenario": "streaming", "hours": 2, "is_mobile": "no"},
        {"Scenario": "diet", "target_protein_g": 50},
        {"Scenario": "bifl", "bifl_category": "backpacks"},
        {"Scenario": "energy", "category": "ac", "variant": "ac_3star", "hours": -1},
    ])


def test_full_batch_execution(tmp_path):
    settings = AppSettings(reports_dir=str(tmp_path))
    report = execute_analysis_batch(_sheet(), settings, plots=False)

    assert report is not None
    # 5 + 3 + 4 + 5 + 7 + 4 option rows; bad rows are skipped
    assert len(report) == 28
    assert os.path.exists(tmp_path / "batch_analysis_report.csv")

    saved = pd.read_csv(tmp_path / "batch_analysis_report.csv")
    assert len(saved) == 28
    metro = saved[(saved["Scenario"] == "Transport") & (saved["Option ID"] == "metro_delhi")].iloc[0]
    assert metro["Cost (INR)"] == 20
    assert metro["Highlight"] == "cheapest"


def test_batch_with_no_usable_rows(tmp_path):
    df = pd.DataFrame([{"Scenario": "teleport"}, {"Scenario": "transport", "distance_km": 0}])
    assert execute_analysis_batch(df, AppSettings(reports_dir=str(tmp_path)), plots=False) is None


def test_batch_writes_charts(tmp_path):
    settings = AppSettings(reports_dir=str(tmp_path))
    execute_analysis_batch(_sheet().head(2), settings, plots=True)
    pngs = [f for _, _, files in os.walk(tmp_path / "batch_run") for f in files if f.endswith(".png")]
    assert len(pngs) == 2


def test_row_defaults_come_from_settings():
    row = pd.Series({"Scenario": "streaming", "hours": 1})
    result = run_scenario_from_row(row, AppSettings(data_rate_per_gb=20))
    assert result.get("4k").cost == 140


def test_row_flags_reach_the_scenario():
    peak = run_scenario_from_row(pd.Series({"Scenario": "delivery", "distance_km": 3, "peak_hour": "yes"}), AppSettings())
    assert peak.get("delivery").cost == 80
    row = pd.Series({"Scenario": "transport", "distance_km": 5, "ride_type": "auto_rickshaw"})
    with pytest.raises(UnknownKeyError):
        run_scenario_from_row(row, AppSettings())


def test_load_batch_sheet_csv(tmp_path):
    path = tmp_path / "sheet.csv"
    _sheet().to_csv(path, index=False)
    df = load_batch_sheet(str(path))
    assert list(df["Scenario"])[:2] == ["transport", "delivery"]
