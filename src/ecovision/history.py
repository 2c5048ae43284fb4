"""
Scan and decision history: an append-only log of tracked items, the
swaps the user chose, running totals, and the daily scan streak.

Nothing here reads the clock unless the caller omits `now`.
"""
import logging
import os
import uuid
from dataclasses import asdict
from datetime import datetime
from typing import List, Optional

import pandas as pd

from .models import DecisionLog, LogEntry, StreakState

logger = logging.getLogger(__name__)

LOGS_FILENAME = "logs.csv"
DECISIONS_FILENAME = "decisions.csv"


class HistoryStore:
    def __init__(self):
        self.reset()

    def reset(self):
        self.logs: List[LogEntry] = []
        self.decisions: List[DecisionLog] = []
        self.total_co2 = 0.0
        self.total_water = 0.0
        self.saved_co2 = 0.0
        self.saved_water = 0.0
        self.total_scans = 0
        self.streak = StreakState()

    @property
    def scan_streak(self) -> int:
        return self.streak.streak_count

    def add_log(
        self,
        name: str,
        co2: float,
        water: float,
        savings: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> LogEntry:
        """Record a tracked item. Newest entries come first."""
        now = now or datetime.now()
        entry = LogEntry(id=str(uuid.uuid4()), name=name, co2=co2, water=water, date=now, savings=savings)
        self._apply_log(entry)
        logger.debug(f"Logged '{name}': {co2} kg CO2, {water} L water (streak {self.scan_streak})")
        return entry

    def _apply_log(self, entry: LogEntry):
        self.logs.insert(0, entry)
        self.total_co2 += entry.co2
        self.total_water += entry.water
        self.total_scans += 1
        self.streak = self.streak.advance(entry.date.date())

    def add_decision(
        self,
        original: str,
        chosen: str,
        co2_delta: float,
        water_delta: float,
        now: Optional[datetime] = None,
    ) -> DecisionLog:
        """
        Record a swap of `original` for `chosen` and credit its savings.
        Deltas are floored at zero: a swap never counts against the totals.
        """
        now = now or datetime.now()
        decision = DecisionLog(
            id=str(uuid.uuid4()),
            date=now,
            original_item=original,
            chosen_item=chosen,
            saved_co2=max(0.0, co2_delta),
            saved_water=max(0.0, water_delta),
        )
        self._apply_decision(decision)
        logger.debug(f"Decision: {original} -> {chosen} saves {decision.saved_co2} kg CO2")
        return decision

    def _apply_decision(self, decision: DecisionLog):
        self.decisions.insert(0, decision)
        self.saved_co2 += decision.saved_co2
        self.saved_water += decision.saved_water

    # ------------------------------------------------------------------
    # Tabular views and persistence
    # ------------------------------------------------------------------

    def logs_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [asdict(e) for e in self.logs],
            columns=["id", "name", "co2", "water", "date", "savings"],
        )

    def decisions_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [asdict(d) for d in self.decisions],
            columns=["id", "date", "original_item", "chosen_item", "saved_co2", "saved_water"],
        )

    def save(self, directory: str):
        """Write logs and decisions as two CSV files under directory."""
        os.makedirs(directory, exist_ok=True)
        self.logs_dataframe().to_csv(os.path.join(directory, LOGS_FILENAME), index=False)
        self.decisions_dataframe().to_csv(os.path.join(directory, DECISIONS_FILENAME), index=False)
        logger.info(f"History saved to: {directory}")

    @classmethod
    def load(cls, directory: str) -> "HistoryStore":
        """
        Rebuild a store from CSV files written by save(). Totals and the
        streak are replayed from the entries in date order.
        """
        store = cls()
        logs_path = os.path.join(directory, LOGS_FILENAME)
        decisions_path = os.path.join(directory, DECISIONS_FILENAME)

        if os.path.exists(logs_path):
            df = pd.read_csv(logs_path, parse_dates=["date"])
            df = df.sort_values("date", kind="stable")
            for _, row in df.iterrows():
                savings = row["savings"]
                store._apply_log(LogEntry(
                    id=str(row["id"]),
                    name=str(row["name"]),
                    co2=float(row["co2"]),
                    water=float(row["water"]),
                    date=row["date"].to_pydatetime(),
                    savings=None if pd.isna(savings) else str(savings),
                ))
        else:
            logger.warning(f"No history logs found at {logs_path}")

        if os.path.exists(decisions_path):
            df = pd.read_csv(decisions_path, parse_dates=["date"])
            df = df.sort_values("date", kind="stable")
            for _, row in df.iterrows():
                store._apply_decision(DecisionLog(
                    id=str(row["id"]),
                    date=row["date"].to_pydatetime(),
                    original_item=str(row["original_item"]),
                    chosen_item=str(row["chosen_item"]),
                    saved_co2=float(row["saved_co2"]),
                    saved_water=float(row["saved_water"]),
                ))

        return store
