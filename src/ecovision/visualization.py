import matplotlib.pyplot as plt
import pandas as pd
import os
from datetime import datetime
from math import ceil
from typing import List, Optional
from .bifl import PricedProduct
from .config import DEFAULT_REPORTS_DIR
from .models import ScenarioResult
import logging

logger = logging.getLogger(__name__)

# ============================================================================
# VISUALIZER CLASS
# ============================================================================


class Visualizer:
    def __init__(self, mode: str = "single_run", output_root: Optional[str] = None):
        """
        Initialize Visualizer.
        mode: 'single_run' (for interactive) or 'batch_run' (for batch analysis)
        """
        self.mode = mode
        self.output_root = output_root or DEFAULT_REPORTS_DIR
        self._setup_style()
        self.session_dir = self._create_session_dir()

    def _setup_style(self):
        """Configure matplotlib for clean, readable plots."""
        plt.rcParams.update(plt.rcParamsDefault)

        plt.rcParams.update({
            'font.family': 'sans-serif',
            'font.sans-serif': ['Arial', 'Helvetica', 'Calibri', 'DejaVu Sans'],
            'font.size': 12,
            'axes.titlesize': 16,
            'axes.titleweight': 'bold',
            'axes.labelsize': 13,
            'xtick.labelsize': 11,
            'ytick.labelsize': 11,
            'legend.fontsize': 11,
            'text.color': '#2C3E50',
            'axes.labelcolor': '#2C3E50',
            'xtick.color': '#2C3E50',
            'ytick.color': '#2C3E50'
        })

        plt.rcParams.update({
            'axes.spines.top': False,
            'axes.spines.right': False,
            'axes.spines.left': False,
            'axes.spines.bottom': True,
            'axes.linewidth': 1.2,
            'grid.color': '#E0E0E0',
            'grid.linestyle': ':',
            'grid.linewidth': 1.0,
            'axes.grid': True,
            'axes.grid.axis': 'y',
            'axes.axisbelow': True
        })

        self.colors = {
            'cost': '#FFB74D',        # Amber
            'cost_dark': '#EF6C00',
            'co2': '#388E3C',         # Forest Green
            'highlight': '#2E7D32',
            'budget': '#D32F2F',
            'bifl': '#1976D2',
            'neutral': '#5D6D7E',
            'text': '#2C3E50',
        }

    def _create_session_dir(self) -> str:
        """Create the specific directory for this session's plots."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        subdir = "batch_run" if self.mode == "batch_run" else "single_run"
        path = os.path.join(self.output_root, subdir, timestamp)
        os.makedirs(path, exist_ok=True)
        return path

    def get_save_path(self, filename: str) -> str:
        return os.path.join(self.session_dir, filename)

    def _save(self, fig, filename: str) -> str:
        plt.tight_layout()
        filepath = self.get_save_path(filename)
        plt.savefig(filepath, dpi=300, bbox_inches='tight')
        plt.close(fig)
        print(f"   [Plot] Saved to: {filepath}")
        return filepath

    # ============================================================================
    # SINGLE RUN PLOTS
    # ============================================================================

    def plot_option_comparison(self, result: ScenarioResult) -> Optional[str]:
        """Cost bars with CO2 on a second axis; highlighted options are labelled."""
        if not result.options:
            return None

        names = [o.name.replace(" ", "\n", 1) for o in result.options]
        costs = [o.cost for o in result.options]
        co2 = [o.co2 for o in result.options]

        fig, ax1 = plt.subplots(figsize=(12, 7), dpi=150)
        bar_colors = [self.colors['highlight'] if o.highlight else self.colors['cost'] for o in result.options]
        bars = ax1.bar(names, costs, color=bar_colors, alpha=0.85, width=0.5, label='Cost')
        ax1.set_ylabel('Cost (INR)', color=self.colors['cost_dark'], fontweight='bold')
        ax1.tick_params(axis='y', labelcolor=self.colors['cost_dark'])
        ax1.set_ylim(0, max(max(costs), 1) * 1.2)

        for bar, opt in zip(bars, result.options):
            label = f"{bar.get_height():.0f}"
            if opt.highlight:
                label += f"\n{opt.highlight}"
            ax1.text(bar.get_x() + bar.get_width()/2., bar.get_height(), label,
                     ha='center', va='bottom', fontsize=10, fontweight='bold', color=self.colors['text'])

        ax2 = ax1.twinx()
        ax2.plot(names, co2, color=self.colors['co2'], marker='o', linewidth=3, markersize=10,
                 markerfacecolor='white', markeredgewidth=2, label='CO2')
        ax2.set_ylabel('CO2 (kg)', color=self.colors['co2'], fontweight='bold')
        ax2.tick_params(axis='y', labelcolor=self.colors['co2'])
        ax2.set_ylim(0, max(max(co2), 0.001) * 1.2)
        ax2.grid(False)

        plt.title(f"{result.scenario_name}: Cost vs CO2", pad=20, loc='left')
        safe_name = result.scenario_name.replace(" ", "_").replace(":", "").lower()
        return self._save(fig, f"comparison_{safe_name}.png")

    def plot_bifl_comparison(self, budget: PricedProduct, bifl: PricedProduct, compare_years: float) -> str:
        """Cumulative spend per year: repeated budget purchases vs one durable product."""
        years = list(range(0, int(ceil(compare_years)) + 1))

        def cumulative(product: PricedProduct) -> List[float]:
            # A purchase happens at the start of every lifespan
            return [product.price * max(1, ceil(y / product.lifespan_years)) for y in years]

        fig, ax = plt.subplots(figsize=(10, 6), dpi=150)
        ax.step(years, cumulative(budget), where='post', color=self.colors['budget'], linewidth=3,
                label=f"Budget: {budget.name}")
        ax.step(years, cumulative(bifl), where='post', color=self.colors['bifl'], linewidth=3,
                label=f"Buy It For Life: {bifl.name}")
        ax.set_xlabel('Years')
        ax.set_ylabel('Cumulative spend (INR)', fontweight='bold')
        ax.legend(loc='upper left', frameon=False)
        plt.title(f"Total cost over {compare_years:g} years", pad=20, loc='left')

        safe_name = bifl.name.replace(" ", "_").lower()
        return self._save(fig, f"bifl_{safe_name}.png")

    # ============================================================================
    # BATCH ANALYSIS PLOTS
    # ============================================================================

    def plot_batch_summary(self, df: pd.DataFrame) -> List[str]:
        """Savings and CO2 per batch scenario row."""
        if df.empty:
            return []
        return [self._plot_batch_savings(df), self._plot_batch_co2(df)]

    def _plot_batch_savings(self, df: pd.DataFrame) -> str:
        # One savings figure per scenario run; every option row repeats it
        per_run = df.drop_duplicates(subset=["Scenario", "Input"])
        labels = [f"{s}\n{i}" for s, i in zip(per_run["Scenario"], per_run["Input"])]

        fig, ax = plt.subplots(figsize=(12, 7), dpi=150)
        ax.barh(labels, per_run["Savings per Event (INR)"], color=self.colors['highlight'], alpha=0.85)
        ax.set_xlabel('Savings per event (INR)', fontweight='bold')
        ax.grid(True, axis='x')
        ax.grid(False, axis='y')
        plt.title("Batch: savings by scenario", pad=20, loc='left')
        return self._save(fig, "batch_savings.png")

    def _plot_batch_co2(self, df: pd.DataFrame) -> str:
        pivot = df.groupby("Scenario")["CO2 (kg)"].agg(["min", "max"])

        fig, ax = plt.subplots(figsize=(12, 7), dpi=150)
        x = range(len(pivot))
        ax.bar([i - 0.2 for i in x], pivot["max"], width=0.4, color=self.colors['budget'], alpha=0.8, label='Highest CO2 option')
        ax.bar([i + 0.2 for i in x], pivot["min"], width=0.4, color=self.colors['co2'], alpha=0.8, label='Lowest CO2 option')
        ax.set_xticks(list(x))
        ax.set_xticklabels(pivot.index, rotation=30, ha='right')
        ax.set_ylabel('CO2 (kg)', fontweight='bold')
        ax.legend(frameon=False)
        plt.title("Batch: CO2 range by scenario", pad=20, loc='left')
        return self._save(fig, "batch_co2_range.png")
