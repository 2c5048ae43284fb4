from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional

from .constants import Highlight
from .errors import InvalidInputError


@dataclass(frozen=True)
class Coordinates:
    """WGS84 position in decimal degrees."""
    lat: float
    lon: float

    def __post_init__(self):
        if not -90.0 <= self.lat <= 90.0:
            raise InvalidInputError("lat", self.lat, "must be within [-90, 90]")
        if not -180.0 <= self.lon <= 180.0:
            raise InvalidInputError("lon", self.lon, "must be within [-180, 180]")


@dataclass(frozen=True)
class Place:
    """
    Result of a place search.
    - name: full display address
    - short_name: first two comma-separated segments of the address
    """
    name: str
    short_name: str
    lat: float
    lon: float

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(lat=self.lat, lon=self.lon)


@dataclass(frozen=True)
class Option:
    """
    One member of a comparison set, rebuilt from scratch on every input change.
    cost is in INR, time in minutes, co2 in kg, calories in kcal.
    extra holds domain-specific figures (grams needed, GB streamed, purchases, ...).
    """
    id: str
    name: str
    cost: float
    time: float
    co2: float
    calories: float = 0.0
    description: str = ""
    human_powered: bool = False
    highlight: Optional[Highlight] = None
    extra: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class EnergyFigures:
    daily: float
    monthly: float
    yearly: float


@dataclass(frozen=True)
class DeliveryEmissions:
    """kg CO2 for one order by each fulfilment route."""
    delivery: float
    pickup_car: float
    pickup_bike: float


@dataclass(frozen=True)
class DeliveryCharges:
    delivery_fee: float
    packaging: float
    platform_fee: float
    surge: float
    total: float


@dataclass(frozen=True)
class TotalCost:
    total: float
    purchases: int


@dataclass(frozen=True)
class BudgetBiflComparison:
    """
    Budget vs Buy-It-For-Life over a fixed horizon.
    savings is floored at zero; bifl_costs_more flags the opposite case.
    """
    budget_total: float
    budget_purchases: int
    bifl_total: float
    bifl_purchases: int
    savings: float
    savings_percent: float
    products_saved: int
    bifl_costs_more: bool


@dataclass(frozen=True)
class SavingsProjection:
    """Savings per event, projected with a fixed usage assumption."""
    per_event: float
    per_month: Optional[float] = None
    per_year: Optional[float] = None
    co2_kg_per_event: float = 0.0
    reference_id: Optional[str] = None
    chosen_id: Optional[str] = None


@dataclass(frozen=True)
class ScenarioResult:
    """
    Summary of one comparison scenario.
    An empty options list means the scenario inputs were insufficient.
    """
    scenario_name: str
    options: List[Option]
    savings: Optional[SavingsProjection] = None
    recommended_id: Optional[str] = None
    summary: Dict[str, float] = field(default_factory=dict)

    def get(self, option_id: str) -> Optional[Option]:
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None


@dataclass(frozen=True)
class ProteinSource:
    id: str
    name: str
    price_per_kg: float
    protein_per_100g: float
    co2_per_kg: float
    health: str


@dataclass(frozen=True)
class ApplianceVariant:
    id: str
    name: str
    watts: float
    description: str


@dataclass(frozen=True)
class BudgetProduct:
    name: str
    price: float
    lifespan_years: float


@dataclass(frozen=True)
class BIFLProduct:
    id: str
    name: str
    brand: str
    price: float
    lifespan_years: float
    uses_per_week: float
    warranty: str
    why_bifl: str
    links: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class BIFLCategory:
    name: str
    slug: str
    budget_option: BudgetProduct
    products: List[BIFLProduct]


@dataclass(frozen=True)
class LogEntry:
    id: str
    name: str
    co2: float
    water: float
    date: datetime
    savings: Optional[str] = None


@dataclass(frozen=True)
class DecisionLog:
    id: str
    date: datetime
    original_item: str
    chosen_item: str
    saved_co2: float
    saved_water: float


@dataclass(frozen=True)
class StreakState:
    """
    Consecutive-day activity streak.
    - same day as last event: unchanged
    - day after last event: streak + 1
    - any gap (or first event): reset to 1
    """
    last_event_date: Optional[date] = None
    streak_count: int = 0

    def advance(self, today: date) -> "StreakState":
        if self.last_event_date == today:
            return self
        if self.last_event_date is not None and (today - self.last_event_date).days == 1:
            return StreakState(last_event_date=today, streak_count=self.streak_count + 1)
        return StreakState(last_event_date=today, streak_count=1)
