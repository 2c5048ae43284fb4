from .models import (
    Coordinates,
    Place,
    Option,
    ScenarioResult,
    SavingsProjection,
    BudgetProduct,
    BIFLProduct,
    StreakState,
)
from .errors import (
    EcoVisionError,
    InvalidInputError,
    UnknownKeyError,
    UnknownActivityKind,
)
from .comparator import ComparatorConfig, assign_highlights, project_savings, rank_options
from .scenarios import (
    run_transport_scenario,
    run_delivery_scenario,
    run_diet_scenario,
    run_energy_scenario,
    run_streaming_scenario,
    run_bifl_scenario,
)

__all__ = [
    "Coordinates",
    "Place",
    "Option",
    "ScenarioResult",
    "SavingsProjection",
    "BudgetProduct",
    "BIFLProduct",
    "StreakState",
    "EcoVisionError",
    "InvalidInputError",
    "UnknownKeyError",
    "UnknownActivityKind",
    "ComparatorConfig",
    "assign_highlights",
    "project_savings",
    "rank_options",
    "run_transport_scenario",
    "run_delivery_scenario",
    "run_diet_scenario",
    "run_energy_scenario",
    "run_streaming_scenario",
    "run_bifl_scenario",
]
