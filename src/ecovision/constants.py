from typing import Dict, List, Literal, Tuple, get_args

# ============================================================================
# TYPES (closed key sets for every factor table)
# ============================================================================

TransportMode = Literal[
    "ola_mini", "ola_prime", "ola_suv",
    "uber_go", "uber_premier", "uber_xl",
    "auto_rickshaw",
    "car_petrol", "car_diesel", "motorcycle", "scooter_petrol", "scooter_electric",
    "bicycle", "walking",
    "metro_delhi", "metro_mumbai", "metro_bangalore", "metro_chennai", "metro_kolkata",
    "bus_city", "bus_ac", "local_train",
]
RideType = Literal[
    "ola_mini", "ola_prime", "ola_suv",
    "uber_go", "uber_premier", "uber_xl",
    "auto_rickshaw",
]
# Ride-hailing tiers offered alongside the auto rickshaw in a trip comparison
HailingRideType = Literal[
    "ola_mini", "ola_prime", "ola_suv",
    "uber_go", "uber_premier", "uber_xl",
]
TravelMode = Literal["car", "auto", "metro", "cycle", "walk"]
ActiveMode = Literal["walking", "cycling", "running"]
ApplianceType = Literal[
    "ac_1ton", "ac_1_5ton", "ac_2ton",
    "geyser_15l", "geyser_25l",
    "washing_machine", "refrigerator",
    "fan_ceiling", "fan_table",
    "led_bulb", "cfl_bulb", "incandescent",
    "laptop", "desktop_pc",
    "tv_led_32", "tv_led_55", "tv_old_crt",
    "microwave", "induction",
]
ApplianceCategory = Literal["ac", "fan", "tv", "fridge", "other"]
FoodType = Literal[
    "beef", "mutton", "pork", "chicken", "fish_farmed", "fish_wild", "eggs",
    "cheese", "paneer", "milk", "tofu", "lentils_dal", "rice", "wheat",
    "vegetables", "fruits",
]
FoodPriceItem = Literal[
    "chicken", "mutton", "fish_rohu", "eggs_per_dozen", "paneer", "tofu",
    "lentils_toor", "lentils_moong", "rice_basmati", "rice_regular", "wheat_atta",
    "vegetables_average", "milk_per_liter", "curd_per_kg",
]
StreamingQuality = Literal["4k", "1080p", "720p", "480p", "audio_only"]
FashionItem = Literal[
    "tshirt_fast", "tshirt_quality", "tshirt_thrift",
    "jeans_fast", "jeans_quality", "jeans_thrift",
    "jacket_fast", "jacket_quality", "jacket_thrift",
    "shoes_fast", "shoes_quality", "shoes_thrift",
]
City = Literal["delhi", "mumbai", "bangalore", "chennai", "kolkata", "hyderabad", "pune", "average"]
DataOperator = Literal["jio", "airtel", "vi"]
DataPlan = Literal["prepaid", "postpaid"]
Highlight = Literal["cheapest", "fastest", "healthiest", "greenest", "recommended"]

# ============================================================================
# EMISSION FACTORS
# ============================================================================

# Transport (grams CO2 per km, per passenger for public transit)
# Sources: EPA green vehicles, DEFRA 2023, Delhi Metro sustainability report, CPCB
TRANSPORT_EMISSIONS_G_PER_KM: Dict[str, float] = {
    "ola_mini": 175,
    "ola_prime": 220,
    "ola_suv": 320,
    "uber_go": 175,
    "uber_premier": 220,
    "uber_xl": 320,
    "auto_rickshaw": 80,  # CNG
    "car_petrol": 192,
    "car_diesel": 171,
    "motorcycle": 72,
    "scooter_petrol": 65,
    "scooter_electric": 12,  # includes grid emissions
    "bicycle": 0,
    "walking": 0,
    "metro_delhi": 22,
    "metro_mumbai": 25,
    "metro_bangalore": 24,
    "metro_chennai": 23,
    "metro_kolkata": 26,
    "bus_city": 45,
    "bus_ac": 65,
    "local_train": 18,
}

# Food delivery (grams CO2)
DELIVERY_BASE_EMISSION_G = 300      # rider travel to restaurant, waiting
DELIVERY_PER_KM_EMISSION_G = 140    # two-wheeler, restaurant to customer
PICKUP_CAR_PER_KM_G = 175
PICKUP_BIKE_PER_KM_G = 0
# Calibrated multiplier on the delivery leg: restaurant-to-diner distance plus
# the rider's approach overhead. Not a literal round trip.
DELIVERY_ROUTE_FACTOR = 2.5
PICKUP_ROUND_TRIP_FACTOR = 2

# India grid (CEA 2023), kg CO2 per kWh
GRID_EMISSION_FACTOR_KG_PER_KWH = 0.82

# Appliance power draw (watts)
APPLIANCE_POWER_W: Dict[str, float] = {
    "ac_1ton": 1200,
    "ac_1_5ton": 1800,
    "ac_2ton": 2400,
    "geyser_15l": 2000,
    "geyser_25l": 2500,
    "washing_machine": 500,
    "refrigerator": 150,
    "fan_ceiling": 75,
    "fan_table": 55,
    "led_bulb": 10,
    "cfl_bulb": 15,
    "incandescent": 60,
    "laptop": 50,
    "desktop_pc": 200,
    "tv_led_32": 50,
    "tv_led_55": 80,
    "tv_old_crt": 200,
    "microwave": 1200,
    "induction": 2000,
}

# Diet (kg CO2 per kg of food). Source: Our World in Data, FAO
DIET_EMISSIONS_KG_PER_KG: Dict[str, float] = {
    "beef": 27.0,
    "mutton": 12.0,
    "pork": 7.2,
    "chicken": 6.9,
    "fish_farmed": 5.4,
    "fish_wild": 3.0,
    "eggs": 4.2,
    "cheese": 9.8,
    "paneer": 3.2,
    "milk": 1.9,
    "tofu": 2.0,
    "lentils_dal": 0.9,
    "rice": 2.7,
    "wheat": 1.4,
    "vegetables": 0.4,
    "fruits": 0.5,
}

# Streaming. Source: IEA, Carbon Trust
STREAMING_DATA_GB_PER_HOUR: Dict[str, float] = {
    "4k": 7.0,
    "1080p": 3.0,
    "720p": 1.5,
    "480p": 0.7,
    "audio_only": 0.15,
}
STREAMING_EMISSIONS_G_PER_HOUR: Dict[str, float] = {
    "4k": 220,
    "1080p": 70,
    "720p": 36,
    "480p": 18,
    "audio_only": 5,
}

# Fashion (kg CO2 per item). Source: Ellen MacArthur Foundation
FASHION_EMISSIONS_KG_PER_ITEM: Dict[str, float] = {
    "tshirt_fast": 8.0,
    "tshirt_quality": 5.0,
    "tshirt_thrift": 0.5,
    "jeans_fast": 33.4,
    "jeans_quality": 20.0,
    "jeans_thrift": 1.0,
    "jacket_fast": 25.0,
    "jacket_quality": 15.0,
    "jacket_thrift": 1.0,
    "shoes_fast": 14.0,
    "shoes_quality": 10.0,
    "shoes_thrift": 0.8,
}

# kcal per km, average adult
CALORIE_BURN_KCAL_PER_KM: Dict[str, float] = {
    "walking": 65,
    "cycling": 35,
    "running": 80,
}

# ============================================================================
# PRICING (INR)
# ============================================================================

# Ola/Uber fare cards (Jan 2024), Delhi/Mumbai: (base, per km, per minute)
RIDE_FARES: Dict[str, Tuple[float, float, float]] = {
    "ola_mini": (40, 12, 1.5),
    "ola_prime": (60, 15, 2),
    "ola_suv": (80, 20, 2.5),
    "uber_go": (40, 12, 1.5),
    "uber_premier": (60, 15, 2),
    "uber_xl": (80, 20, 2.5),
    "auto_rickshaw": (25, 10, 0),
}

# Delhi Metro: (upper bound km inclusive, flat fare). First matching band wins.
METRO_FARE_BANDS: List[Tuple[float, float]] = [
    (2.0, 10),
    (5.0, 20),
    (12.0, 30),
    (21.0, 40),
    (32.0, 50),
    (float("inf"), 60),
]

# Delivery app charges (averages)
DELIVERY_FEE_AVG = 45
PACKAGING_CHARGE_AVG = 12
PLATFORM_FEE_AVG = 5
SURGE_DISTANCE_THRESHOLD_KM = 5
SURGE_PER_KM = 3
# Peak-hour multiplier on the delivery fee
PEAK_SURGE_MULTIPLIER = 1.4

# Self pickup on a two-wheeler
PICKUP_FUEL_COST_PER_KM = 5
PICKUP_MINUTES_PER_KM = 3

# Residential tariffs, INR per kWh, weighted average across slabs
ELECTRICITY_RATES: Dict[str, float] = {
    "delhi": 5.5,
    "mumbai": 6.5,
    "bangalore": 6.0,
    "chennai": 5.0,
    "kolkata": 7.0,
    "hyderabad": 6.0,
    "pune": 6.5,
    "average": 6.0,
}

# INR per kg unless the key says otherwise
FOOD_PRICES: Dict[str, float] = {
    "chicken": 320,
    "mutton": 650,
    "fish_rohu": 280,
    "eggs_per_dozen": 84,
    "paneer": 400,
    "tofu": 200,
    "lentils_toor": 140,
    "lentils_moong": 120,
    "rice_basmati": 80,
    "rice_regular": 45,
    "wheat_atta": 40,
    "vegetables_average": 50,
    "milk_per_liter": 60,
    "curd_per_kg": 80,
}
EGG_WEIGHT_G = 60

# Mobile data, INR per GB
MOBILE_DATA_RATES: Dict[str, Dict[str, float]] = {
    "jio": {"prepaid": 10, "postpaid": 15},
    "airtel": {"prepaid": 12, "postpaid": 18},
    "vi": {"prepaid": 11, "postpaid": 16},
}
MOBILE_DATA_RATE_AVG = 10

# ============================================================================
# GEO / TIME
# ============================================================================

EARTH_RADIUS_KM = 6371.0

# Average urban speeds, km/h
TRAVEL_SPEEDS_KMH: Dict[str, float] = {
    "car": 25,
    "auto": 20,
    "metro": 35,
    "cycle": 15,
    "walk": 5,
}
METRO_WAIT_BUFFER_MIN = 8
METRO_STATION_WALK_KM = 0.5

# ============================================================================
# SCENARIO CONSTANTS
# ============================================================================

# Fixed calendar approximations, not calendar-accurate
DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365
MONTHS_PER_YEAR = 12
WEEKS_PER_YEAR = 52

# Usage assumptions for savings projections
DELIVERY_ORDERS_PER_MONTH = 10
DIET_SWAPS_PER_MONTH = 30
STREAMING_DAYS_PER_MONTH = 30

# Pickup is recommended above this saving and below this round-trip time
PICKUP_MIN_SAVINGS = 20
PICKUP_MAX_MINUTES = 25

DEFAULT_COMPARE_YEARS = 10

GEOCODER_USER_AGENT = "EcoVision/1.0"
GEOCODER_COUNTRY_CODE = "in"
DECIMALS = 2


def _check_table(name: str, table: Dict[str, object], key_type) -> None:
    keys = set(get_args(key_type))
    missing = keys - set(table)
    extra = set(table) - keys
    if missing or extra:
        raise RuntimeError(
            f"Factor table {name} out of sync with its key type: "
            f"missing={sorted(missing)} unexpected={sorted(extra)}"
        )


_check_table("TRANSPORT_EMISSIONS_G_PER_KM", TRANSPORT_EMISSIONS_G_PER_KM, TransportMode)
_check_table("RIDE_FARES", RIDE_FARES, RideType)
_check_table("TRAVEL_SPEEDS_KMH", TRAVEL_SPEEDS_KMH, TravelMode)
_check_table("CALORIE_BURN_KCAL_PER_KM", CALORIE_BURN_KCAL_PER_KM, ActiveMode)
_check_table("APPLIANCE_POWER_W", APPLIANCE_POWER_W, ApplianceType)
_check_table("DIET_EMISSIONS_KG_PER_KG", DIET_EMISSIONS_KG_PER_KG, FoodType)
_check_table("FOOD_PRICES", FOOD_PRICES, FoodPriceItem)
_check_table("STREAMING_DATA_GB_PER_HOUR", STREAMING_DATA_GB_PER_HOUR, StreamingQuality)
_check_table("STREAMING_EMISSIONS_G_PER_HOUR", STREAMING_EMISSIONS_G_PER_HOUR, StreamingQuality)
_check_table("FASHION_EMISSIONS_KG_PER_ITEM", FASHION_EMISSIONS_KG_PER_ITEM, FashionItem)
_check_table("ELECTRICITY_RATES", ELECTRICITY_RATES, City)
_check_table("MOBILE_DATA_RATES", MOBILE_DATA_RATES, DataOperator)
