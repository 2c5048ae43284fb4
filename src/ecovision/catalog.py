"""
Curated catalogues behind the comparison screens: protein sources,
appliance variants and Buy-It-For-Life products (prices in INR).
"""
import logging
from typing import Dict, List, Optional, Tuple

from .constants import DIET_EMISSIONS_KG_PER_KG, EGG_WEIGHT_G, FOOD_PRICES, ApplianceCategory
from .errors import UnknownKeyError
from .models import ApplianceVariant, BIFLCategory, BIFLProduct, BudgetProduct, ProteinSource
from .utils.calculations import round_half_up

logger = logging.getLogger(__name__)

# ============================================================================
# PROTEIN SOURCES
# ============================================================================

PROTEIN_SOURCES: List[ProteinSource] = [
    ProteinSource("chicken", "Chicken", FOOD_PRICES["chicken"], 27, DIET_EMISSIONS_KG_PER_KG["chicken"], "Complete protein"),
    ProteinSource("mutton", "Mutton", FOOD_PRICES["mutton"], 25, DIET_EMISSIONS_KG_PER_KG["mutton"], "Iron-rich"),
    ProteinSource("fish", "Fish", FOOD_PRICES["fish_rohu"], 18, DIET_EMISSIONS_KG_PER_KG["fish_farmed"], "Omega-3"),
    # Eggs are sold by the dozen
    ProteinSource(
        "eggs", "Eggs",
        round_half_up(FOOD_PRICES["eggs_per_dozen"] / 12 * 1000 / EGG_WEIGHT_G),
        13, DIET_EMISSIONS_KG_PER_KG["eggs"], "Affordable",
    ),
    ProteinSource("paneer", "Paneer", FOOD_PRICES["paneer"], 18, DIET_EMISSIONS_KG_PER_KG["paneer"], "Vegetarian"),
    ProteinSource("tofu", "Tofu", FOOD_PRICES["tofu"], 8, DIET_EMISSIONS_KG_PER_KG["tofu"], "Plant-based"),
    ProteinSource("dal", "Dal", FOOD_PRICES["lentils_toor"], 22, DIET_EMISSIONS_KG_PER_KG["lentils_dal"], "High fiber"),
]

# ============================================================================
# APPLIANCE VARIANTS
# ============================================================================

APPLIANCE_CATEGORIES: Dict[str, Tuple[str, List[ApplianceVariant]]] = {
    "ac": ("Air Conditioner", [
        ApplianceVariant("ac_1star", "1 Star (1.5T)", 2000, "Old/basic models"),
        ApplianceVariant("ac_3star", "3 Star (1.5T)", 1500, "Standard"),
        ApplianceVariant("ac_5star", "5 Star (1.5T)", 1100, "Energy efficient"),
        ApplianceVariant("ac_inverter", "Inverter 5 Star", 800, "Most efficient"),
    ]),
    "fan": ("Fan", [
        ApplianceVariant("fan_normal", "Normal Ceiling Fan", 75, "Standard"),
        ApplianceVariant("fan_bldc", "BLDC Fan", 28, "60% less power"),
        ApplianceVariant("fan_table", "Table Fan", 50, "Portable"),
    ]),
    "tv": ("Television", [
        ApplianceVariant("tv_led_32", '32" LED TV', 50, "Small"),
        ApplianceVariant("tv_led_43", '43" LED TV', 80, "Medium"),
        ApplianceVariant("tv_led_55", '55" LED TV', 120, "Large"),
    ]),
    "fridge": ("Refrigerator", [
        ApplianceVariant("fridge_3star", "3 Star (250L)", 150, "Runs ~8hrs/day"),
        ApplianceVariant("fridge_5star", "5 Star (250L)", 100, "Efficient"),
        ApplianceVariant("fridge_inverter", "Inverter (300L)", 70, "Most efficient"),
    ]),
    "other": ("Other", [
        ApplianceVariant("geyser", "Water Heater/Geyser", 2000, "15-30 min/day"),
        ApplianceVariant("iron", "Iron", 1000, "30 min/day avg"),
        ApplianceVariant("washing", "Washing Machine", 500, "1 hr/wash"),
        ApplianceVariant("microwave", "Microwave", 1200, "15-30 min/day"),
    ]),
}


def get_appliance_variants(category: ApplianceCategory) -> List[ApplianceVariant]:
    if category not in APPLIANCE_CATEGORIES:
        raise UnknownKeyError("appliance category", category, APPLIANCE_CATEGORIES.keys())
    return APPLIANCE_CATEGORIES[category][1]


# ============================================================================
# BUY IT FOR LIFE
# ============================================================================

BIFL_CATEGORIES: List[BIFLCategory] = [
    BIFLCategory(
        name="Backpacks",
        slug="backpacks",
        budget_option=BudgetProduct("Generic backpack", 799, 1),
        products=[
            BIFLProduct(
                "wildcraft-alpine", "Alpine 35L", "Wildcraft", 2999, 8, 5, "5 Year",
                "Heavy-duty YKK zippers, water-resistant, reinforced stitching",
                {"amazon": "https://www.amazon.in/s?k=wildcraft+alpine+35l",
                 "flipkart": "https://www.flipkart.com/search?q=wildcraft+alpine+35l"},
            ),
            BIFLProduct(
                "decathlon-forclaz", "Forclaz 40L", "Decathlon", 2499, 6, 5, "10 Year",
                "10-year warranty, designed for trekking, extremely durable",
                {"official": "https://www.decathlon.in/search?query=forclaz%2040l"},
            ),
            BIFLProduct(
                "american-tourister-urban", "Urban Groove", "American Tourister", 2199, 5, 5, "3 Year",
                "Trusted brand, good warranty, laptop compartment",
                {"amazon": "https://www.amazon.in/s?k=american+tourister+urban+groove"},
            ),
        ],
    ),
    BIFLCategory(
        name="Shoes",
        slug="shoes",
        budget_option=BudgetProduct("Generic sneakers", 999, 0.75),
        products=[
            BIFLProduct(
                "woodland-leather", "Leather Sneakers", "Woodland", 3995, 5, 4, "6 Month",
                "Full grain leather, resoleable, classic design",
                {"amazon": "https://www.amazon.in/s?k=woodland+leather+sneakers",
                 "official": "https://www.woodlandworldwide.com/"},
            ),
            BIFLProduct(
                "redtape-casual", "Casual Leather Shoes", "Red Tape", 2499, 4, 4, "3 Month",
                "Quality leather, comfortable, versatile style",
                {"amazon": "https://www.amazon.in/s?k=red+tape+leather+casual"},
            ),
        ],
    ),
    BIFLCategory(
        name="Kitchen",
        slug="kitchen",
        budget_option=BudgetProduct("Cheap knife set", 599, 1),
        products=[
            BIFLProduct(
                "victorinox-chef", 'Fibrox Chef Knife 8"', "Victorinox", 2800, 20, 7, "Lifetime",
                "Swiss made, used by professional chefs, holds edge well",
                {"amazon": "https://www.amazon.in/s?k=victorinox+chef+knife+8+inch"},
            ),
            BIFLProduct(
                "prestige-cookware", "Omega Deluxe Set", "Prestige", 3999, 15, 7, "5 Year",
                "Hard anodized, even heating, Indian brand with good service",
                {"amazon": "https://www.amazon.in/s?k=prestige+omega+deluxe",
                 "flipkart": "https://www.flipkart.com/search?q=prestige+omega+deluxe"},
            ),
            BIFLProduct(
                "hawkins-pressure-cooker", "Classic Pressure Cooker 5L", "Hawkins", 2800, 25, 5, "5 Year",
                "Made in India, spare parts available forever, lasts generations",
                {"amazon": "https://www.amazon.in/s?k=hawkins+classic+5+litre"},
            ),
        ],
    ),
    BIFLCategory(
        name="Clothing",
        slug="clothing",
        budget_option=BudgetProduct("Fast fashion t-shirt", 499, 0.5),
        products=[
            BIFLProduct(
                "levis-501", "501 Original Jeans", "Levi's", 2999, 6, 2, "None",
                "Iconic fit, heavy denim that ages beautifully, repairable",
                {"official": "https://www.levi.in/501",
                 "amazon": "https://www.amazon.in/s?k=levis+501+original"},
            ),
            BIFLProduct(
                "uniqlo-supima", "Supima Cotton T-Shirt", "Uniqlo", 990, 3, 2, "None",
                "High quality cotton, minimal design that never dates",
                {"official": "https://www.uniqlo.com/in/"},
            ),
        ],
    ),
    BIFLCategory(
        name="Tools",
        slug="tools",
        budget_option=BudgetProduct("Cheap toolkit", 799, 2),
        products=[
            BIFLProduct(
                "stanley-toolkit", "65 Piece Tool Kit", "Stanley", 3499, 25, 1, "Lifetime",
                "Chrome vanadium steel, lifetime warranty, industry standard",
                {"amazon": "https://www.amazon.in/s?k=stanley+65+piece+tool+kit"},
            ),
            BIFLProduct(
                "bosch-drill", "GSB 600 Impact Drill", "Bosch", 3200, 15, 0.5, "1 Year",
                "Professional grade, spare parts available, powerful motor",
                {"amazon": "https://www.amazon.in/s?k=bosch+gsb+600"},
            ),
        ],
    ),
    BIFLCategory(
        name="Tech",
        slug="tech",
        budget_option=BudgetProduct("Budget earbuds", 999, 0.5),
        products=[
            BIFLProduct(
                "sony-wh1000xm4", "WH-1000XM4", "Sony", 19990, 6, 7, "1 Year",
                "Best-in-class ANC, replaceable ear pads, software updates",
                {"amazon": "https://www.amazon.in/s?k=sony+wh-1000xm4",
                 "flipkart": "https://www.flipkart.com/search?q=sony+wh-1000xm4"},
            ),
            BIFLProduct(
                "anker-powerbank", "PowerCore 20000mAh", "Anker", 2999, 5, 3, "18 Month",
                "Quality cells, excellent safety, trusted brand",
                {"amazon": "https://www.amazon.in/s?k=anker+powercore+20000"},
            ),
            BIFLProduct(
                "logitech-mx-master", "MX Master 3S", "Logitech", 8995, 7, 7, "2 Year",
                "Best ergonomic mouse, USB-C charging, works on any surface",
                {"amazon": "https://www.amazon.in/s?k=logitech+mx+master+3s"},
            ),
        ],
    ),
]

# Keywords for matching a scanned product to a category, checked in order
CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    "backpacks": ["bag", "backpack", "rucksack", "luggage", "suitcase", "duffel", "tote", "handbag", "purse"],
    "shoes": ["shoe", "sneaker", "boot", "sandal", "footwear", "slipper", "loafer", "oxford", "heel"],
    "kitchen": ["knife", "pan", "pot", "cookware", "kitchen", "utensil", "cooker", "mixer", "blender",
                "plate", "bowl", "dish"],
    "clothing": ["shirt", "pant", "jean", "dress", "jacket", "coat", "sweater", "hoodie", "t-shirt",
                 "cloth", "apparel", "wear", "garment"],
    "tools": ["tool", "drill", "hammer", "screwdriver", "wrench", "plier", "toolkit", "hardware"],
    "tech": ["headphone", "earphone", "earbud", "phone", "laptop", "charger", "cable", "speaker",
             "mouse", "keyboard", "powerbank", "electronic"],
}

MAX_MATCHED_PRODUCTS = 2


def get_category_by_slug(slug: str) -> Optional[BIFLCategory]:
    for category in BIFL_CATEGORIES:
        if category.slug == slug:
            return category
    return None


def get_product_by_id(product_id: str) -> Optional[Tuple[BIFLProduct, BIFLCategory]]:
    for category in BIFL_CATEGORIES:
        for product in category.products:
            if product.id == product_id:
                return product, category
    return None


def match_product_to_category(
    product_name: str, product_category: Optional[str] = None
) -> Optional[Tuple[BIFLCategory, List[BIFLProduct]]]:
    """
    Match a scanned product to a BIFL category by substring keywords.
    Returns the category and its top products, or None when nothing matches.
    """
    search_terms = f"{product_name} {product_category or ''}".lower()
    for slug, keywords in CATEGORY_KEYWORDS.items():
        for keyword in keywords:
            if keyword in search_terms:
                category = get_category_by_slug(slug)
                if category is not None:
                    logger.debug(f"Matched '{product_name}' to {slug} via '{keyword}'")
                    return category, category.products[:MAX_MATCHED_PRODUCTS]
    return None
