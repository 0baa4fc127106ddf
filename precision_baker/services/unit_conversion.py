"""
Unit Conversion Engine for Precision Baker.

Converts cooking measurements between volume and mass units (density aware)
and formats the basic ingredient listing served when the AI converter is down.
Everything here is a pure function over the static tables below.
"""

import math
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Literal, Optional, get_args

# --- Types ---

Unit = Literal[
    "cup", "tbsp", "tsp", "fl-oz", "ml", "l",
    "g", "kg", "oz", "lb",
    "pinch", "dash",
]
UNITS: tuple[str, ...] = get_args(Unit)

UnitType = Literal["volume", "mass", "pinch"]


class ConversionError(ValueError):
    """Base class for caller-visible conversion failures."""


class InvalidQuantity(ConversionError):
    pass


class UnsupportedConversion(ConversionError):
    pass


class InvalidScaleFactor(ConversionError):
    pass


class ConversionOutcome:
    def __init__(
        self,
        quantity: str,
        from_unit: str,
        to_unit: str,
        converted: Decimal,
        converted_text: str,
        ingredient: Optional[str] = None,
        density: Optional[float] = None,
    ):
        self.quantity = quantity
        self.from_unit = from_unit
        self.to_unit = to_unit
        self.converted = converted
        self.converted_text = converted_text
        self.ingredient = ingredient
        self.density = density

    @property
    def result(self) -> str:
        text = f"{self.quantity} {self.from_unit} = {self.converted_text} {self.to_unit}"
        if self.ingredient:
            text += f" of {self.ingredient}"
        return text

    def to_dict(self):
        return {
            "quantity": self.quantity,
            "from_unit": self.from_unit,
            "to_unit": self.to_unit,
            "converted": float(self.converted),
            "ingredient": self.ingredient,
            "density": self.density,
            "result": self.result,
        }


# --- Data Tables ---

# Base units: ml (volume), g (mass)
VOLUME_ML = {
    "cup": 236.588,
    "tbsp": 14.787,
    "tsp": 4.929,
    "fl-oz": 29.574,
    "ml": 1.0,
    "l": 1000.0,
}

MASS_G = {
    "g": 1.0,
    "kg": 1000.0,
    "oz": 28.350,
    "lb": 453.592,
}

# pinch/dash only convert toward these targets, never back.
# Gram weights are fixed (salt-like), independent of the ingredient.
PINCH_TSP = {"pinch": 1 / 16, "dash": 1 / 8}
PINCH_G = {"pinch": 0.36, "dash": 0.72}

WATER_DENSITY = 1.0
DEFAULT_DENSITY = 0.8

# Density Table: (name substring, g/ml).
# Order matters: the first key contained in the ingredient name wins.
DENSITY_TABLE: tuple[tuple[str, float], ...] = (
    ("water", 1.0),
    ("milk", 1.03),      # before "butter" so buttermilk reads as milk
    ("cream", 1.01),
    ("butter", 0.911),
    ("oil", 0.92),
    ("honey", 1.42),
    ("maple syrup", 1.32),
    ("molasses", 1.40),
    ("brown sugar", 0.93),  # packed
    ("powdered sugar", 0.56),
    ("sugar", 0.85),
    ("cocoa", 0.36),
    ("flour", 0.6),
    ("baking powder", 0.81),
    ("baking soda", 0.87),
    ("salt", 1.2),
    ("oats", 0.38),
    ("rice", 0.85),
    ("chocolate chips", 0.72),
)


# --- Lookups ---

def unit_type(unit: str) -> Optional[UnitType]:
    if unit in VOLUME_ML:
        return "volume"
    if unit in MASS_G:
        return "mass"
    if unit in PINCH_TSP:
        return "pinch"
    return None


def lookup_density(ingredient: Optional[str]) -> float:
    """Density in g/ml for an ingredient name (substring match, first wins).

    No ingredient means water; an unknown ingredient gets DEFAULT_DENSITY.
    """
    if not ingredient or not ingredient.strip():
        return WATER_DENSITY

    name = ingredient.lower()
    for key, density in DENSITY_TABLE:
        if key in name:
            return density
    return DEFAULT_DENSITY


def conversion_ratio(from_unit: str, to_unit: str, ingredient: Optional[str] = None) -> float:
    """Multiplier taking a quantity in from_unit to to_unit.

    Raises UnsupportedConversion when the pair has no defined ratio.
    """
    type_from = unit_type(from_unit)
    type_to = unit_type(to_unit)
    if type_from is None or type_to is None:
        raise UnsupportedConversion(f"Unknown unit in conversion {from_unit} -> {to_unit}")

    if from_unit == to_unit:
        return 1.0

    if type_from == "pinch":
        if to_unit == "tsp":
            return PINCH_TSP[from_unit]
        if to_unit == "ml":
            return PINCH_TSP[from_unit] * VOLUME_ML["tsp"]
        if to_unit == "g":
            return PINCH_G[from_unit]
        raise UnsupportedConversion(f"Cannot convert {from_unit} to {to_unit}")

    if type_to == "pinch":
        raise UnsupportedConversion(f"Cannot convert {from_unit} to {to_unit}")

    if type_from == type_to == "volume":
        return VOLUME_ML[from_unit] / VOLUME_ML[to_unit]
    if type_from == type_to == "mass":
        return MASS_G[from_unit] / MASS_G[to_unit]

    # Cross type: grams = ml * density
    density = lookup_density(ingredient)
    if type_from == "volume":
        return VOLUME_ML[from_unit] * density / MASS_G[to_unit]
    return MASS_G[from_unit] / (density * VOLUME_ML[to_unit])


# --- Formatting ---

def parse_quantity(quantity) -> Decimal:
    try:
        value = Decimal(str(quantity).strip())
    except (InvalidOperation, ValueError):
        raise InvalidQuantity(f"Quantity '{quantity}' is not a number")
    if not value.is_finite():
        raise InvalidQuantity(f"Quantity '{quantity}' is not a finite number")
    if value < 0:
        raise InvalidQuantity(f"Quantity '{quantity}' must not be negative")
    return value


def round_half_up(value: float, places: int = 2) -> Decimal:
    if not math.isfinite(value):
        raise InvalidQuantity(f"Amount {value} is out of range")
    exp = Decimal(1).scaleb(-places)
    d = Decimal(repr(value))
    with localcontext() as ctx:
        # Room for every integer digit plus the decimal places
        ctx.prec = max(ctx.prec, d.adjusted() + places + 2)
        return d.quantize(exp, rounding=ROUND_HALF_UP)


def format_amount(value: float) -> str:
    """Print an amount with at most two decimals and no trailing zeros."""
    text = f"{round_half_up(value):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


# --- Core Functions ---

def convert_quantity(
    quantity,
    from_unit: str,
    to_unit: str,
    ingredient: Optional[str] = None,
) -> ConversionOutcome:
    """Convert a quantity between two units.

    Same-unit requests return the quantity untouched. Cross-family requests
    (volume <-> mass) use the ingredient density, or water when no
    ingredient is given.
    """
    value = parse_quantity(quantity)
    quantity_text = str(quantity).strip()
    ingredient = ingredient.strip() if ingredient and ingredient.strip() else None

    ratio = conversion_ratio(from_unit, to_unit, ingredient)

    density = None
    if {unit_type(from_unit), unit_type(to_unit)} == {"volume", "mass"}:
        density = lookup_density(ingredient)

    if from_unit == to_unit:
        return ConversionOutcome(
            quantity_text, from_unit, to_unit, value, quantity_text, ingredient, density
        )

    product = float(value) * ratio
    if not math.isfinite(product):
        raise InvalidQuantity(f"Quantity '{quantity_text}' is too large to convert")
    converted = round_half_up(product)
    return ConversionOutcome(
        quantity_text, from_unit, to_unit, converted, f"{converted:.2f}", ingredient, density
    )


# --- Fallback Recipe Listing ---

class StaticIngredient:
    __slots__ = ("name", "cup", "tsp", "gram")

    def __init__(self, name: str, gram: str, cup: Optional[str] = None, tsp: Optional[str] = None):
        self.name = name
        self.gram = gram
        self.cup = cup
        self.tsp = tsp

    @property
    def volume_text(self) -> str:
        return self.cup or self.tsp

    @property
    def grams(self) -> float:
        return float(re.match(r"\d+(?:\.\d+)?", self.gram).group(0))

    @property
    def volume_amount(self) -> float:
        return _parse_fraction(self.volume_text.split(" ")[0])

    @property
    def volume_unit(self) -> str:
        return self.volume_text.split(" ")[1]


STATIC_INGREDIENTS: tuple[StaticIngredient, ...] = (
    StaticIngredient("all-purpose flour", cup="2 cups", gram="240g"),
    StaticIngredient("granulated sugar", cup="1 cup", gram="200g"),
    StaticIngredient("brown sugar, packed", cup="1 cup", gram="220g"),
    StaticIngredient("unsalted butter", cup="1/2 cup", gram="113g"),
    StaticIngredient("vanilla extract", tsp="1 tsp", gram="5g"),
    StaticIngredient("salt", tsp="1 tsp", gram="6g"),
    StaticIngredient("chocolate chips", cup="1 cup", gram="170g"),
)

CUP_TO_GRAM = "cup-to-gram"

PRO_MODE_NOTE = (
    "**Professional Baker Notes:** For optimal results, maintain dough temperature "
    "between 68-72°F during mixing. Final hydration should be 65-68% depending on "
    "flour protein content."
)
# Fixed text; no humidity model is applied to the amounts.
HUMIDITY_NOTE = (
    "**Humidity adjustment applied:** Reduced flour by 5g to account for high humidity."
)


def _parse_fraction(token: str) -> float:
    if "/" in token:
        num, den = token.split("/", 1)
        return float(num) / float(den)
    return float(token)


_LARGEST_STATIC_AMOUNT = max(max(ing.grams, ing.volume_amount) for ing in STATIC_INGREDIENTS)


def parse_scale_factor(scale_factor, strict: bool = False) -> float:
    """Parse a scale factor; invalid, non-positive or overflowing values become 1.

    With strict=True those values raise InvalidScaleFactor instead.
    """
    try:
        factor = float(str(scale_factor).strip())
    except (TypeError, ValueError):
        factor = math.nan

    # The scaled static amounts must stay finite as well
    if factor > 0 and math.isfinite(factor * _LARGEST_STATIC_AMOUNT):
        return factor
    if strict:
        raise InvalidScaleFactor(f"Scale factor '{scale_factor}' must be a positive number")
    return 1.0


def generate_fallback_ingredient_lines(
    conversion_type: str,
    scale_factor,
    humidity_adjust: bool = False,
    strict: bool = False,
) -> list[str]:
    """Basic ingredient listing for the reference recipe, scaled.

    humidity_adjust is accepted for signature parity with the AI path but
    never changes the lines; see build_fallback_recipe.
    """
    factor = parse_scale_factor(scale_factor, strict=strict)

    lines = []
    for ing in STATIC_INGREDIENTS:
        if conversion_type == CUP_TO_GRAM:
            amount = format_amount(ing.grams * factor)
            lines.append(f"- **{amount}g** {ing.name} ({ing.volume_text})")
        else:
            amount = format_amount(ing.volume_amount * factor)
            lines.append(f"- **{amount} {ing.volume_unit}** {ing.name} ({ing.gram})")
    return lines


def build_fallback_recipe(
    recipe_text: str,
    conversion_type: str,
    scale_factor,
    humidity_adjust: bool = False,
    pro_mode: bool = False,
) -> str:
    """Markdown recipe served when the AI conversion is unavailable."""
    title = (recipe_text or "").split("\n")[0].strip() or "Converted Recipe"
    lines = generate_fallback_ingredient_lines(conversion_type, scale_factor, humidity_adjust)

    parts = [f"## {title}", "", "\n".join(lines), ""]
    if pro_mode:
        parts.append(PRO_MODE_NOTE)
    if humidity_adjust:
        parts.append(HUMIDITY_NOTE)
    return "\n".join(parts).rstrip()
