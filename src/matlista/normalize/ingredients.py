"""Ingredient line parsing, aggregation and formatting."""

import math
import re
from collections.abc import Iterable
from dataclasses import dataclass, replace

from matlista.logging_config import get_logger
from matlista.normalize.names import normalize_ingredient_name
from matlista.normalize.units import extract_quantity, extract_trailing_quantity, extract_unit

logger = get_logger(__name__)


# Recipe section headings that end up in scraped ingredient lists
SECTION_HEADERS = re.compile(
    r"(?:ingredienser|pajdeg|deg|fyllning|pajfyllning|sås|servering|till servering"
    r"|garnering|marinad|dressing|topping|kryddning|bakning|frosting|glasyr"
    r"|dekoration):?",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ParsedIngredient:
    """A single ingredient line split into quantity, unit and name."""

    quantity: float
    unit: str | None
    name: str
    normalized_name: str
    original_text: str
    sources: tuple[str, ...] = ()

    @property
    def key(self) -> tuple[str, str]:
        """Grouping key: same key means same grocery item."""
        return self.normalized_name.lower(), (self.unit or "").lower()


# =============================================================================
# Parsing
# =============================================================================


def parse_ingredient(line: str, source: str | None = None) -> ParsedIngredient:
    """
    Parse a raw ingredient line.

    Examples:
        "1 1/2 dl grädde" -> 1.5, "dl", "grädde"
        "2 ägg" -> 2, None, "ägg"
        "Mjöl 3dl" -> 3, "dl", "mjöl"

    Never raises; unrecognized input degrades to quantity 1 and no unit.
    """
    original = (line or "").strip()

    quantity, after_quantity = extract_quantity(original)
    unit, after_unit = extract_unit(after_quantity)
    name = " ".join(after_unit.split())

    if after_quantity == original and unit is None:
        # No leading quantity or unit, try "Mjöl 3dl"
        if trailing := extract_trailing_quantity(original):
            quantity, unit, name = trailing
            name = name.lower()

    parsed = ParsedIngredient(
        quantity=quantity,
        unit=unit,
        name=name,
        normalized_name=normalize_ingredient_name(name) or normalize_ingredient_name(original),
        original_text=original,
        sources=(source,) if source else (),
    )
    logger.debug(f"Parsed {original!r} -> {quantity} {unit} {parsed.normalized_name!r}")
    return parsed


# =============================================================================
# Aggregation
# =============================================================================


def is_section_header(item: ParsedIngredient) -> bool:
    """
    Check if a parsed line is a recipe heading ("Fyllning:") rather than an ingredient.

    Only a line that is nothing but the heading counts; "2 dl dressing" is an
    ingredient.
    """
    return SECTION_HEADERS.fullmatch(item.original_text.strip()) is not None


def aggregate_ingredients(items: Iterable[ParsedIngredient]) -> list[ParsedIngredient]:
    """
    Merge ingredients that refer to the same grocery item.

    Entries are grouped by (normalized name, unit). The first entry of each
    group keeps its position and display fields; only quantities are summed
    and sources are merged. Section headings and empty entries are dropped.

    Re-aggregating an aggregated list gives the same result, so a grocery
    list can be rebuilt from scratch on every refresh.
    """
    aggregated: dict[tuple[str, str], ParsedIngredient] = {}

    for item in items:
        if not item.normalized_name or is_section_header(item):
            continue

        key = item.key
        existing = aggregated.get(key)
        if existing is None:
            aggregated[key] = item
            continue

        sources = existing.sources + tuple(s for s in item.sources if s not in existing.sources)
        aggregated[key] = replace(
            existing,
            quantity=existing.quantity + item.quantity,
            sources=sources,
        )

    return list(aggregated.values())


# =============================================================================
# Formatting
# =============================================================================


def format_quantity(quantity: float) -> str:
    """Render a quantity: "2", "1.5", "0.33", "0.004"."""
    if float(quantity).is_integer():
        return str(int(quantity))

    rendered = f"{quantity:.2f}".rstrip("0").rstrip(".")
    if rendered == "0" and quantity > 0:
        # Amounts below 0.005 keep two significant digits
        decimals = 1 - math.floor(math.log10(quantity))
        rendered = f"{quantity:.{decimals}f}".rstrip("0").rstrip(".")

    return rendered


def _reads_as_measure(name: str) -> bool:
    """Check if a bare name would itself parse as a quantity or unit."""
    _, rest = extract_quantity(name)
    unit, _ = extract_unit(rest)
    return rest != name.strip() or unit is not None or extract_trailing_quantity(name) is not None


def format_ingredient(item: ParsedIngredient) -> str:
    """
    Format a parsed ingredient back into a display string.

    The quantity is left out for a single unit-less item ("ägg", not "1 ägg"),
    unless the name would then be read as a measure ("1 Mjöl 3dl").
    """
    parts: list[str] = []

    if item.quantity != 1 or item.unit or _reads_as_measure(item.name):
        parts.append(format_quantity(item.quantity))

    if item.unit:
        parts.append(item.unit)

    if item.name:
        parts.append(item.name)

    return " ".join(parts)
