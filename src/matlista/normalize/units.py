"""Quantity and unit extraction for Swedish ingredient lines."""

import math
import re
from types import MappingProxyType

from matlista.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# Unit Tables
# =============================================================================

# Every recognized spelling -> canonical abbreviation
UNIT_SPELLINGS: MappingProxyType[str, str] = MappingProxyType(
    {
        # Count
        "st": "st",
        "styck": "st",
        "stycken": "st",
        # Weight
        "g": "g",
        "gram": "g",
        "kg": "kg",
        "kilo": "kg",
        "kilogram": "kg",
        # Volume
        "dl": "dl",
        "deciliter": "dl",
        "l": "l",
        "liter": "l",
        "ml": "ml",
        "milliliter": "ml",
        "cl": "cl",
        "centiliter": "cl",
        "msk": "msk",
        "matsked": "msk",
        "matskedar": "msk",
        "tsk": "tsk",
        "tesked": "tsk",
        "teskedar": "tsk",
        "krm": "krm",
        "kryddmått": "krm",
        # Packaging
        "förp": "förp",
        "förpackning": "förp",
        "förpackningar": "förp",
        "paket": "förp",
        "burk": "burk",
        "burkar": "burk",
        "flaska": "flaska",
        "flaskor": "flaska",
        # Portions
        "knippe": "knippe",
        "knippor": "knippe",
        "näve": "näve",
        "nävar": "näve",
        "skiva": "skiva",
        "skivor": "skiva",
        "klyfta": "klyfta",
        "klyftor": "klyfta",
        "bit": "bit",
        "bitar": "bit",
    }
)

CANONICAL_UNITS: frozenset[str] = frozenset(UNIT_SPELLINGS.values())

# Alternation ordered longest spelling first so "matskedar" wins over "msk"
_UNIT_ALTERNATION = "|".join(
    re.escape(spelling) for spelling in sorted(UNIT_SPELLINGS, key=lambda s: (-len(s), s))
)

_UNIT_RE = re.compile(rf"(?P<unit>{_UNIT_ALTERNATION})(?!\w)\.?\s*", re.IGNORECASE)


# =============================================================================
# Quantity Patterns
# =============================================================================

UNICODE_FRACTIONS: MappingProxyType[str, float] = MappingProxyType(
    {
        "½": 1 / 2,
        "⅓": 1 / 3,
        "⅔": 2 / 3,
        "¼": 1 / 4,
        "¾": 3 / 4,
        "⅕": 1 / 5,
        "⅖": 2 / 5,
        "⅗": 3 / 5,
        "⅘": 4 / 5,
        "⅙": 1 / 6,
        "⅚": 5 / 6,
        "⅛": 1 / 8,
        "⅜": 3 / 8,
        "⅝": 5 / 8,
        "⅞": 7 / 8,
    }
)

_FRACTION_CHARS = "".join(UNICODE_FRACTIONS)
_NUMBER = r"\d+(?:[.,]\d+)?"

# "ca 2 dl", "cirka 300 g" - only when a number follows
_APPROX_PREFIX_RE = re.compile(rf"(?:ca\.?|cirka)\s*(?=[\d{_FRACTION_CHARS}])", re.IGNORECASE)
_RANGE_RE = re.compile(rf"(?P<low>{_NUMBER})\s*[-–]\s*(?P<high>{_NUMBER})\s*")
_UNICODE_FRACTION_RE = re.compile(rf"(?P<whole>\d+)?\s*(?P<fraction>[{_FRACTION_CHARS}])\s*")
_FRACTION_RE = re.compile(r"(?:(?P<whole>\d+)\s+)?(?P<num>\d+)/(?P<denom>\d+)\s*")
_DECIMAL_RE = re.compile(r"(?P<value>\d+[.,]\d+)\s*")
_INTEGER_RE = re.compile(r"(?P<value>\d+)\s*")

_TRAILING_RE = re.compile(
    rf"(?P<quantity>\d+/\d+|{_NUMBER})\s*(?P<unit>{_UNIT_ALTERNATION})\.?",
    re.IGNORECASE,
)


# =============================================================================
# Extraction Functions
# =============================================================================


def _to_float(token: str) -> float:
    """Parse a numeric token that may use a Swedish decimal comma."""
    return float(token.replace(",", "."))


def _match_quantity(text: str) -> tuple[float, int] | None:
    """Try the quantity patterns in priority order; return (value, consumed chars)."""
    if match := _RANGE_RE.match(text):
        # Buy for the upper end of "1-2 st"
        value = max(_to_float(match["low"]), _to_float(match["high"]))
        return value, match.end()

    if match := _UNICODE_FRACTION_RE.match(text):
        whole = float(match["whole"]) if match["whole"] else 0.0
        return whole + UNICODE_FRACTIONS[match["fraction"]], match.end()

    if match := _FRACTION_RE.match(text):
        whole = float(match["whole"]) if match["whole"] else 0.0
        denom = float(match["denom"])
        if denom == 0:
            return 0.0, match.end()
        return whole + float(match["num"]) / denom, match.end()

    if match := _DECIMAL_RE.match(text):
        return _to_float(match["value"]), match.end()

    if match := _INTEGER_RE.match(text):
        return float(match["value"]), match.end()

    return None


def extract_quantity(text: str) -> tuple[float, str]:
    """
    Strip a leading quantity from an ingredient line.

    Handles formats like:
    - "2 ägg"
    - "2,5 dl" / "2.5 dl" (Swedish decimal comma)
    - "1/2 tsk", "1 1/2 dl"
    - "1½ dl"
    - "1-2 st" (range, returns the upper bound)
    - "ca 300 g"

    Returns:
        Tuple of (quantity, remaining text). Quantity defaults to 1 when the
        line has no leading number, and is never zero or negative.
    """
    trimmed = (text or "").strip()

    if prefix := _APPROX_PREFIX_RE.match(trimmed):
        trimmed = trimmed[prefix.end() :]

    result = _match_quantity(trimmed)
    if result is None:
        return 1.0, trimmed

    quantity, consumed = result
    if not 0 < quantity < math.inf:
        logger.debug(f"Unusable quantity in {text!r}, defaulting to 1")
        quantity = 1.0

    return quantity, trimmed[consumed:]


def extract_unit(text: str) -> tuple[str | None, str]:
    """
    Strip a leading unit token and map it to its canonical abbreviation.

    Examples:
        "dl mjölk" -> ("dl", "mjölk")
        "Matskedar olja" -> ("msk", "olja")
        "förp. jäst" -> ("förp", "jäst")
        "lök" -> (None, "lök")
    """
    trimmed = (text or "").strip()

    match = _UNIT_RE.match(trimmed)
    if not match:
        return None, text

    return UNIT_SPELLINGS[match["unit"].lower()], trimmed[match.end() :]


def extract_trailing_quantity(text: str) -> tuple[float, str, str] | None:
    """
    Detect a quantity and unit written after the name, e.g. "Mjöl 3dl".

    The unit is required; "Vetemjöl special 00" is left alone.

    Returns:
        Tuple of (quantity, canonical unit, name) or None when the line does
        not end in a quantity-unit pair.
    """
    trimmed = (text or "").strip()

    for split_at in (1, 2):
        parts = trimmed.rsplit(None, split_at)
        if len(parts) != split_at + 1:
            continue

        match = _TRAILING_RE.fullmatch(" ".join(parts[1:]))
        if not match:
            continue

        name = parts[0].rstrip(" ,:")
        if not name:
            return None

        quantity, _ = extract_quantity(match["quantity"])
        return quantity, UNIT_SPELLINGS[match["unit"].lower()], name

    return None
