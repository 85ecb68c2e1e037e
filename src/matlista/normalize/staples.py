"""Pantry staple detection for grocery list filtering."""

import re

# Ingredients assumed to always be at home
PANTRY_STAPLES: frozenset[str] = frozenset(
    {
        # Salt & pepper
        "salt",
        "peppar",
        "svartpeppar",
        "vitpeppar",
        "pepper",
        "black pepper",
        "white pepper",
        # Oils & fats for cooking
        "olja",
        "olivolja",
        "rapsolja",
        "solrosolja",
        "matolja",
        "vegetabilisk olja",
        "oil",
        "olive oil",
        "vegetable oil",
        "cooking oil",
        "smör",
        "butter",
        "margarin",
        "matfett",
        # Common cooking items
        "vatten",
        "water",
        "is",
        "ice",
        "pastavatten",
        "socker",
        "sugar",
        "strösocker",
    }
)

# Any line using one of these phrases is cooking fat, whatever it names
FRYING_PHRASES: tuple[str, ...] = (
    "för stekning",
    "till stekning",
    "att steka i",
    "stekfett",
)

_STAPLE_RE = re.compile(
    r"(?<!\w)(?:"
    + "|".join(re.escape(s) for s in sorted(PANTRY_STAPLES, key=len, reverse=True))
    + r")(?!\w)"
)


def is_pantry_staple(line: str) -> bool:
    """
    Check whether a raw ingredient line names a pantry staple.

    Works on the raw line, before any parsing: "2 msk olivolja för stekning"
    and "Salt" are staples, "2 dl mjölk" and "saltade jordnötter" are not.
    """
    if not line:
        return False

    lower = line.lower()

    if any(phrase in lower for phrase in FRYING_PHRASES):
        return True

    return _STAPLE_RE.search(lower) is not None
