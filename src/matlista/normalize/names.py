"""Ingredient name normalization: descriptors, plurals and synonyms."""

import re
from types import MappingProxyType

from matlista.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# Lookup Tables
# =============================================================================

# Preparation words stripped when they open or close the name
DESCRIPTORS: frozenset[str] = frozenset(
    {
        "färsk",
        "färska",
        "finhackad",
        "finhackade",
        "hackad",
        "hackade",
        "riven",
        "rivna",
        "finriven",
        "finrivna",
        "skivad",
        "skivade",
        "tärnad",
        "tärnade",
        "strimlad",
        "strimlade",
        "krossad",
        "krossade",
        "mosad",
        "mosade",
        "kokt",
        "kokta",
        "stekt",
        "stekta",
        "grillad",
        "grillade",
        "rökt",
        "rökta",
        "saltad",
        "saltade",
        "japansk",
        "ljus",
        "konc",
    }
)

# Only recognized at the end of a name ("potatis gratäng")
TRAILING_DESCRIPTORS: frozenset[str] = DESCRIPTORS | {"gratäng"}

# Products whose name opens with a descriptor; never stripped
PROTECTED_PHRASES: tuple[str, ...] = (
    "krossade tomater",
    "passerade tomater",
    "rökt lax",
    "gravad lax",
    "rökt skinka",
    "kokt skinka",
    "saltade jordnötter",
    "stekt lök",
)

SWEDISH_PLURALS: MappingProxyType[str, str] = MappingProxyType(
    {
        "morötter": "morot",
        "tomater": "tomat",
        "potatisar": "potatis",
        "gurkor": "gurka",
        "lökar": "lök",
        "paprikor": "paprika",
        "äpplen": "äpple",
        "bananer": "banan",
        "citroner": "citron",
        "apelsiner": "apelsin",
        "jordgubbar": "jordgubbe",
        "hallon": "hallon",
        "blåbär": "blåbär",
        "ägg": "ägg",
        "vitlöksklyftor": "vitlöksklyfta",
        "vitlökar": "vitlök",
        "champinjoner": "champinjon",
        "zucchinis": "zucchini",
        "auberginer": "aubergine",
        "broccolis": "broccoli",
        "sallader": "sallad",
        "räkor": "räka",
        "musslor": "mussla",
        "kycklingfiléer": "kycklingfilé",
        "laxfiléer": "laxfilé",
        "köttbullar": "köttbulle",
        "korvar": "korv",
        "limefrukter": "lime",
        "avokador": "avokado",
        "rödlökar": "rödlök",
        "schalottenlökar": "schalottenlök",
        "tortillas": "tortilla",
    }
)

INGREDIENT_SYNONYMS: MappingProxyType[str, str] = MappingProxyType(
    {
        # Cream
        "vispgrädde": "grädde",
        "matlagningsgrädde": "grädde",
        "kaffegrädde": "grädde",
        "lätt grädde": "grädde",
        "tjock grädde": "grädde",
        "heavy cream": "grädde",
        "whipping cream": "grädde",
        "creme fraiche": "crème fraiche",
        "crème fraîche": "crème fraiche",
        # Milk
        "lättmjölk": "mjölk",
        "mellanmjölk": "mjölk",
        "standardmjölk": "mjölk",
        # Flour
        "vetemjöl": "mjöl",
        "dinkelmjöl": "mjöl",
        "grahamsmjöl": "mjöl",
        # Onion
        "gul lök": "lök",
        "röd lök": "lök",
        "rödlök": "lök",
        "schalottenlök": "lök",
        "scharlottenlök": "lök",
        "vitlöksklyfta": "vitlök",
        "garlic": "vitlök",
        # Potato
        "mjölig potatis": "potatis",
        "fast potatis": "potatis",
        # Cheese
        "parmesanost": "parmesan",
        "halloumiost": "halloumi",
        # Mince
        "blandfärs": "färs",
        "nötfärs": "färs",
        "fläskfärs": "färs",
        "köttfärs": "färs",
        "salsicciafärs": "salsiccia",
        # Egg
        "äggula": "ägg",
        "äggulor": "ägg",
        "äggvita": "ägg",
        "äggvitor": "ägg",
        "egg": "ägg",
        "eggs": "ägg",
        # Rice
        "jasminris": "ris",
        "basmatiris": "ris",
        "risottoris": "ris",
        "långkornigt ris": "ris",
        "vitt ris": "ris",
        "rice": "ris",
        # Tomato
        "cocktailtomat": "tomat",
        "körsbärstomat": "tomat",
        "plommontomat": "tomat",
        "tomato": "tomat",
        # Pasta
        "spagetti": "pasta",
        "spaghetti": "pasta",
        "fusilli": "pasta",
        "penne": "pasta",
        "tagliatelle": "pasta",
        # Citrus
        "färskpressad lime": "limejuice",
        "pressad lime": "limejuice",
        "limeklyfta": "lime",
        "limeklyftor": "lime",
        # Soy sauce
        "sojasås": "soja",
        "mörk soja": "soja",
        "soy sauce": "soja",
    }
)

_BRAND_RE = re.compile(r"\barla(?:\s+(?:ko|köket)(?!\w))?\s*®?|®", re.IGNORECASE)
_PUNCT_CHARS = ",.:;!?"
_PARENTHETICAL_RE = re.compile(r"\s*\([^)]*\)\s*")
_PUNCTUATION_RE = re.compile(rf"[{re.escape(_PUNCT_CHARS)}]")


# =============================================================================
# Normalization Steps
# =============================================================================


def _strip_descriptors(name: str) -> str:
    """
    Drop preparation words from either end of the name.

    Only whole words are compared, so compounds are never cut, and the last
    remaining word is never removed.
    """
    words = name.split()
    phrase = " ".join(words)
    if any(phrase == p or phrase.startswith(p + " ") for p in PROTECTED_PHRASES):
        return phrase

    while len(words) > 1 and words[0].strip(_PUNCT_CHARS) in DESCRIPTORS:
        words = words[1:]

    while len(words) > 1 and words[-1].strip(_PUNCT_CHARS) in TRAILING_DESCRIPTORS:
        words = words[:-1]

    return " ".join(words)


def _fold_plurals(name: str) -> str:
    return " ".join(SWEDISH_PLURALS.get(word, word) for word in name.split())


def _fold_synonyms(name: str) -> str:
    if name in INGREDIENT_SYNONYMS:
        return INGREDIENT_SYNONYMS[name]

    # Head noun comes last in Swedish noun phrases ("ekologisk vispgrädde")
    words = name.split()
    if len(words) > 1 and words[-1] in INGREDIENT_SYNONYMS:
        return INGREDIENT_SYNONYMS[words[-1]]

    return name


def normalize_ingredient_name(name: str) -> str:
    """
    Normalize an ingredient name into a deduplication key.

    - Lowercase, drop brand marks
    - Remove leading/trailing preparation descriptors (färsk, hackad, ...)
    - Remove parenthetical notes and punctuation
    - Collapse whitespace
    - Fold plurals per word (morötter -> morot)
    - Fold synonyms on the whole phrase (vispgrädde -> grädde)

    Never returns an empty string for non-blank input: when every step
    strips the text away, the lowercased input is returned instead.
    """
    if not name or not name.strip():
        return ""

    fallback = " ".join(name.lower().split())

    normalized = _BRAND_RE.sub("", name.lower())
    normalized = _strip_descriptors(normalized)
    normalized = _PARENTHETICAL_RE.sub(" ", normalized)
    normalized = _PUNCTUATION_RE.sub("", normalized)
    normalized = " ".join(normalized.split())
    normalized = _fold_plurals(normalized)
    normalized = _fold_synonyms(normalized)

    if not normalized:
        logger.debug(f"Normalization emptied {name!r}, keeping lowercase text")
        return fallback

    return normalized
