"""Grocery categories and keyword-based classification."""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class GroceryCategory(str, Enum):
    """Store section a grocery item belongs to."""

    PRODUCE = "produce"
    DAIRY = "dairy"
    MEAT = "meat"
    FROZEN = "frozen"
    BAKERY = "bakery"
    PANTRY = "pantry"
    BEVERAGES = "beverages"
    SNACKS = "snacks"
    OTHER = "other"


@dataclass(frozen=True)
class CategoryInfo:
    """Display metadata for a category."""

    sv: str
    en: str
    order: int

    def label(self, language: str = "sv") -> str:
        return self.en if language == "en" else self.sv


CATEGORY_INFO: MappingProxyType[GroceryCategory, CategoryInfo] = MappingProxyType(
    {
        GroceryCategory.PRODUCE: CategoryInfo("Grönsaker & frukt", "Vegetables & Fruit", 0),
        GroceryCategory.DAIRY: CategoryInfo("Mejeri", "Dairy", 1),
        GroceryCategory.MEAT: CategoryInfo("Kött & fisk", "Meat & Fish", 2),
        GroceryCategory.FROZEN: CategoryInfo("Fryst", "Frozen", 3),
        GroceryCategory.BAKERY: CategoryInfo("Bröd & bageri", "Bread & Bakery", 4),
        GroceryCategory.PANTRY: CategoryInfo("Skafferi", "Pantry", 5),
        GroceryCategory.BEVERAGES: CategoryInfo("Drycker", "Beverages", 6),
        GroceryCategory.SNACKS: CategoryInfo("Snacks & godis", "Snacks & Sweets", 7),
        GroceryCategory.OTHER: CategoryInfo("Övrigt", "Other", 8),
    }
)

CATEGORY_ORDER: tuple[GroceryCategory, ...] = tuple(
    sorted(CATEGORY_INFO, key=lambda c: CATEGORY_INFO[c].order)
)

CATEGORY_KEYWORDS: MappingProxyType[GroceryCategory, tuple[str, ...]] = MappingProxyType(
    {
        GroceryCategory.PRODUCE: (
            # Vegetables
            "morot", "tomat", "potatis", "gurka", "lök", "vitlök", "paprika",
            "broccoli", "sallad", "spenat", "grönkål", "vitkål", "kål", "zucchini",
            "aubergine", "champinjon", "svamp", "majs", "ärtor", "bönor", "selleri",
            "purjolök", "rödbeta", "rädisa", "sparris", "squash", "ruccola",
            "kronärtskocka", "ingefära",
            # Fruit
            "äpple", "banan", "apelsin", "citron", "lime", "jordgubbe", "hallon",
            "blåbär", "druva", "päron", "persika", "mango", "ananas", "melon",
            "kiwi", "avokado", "granatäpple", "fikon",
            # Herbs
            "basilika", "persilja", "dill", "koriander", "rosmarin", "timjan",
            "mynta", "gräslök", "salvia",
        ),
        GroceryCategory.DAIRY: (
            "mjölk", "grädde", "crème fraiche", "gräddfil", "filmjölk", "yoghurt",
            "kvarg", "ost", "parmesan", "mozzarella", "cheddar", "brie", "feta",
            "halloumi", "ägg", "färskost", "keso", "kesella", "mascarpone", "ricotta",
            "smör",
        ),
        GroceryCategory.MEAT: (
            "kött", "kyckling", "kycklingfilé", "kalkon", "fläskfilé", "kotlett",
            "bacon", "skinka", "korv", "falukorv", "chorizo", "salsiccia", "färs",
            "köttbulle", "biff", "entrecote", "oxfilé", "fisk", "lax", "torsk", "sej",
            "kolja", "räka", "kräfta", "mussla", "bläckfisk", "tonfisk", "makrill",
            "sill", "strömming", "rökt lax", "gravad lax",
        ),
        GroceryCategory.FROZEN: (
            "fryst", "frysta", "glass", "fryspizza", "frysgrönsaker", "frysta bär",
            "frysta ärtor", "fryst spenat",
        ),
        GroceryCategory.BAKERY: (
            "bröd", "limpa", "ciabatta", "focaccia", "tortilla", "tunnbröd",
            "knäckebröd", "polarkaka", "croissant", "bulle", "kanelbulle", "baguette",
        ),
        GroceryCategory.PANTRY: (
            # Pasta, rice, grains
            "pasta", "lasagneplattor", "nudlar", "ris", "couscous", "bulgur", "quinoa",
            "havregryn",
            # Baking & seasoning
            "mjöl", "bakpulver", "bikarbonat", "jäst", "florsocker", "vaniljsocker",
            "kanel", "kardemumma", "buljong", "fond", "soja", "ketchup", "senap",
            "majonnäs", "vinäger", "olja", "sirap", "honung", "sylt",
            # Cans & jars
            "krossade tomater", "passerade tomater", "tomatpuré", "kokosmjölk",
            "kikärtor", "kidneybönor", "linser", "konserv",
            # Nuts & seeds
            "mandel", "valnöt", "cashewnötter", "frön", "russin",
        ),
        GroceryCategory.BEVERAGES: (
            "juice", "läsk", "mineralvatten", "kaffe", "te", "öl", "vin", "cider",
        ),
        GroceryCategory.SNACKS: (
            "chips", "popcorn", "godis", "choklad", "kex", "jordnötter", "saltade jordnötter",
            "nötter",
        ),
        GroceryCategory.OTHER: (),
    }
)

# Shortest keyword allowed to match as the tail of a compound ("grönsaksbuljong")
_MIN_COMPOUND_KEYWORD = 3

_KEYWORD_INDEX: tuple[tuple[str, GroceryCategory], ...] = tuple(
    sorted(
        ((kw, cat) for cat, kws in CATEGORY_KEYWORDS.items() for kw in kws),
        key=lambda pair: (-len(pair[0]), CATEGORY_INFO[pair[1]].order),
    )
)

_COMPOUND_INDEX: tuple[tuple[str, GroceryCategory], ...] = tuple(
    (kw, cat)
    for kw, cat in _KEYWORD_INDEX
    if len(kw) >= _MIN_COMPOUND_KEYWORD and " " not in kw
)


def _match_words(text: str) -> GroceryCategory | None:
    padded = f" {text} "
    for keyword, category in _KEYWORD_INDEX:
        if f" {keyword} " in padded:
            return category
    return None


def _match_compound(text: str) -> GroceryCategory | None:
    for word in reversed(text.split()):
        for keyword, category in _COMPOUND_INDEX:
            if word.endswith(keyword):
                return category
    return None


def categorize_ingredient(*names: str) -> GroceryCategory:
    """
    Assign a grocery category from one or more ingredient names.

    Names are tried in order. Whole-word keywords win over compound tails,
    and longer keywords over shorter ones ("kokosmjölk" is pantry, not dairy).
    Anything unrecognized is OTHER.
    """
    texts = [" ".join(n.lower().split()) for n in names if n and n.strip()]

    for text in texts:
        if category := _match_words(text):
            return category

    for text in texts:
        if category := _match_compound(text):
            return category

    return GroceryCategory.OTHER
