"""Parse, normalize and aggregate free-text ingredient lines."""

from matlista.normalize.categories import (
    CATEGORY_INFO,
    CATEGORY_ORDER,
    CategoryInfo,
    GroceryCategory,
    categorize_ingredient,
)
from matlista.normalize.ingredients import (
    ParsedIngredient,
    aggregate_ingredients,
    format_ingredient,
    format_quantity,
    parse_ingredient,
)
from matlista.normalize.names import normalize_ingredient_name
from matlista.normalize.staples import is_pantry_staple
from matlista.normalize.units import (
    extract_quantity,
    extract_trailing_quantity,
    extract_unit,
)

__all__ = [
    "CATEGORY_INFO",
    "CATEGORY_ORDER",
    "CategoryInfo",
    "GroceryCategory",
    "ParsedIngredient",
    "aggregate_ingredients",
    "categorize_ingredient",
    "extract_quantity",
    "extract_trailing_quantity",
    "extract_unit",
    "format_ingredient",
    "format_quantity",
    "is_pantry_staple",
    "normalize_ingredient_name",
    "parse_ingredient",
]
