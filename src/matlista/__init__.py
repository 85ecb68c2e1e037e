"""Swedish ingredient parsing and grocery list aggregation for weekly meal plans."""

from matlista.normalize import (
    GroceryCategory,
    ParsedIngredient,
    aggregate_ingredients,
    categorize_ingredient,
    format_ingredient,
    is_pantry_staple,
    parse_ingredient,
)

__version__ = "0.1.0"

__all__ = [
    "GroceryCategory",
    "ParsedIngredient",
    "aggregate_ingredients",
    "categorize_ingredient",
    "format_ingredient",
    "is_pantry_staple",
    "parse_ingredient",
]
