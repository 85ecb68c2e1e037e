"""Grocery list planning from the weekly meals."""

from matlista.plan.grocery_list import (
    GroceryItem,
    GroceryList,
    GroceryListBuilder,
    PlannedMeal,
)

__all__ = [
    "GroceryItem",
    "GroceryList",
    "GroceryListBuilder",
    "PlannedMeal",
]
