"""Grocery list assembly from planned meals."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from matlista.config import Settings, get_settings
from matlista.logging_config import LoggingContext, get_logger
from matlista.normalize import (
    CATEGORY_ORDER,
    GroceryCategory,
    ParsedIngredient,
    aggregate_ingredients,
    categorize_ingredient,
    format_ingredient,
    is_pantry_staple,
    parse_ingredient,
)

logger = get_logger(__name__)


@dataclass
class PlannedMeal:
    """A meal on the weekly plan with its recipe's ingredient lines."""

    name: str
    ingredients: list[str] = field(default_factory=list)


@dataclass
class GroceryItem:
    """A single item on the grocery list."""

    ingredient_name: str
    normalized_name: str
    quantity: float = 1.0
    unit: str | None = None
    category: GroceryCategory = GroceryCategory.OTHER
    is_bought: bool = False
    is_custom: bool = True
    source_meals: list[str] = field(default_factory=list)

    @classmethod
    def from_parsed(cls, parsed: ParsedIngredient, is_custom: bool = False) -> "GroceryItem":
        """Create an item from a parsed (usually aggregated) ingredient."""
        return cls(
            ingredient_name=parsed.name,
            normalized_name=parsed.normalized_name,
            quantity=parsed.quantity,
            unit=parsed.unit,
            category=categorize_ingredient(parsed.name, parsed.normalized_name),
            is_custom=is_custom,
            source_meals=list(parsed.sources),
        )

    @property
    def key(self) -> tuple[str, str]:
        return self.normalized_name.lower(), (self.unit or "").lower()

    @property
    def display_name(self) -> str:
        """Formatted name as shown on the list, e.g. "3 dl grädde"."""
        return format_ingredient(self.to_parsed())

    def to_parsed(self) -> ParsedIngredient:
        return ParsedIngredient(
            quantity=self.quantity,
            unit=self.unit,
            name=self.ingredient_name,
            normalized_name=self.normalized_name,
            original_text=self.ingredient_name,
            sources=tuple(self.source_meals),
        )

    def add_source(self, source: str | None) -> None:
        """Record another meal that needs this item."""
        if source and source not in self.source_meals:
            self.source_meals.append(source)


@dataclass
class GroceryList:
    """A household grocery list."""

    list_id: str
    items: list[GroceryItem] = field(default_factory=list)

    def add_item(self, item: GroceryItem) -> None:
        self.items.append(item)

    def find_open_item(self, key: tuple[str, str]) -> GroceryItem | None:
        """Find an item not yet bought with the given (normalized name, unit) key."""
        for item in self.items:
            if not item.is_bought and item.key == key:
                return item
        return None

    @property
    def open_items_count(self) -> int:
        return sum(1 for item in self.items if not item.is_bought)

    @property
    def bought_items_count(self) -> int:
        return sum(1 for item in self.items if item.is_bought)

    @property
    def items_by_category(self) -> dict[GroceryCategory, list[GroceryItem]]:
        """Items grouped by category, in store display order, empty groups left out."""
        grouped: dict[GroceryCategory, list[GroceryItem]] = {}
        for category in CATEGORY_ORDER:
            in_category = [item for item in self.items if item.category == category]
            if in_category:
                grouped[category] = in_category
        return grouped

    @property
    def items_by_source(self) -> dict[str, list[GroceryItem]]:
        """Items grouped by the meal they were added for; manual items under "Manual"."""
        grouped: dict[str, list[GroceryItem]] = {}
        for item in self.items:
            for source in item.source_meals or ["Manual"]:
                grouped.setdefault(source, []).append(item)
        return grouped

    def source_meals(self) -> list[str]:
        """Meals that still have open items on the list."""
        meals: list[str] = []
        for item in self.items:
            if item.is_bought:
                continue
            for source in item.source_meals:
                if source not in meals:
                    meals.append(source)
        return meals

    def remove_by_source(self, meal_name: str) -> int:
        """Remove every item added for the given meal. Returns the number removed."""
        before = len(self.items)
        self.items = [item for item in self.items if meal_name not in item.source_meals]
        return before - len(self.items)

    def clear_bought(self) -> int:
        """Remove bought items. Returns the number removed."""
        before = len(self.items)
        self.items = [item for item in self.items if not item.is_bought]
        return before - len(self.items)


class GroceryListBuilder:
    """
    Builds grocery lists from recipe ingredient lines:
    - Pantry staples filtered out (configurable)
    - Lines parsed and normalized
    - Duplicates aggregated by (normalized name, unit)
    - Quantities added onto matching open items already on the list
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def prepare(
        self,
        lines: Iterable[str],
        source_meal: str | None = None,
    ) -> list[ParsedIngredient]:
        """Filter, parse and aggregate raw ingredient lines."""
        parsed = [
            parse_ingredient(line, source=source_meal)
            for line in lines
            if line and line.strip() and not self._is_excluded(line)
        ]
        return aggregate_ingredients(parsed)

    def add_ingredients(
        self,
        grocery_list: GroceryList,
        lines: Iterable[str],
        source_meal: str | None = None,
    ) -> list[GroceryItem]:
        """
        Add a recipe's ingredient lines to an existing grocery list.

        Args:
            grocery_list: The list to update in place.
            lines: Raw ingredient lines.
            source_meal: Name of the meal the ingredients are for.

        Returns:
            Items that were created or updated.
        """
        with LoggingContext(list_id=grocery_list.list_id):
            touched: list[GroceryItem] = []
            added = 0

            for parsed in self.prepare(lines, source_meal):
                existing = grocery_list.find_open_item(parsed.key)
                if existing:
                    existing.quantity += parsed.quantity
                    existing.add_source(source_meal)
                    touched.append(existing)
                    continue

                item = GroceryItem.from_parsed(parsed)
                grocery_list.add_item(item)
                touched.append(item)
                added += 1

            logger.info(
                f"Added ingredients for {source_meal or 'manual entry'}: "
                f"{added} new, {len(touched) - added} merged"
            )
            return touched

    def add_custom_item(self, grocery_list: GroceryList, text: str) -> GroceryItem:
        """Add a manually typed item; staples are kept since the user asked for them."""
        parsed = parse_ingredient(text)
        existing = grocery_list.find_open_item(parsed.key)
        if existing:
            existing.quantity += parsed.quantity
            return existing

        item = GroceryItem.from_parsed(parsed, is_custom=True)
        grocery_list.add_item(item)
        return item

    def regenerate(
        self,
        list_id: str,
        meals: Iterable[PlannedMeal],
        custom_items: Iterable[GroceryItem] = (),
    ) -> GroceryList:
        """
        Rebuild a grocery list from scratch.

        Custom items are carried over as they are (bought state reset), then
        every meal's ingredients are aggregated together and added.
        """
        with LoggingContext(list_id=list_id):
            grocery_list = GroceryList(list_id=list_id)

            for custom in custom_items:
                grocery_list.add_item(
                    GroceryItem(
                        ingredient_name=custom.ingredient_name,
                        normalized_name=custom.normalized_name,
                        quantity=custom.quantity,
                        unit=custom.unit,
                        category=custom.category,
                        is_custom=True,
                    )
                )

            parsed: list[ParsedIngredient] = []
            meal_count = 0
            for meal in meals:
                meal_count += 1
                parsed.extend(self.prepare(meal.ingredients, source_meal=meal.name))

            for aggregated in aggregate_ingredients(parsed):
                grocery_list.add_item(GroceryItem.from_parsed(aggregated))

            logger.info(
                f"Regenerated grocery list from {meal_count} meals: "
                f"{len(grocery_list.items)} items"
            )
            return grocery_list

    def _is_excluded(self, line: str) -> bool:
        return self.settings.exclude_pantry_staples and is_pantry_staple(line)
