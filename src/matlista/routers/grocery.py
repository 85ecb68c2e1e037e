"""API routes for grocery list assembly."""

import uuid
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field

from matlista.config import Settings, get_settings
from matlista.logging_config import LoggingContext, get_logger
from matlista.normalize import CATEGORY_INFO, CATEGORY_ORDER, GroceryCategory
from matlista.plan.grocery_list import (
    GroceryItem,
    GroceryList,
    GroceryListBuilder,
    PlannedMeal,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/grocery", tags=["grocery"])


# =============================================================================
# Request/Response Schemas
# =============================================================================


class GroceryItemSchema(BaseModel):
    """Grocery list item as stored by the client."""

    model_config = ConfigDict(from_attributes=True)

    ingredient_name: str
    normalized_name: str
    quantity: float = Field(1.0, gt=0)
    unit: str | None = None
    category: GroceryCategory = GroceryCategory.OTHER
    is_bought: bool = False
    is_custom: bool = True
    source_meals: list[str] = Field(default_factory=list)


class GroceryItemResponse(GroceryItemSchema):
    """Item with its formatted display name."""

    display_name: str


class CategorySchema(BaseModel):
    id: GroceryCategory
    label: str
    order: int


class GroceryListResponse(BaseModel):
    """Grocery list with grouped views."""

    list_id: str
    items: list[GroceryItemResponse]
    items_by_category: dict[str, list[GroceryItemResponse]]
    open_items_count: int
    bought_items_count: int


class AddIngredientsRequest(BaseModel):
    """Add a recipe's ingredients to the current list."""

    list_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    items: list[GroceryItemSchema] = Field(default_factory=list)
    ingredients: list[str] = Field(max_length=500)
    source_meal: str | None = None


class AddCustomItemRequest(BaseModel):
    list_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    items: list[GroceryItemSchema] = Field(default_factory=list)
    text: str = Field(min_length=1)


class MealSchema(BaseModel):
    name: str
    ingredients: list[str] = Field(default_factory=list)


class RegenerateRequest(BaseModel):
    """Rebuild the list from the week's meals, keeping custom items."""

    list_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    meals: list[MealSchema] = Field(default_factory=list)
    custom_items: list[GroceryItemSchema] = Field(default_factory=list)


class RemoveBySourceRequest(BaseModel):
    list_id: str
    items: list[GroceryItemSchema]
    source_meal: str


class RemoveBySourceResponse(BaseModel):
    removed: int
    grocery_list: GroceryListResponse


# =============================================================================
# Helper Functions
# =============================================================================


def get_builder(settings: Settings = Depends(get_settings)) -> GroceryListBuilder:
    """Get grocery list builder instance."""
    return GroceryListBuilder(settings)


def to_grocery_list(list_id: str, items: list[GroceryItemSchema]) -> GroceryList:
    """Rebuild the in-memory list from client-held items."""
    return GroceryList(
        list_id=list_id,
        items=[GroceryItem(**item.model_dump()) for item in items],
    )


def to_item_response(item: GroceryItem) -> GroceryItemResponse:
    return GroceryItemResponse(
        ingredient_name=item.ingredient_name,
        normalized_name=item.normalized_name,
        quantity=item.quantity,
        unit=item.unit,
        category=item.category,
        is_bought=item.is_bought,
        is_custom=item.is_custom,
        source_meals=list(item.source_meals),
        display_name=item.display_name,
    )


def to_list_response(grocery_list: GroceryList) -> GroceryListResponse:
    return GroceryListResponse(
        list_id=grocery_list.list_id,
        items=[to_item_response(item) for item in grocery_list.items],
        items_by_category={
            category.value: [to_item_response(item) for item in items]
            for category, items in grocery_list.items_by_category.items()
        },
        open_items_count=grocery_list.open_items_count,
        bought_items_count=grocery_list.bought_items_count,
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/categories", response_model=list[CategorySchema])
async def list_categories(
    language: Literal["sv", "en"] | None = Query(None, description="Label language"),
    settings: Settings = Depends(get_settings),
) -> list[CategorySchema]:
    """List grocery categories in store display order."""
    lang = language or settings.display_language
    return [
        CategorySchema(
            id=category,
            label=CATEGORY_INFO[category].label(lang),
            order=CATEGORY_INFO[category].order,
        )
        for category in CATEGORY_ORDER
    ]


@router.post("/add", response_model=GroceryListResponse)
async def add_ingredients(
    request: AddIngredientsRequest,
    builder: GroceryListBuilder = Depends(get_builder),
) -> GroceryListResponse:
    """
    Add ingredient lines to a grocery list.

    Lines matching an open item (same normalized name and unit) increase its
    quantity; everything else is appended.
    """
    grocery_list = to_grocery_list(request.list_id, request.items)
    builder.add_ingredients(grocery_list, request.ingredients, request.source_meal)
    return to_list_response(grocery_list)


@router.post("/custom", response_model=GroceryListResponse)
async def add_custom_item(
    request: AddCustomItemRequest,
    builder: GroceryListBuilder = Depends(get_builder),
) -> GroceryListResponse:
    """Add a manually typed item."""
    grocery_list = to_grocery_list(request.list_id, request.items)
    builder.add_custom_item(grocery_list, request.text)
    return to_list_response(grocery_list)


@router.post("/regenerate", response_model=GroceryListResponse)
async def regenerate_list(
    request: RegenerateRequest,
    builder: GroceryListBuilder = Depends(get_builder),
) -> GroceryListResponse:
    """Rebuild the grocery list from the planned meals."""
    meals = [PlannedMeal(name=m.name, ingredients=m.ingredients) for m in request.meals]
    custom_items = [GroceryItem(**item.model_dump()) for item in request.custom_items]
    grocery_list = builder.regenerate(request.list_id, meals, custom_items)
    return to_list_response(grocery_list)


@router.post("/remove-by-source", response_model=RemoveBySourceResponse)
async def remove_by_source(request: RemoveBySourceRequest) -> RemoveBySourceResponse:
    """Remove every item that was added for a meal."""
    with LoggingContext(list_id=request.list_id):
        grocery_list = to_grocery_list(request.list_id, request.items)

        if not any(request.source_meal in item.source_meals for item in grocery_list.items):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No items from meal: {request.source_meal}",
            )

        removed = grocery_list.remove_by_source(request.source_meal)
        logger.info(f"Removed {removed} items from {request.source_meal}")

        return RemoveBySourceResponse(
            removed=removed,
            grocery_list=to_list_response(grocery_list),
        )
