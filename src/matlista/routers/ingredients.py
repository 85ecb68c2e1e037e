"""API routes for parsing and aggregating ingredient lines."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from matlista.config import Settings, get_settings
from matlista.logging_config import get_logger
from matlista.normalize import (
    GroceryCategory,
    ParsedIngredient,
    aggregate_ingredients,
    categorize_ingredient,
    format_ingredient,
    is_pantry_staple,
    parse_ingredient,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/ingredients", tags=["ingredients"])

MAX_LINES = 500


# =============================================================================
# Request/Response Schemas
# =============================================================================


class IngredientLinesRequest(BaseModel):
    """Raw ingredient lines, as typed, scraped or transcribed."""

    lines: list[str] = Field(max_length=MAX_LINES)
    source_meal: str | None = Field(None, description="Meal or recipe the lines belong to")


class AggregateRequest(IngredientLinesRequest):
    """Lines to merge into one grocery-ready list."""

    exclude_staples: bool | None = Field(
        None, description="Drop pantry staples; defaults to the server setting"
    )


class ParsedIngredientSchema(BaseModel):
    """A parsed ingredient line."""

    quantity: float
    unit: str | None = None
    name: str
    normalized_name: str
    original_text: str
    sources: list[str] = Field(default_factory=list)
    display: str
    category: GroceryCategory
    is_staple: bool = False


class ParseResponse(BaseModel):
    ingredients: list[ParsedIngredientSchema]


class AggregateResponse(BaseModel):
    ingredients: list[ParsedIngredientSchema]
    excluded: list[str] = Field(default_factory=list, description="Lines dropped as staples")


# =============================================================================
# Helper Functions
# =============================================================================


def to_schema(parsed: ParsedIngredient, is_staple: bool = False) -> ParsedIngredientSchema:
    """Convert a parsed ingredient into its API representation."""
    return ParsedIngredientSchema(
        quantity=parsed.quantity,
        unit=parsed.unit,
        name=parsed.name,
        normalized_name=parsed.normalized_name,
        original_text=parsed.original_text,
        sources=list(parsed.sources),
        display=format_ingredient(parsed),
        category=categorize_ingredient(parsed.name, parsed.normalized_name),
        is_staple=is_staple,
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/parse", response_model=ParseResponse)
async def parse_lines(request: IngredientLinesRequest) -> ParseResponse:
    """
    Parse ingredient lines one by one.

    Nothing is filtered or merged; staples are flagged with `is_staple`.
    """
    ingredients = [
        to_schema(parse_ingredient(line, source=request.source_meal), is_pantry_staple(line))
        for line in request.lines
    ]
    logger.info(f"Parsed {len(ingredients)} ingredient lines")
    return ParseResponse(ingredients=ingredients)


@router.post("/aggregate", response_model=AggregateResponse)
async def aggregate_lines(
    request: AggregateRequest,
    settings: Settings = Depends(get_settings),
) -> AggregateResponse:
    """
    Turn ingredient lines into a deduplicated grocery list.

    Staples are dropped (unless disabled), the rest parsed and merged by
    normalized name and unit.
    """
    exclude = (
        settings.exclude_pantry_staples
        if request.exclude_staples is None
        else request.exclude_staples
    )

    kept: list[ParsedIngredient] = []
    excluded: list[str] = []
    for line in request.lines:
        if exclude and is_pantry_staple(line):
            excluded.append(line)
            continue
        kept.append(parse_ingredient(line, source=request.source_meal))

    aggregated = aggregate_ingredients(kept)

    logger.info(
        f"Aggregated {len(request.lines)} lines into {len(aggregated)} items "
        f"({len(excluded)} staples excluded)"
    )

    return AggregateResponse(
        ingredients=[to_schema(item) for item in aggregated],
        excluded=excluded,
    )
