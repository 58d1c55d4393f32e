"""Normalization of heterogeneous provider payloads.

Providers hand raw names, scores and recipe dicts to these builders, which
return fully populated DetectionResult / RecipeResult objects or raise
ProviderParseError so the coordinator moves on to the next provider.
"""

from typing import Any, Iterable, Optional

from pydantic import ValidationError

from snap_chef.catalog.categories import categorize_food, format_food_name
from snap_chef.catalog.mock_data import DEFAULT_INGREDIENTS, DEFAULT_INSTRUCTIONS, DEFAULT_RECIPE_IMAGE
from snap_chef.models.models import DetectionResult, FoodCategory, Nutrition, RecipeResult
from snap_chef.utils.errors import ProviderParseError
from snap_chef.utils.logger import logger

DEFAULT_COOK_TIME = "30 mins"


def build_detection(
    name: Any,
    confidence: Any,
    source: str,
    ingredients: Optional[Iterable[Any]] = None,
    category_hint: Optional[str] = None,
) -> DetectionResult:
    """Normalize a raw provider detection.

    The name is title-cased and stripped of punctuation, then categorized.
    When the name matches no keyword, the provider's own category text (if
    any) is tried before settling on General.

    Raises:
        ProviderParseError: If the name is empty after normalization.
    """
    formatted = format_food_name(str(name or ""))
    if not formatted:
        raise ProviderParseError(source, "detection payload has no food name")

    category = categorize_food(formatted)
    if category is FoodCategory.GENERAL and category_hint:
        category = _hinted_category(str(category_hint))

    cleaned_ingredients = []
    if isinstance(ingredients, (list, tuple)):
        cleaned_ingredients = [format_food_name(str(item)) for item in ingredients if item]

    try:
        return DetectionResult(
            name=formatted,
            confidence=confidence,
            category=category,
            ingredients=cleaned_ingredients,
            source=source,
        )
    except ValidationError as e:
        raise ProviderParseError(source, f"invalid detection: {e}") from e


def _hinted_category(hint: str) -> FoodCategory:
    """A category name as sent by the provider, else its keywords."""
    try:
        return FoodCategory(hint.strip().title())
    except ValueError:
        return categorize_food(hint)


def _cook_time(value: Any) -> str:
    if isinstance(value, (int, float)) and value > 0:
        return f"{round(value)} mins"
    if isinstance(value, str) and value.strip():
        text = value.strip()
        return f"{text} mins" if text.isdigit() else text
    return DEFAULT_COOK_TIME


def _lines(value: Any, default: list[str]) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if isinstance(value, (list, tuple)):
        lines = [str(item).strip() for item in value if item is not None and str(item).strip()]
        if lines:
            return lines
    return list(default)


def _nutrition(value: Any) -> Optional[Nutrition]:
    if not isinstance(value, dict) or "calories" not in value:
        return None
    try:
        return Nutrition(
            calories=value.get("calories"),
            protein=value.get("protein", 0),
            carbs=value.get("carbs", value.get("carbohydrates", 0)),
            fat=value.get("fat", 0),
        )
    except ValidationError:
        return None


def build_recipe(item: Any, index: int, source: str) -> RecipeResult:
    """Normalize one recipe dict (camelCase or snake_case keys).

    Only the title is mandatory; every other field gets a default, including
    placeholder ingredients and steps when the provider sent none.

    Raises:
        ProviderParseError: If the item is not a dict or has no title.
    """
    if not isinstance(item, dict):
        raise ProviderParseError(source, f"recipe #{index + 1} is not an object")
    title = str(item.get("title") or item.get("name") or "").strip()
    if not title:
        raise ProviderParseError(source, f"recipe #{index + 1} has no title")

    try:
        return RecipeResult(
            id=item.get("id") or f"{source}-{index + 1}",
            title=title,
            description=item.get("description") or f"A delicious {title} recipe",
            image_url=item.get("image") or item.get("imageUrl") or item.get("image_url") or DEFAULT_RECIPE_IMAGE,
            cook_time=_cook_time(item.get("cookTime") or item.get("cook_time") or item.get("readyInMinutes")),
            difficulty=item.get("difficulty"),
            ingredients=_lines(item.get("ingredients"), DEFAULT_INGREDIENTS),
            instructions=_lines(item.get("instructions") or item.get("steps"), DEFAULT_INSTRUCTIONS),
            nutrition=_nutrition(item.get("nutrition")),
            source_url=item.get("sourceUrl") or item.get("source_url"),
            source=source,
        )
    except ValidationError as e:
        raise ProviderParseError(source, f"recipe #{index + 1} invalid: {e}") from e


def build_recipes(payload: Any, source: str, count: int) -> list[RecipeResult]:
    """Normalize a recipe array, dropping invalid items.

    Accepts a list, a {"recipes": [...]} wrapper, or a single recipe object.

    Raises:
        ProviderParseError: If no item survives normalization.
    """
    if isinstance(payload, dict):
        payload = payload.get("recipes", [payload])
    if not isinstance(payload, list):
        raise ProviderParseError(source, "recipe payload is not a list")

    recipes: list[RecipeResult] = []
    for index, item in enumerate(payload):
        try:
            recipes.append(build_recipe(item, index, source))
        except ProviderParseError as e:
            logger.debug(f"Dropping recipe: {e}")
        if len(recipes) >= count:
            break

    if not recipes:
        raise ProviderParseError(source, "no valid recipes in payload")
    return recipes
