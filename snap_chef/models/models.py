"""Data models for Snap Chef.

Defines Pydantic models for every result the coordinator hands back.
All models use Pydantic v2. Validators coerce provider payloads into a fully
populated shape: confidence is clamped, difficulty is coerced, blank strings
are rejected.
"""

import math
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FoodCategory(str, Enum):
    """Fixed set of food categories used for keyword categorization."""

    HEALTHY = "Healthy"
    PROTEIN = "Protein"
    ITALIAN = "Italian"
    ASIAN = "Asian"
    MEXICAN = "Mexican"
    DESSERT = "Dessert"
    AMERICAN = "American"
    BREAKFAST = "Breakfast"
    GENERAL = "General"


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


def clamp_confidence(value) -> float:
    """Coerce a provider confidence to a float in [0, 1].

    Non-numeric and NaN values become 0.0.
    """
    try:
        f = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(f):
        return 0.0
    return min(1.0, max(0.0, f))


def format_grams(value) -> str:
    """Render a nutrient amount as "<n>g" (accepts 12, 12.4, "12g", "12 g")."""
    if isinstance(value, str):
        digits = value.strip().lower().removesuffix("g").strip()
        try:
            return f"{round(float(digits))}g"
        except ValueError:
            return "0g"
    try:
        return f"{round(float(value))}g"
    except (TypeError, ValueError):
        return "0g"


class DetectionResult(BaseModel):
    """Food detected in an image.

    `source` is the provider name that produced the result, or "mock" when
    the static lookup was used.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Annotated[str, Field(min_length=1, max_length=200, description="Normalized food name")]
    confidence: Annotated[float, Field(ge=0.0, le=1.0, description="Detection confidence (0.0-1.0)")]
    category: Annotated[FoodCategory, Field(description="Keyword-derived food category")]
    ingredients: Annotated[
        List[str], Field(default_factory=list, description="Ordered list of detected ingredients")
    ]
    source: Annotated[str, Field("mock", description="Provider that produced the result")]

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp(cls, v) -> float:
        return clamp_confidence(v)

    @field_validator("ingredients", mode="before")
    @classmethod
    def clean_ingredients(cls, v) -> list[str]:
        if not v:
            return []
        if isinstance(v, str):
            v = [v]
        cleaned = [str(item).strip() for item in v if item is not None and str(item).strip()]
        return list(dict.fromkeys(cleaned))

    @property
    def is_mock(self) -> bool:
        return self.source == "mock"


class Nutrition(BaseModel):
    """Per-serving nutrition attached to a recipe."""

    model_config = ConfigDict(str_strip_whitespace=True)

    calories: Annotated[int, Field(ge=0, description="Calories (kcal)")]
    protein: Annotated[str, Field(description='Protein, e.g. "25g"')]
    carbs: Annotated[str, Field(description='Carbohydrates, e.g. "30g"')]
    fat: Annotated[str, Field(description='Fat, e.g. "15g"')]

    @field_validator("calories", mode="before")
    @classmethod
    def round_calories(cls, v) -> int:
        try:
            return max(0, round(float(v)))
        except (TypeError, ValueError):
            return 0

    @field_validator("protein", "carbs", "fat", mode="before")
    @classmethod
    def grams(cls, v) -> str:
        return format_grams(v)


class NutritionFacts(Nutrition):
    """Nutrition lookup result for an ingredient list."""

    fiber: Annotated[str, Field("0g", description='Fiber, e.g. "4g"')]
    sugar: Annotated[str, Field("0g", description='Sugar, e.g. "9g"')]
    source: Annotated[str, Field("estimate", description='"edamam" or "estimate"')]

    @field_validator("fiber", "sugar", mode="before")
    @classmethod
    def extra_grams(cls, v) -> str:
        return format_grams(v)


class RecipeResult(BaseModel):
    """A fully populated recipe card."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: Annotated[str, Field(min_length=1, description="Recipe identifier")]
    title: Annotated[str, Field(min_length=1, max_length=200, description="Recipe title")]
    description: Annotated[str, Field(min_length=1, description="Short appetizing description")]
    image_url: Annotated[str, Field(min_length=1, description="URL of a representative photo")]
    cook_time: Annotated[str, Field(min_length=1, description='Total time, e.g. "25 mins"')]
    difficulty: Annotated[Difficulty, Field(description="Easy, Medium or Hard")]
    ingredients: Annotated[List[str], Field(default_factory=list, description="Ingredients with quantities")]
    instructions: Annotated[List[str], Field(default_factory=list, description="Ordered cooking steps")]
    nutrition: Annotated[Optional[Nutrition], Field(None, description="Optional nutrition summary")]
    source_url: Annotated[Optional[str], Field(None, description="Original recipe page")]
    source: Annotated[str, Field("mock", description="Provider that produced the recipe")]

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v) -> str:
        return str(v) if v is not None else v

    @field_validator("difficulty", mode="before")
    @classmethod
    def coerce_difficulty(cls, v) -> Difficulty:
        if isinstance(v, Difficulty):
            return v
        text = str(v or "").strip().lower()
        for level in Difficulty:
            if text == level.value.lower():
                return level
        return Difficulty.MEDIUM

    @field_validator("ingredients", "instructions", mode="before")
    @classmethod
    def clean_lines(cls, v) -> list[str]:
        if not v:
            return []
        if isinstance(v, str):
            v = [v]
        return [str(item).strip() for item in v if item is not None and str(item).strip()]


class InsightType(str, Enum):
    TIP = "tip"
    SUBSTITUTION = "substitution"
    NUTRITION = "nutrition"
    TECHNIQUE = "technique"


class FoodInsight(BaseModel):
    """Cooking tip or fact shown next to a detection."""

    type: InsightType
    title: str
    content: str
