"""Unit tests for Pydantic data models."""

import math

import pytest
from pydantic import ValidationError

from snap_chef.models.models import (
    DetectionResult,
    Difficulty,
    FoodCategory,
    Nutrition,
    NutritionFacts,
    RecipeResult,
    clamp_confidence,
    format_grams,
)


def make_recipe(**overrides) -> RecipeResult:
    data = {
        "id": "r1",
        "title": "Test Recipe",
        "description": "A recipe",
        "image_url": "https://example.com/r1.jpg",
        "cook_time": "20 mins",
        "difficulty": "Easy",
    }
    data.update(overrides)
    return RecipeResult(**data)


class TestClampConfidence:
    """Test confidence coercion into [0, 1]."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0.5, 0.5), (1.7, 1.0), (-0.2, 0.0), ("0.8", 0.8), ("high", 0.0), (None, 0.0), (math.nan, 0.0)],
    )
    def test_clamp_confidence(self, value, expected):
        assert clamp_confidence(value) == expected


class TestDetectionResult:
    """Test DetectionResult validation."""

    def test_confidence_is_clamped(self):
        """Test that out-of-range provider confidences are clamped, not rejected."""
        result = DetectionResult(name="Sushi", confidence=1.3, category=FoodCategory.ASIAN)

        assert result.confidence == 1.0

    def test_ingredients_are_cleaned_and_deduplicated(self):
        """Test that blank and duplicate ingredients are dropped, order kept."""
        result = DetectionResult(
            name="Salad",
            confidence=0.9,
            category="Healthy",
            ingredients=["Lettuce", " ", None, "Tomato", "Lettuce"],
        )

        assert result.ingredients == ["Lettuce", "Tomato"]
        assert result.category is FoodCategory.HEALTHY

    def test_defaults_to_mock_source(self):
        result = DetectionResult(name="Pizza", confidence=0.9, category=FoodCategory.ITALIAN)

        assert result.is_mock
        assert not DetectionResult(
            name="Pizza", confidence=0.9, category=FoodCategory.ITALIAN, source="gemini"
        ).is_mock

    def test_empty_name_rejected(self):
        """Test that whitespace-only names fail validation."""
        with pytest.raises(ValidationError):
            DetectionResult(name="   ", confidence=0.5, category=FoodCategory.GENERAL)

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            DetectionResult(name="Soup", confidence=0.5, category="Soups")


class TestNutrition:
    """Test nutrition models and gram formatting."""

    @pytest.mark.parametrize("value,expected", [(12, "12g"), (12.6, "13g"), ("25g", "25g"), ("8 g", "8g"), ("n/a", "0g")])
    def test_format_grams(self, value, expected):
        assert format_grams(value) == expected

    def test_nutrition_normalizes_values(self):
        """Test that calories are rounded and macros rendered as grams."""
        nutrition = Nutrition(calories=321.6, protein=25.2, carbs="30g", fat="15")

        assert nutrition.calories == 322
        assert nutrition.protein == "25g"
        assert nutrition.carbs == "30g"
        assert nutrition.fat == "15g"

    def test_nutrition_facts_defaults(self):
        facts = NutritionFacts(calories=200, protein=10, carbs=20, fat=5)

        assert facts.fiber == "0g"
        assert facts.sugar == "0g"
        assert facts.source == "estimate"


class TestRecipeResult:
    """Test RecipeResult coercion."""

    def test_numeric_id_is_stringified(self):
        assert make_recipe(id=716429).id == "716429"

    @pytest.mark.parametrize(
        "value,expected",
        [("easy", Difficulty.EASY), ("HARD", Difficulty.HARD), ("expert", Difficulty.MEDIUM), (None, Difficulty.MEDIUM)],
    )
    def test_difficulty_is_coerced(self, value, expected):
        assert make_recipe(difficulty=value).difficulty is expected

    def test_ingredient_lines_are_cleaned(self):
        recipe = make_recipe(ingredients=["2 eggs", "", None, " salt "], instructions="Mix everything")

        assert recipe.ingredients == ["2 eggs", "salt"]
        assert recipe.instructions == ["Mix everything"]

    def test_nutrition_is_optional(self):
        assert make_recipe().nutrition is None
        assert make_recipe(nutrition={"calories": 100, "protein": 1, "carbs": 2, "fat": 3}).nutrition.calories == 100

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            make_recipe(title="")
