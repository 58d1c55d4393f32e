"""Prompt builders for the Gemini detection and recipe providers.

Both prompts ask for JSON only; responses still go through extract_json()
because models frequently wrap the JSON in prose or code fences.
"""

from snap_chef.models.models import DetectionResult

DETECTION_PROMPT = """Analyze this food image and return ONLY a JSON object with this exact format:
{
  "name": "specific food name",
  "confidence": 0.95,
  "category": "cuisine type or food category",
  "ingredients": ["ingredient1", "ingredient2"],
  "description": "brief description"
}
Be as accurate as possible about the food identification. Confidence is a number between 0.0 and 1.0."""

RECIPE_JSON_FORMAT = """[
  {
    "id": "unique_id",
    "title": "Recipe Name",
    "description": "Brief appetizing description",
    "image": "https://images.unsplash.com/photo-relevant-food-image?w=400&h=300&fit=crop",
    "cookTime": "X mins",
    "difficulty": "Easy|Medium|Hard",
    "ingredients": ["ingredient1", "ingredient2"],
    "instructions": ["step1", "step2"],
    "nutrition": {"calories": 300, "protein": "25g", "carbs": "30g", "fat": "15g"}
  }
]"""


def get_recipe_prompt(detection: DetectionResult, count: int) -> str:
    """Prompt for `count` recipes keyed off the detected name, ingredients and category."""
    ingredients = ", ".join(detection.ingredients) if detection.ingredients else "not detected"
    return f"""Generate {count} detailed recipes inspired by or that use ingredients similar to "{detection.name}".
Detected category: {detection.category.value}
Detected ingredients: {ingredients}

Return ONLY a JSON array with this exact format:
{RECIPE_JSON_FORMAT}

Make the recipes creative and practical, and ensure image URLs are realistic food photography."""


def get_search_prompt(query: str, count: int) -> str:
    """Prompt for free-text recipe search."""
    return f"""Find {count} recipes similar to or related to "{query}".
Return ONLY a JSON array of recipes with this exact format:
{RECIPE_JSON_FORMAT}

Focus on practical, delicious recipes that home cooks can make."""
