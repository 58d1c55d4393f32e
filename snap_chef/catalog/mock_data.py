"""Static fallback tables used when no provider succeeds.

Every function here is pure and deterministic: "random" choices are seeded
from the input (CRC32), so the same image reference or ingredient list
always produces the same mock.
"""

import random
import zlib
from typing import Optional

from snap_chef.catalog.categories import categorize_food
from snap_chef.models.models import DetectionResult, NutritionFacts, RecipeResult

MIN_RECIPES = 3
PADDED_RECIPES = 4

DEFAULT_RECIPE_IMAGE = "https://images.unsplash.com/photo-1546069901-ba9599a7e63c?w=400&h=300&fit=crop"
DEFAULT_INGREDIENTS = ["Fresh ingredients", "Quality seasonings"]
DEFAULT_INSTRUCTIONS = ["Prepare ingredients", "Cook with care", "Serve"]

MOCK_DETECTIONS: list[dict] = [
    {"name": "Fresh Garden Salad", "confidence": 0.92, "keywords": ("salad", "lettuce", "green")},
    {"name": "Grilled Chicken Breast", "confidence": 0.88, "keywords": ("chicken", "meat", "grilled")},
    {"name": "Sushi Roll", "confidence": 0.94, "keywords": ("sushi", "roll", "rice")},
    {"name": "Chocolate Cake", "confidence": 0.89, "keywords": ("cake", "chocolate", "dessert")},
    {"name": "Beef Burger", "confidence": 0.91, "keywords": ("burger", "beef", "sandwich")},
    {"name": "Pasta Carbonara", "confidence": 0.87, "keywords": ("pasta", "noodle", "carbonara")},
    {"name": "Vegetable Stir Fry", "confidence": 0.85, "keywords": ("vegetable", "stir", "wok")},
    {"name": "Fresh Fruit Bowl", "confidence": 0.93, "keywords": ("fruit", "bowl", "fresh")},
    {"name": "Pizza Margherita", "confidence": 0.90, "keywords": ("pizza", "cheese", "tomato")},
    {"name": "Fish and Chips", "confidence": 0.86, "keywords": ("fish", "chips", "fried")},
]

# Keyed recipe sets; the key is matched against the detected food name.
RECIPE_SETS: dict[str, list[dict]] = {
    "salad": [
        {
            "id": "s1",
            "title": "Caesar Salad",
            "description": "Classic Caesar salad with crispy croutons and parmesan",
            "image_url": "https://images.unsplash.com/photo-1551248429-40975aa4de74?w=400&h=300&fit=crop",
            "cook_time": "15 mins",
            "difficulty": "Easy",
            "ingredients": ["Romaine lettuce", "Caesar dressing", "Croutons", "Parmesan cheese"],
            "instructions": ["Wash and chop lettuce", "Add dressing", "Top with croutons and cheese"],
            "nutrition": {"calories": 180, "protein": "8g", "carbs": "12g", "fat": "14g"},
        },
        {
            "id": "s2",
            "title": "Mediterranean Salad",
            "description": "Fresh Mediterranean salad with olives and feta",
            "image_url": "https://images.unsplash.com/photo-1540420773420-3366772f4999?w=400&h=300&fit=crop",
            "cook_time": "10 mins",
            "difficulty": "Easy",
            "ingredients": ["Mixed greens", "Olives", "Feta cheese", "Olive oil"],
            "instructions": ["Mix greens", "Add olives and feta", "Drizzle with olive oil"],
            "nutrition": {"calories": 220, "protein": "10g", "carbs": "8g", "fat": "18g"},
        },
    ],
    "chicken": [
        {
            "id": "c1",
            "title": "Herb Grilled Chicken",
            "description": "Juicy grilled chicken with fresh herbs and spices",
            "image_url": "https://images.unsplash.com/photo-1532550907401-a500c9a57435?w=400&h=300&fit=crop",
            "cook_time": "25 mins",
            "difficulty": "Medium",
            "ingredients": ["Chicken breast", "Fresh herbs", "Olive oil", "Garlic"],
            "instructions": ["Marinate chicken", "Preheat grill", "Grill until cooked through"],
            "nutrition": {"calories": 320, "protein": "35g", "carbs": "2g", "fat": "18g"},
        },
        {
            "id": "c2",
            "title": "Chicken Teriyaki",
            "description": "Sweet and savory teriyaki glazed chicken",
            "image_url": "https://images.unsplash.com/photo-1606491956689-2ea866880c84?w=400&h=300&fit=crop",
            "cook_time": "20 mins",
            "difficulty": "Easy",
            "ingredients": ["Chicken thighs", "Teriyaki sauce", "Rice", "Green onions"],
            "instructions": ["Cook chicken", "Add teriyaki sauce", "Serve over rice"],
            "nutrition": {"calories": 380, "protein": "28g", "carbs": "35g", "fat": "12g"},
        },
    ],
    "sushi": [
        {
            "id": "su1",
            "title": "California Roll",
            "description": "Classic California roll with crab and avocado",
            "image_url": "https://images.unsplash.com/photo-1579584425555-c3ce17fd4351?w=400&h=300&fit=crop",
            "cook_time": "30 mins",
            "difficulty": "Hard",
            "ingredients": ["Sushi rice", "Nori", "Crab stick", "Avocado", "Cucumber"],
            "instructions": ["Prepare sushi rice", "Roll with filling", "Slice carefully"],
            "nutrition": {"calories": 250, "protein": "12g", "carbs": "45g", "fat": "8g"},
        },
    ],
    "pasta": [
        {
            "id": "p1",
            "title": "Classic Spaghetti Carbonara",
            "description": "Authentic Italian pasta dish with eggs, cheese, and pancetta",
            "image_url": "https://images.unsplash.com/photo-1621996346565-e3dbc353d2e5?w=400&h=300&fit=crop",
            "cook_time": "20 mins",
            "difficulty": "Medium",
            "ingredients": ["Spaghetti", "Pancetta", "Eggs", "Pecorino Romano", "Black pepper"],
            "instructions": ["Cook pasta", "Fry pancetta", "Mix with egg mixture"],
            "nutrition": {"calories": 580, "protein": "25g", "carbs": "65g", "fat": "22g"},
        },
    ],
}

DEFAULT_RECIPES: list[dict] = [
    {
        "id": "d1",
        "title": "Quick Stir Fry",
        "description": "Healthy and quick vegetable stir fry",
        "image_url": "https://images.unsplash.com/photo-1512058564366-18510be2db19?w=400&h=300&fit=crop",
        "cook_time": "15 mins",
        "difficulty": "Easy",
        "ingredients": ["Mixed vegetables", "Soy sauce", "Garlic", "Ginger"],
        "instructions": ["Heat oil", "Add vegetables", "Stir fry with sauce"],
        "nutrition": {"calories": 180, "protein": "6g", "carbs": "28g", "fat": "6g"},
    },
    {
        "id": "d2",
        "title": "Simple Omelet",
        "description": "Fluffy omelet with herbs",
        "image_url": "https://images.unsplash.com/photo-1506084868230-bb9d95c24759?w=400&h=300&fit=crop",
        "cook_time": "10 mins",
        "difficulty": "Easy",
        "ingredients": ["Eggs", "Milk", "Herbs", "Butter"],
        "instructions": ["Beat eggs", "Cook in pan", "Fold and serve"],
        "nutrition": {"calories": 240, "protein": "16g", "carbs": "2g", "fat": "18g"},
    },
]


def _seed(text: str) -> int:
    return zlib.crc32(text.encode("utf-8"))


def mock_detection(reference: str = "", seed: Optional[bytes] = None) -> DetectionResult:
    """Detect food from the image reference alone.

    Keyword match against the lowercased reference (file name or URL) first;
    otherwise a fixed pseudo-random pick seeded by `seed` (image bytes) or the
    reference itself.
    """
    lowered = (reference or "").lower()
    entry = None
    if lowered:
        entry = next(
            (item for item in MOCK_DETECTIONS if any(keyword in lowered for keyword in item["keywords"])),
            None,
        )
    if entry is None:
        index = (zlib.crc32(seed) if seed else _seed(lowered)) % len(MOCK_DETECTIONS)
        entry = MOCK_DETECTIONS[index]

    return DetectionResult(
        name=entry["name"],
        confidence=entry["confidence"],
        category=categorize_food(entry["name"]),
        source="mock",
    )


def recipe_set_key(food_name: str) -> str:
    """Return the RECIPE_SETS key for a food name, or "default"."""
    lowered = (food_name or "").lower()
    for key in RECIPE_SETS:
        if key in lowered:
            return key
    return "default"


def _templated_recipes(detection: DetectionResult) -> list[dict]:
    """Recipes built from the detection itself when no keyed set matches."""
    category = detection.category.value
    return [
        {
            "id": "mock-inspired",
            "title": f"Inspired {detection.name} Bowl",
            "description": f"A creative take on {detection.name} with fresh ingredients",
            "image_url": DEFAULT_RECIPE_IMAGE,
            "cook_time": "25 mins",
            "difficulty": "Medium",
            "ingredients": detection.ingredients
            or ["Fresh ingredients", "Seasonal vegetables", "Quality proteins", "Aromatic herbs"],
            "instructions": ["Prepare ingredients", "Cook with care", "Season to taste", "Serve beautifully"],
            "nutrition": {"calories": 350, "protein": "20g", "carbs": "35g", "fat": "15g"},
        },
        {
            "id": "mock-fusion",
            "title": f"{category} Fusion Dish",
            "description": f"Fusion cuisine inspired by {category} flavors",
            "image_url": "https://images.unsplash.com/photo-1555939594-58d7cb561ad1?w=400&h=300&fit=crop",
            "cook_time": "30 mins",
            "difficulty": "Easy",
            "ingredients": ["Mixed proteins", "Fresh herbs", "Seasonal produce", "Quality oils"],
            "instructions": ["Prepare mise en place", "Cook with technique", "Balance flavors", "Present well"],
            "nutrition": {"calories": 280, "protein": "18g", "carbs": "25g", "fat": "12g"},
        },
    ]


def pad_recipes(recipes: list[RecipeResult]) -> list[RecipeResult]:
    """Pad a short list (< 3) with default-pool recipes up to 4 entries."""
    if len(recipes) >= MIN_RECIPES:
        return recipes
    padded = list(recipes)
    seen = {recipe.id for recipe in padded}
    for data in DEFAULT_RECIPES:
        if len(padded) >= PADDED_RECIPES:
            break
        if data["id"] in seen:
            continue
        padded.append(RecipeResult(**data, source="mock"))
    return padded


def select_recipes(recipes: list[RecipeResult], count: int) -> list[RecipeResult]:
    """Cut a source's recipes to `count`, or pad them when the source had fewer than 3."""
    if len(recipes) >= MIN_RECIPES:
        return recipes[:count]
    return pad_recipes(recipes)


def mock_recipes(detection: DetectionResult, count: int) -> list[RecipeResult]:
    """Static recipes for a detection: keyed set, else templated, then padded."""
    key = recipe_set_key(detection.name)
    data = RECIPE_SETS[key] if key != "default" else _templated_recipes(detection)
    recipes = [RecipeResult(**item, source="mock") for item in data]
    return select_recipes(recipes, count)


def mock_search_results(query: str, count: int) -> list[RecipeResult]:
    """Numbered variations of the query used when free-text search has no provider."""
    return [
        RecipeResult(
            id=f"search-{index}",
            title=f"{query} Recipe {index}",
            description=f"A delicious take on {query}",
            image_url="https://images.unsplash.com/photo-1565299624946-b28f40a0ca4b?w=400&h=300&fit=crop",
            cook_time="20 mins",
            difficulty="Easy",
            ingredients=list(DEFAULT_INGREDIENTS),
            instructions=list(DEFAULT_INSTRUCTIONS),
            nutrition={"calories": 300, "protein": "15g", "carbs": "25g", "fat": "12g"},
            source="mock",
        )
        for index in range(1, count + 1)
    ]


def estimate_nutrition(ingredients: list[str]) -> NutritionFacts:
    """Rough nutrition estimate: 50 kcal per ingredient plus seeded offsets."""
    key = "|".join(sorted(item.strip().lower() for item in ingredients))
    rng = random.Random(_seed(key))
    return NutritionFacts(
        calories=len(ingredients) * 50 + rng.randrange(100),
        protein=rng.randrange(10, 30),
        carbs=rng.randrange(20, 50),
        fat=rng.randrange(5, 20),
        fiber=rng.randrange(2, 10),
        sugar=rng.randrange(5, 20),
        source="estimate",
    )
