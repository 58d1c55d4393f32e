"""Food name normalization and keyword categorization."""

import re
import string

from snap_chef.models.models import FoodCategory

# Order matters: the first category with a matching keyword wins.
CATEGORY_KEYWORDS: dict[FoodCategory, tuple[str, ...]] = {
    FoodCategory.HEALTHY: ("salad", "vegetable", "fruit", "quinoa", "kale", "grain"),
    FoodCategory.PROTEIN: ("chicken", "beef", "fish", "egg", "tofu"),
    FoodCategory.ITALIAN: ("pasta", "pizza", "lasagna", "risotto"),
    FoodCategory.ASIAN: ("sushi", "ramen", "stir fry", "dim sum", "noodle", "rice"),
    FoodCategory.MEXICAN: ("taco", "burrito", "quesadilla", "salsa"),
    FoodCategory.DESSERT: ("cake", "cookie", "ice cream", "chocolate"),
    FoodCategory.AMERICAN: ("burger", "fries", "sandwich", "bbq"),
    FoodCategory.BREAKFAST: ("pancake", "waffle", "cereal"),
}

_WORD_SPLIT = re.compile(r"[\s_\-]+")
_PUNCTUATION = str.maketrans("", "", string.punctuation.replace("&", ""))


def format_food_name(name: str) -> str:
    """Title-case a provider label and strip punctuation.

    >>> format_food_name("chicken_teriyaki-bowl!")
    'Chicken Teriyaki Bowl'
    """
    words = [word.translate(_PUNCTUATION) for word in _WORD_SPLIT.split(name or "")]
    return " ".join(word[:1].upper() + word[1:].lower() for word in words if word)


def categorize_food(name: str) -> FoodCategory:
    """Map a food name to a category by keyword containment.

    Hyphens and underscores are treated as spaces so "stir-fry" matches
    "stir fry". Returns FoodCategory.GENERAL when nothing matches.
    """
    lowered = " ".join(_WORD_SPLIT.split((name or "").lower()))
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return category
    return FoodCategory.GENERAL
