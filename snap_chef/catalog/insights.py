"""Per-category cooking insights shown alongside a detection."""

import zlib

from snap_chef.models.models import DetectionResult, FoodCategory, FoodInsight, InsightType

HEALTH_BENEFITS: dict[FoodCategory, str] = {
    FoodCategory.HEALTHY: "Rich in vitamins, minerals, and antioxidants that support overall wellness and boost immunity.",
    FoodCategory.PROTEIN: "Excellent source of complete proteins for muscle building and tissue repair.",
    FoodCategory.ITALIAN: "Mediterranean ingredients like olive oil and tomatoes provide heart-healthy compounds.",
    FoodCategory.ASIAN: "Often includes anti-inflammatory spices and vegetables rich in phytonutrients.",
    FoodCategory.DESSERT: "Enjoy in moderation! Dark chocolate varieties can provide antioxidants.",
    FoodCategory.AMERICAN: "Can be made healthier by using lean proteins and adding extra vegetables.",
    FoodCategory.BREAKFAST: "Provides essential energy to start your day and can include fiber-rich ingredients.",
    FoodCategory.MEXICAN: "Features nutrient-dense ingredients like avocados, beans, and peppers.",
}

TECHNIQUES: dict[FoodCategory, str] = {
    FoodCategory.HEALTHY: "Steam or grill to preserve nutrients, and use minimal oil for the cleanest flavors.",
    FoodCategory.PROTEIN: "Use a meat thermometer to ensure perfect doneness and let meat rest before serving.",
    FoodCategory.ITALIAN: "Build flavors slowly with garlic and herbs, and always finish pasta in the sauce.",
    FoodCategory.ASIAN: "High heat and quick cooking preserve texture. Prep all ingredients before you start.",
    FoodCategory.DESSERT: "Room temperature ingredients mix better, and don't overmix to keep textures light.",
    FoodCategory.AMERICAN: "Layer flavors with seasonings and don't overcrowd the pan when cooking.",
    FoodCategory.BREAKFAST: "Cook eggs low and slow for creaminess, and toast bread just before serving.",
    FoodCategory.MEXICAN: "Toast spices briefly to release oils, and char vegetables for smoky depth.",
}

SUBSTITUTIONS: dict[FoodCategory, str] = {
    FoodCategory.HEALTHY: "Try zucchini noodles for pasta, cauliflower rice for grains, or Greek yogurt for sour cream.",
    FoodCategory.PROTEIN: "Swap chicken for turkey, use plant-based proteins, or try leaner cuts of meat.",
    FoodCategory.ITALIAN: "Use zucchini noodles for pasta, cashew cream for dairy, or nutritional yeast for cheese.",
    FoodCategory.ASIAN: "Coconut aminos for soy sauce, shiitake mushrooms for umami, or rice paper for wheat wraps.",
    FoodCategory.DESSERT: "Use applesauce for oil, stevia for sugar, or almond flour for regular flour.",
    FoodCategory.AMERICAN: "Try turkey burger for beef, sweet potato fries for regular fries.",
    FoodCategory.BREAKFAST: "Use egg whites for whole eggs, or try chia seed pudding for cereal.",
    FoodCategory.MEXICAN: "Lettuce wraps for tortillas, Greek yogurt for sour cream, or salsa for creamy sauces.",
}

INSIGHTS_PER_DETECTION = 3


def food_insights(detection: DetectionResult) -> list[FoodInsight]:
    """Return three insights for a detection.

    The four candidate insights are rotated by a CRC32 of the food name, so
    a given dish always gets the same three.
    """
    category = detection.category
    candidates = [
        FoodInsight(
            type=InsightType.TIP,
            title="Chef's Secret",
            content=(
                f"For the best {detection.name}, always use fresh, high-quality ingredients "
                "and let flavors develop naturally."
            ),
        ),
        FoodInsight(
            type=InsightType.NUTRITION,
            title="Health Benefits",
            content=HEALTH_BENEFITS.get(
                category, "This dish can be part of a balanced diet when prepared with fresh ingredients."
            ),
        ),
        FoodInsight(
            type=InsightType.TECHNIQUE,
            title="Cooking Technique",
            content=TECHNIQUES.get(category, "Focus on timing and temperature for the best results."),
        ),
        FoodInsight(
            type=InsightType.SUBSTITUTION,
            title="Smart Substitutions",
            content=SUBSTITUTIONS.get(
                category,
                "Consider healthier alternatives like whole grains, lean proteins, and extra vegetables.",
            ),
        ),
    ]
    offset = zlib.crc32(detection.name.lower().encode("utf-8")) % len(candidates)
    rotated = candidates[offset:] + candidates[:offset]
    return rotated[:INSIGHTS_PER_DETECTION]
