"""Build provider chains from a ProviderConfig.

Only configured providers are instantiated, in the configured order.
"""

from typing import Callable, Optional

from snap_chef.providers.base import DetectionProvider, NutritionProvider, RecipeProvider
from snap_chef.providers.clarifai import ClarifaiDetector
from snap_chef.providers.edamam import EdamamNutrition
from snap_chef.providers.gemini import GeminiRecipeGenerator, GeminiVisionDetector
from snap_chef.providers.google_vision import GoogleVisionDetector
from snap_chef.providers.huggingface import HuggingFaceDetector
from snap_chef.providers.spoonacular import SpoonacularRecipeSearch
from snap_chef.utils.config import ProviderConfig

DETECTION_FACTORIES: dict[str, Callable[[ProviderConfig], DetectionProvider]] = {
    "gemini": lambda c: GeminiVisionDetector(c.gemini_api_key, c.image_detection_model, c.request_timeout_seconds),
    "clarifai": lambda c: ClarifaiDetector(c.clarifai_api_key, c.request_timeout_seconds),
    "google_vision": lambda c: GoogleVisionDetector(c.google_vision_api_key, c.request_timeout_seconds),
    "huggingface": lambda c: HuggingFaceDetector(c.huggingface_api_key, c.request_timeout_seconds),
}

RECIPE_FACTORIES: dict[str, Callable[[ProviderConfig], RecipeProvider]] = {
    "gemini": lambda c: GeminiRecipeGenerator(
        c.gemini_api_key,
        c.gemini_model,
        c.request_timeout_seconds,
        temperature=c.temperature,
        max_output_tokens=c.max_output_tokens,
    ),
    "spoonacular": lambda c: SpoonacularRecipeSearch(c.spoonacular_api_key, c.request_timeout_seconds),
}


def build_detection_providers(provider_config: ProviderConfig) -> list[DetectionProvider]:
    return [
        DETECTION_FACTORIES[name](provider_config)
        for name in provider_config.configured_detection_providers()
        if name in DETECTION_FACTORIES
    ]


def build_recipe_providers(provider_config: ProviderConfig) -> list[RecipeProvider]:
    return [
        RECIPE_FACTORIES[name](provider_config)
        for name in provider_config.configured_recipe_providers()
        if name in RECIPE_FACTORIES
    ]


def build_nutrition_provider(provider_config: ProviderConfig) -> Optional[NutritionProvider]:
    if not provider_config.is_configured("edamam"):
        return None
    return EdamamNutrition(
        provider_config.edamam_app_id,
        provider_config.edamam_app_key,
        provider_config.request_timeout_seconds,
    )
