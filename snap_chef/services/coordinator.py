"""Provider fallback coordinator.

Every public operation walks an ordered chain of configured providers and
returns the first success. A failing provider is logged and skipped; when
the chain is empty or exhausted the static mock catalog answers instead, so
none of these operations raise for provider problems.

Results carry `source`: the provider name, or "mock" when fallback data
was returned.
"""

from typing import Any, Awaitable, Optional, Sequence

from snap_chef.catalog.insights import food_insights
from snap_chef.catalog.mock_data import (
    estimate_nutrition,
    mock_detection,
    mock_recipes,
    mock_search_results,
    select_recipes,
)
from snap_chef.models.models import DetectionResult, FoodInsight, NutritionFacts, RecipeResult
from snap_chef.providers.base import DetectionProvider, NutritionProvider, RecipeProvider
from snap_chef.providers.registry import (
    build_detection_providers,
    build_nutrition_provider,
    build_recipe_providers,
)
from snap_chef.utils.config import ProviderConfig, config
from snap_chef.utils.errors import ProviderParseError, safe_execute_async
from snap_chef.utils.images import ImagePayload, load_image
from snap_chef.utils.logger import logger


class ProviderFallbackCoordinator:
    """Ordered provider fallback for detection, recipes and nutrition.

    Args:
        provider_config: Frozen provider settings (credentials, order, timeouts).
        default_recipe_count: Count used when get_recipes() gets none.
        detection_providers / recipe_providers / nutrition_provider: Explicit
            provider chains; built from `provider_config` when omitted.
    """

    def __init__(
        self,
        provider_config: ProviderConfig,
        default_recipe_count: int = 4,
        detection_providers: Optional[Sequence[DetectionProvider]] = None,
        recipe_providers: Optional[Sequence[RecipeProvider]] = None,
        nutrition_provider: Optional[NutritionProvider] = None,
    ) -> None:
        self.provider_config = provider_config
        self.default_recipe_count = default_recipe_count
        self.detection_providers = list(
            build_detection_providers(provider_config) if detection_providers is None else detection_providers
        )
        self.recipe_providers = list(
            build_recipe_providers(provider_config) if recipe_providers is None else recipe_providers
        )
        self.nutrition_provider = (
            build_nutrition_provider(provider_config) if nutrition_provider is None else nutrition_provider
        )

    async def _attempt(self, provider_name: str, capability: str, call: Awaitable[Any]) -> Any:
        """Await one provider call, returning None on any failure."""
        extra = {"provider": provider_name, "capability": capability}
        try:
            return await call
        except ProviderParseError as e:
            logger.error(f"{capability} provider returned an unusable payload: {e}", extra={**extra, "failure": "parse"})
        except Exception as e:
            logger.warning(f"{capability} provider failed, trying next: {e}", extra={**extra, "failure": "request"})
        return None

    async def detect_food(self, image) -> DetectionResult:
        """Detect the food in an image.

        Args:
            image: bytes, file path, URL, data URL, base64 string or ImagePayload.

        Returns:
            DetectionResult from the first provider that succeeds, else a mock
            detection derived from the image reference (source == "mock").
        """
        payload = await safe_execute_async(
            load_image(
                image,
                max_size_mb=self.provider_config.max_image_size_mb,
                compress=self.provider_config.compress_images,
                compress_threshold_kb=self.provider_config.compress_threshold_kb,
                timeout_seconds=self.provider_config.request_timeout_seconds,
            ),
            "Load image",
            default_return=ImagePayload(data=None),
        )

        for provider in self.detection_providers:
            result = await self._attempt(provider.name, "detection", provider.detect(payload))
            if result is not None:
                logger.info(
                    f"Detected {result.name} ({result.category.value}, confidence {result.confidence:.2f})",
                    extra={"provider": provider.name},
                )
                return result

        if self.detection_providers:
            logger.warning("All detection providers failed, using mock detection")
        else:
            logger.info("No detection provider configured, using mock detection")
        return mock_detection(payload.reference, payload.data)

    async def get_recipes(self, detection: DetectionResult, count: Optional[int] = None) -> list[RecipeResult]:
        """Recipes for a detection.

        Returns up to `count` recipes from the first provider that succeeds.
        A provider that returned fewer than 3 has its list padded from the
        default pool up to 4 instead, so that result may exceed `count`.
        """
        count = self.default_recipe_count if count is None else max(1, count)

        for provider in self.recipe_providers:
            recipes = await self._attempt(provider.name, "recipes", provider.recipes(detection, count))
            if recipes:
                logger.info(f"Got {len(recipes)} recipes for {detection.name}", extra={"provider": provider.name})
                return select_recipes(list(recipes), count)

        if self.recipe_providers:
            logger.warning(f"All recipe providers failed, using mock recipes for {detection.name}")
        else:
            logger.info(f"No recipe provider configured, using mock recipes for {detection.name}")
        return mock_recipes(detection, count)

    async def analyze_nutrition(self, ingredients: list[str]) -> NutritionFacts:
        """Nutrition for an ingredient list; an estimate when the lookup is unavailable."""
        ingredients = [item for item in ingredients if item and item.strip()]
        if self.nutrition_provider is not None and ingredients:
            facts = await self._attempt(
                self.nutrition_provider.name, "nutrition", self.nutrition_provider.analyze(ingredients)
            )
            if facts is not None:
                return facts
        logger.debug(f"Estimating nutrition for {len(ingredients)} ingredients")
        return estimate_nutrition(ingredients)

    async def search_recipes(self, query: str, count: Optional[int] = None) -> list[RecipeResult]:
        """Free-text recipe search through providers that support it."""
        count = self.default_recipe_count if count is None else max(1, count)
        query = (query or "").strip()
        if not query:
            return []

        for provider in self.recipe_providers:
            search = getattr(provider, "search", None)
            if search is None:
                continue
            recipes = await self._attempt(provider.name, "search", search(query, count))
            if recipes:
                return list(recipes)[:count]

        logger.info(f"No search provider available, using mock results for '{query}'")
        return mock_search_results(query, count)

    async def get_insights(self, detection: DetectionResult) -> list[FoodInsight]:
        """Three cooking tips for a detection, from the static insight tables."""
        return food_insights(detection)

    def provider_status(self) -> dict[str, bool]:
        """Map every known provider name to whether it is configured."""
        names = [
            *self.provider_config.detection_order,
            *self.provider_config.recipe_order,
            "edamam",
        ]
        return {name: self.provider_config.is_configured(name) for name in dict.fromkeys(names)}

    def is_demo_mode(self) -> bool:
        """True when neither detection nor recipes can reach a real provider."""
        return not self.detection_providers and not self.recipe_providers


def build_coordinator() -> ProviderFallbackCoordinator:
    """Coordinator wired from the module-level environment config."""
    return ProviderFallbackCoordinator(
        config.provider_config(),
        default_recipe_count=config.DEFAULT_RECIPE_COUNT,
    )
