"""Edamam nutrition-details provider."""

from snap_chef.models.models import NutritionFacts
from snap_chef.providers.base import HttpProvider, NutritionProvider
from snap_chef.utils.errors import ProviderError, ProviderParseError

EDAMAM_URL = "https://api.edamam.com/api/nutrition-details"


class EdamamNutrition(HttpProvider, NutritionProvider):
    """POST the ingredient lines as a recipe and read totalNutrients."""

    name = "edamam"

    def __init__(self, app_id: str, app_key: str, timeout_seconds: float = 15.0) -> None:
        super().__init__(timeout_seconds)
        self.app_id = app_id
        self.app_key = app_key

    async def analyze(self, ingredients: list[str]) -> NutritionFacts:
        if not ingredients:
            raise ProviderError(self.name, "no ingredients to analyze")

        data = await self._request_json(
            "POST",
            EDAMAM_URL,
            params={"app_id": self.app_id, "app_key": self.app_key},
            json={"title": "Recipe Analysis", "ingr": list(ingredients)},
        )
        if not isinstance(data, dict):
            raise ProviderParseError(self.name, "response is not an object")

        totals = data.get("totalNutrients") or {}

        def quantity(code: str) -> float:
            return (totals.get(code) or {}).get("quantity", 0)

        calories = data.get("calories")
        if calories is None:
            calories = (totals.get("ENERC_KCAL") or {}).get("quantity")
        if calories is None:
            raise ProviderParseError(self.name, "response has no calorie total")

        return NutritionFacts(
            calories=calories,
            protein=quantity("PROCNT"),
            carbs=quantity("CHOCDF"),
            fat=quantity("FAT"),
            fiber=quantity("FIBTG"),
            sugar=quantity("SUGAR"),
            source=self.name,
        )
