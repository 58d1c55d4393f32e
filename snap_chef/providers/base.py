"""Provider interfaces and the shared aiohttp request helper."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

import aiohttp

from snap_chef.models.models import DetectionResult, NutritionFacts, RecipeResult
from snap_chef.utils.errors import ProviderError, ProviderParseError
from snap_chef.utils.images import ImagePayload


class DetectionProvider(ABC):
    """Detects the food shown in an image."""

    name: str = "detection"

    @abstractmethod
    async def detect(self, image: ImagePayload) -> DetectionResult:
        """Return a normalized detection or raise ProviderError."""


class RecipeProvider(ABC):
    """Produces recipes for a detection."""

    name: str = "recipes"

    @abstractmethod
    async def recipes(self, detection: DetectionResult, count: int) -> list[RecipeResult]:
        """Return up to `count` normalized recipes or raise ProviderError."""


class NutritionProvider(ABC):
    """Looks up nutrition for an ingredient list."""

    name: str = "nutrition"

    @abstractmethod
    async def analyze(self, ingredients: list[str]) -> NutritionFacts:
        """Return nutrition facts or raise ProviderError."""


class HttpProvider:
    """Mixin for providers that talk JSON over HTTP."""

    name: str = "http"

    def __init__(self, timeout_seconds: float = 15.0) -> None:
        self.timeout_seconds = timeout_seconds

    async def _request_json(self, method: str, url: str, **kwargs) -> Any:
        """Issue one request and decode the JSON body.

        Raises:
            ProviderError: On connection errors, timeouts and HTTP >= 400.
            ProviderParseError: If the body is not valid JSON.
        """
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(method, url, **kwargs) as response:
                    if response.status >= 400:
                        body = await response.text()
                        raise ProviderError(
                            self.name, f"HTTP {response.status}: {body[:200]}", status=response.status
                        )
                    try:
                        return await response.json(content_type=None)
                    except ValueError as e:
                        raise ProviderParseError(self.name, f"invalid JSON body: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ProviderError(self.name, f"request failed: {e}") from e
