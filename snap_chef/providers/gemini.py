"""Gemini providers: vision detection and recipe generation.

Both call the synchronous google-genai client through asyncio.to_thread so
the event loop stays free, and run the model text through extract_json()
because replies are often wrapped in prose or ``` fences.
"""

import asyncio
from typing import Any, Optional

from google import genai
from google.genai import types

from snap_chef.models.models import DetectionResult, RecipeResult
from snap_chef.prompts.prompts import DETECTION_PROMPT, get_recipe_prompt, get_search_prompt
from snap_chef.providers.base import DetectionProvider, RecipeProvider
from snap_chef.services.normalize import build_detection, build_recipes
from snap_chef.utils.errors import ProviderError, ProviderParseError
from snap_chef.utils.images import ImagePayload
from snap_chef.utils.json_extract import JsonExtractionError, extract_json
from snap_chef.utils.logger import logger


class GeminiProvider:
    """Shared Gemini call plumbing."""

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str,
        timeout_seconds: float = 15.0,
        generation_config: Optional[types.GenerateContentConfig] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.generation_config = generation_config

    async def _generate(self, contents: list) -> str:
        """Run one generate_content call and return the reply text.

        Raises:
            ProviderError: On SDK errors, timeouts or an empty reply.
        """
        client = genai.Client(api_key=self.api_key)
        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(
                    client.models.generate_content,
                    model=self.model,
                    contents=contents,
                    config=self.generation_config,
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise ProviderError(self.name, f"no reply within {self.timeout_seconds}s") from e
        except Exception as e:
            raise ProviderError(self.name, f"generate_content failed: {e}") from e

        text = getattr(response, "text", None)
        if not text:
            raise ProviderError(self.name, "empty response")
        logger.debug(f"Gemini reply ({self.model}): {text[:200]}")
        return text

    def _parse(self, text: str, expect: Optional[type] = None) -> Any:
        try:
            return extract_json(text, expect=expect)
        except JsonExtractionError as e:
            raise ProviderParseError(self.name, str(e)) from e


class GeminiVisionDetector(GeminiProvider, DetectionProvider):
    """Identify the dish in an image with a Gemini vision model."""

    async def detect(self, image: ImagePayload) -> DetectionResult:
        if image.data is None:
            raise ProviderError(self.name, "no image bytes to analyze")

        text = await self._generate(
            [DETECTION_PROMPT, types.Part.from_bytes(data=image.data, mime_type=image.mime_type)]
        )
        payload = self._parse(text, expect=dict)
        return build_detection(
            payload.get("name"),
            payload.get("confidence", 0.0),
            self.name,
            ingredients=payload.get("ingredients"),
            category_hint=payload.get("category"),
        )


class GeminiRecipeGenerator(GeminiProvider, RecipeProvider):
    """Generate recipes (and free-text search results) with Gemini."""

    def __init__(
        self,
        api_key: str,
        model: str,
        timeout_seconds: float = 15.0,
        temperature: float = 0.7,
        max_output_tokens: int = 2048,
    ) -> None:
        super().__init__(
            api_key,
            model,
            timeout_seconds,
            generation_config=types.GenerateContentConfig(
                temperature=temperature,
                max_output_tokens=max_output_tokens,
            ),
        )

    async def recipes(self, detection: DetectionResult, count: int) -> list[RecipeResult]:
        text = await self._generate([get_recipe_prompt(detection, count)])
        return build_recipes(self._parse(text), self.name, count)

    async def search(self, query: str, count: int) -> list[RecipeResult]:
        text = await self._generate([get_search_prompt(query, count)])
        return build_recipes(self._parse(text), self.name, count)
