"""Clarifai food-item-recognition detection provider."""

from snap_chef.models.models import DetectionResult, clamp_confidence
from snap_chef.providers.base import DetectionProvider, HttpProvider
from snap_chef.services.normalize import build_detection
from snap_chef.utils.errors import ProviderError, ProviderParseError
from snap_chef.utils.images import ImagePayload

CLARIFAI_URL = "https://api.clarifai.com/v2/models/food-item-recognition/outputs"
MAX_CONCEPTS = 5


class ClarifaiDetector(HttpProvider, DetectionProvider):
    """Top concept becomes the food name, the top five become ingredients."""

    name = "clarifai"

    def __init__(self, api_key: str, timeout_seconds: float = 15.0) -> None:
        super().__init__(timeout_seconds)
        self.api_key = api_key

    async def detect(self, image: ImagePayload) -> DetectionResult:
        if image.data is not None:
            image_field = {"base64": image.b64}
        elif image.url:
            image_field = {"url": image.url}
        else:
            raise ProviderError(self.name, "no image bytes or URL to analyze")

        data = await self._request_json(
            "POST",
            CLARIFAI_URL,
            headers={"Authorization": f"Key {self.api_key}"},
            json={"inputs": [{"data": {"image": image_field}}]},
        )

        try:
            concepts = data["outputs"][0]["data"].get("concepts") or []
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise ProviderParseError(self.name, f"unexpected response shape: {e}") from e
        if not concepts:
            raise ProviderError(self.name, "no food detected in the image")

        top = concepts[0]
        return build_detection(
            top.get("name"),
            round(clamp_confidence(top.get("value")), 2),
            self.name,
            ingredients=[concept.get("name") for concept in concepts[:MAX_CONCEPTS]],
        )
