"""Google Cloud Vision label-detection provider."""

from snap_chef.models.models import DetectionResult, clamp_confidence
from snap_chef.providers.base import DetectionProvider, HttpProvider
from snap_chef.services.normalize import build_detection
from snap_chef.utils.errors import ProviderError, ProviderParseError
from snap_chef.utils.images import ImagePayload

VISION_URL = "https://vision.googleapis.com/v1/images:annotate"
MAX_LABELS = 10
FOOD_WORDS = ("food", "dish", "cuisine")
# Labels that say "this is food" without naming it
GENERIC_LABELS = {"food", "dish", "cuisine", "ingredient", "recipe", "meal", "tableware", "produce"}
SCORE_THRESHOLD = 0.8


def pick_food_label(labels: list[dict]) -> dict:
    """Pick the most specific food label.

    Keeps labels mentioning food/dish/cuisine or scoring above 0.8, then
    prefers the first one that is not a generic word like "Food".
    """
    candidates = [
        label
        for label in labels
        if any(word in str(label.get("description", "")).lower() for word in FOOD_WORDS)
        or clamp_confidence(label.get("score")) > SCORE_THRESHOLD
    ]
    if not candidates:
        return {}
    for label in candidates:
        if str(label.get("description", "")).strip().lower() not in GENERIC_LABELS:
            return label
    return candidates[0]


class GoogleVisionDetector(HttpProvider, DetectionProvider):
    name = "google_vision"

    def __init__(self, api_key: str, timeout_seconds: float = 15.0) -> None:
        super().__init__(timeout_seconds)
        self.api_key = api_key

    async def detect(self, image: ImagePayload) -> DetectionResult:
        if image.data is not None:
            image_field = {"content": image.b64}
        elif image.url:
            image_field = {"source": {"imageUri": image.url}}
        else:
            raise ProviderError(self.name, "no image bytes or URL to analyze")

        data = await self._request_json(
            "POST",
            VISION_URL,
            params={"key": self.api_key},
            json={
                "requests": [
                    {
                        "image": image_field,
                        "features": [{"type": "LABEL_DETECTION", "maxResults": MAX_LABELS}],
                    }
                ]
            },
        )

        try:
            response = data["responses"][0]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderParseError(self.name, f"unexpected response shape: {e}") from e
        if response.get("error"):
            raise ProviderError(self.name, str(response["error"].get("message", response["error"])))

        label = pick_food_label(response.get("labelAnnotations") or [])
        if not label:
            raise ProviderError(self.name, "no food labels in the image")

        return build_detection(label.get("description"), label.get("score", 0.0), self.name)
