"""Hugging Face Inference API detection provider (nateraw/food classifier)."""

from snap_chef.models.models import DetectionResult
from snap_chef.providers.base import DetectionProvider, HttpProvider
from snap_chef.services.normalize import build_detection
from snap_chef.utils.errors import ProviderError, ProviderParseError
from snap_chef.utils.images import ImagePayload

HUGGINGFACE_URL = "https://api-inference.huggingface.co/models/nateraw/food"


class HuggingFaceDetector(HttpProvider, DetectionProvider):
    """Food-101 classifier; labels arrive as snake_case ("chicken_wings")."""

    name = "huggingface"

    def __init__(self, api_key: str, timeout_seconds: float = 15.0) -> None:
        super().__init__(timeout_seconds)
        self.api_key = api_key

    async def detect(self, image: ImagePayload) -> DetectionResult:
        if image.data is None:
            raise ProviderError(self.name, "no image bytes to analyze")

        data = await self._request_json(
            "POST",
            HUGGINGFACE_URL,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/octet-stream",
            },
            data=image.data,
        )

        # Model still loading, quota exceeded, etc.
        if isinstance(data, dict) and data.get("error"):
            raise ProviderError(self.name, str(data["error"]))
        if not isinstance(data, list):
            raise ProviderParseError(self.name, f"expected a list of labels, got {type(data).__name__}")
        if not data:
            raise ProviderError(self.name, "no food detected in the image")

        top = data[0]
        if not isinstance(top, dict):
            raise ProviderParseError(self.name, "label entry is not an object")
        return build_detection(top.get("label"), top.get("score", 0.0), self.name)
