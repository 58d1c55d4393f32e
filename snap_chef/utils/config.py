"""Configuration management for Snap Chef.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults

Provider credentials are read once here. The coordinator never touches the
environment; it receives the frozen ProviderConfig built by
Config.provider_config().
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


# Load .env file (if exists, silently continues if missing)
load_dotenv()


DETECTION_PROVIDER_NAMES = ("gemini", "clarifai", "google_vision", "huggingface")
RECIPE_PROVIDER_NAMES = ("gemini", "spoonacular")


def _credential(name: str) -> Optional[str]:
    """Read a credential, treating blank values as missing."""
    value = os.getenv(name, "")
    value = value.strip()
    return value or None


def _provider_list(name: str, default: tuple[str, ...]) -> list[str]:
    raw = os.getenv(name)
    if raw is None:
        return list(default)
    return [item.strip().lower() for item in raw.split(",") if item.strip()]


class ProviderConfig(BaseModel):
    """Immutable provider settings handed to the fallback coordinator.

    A provider is "configured" when its credential is present. Unconfigured
    providers are skipped silently.
    """

    model_config = ConfigDict(frozen=True)

    gemini_api_key: Optional[str] = None
    clarifai_api_key: Optional[str] = None
    google_vision_api_key: Optional[str] = None
    huggingface_api_key: Optional[str] = None
    spoonacular_api_key: Optional[str] = None
    edamam_app_id: Optional[str] = None
    edamam_app_key: Optional[str] = None

    gemini_model: str = "gemini-2.5-flash"
    image_detection_model: str = "gemini-2.5-flash-lite"
    temperature: float = 0.7
    max_output_tokens: int = 2048
    request_timeout_seconds: float = 15.0
    max_image_size_mb: int = 5
    compress_images: bool = True
    compress_threshold_kb: int = 300

    detection_order: tuple[str, ...] = Field(default=DETECTION_PROVIDER_NAMES)
    recipe_order: tuple[str, ...] = Field(default=RECIPE_PROVIDER_NAMES)

    def is_configured(self, provider: str) -> bool:
        """Return True if the named provider has its credentials."""
        if provider == "gemini":
            return bool(self.gemini_api_key)
        if provider == "clarifai":
            return bool(self.clarifai_api_key)
        if provider == "google_vision":
            return bool(self.google_vision_api_key)
        if provider == "huggingface":
            return bool(self.huggingface_api_key)
        if provider == "spoonacular":
            return bool(self.spoonacular_api_key)
        if provider == "edamam":
            return bool(self.edamam_app_id and self.edamam_app_key)
        return False

    def configured_detection_providers(self) -> list[str]:
        return [name for name in self.detection_order if self.is_configured(name)]

    def configured_recipe_providers(self) -> list[str]:
        return [name for name in self.recipe_order if self.is_configured(name)]


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Detection providers (vision LLM, food classifiers, label service)
        self.GEMINI_API_KEY: Optional[str] = _credential("GEMINI_API_KEY")
        self.CLARIFAI_API_KEY: Optional[str] = _credential("CLARIFAI_API_KEY")
        self.GOOGLE_VISION_API_KEY: Optional[str] = _credential("GOOGLE_VISION_API_KEY")
        self.HUGGINGFACE_API_KEY: Optional[str] = _credential("HUGGINGFACE_API_KEY")
        # Recipe search provider
        self.SPOONACULAR_API_KEY: Optional[str] = _credential("SPOONACULAR_API_KEY")
        # Nutrition lookup: Edamam needs both the app id and the app key
        self.EDAMAM_APP_ID: Optional[str] = _credential("EDAMAM_APP_ID")
        self.EDAMAM_APP_KEY: Optional[str] = _credential("EDAMAM_APP_KEY")
        # Recipe generation model. Default: gemini-2.5-flash
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        # Image Detection Model: separate model optimized for vision tasks
        # Default: gemini-2.5-flash-lite (fast, cost-effective for images)
        self.IMAGE_DETECTION_MODEL: str = os.getenv("IMAGE_DETECTION_MODEL", "gemini-2.5-flash-lite")
        # Provider priority, best accuracy first. Comma-separated provider names.
        self.DETECTION_PROVIDERS: list[str] = _provider_list("DETECTION_PROVIDERS", DETECTION_PROVIDER_NAMES)
        self.RECIPE_PROVIDERS: list[str] = _provider_list("RECIPE_PROVIDERS", RECIPE_PROVIDER_NAMES)
        # Per-request timeout for every provider call (seconds). Default: 15
        self.REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "15"))
        # Number of recipes requested when the caller does not say. Default: 4
        self.DEFAULT_RECIPE_COUNT: int = int(os.getenv("DEFAULT_RECIPE_COUNT", "4"))
        # Maximum image size (in MB) that can be processed. Default: 5 MB
        self.MAX_IMAGE_SIZE_MB: int = int(os.getenv("MAX_IMAGE_SIZE_MB", "5"))
        # Image Compression: Enable/disable image compression before upload
        self.COMPRESS_IMG: bool = os.getenv("COMPRESS_IMG", "true").lower() in ("true", "1", "yes")
        # Only compress images above this size (in KB)
        self.COMPRESS_IMG_THRESHOLD_KB: int = int(os.getenv("COMPRESS_IMG_THRESHOLD_KB", "300"))
        # LLM Model Parameters
        # Temperature: 0.7 keeps generated recipes varied
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))
        # Max Output Tokens: 2048 fits four recipes with instructions
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "2048"))

    def validate(self) -> None:
        """Validate configuration values.

        Missing credentials are not errors; those providers are skipped.

        Raises:
            ValueError: If a value is out of range or names an unknown provider.
        """
        unknown = [name for name in self.DETECTION_PROVIDERS if name not in DETECTION_PROVIDER_NAMES]
        if unknown:
            raise ValueError(
                f"DETECTION_PROVIDERS contains unknown providers: {unknown}. "
                f"Valid: {', '.join(DETECTION_PROVIDER_NAMES)}"
            )
        unknown = [name for name in self.RECIPE_PROVIDERS if name not in RECIPE_PROVIDER_NAMES]
        if unknown:
            raise ValueError(
                f"RECIPE_PROVIDERS contains unknown providers: {unknown}. "
                f"Valid: {', '.join(RECIPE_PROVIDER_NAMES)}"
            )
        if self.REQUEST_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"REQUEST_TIMEOUT_SECONDS must be positive, got: {self.REQUEST_TIMEOUT_SECONDS}"
            )
        if not (1 <= self.DEFAULT_RECIPE_COUNT <= 10):
            raise ValueError(
                f"DEFAULT_RECIPE_COUNT must be between 1 and 10, got: {self.DEFAULT_RECIPE_COUNT}"
            )
        if self.MAX_IMAGE_SIZE_MB < 1:
            raise ValueError(
                f"MAX_IMAGE_SIZE_MB must be at least 1, got: {self.MAX_IMAGE_SIZE_MB}"
            )
        if not (0.0 <= self.TEMPERATURE <= 1.0):
            raise ValueError(
                f"TEMPERATURE must be between 0.0 and 1.0, got: {self.TEMPERATURE}"
            )
        if self.MAX_OUTPUT_TOKENS < 512:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 512, got: {self.MAX_OUTPUT_TOKENS}"
            )

    def provider_config(self) -> ProviderConfig:
        """Build the immutable provider settings for the coordinator."""
        return ProviderConfig(
            gemini_api_key=self.GEMINI_API_KEY,
            clarifai_api_key=self.CLARIFAI_API_KEY,
            google_vision_api_key=self.GOOGLE_VISION_API_KEY,
            huggingface_api_key=self.HUGGINGFACE_API_KEY,
            spoonacular_api_key=self.SPOONACULAR_API_KEY,
            edamam_app_id=self.EDAMAM_APP_ID,
            edamam_app_key=self.EDAMAM_APP_KEY,
            gemini_model=self.GEMINI_MODEL,
            image_detection_model=self.IMAGE_DETECTION_MODEL,
            temperature=self.TEMPERATURE,
            max_output_tokens=self.MAX_OUTPUT_TOKENS,
            request_timeout_seconds=self.REQUEST_TIMEOUT_SECONDS,
            max_image_size_mb=self.MAX_IMAGE_SIZE_MB,
            compress_images=self.COMPRESS_IMG,
            compress_threshold_kb=self.COMPRESS_IMG_THRESHOLD_KB,
            detection_order=tuple(self.DETECTION_PROVIDERS),
            recipe_order=tuple(self.RECIPE_PROVIDERS),
        )


# Create module-level config instance and validate immediately
config = Config()
config.validate()
