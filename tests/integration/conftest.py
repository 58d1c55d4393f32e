"""Pytest configuration and fixtures for integration tests.

Integration tests call the real provider APIs. Each test declares the
credentials it needs with the `requires` fixture and is skipped when they
are not set in the environment or the project's .env file.
"""

import os
from pathlib import Path

import pytest
import pytest_asyncio
from dotenv import load_dotenv

from snap_chef.utils.images import load_image

# Unsplash photo also used by the mock catalog (California roll)
SAMPLE_IMAGE_URL = "https://images.unsplash.com/photo-1579584425555-c3ce17fd4351?w=400&h=300&fit=crop"


def pytest_configure(config):
    """Load .env from the project root before collection."""
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)

    print("\n" + "=" * 70)
    print("Note: integration tests call live provider APIs and skip without keys")
    print(f"Environment loaded from: {env_path}")
    print("=" * 70 + "\n")


@pytest.fixture
def requires():
    """Skip the calling test unless all named environment variables are set."""

    def _requires(*names: str) -> None:
        missing = [name for name in names if not os.getenv(name, "").strip()]
        if missing:
            pytest.skip(f"Missing API keys: {', '.join(missing)}. Set these in your .env file.")

    return _requires


@pytest_asyncio.fixture
async def sample_image():
    """Sample food photo fetched once per test; skips when offline."""
    payload = await load_image(SAMPLE_IMAGE_URL)
    if payload.data is None:
        pytest.skip(f"Could not download sample image: {SAMPLE_IMAGE_URL}")
    return payload
