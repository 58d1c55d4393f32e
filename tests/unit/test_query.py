"""Unit tests for the ad hoc query runner."""

from unittest.mock import AsyncMock, patch

import pytest

import query
from snap_chef.services.coordinator import ProviderFallbackCoordinator
from snap_chef.utils.config import ProviderConfig


class TestParseArgs:
    """Test hand-rolled flag parsing."""

    def test_image_only(self):
        options = query.parse_args(["images/pasta.png"])

        assert options["image"] == "images/pasta.png"
        assert options["count"] is None
        assert options["debug"] is False

    def test_all_flags(self):
        options = query.parse_args(["--debug", "--count", "6", "--nutrition", "--insights", "my", "photo.jpg"])

        assert options == {
            "image": "my photo.jpg",
            "search": None,
            "count": 6,
            "debug": True,
            "nutrition": True,
            "insights": True,
        }

    def test_search_without_image(self):
        options = query.parse_args(["--search", "green curry"])

        assert options["search"] == "green curry"
        assert options["image"] is None

    @pytest.mark.parametrize(
        "argv,message",
        [
            ([], "No image"),
            (["--count"], "requires a value"),
            (["--count", "lots", "a.jpg"], "must be an integer"),
            (["--count", "0", "a.jpg"], "at least 1"),
            (["--verbose", "a.jpg"], "Unknown flag"),
        ],
    )
    def test_invalid_arguments(self, argv, message):
        with pytest.raises(ValueError, match=message):
            query.parse_args(argv)


class TestRun:
    """Test the end-to-end runner in demo mode."""

    @pytest.mark.asyncio
    async def test_demo_mode_output(self, capsys):
        subject = ProviderFallbackCoordinator(ProviderConfig())
        options = query.parse_args(["--insights", "--nutrition", "chicken_dinner.jpg"])

        await query.run(options, coordinator=subject)

        output = capsys.readouterr().out
        assert "Demo mode" in output
        assert "Grilled Chicken Breast" in output
        assert "Herb Grilled Chicken" in output
        assert "Nutrition for Herb Grilled Chicken" in output
        assert "estimate" in output

    @pytest.mark.asyncio
    async def test_search_only(self, capsys):
        subject = ProviderFallbackCoordinator(ProviderConfig())

        await query.run(query.parse_args(["--count", "2", "--search", "laksa"]), coordinator=subject)

        output = capsys.readouterr().out
        assert "laksa Recipe 1" in output
        assert "laksa Recipe 3" not in output


class TestMain:
    """Test exit codes."""

    def test_bad_arguments_exit_1(self, capsys):
        assert query.main(["--bogus"]) == 1
        assert "Usage" in capsys.readouterr().out

    @patch("query.run", new_callable=AsyncMock)
    def test_success_exit_0(self, mock_run):
        assert query.main(["salad.jpg"]) == 0
        mock_run.assert_awaited_once()

    @patch("query.run", new_callable=AsyncMock)
    def test_failure_exit_1(self, mock_run):
        mock_run.side_effect = RuntimeError("boom")

        assert query.main(["salad.jpg"]) == 1
