"""Command-line seeding."""

from unittest.mock import patch

import pytest

from scripts.seed_availability import main, seed_availability
from tests.conftest import make_settings


class TestSeedScript:
    def test_seed_then_reset(self, tmp_path) -> None:
        settings = make_settings(database_url=f"sqlite:///{tmp_path / 'seed.db'}", seed_horizon_days=7)

        first = seed_availability(settings)
        again = seed_availability(settings)
        reset = seed_availability(settings, reset=True)

        assert first.created > 0
        assert again.created == 0
        assert reset.created == first.created

    def test_reset_requires_execute(self) -> None:
        with patch("scripts.seed_availability.seed_availability") as seed:
            with pytest.raises(SystemExit):
                main(["--reset"])
        seed.assert_not_called()
