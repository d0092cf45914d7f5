"""
Unit tests for scheduler configuration.
"""

import os

import pytest

from srs_core.config import SchedulerParams, load_params_from_env
from srs_core.errors import ValidationError
from srs_core.scheduling import initialize_new_card
from tests.conftest import NOW


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run from an empty directory (no .env) with no SRS_* variables set."""
    monkeypatch.chdir(tmp_path)
    for field_name in SchedulerParams().to_dict():
        monkeypatch.delenv("SRS_" + field_name.upper(), raising=False)


class TestSchedulerParams:

    def test_defaults(self):
        params = SchedulerParams()

        assert params.min_ease == 1.3
        assert params.max_ease == 3.5
        assert params.initial_ease == 2.5
        assert params.graduation_interval == 14.0
        assert params.relearning_interval == pytest.approx(10 / 1440)

    def test_updated_returns_copy(self):
        params = SchedulerParams()

        custom = params.updated(graduation_interval=21.0)

        assert custom.graduation_interval == 21.0
        assert params.graduation_interval == 14.0

    @pytest.mark.parametrize("overrides", [
        {"min_ease": 0.5},
        {"max_interval": 10},
        {"ease_penalty": "high"},
        {"no_such_param": 1.0},
        {"initial_ease": 1.5, "min_ease": 2.0},
    ])
    def test_invalid_overrides(self, overrides):
        with pytest.raises(ValidationError):
            SchedulerParams().updated(**overrides)


class TestLoadParamsFromEnv:

    def test_defaults_without_env(self):
        assert load_params_from_env() == SchedulerParams()

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SRS_GRADUATION_INTERVAL", "21")
        monkeypatch.setenv("SRS_EASE_PENALTY", "0.15")

        params = load_params_from_env()

        assert params.graduation_interval == 21.0
        assert params.ease_penalty == pytest.approx(0.15)

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("SRS_RELEARNING_INTERVAL_MINUTES=30\n")

        try:
            params = load_params_from_env()
        finally:
            # load_dotenv writes straight into os.environ
            os.environ.pop("SRS_RELEARNING_INTERVAL_MINUTES", None)

        assert params.relearning_interval_minutes == 30.0
        assert params.relearning_interval == pytest.approx(30 / 1440)

    def test_non_numeric_value(self, monkeypatch):
        monkeypatch.setenv("SRS_MAX_EASE", "lots")

        with pytest.raises(ValidationError) as exc_info:
            load_params_from_env()
        assert exc_info.value.field == "max_ease"

    def test_out_of_range_value(self, monkeypatch):
        monkeypatch.setenv("SRS_MIN_EASE", "0.1")

        with pytest.raises(ValidationError):
            load_params_from_env()

    def test_initial_ease_reaches_new_cards(self, monkeypatch):
        monkeypatch.setenv("SRS_INITIAL_EASE", "2.0")

        card = initialize_new_card("user-1", created_at=NOW, params=load_params_from_env())

        assert card.memory.ease_factor == pytest.approx(2.0)
