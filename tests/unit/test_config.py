"""Tests for Settings validation."""

import pytest
from pydantic import ValidationError

from passage_search.core.config import Settings


class TestSettings:
    def test_defaults_are_valid(self) -> None:
        settings = Settings()
        assert settings.db_retry_max_attempts == 3
        assert settings.db_timeout_seconds == 30.0
        assert settings.db_breaker_failure_ratio == 0.5

    def test_empty_database_url_rejected(self) -> None:
        with pytest.raises(ValidationError, match="DATABASE_URL is required"):
            Settings(database_url="")

    @pytest.mark.parametrize("ratio", [0, -0.1, 1.5])
    def test_failure_ratio_bounds(self, ratio: float) -> None:
        with pytest.raises(ValidationError, match="db_breaker_failure_ratio"):
            Settings(db_breaker_failure_ratio=ratio)

    def test_negative_retries_rejected(self) -> None:
        with pytest.raises(ValidationError, match="http_retry_max_attempts"):
            Settings(http_retry_max_attempts=-1)

    def test_zero_retries_allowed(self) -> None:
        assert Settings(db_retry_max_attempts=0).db_retry_max_attempts == 0

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(ValidationError, match="db_timeout_seconds must be positive"):
            Settings(db_timeout_seconds=0)

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEARCH_RATE_LIMIT", "5/minute")
        assert Settings().search_rate_limit == "5/minute"
