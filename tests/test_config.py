"""
Tests for settings loading.
"""

import pytest
from pydantic import ValidationError

from ledgerlens.config import ReportSettings, StorageSettings, get_settings, validate_all_settings


class TestSettings:
    """Tests for environment-driven settings."""

    def test_report_defaults(self, monkeypatch):
        monkeypatch.delenv("REPORT_TREND_THRESHOLD", raising=False)
        settings = ReportSettings()
        assert settings.trend_threshold == 0.20
        assert settings.top_income_categories == 5

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("REPORT_TREND_THRESHOLD", "0.5")
        monkeypatch.setenv("LEDGER_RETRY_ATTEMPTS", "5")
        assert ReportSettings().trend_threshold == 0.5
        assert StorageSettings().retry_attempts == 5

    def test_settings_are_read_on_access(self, monkeypatch):
        """Test that the cached root still reflects the current environment."""
        monkeypatch.setenv("REPORT_TOP_INCOME_CATEGORIES", "3")
        assert get_settings().reports.top_income_categories == 3

    def test_invalid_value_rejected(self, monkeypatch):
        monkeypatch.setenv("LEDGER_RETRY_ATTEMPTS", "0")
        with pytest.raises(ValidationError):
            StorageSettings()

    def test_missing_ledger_file_warns(self, tmp_path):
        with pytest.warns(UserWarning):
            StorageSettings(file_path=str(tmp_path / "nope.ledger"))

    def test_validate_all_settings(self, monkeypatch):
        monkeypatch.setenv("REPORT_TREND_THRESHOLD", "-1")
        results = validate_all_settings()
        assert results["storage"] is True
        assert results["reports"] is False
        assert "reports_error" in results


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
