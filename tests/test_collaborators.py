"""Tests for translator, layout, notification sinks and settings."""

import pytest
from rich.console import Console

from campaign_console.config import ConsoleSettings
from campaign_console.i18n import CatalogTranslator
from campaign_console.layout import ViewportLayout
from campaign_console.notifications import (
    ConsoleNotificationSink,
    InMemoryNotificationSink,
    Severity,
)


class TestCatalogTranslator:
    """String lookup and interpolation."""

    def test_known_key(self, translator):
        assert translator.t("campaign_deleted") == "Campaign deleted"

    def test_interpolation(self, translator):
        assert translator.t("delete_name", name="Summer") == "Delete Summer?"

    def test_missing_param_left_in_place(self, translator):
        assert translator.t("delete_name") == "Delete {{name}}?"

    def test_unknown_key_returns_key(self, translator):
        assert translator.t("does_not_exist") == "does_not_exist"

    def test_locale_falls_back_to_english(self):
        translator = CatalogTranslator(
            locale="de",
            catalogs={"de": {"new": "Neu"}, "en": {"new": "New", "campaigns": "Campaigns"}},
        )

        assert translator.t("new") == "Neu"
        assert translator.t("campaigns") == "Campaigns"


class TestViewportLayout:
    """Breakpoint checks."""

    @pytest.mark.parametrize("width,expected", [(375, True), (599, True), (600, False), (1280, False)])
    def test_sm_breakpoint(self, width, expected):
        assert ViewportLayout(width).is_mobile("sm") is expected

    def test_md_breakpoint(self):
        assert ViewportLayout(800).is_mobile("md") is True

    def test_unknown_breakpoint(self):
        with pytest.raises(ValueError, match="Unknown breakpoint"):
            ViewportLayout(800).is_mobile("xxl")


class TestNotificationSinks:
    """Toast targets."""

    def test_in_memory_records_in_order(self):
        sink = InMemoryNotificationSink()

        sink.notify("saved", Severity.SUCCESS)
        sink.notify("failed", Severity.ERROR)

        assert [n.message for n in sink.notifications] == ["saved", "failed"]
        assert [n.message for n in sink.of(Severity.ERROR)] == ["failed"]
        assert sink.last.severity == Severity.ERROR

    def test_console_sink_prints(self):
        console = Console(record=True, width=80)

        ConsoleNotificationSink(console).notify("Campaign deleted", Severity.SUCCESS)

        assert "Campaign deleted" in console.export_text()


class TestConsoleSettings:
    """Environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CAMPAIGN_CONSOLE_API_BASE_URL", raising=False)

        settings = ConsoleSettings(_env_file=None)

        assert settings.campaigns_endpoint == "/api/campaigns"
        assert settings.mobile_breakpoint == "sm"
        assert settings.cache_max_entries == 50

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("CAMPAIGN_CONSOLE_API_BASE_URL", "https://campaigns.example")
        monkeypatch.setenv("CAMPAIGN_CONSOLE_LOG_LEVEL", "debug")

        settings = ConsoleSettings(_env_file=None)

        assert settings.api_base_url == "https://campaigns.example"
        assert settings.log_level == "DEBUG"

    def test_endpoint_normalized(self):
        settings = ConsoleSettings(_env_file=None, campaigns_endpoint="api/campaigns/")

        assert settings.campaigns_endpoint == "/api/campaigns"
