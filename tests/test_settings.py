"""Tests for SettingsService defaults and persistence."""

import json

from llmdesk.config import AppSettings, SettingsService
from llmdesk.providers import ProviderStore


class TestSettingsService:
    def test_defaults_without_file(self, store):
        service = SettingsService(store)
        assert service.get_theme() == "dark"
        assert service.get_crash_reporting() is True
        assert service.get_settings().follow_system_theme is False

    def test_loads_saved_settings(self, store):
        store.save_settings(AppSettings(theme="light"))
        assert SettingsService(store).get_theme() == "light"

    def test_set_theme_persists(self, store, secrets):
        SettingsService(store).set_theme("light")
        reloaded = SettingsService(ProviderStore(store.data_dir, secrets))
        assert reloaded.get_theme() == "light"

    def test_unknown_theme_becomes_dark(self, store):
        service = SettingsService(store)
        service.set_theme("light")
        service.set_theme("solarized")
        assert service.get_theme() == "dark"
        assert store.load_settings().theme == "dark"

    def test_toggles_persist(self, store):
        service = SettingsService(store)
        service.set_crash_reporting(False)
        service.set_follow_system_theme(True)
        doc = json.loads(store.settings_path.read_text(encoding="utf-8"))
        assert doc["enableCrashReporting"] is False
        assert doc["followSystemTheme"] is True

    def test_corrupt_file_keeps_defaults(self, store, tmp_path):
        (tmp_path / "settings.json").write_text("{", encoding="utf-8")
        assert SettingsService(store).get_theme() == "dark"

    def test_get_settings_returns_copy(self, store):
        service = SettingsService(store)
        service.get_settings().theme = "light"
        assert service.get_theme() == "dark"
