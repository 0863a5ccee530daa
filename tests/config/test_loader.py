# tests/config/test_loader.py
"""
Тесты для модуля загрузки конфигурации.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.config.loader import (
    LoggingSettings,
    PoiSettings,
    Settings,
    SupabaseSettings,
    TelegramSettings,
    get_config_path,
    get_project_root,
    load_config_json,
)


class TestPaths:
    """Тесты путей проекта."""

    def test_root_contains_src_and_config(self) -> None:
        root = get_project_root()
        assert (root / "src").exists()
        assert (root / "config").exists()

    def test_config_path(self) -> None:
        path = get_config_path()
        assert path.name == "config.json"
        assert path.parent.name == "config"


class TestLoadConfigJson:
    """Тесты загрузки config.json."""

    def test_comments_filtered(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"_comment_x": "note", "API_PORT": 3000}))

        with patch("src.config.loader.get_config_path", return_value=config_file):
            data = load_config_json()

        assert data == {"API_PORT": 3000}

    def test_missing_file(self, tmp_path: Path) -> None:
        with patch("src.config.loader.get_config_path", return_value=tmp_path / "none.json"):
            with pytest.raises(FileNotFoundError):
                load_config_json()

    def test_project_config_loads(self) -> None:
        settings = Settings.from_config_json()

        assert settings.poi.POI_CLEAR_ZOOM == 12
        assert settings.poi.POI_ACTIVE_ZOOM == 15
        assert settings.deployment.API_PORT == 3000


class TestSettingsFromDict:
    """Тесты сборки настроек из плоского словаря."""

    def test_sections(self, mock_config: dict[str, Any]) -> None:
        settings = Settings.from_dict(mock_config)

        assert settings.system.PROJECT_NAME == "places_miniapp_test"
        assert settings.deployment.API_PORT == 3001
        assert settings.telegram.FRONTEND_URL == "https://miniapp.example.com"
        assert settings.places.HASH_TELEGRAM_IDS is True
        assert settings.poi.POI_MAX_RESULTS == 50

    def test_env_overrides(self, mock_config: dict[str, Any], monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OVERPASS_URL", "https://overpass.example.com/api")
        monkeypatch.setenv("COMPONENT_MODE", "bot")

        settings = Settings.from_dict(mock_config)

        assert settings.poi.OVERPASS_URL == "https://overpass.example.com/api"
        assert settings.system.COMPONENT_MODE == "bot"

    def test_empty_env_ignored(self, mock_config: dict[str, Any], monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FRONTEND_URL", "")

        settings = Settings.from_dict(mock_config)

        assert settings.telegram.FRONTEND_URL == "https://miniapp.example.com"


class TestSections:
    """Тесты отдельных секций."""

    def test_webhook_url_computed(self) -> None:
        telegram = TelegramSettings(BOT_TOKEN="123:abc", WEBHOOK_HOST="https://bot.example.com")
        assert telegram.WEBHOOK_URL_MAIN == "https://bot.example.com/webhook/123:abc"

    def test_invalid_log_format(self) -> None:
        with pytest.raises(ValidationError):
            LoggingSettings(LOG_FORMAT="xml")

    def test_supabase_fallback(self) -> None:
        supabase = SupabaseSettings()

        assert supabase.using_fallback
        assert supabase.rest_url == "http://localhost:8000/rest/v1"
        assert supabase.send_api_key is False

    def test_supabase_remote(self) -> None:
        supabase = SupabaseSettings(SUPABASE_URL="https://abc.supabase.co/", SUPABASE_ANON_KEY="key")

        assert not supabase.using_fallback
        assert supabase.rest_url == "https://abc.supabase.co/rest/v1"
        assert supabase.key == "key"
        assert supabase.send_api_key is True

    def test_poi_thresholds_order(self) -> None:
        with pytest.raises(ValidationError):
            PoiSettings(POI_CLEAR_ZOOM=16, POI_ACTIVE_ZOOM=15)

    def test_poi_equal_thresholds_allowed(self) -> None:
        poi = PoiSettings(POI_CLEAR_ZOOM=14, POI_ACTIVE_ZOOM=14)
        assert poi.POI_CLEAR_ZOOM == poi.POI_ACTIVE_ZOOM

    def test_negative_debounce(self) -> None:
        with pytest.raises(ValidationError):
            PoiSettings(POI_DEBOUNCE_MS=-5)
