# tests/common/test_localization.py
"""
Тесты для модуля локализации.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from src.common.localization import (
    FALLBACK_LANGUAGE,
    get_available_languages,
    get_lang_dict_path,
    get_text,
    load_lang_dict,
    resolve_language,
    validate_lang_dict,
)


@pytest.fixture(autouse=True)
def clear_cache():
    """Сбрасывает кэш словаря до и после теста."""
    load_lang_dict.cache_clear()
    yield
    load_lang_dict.cache_clear()


class TestLangDictFile:
    """Тесты файла локализации проекта."""

    def test_path_in_config_directory(self) -> None:
        path = get_lang_dict_path()
        assert path.name == "lang_dict.json"
        assert path.parent.name == "config"

    def test_project_dict_is_complete(self) -> None:
        """Все ключи переведены на все языки."""
        assert validate_lang_dict() == []

    def test_bot_keys_present(self) -> None:
        lang_dict = load_lang_dict()
        for key in ("WELCOME", "HELP_TEXT", "COMMANDS_TEXT", "MAP_BUTTON", "ERROR_GENERIC", "POI_CATEGORY"):
            assert key in lang_dict

    def test_available_languages(self) -> None:
        assert set(get_available_languages()) == {"en", "ru"}


class TestGetText:
    """Тесты для функции get_text."""

    def test_with_temp_dict(self, temp_lang_dict_file: Path) -> None:
        with patch("src.common.localization.get_lang_dict_path", return_value=temp_lang_dict_file):
            assert get_text("WELCOME", "ru") == "Добро пожаловать!"
            assert get_text("GREETING", "en", name="Anna") == "Hello, Anna!"

    def test_unknown_language_uses_fallback(self, temp_lang_dict_file: Path) -> None:
        with patch("src.common.localization.get_lang_dict_path", return_value=temp_lang_dict_file):
            assert get_text("WELCOME", "de") == "Welcome!"

    def test_unknown_key(self, temp_lang_dict_file: Path) -> None:
        with patch("src.common.localization.get_lang_dict_path", return_value=temp_lang_dict_file):
            assert get_text("NOPE") == "[NOPE]"
            assert get_text("NOPE", default="fallback") == "fallback"

    def test_missing_format_key_left_as_is(self, temp_lang_dict_file: Path) -> None:
        with patch("src.common.localization.get_lang_dict_path", return_value=temp_lang_dict_file):
            assert get_text("GREETING", "en", other="x") == "Hello, {name}!"

    def test_missing_file(self, tmp_path: Path) -> None:
        with patch("src.common.localization.get_lang_dict_path", return_value=tmp_path / "none.json"):
            assert get_text("WELCOME") == "[WELCOME]"
            assert get_available_languages() == [FALLBACK_LANGUAGE]


class TestResolveLanguage:
    """Тесты для resolve_language."""

    @pytest.mark.parametrize(
        "code, expected",
        [("ru", "ru"), ("ru-RU", "ru"), ("EN", "en"), ("de", "en"), (None, "en"), ("", "en")],
    )
    def test_resolve(self, code: str | None, expected: str) -> None:
        assert resolve_language(code) == expected
