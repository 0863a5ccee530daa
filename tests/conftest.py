# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest

# Устанавливаем переменные окружения перед импортом модулей
os.environ.setdefault("BOT_TOKEN", "test_bot_token")
os.environ.setdefault("SUPABASE_URL", "")
os.environ.setdefault("SUPABASE_ANON_KEY", "")


# =============================================================================
# ФИКСТУРЫ КОНФИГУРАЦИИ
# =============================================================================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Корневая директория проекта."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def config_path(project_root: Path) -> Path:
    """Путь к файлу конфигурации."""
    return project_root / "config" / "config.json"


@pytest.fixture(scope="session")
def lang_dict_path(project_root: Path) -> Path:
    """Путь к файлу локализации."""
    return project_root / "config" / "lang_dict.json"


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Мок конфигурации для тестов (плоский формат config.json)."""
    return {
        "PROJECT_NAME": "places_miniapp_test",
        "VERSION": "1.0.0-test",
        "DEBUG": True,
        "ENVIRONMENT": "test",
        "COMPONENT_MODE": "api",
        "API_HOST": "127.0.0.1",
        "API_PORT": 3001,
        "WEB_CLIENT_PORT": 8083,
        "API_BASE_URL": "http://localhost:3001",
        "LOG_LEVEL": "DEBUG",
        "LOG_TO_FILE": False,
        "LOG_FORMAT": "colored",
        "BOT_TOKEN": "test_bot_token",
        "FRONTEND_URL": "https://miniapp.example.com",
        "USE_WEBHOOK": False,
        "WEBHOOK_HOST": "https://test.example.com",
        "WEBHOOK_PATH": "/webhook",
        "SUPABASE_URL": "",
        "SUPABASE_ANON_KEY": "",
        "LOCAL_SUPABASE_URL": "http://localhost:8000",
        "LOCAL_SUPABASE_ANON_KEY": "dev-local-noauth",
        "HASH_TELEGRAM_IDS": True,
        "LOCATIONS_AUTO_APPROVE": True,
        "ONE_LOCATION_PER_USER": False,
        "LIST_APPROVED_ONLY": False,
        "DEFAULT_ZOOM": 13,
        "POI_ENABLED": True,
        "POI_CLEAR_ZOOM": 12,
        "POI_ACTIVE_ZOOM": 15,
        "POI_DEBOUNCE_MS": 300,
        "POI_MAX_RESULTS": 50,
    }


@pytest.fixture
def mock_lang_dict() -> dict[str, dict[str, str]]:
    """Мок словаря локализации для тестов."""
    return {
        "WELCOME": {
            "en": "Welcome!",
            "ru": "Добро пожаловать!",
        },
        "GREETING": {
            "en": "Hello, {name}!",
            "ru": "Привет, {name}!",
        },
    }


# =============================================================================
# ФИКСТУРЫ ИНФРАСТРУКТУРЫ (МОКИ)
# =============================================================================

@pytest.fixture
def mock_postgrest() -> AsyncMock:
    """Мок клиента PostgREST."""
    client = AsyncMock()
    client.select = AsyncMock(return_value=[])
    client.select_one = AsyncMock(return_value={})
    client.insert = AsyncMock(return_value={})
    client.update = AsyncMock(return_value={})
    client.upsert = AsyncMock(return_value={})
    client.delete = AsyncMock(return_value=None)
    client.count = AsyncMock(return_value=0)
    client.health_check = AsyncMock(return_value=True)
    return client


# =============================================================================
# ФИКСТУРЫ МОДЕЛЕЙ
# =============================================================================

@pytest.fixture
def sample_user_data() -> dict[str, Any]:
    """Пример строки таблицы users."""
    return {
        "id": 7,
        "telegram_id": "a1b2c3d4e5f60718",
        "nickname": "BraveFox42",
        "avatar_url": None,
        "created_at": datetime(2024, 5, 1, tzinfo=timezone.utc).isoformat(),
    }


@pytest.fixture
def sample_location_data() -> dict[str, Any]:
    """Пример строки таблицы locations."""
    return {
        "id": 11,
        "name": "Markthalle Neun",
        "description": "Крытый рынок",
        "latitude": 52.5023,
        "longitude": 13.4318,
        "category": "grocery",
        "user_id": 7,
        "is_approved": True,
        "type": "permanent",
        "website_url": None,
        "image_url": None,
        "schedules": None,
        "created_at": datetime(2024, 5, 2, tzinfo=timezone.utc).isoformat(),
    }


@pytest.fixture
def sample_comment_data(sample_user_data: dict[str, Any]) -> dict[str, Any]:
    """Пример комментария со встроенным автором."""
    return {
        "id": 3,
        "location_id": 11,
        "user_id": 7,
        "content": "Отличный кофе",
        "image_url": None,
        "is_approved": True,
        "created_at": datetime(2024, 5, 3, tzinfo=timezone.utc).isoformat(),
        "users": {"id": 7, "nickname": sample_user_data["nickname"], "avatar_url": None},
    }


# =============================================================================
# УТИЛИТЫ
# =============================================================================

@pytest.fixture
def temp_config_file(tmp_path: Path, mock_config: dict[str, Any]) -> Path:
    """Создаёт временный файл конфигурации."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(mock_config, ensure_ascii=False, indent=2))
    return config_file


@pytest.fixture
def temp_lang_dict_file(tmp_path: Path, mock_lang_dict: dict[str, dict[str, str]]) -> Path:
    """Создаёт временный файл локализации."""
    lang_file = tmp_path / "lang_dict.json"
    lang_file.write_text(json.dumps(mock_lang_dict, ensure_ascii=False, indent=2))
    return lang_file


# =============================================================================
# ПЛАНИРОВЩИК ДЛЯ ДЕБАУНСА
# =============================================================================

class ManualScheduler:
    """
    Подменяет after / after_cancel.

    Время двигается только через advance(). Отмена лишь записывается:
    если колбэк всё равно будет вызван, его должен отбросить сам таймер.
    """

    def __init__(self, honour_cancel: bool = True) -> None:
        self.now = 0
        self.honour_cancel = honour_cancel
        self._next_id = 0
        self.scheduled: dict[int, tuple[int, Callable[[], None]]] = {}
        self.cancelled: list[int] = []

    def after(self, delay_ms: int, callback: Callable[[], None]) -> int:
        self._next_id += 1
        self.scheduled[self._next_id] = (self.now + delay_ms, callback)
        return self._next_id

    def after_cancel(self, handle: object) -> None:
        self.cancelled.append(handle)
        if self.honour_cancel:
            self.scheduled.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self.scheduled)

    def advance(self, ms: int) -> None:
        """Сдвигает время и выполняет созревшие колбэки в порядке срока."""
        self.now += ms
        due = sorted(
            (fire_at, handle) for handle, (fire_at, _) in self.scheduled.items() if fire_at <= self.now
        )
        for _, handle in due:
            entry = self.scheduled.pop(handle, None)
            if entry is not None:
                entry[1]()


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Планировщик, который честно снимает отменённые колбэки."""
    return ManualScheduler()


@pytest.fixture
def recording_scheduler() -> ManualScheduler:
    """Планировщик, который только записывает отмену и всё равно вызывает колбэк."""
    return ManualScheduler(honour_cancel=False)
