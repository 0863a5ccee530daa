# src/config/loader.py
"""
Загрузчик конфигурации проекта.
Единственный источник истины: config/config.json.
Секретные данные переопределяются из переменных окружения (.env).
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# ОПРЕДЕЛЕНИЕ ПУТЕЙ
# =============================================================================

def get_project_root() -> Path:
    """Возвращает корневую директорию проекта."""
    return Path(__file__).parent.parent.parent


def get_config_path() -> Path:
    """Возвращает путь к файлу конфигурации."""
    return get_project_root() / "config" / "config.json"


def load_config_json() -> dict[str, Any]:
    """Загружает config.json и возвращает словарь без служебных ключей _comment_*."""
    config_path = get_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Файл конфигурации не найден: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    return {k: v for k, v in data.items() if not k.startswith("_comment_")}


# =============================================================================
# PYDANTIC МОДЕЛИ КОНФИГУРАЦИИ
# =============================================================================

class SystemSettings(BaseModel):
    """Системные настройки."""
    PROJECT_NAME: str = "places_miniapp"
    VERSION: str = "1.0.0"
    DEBUG: bool = True
    ENVIRONMENT: str = "development"
    COMPONENT_MODE: str = "all"


class DeploymentSettings(BaseModel):
    """Порты и адреса компонентов."""
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3000
    WEB_CLIENT_HOST: str = "0.0.0.0"
    WEB_CLIENT_PORT: int = 8082
    API_BASE_URL: str = "http://localhost:3000"
    CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])


class LoggingSettings(BaseModel):
    """Настройки логирования."""
    LOG_LEVEL: str = "DEBUG"
    LOG_TO_FILE: bool = False
    LOG_FILE_PATH: str = "logs/app.log"
    LOG_FORMAT: str = "colored"
    LOG_MAX_BYTES: int = 10485760
    LOG_BACKUP_COUNT: int = 5

    @field_validator("LOG_FORMAT")
    @classmethod
    def check_format(cls, v: str) -> str:
        """Допустимы только форматы json и colored."""
        if v not in ("json", "colored"):
            raise ValueError(f"Неизвестный формат логов: {v}")
        return v


class TelegramSettings(BaseModel):
    """Настройки Telegram бота и Mini App."""
    BOT_TOKEN: str = ""
    FRONTEND_URL: str = ""
    USE_WEBHOOK: bool = False
    WEBHOOK_HOST: str = "https://example.com"
    WEBHOOK_PATH: str = "/webhook"
    WEBHOOK_URL_MAIN: str | None = None
    WEBHOOK_SECRET: str | None = None
    WEBAPP_HOST: str = "0.0.0.0"
    WEBAPP_PORT: int = 8000

    @model_validator(mode="after")
    def compute_webhook_url(self) -> "TelegramSettings":
        """Вычисляет URL вебхука, если он не задан."""
        if not self.WEBHOOK_URL_MAIN and self.BOT_TOKEN and self.WEBHOOK_HOST:
            self.WEBHOOK_URL_MAIN = f"{self.WEBHOOK_HOST}{self.WEBHOOK_PATH}/{self.BOT_TOKEN}"
        return self


class SupabaseSettings(BaseModel):
    """
    Настройки Supabase / PostgREST.

    Если SUPABASE_URL или SUPABASE_ANON_KEY не заданы, используется
    локальный PostgREST-прокси из docker-compose.
    """
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""
    LOCAL_SUPABASE_URL: str = "http://localhost:8000"
    LOCAL_SUPABASE_ANON_KEY: str = "dev-local-noauth"
    REQUEST_TIMEOUT: float = 10.0

    @property
    def using_fallback(self) -> bool:
        """Используется ли локальный прокси вместо Supabase."""
        return not self.SUPABASE_URL or not self.SUPABASE_ANON_KEY

    @property
    def url(self) -> str:
        """Базовый URL сервиса."""
        url = self.LOCAL_SUPABASE_URL if self.using_fallback else self.SUPABASE_URL
        return url.rstrip("/")

    @property
    def key(self) -> str:
        """Anon-ключ сервиса."""
        return self.LOCAL_SUPABASE_ANON_KEY if self.using_fallback else self.SUPABASE_ANON_KEY

    @property
    def rest_url(self) -> str:
        """URL REST API (PostgREST)."""
        return f"{self.url}/rest/v1"

    @property
    def send_api_key(self) -> bool:
        """Локальный PostgREST без авторизации, заголовок apikey не отправляем."""
        return "localhost" not in self.url and "proxy" not in self.url


class PlacesSettings(BaseModel):
    """Правила работы с местами и пользователями."""
    HASH_TELEGRAM_IDS: bool = True
    LOCATIONS_AUTO_APPROVE: bool = True
    ONE_LOCATION_PER_USER: bool = False
    LIST_APPROVED_ONLY: bool = False


class MapSettings(BaseModel):
    """Настройки карты в клиенте."""
    DEFAULT_CENTER_LAT: float = 52.52
    DEFAULT_CENTER_LON: float = 13.405
    DEFAULT_ZOOM: int = 13
    LOCATIONS_MIN_ZOOM: int = 11


class PoiSettings(BaseModel):
    """Слой сторонних POI (OpenStreetMap / Overpass)."""
    POI_ENABLED: bool = True
    POI_CLEAR_ZOOM: float = 12
    POI_ACTIVE_ZOOM: float = 15
    POI_DEBOUNCE_MS: int = 300
    POI_MAX_RESULTS: int = 200
    OVERPASS_URL: str = "https://overpass-api.de/api/interpreter"
    OVERPASS_TIMEOUT: float = 25.0

    @field_validator("POI_DEBOUNCE_MS")
    @classmethod
    def check_debounce(cls, v: int) -> int:
        """Интервал тишины не может быть отрицательным."""
        if v < 0:
            raise ValueError("POI_DEBOUNCE_MS не может быть отрицательным")
        return v

    @model_validator(mode="after")
    def check_thresholds(self) -> "PoiSettings":
        """Порог очистки не может быть выше порога загрузки."""
        if self.POI_CLEAR_ZOOM > self.POI_ACTIVE_ZOOM:
            raise ValueError(
                f"POI_CLEAR_ZOOM ({self.POI_CLEAR_ZOOM}) > POI_ACTIVE_ZOOM ({self.POI_ACTIVE_ZOOM})"
            )
        return self


# Переменные окружения, которые перекрывают значения из config.json
ENV_OVERRIDES: tuple[str, ...] = (
    "COMPONENT_MODE",
    "LOG_LEVEL",
    "BOT_TOKEN",
    "FRONTEND_URL",
    "WEBHOOK_SECRET",
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "LOCAL_SUPABASE_URL",
    "LOCAL_SUPABASE_ANON_KEY",
    "API_BASE_URL",
    "OVERPASS_URL",
)


def _section(model: type[BaseModel], data: dict[str, Any]) -> BaseModel:
    """
    Собирает секцию настроек из плоского словаря конфига.
    Берутся только поля, объявленные в модели.
    """
    values = {name: data[name] for name in model.model_fields if name in data}
    return model(**values)


# =============================================================================
# ГЛАВНЫЙ КЛАСС НАСТРОЕК
# =============================================================================

class Settings(BaseSettings):
    """
    Главный класс настроек приложения.
    Агрегирует все секции конфигурации.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    system: SystemSettings = Field(default_factory=SystemSettings)
    deployment: DeploymentSettings = Field(default_factory=DeploymentSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    telegram: TelegramSettings = Field(default_factory=TelegramSettings)
    supabase: SupabaseSettings = Field(default_factory=SupabaseSettings)
    places: PlacesSettings = Field(default_factory=PlacesSettings)
    map: MapSettings = Field(default_factory=MapSettings)
    poi: PoiSettings = Field(default_factory=PoiSettings)

    @classmethod
    def from_dict(cls, config_data: dict[str, Any]) -> "Settings":
        """
        Создаёт Settings из плоского словаря (формат config.json).
        Значения из ENV_OVERRIDES перекрываются переменными окружения.
        """
        data = dict(config_data)
        for key in ENV_OVERRIDES:
            env_value = os.getenv(key)
            if env_value:
                data[key] = env_value

        return cls(
            system=_section(SystemSettings, data),
            deployment=_section(DeploymentSettings, data),
            logging=_section(LoggingSettings, data),
            telegram=_section(TelegramSettings, data),
            supabase=_section(SupabaseSettings, data),
            places=_section(PlacesSettings, data),
            map=_section(MapSettings, data),
            poi=_section(PoiSettings, data),
        )

    @classmethod
    def from_config_json(cls) -> "Settings":
        """
        Создаёт объект Settings из config.json.
        Секреты переопределяются из переменных окружения.
        """
        return cls.from_dict(load_config_json())


@lru_cache()
def get_settings() -> Settings:
    """
    Возвращает синглтон настроек приложения.
    Использует кэширование для производительности.
    """
    from dotenv import load_dotenv

    env_path = get_project_root() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return Settings.from_config_json()


# Экспорт синглтона для удобного импорта
settings = get_settings()
