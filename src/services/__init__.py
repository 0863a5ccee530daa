# src/services/__init__.py
"""
HTTP сервисы приложения.

Сервисы:
- places_api: REST API для Mini App (пользователи, места, избранное,
  комментарии, оценки, прокси POI)
"""

__all__: list[str] = []
