# src/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class LocationCategory(str, Enum):
    """Категории мест, которые добавляют пользователи."""
    GROCERY = "grocery"
    RESTAURANT_BAR = "restaurant-bar"
    OTHER = "other"


class LocationType(str, Enum):
    """Тип места."""
    PERMANENT = "permanent"
    TEMPORARY = "temporary"


class ZoomBand(str, Enum):
    """
    Диапазон масштаба карты для слоя POI.

    CLEARED: POI не загружаются и не отображаются.
    HELD: новые POI не загружаются, уже загруженные остаются.
    ACTIVE: загрузка и отображение разрешены.
    """
    CLEARED = "cleared"
    HELD = "held"
    ACTIVE = "active"


# Ограничения рейтинга (звёзды)
MIN_RATING_STARS = 1
MAX_RATING_STARS = 5

# Псевдокатегория фильтра "Все"
CATEGORY_FILTER_ALL = "all"

# Коды ошибок PostgREST / PostgreSQL
PGRST_NO_ROWS = "PGRST116"
PG_FOREIGN_KEY_VIOLATION = "23503"
PG_UNIQUE_VIOLATION = "23505"
