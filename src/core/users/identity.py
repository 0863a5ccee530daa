# src/core/users/identity.py
"""
Хэширование Telegram ID и детерминированные никнеймы.
"""

from __future__ import annotations

import hashlib
import math

ADJECTIVES: tuple[str, ...] = (
    "Happy", "Sunny", "Brave", "Clever", "Swift", "Bright", "Kind", "Wise", "Cool", "Smart",
    "Bold", "Quick", "Calm", "Wild", "Free", "Pure", "True", "Fair", "Warm", "Fresh",
    "Lucky", "Magic", "Noble", "Royal", "Silent", "Strong", "Gentle", "Mystic", "Golden", "Silver",
)

ANIMALS: tuple[str, ...] = (
    "Lion", "Eagle", "Tiger", "Wolf", "Bear", "Fox", "Hawk", "Owl", "Deer", "Rabbit",
    "Panda", "Dolphin", "Whale", "Shark", "Cat", "Dog", "Bird", "Fish", "Bee", "Butterfly",
    "Dragon", "Phoenix", "Unicorn", "Falcon", "Raven", "Swan", "Turtle", "Penguin", "Koala", "Seal",
)

HASH_LENGTH = 16


def hash_telegram_id(telegram_id: int | str) -> str:
    """Первые 16 символов sha256 от Telegram ID."""
    digest = hashlib.sha256(str(telegram_id).encode("utf-8")).hexdigest()
    return digest[:HASH_LENGTH]


def _seeded_random(seed: int) -> float:
    x = math.sin(seed) * 10000
    return x - math.floor(x)


def generate_nickname(hashed_id: str) -> str:
    """
    Никнейм вида AdjectiveAnimalNN.
    Один и тот же хэш всегда даёт один и тот же никнейм.
    """
    seed = int(hashed_id[:8], 16)
    adjective = ADJECTIVES[math.floor(_seeded_random(seed) * len(ADJECTIVES))]
    animal = ANIMALS[math.floor(_seeded_random(seed + 1) * len(ANIMALS))]
    number = math.floor(_seeded_random(seed + 2) * 100)
    return f"{adjective}{animal}{number:02d}"
