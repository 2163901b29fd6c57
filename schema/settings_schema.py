"""
Settings Schema
v1.0.0

Snapshot of the user's settings, read from the preferences file.
The preferences file itself is a flat key-value object; these are the
keys the app reads and the values each one accepts.
"""
from dataclasses import dataclass, asdict
from typing import Dict

from config import (
  DEFAULT_CACHE_EXPIRATION_MINUTES, DEFAULT_ITEMS_PER_PAGE,
  DEFAULT_NOTIFICATION_HOUR, DEFAULT_THEME,
)


# Preference keys
CACHE_EXPIRATION_KEY = "cache_expiration_minutes"
ITEMS_PER_PAGE_KEY = "items_per_page"
DAILY_NOTIFICATIONS_KEY = "daily_notifications_enabled"
NOTIFICATION_HOUR_KEY = "notification_hour"
THEME_KEY = "theme"
APP_OPEN_COUNT_KEY = "app_open_count"
UNLOCKED_ACHIEVEMENTS_KEY = "unlocked_achievements"


@dataclass
class Settings:
  """
  User-facing settings.

  cache_expiration_minutes is stored and shown but nothing evicts
  records by age.
  """
  cache_expiration_minutes: int = DEFAULT_CACHE_EXPIRATION_MINUTES
  items_per_page: int = DEFAULT_ITEMS_PER_PAGE
  daily_notifications_enabled: bool = False
  notification_hour: int = DEFAULT_NOTIFICATION_HOUR
  theme: str = DEFAULT_THEME

  def to_dict(self) -> Dict:
    return asdict(self)

  @classmethod
  def from_dict(cls, data: Dict) -> "Settings":
    if not data:
      return cls()
    return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
