"""
User Preferences
v1.0.0

Flat key-value settings stored in a JSON file. Also holds the two
achievement counters (app opens, unlocked achievement ids).

Integer settings follow the platform defaults-store rule: a missing key
or a stored 0 reads back as the default (except the notification hour,
where 0 means midnight).
"""
import json
import os
from typing import Any, Dict, List, Optional

from config import (
  DEFAULT_CACHE_EXPIRATION_MINUTES, DEFAULT_ITEMS_PER_PAGE,
  DEFAULT_NOTIFICATION_HOUR, DEFAULT_THEME,
  CACHE_EXPIRATION_OPTIONS, ITEMS_PER_PAGE_OPTIONS, THEMES,
)
from schema import (
  Settings,
  CACHE_EXPIRATION_KEY, ITEMS_PER_PAGE_KEY, DAILY_NOTIFICATIONS_KEY,
  NOTIFICATION_HOUR_KEY, THEME_KEY, APP_OPEN_COUNT_KEY,
  UNLOCKED_ACHIEVEMENTS_KEY,
)


class Preferences:
  """Key-value store backed by a JSON file"""

  def __init__(self, path: str = "preferences.json"):
    self.path = path
    self._cache: Optional[Dict[str, Any]] = None

  # ============================================
  # Storage
  # ============================================

  def _load(self) -> Dict[str, Any]:
    """Load preferences from JSON file"""
    if self._cache is not None:
      return self._cache

    if os.path.exists(self.path):
      try:
        with open(self.path, 'r') as f:
          data = json.load(f)
        if isinstance(data, dict):
          self._cache = data
          return data
        print(f"⚠️ Preferences file {self.path} is not an object - starting empty")
      except (OSError, json.JSONDecodeError) as e:
        print(f"⚠️ Error loading preferences: {e}")

    self._cache = {}
    return self._cache

  def _save(self, data: Dict[str, Any]) -> bool:
    """Save preferences to JSON file. The cache only changes once the write succeeds."""
    try:
      with open(self.path, 'w') as f:
        json.dump(data, f, indent=2)
    except OSError as e:
      print(f"⚠️ Error saving preferences: {e}")
      return False

    self._cache = data
    return True

  def get(self, key: str, default: Any = None) -> Any:
    return self._load().get(key, default)

  def set(self, key: str, value: Any) -> bool:
    data = dict(self._load())
    data[key] = value
    return self._save(data)

  def remove(self, key: str) -> bool:
    data = dict(self._load())
    if key not in data:
      return True
    del data[key]
    return self._save(data)

  def _get_int(self, key: str, default: int) -> int:
    value = self.get(key)
    try:
      value = int(value)
    except (TypeError, ValueError):
      return default
    return value if value > 0 else default

  # ============================================
  # Settings
  # ============================================

  @property
  def cache_expiration_minutes(self) -> int:
    return self._get_int(CACHE_EXPIRATION_KEY, DEFAULT_CACHE_EXPIRATION_MINUTES)

  def set_cache_expiration_minutes(self, minutes: int) -> bool:
    if minutes not in CACHE_EXPIRATION_OPTIONS:
      raise ValueError(f"Cache expiration must be one of {CACHE_EXPIRATION_OPTIONS}, got {minutes}")
    return self.set(CACHE_EXPIRATION_KEY, minutes)

  @property
  def items_per_page(self) -> int:
    return self._get_int(ITEMS_PER_PAGE_KEY, DEFAULT_ITEMS_PER_PAGE)

  def set_items_per_page(self, items: int) -> bool:
    if items not in ITEMS_PER_PAGE_OPTIONS:
      raise ValueError(f"Items per page must be one of {ITEMS_PER_PAGE_OPTIONS}, got {items}")
    return self.set(ITEMS_PER_PAGE_KEY, items)

  @property
  def daily_notifications_enabled(self) -> bool:
    return bool(self.get(DAILY_NOTIFICATIONS_KEY, False))

  def set_daily_notifications_enabled(self, enabled: bool) -> bool:
    return self.set(DAILY_NOTIFICATIONS_KEY, bool(enabled))

  @property
  def notification_hour(self) -> int:
    # Midnight is a valid choice, so 0 is not treated as unset here
    value = self.get(NOTIFICATION_HOUR_KEY)
    if isinstance(value, int) and 0 <= value <= 23:
      return value
    return DEFAULT_NOTIFICATION_HOUR

  def set_notification_hour(self, hour: int) -> bool:
    if not 0 <= hour <= 23:
      raise ValueError(f"Notification hour must be between 0 and 23, got {hour}")
    return self.set(NOTIFICATION_HOUR_KEY, hour)

  @property
  def theme(self) -> str:
    value = self.get(THEME_KEY)
    return value if value in THEMES else DEFAULT_THEME

  def set_theme(self, theme: str) -> bool:
    if theme not in THEMES:
      raise ValueError(f"Theme must be one of {THEMES}, got {theme!r}")
    return self.set(THEME_KEY, theme)

  def settings(self) -> Settings:
    """Snapshot of all user-facing settings"""
    return Settings(
      cache_expiration_minutes=self.cache_expiration_minutes,
      items_per_page=self.items_per_page,
      daily_notifications_enabled=self.daily_notifications_enabled,
      notification_hour=self.notification_hour,
      theme=self.theme,
    )

  def update_setting(self, key: str, raw_value: str) -> bool:
    """
    Set a user-facing setting from its text form (CLI input).
    Raises ValueError for unknown keys or invalid values.
    """
    if key == CACHE_EXPIRATION_KEY:
      return self.set_cache_expiration_minutes(_parse_int(key, raw_value))
    if key == ITEMS_PER_PAGE_KEY:
      return self.set_items_per_page(_parse_int(key, raw_value))
    if key == NOTIFICATION_HOUR_KEY:
      return self.set_notification_hour(_parse_int(key, raw_value))
    if key == DAILY_NOTIFICATIONS_KEY:
      return self.set_daily_notifications_enabled(_parse_bool(key, raw_value))
    if key == THEME_KEY:
      return self.set_theme(raw_value)
    raise ValueError(f"Unknown setting: {key}")

  # ============================================
  # Achievement Counters
  # ============================================

  @property
  def app_open_count(self) -> int:
    value = self.get(APP_OPEN_COUNT_KEY, 0)
    return value if isinstance(value, int) and value > 0 else 0

  def set_app_open_count(self, count: int) -> bool:
    return self.set(APP_OPEN_COUNT_KEY, count)

  @property
  def unlocked_achievements(self) -> List[int]:
    value = self.get(UNLOCKED_ACHIEVEMENTS_KEY, [])
    if not isinstance(value, list):
      return []
    return [v for v in value if isinstance(v, int)]

  def set_unlocked_achievements(self, ids: List[int]) -> bool:
    return self.set(UNLOCKED_ACHIEVEMENTS_KEY, list(ids))


def _parse_int(key: str, raw_value: str) -> int:
  try:
    return int(raw_value)
  except ValueError:
    raise ValueError(f"{key} expects a whole number, got {raw_value!r}") from None


def _parse_bool(key: str, raw_value: str) -> bool:
  value = raw_value.strip().lower()
  if value in ("1", "true", "yes", "on"):
    return True
  if value in ("0", "false", "no", "off"):
    return False
  raise ValueError(f"{key} expects true/false, got {raw_value!r}")
