"""
Schema Package
v1.0.0

Contains all data models and schemas for Pet Finder.

Modules:
- animal_schema: Animal record and the remote API payload
- achievement_schema: Fixed achievement definitions
- notification_schema: Local notification requests
- settings_schema: Preference keys and the settings snapshot
"""

from .animal_schema import (
  Animal,
  RemoteAnimal,
  APIResponse,
  get_current_timestamp,
)

from .achievement_schema import (
  Achievement,
  AchievementType,
  MetricSource,
)

from .notification_schema import (
  NotificationRequest,
  TriggerType,
  next_daily_fire_time,
)

from .settings_schema import (
  Settings,
  CACHE_EXPIRATION_KEY,
  ITEMS_PER_PAGE_KEY,
  DAILY_NOTIFICATIONS_KEY,
  NOTIFICATION_HOUR_KEY,
  THEME_KEY,
  APP_OPEN_COUNT_KEY,
  UNLOCKED_ACHIEVEMENTS_KEY,
)

__all__ = [
  # Animals
  'Animal',
  'RemoteAnimal',
  'APIResponse',
  'get_current_timestamp',

  # Achievements
  'Achievement',
  'AchievementType',
  'MetricSource',

  # Notifications
  'NotificationRequest',
  'TriggerType',
  'next_daily_fire_time',

  # Settings
  'Settings',
  'CACHE_EXPIRATION_KEY',
  'ITEMS_PER_PAGE_KEY',
  'DAILY_NOTIFICATIONS_KEY',
  'NOTIFICATION_HOUR_KEY',
  'THEME_KEY',
  'APP_OPEN_COUNT_KEY',
  'UNLOCKED_ACHIEVEMENTS_KEY',
]
