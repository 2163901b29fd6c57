"""
Notification Request Schema
v1.0.0

A local notification waiting to be delivered. Requests are keyed by
identifier: adding one with an existing identifier replaces it.
"""
from dataclasses import dataclass, asdict
from typing import Optional, Dict
from datetime import datetime, timedelta
from enum import Enum


class TriggerType(str, Enum):
  """When a request fires"""
  IMMEDIATE = "immediate"  # One-shot, due right away
  DAILY = "daily"          # Repeats every day at hour:minute


@dataclass
class NotificationRequest:
  identifier: str
  title: str
  body: str
  trigger_type: str = TriggerType.IMMEDIATE.value
  hour: Optional[int] = None
  minute: Optional[int] = None
  repeats: bool = False
  fire_at: Optional[str] = None       # Next delivery time, ISO format
  delivered_at: Optional[str] = None  # Last delivery time, ISO format
  created_at: Optional[str] = None

  def is_due(self, now: datetime) -> bool:
    if not self.fire_at:
      return False
    return datetime.fromisoformat(self.fire_at) <= now

  def to_dict(self) -> Dict:
    return asdict(self)

  @classmethod
  def from_row(cls, row: Dict) -> "NotificationRequest":
    valid_fields = {k: v for k, v in row.items() if k in cls.__dataclass_fields__}
    request = cls(**valid_fields)
    request.repeats = bool(request.repeats)
    return request


def next_daily_fire_time(hour: int, minute: int, now: datetime) -> datetime:
  """Next occurrence of hour:minute strictly after `now`"""
  candidate = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
  if candidate <= now:
    candidate += timedelta(days=1)
  return candidate
