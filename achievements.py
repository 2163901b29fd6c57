"""
Achievement tracking for pet finder
v1.0.0

Tracks two counters (app opens, followed animals) and unlocks the fixed
achievements once a counter reaches the required value. Unlocking is
idempotent: each achievement notifies once and is stored once.
"""
from typing import Dict, List, Set

from config import ACHIEVEMENT_NOTIFICATION_TITLE
from schema import Achievement, AchievementType, MetricSource, APP_OPEN_COUNT_KEY


class UnlockedAchievements:
  """Persisted set of unlocked achievement ids"""

  def __init__(self, preferences):
    self.preferences = preferences

  def ids(self) -> Set[int]:
    return set(self.preferences.unlocked_achievements)

  def __contains__(self, achievement_id: int) -> bool:
    return int(achievement_id) in self.ids()

  def __len__(self) -> int:
    return len(self.ids())

  def add(self, achievement_id: int) -> bool:
    """Add an id. False if it was already present or couldn't be saved."""
    stored = self.preferences.unlocked_achievements
    if int(achievement_id) in stored:
      return False
    return self.preferences.set_unlocked_achievements(stored + [int(achievement_id)])

  def clear(self) -> bool:
    return self.preferences.set_unlocked_achievements([])


class AchievementManager:
  """
  Evaluates achievements against the current counters.

  Dependencies are passed in: the local store (followed count), the
  preferences (app opens, unlocked set) and the notification service.
  """

  def __init__(self, dal, preferences, notifications):
    self.dal = dal
    self.preferences = preferences
    self.notifications = notifications
    self.unlocked = UnlockedAchievements(preferences)

  # ============================================
  # Metrics
  # ============================================

  def record_app_open(self) -> int:
    """Count one app launch, then check the visit achievements"""
    new_count = self.preferences.app_open_count + 1
    self.preferences.set_app_open_count(new_count)
    print(f"📱 App opened {new_count} times")

    self._evaluate(MetricSource.VISITS, new_count)
    return new_count

  def evaluate_following_achievements(self) -> List[AchievementType]:
    """Check the following achievements against the store's count"""
    following_count = self.dal.count_following()
    print(f"❤️ Animals followed: {following_count}")
    return self._evaluate(MetricSource.FOLLOWING, following_count)

  def _evaluate(self, metric: MetricSource, current: int) -> List[AchievementType]:
    # Every threshold is checked on its own, all that qualify unlock together
    newly_unlocked = []
    for achievement in AchievementType.for_metric(metric):
      if current >= achievement.required_value and self.unlock(achievement):
        newly_unlocked.append(achievement)
    return newly_unlocked

  def current_value(self, achievement: AchievementType) -> int:
    if achievement.metric == MetricSource.FOLLOWING:
      return self.dal.count_following()
    return self.preferences.app_open_count

  # ============================================
  # Unlocking
  # ============================================

  def unlock(self, achievement_id: int) -> bool:
    """
    Unlock an achievement if it isn't already.
    Returns True only when it was newly unlocked.
    """
    achievement = AchievementType(achievement_id)
    if achievement.value in self.unlocked:
      return False

    if not self.unlocked.add(achievement.value):
      print(f"⚠️ Could not save achievement: {achievement.title}")
      return False

    print(f"🏆 Achievement unlocked: {achievement.title}")
    self.notifications.notify_now(
      identifier=f"achievement_{achievement.value}",
      title=ACHIEVEMENT_NOTIFICATION_TITLE,
      body=f"{achievement.title} - {achievement.description}",
    )
    return True

  def is_unlocked(self, achievement_id: int) -> bool:
    return achievement_id in self.unlocked

  def unlocked_ids(self) -> Set[int]:
    return self.unlocked.ids()

  # ============================================
  # Display
  # ============================================

  def progress(self, achievement_id: int) -> float:
    """Progress towards an achievement, 0 to 100"""
    achievement = AchievementType(achievement_id)
    current = max(self.current_value(achievement), 0)
    ratio = min(current / achievement.required_value, 1.0)
    return ratio * 100

  def all_achievements(self) -> List[Achievement]:
    unlocked = self.unlocked_ids()
    return [
      Achievement(
        id=a.value,
        title=a.title,
        description=a.description,
        icon=a.icon,
        is_unlocked=a.value in unlocked,
        progress=self.progress(a.value),
      )
      for a in AchievementType
    ]

  def user_stats(self) -> Dict[str, int]:
    return {
      "following_count": self.dal.count_following(),
      "visit_count": self.preferences.app_open_count,
      "achievements_unlocked": len(self.unlocked),
    }

  def reset_all(self):
    """Clear unlocked achievements and the app-open counter"""
    self.unlocked.clear()
    self.preferences.remove(APP_OPEN_COUNT_KEY)
    print("🔄 All achievements have been reset")
