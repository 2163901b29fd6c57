"""
Achievement Schema
v1.0.0

Fixed achievement definitions. Each one is unlocked once its metric
(followed animals or app opens) reaches the required value.
"""
from dataclasses import dataclass, asdict
from typing import Dict, List
from enum import Enum


class MetricSource(str, Enum):
  """Counter an achievement is measured against"""
  FOLLOWING = "following_count"
  VISITS = "visit_count"


# id: (key, title, description, icon, metric, required)
_DEFINITIONS = {
  1: ("first_follow", "First Step", "Follow your first animal", "star.fill", MetricSource.FOLLOWING, 1),
  2: ("collector", "Collector", "Follow 5 animals", "heart.circle.fill", MetricSource.FOLLOWING, 5),
  3: ("protector", "Protector", "Follow 10 animals", "shield.fill", MetricSource.FOLLOWING, 10),
  4: ("champion", "Champion", "Follow 25 animals", "crown.fill", MetricSource.FOLLOWING, 25),
  5: ("visitor", "Visitor", "Open the app 5 times", "eye.fill", MetricSource.VISITS, 5),
  6: ("explorer", "Explorer", "Open the app 20 times", "map.fill", MetricSource.VISITS, 20),
}


class AchievementType(int, Enum):
  """The six achievements, valued by their persisted identifier"""
  FIRST_FOLLOW = 1
  COLLECTOR = 2
  PROTECTOR = 3
  CHAMPION = 4
  VISITOR = 5
  EXPLORER = 6

  @property
  def key(self) -> str:
    return _DEFINITIONS[self.value][0]

  @property
  def title(self) -> str:
    return _DEFINITIONS[self.value][1]

  @property
  def description(self) -> str:
    return _DEFINITIONS[self.value][2]

  @property
  def icon(self) -> str:
    return _DEFINITIONS[self.value][3]

  @property
  def metric(self) -> MetricSource:
    return _DEFINITIONS[self.value][4]

  @property
  def required_value(self) -> int:
    return _DEFINITIONS[self.value][5]

  @classmethod
  def for_metric(cls, metric: MetricSource) -> List["AchievementType"]:
    """Achievements measured by `metric`, ascending by requirement"""
    matching = [a for a in cls if a.metric == metric]
    return sorted(matching, key=lambda a: a.required_value)


@dataclass
class Achievement:
  """An achievement with its current state, for display"""
  id: int
  title: str
  description: str
  icon: str
  is_unlocked: bool
  progress: float = 0.0  # 0-100

  def to_dict(self) -> Dict:
    return asdict(self)
