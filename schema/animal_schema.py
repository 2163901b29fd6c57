"""
Animal Schema
v1.0.0

Single source of truth for the animal record and the remote API payload.

Design Principles:
- Animal is what the local store holds; RemoteAnimal is what the API sends
- Every remote field is optional, the API is not trusted to be complete
- Stored records are never refreshed from the API once created
"""
import re
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any
from datetime import datetime

from config import LABELS

# SQLite INTEGER is a signed 64-bit value
MIN_PET_ID = -2**63
MAX_PET_ID = 2**63 - 1
PET_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass
class Animal:
  """
  An adoptable animal as stored locally.

  `id` is the stable external identifier (seed id or API pet_id).
  """
  id: int
  name: str
  species: str = ""
  breed: str = ""
  gender: str = ""
  age: str = ""                        # Free text, e.g. "2 years"
  description: Optional[str] = None
  photo_url: Optional[str] = None
  location: Optional[str] = None
  saved_at: Optional[str] = None       # ISO timestamp, set once at creation
  is_following: bool = False

  @property
  def image_url(self) -> Optional[str]:
    """Photo URL, or None when empty"""
    if not self.photo_url:
      return None
    return self.photo_url

  @property
  def location_display(self) -> str:
    return self.location or LABELS["unknown_location"]

  @property
  def summary_line(self) -> str:
    """List-row text: breed and age"""
    parts = [p for p in (self.breed, self.age) if p]
    if not parts:
      return LABELS["no_details"]
    return " • ".join(parts)

  def to_dict(self) -> Dict:
    return asdict(self)

  @classmethod
  def from_dict(cls, data: Dict) -> "Animal":
    """Create Animal from dictionary"""
    if not data:
      raise ValueError("Cannot create Animal from empty data")
    valid_fields = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
    return cls(**valid_fields)

  @classmethod
  def from_row(cls, row: Dict) -> "Animal":
    """Create Animal from a database row"""
    animal = cls.from_dict(row)
    animal.is_following = bool(row.get("is_following", 0))
    return animal


@dataclass
class RemoteAnimal:
  """A pet entry as returned by the mock API"""
  pet_id: Optional[str] = None
  pet_name: Optional[str] = None
  sex: Optional[str] = None
  age: Optional[str] = None
  size: Optional[str] = None
  primary_breed: Optional[str] = None
  addr_city: Optional[str] = None
  addr_state_code: Optional[str] = None
  results_photo_url: Optional[str] = None
  large_results_photo_url: Optional[str] = None
  description: Optional[str] = None
  species: Optional[str] = None

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> "RemoteAnimal":
    if not isinstance(data, dict):
      raise ValueError(f"Expected an object for pet entry, got {type(data).__name__}")
    values = {}
    for key, value in data.items():
      if key not in cls.__dataclass_fields__ or value is None:
        continue
      # pet_id sometimes arrives as a JSON number
      values[key] = value if isinstance(value, str) else str(value)
    return cls(**values)

  def parsed_id(self) -> Optional[int]:
    """
    Integer id, or None when missing, not a plain signed integer, or
    outside the 64-bit range the store can hold.
    """
    if self.pet_id is None or not PET_ID_PATTERN.fullmatch(self.pet_id):
      return None
    value = int(self.pet_id)
    if not MIN_PET_ID <= value <= MAX_PET_ID:
      return None
    return value


@dataclass
class APIResponse:
  """Response envelope: {status, pets}"""
  status: Optional[str] = None
  pets: Optional[List[RemoteAnimal]] = None

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> "APIResponse":
    """
    Decode the whole envelope. Raises ValueError on any shape problem so
    nothing is written before the full payload is known to be good.
    """
    if not isinstance(data, dict):
      raise ValueError("Response body is not a JSON object")

    status = data.get("status")
    raw_pets = data.get("pets")
    if raw_pets is None:
      return cls(status=status, pets=None)
    if not isinstance(raw_pets, list):
      raise ValueError("'pets' is not a list")

    return cls(status=status, pets=[RemoteAnimal.from_dict(p) for p in raw_pets])


def get_current_timestamp() -> str:
  """Returns current timestamp in ISO format"""
  return datetime.now().isoformat()
