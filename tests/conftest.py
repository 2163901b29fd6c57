"""
Shared fixtures: every test gets its own store and preferences file.
"""
import pytest

from dal import DAL
from preferences import Preferences
from notifications import NotificationService
from achievements import AchievementManager


@pytest.fixture
def dal(tmp_path):
  store = DAL(str(tmp_path / "petfinder.db"))
  store.init_database()
  return store


@pytest.fixture
def prefs(tmp_path):
  return Preferences(str(tmp_path / "preferences.json"))


@pytest.fixture
def notifications(dal):
  # Empty email config: delivery only prints
  return NotificationService(dal, email_config={})


@pytest.fixture
def manager(dal, prefs, notifications):
  return AchievementManager(dal, prefs, notifications)


def make_animal_fields(animal_id, **overrides):
  fields = {
    "id": animal_id,
    "name": f"Animal {animal_id}",
    "species": "Dog",
    "breed": "Mixed",
    "gender": "Male",
    "age": "2 years",
    "location": "Porto",
  }
  fields.update(overrides)
  return fields
