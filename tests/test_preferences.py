"""
Tests for user preferences.
"""
import json

import pytest

from preferences import Preferences
from schema import ITEMS_PER_PAGE_KEY, CACHE_EXPIRATION_KEY, UNLOCKED_ACHIEVEMENTS_KEY


class TestDefaults:
  """Values when nothing is stored"""

  def test_defaults(self, prefs):
    assert prefs.cache_expiration_minutes == 60
    assert prefs.items_per_page == 20
    assert prefs.daily_notifications_enabled is False
    assert prefs.notification_hour == 9
    assert prefs.theme == "system"
    assert prefs.app_open_count == 0
    assert prefs.unlocked_achievements == []

  def test_zero_reads_as_default(self, prefs):
    prefs.set(ITEMS_PER_PAGE_KEY, 0)
    prefs.set(CACHE_EXPIRATION_KEY, 0)
    assert prefs.items_per_page == 20
    assert prefs.cache_expiration_minutes == 60

  def test_negative_reads_as_default(self, prefs):
    prefs.set(ITEMS_PER_PAGE_KEY, -5)
    assert prefs.items_per_page == 20

  def test_settings_snapshot(self, prefs):
    prefs.set_theme("dark")
    settings = prefs.settings()
    assert settings.theme == "dark"
    assert settings.to_dict()["items_per_page"] == 20


class TestValidation:
  """Typed setters reject bad values before writing"""

  def test_items_per_page(self, prefs):
    with pytest.raises(ValueError):
      prefs.set_items_per_page(7)
    assert prefs.get(ITEMS_PER_PAGE_KEY) is None

    prefs.set_items_per_page(50)
    assert prefs.items_per_page == 50

  def test_cache_expiration(self, prefs):
    with pytest.raises(ValueError):
      prefs.set_cache_expiration_minutes(45)
    prefs.set_cache_expiration_minutes(240)
    assert prefs.cache_expiration_minutes == 240

  def test_notification_hour_range(self, prefs):
    with pytest.raises(ValueError):
      prefs.set_notification_hour(24)
    prefs.set_notification_hour(0)
    assert prefs.notification_hour == 0

  def test_theme(self, prefs):
    with pytest.raises(ValueError):
      prefs.set_theme("neon")
    assert prefs.theme == "system"


class TestUpdateSetting:
  """Text input from the command line"""

  def test_parses_values(self, prefs):
    prefs.update_setting("items_per_page", "10")
    prefs.update_setting("daily_notifications_enabled", "yes")
    prefs.update_setting("notification_hour", "21")
    prefs.update_setting("theme", "light")

    assert prefs.items_per_page == 10
    assert prefs.daily_notifications_enabled is True
    assert prefs.notification_hour == 21
    assert prefs.theme == "light"

  def test_unknown_key(self, prefs):
    with pytest.raises(ValueError, match="Unknown setting"):
      prefs.update_setting("volume", "3")

  def test_not_a_number(self, prefs):
    with pytest.raises(ValueError):
      prefs.update_setting("items_per_page", "abc")

  def test_not_a_bool(self, prefs):
    with pytest.raises(ValueError):
      prefs.update_setting("daily_notifications_enabled", "maybe")


class TestStorage:
  """JSON file handling"""

  def test_persists_across_instances(self, tmp_path):
    path = str(tmp_path / "prefs.json")
    Preferences(path).set_items_per_page(100)
    assert Preferences(path).items_per_page == 100

  def test_corrupt_file_reads_empty(self, tmp_path, capsys):
    path = tmp_path / "prefs.json"
    path.write_text("{not json")

    prefs = Preferences(str(path))
    assert prefs.items_per_page == 20
    assert "⚠️" in capsys.readouterr().out

  def test_non_object_file_reads_empty(self, tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps([1, 2, 3]))
    assert Preferences(str(path)).get("theme") is None

  def test_remove(self, prefs):
    prefs.set("theme", "dark")
    prefs.remove("theme")
    assert prefs.get("theme") is None
    assert prefs.remove("never_set") is True

  def test_unlocked_ignores_non_ints(self, prefs):
    prefs.set(UNLOCKED_ACHIEVEMENTS_KEY, [1, "2", 3, None])
    assert prefs.unlocked_achievements == [1, 3]

  def test_write_failure_returns_false(self, tmp_path, capsys):
    # Parent directory doesn't exist
    prefs = Preferences(str(tmp_path / "missing" / "prefs.json"))
    assert prefs.set("theme", "dark") is False
    assert "⚠️" in capsys.readouterr().out

  def test_failed_write_leaves_value_unset(self, tmp_path):
    prefs = Preferences(str(tmp_path / "missing" / "prefs.json"))
    prefs.set_items_per_page(50)
    assert prefs.items_per_page == 20
    assert prefs.unlocked_achievements == []
    prefs.set_unlocked_achievements([1])
    assert prefs.unlocked_achievements == []
