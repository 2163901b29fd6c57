"""
Tests for the main runner.
"""
from unittest.mock import patch

import pytest
import requests

import petfinder
from petfinder import PetFinderApp, main
from seed_data import SEED_ANIMALS, seed_if_empty


@pytest.fixture
def app(tmp_path):
  app = PetFinderApp(
    db_path=str(tmp_path / "petfinder.db"),
    prefs_path=str(tmp_path / "preferences.json"),
    email_config={},
  )
  app.start()
  return app


class TestLaunch:
  """App launch flow"""

  def test_first_launch_seeds_and_counts(self, app):
    animals = app.launch()

    assert app.preferences.app_open_count == 1
    assert len(animals) == len(SEED_ANIMALS)
    assert app.dal.count() == 15

  def test_second_launch_does_not_reseed(self, app):
    app.launch()
    app.launch()

    assert app.preferences.app_open_count == 2
    assert app.dal.count() == 15

  def test_refresh_failure_keeps_store(self, app):
    with patch.object(app.fetcher.session, "get", side_effect=requests.ConnectionError("offline")):
      animals = app.launch(refresh=True)

    assert len(animals) == 15

  def test_launch_schedules_enabled_reminder(self, app):
    app.preferences.set_daily_notifications_enabled(True)
    app.launch()
    assert app.dal.get_notification_request("daily_animal") is not None

  def test_cache_status_mentions_setting(self, app):
    assert "60 min" in app.cache_status()
    app.launch()
    assert "Newest record saved" in app.cache_status()


class TestCommands:
  """Individual runner commands"""

  def test_toggle_follow_unlocks(self, app):
    app.launch()
    assert app.toggle_follow(1) is True
    assert app.achievements.is_unlocked(1)
    assert app.toggle_follow(1) is False

  def test_toggle_missing(self, app):
    assert app.toggle_follow(999) is None

  def test_show_animal(self, app, capsys):
    seed_if_empty(app.dal)
    animal = app.show_animal(1)
    assert animal.name == "Rex"
    assert "Labrador Retriever" in capsys.readouterr().out
    assert app.show_animal(999) is None

  def test_delete_and_clear(self, app):
    seed_if_empty(app.dal)
    assert app.delete(1) is True
    assert app.delete(1) is False
    assert app.clear() == 14

  def test_set_setting(self, app):
    assert app.set_setting("daily_notifications_enabled", "true") == 0
    assert app.dal.get_notification_request("daily_animal") is not None
    assert app.set_setting("items_per_page", "7") == 1
    assert app.preferences.items_per_page == 20

  def test_download_photo(self, app, tmp_path):
    app.dal.insert({"id": 50, "name": "Pic", "photo_url": "https://img.example/50.jpg"})
    photos_dir = str(tmp_path / "photos")

    with patch.object(app.fetcher, "fetch_bytes", return_value=b"jpeg"):
      path = app.download_photo(50, photos_dir=photos_dir)

    assert path.endswith("50.jpg")
    with open(path, "rb") as f:
      assert f.read() == b"jpeg"

  def test_download_photo_without_url(self, app, tmp_path):
    seed_if_empty(app.dal)
    assert app.download_photo(1, photos_dir=str(tmp_path / "photos")) is None


class TestMain:
  """Command-line entry point"""

  @pytest.fixture(autouse=True)
  def isolated_paths(self, tmp_path, monkeypatch):
    monkeypatch.setattr(petfinder, "DB_PATH", str(tmp_path / "cli.db"))
    monkeypatch.setattr(petfinder, "PREFERENCES_PATH", str(tmp_path / "cli.json"))
    monkeypatch.setattr("notifications.EMAIL_CONFIG", {})

  def test_default_launch(self):
    assert main([]) == 0

  def test_show_missing(self):
    assert main(["--show", "999"]) == 1

  def test_invalid_setting(self, capsys):
    assert main(["--set", "theme", "neon"]) == 1
    assert "❌" in capsys.readouterr().out

  def test_achievements(self, capsys):
    assert main(["--achievements"]) == 0
    assert "First Step" in capsys.readouterr().out

  def test_follow_after_launch(self):
    main([])
    assert main(["--follow", "2"]) == 0
    assert main(["--following"]) == 0
