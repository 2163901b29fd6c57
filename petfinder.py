#!/usr/bin/env python3
"""
Pet Finder - Main Runner
v1.0.0

Builds every service once and drives the app's control flow from the
command line: launch, list, follow, achievements and settings.

Usage:
  python petfinder.py                       # Launch: count visit, seed, list
  python petfinder.py --refresh             # Launch and fetch from the mock API
  python petfinder.py --following           # List followed animals
  python petfinder.py --follow 3            # Toggle follow on animal 3
  python petfinder.py --achievements        # Show achievement progress
  python petfinder.py --set theme dark      # Change a setting
  python petfinder.py --deliver             # Deliver due notifications
"""
import os
import sys
import argparse
from datetime import datetime
from typing import List, Optional

from config import DB_PATH, PREFERENCES_PATH, PHOTOS_DIR
from dal import DAL
from preferences import Preferences
from notifications import NotificationService
from fetchers import PetsAPIFetcher
from images import ImageLoader, RowSlot
from achievements import AchievementManager
from seed_data import seed_if_empty
from schema import Animal, DAILY_NOTIFICATIONS_KEY, NOTIFICATION_HOUR_KEY


class PetFinderApp:
  """
  Composition root. Each service is created once here and handed to the
  services that need it.
  """

  def __init__(self, db_path: str = DB_PATH, prefs_path: str = PREFERENCES_PATH,
               session=None, email_config=None):
    self.dal = DAL(db_path)
    self.preferences = Preferences(prefs_path)
    self.notifications = NotificationService(self.dal, email_config)
    self.fetcher = PetsAPIFetcher(self.dal, self.preferences, session=session)
    self.images = ImageLoader(self.fetcher)
    self.achievements = AchievementManager(self.dal, self.preferences, self.notifications)

  def start(self):
    self.dal.init_database()

  def stop(self):
    self.dal.shutdown()

  # ============================================
  # Launch
  # ============================================

  def launch(self, refresh: bool = False) -> List[Animal]:
    """App launch: count the visit, check achievements, seed, then list"""
    print("\n" + "=" * 60)
    print(f"🐾 PET FINDER - {datetime.now().strftime('%Y-%m-%d %H:%M')}")
    print("=" * 60)

    self.achievements.record_app_open()
    self.achievements.evaluate_following_achievements()
    seed_if_empty(self.dal)
    self.notifications.apply_settings(self.preferences)

    if refresh or self.dal.count() == 0:
      self.refresh()

    return self.show_animals()

  def refresh(self) -> bool:
    """Fetch from the mock API and wait for the single completion call"""
    results = []

    def _on_complete(success: bool):
      results.append(success)
      if success:
        print("✅ Refresh complete")
      else:
        print("⚠️ Refresh failed - showing stored animals")

    self.fetcher.refresh_async(_on_complete).join()
    return bool(results and results[0])

  # ============================================
  # Animals
  # ============================================

  def show_animals(self, following_only: bool = False) -> List[Animal]:
    animals = self.dal.fetch_following() if following_only else self.dal.fetch_all()

    title = "❤️ FOLLOWING" if following_only else "📋 ANIMALS"
    print(f"\n{title} ({len(animals)})")
    print("-" * 40)
    for animal in animals:
      marker = "❤️" if animal.is_following else "  "
      print(f"  {marker} [{animal.id}] {animal.name} | {animal.species} | {animal.summary_line}")
      print(f"       {animal.location_display}")

    if not following_only:
      print(f"\n{self.cache_status()}")
    return animals

  def cache_status(self) -> str:
    """Newest record age next to the (unenforced) cache TTL"""
    ttl = self.preferences.cache_expiration_minutes
    newest = self.dal.newest_saved_at()
    if not newest:
      return f"🗄️ Cache empty (expiration setting: {ttl} min)"
    age = datetime.now() - datetime.fromisoformat(newest)
    age_minutes = int(age.total_seconds() // 60)
    return f"🗄️ Newest record saved {age_minutes} min ago (expiration setting: {ttl} min)"

  def show_animal(self, animal_id: int) -> Optional[Animal]:
    animal = self.dal.fetch_by_id(animal_id)
    if not animal:
      print(f"❌ No animal with id {animal_id}")
      return None

    print(f"\n🐾 {animal.name} ({animal.species})")
    print("-" * 40)
    print(f"  Breed: {animal.breed or '?'}")
    print(f"  Gender: {animal.gender or '?'}")
    print(f"  Age: {animal.age or '?'}")
    print(f"  Location: {animal.location_display}")
    print(f"  Following: {'Yes' if animal.is_following else 'No'}")
    if animal.image_url:
      print(f"  Photo: {animal.image_url}")
    if animal.description:
      print(f"\n  {animal.description}")
    return animal

  def toggle_follow(self, animal_id: int) -> Optional[bool]:
    new_value = self.dal.toggle_following(animal_id)
    if new_value is None:
      print(f"❌ Could not update follow state for animal {animal_id}")
      return None

    print(f"{'❤️ Following' if new_value else '💔 Unfollowed'} animal {animal_id}")
    self.achievements.evaluate_following_achievements()
    return new_value

  def delete(self, animal_id: int) -> bool:
    deleted = self.dal.delete(animal_id)
    if deleted:
      print(f"🗑️ Deleted animal {animal_id}")
    else:
      print(f"❌ Could not delete animal {animal_id}")
    return deleted

  def clear(self) -> int:
    removed = self.dal.delete_all()
    if removed >= 0:
      print(f"🗑️ Removed {removed} animals")
    return removed

  def download_photo(self, animal_id: int, photos_dir: str = PHOTOS_DIR) -> Optional[str]:
    """Load one animal's photo through the image loader and save it"""
    animal = self.dal.fetch_by_id(animal_id)
    if not animal:
      print(f"❌ No animal with id {animal_id}")
      return None

    slot = RowSlot()
    slot.configure(animal)
    thread = self.images.load_into(slot, animal)
    if thread is None:
      print(f"ℹ️ {animal.name} has no photo")
      return None
    thread.join()

    if slot.image is None:
      print(f"❌ Photo for {animal.name} could not be downloaded")
      return None

    os.makedirs(photos_dir, exist_ok=True)
    path = os.path.join(photos_dir, f"{animal.id}.jpg")
    with open(path, "wb") as f:
      f.write(slot.image)
    print(f"✅ Saved photo: {path}")
    return path

  # ============================================
  # Achievements
  # ============================================

  def show_achievements(self):
    stats = self.achievements.user_stats()

    print("\n🏆 ACHIEVEMENTS")
    print("-" * 40)
    for achievement in self.achievements.all_achievements():
      state = "✅" if achievement.is_unlocked else "🔒"
      print(f"  {state} {achievement.title} - {achievement.description} ({achievement.progress:.0f}%)")

    print(f"\n  Followed: {stats['following_count']} | Visits: {stats['visit_count']} | "
          f"Unlocked: {stats['achievements_unlocked']}/6")

  def reset_achievements(self):
    self.achievements.reset_all()

  # ============================================
  # Settings
  # ============================================

  def show_settings(self):
    print("\n⚙️ SETTINGS")
    print("-" * 40)
    for key, value in self.preferences.settings().to_dict().items():
      print(f"  {key}: {value}")

  def set_setting(self, key: str, value: str) -> int:
    try:
      self.preferences.update_setting(key, value)
    except ValueError as e:
      print(f"❌ {e}")
      return 1

    print(f"✅ {key} = {value}")
    if key in (DAILY_NOTIFICATIONS_KEY, NOTIFICATION_HOUR_KEY):
      self.notifications.apply_settings(self.preferences)
    return 0

  def deliver(self):
    print("\n🔔 Delivering notifications")
    return self.notifications.deliver_due()


def main(argv=None) -> int:
  parser = argparse.ArgumentParser(description="Pet Finder v1.0")
  parser.add_argument("--refresh", action="store_true", help="Fetch animals from the mock API on launch")
  parser.add_argument("--following", action="store_true", help="List followed animals")
  parser.add_argument("--show", type=int, metavar="ID", help="Show one animal")
  parser.add_argument("--follow", type=int, metavar="ID", help="Toggle follow on an animal")
  parser.add_argument("--delete", type=int, metavar="ID", help="Delete an animal")
  parser.add_argument("--clear", action="store_true", help="Delete all animals")
  parser.add_argument("--achievements", action="store_true", help="Show achievements")
  parser.add_argument("--settings", action="store_true", help="Show settings")
  parser.add_argument("--set", nargs=2, metavar=("KEY", "VALUE"), help="Change a setting")
  parser.add_argument("--reset-achievements", action="store_true", help="Reset achievements and visit count")
  parser.add_argument("--deliver", action="store_true", help="Deliver due notifications")
  parser.add_argument("--photo", type=int, metavar="ID", help="Download an animal's photo")

  args = parser.parse_args(argv)

  app = PetFinderApp(DB_PATH, PREFERENCES_PATH)
  app.start()

  status = 0
  if args.following:
    app.show_animals(following_only=True)
  elif args.show is not None:
    status = 0 if app.show_animal(args.show) else 1
  elif args.follow is not None:
    status = 0 if app.toggle_follow(args.follow) is not None else 1
  elif args.delete is not None:
    status = 0 if app.delete(args.delete) else 1
  elif args.clear:
    status = 0 if app.clear() >= 0 else 1
  elif args.achievements:
    app.show_achievements()
  elif args.settings:
    app.show_settings()
  elif args.set:
    status = app.set_setting(*args.set)
  elif args.reset_achievements:
    app.reset_achievements()
  elif args.deliver:
    app.deliver()
  elif args.photo is not None:
    status = 0 if app.download_photo(args.photo) else 1
  else:
    app.launch(refresh=args.refresh)

  app.stop()
  return status


if __name__ == "__main__":
  sys.exit(main())
