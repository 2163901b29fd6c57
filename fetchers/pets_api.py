"""
Fetcher for the pet adoption mock API
v1.0.0

Downloads the full pet list in one request, keeps the first N entries
(N = items-per-page setting) and inserts each one into the local store.
Known ids are left untouched, so re-fetching never refreshes a record.

The whole response is decoded before anything is written: a network or
decode failure leaves the store exactly as it was.
"""
import threading
from typing import Callable, Dict, Any, Optional

from config import PETS_API_URL, REMOTE_DEFAULT_SPECIES, LABELS
from fetchers.base_fetcher import BaseFetcher
from schema import APIResponse, RemoteAnimal


class PetsAPIFetcher(BaseFetcher):
  """Fetches adoptable pets from the mock JSON API"""

  def __init__(self, dal, preferences, url: str = PETS_API_URL, session=None):
    super().__init__(session)
    self.dal = dal
    self.preferences = preferences
    self.url = url

  def refresh(self) -> bool:
    """
    Fetch the pet list and insert new animals.
    Returns False on network/decode failure or a missing 'pets' list.
    """
    print("📡 Contacting mock API...")

    data = self.fetch_json(self.url)
    if data is None:
      return False

    try:
      response = APIResponse.from_dict(data)
    except ValueError as e:
      print(f"❌ Error decoding API response: {e}")
      return False

    if response.pets is None:
      print("⚠️ JSON received but no 'pets' list")
      return False

    max_items = self.preferences.items_per_page
    pets_to_save = response.pets[:max_items]
    print(f"🔢 Limit: {max_items}. Saving {len(pets_to_save)} animals.")

    before = self.dal.count()
    skipped = 0
    for remote in pets_to_save:
      fields = remote_to_fields(remote)
      if fields is None:
        skipped += 1
        continue
      self.dal.insert(fields)

    new_count = self.dal.count() - before
    print(f"✅ {len(pets_to_save) - skipped} animals loaded from mock API ({new_count} new)")
    return True

  def refresh_async(self, completion: Callable[[bool], None]) -> threading.Thread:
    """
    Run refresh() on a background thread. `completion` is called exactly
    once with the result, after all inserts have finished.
    """
    def _run():
      try:
        result = self.refresh()
      except Exception as e:
        print(f"❌ Refresh failed: {e}")
        result = False
      completion(result)

    thread = threading.Thread(target=_run, name="pets-api-refresh", daemon=True)
    thread.start()
    return thread


def map_gender(sex: Optional[str]) -> Optional[str]:
  """Localize the two known sex codes; anything else passes through"""
  code = (sex or "").lower()
  if code == "male":
    return LABELS["male"]
  if code == "female":
    return LABELS["female"]
  return sex


def remote_to_fields(remote: RemoteAnimal) -> Optional[Dict[str, Any]]:
  """
  Map an API entry to local animal fields.
  Returns None when the entry has no usable integer id.
  """
  animal_id = remote.parsed_id()
  if animal_id is None:
    return None

  name = remote.pet_name or LABELS["no_name"]
  location = f"{remote.addr_city or ''}{LABELS['location_separator']}{remote.addr_state_code or ''}"

  # remote.description is decoded but not used; the list shows a prompt instead
  return {
    "id": animal_id,
    "name": name,
    "species": remote.species or REMOTE_DEFAULT_SPECIES,
    "breed": remote.primary_breed or LABELS["unknown_breed"],
    "gender": map_gender(remote.sex),
    "age": remote.age or LABELS["no_age"],
    "description": LABELS["description_placeholder"].format(name=name),
    "photo_url": remote.large_results_photo_url or remote.results_photo_url,
    "location": location,
    "is_following": False,
  }
