"""
Tests for the mock API fetcher.
"""
from unittest.mock import Mock, patch

import pytest
import requests

from config import PETS_API_URL, USER_AGENT
from fetchers import PetsAPIFetcher
from fetchers.pets_api import map_gender, remote_to_fields
from schema import RemoteAnimal

from conftest import make_animal_fields


def make_pet(pet_id, /, **overrides):
  pet = {
    "pet_id": str(pet_id),
    "pet_name": f"Pet {pet_id}",
    "sex": "Male",
    "age": "Adult",
    "size": "Medium",
    "primary_breed": "Mixed Breed",
    "addr_city": "Porto",
    "addr_state_code": "PT",
    "results_photo_url": f"https://img.example/{pet_id}-small.jpg",
    "large_results_photo_url": f"https://img.example/{pet_id}-large.jpg",
    "description": "A very good pet",
  }
  pet.update(overrides)
  return pet


def make_response(payload):
  response = Mock()
  response.json.return_value = payload
  response.raise_for_status = Mock()
  return response


@pytest.fixture
def fetcher(dal, prefs):
  return PetsAPIFetcher(dal, prefs, session=requests.Session())


class TestRefresh:
  """refresh() against a patched session"""

  def test_uses_endpoint_and_user_agent(self, fetcher):
    payload = {"status": "ok", "pets": [make_pet(1)]}
    with patch.object(fetcher.session, "get", return_value=make_response(payload)) as mock_get:
      assert fetcher.refresh() is True

    assert mock_get.call_args.args[0] == PETS_API_URL
    assert fetcher.session.headers["User-Agent"] == USER_AGENT

  def test_truncates_to_items_per_page(self, fetcher, dal):
    payload = {"status": "ok", "pets": [make_pet(i) for i in range(1, 36)]}
    with patch.object(fetcher.session, "get", return_value=make_response(payload)):
      assert fetcher.refresh() is True

    assert dal.count() == 20
    assert dal.fetch_by_id(20) is not None
    assert dal.fetch_by_id(21) is None

  def test_respects_items_per_page_setting(self, fetcher, dal, prefs):
    prefs.set_items_per_page(10)
    payload = {"status": "ok", "pets": [make_pet(i) for i in range(1, 36)]}
    with patch.object(fetcher.session, "get", return_value=make_response(payload)):
      fetcher.refresh()

    assert dal.count() == 10

  def test_insert_called_per_kept_entry(self, prefs):
    dal = Mock()
    dal.count.return_value = 0
    fetcher = PetsAPIFetcher(dal, prefs, session=requests.Session())
    payload = {"status": "ok", "pets": [make_pet(i) for i in range(1, 36)]}

    with patch.object(fetcher.session, "get", return_value=make_response(payload)):
      fetcher.refresh()

    assert dal.insert.call_count == 20

  def test_skips_unparseable_ids(self, fetcher, dal):
    payload = {"status": "ok", "pets": [make_pet("abc"), make_pet(2), {"pet_name": "No id"}]}
    with patch.object(fetcher.session, "get", return_value=make_response(payload)):
      assert fetcher.refresh() is True

    assert dal.count() == 1
    assert dal.fetch_by_id(2).name == "Pet 2"

  def test_oversized_id_skipped_without_aborting_batch(self, fetcher, dal):
    payload = {"status": "ok", "pets": [make_pet(1), make_pet("99999999999999999999"), make_pet(3)]}
    with patch.object(fetcher.session, "get", return_value=make_response(payload)):
      assert fetcher.refresh() is True

    assert dal.count() == 2
    assert dal.fetch_by_id(1) is not None
    assert dal.fetch_by_id(3) is not None

  def test_padded_id_skipped(self, fetcher, dal):
    payload = {"status": "ok", "pets": [make_pet(" 12 "), make_pet(13)]}
    with patch.object(fetcher.session, "get", return_value=make_response(payload)):
      fetcher.refresh()

    assert dal.fetch_by_id(12) is None
    assert dal.count() == 1

  def test_numeric_pet_id(self, fetcher, dal):
    payload = {"status": "ok", "pets": [make_pet(1, pet_id=77)]}
    with patch.object(fetcher.session, "get", return_value=make_response(payload)):
      fetcher.refresh()

    assert dal.fetch_by_id(77) is not None

  def test_existing_records_not_refreshed(self, fetcher, dal):
    dal.insert(make_animal_fields(1, name="Original"))
    dal.set_following(1, True)
    payload = {"status": "ok", "pets": [make_pet(1, pet_name="Changed")]}

    with patch.object(fetcher.session, "get", return_value=make_response(payload)):
      fetcher.refresh()

    animal = dal.fetch_by_id(1)
    assert animal.name == "Original"
    assert animal.is_following is True


class TestRefreshFailures:
  """Failures leave the store untouched"""

  def test_network_error(self, fetcher, dal):
    dal.insert(make_animal_fields(1))
    with patch.object(fetcher.session, "get", side_effect=requests.ConnectionError("offline")):
      assert fetcher.refresh() is False
    assert dal.count() == 1

  def test_http_error_status(self, fetcher, dal):
    response = make_response({})
    response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
    with patch.object(fetcher.session, "get", return_value=response):
      assert fetcher.refresh() is False
    assert dal.count() == 0

  def test_body_not_json(self, fetcher, dal):
    response = make_response(None)
    response.json.side_effect = ValueError("Expecting value")
    with patch.object(fetcher.session, "get", return_value=response):
      assert fetcher.refresh() is False
    assert dal.count() == 0

  def test_missing_pets(self, fetcher, dal):
    with patch.object(fetcher.session, "get", return_value=make_response({"status": "ok"})):
      assert fetcher.refresh() is False
    assert dal.count() == 0

  def test_pets_not_a_list(self, fetcher, dal):
    with patch.object(fetcher.session, "get", return_value=make_response({"pets": "many"})):
      assert fetcher.refresh() is False

  def test_bad_entry_aborts_before_writing(self, fetcher, dal):
    payload = {"status": "ok", "pets": [make_pet(1), "not an object"]}
    with patch.object(fetcher.session, "get", return_value=make_response(payload)):
      assert fetcher.refresh() is False
    assert dal.count() == 0


class TestRefreshAsync:
  """Background refresh"""

  def test_completion_called_once(self, fetcher, dal):
    completion = Mock()
    payload = {"status": "ok", "pets": [make_pet(1), make_pet(2)]}

    with patch.object(fetcher.session, "get", return_value=make_response(payload)):
      fetcher.refresh_async(completion).join()

    completion.assert_called_once_with(True)
    assert dal.count() == 2

  def test_completion_false_on_failure(self, fetcher):
    completion = Mock()
    with patch.object(fetcher.session, "get", side_effect=requests.Timeout("slow")):
      fetcher.refresh_async(completion).join()

    completion.assert_called_once_with(False)

  def test_unexpected_error_reports_false(self, fetcher):
    completion = Mock()
    with patch.object(fetcher, "refresh", side_effect=RuntimeError("boom")):
      fetcher.refresh_async(completion).join()

    completion.assert_called_once_with(False)


class TestMapping:
  """Remote entry to local fields"""

  @pytest.mark.parametrize(
    ("sex", "expected"),
    [("male", "Male"), ("FEMALE", "Female"), ("Male", "Male"), ("unknown", "unknown"), (None, None)],
  )
  def test_map_gender(self, sex, expected):
    assert map_gender(sex) == expected

  def test_full_entry(self):
    fields = remote_to_fields(RemoteAnimal.from_dict(make_pet(5, sex="female")))
    assert fields["id"] == 5
    assert fields["name"] == "Pet 5"
    assert fields["gender"] == "Female"
    assert fields["breed"] == "Mixed Breed"
    assert fields["location"] == "Porto, PT"
    assert fields["photo_url"] == "https://img.example/5-large.jpg"
    assert fields["description"] == "Tap to see more details about Pet 5."
    assert fields["species"] == "Dog"
    assert fields["is_following"] is False

  def test_missing_fields_use_labels(self):
    fields = remote_to_fields(RemoteAnimal(pet_id="9"))
    assert fields["name"] == "No name"
    assert fields["breed"] == "Unknown breed"
    assert fields["age"] == "N/A"
    assert fields["location"] == ", "
    assert fields["photo_url"] is None
    assert fields["description"] == "Tap to see more details about No name."

  def test_small_photo_fallback(self):
    fields = remote_to_fields(RemoteAnimal(pet_id="3", results_photo_url="https://img.example/s.jpg"))
    assert fields["photo_url"] == "https://img.example/s.jpg"

  def test_remote_species_kept(self):
    fields = remote_to_fields(RemoteAnimal(pet_id="3", species="Cat"))
    assert fields["species"] == "Cat"

  def test_no_id(self):
    assert remote_to_fields(RemoteAnimal(pet_name="Ghost")) is None
