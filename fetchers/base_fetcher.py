"""
Base fetcher for remote JSON sources
"""
import requests
from typing import Any, Optional

from config import USER_AGENT, REQUEST_TIMEOUT


class BaseFetcher:
  """Base class for remote data fetchers"""

  def __init__(self, session: Optional[requests.Session] = None):
    self.session = session or requests.Session()
    self.session.headers.update({"User-Agent": USER_AGENT})

  def fetch_json(self, url: str) -> Optional[Any]:
    """Fetch and decode a JSON document. None on network or decode errors."""
    try:
      response = self.session.get(url, timeout=REQUEST_TIMEOUT)
      response.raise_for_status()
    except requests.RequestException as e:
      print(f"  ❌ Network error fetching {url}: {e}")
      return None

    try:
      return response.json()
    except ValueError as e:
      print(f"  ❌ Could not decode JSON from {url}: {e}")
      return None

  def fetch_bytes(self, url: str) -> Optional[bytes]:
    """Fetch raw content (images). None on network errors."""
    try:
      response = self.session.get(url, timeout=REQUEST_TIMEOUT)
      response.raise_for_status()
      return response.content
    except requests.RequestException as e:
      print(f"  ❌ Error fetching {url}: {e}")
      return None

  def refresh(self) -> bool:
    """
    Override this method in child classes
    Returns True when the store was updated from the source
    """
    raise NotImplementedError("Subclass must implement refresh()")
