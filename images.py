"""
Background photo loading for list rows
v1.0.0

Each list row is a RowSlot showing one animal at a time. Photo downloads
run on a background thread and are never cancelled; when one finishes,
its bytes are applied only if the slot still shows the same animal.
A slot reused for another animal in the meantime keeps its own image.
"""
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from fetchers.base_fetcher import BaseFetcher
from schema import Animal


@dataclass
class RowSlot:
  """
  A reusable display slot (one list row).

  `lock` is held while the slot changes animal and while a finished
  download is applied, so the two never interleave.
  """
  animal_id: Optional[int] = None
  image: Optional[bytes] = None
  lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

  def configure(self, animal: Animal):
    """Show a new animal; drops whatever image the slot held"""
    with self.lock:
      self.animal_id = animal.id
      self.image = None

  def reset(self):
    with self.lock:
      self.animal_id = None
      self.image = None


class ImageLoader:
  """Fire-and-forget photo downloads with an identity check at apply time"""

  def __init__(self, fetcher: Optional[BaseFetcher] = None):
    self.fetcher = fetcher or BaseFetcher()

  def load_into(self, slot: RowSlot, animal: Animal,
                on_loaded: Optional[Callable[[RowSlot, bytes], None]] = None) -> Optional[threading.Thread]:
    """
    Start downloading `animal`'s photo for `slot`.
    Returns the worker thread, or None when the animal has no photo.

    `on_loaded` runs on the worker thread while the slot is locked; it
    may reconfigure the slot, but must not wait on another thread that does.
    """
    url = animal.image_url
    if not url:
      return None

    def _run():
      data = self.fetcher.fetch_bytes(url)
      if data is None:
        return
      self._apply(slot, animal.id, data, on_loaded)

    thread = threading.Thread(target=_run, name=f"photo-{animal.id}", daemon=True)
    thread.start()
    return thread

  def _apply(self, slot: RowSlot, animal_id: int, data: bytes,
             on_loaded: Optional[Callable[[RowSlot, bytes], None]]) -> bool:
    with slot.lock:
      if slot.animal_id != animal_id:
        return False
      slot.image = data
      if on_loaded:
        on_loaded(slot, data)
    return True
