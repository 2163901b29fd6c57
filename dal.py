"""
Data Access Layer (DAL)
v1.0.0

Central API for all stored data. Everything that reads or writes animals or
pending notifications goes through this layer.

Design Principles:
- One record per external animal id; inserting a known id is a no-op
- Every operation commits before it returns
- Commit failures are reported through the return value, never fatal
- Failure to set up or close the store is fatal (nothing can recover it)

Usage:
  from dal import DAL

  dal = DAL("petfinder.db")
  dal.init_database()
  animal = dal.insert({"id": 1, "name": "Rex", "species": "Dog"})
  dal.set_following(animal.id, True)
"""
import sqlite3
from typing import List, Optional, Dict, Any
from contextlib import contextmanager

from schema import Animal, NotificationRequest, get_current_timestamp


ANIMAL_FIELDS = [
  "id", "name", "species", "breed", "gender", "age", "description",
  "photo_url", "location", "saved_at", "is_following",
]

NOTIFICATION_FIELDS = [
  "identifier", "title", "body", "trigger_type", "hour", "minute", "repeats",
  "fire_at", "delivered_at", "created_at",
]


class DAL:
  """
  Data Access Layer - the local store.

  Responsibilities:
  - Animal records (insert-if-absent, follow flag, delete)
  - Counts used by the achievement system
  - Pending local notification requests
  """

  def __init__(self, db_path: str = "petfinder.db"):
    self.db_path = db_path

  # ============================================
  # Database Connection Management
  # ============================================

  @contextmanager
  def _get_connection(self):
    """Get database connection with automatic commit and cleanup"""
    conn = sqlite3.connect(self.db_path)
    conn.row_factory = sqlite3.Row
    try:
      yield conn
      conn.commit()
    except Exception:
      conn.rollback()
      raise
    finally:
      conn.close()

  def init_database(self):
    """Initialize database schema. Exits the process if the store can't be opened."""
    try:
      with self._get_connection() as conn:
        cursor = conn.cursor()

        # Animals - rowid keeps insertion order for saved_at ties
        cursor.execute("""
          CREATE TABLE IF NOT EXISTS animals (
            id INTEGER NOT NULL UNIQUE,
            name TEXT NOT NULL,
            species TEXT,
            breed TEXT,
            gender TEXT,
            age TEXT,
            description TEXT,
            photo_url TEXT,
            location TEXT,
            saved_at TEXT NOT NULL,
            is_following INTEGER NOT NULL DEFAULT 0
          )
        """)

        # Local notifications waiting for delivery
        cursor.execute("""
          CREATE TABLE IF NOT EXISTS notification_requests (
            identifier TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            body TEXT NOT NULL,
            trigger_type TEXT NOT NULL,
            hour INTEGER,
            minute INTEGER,
            repeats INTEGER DEFAULT 0,
            fire_at TEXT,
            delivered_at TEXT,
            created_at TEXT
          )
        """)

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_animals_saved ON animals(saved_at)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_animals_following ON animals(is_following)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_notifications_fire ON notification_requests(fire_at)")
    except sqlite3.Error as e:
      print(f"❌ Could not open store {self.db_path}: {e}")
      raise SystemExit(1)

    print("✅ Database initialized")

  def shutdown(self):
    """Final flush at process exit. A failure here is fatal."""
    try:
      with self._get_connection() as conn:
        conn.execute("PRAGMA optimize")
    except sqlite3.Error as e:
      print(f"❌ Could not save store on exit: {e}")
      raise SystemExit(1)

  # ============================================
  # Animal Read Operations
  # ============================================

  def fetch_all(self) -> List[Animal]:
    """All animals, most recently saved first"""
    return self._query_animals(
      "SELECT * FROM animals ORDER BY saved_at DESC, rowid DESC"
    )

  def fetch_following(self) -> List[Animal]:
    """Animals the user follows, most recently saved first"""
    return self._query_animals(
      "SELECT * FROM animals WHERE is_following = 1 ORDER BY saved_at DESC, rowid DESC"
    )

  def fetch_by_id(self, animal_id: int) -> Optional[Animal]:
    """Get a single animal by ID"""
    rows = self._query_animals("SELECT * FROM animals WHERE id = ? LIMIT 1", (animal_id,))
    return rows[0] if rows else None

  def count(self) -> int:
    return self._count("SELECT COUNT(*) FROM animals")

  def count_following(self) -> int:
    return self._count("SELECT COUNT(*) FROM animals WHERE is_following = 1")

  def newest_saved_at(self) -> Optional[str]:
    """saved_at of the most recent record, or None when empty"""
    try:
      with self._get_connection() as conn:
        row = conn.execute("SELECT MAX(saved_at) FROM animals").fetchone()
        return row[0] if row else None
    except sqlite3.Error as e:
      print(f"⚠️ Error reading newest record: {e}")
      return None

  def _query_animals(self, sql: str, params: tuple = ()) -> List[Animal]:
    try:
      with self._get_connection() as conn:
        rows = conn.execute(sql, params).fetchall()
        return [Animal.from_row(dict(row)) for row in rows]
    except sqlite3.Error as e:
      print(f"⚠️ Error reading animals: {e}")
      return []

  def _count(self, sql: str) -> int:
    try:
      with self._get_connection() as conn:
        return conn.execute(sql).fetchone()[0]
    except sqlite3.Error as e:
      print(f"⚠️ Error counting animals: {e}")
      return 0

  # ============================================
  # Animal Write Operations
  # ============================================

  def insert(self, fields: Dict[str, Any]) -> Optional[Animal]:
    """
    Insert an animal if its id is unknown.

    An existing record is returned unchanged; its fields are never
    refreshed. Returns None if the commit fails.
    """
    if fields.get("id") is None:
      raise ValueError("Animal fields must include an id")

    values = {k: fields.get(k) for k in ANIMAL_FIELDS}
    values["saved_at"] = values["saved_at"] or get_current_timestamp()
    values["is_following"] = 1 if values["is_following"] else 0

    try:
      with self._get_connection() as conn:
        cursor = conn.cursor()
        placeholders = ", ".join("?" * len(ANIMAL_FIELDS))
        cursor.execute(
          f"INSERT OR IGNORE INTO animals ({', '.join(ANIMAL_FIELDS)}) VALUES ({placeholders})",
          [values[k] for k in ANIMAL_FIELDS]
        )
        created = cursor.rowcount == 1

        row = cursor.execute("SELECT * FROM animals WHERE id = ?", (values["id"],)).fetchone()
    except sqlite3.Error as e:
      print(f"⚠️ Error saving animal {values['id']}: {e}")
      return None

    if row is None:
      # OR IGNORE also swallows NOT NULL violations
      print(f"⚠️ Animal {values['id']} was not saved (missing required fields)")
      return None

    if created:
      print(f"  🆕 New animal: {values['name']} ({values['species'] or '?'})")
    return Animal.from_row(dict(row))

  def insert_animal(self, animal: Animal) -> Optional[Animal]:
    """Insert from an Animal object (same rules as insert)"""
    return self.insert(animal.to_dict())

  def set_following(self, animal_id: int, value: bool) -> bool:
    """Persist the follow flag. False if the animal is missing or the commit fails."""
    try:
      with self._get_connection() as conn:
        cursor = conn.cursor()
        cursor.execute(
          "UPDATE animals SET is_following = ? WHERE id = ?",
          (1 if value else 0, animal_id)
        )
        return cursor.rowcount == 1
    except sqlite3.Error as e:
      print(f"⚠️ Error updating follow state for {animal_id}: {e}")
      return False

  def toggle_following(self, animal_id: int) -> Optional[bool]:
    """Flip the follow flag. Returns the new value, or None on failure."""
    animal = self.fetch_by_id(animal_id)
    if not animal:
      return None

    new_value = not animal.is_following
    if not self.set_following(animal_id, new_value):
      return None
    return new_value

  def delete(self, animal_id: int) -> bool:
    try:
      with self._get_connection() as conn:
        cursor = conn.cursor()
        cursor.execute("DELETE FROM animals WHERE id = ?", (animal_id,))
        return cursor.rowcount == 1
    except sqlite3.Error as e:
      print(f"⚠️ Error deleting animal {animal_id}: {e}")
      return False

  def delete_all(self) -> int:
    """Remove every animal. Returns the number removed, -1 on failure."""
    try:
      with self._get_connection() as conn:
        cursor = conn.cursor()
        cursor.execute("DELETE FROM animals")
        return cursor.rowcount
    except sqlite3.Error as e:
      print(f"⚠️ Error deleting all animals: {e}")
      return -1

  # ============================================
  # Notification Requests
  # ============================================

  def save_notification_request(self, request: NotificationRequest) -> bool:
    """Add a request, replacing any with the same identifier"""
    data = request.to_dict()
    data["repeats"] = 1 if request.repeats else 0
    data["created_at"] = data["created_at"] or get_current_timestamp()

    try:
      with self._get_connection() as conn:
        placeholders = ", ".join("?" * len(NOTIFICATION_FIELDS))
        conn.execute(
          f"INSERT OR REPLACE INTO notification_requests ({', '.join(NOTIFICATION_FIELDS)}) "
          f"VALUES ({placeholders})",
          [data[k] for k in NOTIFICATION_FIELDS]
        )
        return True
    except sqlite3.Error as e:
      print(f"⚠️ Error saving notification '{request.identifier}': {e}")
      return False

  def get_notification_requests(self) -> List[NotificationRequest]:
    """All pending requests, soonest first"""
    try:
      with self._get_connection() as conn:
        rows = conn.execute(
          "SELECT * FROM notification_requests ORDER BY fire_at ASC, created_at ASC"
        ).fetchall()
        return [NotificationRequest.from_row(dict(row)) for row in rows]
    except sqlite3.Error as e:
      print(f"⚠️ Error reading notifications: {e}")
      return []

  def get_notification_request(self, identifier: str) -> Optional[NotificationRequest]:
    try:
      with self._get_connection() as conn:
        row = conn.execute(
          "SELECT * FROM notification_requests WHERE identifier = ?", (identifier,)
        ).fetchone()
        return NotificationRequest.from_row(dict(row)) if row else None
    except sqlite3.Error as e:
      print(f"⚠️ Error reading notification '{identifier}': {e}")
      return None

  def delete_notification_request(self, identifier: str) -> bool:
    try:
      with self._get_connection() as conn:
        conn.execute("DELETE FROM notification_requests WHERE identifier = ?", (identifier,))
        return True
    except sqlite3.Error as e:
      print(f"⚠️ Error removing notification '{identifier}': {e}")
      return False

  def delete_all_notification_requests(self) -> bool:
    try:
      with self._get_connection() as conn:
        conn.execute("DELETE FROM notification_requests")
        return True
    except sqlite3.Error as e:
      print(f"⚠️ Error removing notifications: {e}")
      return False
