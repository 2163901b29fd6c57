"""
Configuration for pet finder
"""
import os

# Storage configuration
DB_PATH = os.environ.get("PETFINDER_DB_PATH", "petfinder.db")
PREFERENCES_PATH = os.environ.get("PETFINDER_PREFS_PATH", "preferences.json")
PHOTOS_DIR = os.environ.get("PETFINDER_PHOTOS_DIR", "photos")

# Mock adoption API (single endpoint, no auth, no pagination)
PETS_API_URL = "https://carlos-aldeias-estg.github.io/pdm2-2025-mock-api/api/pets.json"
REQUEST_TIMEOUT = 30  # seconds

# User agent for web requests
USER_AGENT = "pet-finder/1.0 (+https://github.com/pet-finder)"

# Preference defaults (a stored 0 reads back as the default)
DEFAULT_CACHE_EXPIRATION_MINUTES = 60
DEFAULT_ITEMS_PER_PAGE = 20
DEFAULT_NOTIFICATION_HOUR = 9
DEFAULT_THEME = "system"

# Allowed values offered by the settings screen
CACHE_EXPIRATION_OPTIONS = [30, 60, 120, 240, 480]
ITEMS_PER_PAGE_OPTIONS = [10, 20, 50, 100]
THEMES = ["system", "light", "dark"]

# Species for remote entries that arrive without one
REMOTE_DEFAULT_SPECIES = "Dog"

# Display labels
LABELS = {
  "male": "Male",
  "female": "Female",
  "no_name": "No name",
  "unknown_breed": "Unknown breed",
  "no_age": "N/A",
  "unknown_location": "Unknown location",
  "no_details": "No details",
  "location_separator": ", ",
  "description_placeholder": "Tap to see more details about {name}.",
}

# Local notifications
DAILY_REMINDER_ID = "daily_animal"
DAILY_REMINDER = {
  "title": "New animal for adoption!",
  "body": "Discover a new friend today",
}
ACHIEVEMENT_NOTIFICATION_TITLE = "🏆 Achievement Unlocked!"

# Email delivery for notifications - set these as environment variables
EMAIL_CONFIG = {
  "smtp_server": os.environ.get("SMTP_SERVER", "smtp.gmail.com"),
  "smtp_port": int(os.environ.get("SMTP_PORT", 587)),
  "sender_email": os.environ.get("SENDER_EMAIL", ""),
  "sender_password": os.environ.get("SENDER_PASSWORD", ""),  # App password for Gmail
  "recipient_emails": [e for e in os.environ.get("RECIPIENT_EMAILS", "").split(",") if e],
}
