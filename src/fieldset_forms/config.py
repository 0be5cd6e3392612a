import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# ------------------------------------------------------------------- #
# Configuration from environment variables
# ------------------------------------------------------------------- #
FIELDSETS_DIR = os.getenv("FIELDSETS_DIR", "site/fieldsets")
VALUES_DIR = os.getenv("VALUES_DIR", "site/values")
ENTRY_ID = os.getenv("ENTRY_ID", "")  # used for media_select lookups

# Theme / media Configuration
THEMES_DIR = os.getenv("THEMES_DIR", "site/themes")
THEME = os.getenv("THEME", "default")
UPLOADS_DIR = os.getenv("UPLOADS_DIR", "site/uploads/entries")

# Rendering Configuration
DATE_FORMAT = os.getenv("DATE_FORMAT", "%Y-%m-%d %H:%M")  # strftime format
FIELD_CLASS = os.getenv("FIELD_CLASS", "form-control")
LANG_FILE = os.getenv("LANG_FILE")  # optional YAML/JSON translations

# CSRF Configuration
CSRF_PREFIX = os.getenv("CSRF_PREFIX", "csrf")
CSRF_STORAGE_LIMIT = int(os.getenv("CSRF_STORAGE_LIMIT", "200"))
CSRF_STRENGTH = int(os.getenv("CSRF_STRENGTH", "16"))  # bytes of randomness

# Output Configuration
OUTPUT_DIR = os.getenv("OUTPUT_DIR", "output")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
