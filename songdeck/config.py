"""Configuration: env, data paths, API and client settings."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of songdeck package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so SONGDECK_* overrides are set
load_dotenv(BASE_DIR / ".env")

DATA_DIR = BASE_DIR / "data"
SONGS_PATH = Path(os.getenv("SONGDECK_DATA_PATH", str(DATA_DIR / "songs.json")))

# API
API_HOST = os.getenv("SONGDECK_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("SONGDECK_API_PORT", "5000"))
API_VERSION = "1.0.0"
# Allowed CORS origin for the web client ("*" = any)
WEB_ORIGIN = os.getenv("SONGDECK_WEB_ORIGIN", "*")

# Client
API_URL = os.getenv("SONGDECK_API_URL", f"http://localhost:{API_PORT}")

LOG_LEVEL = os.getenv("SONGDECK_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"

# Field length bounds (characters, after trimming)
TITLE_MAX_LENGTH = 200
ARTIST_MAX_LENGTH = 100
ALBUM_MAX_LENGTH = 200
GENRE_MAX_LENGTH = 50
