import os
from pathlib import Path

from dotenv import load_dotenv

# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")

# Database
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR}/ecotrack.db")

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3030"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS (comma separated)
_origins = os.getenv("CLIENT_ORIGINS", "")
CLIENT_ORIGINS = [o.strip() for o in _origins.split(",") if o.strip()] or ["http://localhost:5173"]

# List limits
RECENT_CHALLENGES_LIMIT = 6
EVENTS_LIMIT = 6
TIPS_LIMIT = 5

# Placeholder until impact is tracked per activity
WEEKLY_IMPACT = 20
