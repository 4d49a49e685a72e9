"""Process configuration read from the environment (and an optional .env)."""
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent
ROOT_DIR = BASE_DIR.parent

# .env next to the package wins over the working directory one
load_dotenv(ROOT_DIR / ".env")
load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return (os.getenv(name, default) or default).strip().lower() in {"1", "true", "yes", "on"}


DATABASE_URL = (os.getenv("DATABASE_URL") or "sqlite:///./rebound.db").strip()
SQL_ECHO = _flag("SQL_ECHO")

DEFAULT_TAXONOMY_PATH = BASE_DIR / "config" / "symptom_taxonomy.yaml"
SYMPTOM_TAXONOMY_PATH = Path(os.getenv("SYMPTOM_TAXONOMY_PATH") or DEFAULT_TAXONOMY_PATH)

# Stand-in for the round trip to a real inference backend
ANALYSIS_LATENCY_SECONDS = float(os.getenv("ANALYSIS_LATENCY_SECONDS", "0.8") or 0.8)
ANALYSIS_SEED = os.getenv("ANALYSIS_SEED") or None

ANALYZE_RATE_LIMIT = (os.getenv("ANALYZE_RATE_LIMIT") or "30/minute").strip()
DEFAULT_USER_ID = (os.getenv("DEFAULT_USER_ID") or "local").strip() or "local"
CORS_ORIGINS = [
    o.strip()
    for o in (os.getenv("CORS_ORIGINS") or "http://localhost:5173,http://127.0.0.1:5173").split(",")
    if o.strip()
]
LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
