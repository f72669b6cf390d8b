# paths.py
from pathlib import Path
import os

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True))  # MATSPAR_* from .env in the working directory


def canon(p: Path) -> Path:
    """
    Absolute, canonical path:
    - expands ~
    - resolves .. / symlinks where possible
    - works for files that do not exist yet (strict=False)
    """
    p = Path(p).expanduser()
    try:
        return p.resolve(strict=False)
    except (OSError, RuntimeError):
        return p.absolute()


def _env_path(name: str, default: str) -> Path:
    return canon(Path(os.getenv(name) or default))


# -----------------------------
# Deployment configuration (env / .env overrides)
# -----------------------------
FOODS_PATH = _env_path("MATSPAR_FOODS_PATH", "./data/foods.json")
SNAPSHOT_PATH = _env_path("MATSPAR_SNAPSHOT_PATH", "./search/foods.index.json")
DB_PATH = _env_path("MATSPAR_DB_PATH", "./data/matspar.sqlite")
LOG_DIR = _env_path("MATSPAR_LOG_DIR", "./logs")
SOON_DAYS = int(os.getenv("MATSPAR_SOON_DAYS", "3"))
