"""Encoder configuration from environment."""
import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

# Package directory (phonetic/) for the bundled rule resource
PACKAGE_DIR = Path(__file__).resolve().parent

# Load .env: PHONETIC_ENV_FILE, else the nearest .env from the working directory up
_env_file = os.environ.get("PHONETIC_ENV_FILE")
if _env_file:
    load_dotenv(_env_file)
else:
    load_dotenv(find_dotenv(usecwd=True))

# Bundled Daitch-Mokotoff rules
DEFAULT_DM_RULES_PATH = PACKAGE_DIR / "dmrules.txt"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def dm_rules_path() -> Path:
    """Rule file for default-built encoders: PHONETIC_DM_RULES or the bundled dmrules.txt."""
    override = os.environ.get("PHONETIC_DM_RULES", "").strip()
    if override:
        return Path(override).expanduser()
    return DEFAULT_DM_RULES_PATH


def dm_folding_default(value: Optional[str] = None) -> bool:
    """ASCII folding default. Unset means enabled."""
    raw = os.environ.get("PHONETIC_DM_FOLDING") if value is None else value
    if raw is None or not raw.strip():
        return True
    return raw.strip().lower() in _TRUE_VALUES
