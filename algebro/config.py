"""
Runtime configuration for Alge-Bro.

Constants live here so the Streamlit app, the scripts and the tests agree on
time budgets, storage keys and model names. A few values can be overridden
from the environment (or a .env file in the working directory).
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


# -----------------------------------------------------------------------------
# Assessment timing
# -----------------------------------------------------------------------------

QUIZ_TIME_SECONDS = 300      # 5 minutes
PROBLEMS_TIME_SECONDS = 600  # 10 minutes

NO_ANSWER = "No answer"


# -----------------------------------------------------------------------------
# Local storage
# -----------------------------------------------------------------------------

PROGRESS_KEY = "mathAppUserProgress"
API_KEY_KEY = "algebroApiKey"

DEFAULT_DATA_DIR = Path(os.environ.get("ALGEBRO_DATA_DIR", Path.home() / ".algebro"))
DEFAULT_STORE_DB = DEFAULT_DATA_DIR / "progress.db"


# -----------------------------------------------------------------------------
# Gemini
# -----------------------------------------------------------------------------

API_KEY_ENV = "GEMINI_API_KEY"
LESSON_MODEL = os.environ.get("ALGEBRO_LESSON_MODEL", "gemini-2.5-pro")
FAST_MODEL = os.environ.get("ALGEBRO_FAST_MODEL", "gemini-2.5-flash")
DEFAULT_TEMPERATURE = 0.7


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------

LOG_LEVEL = os.environ.get("ALGEBRO_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
