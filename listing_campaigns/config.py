import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# API Keys and Config - loaded from .env
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-5.2")
OPENAI_REASONING_EFFORT = os.getenv("OPENAI_REASONING_EFFORT", "medium")
RENDER_API_URL = os.getenv("RENDER_API_URL", "http://localhost:8080/api")
RENDER_API_TOKEN = os.getenv("RENDER_API_TOKEN", "")

# Advisory (LLM) retry policy
ADVISORY_TIMEOUT = float(os.getenv("ADVISORY_TIMEOUT", "60"))
ADVISORY_MAX_ATTEMPTS = int(os.getenv("ADVISORY_MAX_ATTEMPTS", "3"))
ADVISORY_BACKOFF_SECONDS = float(os.getenv("ADVISORY_BACKOFF_SECONDS", "1.0"))

# Heuristic budget thresholds (first integer in the budget string)
BUDGET_CEILING = int(os.getenv("BUDGET_CEILING", "1000"))
BUDGET_FLOOR = int(os.getenv("BUDGET_FLOOR", "300"))
BUDGET_DEFAULT = 500

# Render engine export timeout (seconds)
RENDER_TIMEOUT = float(os.getenv("RENDER_TIMEOUT", "120"))

# Filesystem
TEMPLATES_PATH = Path(os.getenv("TEMPLATES_PATH", str(Path.cwd() / "templates")))
OUTPUT_PATH = Path(os.getenv("OUTPUT_PATH", str(Path.cwd() / "output")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
APP_VERSION = "1.0.0"
