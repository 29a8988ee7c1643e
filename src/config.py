"""Settings for campaign intake, read from the environment (and ``.env``)."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.getenv("INTAKE_DATA_DIR", PROJECT_ROOT / "data"))
OUTPUT_DIR = Path(os.getenv("INTAKE_OUTPUT_DIR", PROJECT_ROOT / "output"))
INBOX_PATH = DATA_DIR / "inbox.json"
LOG_DIR = OUTPUT_DIR / "logs"

for _directory in (DATA_DIR, OUTPUT_DIR, LOG_DIR):
    _directory.mkdir(parents=True, exist_ok=True)

# Logging (LOG_LEVEL may be a name or a number)
LOG_FILE = LOG_DIR / "campaign_intake.jsonl"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
VERBOSE_LOGGING = os.getenv("VERBOSE_LOGGING", "false").lower() == "true"

# HTTP API
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))

# Intake mailboxes: submissions arrive at <prefix>+<org-uuid>@<domain>
INTAKE_MAILBOX_PREFIXES = tuple(
    p.strip().lower()
    for p in os.getenv("INTAKE_MAILBOX_PREFIXES", "forms,unyteformautomation").split(",")
    if p.strip()
)

# Fallbacks when a submission does not say
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "USD").upper()
DEFAULT_COUNTRY = os.getenv("DEFAULT_COUNTRY", "US").upper()
