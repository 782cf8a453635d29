"""
StockDesk - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.  create_app() copies these
into app.config, where tests may override them per instance.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR   = Path(__file__).resolve().parent
UPLOAD_DIR = Path(os.environ.get("STOCKDESK_UPLOAD_DIR", BASE_DIR / "uploads"))
MAX_UPLOAD_BYTES = int(os.environ.get("STOCKDESK_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("STOCKDESK_DB", f"sqlite:///{BASE_DIR / 'stockdesk.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("STOCKDESK_HOST", "0.0.0.0")
PORT   = int(os.environ.get("STOCKDESK_PORT", "5000"))
DEBUG  = os.environ.get("STOCKDESK_DEBUG", "0") == "1"
SECRET = os.environ.get("STOCKDESK_SECRET", "stockdesk-dev-key-change-in-prod")
LOG_LEVEL = os.environ.get("STOCKDESK_LOG_LEVEL", "INFO")

# ── Auth ───────────────────────────────────────────────────────────────
JWT_SECRET          = os.environ.get("STOCKDESK_JWT_SECRET", "stockdesk-jwt-dev-key-change-in-prod")
JWT_ALGORITHM       = "HS256"
JWT_EXPIRES_MINUTES = int(os.environ.get("STOCKDESK_JWT_EXPIRES_MINUTES", "60"))
OTP_LENGTH          = 6
OTP_TTL_MINUTES     = int(os.environ.get("STOCKDESK_OTP_TTL_MINUTES", "5"))

# ── Mail ───────────────────────────────────────────────────────────────
# "log" only writes the message to the log; "smtp" delivers it.
MAIL_BACKEND  = os.environ.get("STOCKDESK_MAIL_BACKEND", "log")
MAIL_HOST     = os.environ.get("STOCKDESK_MAIL_HOST", "smtp.gmail.com")
MAIL_PORT     = int(os.environ.get("STOCKDESK_MAIL_PORT", "587"))
MAIL_USER     = os.environ.get("STOCKDESK_MAIL_USER", "")
MAIL_PASSWORD = os.environ.get("STOCKDESK_MAIL_PASSWORD", "")
MAIL_SENDER   = os.environ.get("STOCKDESK_MAIL_SENDER", MAIL_USER)

# ── Pagination ─────────────────────────────────────────────────────────
API_DEFAULT_LIMIT = 10
API_MAX_LIMIT     = 100


def as_dict() -> dict:
    """Every upper-case tunable above, keyed by name."""
    return {k: v for k, v in globals().items() if k.isupper()}
