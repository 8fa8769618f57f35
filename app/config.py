# app/config.py
# Role: Environment-driven settings for the dashboard.
#       Loads a local .env file (if present) and exposes plain module-level
#       constants that the rest of the app imports.

"""
Application settings.

Every value can be overridden with an environment variable of the same name.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_truthy(name: str, default: str = "0") -> bool:
    v = os.getenv(name, default)
    return str(v).strip().lower() in ("1", "true", "yes", "y", "on")


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


# -------------------------------------------------------------------
# General
# -------------------------------------------------------------------

APP_TITLE = os.getenv("APP_TITLE", "Speak Influencer Management")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# None means "use the SQLite file under database/" (see db.py)
DATABASE_URL = os.getenv("DATABASE_URL") or None

# -------------------------------------------------------------------
# Session cookie
# -------------------------------------------------------------------

# Cookie holding the serialized user record (the persisted session)
AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "auth-user")

# 7 days
AUTH_COOKIE_MAX_AGE = _env_int("AUTH_COOKIE_MAX_AGE", 7 * 24 * 60 * 60)

AUTH_COOKIE_SECURE = _env_truthy("AUTH_COOKIE_SECURE", "0")

THEME_COOKIE_NAME = "theme"

# -------------------------------------------------------------------
# Authentication
# -------------------------------------------------------------------

# Built-in team account; disabled unless both values are set
ADMIN_LOGIN_ID = (os.getenv("ADMIN_LOGIN_ID") or "").strip()
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD") or ""

# Users whose e-mail contains this domain get the admin role
ADMIN_EMAIL_DOMAIN = os.getenv("ADMIN_EMAIL_DOMAIN", "@usespeak.com")
