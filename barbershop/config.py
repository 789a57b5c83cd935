# barbershop/config.py

import os
import warnings
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Empty string means "no database configured": reads come back empty, writes fail
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./barber.db")
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "1"))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "10"))
DB_POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "300"))

SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
SESSION_COOKIE_NAME = "session_token"
BARBER_COOKIE_NAME = "barber_session"
COOKIE_SECURE = os.getenv("COOKIE_SECURE", "false").lower() == "true"

# The identity-provider subject that is promoted to admin on login
OWNER_OPEN_ID = os.getenv("OWNER_OPEN_ID")

OAUTH_SERVER_URL = os.getenv("OAUTH_SERVER_URL", "")
OAUTH_APP_ID = os.getenv("OAUTH_APP_ID", "")

EMAIL_API_URL = os.getenv("EMAIL_API_URL", "")
EMAIL_API_KEY = os.getenv("EMAIL_API_KEY", "")

SHOP_NAME = os.getenv("SHOP_NAME", "Barbearia Vila Nova")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
