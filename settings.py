# ==========================================================
# settings.py — environment configuration + logging setup
# ==========================================================

import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_string(name: str, default: Optional[str] = None) -> Optional[str]:
    """Return trimmed string-valued env vars, normalizing empty strings to the default."""
    raw = os.getenv(name, default)
    if raw is None:
        return default
    clean = raw.strip()
    return clean if clean else default


def _env_flag(name: str, default: str = "0") -> bool:
    return _env_string(name, default) == "1"


def _env_float(name: str, default: float) -> float:
    try:
        return float(_env_string(name, str(default)))
    except ValueError:
        return default


# ==========================================================
# ✅ DATABASE
# ==========================================================
DATABASE_URL = _env_string("RETAILX_DATABASE_URL", "sqlite+aiosqlite:///./retailx.db")

# ==========================================================
# ✅ COLLABORATORS
# ==========================================================
USE_MOCK_GATEWAY = _env_flag("RETAILX_USE_MOCK_GATEWAY", "1")
RECEIPT_CHANNEL = _env_string("RETAILX_RECEIPT_CHANNEL", "link")
CURRENCY = _env_string("RETAILX_CURRENCY", "INR")
COUNTRY_CODE = _env_string("RETAILX_COUNTRY_CODE", "91")
HTTP_TIMEOUT = _env_float("RETAILX_HTTP_TIMEOUT", 15.0)

RAZORPAY_ORDERS_URL = "https://api.razorpay.com/v1/orders"
FAST2SMS_URL = "https://www.fast2sms.com/dev/bulkV2"
WHATSAPP_DEFAULT_API_URL = "https://api.whatstool.business/developers/v2/messages"

# ==========================================================
# ✅ LOGGING
# ==========================================================
LOG_LEVEL = (_env_string("RETAILX_LOG_LEVEL", "INFO") or "INFO").upper()


def configure_logging(level: Optional[str] = None) -> None:
    name = (level or LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
