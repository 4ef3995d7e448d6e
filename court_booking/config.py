import logging
import os
from typing import Dict

from pydantic import BaseModel

logger = logging.getLogger(__name__)

# --- API ---
API_URL = os.environ.get("COURT_BOOKING_API_URL", "http://localhost:3000")
API_TOKEN = os.environ.get("COURT_BOOKING_API_TOKEN")
REQUEST_TIMEOUT = int(os.environ.get("COURT_BOOKING_TIMEOUT", "10"))

# --- Schedule ---
OPENING_HOUR = 6
CLOSING_HOUR = 22
BOOKING_HORIZON_DAYS = 30
FALLBACK_AVAILABILITY_RATIO = 0.7
CURRENCY = os.environ.get("COURT_BOOKING_CURRENCY", "VND")

COMMON_HEADERS: Dict[str, str] = {
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": os.environ.get("COURT_BOOKING_ACCEPT_LANGUAGE", "vi-VN,vi;q=0.9,en;q=0.8"),
}

if not API_TOKEN:
    logger.debug("No API token configured. Requests will be sent anonymously.")


class ApiContext(BaseModel):
    """Connection settings handed explicitly to every API call."""

    base_url: str = API_URL
    token: str | None = None
    timeout: int = REQUEST_TIMEOUT

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def headers(self) -> Dict[str, str]:
        headers = dict(COMMON_HEADERS)
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers


def default_context() -> ApiContext:
    """Builds an ApiContext from the environment."""
    return ApiContext(base_url=API_URL, token=API_TOKEN, timeout=REQUEST_TIMEOUT)
