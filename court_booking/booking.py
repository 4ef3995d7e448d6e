import logging
from typing import Any, Dict, Optional

import requests

from court_booking.config import ApiContext
from court_booking.errors import BookingSubmissionFailed
from court_booking.models import BookingIntent

logger = logging.getLogger(__name__)


def build_booking_payload(intent: BookingIntent, total_price: Optional[float] = None, **details: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = intent.to_query_params()
    payload.update(
        {
            "start_time": intent.start_time,
            "end_time": intent.end_time,
            "duration": intent.duration_hours,
        }
    )
    if total_price is not None:
        payload["total_price"] = total_price
    payload.update(details)
    return payload


def _error_message(response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return f"Could not complete the booking ({response.status_code})"


def submit_booking(
    intent: BookingIntent,
    context: ApiContext,
    total_price: Optional[float] = None,
    **details: Any,
) -> Dict[str, Any]:
    """Posts a booking intent to the booking API and returns the created booking."""
    url = context.url("/bookings")
    payload = build_booking_payload(intent, total_price, **details)
    headers = {**context.headers(), "Content-Type": "application/json"}

    try:
        response = requests.post(url, json=payload, headers=headers, timeout=context.timeout)
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to submit booking: {e}")
        raise BookingSubmissionFailed(f"Could not reach the booking API: {e}") from e

    if not response.ok:
        message = _error_message(response)
        logger.error(f"Booking rejected with status {response.status_code}: {message}")
        raise BookingSubmissionFailed(message, status_code=response.status_code)

    logger.info(f"Booking submitted for court {intent.court_id} on {intent.date} ({intent.times}).")
    try:
        return response.json()
    except ValueError:
        return {}
