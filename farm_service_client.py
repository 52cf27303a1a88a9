"""Farm Service API client.

This module defines a simple client wrapper around the Farm Service REST
API for use by the Telegram bot.  The client uses the ``requests``
library internally to make HTTP calls.

The client exposes high‑level methods for the operations the bot needs:

* :meth:`register_user` – register (or re‑register) a Telegram user.
* :meth:`get_user` – fetch a user's profile by Telegram ID.
* :meth:`create_booking` – book a machinery service.
* :meth:`list_bookings` – list a user's bookings, newest first.
* :meth:`save_processing_guide` – store a question and the answer given.
* :meth:`list_processing_guides` – list a user's question history.

Every method returns a tuple ``(result, error)``.  On success ``error``
is ``None``; on failure ``result`` is empty and ``error`` is a
dictionary with keys ``status_code`` and ``message``.  The message is
taken from the ``error`` field of the API's failure envelope when one
is present.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class FarmServiceAPI:
    """Client for interacting with the Farm Service API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:3000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds for each request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(envelope, error)``.  ``envelope`` is the parsed JSON
            body of a successful response.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") if isinstance(err_json, dict) else str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}
        except ValueError as exc:
            logger.error("API returned a non-JSON body: %s", exc)
            return None, {"status_code": response.status_code, "message": "Invalid JSON response"}

        if not isinstance(payload, dict) or not payload.get("success"):
            message = payload.get("error") if isinstance(payload, dict) else None
            return None, {"status_code": response.status_code, "message": message or "Request failed"}
        return payload, None

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def register_user(
        self,
        telegram_id: Any,
        name: str,
        phone: str,
        location: Optional[str] = None,
    ) -> Tuple[Optional[int], Optional[Error]]:
        """Register a user and return its internal ID.

        Re‑registering replaces the stored profile; pass every field
        that should be kept.
        """
        payload = {
            "telegramId": str(telegram_id),
            "name": name,
            "phone": phone,
            "location": location,
        }
        envelope, error = self._request("POST", "/api/register", json_body=payload)
        if error:
            return None, error
        return envelope.get("userId"), None

    def get_user(self, telegram_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Fetch a profile.  ``(None, None)`` means the user is not registered."""
        path = "/api/user/" + requests.utils.quote(str(telegram_id), safe="")
        envelope, error = self._request("GET", path)
        if error:
            return None, error
        return envelope.get("data"), None

    # ------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------
    def create_booking(self, user_id: int, booking: Dict[str, Any]) -> Tuple[Optional[int], Optional[Error]]:
        """Create a booking.

        Args:
            user_id: Internal ID returned by :meth:`register_user`.
            booking: Fields ``name``, ``age``, ``address``, ``farmSize``,
                ``equipment`` and ``serviceDate``.
        """
        envelope, error = self._request("POST", "/api/bookings", json_body={**booking, "userId": user_id})
        if error:
            return None, error
        return envelope.get("bookingId"), None

    def list_bookings(self, user_id: int) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        envelope, error = self._request("GET", f"/api/bookings/{user_id}")
        if error:
            return [], error
        return envelope.get("data") or [], None

    # ------------------------------------------------------------------
    # Processing guides
    # ------------------------------------------------------------------
    def save_processing_guide(
        self,
        user_id: int,
        question: str,
        response: str,
        type_: str,
    ) -> Tuple[Optional[int], Optional[Error]]:
        payload = {"userId": user_id, "question": question, "response": response, "type": type_}
        envelope, error = self._request("POST", "/api/processing", json_body=payload)
        if error:
            return None, error
        return envelope.get("guideId"), None

    def list_processing_guides(self, user_id: int) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        envelope, error = self._request("GET", f"/api/processing/{user_id}")
        if error:
            return [], error
        return envelope.get("data") or [], None
