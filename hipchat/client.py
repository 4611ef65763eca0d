"""HTTP client for the HipChat v1 REST API.

Each public method performs exactly one synchronous round trip. The auth
token travels as the ``auth_token`` query parameter on every request.
"""

from __future__ import annotations

import json
import logging
from datetime import date as date_type
from typing import Any

import httpx

from hipchat.config import HipchatConfig, get_config
from hipchat.errors import HipchatError, decode_error
from hipchat.models import (
    DEFAULT_BASE_URL,
    RESPONSE_STATUS_SENT,
    AuthResponse,
    Message,
    MessageRequest,
    MessageResponse,
    Room,
    RoomHistoryResponse,
    RoomListResponse,
)

logger = logging.getLogger("hipchat.client")


class HipchatClient:
    """Client for the HipChat rooms API.

    Usage::

        with HipchatClient("my-token") as client:
            for room in client.room_list():
                print(room.name)
            client.post_message(MessageRequest("ops", "deploybot", "Deployed."))

    The client holds no state besides its token, base URL and the underlying
    ``httpx.Client``; it never mutates itself after construction, so one
    instance can be shared between threads.
    """

    def __init__(
        self,
        auth_token: str,
        base_url: str | None = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ):
        self.auth_token = auth_token
        self.base_url = base_url
        self.timeout = timeout
        self._http = httpx.Client(timeout=timeout)

    @classmethod
    def from_config(cls, config: HipchatConfig | None = None) -> HipchatClient:
        """Build a client from a HipchatConfig (environment by default)."""
        if config is None:
            config = get_config()
        return cls(config.auth_token, base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        """Close the HTTP client."""
        self._http.close()

    def __enter__(self) -> HipchatClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # -------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------

    def _url(self, path: str) -> str:
        base = self.base_url or DEFAULT_BASE_URL
        return f"{base.rstrip('/')}{path}"

    def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str],
        data: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Issue one request with the auth token appended to the query.

        Raises:
            ConnectionError: If the service is unreachable.
            TimeoutError: If the request exceeds its deadline.
        """
        query = {"auth_token": self.auth_token, **params}
        request_timeout = timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT
        logger.debug("%s %s", method, path)
        try:
            if method == "POST":
                return self._http.post(
                    self._url(path), params=query, data=data, timeout=request_timeout
                )
            return self._http.get(self._url(path), params=query, timeout=request_timeout)
        except httpx.ConnectError as e:
            raise ConnectionError(
                f"Cannot connect to HipChat at {self._url('')}: {e}"
            ) from e
        except httpx.TimeoutException as e:
            raise TimeoutError(f"HipChat request to {path} timed out: {e}") from e

    def _raise_for_error(self, response: httpx.Response, path: str) -> None:
        if response.status_code == 200:
            return
        error = decode_error(response.text, status_code=response.status_code)
        logger.warning(
            "HipChat error on %s (HTTP %d): [%d %s] %s",
            path, response.status_code, error.code, error.type, error.message,
        )
        raise error

    # -------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------

    def post_message(
        self, request: MessageRequest, *, timeout: float | None = None
    ) -> AuthResponse | None:
        """Post a message to a room.

        Returns None once the service reports the message as sent. When
        ``request.auth_test`` is set nothing is posted and the decoded
        AuthResponse is returned instead.

        Raises:
            ValueError: If room_id, from_name or message is empty. No request
                is made in that case.
            HipchatError: If the service rejects the message or the token.
        """
        payload = request.to_form()
        params = {"auth_test": "true"} if request.auth_test else {}
        response = self._send(
            "POST", "/rooms/message", params=params, data=payload, timeout=timeout
        )

        if request.auth_test:
            auth = AuthResponse.model_validate(json.loads(response.text))
            if auth.error is not None:
                logger.warning("HipChat auth test failed: %s", auth.error.message)
                raise HipchatError.from_body(auth.error)
            return auth

        status = MessageResponse.model_validate(json.loads(response.text)).status
        if status == RESPONSE_STATUS_SENT:
            return None

        fallback = HipchatError(
            code=response.status_code,
            error_type="UnknownStatus",
            message=f"PostMessage: response 'status' field was {status!r}, not 'sent'.",
        )
        error = decode_error(
            response.text, status_code=response.status_code, fallback=fallback
        )
        logger.warning("HipChat did not send message to %s: %s", request.room_id, error.message)
        raise error

    # -------------------------------------------------------------------
    # Rooms
    # -------------------------------------------------------------------

    def room_list(self, *, timeout: float | None = None) -> list[Room]:
        """List the rooms visible to the token.

        Raises:
            HipchatError: If the service responds with a non-200 status.
        """
        response = self._send("GET", "/rooms/list", params={}, timeout=timeout)
        self._raise_for_error(response, "/rooms/list")
        parsed = RoomListResponse.model_validate(json.loads(response.text))
        return parsed.rooms or []

    def room_history(
        self,
        room_id: str,
        date: str | date_type = "recent",
        timezone: str = "UTC",
        *,
        timeout: float | None = None,
    ) -> list[Message]:
        """Fetch the message history of a room.

        Args:
            room_id: ID or name of the room.
            date: ``YYYY-MM-DD`` day to fetch, a ``date``, or ``"recent"``
                for the latest messages.
            timezone: Timezone name used to interpret ``date``.

        Raises:
            HipchatError: If the service responds with a non-200 status.
        """
        if isinstance(date, date_type):
            date = date.strftime("%Y-%m-%d")
        params = {"room_id": str(room_id), "date": date, "timezone": timezone}
        response = self._send("GET", "/rooms/history", params=params, timeout=timeout)
        self._raise_for_error(response, "/rooms/history")
        parsed = RoomHistoryResponse.model_validate(json.loads(response.text))
        return parsed.messages or []
