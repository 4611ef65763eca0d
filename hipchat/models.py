"""Data models for the HipChat v1 REST client.

Request values are plain dataclasses that know how to serialize themselves
into form parameters. Response values are pydantic models that mirror the
JSON bodies the service returns.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

DEFAULT_BASE_URL = "https://api.hipchat.com/v1"

RESPONSE_STATUS_SENT = "sent"


class Color(str, Enum):
    YELLOW = "yellow"
    RED = "red"
    GREEN = "green"
    PURPLE = "purple"
    GRAY = "gray"
    RANDOM = "random"


class MessageFormat(str, Enum):
    TEXT = "text"
    HTML = "html"


# ── Requests ──────────────────────────────────────────────────────────


@dataclass
class MessageRequest:
    """A message to post to a room.

    ``room_id`` is the ID or name of the room. ``from_name`` is the name the
    message appears to be sent from (less than 15 characters). ``message`` is
    the body, 10,000 characters max.

    ``message_format`` and ``color`` are left to the server defaults (html,
    yellow) when empty. ``notify`` makes the message trigger a notification
    for people in the room. ``auth_test`` only validates the token; nothing
    is posted.
    """

    room_id: str
    from_name: str
    message: str
    message_format: MessageFormat | str = ""
    color: Color | str = ""
    notify: bool = False
    auth_test: bool = False

    def validate(self) -> None:
        """Raise ValueError unless room_id, from_name and message are set."""
        if not self.room_id or not self.from_name or not self.message:
            raise ValueError("The room_id, from and message fields are all required.")

    def to_form(self) -> dict[str, str]:
        """Build the form payload for POST /rooms/message."""
        self.validate()
        payload = {
            "room_id": self.room_id,
            "from": self.from_name,
            "message": self.message,
        }
        if self.notify:
            payload["notify"] = "1"
        color = _enum_value(self.color)
        if color:
            payload["color"] = color
        message_format = _enum_value(self.message_format)
        if message_format:
            payload["message_format"] = message_format
        return payload


def _enum_value(value: Enum | str | None) -> str:
    if isinstance(value, Enum):
        return value.value
    return value or ""


# ── Responses ─────────────────────────────────────────────────────────


def _from_unix(ts: int) -> datetime | None:
    # The service reports 0 when the time is unknown.
    if not ts:
        return None
    return datetime.fromtimestamp(ts, tz=timezone.utc)


class ServiceModel(BaseModel):
    """Base for response bodies.

    The service sends ``null`` for unset fields; those decode to the field's
    default instead of failing validation.
    """

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name is not None:
            field = cls.model_fields[info.field_name]
            if not field.is_required():
                return field.get_default(call_default_factory=True)
        return value


class Room(ServiceModel):
    """A room as returned by /rooms/list."""

    model_config = ConfigDict(populate_by_name=True)

    room_id: int
    name: str = ""
    topic: str = ""
    last_active: int = 0
    created: int = 0
    archived: bool = Field(default=False, alias="is_archived")
    private: bool = Field(default=False, alias="is_private")
    owner_user_id: int = 0
    xmpp_jid: str = ""

    @property
    def last_active_at(self) -> datetime | None:
        return _from_unix(self.last_active)

    @property
    def created_at(self) -> datetime | None:
        return _from_unix(self.created)


class MessageSender(ServiceModel):
    name: str = ""
    # Numeric for users, the string "api" for messages posted through the API.
    user_id: int | str = 0


class MessageFile(ServiceModel):
    name: str = ""
    size: int = 0
    url: str = ""


class Message(ServiceModel):
    """A chat message from /rooms/history."""

    model_config = ConfigDict(populate_by_name=True)

    date: str = ""
    sender: MessageSender = Field(default_factory=MessageSender, alias="from")
    message: str = ""
    file: MessageFile | None = None
    color: str | None = None
    message_format: str | None = None


class HipchatErrorBody(ServiceModel):
    """The ``error`` object the service attaches to failed responses."""

    code: int = 0
    type: str = ""
    message: str = ""


class AuthResult(ServiceModel):
    code: int = 0
    type: str = ""
    message: str = ""


class AuthResponse(ServiceModel):
    """Body returned by any call made with ``auth_test=true``."""

    success: AuthResult | None = None
    error: HipchatErrorBody | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MessageResponse(ServiceModel):
    status: str = ""


class RoomListResponse(ServiceModel):
    rooms: list[Room] | None = None


class RoomHistoryResponse(ServiceModel):
    messages: list[Message] | None = None
