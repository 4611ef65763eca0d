"""Client library for the HipChat v1 REST API."""

from hipchat.client import HipchatClient
from hipchat.config import HipchatConfig, get_config
from hipchat.errors import HipchatError, decode_error
from hipchat.models import (
    DEFAULT_BASE_URL,
    AuthResponse,
    Color,
    Message,
    MessageFormat,
    MessageRequest,
    Room,
)

__version__ = "0.1.0"

__all__ = [
    "HipchatClient",
    "HipchatConfig",
    "get_config",
    "HipchatError",
    "decode_error",
    "DEFAULT_BASE_URL",
    "AuthResponse",
    "Color",
    "Message",
    "MessageFormat",
    "MessageRequest",
    "Room",
]
