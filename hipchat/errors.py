"""Errors reported by the HipChat service."""

from __future__ import annotations

import json

from hipchat.models import HipchatErrorBody


class HipchatError(Exception):
    """A failure reported by the remote service.

    Attributes:
        code: The service (usually HTTP-like) error code.
        type: Short error category, e.g. ``"Unauthorized"``.
        message: Human readable description.
    """

    def __init__(self, code: int = 0, error_type: str = "", message: str = ""):
        super().__init__(message)
        self.code = code
        self.type = error_type
        self.message = message

    @classmethod
    def from_body(cls, body: HipchatErrorBody) -> HipchatError:
        return cls(code=body.code, error_type=body.type, message=body.message)

    def __repr__(self) -> str:
        return f"HipchatError(code={self.code!r}, type={self.type!r}, message={self.message!r})"


def decode_error(
    body: str | bytes,
    *,
    status_code: int | None = None,
    fallback: HipchatError | None = None,
) -> HipchatError:
    """Decode an ``{"error": {...}}`` response body into a HipchatError.

    The error is returned, not raised. A body that is not JSON raises
    ``json.JSONDecodeError``. A JSON body without an ``error`` object yields
    ``fallback`` when given, otherwise a generic error built from
    ``status_code``.
    """
    data = json.loads(body)
    err = data.get("error") if isinstance(data, dict) else None
    if isinstance(err, dict):
        return HipchatError.from_body(HipchatErrorBody.model_validate(err))
    if fallback is not None:
        return fallback
    return HipchatError(
        code=status_code or 0,
        error_type="UnknownError",
        message=f"Unrecognized error response (HTTP {status_code})",
    )
