"""
Standard Response Envelope
==========================
Every API response is wrapped in a uniform envelope that carries:

  - status – the HTTP status code (always present).
  - data   – the payload (omitted entirely when ``None``).
  - errors – error messages as strings, in the order supplied (omitted when
             there are none).

The keys of those slots are configurable; the defaults are ``"s"``, ``"d"``
and ``"e"``, giving bodies such as ``{"d":{"name":"Mat"},"s":200}`` and
``{"e":["error message"],"s":500}``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.responder_config import DEFAULT_DATA_KEY, DEFAULT_ERRORS_KEY, DEFAULT_STATUS_KEY


@dataclass
class StandardResponse:
    """Envelope contents before they are keyed for the wire."""

    status: int
    data: Any = None
    errors: List[str] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Serialisation helper – maps the logical slots onto the configured
    # keys.
    # ------------------------------------------------------------------
    def to_dict(
        self,
        status_key: str = DEFAULT_STATUS_KEY,
        data_key: str = DEFAULT_DATA_KEY,
        errors_key: str = DEFAULT_ERRORS_KEY,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {status_key: self.status}
        if self.data is not None:
            payload[data_key] = self.data
        if self.errors:
            payload[errors_key] = list(self.errors)
        return payload


def normalize_errors(errors: Any) -> List[str]:
    """
    Flatten *errors* into a list of messages.

    Accepts ``None``, a single error (string, exception or any object) or an
    iterable of errors.  Each one is rendered with ``str()``.
    """
    if errors is None:
        return []
    if isinstance(errors, (str, bytes, BaseException, dict)):
        errors = [errors]
    else:
        try:
            errors = list(errors)
        except TypeError:
            errors = [errors]
    return [_error_message(e) for e in errors]


def _error_message(error: Any) -> str:
    if isinstance(error, bytes):
        return error.decode("utf-8", errors="replace")
    return str(error)


def build_envelope(
    status_key: str,
    data_key: str,
    errors_key: str,
    status: int,
    data: Any = None,
    errors: Optional[Any] = None,
) -> Dict[str, Any]:
    """Build the standard response object under the given keys."""
    return StandardResponse(
        status=status,
        data=data,
        errors=normalize_errors(errors),
    ).to_dict(status_key, data_key, errors_key)
