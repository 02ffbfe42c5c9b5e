"""
Responder Configuration
=======================
Immutable snapshot of everything an API responder needs to shape a standard
response object:

  - ``status_key`` – envelope key for the HTTP status (default ``"s"``).
  - ``data_key``   – envelope key for the payload (default ``"d"``).
  - ``errors_key`` – envelope key for the error list (default ``"e"``).
  - ``transformer`` – optional ``(request, envelope) -> envelope`` hook run
    once per response after the envelope is built.

The snapshot is frozen.  Reconfiguring a responder at runtime replaces the
whole snapshot, so a response in flight always sees one consistent set of
keys.
"""

from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


Transformer = Callable[[Any, Dict[str, Any]], Dict[str, Any]]

DEFAULT_STATUS_KEY = "s"
DEFAULT_DATA_KEY = "d"
DEFAULT_ERRORS_KEY = "e"


class ResponderConfig(BaseModel):
    """Field keys and transformer shared read-only by concurrent responses."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status_key: str = Field(default=DEFAULT_STATUS_KEY, min_length=1)
    data_key: str = Field(default=DEFAULT_DATA_KEY, min_length=1)
    errors_key: str = Field(default=DEFAULT_ERRORS_KEY, min_length=1)
    transformer: Optional[Transformer] = None

    @model_validator(mode="after")
    def keys_are_distinct(self) -> "ResponderConfig":
        keys = (self.status_key, self.data_key, self.errors_key)
        if len(set(keys)) != len(keys):
            raise ValueError(
                f"status, data and errors keys must be distinct, got {keys!r}"
            )
        return self

    def replace(self, **changes: Any) -> "ResponderConfig":
        """Return a validated copy with *changes* applied."""
        values: Dict[str, Any] = {
            "status_key": self.status_key,
            "data_key": self.data_key,
            "errors_key": self.errors_key,
            "transformer": self.transformer,
        }
        values.update(changes)
        return ResponderConfig(**values)
