import json
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

import msgpack
from fastapi.encoders import jsonable_encoder

from models.negotiation_result import OPTION_KEY_CLIENT_CALLBACK


CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_JSONP = "text/javascript"
CONTENT_TYPE_MSGPACK = "application/x-msgpack"

DEFAULT_CALLBACK = "callback"

# Dotted JavaScript identifier, e.g. "doSomething" or "app.handlers.done".
_CALLBACK_PATTERN = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")


class Codec(ABC):
    """
    Encodes a value into the bytes of one content type.
    """
    content_type: str = ""
    extensions: Tuple[str, ...] = ()

    @abstractmethod
    def marshal(self, value: Any, options: Optional[Dict[str, Any]] = None) -> bytes:
        ...

    def __repr__(self):
        return f"<{type(self).__name__}(content_type={self.content_type})>"


class JSONCodec(Codec):
    """
    Compact UTF-8 JSON.  Object keys are emitted in sorted order, so the
    default envelope reads ``{"d":...,"e":[...],"s":200}``.  Dataclasses,
    pydantic models and datetimes go through ``jsonable_encoder`` first;
    NaN and Infinity are rejected.
    """
    content_type = CONTENT_TYPE_JSON
    extensions = ("json",)

    def marshal(self, value, options=None):
        return _dump_json(value).encode("utf-8")


class JSONPCodec(Codec):
    """
    JSON wrapped in a named function call: ``callback(<json>);``.  The name
    comes from the ``options.client.callback`` option.
    """
    content_type = CONTENT_TYPE_JSONP
    extensions = ("js", "jsonp")

    def marshal(self, value, options=None):
        callback = (options or {}).get(OPTION_KEY_CLIENT_CALLBACK) or DEFAULT_CALLBACK
        if not _CALLBACK_PATTERN.match(callback):
            raise ValueError(f"Invalid JSONP callback name: {callback!r}")
        return f"{callback}({_dump_json(value)});".encode("utf-8")


class MsgpackCodec(Codec):
    """
    MessagePack.  Map keys keep insertion order.
    """
    content_type = CONTENT_TYPE_MSGPACK
    extensions = ("msgpack",)

    def marshal(self, value, options=None):
        return msgpack.packb(jsonable_encoder(value), use_bin_type=True)


def _dump_json(value: Any) -> str:
    return json.dumps(
        _string_keys(jsonable_encoder(value)),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def _string_keys(value: Any) -> Any:
    """Turn non-string object keys into their JSON text (1 -> "1", True -> "true")."""
    if isinstance(value, dict):
        return {
            key if isinstance(key, str) else json.dumps(key): _string_keys(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_string_keys(item) for item in value]
    return value
