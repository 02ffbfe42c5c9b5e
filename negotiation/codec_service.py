"""
Codec Service
=============
Registry that maps content types to codecs and file extensions to content
types.  The content negotiator consults it to decide which signals point at
a codec that actually exists; the API responder uses it to fetch the codec
for the negotiated type.

Lookups are case-insensitive and ignore media type parameters, so
``"Application/JSON; charset=utf-8"`` resolves to the JSON codec.
"""

import logging
from typing import Dict, List, Optional

from models.errors import UnsupportedContentType
from negotiation.codecs import Codec, JSONCodec, JSONPCodec, MsgpackCodec

logger = logging.getLogger(__name__)


def normalize_content_type(content_type: str) -> str:
    """Strip parameters and lowercase a media type."""
    return content_type.split(";", 1)[0].strip().lower()


class CodecService:
    """
    Content type → codec and extension → content type lookups.
    """

    def __init__(self, codecs: Optional[List[Codec]] = None):
        self._codecs: Dict[str, Codec] = {}
        self._extensions: Dict[str, str] = {}
        for codec in codecs or []:
            self.register(codec)

    @classmethod
    def default(cls) -> "CodecService":
        """Service with the JSON, JSONP and MessagePack codecs registered."""
        return cls([JSONCodec(), JSONPCodec(), MsgpackCodec()])

    def register(self, codec: Codec) -> Codec:
        content_type = normalize_content_type(codec.content_type)
        if not content_type:
            raise ValueError(f"{codec!r} does not declare a content type")
        self._codecs[content_type] = codec
        for ext in codec.extensions:
            self._extensions[ext.lower().lstrip(".")] = content_type
        logger.debug("Registered codec %s for %s", type(codec).__name__, content_type)
        return codec

    def get_codec(self, content_type: str) -> Codec:
        codec = self._codecs.get(normalize_content_type(content_type))
        if codec is None:
            raise UnsupportedContentType(content_type)
        return codec

    def has_codec(self, content_type: str) -> bool:
        return normalize_content_type(content_type) in self._codecs

    def content_type_for_extension(self, extension: str) -> Optional[str]:
        return self._extensions.get(extension.lower().lstrip("."))

    def content_types(self) -> List[str]:
        return list(self._codecs)
