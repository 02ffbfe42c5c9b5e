"""
Content Negotiator
==================
Chooses the response content type for a request from three signals, in
strict precedence order (first match wins):

  1. File extension on the last path segment (``/people.msgpack``).
  2. JSONP callback query parameter (``?callback=doSomething``), which also
     sets the ``options.client.callback`` codec option.
  3. ``Accept`` header media ranges, in the order the client listed them.

When none of them names a registered codec the default content type is
used.  Negotiation is a pure function of its inputs and never fails; a
missing codec is reported later by the codec service.
"""

import logging
from typing import Iterator, Mapping, Optional

from models.negotiation_result import OPTION_KEY_CLIENT_CALLBACK, NegotiationResult
from negotiation.codec_service import CodecService, normalize_content_type
from negotiation.codecs import CONTENT_TYPE_JSON, CONTENT_TYPE_JSONP

logger = logging.getLogger(__name__)

DEFAULT_CALLBACK_PARAM = "callback"


class ContentNegotiator:
    """
    Resolves a :class:`NegotiationResult` for a request.
    """

    def __init__(
        self,
        codec_service: CodecService,
        default_content_type: str = CONTENT_TYPE_JSON,
        callback_param: str = DEFAULT_CALLBACK_PARAM,
        jsonp_content_type: str = CONTENT_TYPE_JSONP,
    ):
        self.codec_service = codec_service
        self.default_content_type = default_content_type
        self.callback_param = callback_param
        self.jsonp_content_type = jsonp_content_type

    def negotiate(
        self,
        path: str,
        query: Optional[Mapping[str, str]] = None,
        accept: Optional[str] = None,
    ) -> NegotiationResult:
        # 1. File extension
        extension = path_extension(path)
        if extension:
            content_type = self.codec_service.content_type_for_extension(extension)
            if content_type:
                logger.debug("Negotiated %s from extension .%s", content_type, extension)
                return NegotiationResult(content_type)

        # 2. JSONP callback
        callback = (query or {}).get(self.callback_param)
        if callback:
            logger.debug("Negotiated %s from callback %s", self.jsonp_content_type, callback)
            return NegotiationResult(
                self.jsonp_content_type,
                {OPTION_KEY_CLIENT_CALLBACK: callback},
            )

        # 3. Accept header
        for media_type in accepted_media_types(accept):
            if self.codec_service.has_codec(media_type):
                logger.debug("Negotiated %s from Accept header", media_type)
                return NegotiationResult(media_type)

        # 4. Default
        return NegotiationResult(self.default_content_type)

    def negotiate_request(self, request) -> NegotiationResult:
        """Negotiate from a Starlette/FastAPI request."""
        return self.negotiate(
            request.url.path,
            request.query_params,
            request.headers.get("accept"),
        )


def path_extension(path: str) -> str:
    """Lowercased extension of the last path segment, or ``""``."""
    segment = path.rstrip("/").rsplit("/", 1)[-1]
    if "." not in segment:
        return ""
    return segment.rsplit(".", 1)[1].lower()


def accepted_media_types(accept: Optional[str]) -> Iterator[str]:
    """
    Yield the media ranges of an ``Accept`` header in listed order, without
    parameters.  Ranges marked ``q=0`` are not acceptable and are skipped.
    """
    if not accept:
        return
    for part in accept.split(","):
        media_type = normalize_content_type(part)
        if not media_type or _quality(part) == 0:
            continue
        yield media_type


def _quality(media_range: str) -> float:
    for param in media_range.split(";")[1:]:
        name, _, value = param.partition("=")
        if name.strip().lower() == "q":
            try:
                return float(value.strip())
            except ValueError:
                return 1.0
    return 1.0
