"""
API Responder
=============
Orchestrates a structured API response.  **Every response**:

  1. Resolves the data's public representation (DataFacade).
  2. Builds the standard response object under the configured keys.
  3. Runs the configured transformer, if any.
  4. Negotiates the content type from the request.
  5. Encodes the object with the negotiated codec.
  6. Hands status, content type and bytes to the HTTP responder.

Each step either succeeds or raises a :class:`ResponderError` subclass; no
step is retried and nothing is written after a failure.

Public methods
~~~~~~~~~~~~~~
  - ``respond``               – full pipeline for status, data and errors.
  - ``respond_with_data``     – ``respond(request, 200, data)``.
  - ``respond_with_error``    – ``respond(request, status, None, errors)``.
  - ``write_response_object`` – negotiate, encode and write any object.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any, Optional

from fastapi import Response, status

from api.http_responder import HTTPResponder
from api.response_envelope import build_envelope
from models.errors import EncodingError, TransformError, UnsupportedContentType
from models.responder_config import ResponderConfig, Transformer
from negotiation.codec_service import CodecService
from negotiation.content_negotiator import ContentNegotiator
from negotiation.facade import resolve_public_data

logger = logging.getLogger(__name__)


class APIResponder:
    """
    Writes standard response objects in the format each client asked for.

    Configuration is held as an immutable :class:`ResponderConfig` snapshot.
    The key and transformer setters swap in a new snapshot; a response
    already in flight keeps the snapshot it started with.
    """

    def __init__(
        self,
        codec_service: CodecService,
        http_responder: HTTPResponder,
        config: Optional[ResponderConfig] = None,
        negotiator: Optional[ContentNegotiator] = None,
    ):
        self._codec_service = codec_service
        self.http_responder = http_responder
        self.negotiator = negotiator or ContentNegotiator(codec_service)
        self._config = config or ResponderConfig()
        self._config_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings) -> "APIResponder":
        """Wire a responder from :class:`ResponderSettings`."""
        codec_service = CodecService.default()
        negotiator = ContentNegotiator(
            codec_service,
            default_content_type=settings.default_content_type,
            callback_param=settings.callback_param,
        )
        return cls(
            codec_service,
            HTTPResponder(always200_param=settings.always200_param),
            config=settings.responder_config(),
            negotiator=negotiator,
        )

    # =====================================================================
    #  Configuration
    # =====================================================================
    @property
    def config(self) -> ResponderConfig:
        return self._config

    def configure(self, **changes: Any) -> ResponderConfig:
        """Validate *changes* and swap in the resulting snapshot."""
        with self._config_lock:
            self._config = self._config.replace(**changes)
            return self._config

    @property
    def status_key(self) -> str:
        return self._config.status_key

    @status_key.setter
    def status_key(self, value: str) -> None:
        self.configure(status_key=value)

    @property
    def data_key(self) -> str:
        return self._config.data_key

    @data_key.setter
    def data_key(self, value: str) -> None:
        self.configure(data_key=value)

    @property
    def errors_key(self) -> str:
        return self._config.errors_key

    @errors_key.setter
    def errors_key(self, value: str) -> None:
        self.configure(errors_key=value)

    @property
    def transformer(self) -> Optional[Transformer]:
        return self._config.transformer

    def set_transformer(self, transformer: Optional[Transformer]) -> None:
        """Set (or clear, with ``None``) the standard response object transformer."""
        self.configure(transformer=transformer)

    def get_codec_service(self) -> CodecService:
        return self._codec_service

    # =====================================================================
    #  Responding
    # =====================================================================
    def respond(
        self,
        request,
        http_status: int,
        data: Any = None,
        errors: Any = None,
    ) -> Response:
        """
        Respond with a standard response object.

        *errors* may be ``None``, a single error or a sequence of errors;
        each is rendered as its string message.

        Returns
        -------
        Response
            The encoded envelope with the negotiated ``Content-Type``.
        """
        config = self._config
        public_data = resolve_public_data(data)

        envelope = build_envelope(
            config.status_key,
            config.data_key,
            config.errors_key,
            http_status,
            public_data,
            errors,
        )

        if config.transformer is not None:
            envelope = self._transform(config.transformer, request, envelope)

        return self.write_response_object(request, http_status, envelope)

    def respond_with_data(self, request, data: Any) -> Response:
        return self.respond(request, status.HTTP_200_OK, data, None)

    def respond_with_error(self, request, http_status: int, errors: Any) -> Response:
        return self.respond(request, http_status, None, errors)

    def write_response_object(self, request, http_status: int, obj: Any) -> Response:
        """
        Negotiate, encode and write *obj* as-is (no envelope).

        Raises
        ------
        UnsupportedContentType
            No codec is registered for the negotiated content type.
        EncodingError
            The codec could not marshal *obj*.
        TransportError
            The HTTP responder failed.
        """
        result = self.negotiator.negotiate_request(request)
        try:
            codec = self._codec_service.get_codec(result.target_content_type)
        except UnsupportedContentType as exc:
            logger.warning(
                f"No codec for negotiated content type {exc.content_type}",
                extra={"content_type": exc.content_type, "error_code": exc.code, "path": request.url.path},
            )
            raise

        try:
            body = codec.marshal(obj, result.codec_options)
        except Exception as exc:
            logger.warning(
                f"{type(codec).__name__} failed to marshal response: {exc}",
                extra={"content_type": result.target_content_type, "status": http_status},
            )
            raise EncodingError(
                f"Could not encode response as {result.target_content_type}: {exc}",
                content_type=result.target_content_type,
            ) from exc

        return self.http_responder.write(
            request, http_status, result.target_content_type, body,
        )

    def _transform(self, transformer: Transformer, request, envelope):
        try:
            transformed = transformer(request, envelope)
        except TransformError:
            raise
        except Exception as exc:
            logger.warning(f"Standard response object transformer failed: {exc}")
            raise TransformError(f"Transformer failed: {exc}") from exc

        if not isinstance(transformed, Mapping):
            raise TransformError(
                f"Transformer must return a mapping, got {type(transformed).__name__}"
            )
        return dict(transformed)
