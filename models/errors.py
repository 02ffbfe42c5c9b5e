"""
Responder Error Hierarchy
=========================
Typed exceptions for every way a response can fail between the caller's data
and the bytes on the wire.  Each error carries:

  - ``code``        – stable machine-readable identifier.
  - ``message``     – human-readable description.
  - ``http_status`` – status a framework error handler should answer with.

None of these are retried or silently degraded by the responders; they
propagate to the caller of ``respond`` / ``write_response_object``.
"""

from typing import Any, Dict, Optional


class ResponderError(Exception):
    """Base class for every failure raised while building or writing a response."""

    def __init__(self, message: str, code: str = "RESPONDER_ERROR", http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    def to_response(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}


class FacadeError(ResponderError):
    """A DataFacade failed to produce its public representation."""

    def __init__(self, message: str):
        super().__init__(message, "FACADE_ERROR")


class TransformError(ResponderError):
    """The configured standard response object transformer failed."""

    def __init__(self, message: str):
        super().__init__(message, "TRANSFORM_ERROR")


class UnsupportedContentType(ResponderError):
    """No codec is registered for the negotiated content type."""

    def __init__(self, content_type: str):
        super().__init__(
            f"No codec registered for content type '{content_type}'",
            "UNSUPPORTED_CONTENT_TYPE",
            406,
        )
        self.content_type = content_type


class EncodingError(ResponderError):
    """A codec could not marshal the response object."""

    def __init__(self, message: str, content_type: Optional[str] = None):
        super().__init__(message, "ENCODING_ERROR")
        self.content_type = content_type


class TransportError(ResponderError):
    """The HTTP responder could not produce the response."""

    def __init__(self, message: str):
        super().__init__(message, "TRANSPORT_ERROR")
