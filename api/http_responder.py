"""
HTTP Responder
==============
Turns a status code, content type and encoded body into a FastAPI
``Response``.  Route handlers return what it produces.

The ``always200`` query parameter forces the HTTP status to ``200 OK`` for
clients that cannot read non-200 responses (JSONP via ``<script>`` tags).
The standard response object still carries the real status.
"""

import logging
from typing import Optional

from fastapi import Response, status
from fastapi.responses import RedirectResponse

from models.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_ALWAYS200_PARAM = "always200"


class HTTPResponder:
    """
    Writes status lines, headers and bodies.
    """

    def __init__(self, always200_param: Optional[str] = DEFAULT_ALWAYS200_PARAM):
        self.always200_param = always200_param

    def effective_status(self, request, http_status: int) -> int:
        if self.always200_param and request.query_params.get(self.always200_param):
            return status.HTTP_200_OK
        return http_status

    def write(self, request, http_status: int, content_type: str, body: bytes) -> Response:
        try:
            return Response(
                content=body,
                status_code=self.effective_status(request, http_status),
                media_type=content_type,
            )
        except Exception as exc:
            logger.error(
                f"Failed to write {content_type} response: {exc}",
                extra={"status": http_status, "content_type": content_type},
            )
            raise TransportError(f"Failed to write response: {exc}") from exc

    def with_status(self, request, http_status: int) -> Response:
        """Empty-bodied response with *http_status*."""
        return Response(status_code=self.effective_status(request, http_status))

    def with_ok(self, request) -> Response:
        return self.with_status(request, status.HTTP_200_OK)

    def with_redirect(self, request, location: str) -> Response:
        return RedirectResponse(location, status_code=status.HTTP_307_TEMPORARY_REDIRECT)

    def with_permanent_redirect(self, request, location: str) -> Response:
        return RedirectResponse(location, status_code=status.HTTP_301_MOVED_PERMANENTLY)
