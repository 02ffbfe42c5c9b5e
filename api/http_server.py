from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from api.api_responder import APIResponder
from api.observability import setup_logging
from api.settings import get_settings
from models.errors import ResponderError

logger = logging.getLogger(__name__)


@dataclass
class Person:
    name: str
    email: str
    role: str = "member"

    def public_data(self, options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return {"name": self.name, "role": self.role}


PEOPLE: Dict[str, Person] = {
    "mat": Person(name="Mat", email="mat@example.com", role="maintainer"),
    "tyler": Person(name="Tyler", email="tyler@example.com"),
    "oleksandr": Person(name="Oleksandr", email="oleksandr@example.com"),
}


@lru_cache
def get_responder() -> APIResponder:
    return APIResponder.from_settings(get_settings())


@asynccontextmanager
async def lifespan(_: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    yield


app = FastAPI(
    title="API Responders",
    version="1.0.0",
    description=(
        "Standard response envelopes with content negotiation by file "
        "extension, JSONP callback and Accept header."
    ),
    lifespan=lifespan,
)


@app.exception_handler(ResponderError)
async def responder_error_handler(request: Request, exc: ResponderError):
    """A response could not be produced; answer with plain JSON."""
    logger.error(
        f"ResponderError: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    config = get_responder().config
    return JSONResponse(
        status_code=exc.http_status,
        content={config.errors_key: [exc.message], config.status_key: exc.http_status},
    )


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/v1/people")
def list_people(request: Request, responder: APIResponder = Depends(get_responder)) -> Response:
    return responder.respond_with_data(request, [p.public_data(None) for p in PEOPLE.values()])


@app.get("/v1/people.{ext}")
def list_people_with_extension(
    ext: str, request: Request, responder: APIResponder = Depends(get_responder),
) -> Response:
    return responder.respond_with_data(request, [p.public_data(None) for p in PEOPLE.values()])


@app.get("/v1/people/{name}")
def get_person(
    name: str, request: Request, responder: APIResponder = Depends(get_responder),
) -> Response:
    person = PEOPLE.get(name.rsplit(".", 1)[0].lower())
    if person is None:
        return responder.respond_with_error(
            request, status.HTTP_404_NOT_FOUND, f"Person '{name}' not found",
        )
    return responder.respond_with_data(request, person)


@app.get("/v1/errors/{http_status}")
def echo_error(
    http_status: int, request: Request, responder: APIResponder = Depends(get_responder),
) -> Response:
    return responder.respond_with_error(request, http_status, f"Example error {http_status}")
