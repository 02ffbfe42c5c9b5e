"""Shared fixtures: codec service, responder and Starlette requests built from ASGI scopes."""

from typing import Dict, Optional

import pytest
from fastapi import Request

from api.api_responder import APIResponder
from api.http_responder import HTTPResponder
from negotiation.codec_service import CodecService


def make_request(
    path: str = "/",
    query_string: str = "",
    headers: Optional[Dict[str, str]] = None,
) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("testserver", 80),
        "path": path,
        "root_path": "",
        "query_string": query_string.encode("latin-1"),
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ],
    }
    return Request(scope)


@pytest.fixture
def codec_service():
    return CodecService.default()


@pytest.fixture
def responder(codec_service):
    return APIResponder(codec_service, HTTPResponder())


@pytest.fixture
def request_factory():
    return make_request
