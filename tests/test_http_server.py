import msgpack
from fastapi.testclient import TestClient

from api.api_responder import APIResponder
from api.http_responder import HTTPResponder
from api.http_server import app, get_responder
from negotiation.codec_service import CodecService
from negotiation.content_negotiator import ContentNegotiator


def _client():
    app.dependency_overrides.clear()
    return TestClient(app)


def test_health():
    client = _client()
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_http_negotiation_flow():
    client = _client()

    default = client.get("/v1/people")
    assert default.status_code == 200
    assert default.headers["content-type"].startswith("application/json")
    assert default.json() == {
        "d": [
            {"name": "Mat", "role": "maintainer"},
            {"name": "Tyler", "role": "member"},
            {"name": "Oleksandr", "role": "member"},
        ],
        "s": 200,
    }

    by_extension = client.get("/v1/people.msgpack", params={"callback": "cb"})
    assert by_extension.headers["content-type"] == "application/x-msgpack"
    assert msgpack.unpackb(by_extension.content)["d"][0] == {"name": "Mat", "role": "maintainer"}

    by_callback = client.get("/v1/people/mat", params={"callback": "doSomething"})
    assert by_callback.headers["content-type"].startswith("text/javascript")
    assert by_callback.text == 'doSomething({"d":{"name":"Mat","role":"maintainer"},"s":200});'

    by_accept = client.get("/v1/people/tyler", headers={"Accept": "application/x-msgpack"})
    assert by_accept.headers["content-type"] == "application/x-msgpack"
    assert msgpack.unpackb(by_accept.content) == {"s": 200, "d": {"name": "Tyler", "role": "member"}}


def test_facade_hides_private_fields():
    client = _client()
    payload = client.get("/v1/people/mat.json").json()
    assert payload == {"d": {"name": "Mat", "role": "maintainer"}, "s": 200}
    assert "email" not in payload["d"]


def test_http_error_envelope():
    client = _client()

    missing = client.get("/v1/people/nobody")
    assert missing.status_code == 404
    assert missing.json() == {"e": ["Person 'nobody' not found"], "s": 404}

    forced = client.get("/v1/errors/503", params={"always200": "true"})
    assert forced.status_code == 200
    assert forced.json() == {"e": ["Example error 503"], "s": 503}


def test_responder_errors_are_handled():
    codec_service = CodecService.default()
    negotiator = ContentNegotiator(codec_service, default_content_type="text/html")
    app.dependency_overrides[get_responder] = lambda: APIResponder(
        codec_service, HTTPResponder(), negotiator=negotiator,
    )
    try:
        client = TestClient(app)
        response = client.get("/v1/people")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 406
    assert response.json() == {
        "e": ["No codec registered for content type 'text/html'"],
        "s": 406,
    }
