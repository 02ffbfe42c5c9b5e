import pytest

from api.response_envelope import StandardResponse, build_envelope, normalize_errors
from models.errors import FacadeError
from negotiation.facade import DataFacade, resolve_public_data


class PublicUser:
    def __init__(self):
        self.password = "secret"

    def public_data(self, options):
        return {"used-public-data": True, "options": options}


class BrokenFacade:
    def public_data(self, options):
        raise RuntimeError("database unavailable")


# -----------------------------------------------------------------------
#  Envelope builder
# -----------------------------------------------------------------------

def test_envelope_with_data_only():
    assert build_envelope("s", "d", "e", 200, {"name": "Mat"}) == {"s": 200, "d": {"name": "Mat"}}


def test_envelope_omits_absent_data_and_errors():
    envelope = build_envelope("s", "d", "e", 204)
    assert envelope == {"s": 204}
    assert "d" not in envelope and "e" not in envelope


def test_envelope_keeps_falsy_data():
    assert build_envelope("s", "d", "e", 200, []) == {"s": 200, "d": []}
    assert build_envelope("s", "d", "e", 200, 0) == {"s": 200, "d": 0}


def test_envelope_with_single_error():
    assert build_envelope("s", "d", "e", 500, None, "error message") == {
        "s": 500,
        "e": ["error message"],
    }


def test_envelope_with_custom_keys():
    envelope = build_envelope("status", "data", "errors", 400, {"x": 1}, ["bad"])
    assert envelope == {"status": 400, "data": {"x": 1}, "errors": ["bad"]}


def test_envelope_omits_empty_error_list():
    assert build_envelope("s", "d", "e", 200, "ok", []) == {"s": 200, "d": "ok"}


def test_standard_response_to_dict_defaults():
    response = StandardResponse(status=201, data={"id": 7}, errors=["warn"])
    assert response.to_dict() == {"s": 201, "d": {"id": 7}, "e": ["warn"]}


# -----------------------------------------------------------------------
#  Error normalisation
# -----------------------------------------------------------------------

def test_normalize_errors_from_exceptions_in_order():
    errors = [ValueError("first"), "second", KeyError("third")]
    assert normalize_errors(errors) == ["first", "second", "'third'"]


def test_normalize_errors_single_exception():
    assert normalize_errors(RuntimeError("boom")) == ["boom"]


def test_normalize_errors_tuple_and_generator():
    assert normalize_errors(("a", "b")) == ["a", "b"]
    assert normalize_errors(e for e in ["x", "y"]) == ["x", "y"]


def test_normalize_errors_non_iterable_object():
    assert normalize_errors(404) == ["404"]


def test_normalize_errors_bytes_and_none():
    assert normalize_errors(b"raw") == ["raw"]
    assert normalize_errors(None) == []


# -----------------------------------------------------------------------
#  Facade resolver
# -----------------------------------------------------------------------

def test_facade_capability_check():
    assert isinstance(PublicUser(), DataFacade)
    assert not isinstance({"name": "Mat"}, DataFacade)


def test_resolve_public_data_uses_facade():
    assert resolve_public_data(PublicUser()) == {"used-public-data": True, "options": None}


def test_resolve_public_data_passes_options():
    assert resolve_public_data(PublicUser(), {"depth": 1})["options"] == {"depth": 1}


def test_resolve_public_data_passes_plain_values_through():
    data = {"name": "Mat"}
    assert resolve_public_data(data) is data
    assert resolve_public_data(None) is None


def test_resolve_public_data_is_not_recursive():
    user = PublicUser()
    assert resolve_public_data([user])[0] is user


def test_resolve_public_data_failure_propagates():
    with pytest.raises(FacadeError) as exc_info:
        resolve_public_data(BrokenFacade())
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert "database unavailable" in exc_info.value.message


def test_resolve_public_data_reraises_facade_errors_unchanged():
    original = FacadeError("hidden")

    class Refusing:
        def public_data(self, options):
            raise original

    with pytest.raises(FacadeError) as exc_info:
        resolve_public_data(Refusing())
    assert exc_info.value is original
