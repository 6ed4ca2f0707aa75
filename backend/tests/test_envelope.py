"""Response envelope tests."""

import runpy
import warnings

import httpx
import pytest

from fintrack.core.envelope import (
    Err,
    Ok,
    decode_envelope,
    error_envelope,
    is_api_response,
    parse_api_response,
    success_envelope,
)
from fintrack.core.exceptions import AuthExpired, EmptyResponse, InvalidResponse, RequestFailed


def test_failure_raises_with_error_message():
    with pytest.raises(RequestFailed) as exc:
        parse_api_response({"success": False, "error": "bad"})
    assert exc.value.message == "bad"


def test_null_data_raises_empty_response():
    with pytest.raises(EmptyResponse) as exc:
        parse_api_response({"success": True, "data": None})
    assert str(exc.value) == "No data in response"


def test_success_returns_data():
    assert parse_api_response({"success": True, "data": {"x": 1}}) == {"x": 1}


def test_falsy_data_is_still_data():
    assert parse_api_response({"success": True, "data": []}) == []
    assert parse_api_response({"success": True, "data": 0}) == 0


def test_decode_to_tagged_result():
    assert decode_envelope({"success": True, "data": None}) == Ok(None)
    assert decode_envelope({"success": False, "message": "nope"}) == Err("nope")
    assert decode_envelope({"success": False}) == Err("Request failed")


def test_non_envelope_is_invalid():
    with pytest.raises(InvalidResponse):
        parse_api_response(["not", "an", "envelope"])
    assert not is_api_response({"data": 1})
    assert is_api_response({"success": True})


def test_http_error_status_uses_body_message():
    response = httpx.Response(404, json={"success": False, "error": "Transaction not found"})
    with pytest.raises(RequestFailed) as exc:
        parse_api_response(response)
    assert exc.value.message == "Transaction not found"
    assert exc.value.status_code == 404


def test_http_401_raises_auth_expired():
    with pytest.raises(AuthExpired) as exc:
        parse_api_response(httpx.Response(401, text="unauthorized"))
    assert exc.value.message == "Request failed"
    assert exc.value.status_code == 401


def test_http_success_with_invalid_json():
    with pytest.raises(InvalidResponse):
        parse_api_response(httpx.Response(200, text="<html>"))


def test_http_success_unwraps_body():
    response = httpx.Response(200, json={"success": True, "data": {"rate": "27.0"}})
    assert parse_api_response(response) == {"rate": "27.0"}


def test_built_envelopes_drop_empty_fields():
    ok = success_envelope({"value": 1}, message="done")
    assert ok["success"] is True
    assert ok["data"] == {"value": 1}
    assert ok["message"] == "done"
    assert "timestamp" in ok

    err = error_envelope("bad", "/api/v1/x")
    assert err["success"] is False
    assert err["error"] == "bad"
    assert err["path"] == "/api/v1/x"
    assert "data" not in err


def test_exception_module_imports_without_deprecations():
    from fintrack.core import exceptions

    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        namespace = runpy.run_path(exceptions.__file__)

    assert namespace["ValidationError"].status_code == 422
