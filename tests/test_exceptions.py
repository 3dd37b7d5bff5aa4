# tests/test_exceptions.py
from boxfolders.exceptions import (
    AuthError,
    BoxAPIError,
    UnexpectedResponseError,
    build_auth_error,
    build_unexpected_response_error,
)
from boxfolders.transport.dto import APIResponse


def test_unexpected_response_error_carries_details():
    response = APIResponse(
        status_code=404,
        reason="Not Found",
        body={
            "type": "error",
            "code": "not_found",
            "message": "Item not found",
            "request_id": "abc123",
        },
        headers={"box-request-id": "abc123"},
    )

    error = build_unexpected_response_error(response)

    assert isinstance(error, UnexpectedResponseError)
    assert isinstance(error, BoxAPIError)
    assert str(error) == "Unexpected API Response [404 Not Found] not_found - Item not found"
    assert error.status_code == 404
    assert error.code == "not_found"
    assert error.api_message == "Item not found"
    assert error.request_id == "abc123"
    assert error.headers == {"box-request-id": "abc123"}


def test_unexpected_response_error_without_json_body():
    error = build_unexpected_response_error(
        APIResponse(status_code=502, reason="Bad Gateway", body="<html>")
    )

    assert str(error) == "Unexpected API Response [502 Bad Gateway]"
    assert error.code is None
    assert error.body == "<html>"


def test_auth_error():
    error = build_auth_error(APIResponse(status_code=401, reason="Unauthorized"))

    assert isinstance(error, AuthError)
    assert error.status_code == 401
    assert "401 Unauthorized" in str(error)
