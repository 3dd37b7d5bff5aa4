# exceptions.py
from typing import Any, Optional

from .transport.dto import APIResponse


class BoxError(Exception):
    """Base class for errors raised by this package."""
    pass


class BoxAPIError(BoxError):
    """
    An error response from the Box API.
    Keeps the status code and the decoded body so callers can branch on them.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
        headers: Optional[dict] = None,
        reason: str = "",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.headers = headers or {}
        self.reason = reason

        details = body if isinstance(body, dict) else {}
        self.code = details.get("code")
        self.api_message = details.get("message")
        self.request_id = details.get("request_id")


class UnexpectedResponseError(BoxAPIError):
    """The API answered with a status code the caller did not expect."""
    pass


class AuthError(BoxAPIError):
    """The access token was rejected (HTTP 401)."""
    pass


def _describe(response: APIResponse) -> str:
    status = f"{response.status_code} {response.reason}".strip()
    message = f"[{status}]"
    if isinstance(response.body, dict):
        code = response.body.get("code")
        api_message = response.body.get("message")
        if code and api_message:
            message += f" {code} - {api_message}"
        elif code or api_message:
            message += f" {code or api_message}"
    return message


def build_unexpected_response_error(response: APIResponse) -> UnexpectedResponseError:
    return UnexpectedResponseError(
        f"Unexpected API Response {_describe(response)}",
        status_code=response.status_code,
        body=response.body,
        headers=response.headers,
        reason=response.reason,
    )


def build_auth_error(response: APIResponse) -> AuthError:
    return AuthError(
        f"Expired Auth: access token was rejected {_describe(response)}",
        status_code=response.status_code,
        body=response.body,
        headers=response.headers,
        reason=response.reason,
    )
