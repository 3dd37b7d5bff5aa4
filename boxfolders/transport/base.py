# transport/base.py
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from .dto import APIResponse, RequestParams
from ..exceptions import build_auth_error, build_unexpected_response_error


def default_response_handler(response: APIResponse) -> Any:
    """
    Turns a raw response into its body, or raises the matching API error.

    :param response: The response returned by the transport.
    :return: The decoded response body for any 2xx status.
    """
    if 200 <= response.status_code < 300:
        return response.body
    if response.status_code == 401:
        raise build_auth_error(response)
    raise build_unexpected_response_error(response)


class HTTPClient(ABC):
    """
    Abstract base class for the HTTP transport used by the managers.
    Concrete clients only need to implement the four verbs.
    """

    @abstractmethod
    def get(self, path: str, params: Optional[RequestParams] = None) -> APIResponse:
        """
        Issues a GET request.

        :param path: The API path, e.g. '/folders/0'.
        :param params: Query string, body and extra headers for the request.
        :return: The raw response.
        """
        pass

    @abstractmethod
    def post(self, path: str, params: Optional[RequestParams] = None) -> APIResponse:
        """Issues a POST request."""
        pass

    @abstractmethod
    def put(self, path: str, params: Optional[RequestParams] = None) -> APIResponse:
        """Issues a PUT request."""
        pass

    @abstractmethod
    def delete(self, path: str, params: Optional[RequestParams] = None) -> APIResponse:
        """Issues a DELETE request."""
        pass

    def wrap_with_default_handler(
        self, method: Callable[..., APIResponse]
    ) -> Callable[..., Any]:
        """
        Wraps one of the verb methods so that it returns the response body
        and raises a BoxAPIError for non-success statuses.
        """

        def handler(path: str, params: Optional[RequestParams] = None) -> Any:
            return default_response_handler(method(path, params))

        return handler
