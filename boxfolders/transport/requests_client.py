# transport/requests_client.py
import logging
from typing import Any, Optional

import requests

from .base import HTTPClient
from .dto import APIResponse, RequestParams


class BoxHTTPClient(HTTPClient):
    """
    HTTP transport for the Box API built on a requests.Session,
    implementing the HTTPClient interface.
    """

    def __init__(
        self,
        base_url: str,
        access_token: str,
        timeout: float = 60.0,
        user_agent: str = "boxfolders",
        session: Optional[requests.Session] = None,
    ):
        if not access_token:
            raise ValueError("An access token is required to call the Box API.")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {access_token}",
                "User-Agent": user_agent,
            }
        )
        logging.info(f"Box HTTP client initialized for {self.base_url}.")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        self.session.close()

    def _request(
        self, method: str, path: str, params: Optional[RequestParams] = None
    ) -> APIResponse:
        params = params or RequestParams()
        url = self.base_url + path

        kwargs: dict[str, Any] = {"timeout": self.timeout}
        if params.qs:
            kwargs["params"] = {k: v for k, v in params.qs.items() if v is not None}
        if params.body is not None:
            kwargs["json"] = params.body
        if params.headers:
            kwargs["headers"] = params.headers

        logging.debug(f"{method} {url}")
        try:
            r = self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            logging.error(f"{method} {url} failed before a response was received: {e}")
            raise

        if not r.ok:
            logging.error(f"{method} {url} returned {r.status_code}: {r.text}")

        return APIResponse(
            status_code=r.status_code,
            body=self._decode_body(r),
            headers=dict(r.headers),
            reason=r.reason or "",
        )

    @staticmethod
    def _decode_body(r: requests.Response) -> Any:
        if not r.content:
            return None
        try:
            return r.json()
        except ValueError:
            return r.text

    def get(self, path: str, params: Optional[RequestParams] = None) -> APIResponse:
        return self._request("GET", path, params)

    def post(self, path: str, params: Optional[RequestParams] = None) -> APIResponse:
        return self._request("POST", path, params)

    def put(self, path: str, params: Optional[RequestParams] = None) -> APIResponse:
        return self._request("PUT", path, params)

    def delete(self, path: str, params: Optional[RequestParams] = None) -> APIResponse:
        return self._request("DELETE", path, params)
