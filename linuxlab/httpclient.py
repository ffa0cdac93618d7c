"""A small blocking HTTP client used by the speech service wrappers."""

import http.client
import json
import ssl
from typing import Any
from urllib.parse import quote, urlsplit


class HttpError(Exception):
    """Raised when a request cannot be carried out."""


def _escape(text: str) -> str:
    return quote(text, safe="")


def make_urlencoded_form(params: dict[str, str]) -> str:
    """Encode parameters in key order; every pair is followed by '&'."""
    return "".join(
        f"{_escape(key)}={_escape(params[key])}&" for key in sorted(params)
    )


def append_url_params(url: str, params: dict[str, str] | None) -> str:
    """Return url with the encoded parameters added to its query."""
    if not params:
        return url
    separator = "&" if "?" in url else "?"
    return url + separator + make_urlencoded_form(params)


class HttpClient:
    """Sends GET and POST requests and returns the response body.

    Timeouts are in milliseconds. Certificates are not verified. A response
    with an error status is still returned as a body; only transport
    failures raise HttpError.
    """

    def __init__(
        self,
        connect_timeout: int = 10000,
        socket_timeout: int = 10000,
        debug: bool = False,
    ):
        self.connect_timeout = connect_timeout
        self.socket_timeout = socket_timeout
        self.debug = debug

    def _connection(self, scheme: str, host: str, port: int | None):
        timeout = self.connect_timeout / 1000
        if scheme == "https":
            context = ssl.create_default_context()
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
            return http.client.HTTPSConnection(
                host, port, timeout=timeout, context=context
            )
        if scheme == "http":
            return http.client.HTTPConnection(host, port, timeout=timeout)
        raise HttpError(f"unsupported scheme: {scheme!r}")

    def _perform(
        self,
        method: str,
        url: str,
        body: bytes | None,
        headers: dict[str, str] | None,
    ) -> str:
        parts = urlsplit(url)
        if not parts.hostname:
            raise HttpError(f"no host in URL: {url!r}")
        target = parts.path or "/"
        if parts.query:
            target += "?" + parts.query
        conn = self._connection(parts.scheme, parts.hostname, parts.port)
        if self.debug:
            conn.set_debuglevel(1)
        try:
            conn.connect()
            conn.sock.settimeout(self.socket_timeout / 1000)
            conn.request(method, target, body=body, headers=dict(headers or {}))
            response = conn.getresponse()
            return response.read().decode("utf-8", errors="replace")
        except (OSError, http.client.HTTPException) as exc:
            raise HttpError(str(exc)) from exc
        finally:
            conn.close()

    def get(
        self,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        """Send a GET request and return the response body."""
        return self._perform("GET", append_url_params(url, params), None, headers)

    def post(
        self,
        url: str,
        params: dict[str, str] | None = None,
        body: str | bytes = "",
        headers: dict[str, str] | None = None,
    ) -> str:
        """Send a POST request with a raw body and return the response body."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        all_headers = dict(headers or {})
        if not any(key.lower() == "content-type" for key in all_headers):
            all_headers["Content-Type"] = "application/x-www-form-urlencoded"
        return self._perform(
            "POST", append_url_params(url, params), body, all_headers
        )

    def post_form(
        self,
        url: str,
        params: dict[str, str] | None = None,
        data: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        """POST data as an url-encoded form."""
        return self.post(url, params, make_urlencoded_form(data or {}), headers)

    def post_json(
        self,
        url: str,
        params: dict[str, str] | None = None,
        data: Any = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        """POST data serialised as JSON."""
        all_headers = {
            key: value
            for key, value in (headers or {}).items()
            if key.lower() != "content-type"
        }
        all_headers["Content-Type"] = "application/json"
        body = json.dumps(data, ensure_ascii=False, indent="\t")
        return self.post(url, params, body, all_headers)