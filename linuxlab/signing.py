"""Helpers for building and signing requests to the cloud speech service."""

import hashlib
import hmac
import time
from datetime import datetime, timezone
from pathlib import Path
from urllib.parse import quote

BCE_VERSION = 1
BCE_EXPIRE = 1800

_HEX = "0123456789ABCDEF"


def get_file_content(filename: str | Path) -> bytes:
    """Return the whole binary content of a file."""
    return Path(filename).read_bytes()


def to_hex(byte: int, lower: bool = False) -> str:
    """Format one byte as two hexadecimal digits."""
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"not a byte: {byte}")
    text = _HEX[byte >> 4] + _HEX[byte & 0xF]
    return text.lower() if lower else text


def utc_time(timestamp: float) -> str:
    """Format a Unix timestamp as an ISO-8601 UTC time with second precision."""
    moment = datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def url_parse(url: str) -> dict[str, str]:
    """Extract the query parameters of a URL.

    Segments without '=' are not closed on their own: their text becomes part
    of the next key, as the service's own parser does.
    """
    params: dict[str, str] = {}
    pos = url.find("?")
    if pos == -1:
        return params
    key_start = pos + 1
    key_len = 0
    val_start = 0
    for i, ch in enumerate(url[key_start:] + "&", start=key_start):
        if ch == "=":
            key_len = i - key_start
            val_start = i + 1
        elif ch in "&\0" and key_len != 0:
            params[url[key_start:key_start + key_len]] = url[val_start:i]
            key_start = i + 1
            key_len = 0
    return params


def url_encode(text: str, encode_slash: bool = True) -> str:
    """Percent-encode everything except letters, digits and '_-~.' (and '/' if asked)."""
    return quote(text, safe="" if encode_slash else "/")


def canonicalize_params(params: dict[str, str]) -> str:
    """Encode and sort query parameters into their canonical form."""
    pairs = sorted(f"{url_encode(k)}={url_encode(v)}" for k, v in params.items())
    return "&".join(pairs)


def canonicalize_headers(headers: dict[str, str]) -> str:
    """Encode and sort headers into their canonical form."""
    lines = sorted(
        f"{url_encode(k.lower())}:{url_encode(v)}" for k, v in headers.items()
    )
    return "\n".join(lines)


def get_headers_keys(headers: dict[str, str]) -> str:
    """List the lower-cased header names, in key order, separated by ';'."""
    return ";".join(key.lower() for key in sorted(headers))


def get_host(url: str) -> str:
    """Return the host part of a URL."""
    start = url.find("://") + 3
    end = url.find("/", start)
    return url[start:] if end == -1 else url[start:end]


def get_path(url: str) -> str:
    """Return the path part of a URL, without its query."""
    start = url.find("/", url.find("://") + 3)
    if start == -1:
        raise ValueError(f"URL has no path: {url!r}")
    end = url.find("?")
    if end == -1:
        end = len(url)
    return url[start:end]


def hmac_sha256(src: str | bytes, key: str | bytes) -> str:
    """Return the lower-case hex HMAC-SHA256 of src under key."""
    if isinstance(src, str):
        src = src.encode("utf-8")
    if isinstance(key, str):
        key = key.encode("utf-8")
    return hmac.new(key, src, hashlib.sha256).hexdigest()


def sign(
    method: str,
    url: str,
    params: dict[str, str] | None,
    headers: dict[str, str] | None,
    ak: str,
    sk: str,
    timestamp: float | None = None,
) -> dict[str, str]:
    """Return the headers of a request with Host, date and authorization added.

    Query parameters found in the URL are merged into params for signing.
    Neither argument mapping is modified.
    """
    all_params = dict(params or {})
    all_params.update(url_parse(url))
    signed = dict(headers or {})
    signed["Host"] = get_host(url)
    stamp = utc_time(time.time() if timestamp is None else timestamp)
    signed["x-bce-date"] = stamp

    prefix = f"bce-auth-v{BCE_VERSION}/{ak}/{stamp}/{BCE_EXPIRE}"
    sign_key = hmac_sha256(prefix, sk)
    canonical = "\n".join(
        [
            method.upper(),
            url_encode(get_path(url), False),
            canonicalize_params(all_params),
            canonicalize_headers(signed),
        ]
    )
    signature = hmac_sha256(canonical, sign_key)
    signed["authorization"] = f"{prefix}/{get_headers_keys(signed)}/{signature}"
    return signed