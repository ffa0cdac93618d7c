"""Parsing of the credentials posted by the chat server's login and register forms."""

import json


class CredentialsError(ValueError):
    """Raised when a request body does not hold readable credentials."""


def _as_string(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format(value, ".17g")
    raise CredentialsError(f"value is not convertible to a string: {value!r}")


def parse_credentials(body: str | bytes) -> tuple[str, str]:
    """Return (name, passwd) from a JSON body such as {"name": ..., "passwd": ...}.

    Missing fields come back as empty strings; numbers and booleans are
    turned into text. Malformed JSON, a body that is not an object, or a
    field holding an object or array raise CredentialsError.
    """
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    try:
        root = json.loads(body)
    except json.JSONDecodeError as exc:
        raise CredentialsError(f"parse error: {exc}") from exc
    if root is None:
        return "", ""
    if not isinstance(root, dict):
        raise CredentialsError("credentials must be a JSON object")
    return _as_string(root.get("name")), _as_string(root.get("passwd"))