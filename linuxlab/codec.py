"""Base64 encoding with the lenient decoding rules of the speech client."""

import base64

_ALPHABET = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
)


def base64_encode(data: bytes | str) -> str:
    """Encode bytes (or UTF-8 text) as padded standard base64."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.b64encode(data).decode("ascii")


def base64_decode(encoded: str) -> bytes:
    """Decode base64 leniently.

    Decoding stops at the first '=' or at the first character outside the
    base64 alphabet.  A trailing group of two or three characters yields
    one or two bytes; a lone trailing character is dropped.
    """
    prefix = []
    for ch in encoded:
        if ch == "=" or ch not in _ALPHABET:
            break
        prefix.append(ch)
    text = "".join(prefix)
    remainder = len(text) % 4
    if remainder == 1:
        text = text[:-1]
    elif remainder:
        text += "=" * (4 - remainder)
    return base64.b64decode(text)