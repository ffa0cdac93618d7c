from urllib.parse import unquote

import pytest

from linuxlab.signing import (
    canonicalize_headers,
    canonicalize_params,
    get_file_content,
    get_headers_keys,
    get_host,
    get_path,
    hmac_sha256,
    sign,
    to_hex,
    url_encode,
    url_parse,
    utc_time,
)

URL = "https://aip.baidubce.com/rest/2.0/face/v3/detect?access=1"


def test_get_file_content(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(b"\x00\x01binary\xff")
    assert get_file_content(path) == b"\x00\x01binary\xff"


def test_get_file_content_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        get_file_content(tmp_path / "absent")


def test_to_hex_all_bytes():
    for byte in range(256):
        text = to_hex(byte)
        assert len(text) == 2
        assert int(text, 16) == byte
        assert text == text.upper()
        assert to_hex(byte, True) == text.lower()


def test_to_hex_rejects_non_byte():
    with pytest.raises(ValueError):
        to_hex(256)


def test_utc_time_epoch():
    assert utc_time(0) == "1970-01-01T00:00:00Z"


def test_url_parse_basic():
    assert url_parse("http://h/p?a=1&b=2") == {"a": "1", "b": "2"}


def test_url_parse_without_query():
    assert url_parse("http://h/p") == {}


def test_url_parse_segment_without_value_joins_next_key():
    assert url_parse("http://h/p?a&b=1") == {"a&b": "1"}


def test_url_parse_empty_value():
    assert url_parse("http://h/p?a=") == {"a": ""}


def test_url_encode_unreserved_pass_through():
    text = "AZaz09_-~."
    assert url_encode(text) == text


def test_url_encode_slash():
    assert url_encode("/") == "%2F"
    assert url_encode("a/b", False) == "a/b"


@pytest.mark.parametrize("text", ["a b", "x=1&y", "天气", "100%"])
def test_url_encode_round_trip(text):
    encoded = url_encode(text)
    assert unquote(encoded) == text
    assert " " not in encoded


def test_canonicalize_params_sorted():
    assert canonicalize_params({"b": "2", "a": "1"}) == "a=1&b=2"


def test_canonicalize_headers_lowercase_and_sorted():
    result = canonicalize_headers({"X-A": "v", "Host": "h"})
    assert result == "host:h\nx-a:v"


def test_get_headers_keys_in_key_order():
    assert get_headers_keys({"a": "2", "B": "1"}) == "b;a"


def test_get_host():
    assert get_host("http://example.com/a/b") == "example.com"
    assert get_host("http://example.com") == "example.com"


def test_get_path():
    assert get_path("https://example.com/a/b?x=1") == "/a/b"
    assert get_path("https://example.com/a") == "/a"


def test_get_path_without_path():
    with pytest.raises(ValueError):
        get_path("https://example.com")


def test_hmac_sha256_shape():
    digest = hmac_sha256("message", "secret")
    assert len(digest) == 64
    assert digest == digest.lower()
    assert digest == hmac_sha256(b"message", b"secret")
    assert digest != hmac_sha256("message", "token")


def test_sign_headers():
    headers = sign("post", URL, {}, {"Content-Type": "json"}, "ak", "secret", 0)
    assert headers["Host"] == get_host(URL)
    assert headers["x-bce-date"] == utc_time(0)
    assert headers["Content-Type"] == "json"
    auth = headers["authorization"]
    prefix = "bce-auth-v1/ak/" + utc_time(0) + "/1800/content-type;host;x-bce-date/"
    assert auth.startswith(prefix)
    assert len(auth) == len(prefix) + 64


def test_sign_does_not_modify_inputs():
    params = {"k": "v"}
    headers = {"A": "b"}
    sign("GET", URL, params, headers, "ak", "secret", 0)
    assert params == {"k": "v"}
    assert headers == {"A": "b"}


def test_sign_is_deterministic_and_key_dependent():
    first = sign("GET", URL, None, None, "ak", "secret", 0)["authorization"]
    again = sign("GET", URL, None, None, "ak", "secret", 0)["authorization"]
    other = sign("GET", URL, None, None, "ak", "token", 0)["authorization"]
    assert first == again
    assert first != other


def test_sign_includes_query_parameters():
    with_query = sign("GET", URL, None, None, "ak", "secret", 0)["authorization"]
    plain_url = URL.split("?")[0]
    merged = sign("GET", plain_url, {"access": "1"}, None, "ak", "secret", 0)
    without = sign("GET", plain_url, None, None, "ak", "secret", 0)
    assert with_query.rsplit("/", 1)[1] == merged["authorization"].rsplit("/", 1)[1]
    assert with_query != without["authorization"]