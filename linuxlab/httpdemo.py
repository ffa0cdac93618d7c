"""A tiny HTTP server that answers every request with the same page."""

import sys

from linuxlab.tcpsocket import PeerClosedError, TcpSocket

DEFAULT_TEXT = "<html><body><h1>Hello World</h1></body></html>"
REDIRECT_LOCATION = "http://www.example.com/"


def build_response(text: str = DEFAULT_TEXT) -> bytes:
    """Build the fixed response carrying text as an HTML body."""
    body = text.encode("utf-8")
    head = (
        "HTTP/1.1 500 Not Found\r\n"
        f"Content-Length: {len(body)}\r\n"
        "Connection: close\r\n"
        "Content-Type: text/html\r\n"
        f"Location: {REDIRECT_LOCATION}\r\n"
        "\r\n"
    )
    return head.encode("ascii") + body


def serve(ip: str, port: int, max_requests: int | None = None) -> int:
    """Serve connections one at a time; return how many were answered.

    Runs forever unless max_requests is given. A connection that closes or
    fails before sending anything is dropped without an answer.
    """
    answered = 0
    with TcpSocket().socket() as listener:
        listener.bind(ip, port)
        listener.listen()
        while max_requests is None or answered < max_requests:
            try:
                client, _, _ = listener.accept()
            except OSError as exc:
                print(f"accept error: {exc}", file=sys.stderr)
                continue
            with client:
                print(f"new connect: {client.fileno()}")
                try:
                    request = client.recv()
                except PeerClosedError:
                    print("peer shutdown", file=sys.stderr)
                    continue
                except OSError as exc:
                    print(f"recv error: {exc}", file=sys.stderr)
                    continue
                print(f"req:[{request.decode('utf-8', errors='replace')}]")
                try:
                    client.send(build_response())
                except OSError as exc:
                    print(f"send error: {exc}", file=sys.stderr)
                    continue
                answered += 1
    return answered


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("usage: http ip port", file=sys.stderr)
        return 1
    ip, port_text = args
    try:
        port = int(port_text)
    except ValueError:
        print("usage: http ip port", file=sys.stderr)
        return 1
    try:
        serve(ip, port)
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0