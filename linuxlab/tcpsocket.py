"""A small TCP socket wrapper exposing server and client operations."""

import errno
import socket as _socket

MAX_LISTEN = 10
RECV_SIZE = 4096


class PeerClosedError(ConnectionError):
    """Raised by recv when the peer has shut the connection down."""


class TcpSocket:
    """An IPv4 TCP socket created explicitly with socket()."""

    def __init__(self, sock: _socket.socket | None = None):
        self._sock = sock
        self.address: tuple[str, int] | None = (
            sock.getsockname() if sock is not None else None
        )

    def _require(self) -> _socket.socket:
        if self._sock is None:
            raise OSError(errno.EBADF, "socket is not open")
        return self._sock

    def socket(self) -> "TcpSocket":
        """Create the underlying socket; returns self."""
        self.close()
        self._sock = _socket.socket(
            _socket.AF_INET, _socket.SOCK_STREAM, _socket.IPPROTO_TCP
        )
        return self

    def bind(self, ip: str, port: int) -> None:
        """Bind to a local address; the bound address is kept in .address."""
        sock = self._require()
        sock.bind((ip, port))
        self.address = sock.getsockname()

    def listen(self, backlog: int = MAX_LISTEN) -> None:
        """Start accepting connections."""
        self._require().listen(backlog)

    def connect(self, ip: str, port: int) -> None:
        """Connect to a server; the local address is kept in .address."""
        sock = self._require()
        sock.connect((ip, port))
        self.address = sock.getsockname()

    def accept(self) -> tuple["TcpSocket", str, int]:
        """Wait for a connection and return it with the peer's ip and port."""
        conn, (ip, port) = self._require().accept()
        return TcpSocket(conn), ip, port

    def recv(self) -> bytes:
        """Receive up to RECV_SIZE bytes; raise PeerClosedError at end of stream."""
        data = self._require().recv(RECV_SIZE)
        if not data:
            raise PeerClosedError("peer shutdown")
        return data

    def send(self, data: bytes | str) -> None:
        """Send all of data (text is sent as UTF-8)."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._require().sendall(data)

    def close(self) -> None:
        """Close the socket; closing twice is harmless."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def fileno(self) -> int:
        """Return the descriptor, or -1 when the socket is not open."""
        return -1 if self._sock is None else self._sock.fileno()

    def __enter__(self) -> "TcpSocket":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()