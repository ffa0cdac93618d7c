"""A small UDP socket wrapper."""

import errno
import socket as _socket

RECV_SIZE = 4095


class UdpSocket:
    """An IPv4 UDP socket created explicitly with socket()."""

    def __init__(self):
        self._sock: _socket.socket | None = None
        self.address: tuple[str, int] | None = None

    def _require(self) -> _socket.socket:
        if self._sock is None:
            raise OSError(errno.EBADF, "socket is not open")
        return self._sock

    def socket(self) -> "UdpSocket":
        """Create the underlying socket; returns self."""
        self.close()
        self._sock = _socket.socket(
            _socket.AF_INET, _socket.SOCK_DGRAM, _socket.IPPROTO_UDP
        )
        return self

    def bind(self, ip: str, port: int) -> None:
        """Bind to a local address; the bound address is kept in .address."""
        sock = self._require()
        sock.bind((ip, port))
        self.address = sock.getsockname()

    def send(self, data: bytes | str, ip: str, port: int) -> int:
        """Send one datagram to ip:port and return the number of bytes sent."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        return self._require().sendto(data, (ip, port))

    def recv(self) -> tuple[bytes, str, int]:
        """Receive one datagram (at most RECV_SIZE bytes) with its sender."""
        data, (ip, port) = self._require().recvfrom(RECV_SIZE)
        return data, ip, port

    def close(self) -> None:
        """Close the socket; closing twice is harmless."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> "UdpSocket":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()