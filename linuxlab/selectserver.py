"""A single-threaded TCP server that multiplexes clients with select()."""

import select
import socket
import sys
from typing import TextIO

MAX_FDS = 1024
RECV_SIZE = 1024
BACKLOG = 5


class SelectServer:
    """Accepts clients and prints whatever they send.

    capacity counts the listening socket too, so at most capacity - 1
    clients are kept; further ones are closed right after being accepted.
    """

    def __init__(
        self, port: int = 8888, host: str = "0.0.0.0", output: TextIO | None = None
    ):
        self.port = port
        self.host = host
        self.output = output if output is not None else sys.stdout
        self.capacity = MAX_FDS
        self._listener: socket.socket | None = None
        self._clients: list[socket.socket] = []

    def _say(self, message: str) -> None:
        print(message, file=self.output, flush=True)

    def init_server(self) -> None:
        """Create, bind and listen; port 0 is replaced by the chosen port."""
        lsock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            lsock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            lsock.bind((self.host, self.port))
            lsock.listen(BACKLOG)
        except OSError:
            lsock.close()
            raise
        self._listener = lsock
        self.port = lsock.getsockname()[1]

    def _accept(self) -> None:
        try:
            conn, _ = self._listener.accept()
        except OSError:
            print("accept error!", file=sys.stderr)
            return
        self._say("get a new client!")
        if 1 + len(self._clients) >= self.capacity:
            conn.close()
            self._say("fd array is full!")
        else:
            self._clients.append(conn)

    def _drop(self, sock: socket.socket) -> None:
        sock.close()
        self._clients.remove(sock)

    def _receive(self, sock: socket.socket) -> None:
        try:
            data = sock.recv(RECV_SIZE)
        except OSError:
            print("recv error", file=sys.stderr)
            self._drop(sock)
            return
        if data:
            self._say(f"client# {data.decode('utf-8', errors='replace')}")
        else:
            self._say("client quit!")
            self._drop(sock)

    def run(self, max_rounds: int | None = None) -> None:
        """Serve forever, or for max_rounds calls to select()."""
        if self._listener is None:
            raise RuntimeError("init_server() has not been called")
        rounds = 0
        while max_rounds is None or rounds < max_rounds:
            rounds += 1
            try:
                readable, _, _ = select.select(
                    [self._listener, *self._clients], [], []
                )
            except (OSError, ValueError):
                self._say("select error!")
                continue
            for sock in readable:
                if sock is self._listener:
                    self._accept()
                else:
                    self._receive(sock)

    def close(self) -> None:
        """Close every client and the listening socket."""
        for client in self._clients:
            client.close()
        self._clients.clear()
        if self._listener is not None:
            self._listener.close()
            self._listener = None


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Usage: selectserver port")
        return 1
    try:
        port = int(args[0])
    except ValueError:
        print("Usage: selectserver port")
        return 1
    server = SelectServer(port)
    try:
        server.init_server()
        server.run()
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    finally:
        server.close()
    return 0