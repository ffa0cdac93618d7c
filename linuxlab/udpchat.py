"""A turn-by-turn UDP chat: the client speaks first, the server answers."""

import socket
import sys
from collections.abc import Iterable, Iterator
from typing import TextIO

from linuxlab.udpsocket import UdpSocket

SERVER_RECV_SIZE = 1023


def _words(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        yield from line.split()


def run_client(
    ip: str, port: int, lines: Iterable[str], output: TextIO | None = None
) -> int:
    """Send each whitespace-separated word of lines and print each reply.

    Returns the number of completed exchanges once the input runs out.
    """
    out = output if output is not None else sys.stdout
    words = _words(lines)
    exchanges = 0
    with UdpSocket().socket() as sock:
        while True:
            out.write("client say:")
            out.flush()
            word = next(words, None)
            if word is None:
                return exchanges
            sock.send(word, ip, port)
            reply, _, _ = sock.recv()
            out.write(f"server say:{reply.decode('utf-8', errors='replace')}\n")
            out.flush()
            exchanges += 1


def run_server(
    ip: str, port: int, lines: Iterable[str], output: TextIO | None = None
) -> int:
    """Answer each received datagram with the next word of lines.

    Stops when a datagram arrives and no word is left to answer it with;
    returns the number of replies sent.
    """
    out = output if output is not None else sys.stdout
    words = _words(lines)
    replies = 0
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP) as sock:
        sock.bind((ip, port))
        while True:
            data, peer = sock.recvfrom(SERVER_RECV_SIZE)
            out.write(f"client say: {data.decode('utf-8', errors='replace')}\n")
            out.write("server say:")
            out.flush()
            word = next(words, None)
            if word is None:
                return replies
            sock.sendto(word.encode("utf-8"), peer)
            replies += 1


def _address(args: list[str], usage: str) -> tuple[str, int] | None:
    if len(args) != 2:
        print(usage, file=sys.stderr)
        return None
    try:
        return args[0], int(args[1])
    except ValueError:
        print(usage, file=sys.stderr)
        return None


def client_main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    address = _address(args, "usage: udp-client ip port")
    if address is None:
        return 1
    try:
        run_client(*address, sys.stdin)
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


def server_main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    address = _address(args, "usage: udp-server ip port")
    if address is None:
        return 1
    try:
        run_server(*address, sys.stdin)
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0