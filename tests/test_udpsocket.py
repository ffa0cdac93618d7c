import pytest

from linuxlab.udpsocket import RECV_SIZE, UdpSocket


@pytest.fixture
def receiver():
    sock = UdpSocket().socket()
    sock.bind("127.0.0.1", 0)
    yield sock
    sock.close()


def test_datagram_round_trip(receiver):
    with UdpSocket().socket() as sender:
        sent = sender.send("hi there", "127.0.0.1", receiver.address[1])
        data, ip, port = receiver.recv()
        assert sent == len(b"hi there")
        assert data == b"hi there"
        assert ip == "127.0.0.1"
        receiver.send(b"reply", ip, port)
        reply, reply_ip, reply_port = sender.recv()
        assert reply == b"reply"
        assert (reply_ip, reply_port) == receiver.address


def test_large_datagram_is_truncated(receiver):
    with UdpSocket().socket() as sender:
        sender.send(b"x" * 5000, "127.0.0.1", receiver.address[1])
        data, _, _ = receiver.recv()
        assert len(data) == RECV_SIZE
        assert RECV_SIZE == 4095


def test_bind_records_address():
    with UdpSocket().socket() as sock:
        sock.bind("127.0.0.1", 0)
        ip, port = sock.address
        assert ip == "127.0.0.1"
        assert port > 0


def test_use_before_socket_raises():
    sock = UdpSocket()
    with pytest.raises(OSError):
        sock.send(b"data", "127.0.0.1", 9)
    with pytest.raises(OSError):
        sock.recv()


def test_use_after_close_raises():
    with UdpSocket().socket() as sock:
        pass
    with pytest.raises(OSError):
        sock.send(b"data", "127.0.0.1", 9)