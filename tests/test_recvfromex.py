import socket

import pytest

from stunkit.recvfromex import ReceivedPacket, recvfromex
from stunkit.stunsocket import StunSocket


@pytest.fixture
def sender():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    yield sock
    sock.close()


@pytest.fixture
def receiver():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2)
    yield sock
    sock.close()


def test_receives_data_and_source(sender, receiver):
    sender.sendto(b"hello", receiver.getsockname())
    packet = recvfromex(receiver, 1500)
    assert packet.data == b"hello"
    assert packet.source == sender.getsockname()


def test_destination_unspecified_without_pktinfo(sender, receiver):
    sender.sendto(b"x", receiver.getsockname())
    packet = recvfromex(receiver, 1500)
    assert packet.destination == ("0.0.0.0", 0)


def test_destination_from_pktinfo(sender):
    with StunSocket() as stun:
        stun.udp_init(("127.0.0.1", 0), False)
        stun.enable_pkt_info_option(True)
        stun.sock.settimeout(2)
        sender.sendto(b"ping", stun.local_address)
        packet = recvfromex(stun.sock, 1500)
    assert packet.data == b"ping"
    assert packet.destination == ("127.0.0.1", 0)


def test_truncates_to_bufsize(sender, receiver):
    sender.sendto(b"abcdefgh", receiver.getsockname())
    packet = recvfromex(receiver, 3)
    assert packet.data == b"abc"


def test_dontwait_with_nothing_pending(receiver):
    with pytest.raises(BlockingIOError):
        recvfromex(receiver, 1500, socket.MSG_DONTWAIT)


def test_packet_is_immutable(sender, receiver):
    sender.sendto(b"y", receiver.getsockname())
    packet = recvfromex(receiver, 1500)
    with pytest.raises(AttributeError):
        packet.data = b"z"
    assert isinstance(packet, ReceivedPacket) and packet.data == b"y"