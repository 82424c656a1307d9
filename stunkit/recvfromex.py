"""Receiving a datagram together with the local address it was sent to."""

import socket
import sys
from dataclasses import dataclass

_CONTROL_BUFFER_SIZE = 1000

_IP_PKTINFO = getattr(socket, "IP_PKTINFO", 8 if sys.platform.startswith("linux") else None)
_IP_RECVDSTADDR = getattr(socket, "IP_RECVDSTADDR", None)
_IPV6_PKTINFO = getattr(socket, "IPV6_PKTINFO", None)


@dataclass(frozen=True)
class ReceivedPacket:
    """A received datagram, who sent it, and the local address it arrived on.

    The destination port is always 0: only the address is reported.
    """

    data: bytes
    source: tuple
    destination: tuple


def _empty_address(family: int) -> tuple:
    if family == socket.AF_INET6:
        return ("::", 0, 0, 0)
    return ("0.0.0.0", 0)


def _destination_from(level: int, kind: int, payload: bytes) -> tuple | None:
    if level == socket.IPPROTO_IPV6 and kind == _IPV6_PKTINFO and len(payload) >= 16:
        return (socket.inet_ntop(socket.AF_INET6, payload[:16]), 0, 0, 0)
    if level == socket.IPPROTO_IP:
        if kind == _IP_PKTINFO and _IP_PKTINFO is not None and len(payload) >= 12:
            # in_pktinfo: ifindex, spec_dst, addr
            return (socket.inet_ntop(socket.AF_INET, payload[8:12]), 0)
        if kind == _IP_RECVDSTADDR and _IP_RECVDSTADDR is not None and len(payload) >= 4:
            return (socket.inet_ntop(socket.AF_INET, payload[:4]), 0)
    return None


def recvfromex(sock: socket.socket, bufsize: int, flags: int = 0) -> ReceivedPacket:
    """Receive one datagram of at most bufsize bytes.

    The destination is taken from packet-info control data when the socket
    has that option enabled; otherwise it is the unspecified address.
    """
    data, ancdata, _msg_flags, source = sock.recvmsg(bufsize, _CONTROL_BUFFER_SIZE, flags)
    destination = _empty_address(sock.family)
    for level, kind, payload in ancdata:
        found = _destination_from(level, kind, payload)
        if found is not None:
            destination = found
            break
    return ReceivedPacket(data=data, source=source, destination=destination)