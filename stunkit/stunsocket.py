"""A socket wrapper that remembers its local and remote addresses."""

import errno
import socket
import sys

_EMPTY_ADDRESS = ("0.0.0.0", 0)

_IP_PKTINFO = getattr(socket, "IP_PKTINFO", 8 if sys.platform.startswith("linux") else None)
_IP_RECVDSTADDR = getattr(socket, "IP_RECVDSTADDR", None)
_IPV6_RECVPKTINFO = getattr(socket, "IPV6_RECVPKTINFO", None)
_IPV6_PKTINFO = getattr(socket, "IPV6_PKTINFO", None)


def _family_of(address: tuple) -> int:
    if len(address) >= 4 or ":" in str(address[0]):
        return socket.AF_INET6
    return socket.AF_INET


class StunSocket:
    """Owns one UDP or TCP socket and caches the addresses it is bound and connected to."""

    def __init__(self) -> None:
        self._sock: socket.socket | None = None
        self.local_address: tuple = _EMPTY_ADDRESS
        self.remote_address: tuple = _EMPTY_ADDRESS

    def __enter__(self) -> "StunSocket":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    @property
    def sock(self) -> socket.socket | None:
        """The underlying socket, or None."""
        return self._sock

    def _reset(self) -> None:
        self._sock = None
        self.local_address = _EMPTY_ADDRESS
        self.remote_address = _EMPTY_ADDRESS

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise OSError(errno.EBADF, "no socket")
        return self._sock

    def close(self) -> None:
        """Close the socket, if any, and forget its addresses."""
        if self._sock is not None:
            self._sock.close()
        self._reset()

    def is_valid(self) -> bool:
        """Return True while a socket is held."""
        return self._sock is not None

    def attach(self, sock: socket.socket) -> None:
        """Take ownership of sock, closing any other socket held."""
        if sock is None:
            raise ValueError("no socket to attach")
        if sock is not self._sock:
            self.close()
            self._sock = sock
        self.update_addresses()

    def detach(self) -> socket.socket | None:
        """Give up ownership of the socket without closing it and return it."""
        sock = self._sock
        self._reset()
        return sock

    def fileno(self) -> int:
        """Return the descriptor of the socket, or -1 when none is held."""
        return -1 if self._sock is None else self._sock.fileno()

    def _enable_pkt_info(self, level: int, option1, option2, enable: bool) -> None:
        if option1 is None and option2 is None:
            raise OSError(errno.ENOPROTOOPT, "packet info is not supported")
        sock = self._require_socket()
        value = 1 if enable else 0
        if option1 is not None:
            try:
                sock.setsockopt(level, option1, value)
                return
            except OSError:
                if option2 is None:
                    raise
        sock.setsockopt(level, option2, value)

    def enable_pkt_info_option(self, enable: bool) -> None:
        """Ask the system to report the destination address of received packets."""
        sock = self._require_socket()
        if sock.family == socket.AF_INET:
            self._enable_pkt_info(socket.IPPROTO_IP, _IP_PKTINFO, _IP_RECVDSTADDR, enable)
        else:
            self._enable_pkt_info(socket.IPPROTO_IPV6, _IPV6_RECVPKTINFO, _IPV6_PKTINFO, enable)

    def set_non_blocking(self, enable: bool) -> None:
        """Switch the socket between non-blocking and blocking mode."""
        self._require_socket().setblocking(not enable)

    def update_addresses(self) -> None:
        """Refresh the cached local and remote addresses from the socket."""
        if self._sock is None:
            return
        try:
            self.local_address = self._sock.getsockname()
        except OSError:
            pass
        try:
            self.remote_address = self._sock.getpeername()
        except OSError:
            pass

    def _init_common(self, socktype: int, local: tuple, set_reuse_flag: bool) -> None:
        family = _family_of(local)
        sock = socket.socket(family, socktype, 0)
        try:
            if family == socket.AF_INET6:
                # keep IPv4 clients off IPv6 sockets so they never see mapped addresses
                try:
                    sock.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, 1)
                except (OSError, AttributeError):
                    pass
            if set_reuse_flag:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind(local)
        except BaseException:
            sock.close()
            raise
        self.attach(sock)

    def udp_init(self, local: tuple, set_reuse_flag: bool = False) -> None:
        """Create a UDP socket bound to local."""
        self._init_common(socket.SOCK_DGRAM, local, set_reuse_flag)

    def tcp_init(self, local: tuple, set_reuse_flag: bool = False) -> None:
        """Create a TCP socket bound to local."""
        self._init_common(socket.SOCK_STREAM, local, set_reuse_flag)