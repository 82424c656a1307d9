"""Readiness polling over sets of file descriptors, using epoll or poll."""

import select
from collections import deque
from dataclasses import dataclass
from enum import IntEnum, IntFlag

from .errors import E_FAIL, HResultError


class PollFlags(IntFlag):
    """Portable event flags, independent of the polling mechanism."""

    NONE = 0
    READ = 0x01 << 0
    WRITE = 0x01 << 1
    EDGETRIGGER = 0x01 << 2
    RDHUP = 0x01 << 3
    HUP = 0x01 << 4
    PRI = 0x01 << 5
    ERROR = 0x01 << 6


class PollType(IntEnum):
    """Which polling mechanism to create."""

    BEST = 0x01 << 0
    EPOLL = 0x01 << 1
    POLL = 0x01 << 2


@dataclass(frozen=True)
class PollEvent:
    """A descriptor that became ready, and the events that fired on it."""

    fd: int
    flags: PollFlags


def _flag_table(pairs):
    return [(flag, native) for flag, native in pairs if native]


_EPOLL_FLAGS = _flag_table(
    [
        (PollFlags.READ, getattr(select, "EPOLLIN", 0)),
        (PollFlags.WRITE, getattr(select, "EPOLLOUT", 0)),
        (PollFlags.EDGETRIGGER, getattr(select, "EPOLLET", 0)),
        (PollFlags.RDHUP, getattr(select, "EPOLLRDHUP", 0)),
        (PollFlags.HUP, getattr(select, "EPOLLHUP", 0)),
        (PollFlags.PRI, getattr(select, "EPOLLPRI", 0)),
        (PollFlags.ERROR, getattr(select, "EPOLLERR", 0)),
    ]
)

_POLL_FLAGS = _flag_table(
    [
        (PollFlags.READ, getattr(select, "POLLIN", 0)),
        (PollFlags.WRITE, getattr(select, "POLLOUT", 0)),
        (PollFlags.RDHUP, getattr(select, "POLLRDHUP", 0)),
        (PollFlags.HUP, getattr(select, "POLLHUP", 0)),
        (PollFlags.PRI, getattr(select, "POLLPRI", 0)),
        (PollFlags.ERROR, getattr(select, "POLLERR", 0)),
    ]
)


def _to_native(table, flags: int) -> int:
    result = 0
    for flag, native in table:
        if flags & flag:
            result |= native
    return result


def _from_native(table, native_flags: int) -> PollFlags:
    result = PollFlags.NONE
    for flag, native in table:
        if native_flags & native:
            result |= flag
    return result


def _check_fd(fd: int) -> None:
    if fd < 0:
        raise ValueError(f"invalid file descriptor: {fd}")


class EpollPoller:
    """Polling through epoll; events from one wait are handed out one at a time."""

    def __init__(self, max_sockets: int) -> None:
        if max_sockets <= 0:
            raise ValueError("max_sockets must be positive")
        self._epoll = select.epoll()
        self._max_events = max_sockets
        self._pending: deque[tuple[int, int]] = deque()

    def __enter__(self) -> "EpollPoller":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _require_open(self):
        if self._epoll is None:
            raise RuntimeError("poller is closed")
        return self._epoll

    def close(self) -> None:
        """Release the epoll descriptor and drop pending events."""
        if self._epoll is not None:
            self._epoll.close()
            self._epoll = None
        self._pending.clear()

    def add(self, fd: int, flags: int) -> None:
        """Start watching fd for the given events."""
        _check_fd(fd)
        self._require_open().register(fd, _to_native(_EPOLL_FLAGS, flags))

    def remove(self, fd: int) -> None:
        """Stop watching fd."""
        _check_fd(fd)
        self._require_open().unregister(fd)

    def change_event_set(self, fd: int, flags: int) -> None:
        """Replace the events watched on fd."""
        _check_fd(fd)
        self._require_open().modify(fd, _to_native(_EPOLL_FLAGS, flags))

    def wait_for_next_event(self, timeout_ms: int) -> PollEvent | None:
        """Return the next ready event, or None if the timeout passed first.

        A negative timeout waits indefinitely.
        """
        epoll = self._require_open()
        if not self._pending:
            timeout = -1 if timeout_ms < 0 else timeout_ms / 1000.0
            self._pending.extend(epoll.poll(timeout, self._max_events))
            if not self._pending:
                return None
        fd, native = self._pending.popleft()
        return PollEvent(fd, _from_native(_EPOLL_FLAGS, native))


class PollPoller:
    """Polling through poll(); ready descriptors are served in rotating order."""

    def __init__(self, max_sockets: int) -> None:
        if max_sockets <= 0:
            raise ValueError("max_sockets must be positive")
        self._max_sockets = max_sockets
        self._poll = select.poll()
        self._fds: list[int] = []
        self._positions: dict[int, int] = {}
        self._revents: dict[int, int] = {}
        self._rotation = 0
        self._unread = 0
        self._initialized = True

    def __enter__(self) -> "PollPoller":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _require_open(self) -> None:
        if not self._initialized:
            raise RuntimeError("poller is closed")

    def close(self) -> None:
        """Forget every descriptor; the poller cannot be used afterwards."""
        for fd in self._fds:
            self._poll.unregister(fd)
        self._fds.clear()
        self._positions.clear()
        self._revents.clear()
        self._unread = 0
        self._initialized = False

    def add(self, fd: int, flags: int) -> None:
        """Start watching fd; raises ValueError if it is already watched."""
        self._require_open()
        _check_fd(fd)
        if fd in self._positions:
            raise ValueError(f"descriptor {fd} is already registered")
        self._poll.register(fd, _to_native(_POLL_FLAGS, flags))
        self._positions[fd] = len(self._fds)
        self._fds.append(fd)

    def remove(self, fd: int) -> None:
        """Stop watching fd; raises KeyError if it is not watched."""
        self._require_open()
        pos = self._positions.get(fd)
        if pos is None:
            raise KeyError(fd)
        last = self._fds[-1]
        if pos != len(self._fds) - 1:
            self._fds[pos] = last
            self._positions[last] = pos
        self._fds.pop()
        del self._positions[fd]
        self._revents.pop(fd, None)
        self._poll.unregister(fd)

    def change_event_set(self, fd: int, flags: int) -> None:
        """Replace the events watched on fd; raises KeyError if it is not watched."""
        self._require_open()
        if fd not in self._positions:
            raise KeyError(fd)
        self._poll.modify(fd, _to_native(_POLL_FLAGS, flags))

    def _find_next_event(self) -> PollEvent | None:
        if self._unread == 0:
            return None
        size = len(self._fds)
        if self._rotation >= size:
            self._rotation = 0
        for index in range(size):
            fd = self._fds[(index + self._rotation) % size]
            revents = self._revents.pop(fd, 0)
            if revents:
                self._rotation += 1
                self._unread -= 1
                return PollEvent(fd, _from_native(_POLL_FLAGS, revents))
        return None

    def wait_for_next_event(self, timeout_ms: int) -> PollEvent | None:
        """Return the next ready event, or None on timeout or with nothing watched.

        A negative timeout waits indefinitely.
        """
        self._require_open()
        if not self._fds:
            return None
        event = self._find_next_event()
        if event is not None:
            return event
        self._unread = 0
        self._revents.clear()
        ready = self._poll.poll(None if timeout_ms < 0 else timeout_ms)
        if not ready:
            return None
        for fd, revents in ready:
            self._revents[fd] = revents
        self._unread = len(ready)
        return self._find_next_event()


def create_polling_instance(poll_type: int, max_sockets: int) -> EpollPoller | PollPoller:
    """Create a poller of the requested type; BEST picks epoll where available."""
    poll_type = int(poll_type)
    has_epoll = hasattr(select, "epoll")
    if poll_type == PollType.BEST:
        poll_type = PollType.EPOLL if has_epoll else PollType.POLL
    if poll_type == PollType.EPOLL:
        if not has_epoll:
            raise HResultError(E_FAIL, "epoll is not available on this platform")
        return EpollPoller(max_sockets)
    if poll_type == PollType.POLL:
        return PollPoller(max_sockets)
    raise ValueError(f"unknown polling type: {poll_type}")