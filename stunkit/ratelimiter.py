"""Per-address request rate limiting with a penalty box."""

import ipaddress
import threading
import time
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Callable, Union

from .fasthash import FastHash, HashTableFullError

Address = Union[str, bytes, ipaddress.IPv4Address, ipaddress.IPv6Address, tuple]


@dataclass
class RateTracker:
    """Request history of one address."""

    count: int
    first_entry_time: int
    last_entry_time: int
    penalty_time: int = 0


def _address_key(address: Address) -> bytes:
    if isinstance(address, tuple):
        address = address[0]
    if isinstance(address, str):
        address = ipaddress.ip_address(address.split("%", 1)[0])
    if isinstance(address, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        packed = address.packed
    elif isinstance(address, bytes) and len(address) in (4, 16):
        packed = address
    else:
        raise ValueError(f"not an IP address: {address!r}")
    return packed.ljust(16, b"\0")


def _hash_address(key: bytes) -> int:
    return int.from_bytes(key[:8], "little") ^ int.from_bytes(key[8:], "little")


class RateLimiter:
    """Decides whether a request from an address should be served.

    Addresses that send at an hourly rate of MAX_RATE or more are refused
    for PENALTY_TIME_SECONDS. When the tracking table is full it is emptied
    and started over.
    """

    MAX_RATE = 3600  # 60 per minute, as an hourly rate
    MIN_COUNT_FOR_CONSIDERATION = 60
    RESET_INTERVAL_SECONDS = 120
    PENALTY_TIME_SECONDS = 3600

    def __init__(
        self,
        table_size: int,
        is_using_lock: bool = False,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if table_size <= 0:
            raise ValueError("table size must be positive")
        self._table: FastHash[bytes, RateTracker] = FastHash(
            table_size, table_size // 2, hash_func=_hash_address
        )
        self._lock = threading.Lock() if is_using_lock else nullcontext()
        self._clock = clock

    def __len__(self) -> int:
        return len(self._table)

    def _get_time(self) -> int:
        return int(self._clock())

    def get_rate(self, tracker: RateTracker) -> int:
        """Return the tracker's hourly request rate, or 0 with too few requests."""
        if tracker.count < self.MIN_COUNT_FOR_CONSIDERATION:
            return 0
        seconds = 1
        if tracker.last_entry_time > tracker.first_entry_time:
            seconds = tracker.last_entry_time - tracker.first_entry_time
        return (tracker.count * 3600) // seconds

    def rate_check(self, address: Address) -> bool:
        """Record a request from address and return True if it may be served."""
        with self._lock:
            return self._rate_check(address)

    def _rate_check(self, address: Address) -> bool:
        key = _address_key(address)
        now = self._get_time()
        tracker = self._table.lookup(key)

        if tracker is None:
            tracker = RateTracker(count=1, first_entry_time=now, last_entry_time=now)
            try:
                self._table.insert(key, tracker)
            except HashTableFullError:
                self._table.reset()
                self._table.insert(key, tracker)
            return True

        tracker.count += 1
        tracker.last_entry_time = now
        rate = self.get_rate(tracker)

        if tracker.penalty_time != 0:
            if tracker.penalty_time >= now:
                return False
            if rate < self.MAX_RATE:
                tracker.penalty_time = 0
                return True
            tracker.penalty_time = now + self.PENALTY_TIME_SECONDS
            return False

        if rate >= self.MAX_RATE:
            tracker.penalty_time = now + self.PENALTY_TIME_SECONDS
            return False

        if tracker.last_entry_time - tracker.first_entry_time > self.RESET_INTERVAL_SECONDS:
            self._table.remove(key)

        return True