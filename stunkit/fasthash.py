"""A fixed-capacity hash table with chained buckets and positional lookup."""

import math
from typing import Callable, Generic, Hashable, Iterator, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class HashTableFullError(Exception):
    """Raised when inserting into a table that has no free slots."""


def get_hash_table_width(max_items: int) -> int:
    """Return the smallest prime at least max_items (never less than 2)."""
    if max_items <= 2:
        return 2
    if max_items == 3:
        return 3
    candidate = max_items if max_items % 2 else max_items + 1
    while any(candidate % divisor == 0 for divisor in range(3, math.isqrt(candidate) + 2)):
        candidate += 2
    return candidate


class FastHash(Generic[K, V]):
    """A hash table whose storage is allocated once, up front.

    It holds at most ``capacity`` entries spread over ``table_width`` buckets.
    Inserting a key that is already present does not replace the earlier
    entry: lookups find the newest one, and removing it uncovers the older.
    Entries can also be fetched by position, which follows insertion order
    until an entry is removed from the middle; the positions are then rebuilt
    in bucket order.
    """

    def __init__(
        self,
        capacity: int = 100,
        table_width: int = 37,
        hash_func: Callable[[K], int] = hash,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if table_width <= 0:
            table_width = get_hash_table_width(capacity)
        self._capacity = capacity
        self._width = table_width
        self._hash = hash_func
        self._keys: list = [None] * capacity
        self._values: list = [None] * capacity
        self._next: list[int | None] = [None] * capacity
        self._table: list[int | None] = [None] * table_width
        self._positions: list[int] = [0] * capacity
        self._free: int | None = None
        self._size = 0
        self._positions_valid = True
        self._positions_start = 0
        self.reset()

    @property
    def capacity(self) -> int:
        """Maximum number of entries the table can hold."""
        return self._capacity

    @property
    def table_width(self) -> int:
        """Number of buckets."""
        return self._width

    def reset(self) -> None:
        """Remove every entry."""
        self._table = [None] * self._width
        self._next = [*range(1, self._capacity), None]
        self._keys = [None] * self._capacity
        self._values = [None] * self._capacity
        self._free = 0
        self._size = 0
        self._positions_valid = True
        self._positions_start = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return self.exists(key)

    def __iter__(self) -> Iterator[tuple[K, V]]:
        for position in range(self._size):
            item = self.lookup_by_index(position)
            if item is None:
                return
            yield item

    def _bucket(self, key: K) -> int:
        return self._hash(key) % self._width

    def _find(self, key: K) -> tuple[int | None, int, int | None]:
        bucket = self._bucket(key)
        previous = None
        node = self._table[bucket]
        while node is not None and self._keys[node] != key:
            previous = node
            node = self._next[node]
        return node, bucket, previous

    def insert(self, key: K, value: V) -> None:
        """Add an entry; raises HashTableFullError when the table is full."""
        if self._free is None:
            raise HashTableFullError(f"table is full ({self._capacity} entries)")
        bucket = self._bucket(key)
        node = self._free
        self._free = self._next[node]
        self._keys[node] = key
        self._values[node] = value
        self._next[node] = self._table[bucket]
        self._table[bucket] = node
        if self._positions_valid and self._size < self._capacity:
            self._positions[(self._size + self._positions_start) % self._capacity] = node
        self._size += 1

    def remove(self, key: K) -> None:
        """Remove the newest entry for key; raises KeyError if there is none."""
        node, bucket, previous = self._find(key)
        if node is None:
            raise KeyError(key)
        following = self._next[node]
        if previous is None:
            self._table[bucket] = following
        else:
            self._next[previous] = following
        self._forget_position(node)
        self._keys[node] = None
        self._values[node] = None
        self._next[node] = self._free
        self._free = node
        self._size -= 1

    def _forget_position(self, node: int) -> None:
        # called before the size is decremented
        if self._size == 0 or (self._size > 1 and not self._positions_valid):
            return
        if self._size == 1:
            self._positions_valid = True
            self._positions_start = 0
            return
        if node == self._positions[self._positions_start]:
            self._positions_start = (self._positions_start + 1) % self._capacity
            return
        last = (self._positions_start + self._size - 1) % self._capacity
        if node == self._positions[last]:
            return
        self._positions_valid = False

    def _reindex(self) -> None:
        if self._size == 0:
            return
        position = 0
        for head in self._table:
            node = head
            while node is not None:
                self._positions[position] = node
                position += 1
                node = self._next[node]
        self._positions_valid = True
        self._positions_start = 0

    def lookup(self, key: K) -> V | None:
        """Return the newest value stored for key, or None."""
        node, _, _ = self._find(key)
        return None if node is None else self._values[node]

    def exists(self, key: K) -> bool:
        """Return True when key has an entry."""
        return self._find(key)[0] is not None

    def lookup_by_index(self, index: int) -> tuple[K, V] | None:
        """Return the (key, value) pair at a position, or None when out of range."""
        if index < 0 or index >= self._size:
            return None
        if not self._positions_valid:
            self._reindex()
        node = self._positions[(self._positions_start + index) % self._capacity]
        return self._keys[node], self._values[node]

    def lookup_value_by_index(self, index: int) -> V | None:
        """Return the value at a position, or None when out of range."""
        item = self.lookup_by_index(index)
        return None if item is None else item[1]