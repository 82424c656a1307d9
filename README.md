# stunkit

Building blocks for STUN clients and servers: socket helpers, interface
lookup, host name resolution, event polling, a per-address rate limiter and
a few small utilities for command lines, logging and console output.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

The package needs a POSIX system. `psutil` is used to list network
interfaces.

## Modules

- `stunkit.errors`: HRESULT-style status values. `make_hresult`,
  `succeeded`, `failed`, `hresult_code`, `hresult_facility`,
  `hresult_severity` and `errno_to_hresult` work on signed 32-bit codes, and
  constants such as `S_OK`, `E_FAIL` and `E_INVALIDARG` are provided.
  `HResultError` is the exception that carries a code in its `hr` attribute.
- `stunkit.stringhelper`: `is_null_or_empty`, `to_lower` (ASCII letters
  only), `trim`, and `validate_number_string`. The last one reads the leading
  integer of a string the way `atoi` does and raises `ValueError` when the
  string is empty or the number is out of range.
- `stunkit.logger`: the `LogLevel` levels (`ALWAYS`, `DEBUG`, `VERBOSE`,
  `VERBOSE_EXTREME`), plus `get_log_level`, `set_log_level` and `log_msg`.
  `log_msg` prints a printf-style message when its level is at most the
  current one. Negative levels are rejected.
- `stunkit.oshelper`: `get_console_width` reports the terminal width on
  stdin and falls back to 80. `get_millisecond_counter` is a 32-bit
  wall-clock millisecond counter that wraps around.
- `stunkit.prettyprint`: word-wraps text to a width and keeps the indent of
  each paragraph (`split_paragraphs`, `wrap_paragraph`, `pretty_format`,
  `pretty_print`). A word longer than the width gets a line of its own.
- `stunkit.cmdlineparser`: `CmdLineParser` parses long options, written with
  one or two dashes, in the style of `getopt_long_only`. Unambiguous prefixes
  are accepted. It also binds positional arguments to names.
  `parse_command_line` returns a `ParsedCommandLine` holding the values and an
  `error` flag. Options that take no argument are recorded as `"1"`.
- `stunkit.fasthash`: `FastHash` is a chained hash table with a fixed
  capacity. Inserting into a full table raises `HashTableFullError`.
  Inserting a key that is already present keeps the older entry underneath
  the new one. Positional lookup (`lookup_by_index`) follows insertion order
  until an entry is removed from the middle; the positions are then rebuilt
  in bucket order. `get_hash_table_width` picks a prime width.
- `stunkit.ratelimiter`: `RateLimiter` tracks the request rate of each
  source IP address through `RateTracker` records. An address that reaches
  an hourly rate of 3600 (once at least 60 requests have been seen) is
  refused for an hour. A locking mode and an injectable clock are available.
- `stunkit.polling`: `create_polling_instance` returns an `EpollPoller`
  (where epoll exists) or a `PollPoller`. `wait_for_next_event` returns one
  `PollEvent` at a time, with `PollFlags`, or `None` on timeout.
- `stunkit.resolvehostname`: `resolve_host_name` turns a name or a numeric
  address into the first matching socket address. It can refuse name
  lookups with `numeric_only`.
- `stunkit.adapters`: `get_socket_address_for_adapter` finds an interface
  address by interface name or by IP address. `get_best_address_for_socket_bind`
  suggests the first or second interface that is up and not loopback.
  `has_at_least_two_adapters` reports whether two such interfaces exist.
- `stunkit.recvfromex`: `recvfromex` receives a datagram and returns a
  `ReceivedPacket` with its data, its source, and the local address it was
  sent to. The local address is taken from packet-info control data, and its
  port is always 0.
- `stunkit.stunsocket`: `StunSocket` creates a bound UDP or TCP socket
  (`udp_init`, `tcp_init`) and caches its `local_address` and
  `remote_address`. It can enable packet-info reporting and non-blocking
  mode, and it works as a context manager.

## Example

```python
from stunkit.cmdlineparser import CmdLineParser, HasArg
from stunkit.ratelimiter import RateLimiter

parser = CmdLineParser()
parser.add_non_option("server")
parser.add_option("mode", HasArg.REQUIRED)
parsed = parser.parse_command_line(["stun.example.com", "--mode", "full"], 0)
print(parsed.get("server"), parsed.get("mode"))

limiter = RateLimiter(1000)
allowed = limiter.rate_check(("192.0.2.1", 3478))
```

## What this package does not do

stunkit provides only the building blocks. It does not build or parse STUN
messages, and it does not run NAT behaviour or filtering tests. It installs
no client or server command.