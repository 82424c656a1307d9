"""Choosing local addresses from the host's network interfaces."""

import ipaddress
import socket
from typing import Iterator

import psutil

from .errors import E_FAIL, HResultError


def _scope_id(interface: str) -> int:
    try:
        return socket.if_nametoindex(interface)
    except (OSError, ValueError):
        return 0


def _sockaddr(interface: str, address: str, family: int, port: int) -> tuple:
    host, _, zone = address.partition("%")
    if family == socket.AF_INET6:
        scope = 0
        try:
            link_local = ipaddress.IPv6Address(host).is_link_local
        except ValueError:
            link_local = False
        if zone or link_local:
            scope = _scope_id(zone or interface)
        return (host, port, 0, scope)
    return (host, port)


def _interface_addresses(family: int) -> Iterator[tuple[str, str]]:
    """Yield (interface name, address) for every address of the given family."""
    for name, entries in psutil.net_if_addrs().items():
        for entry in entries:
            if entry.family == family and entry.address:
                yield name, entry.address


def _is_loopback(address: str, stats) -> bool:
    flags = getattr(stats, "flags", "") or ""
    if "loopback" in flags.split(","):
        return True
    try:
        return ipaddress.ip_address(address.partition("%")[0]).is_loopback
    except ValueError:
        return False


def _default_adapters(family: int) -> list[tuple[str, str]]:
    """Return up to two (name, address) pairs of interfaces that are up and not loopback."""
    stats = psutil.net_if_stats()
    found = []
    for name, address in _interface_addresses(family):
        info = stats.get(name)
        if info is None or not info.isup or _is_loopback(address, info):
            continue
        found.append((name, address))
        if len(found) == 2:
            break
    return found


def has_at_least_two_adapters(family: int) -> bool:
    """Return True when two or more interfaces of family are up and not loopback."""
    try:
        return len(_default_adapters(family)) >= 2
    except OSError:
        return False


def get_best_address_for_socket_bind(primary: bool, family: int, port: int) -> tuple:
    """Suggest the address a server socket should bind to.

    The primary socket gets the first suitable interface, the alternate one
    the second. Raises HResultError when there is no such interface.
    """
    adapters = _default_adapters(family)
    index = 0 if primary else 1
    if len(adapters) <= index:
        raise HResultError(E_FAIL, "no suitable network interface found")
    name, address = adapters[index]
    return _sockaddr(name, address, family, port)


def get_socket_address_for_adapter(family: int, adapter_name: str, port: int) -> tuple:
    """Return the address of an interface given by name or by one of its IP addresses.

    Raises ValueError for an empty name and HResultError when nothing matches.
    """
    if not adapter_name:
        raise ValueError("no adapter name given")

    addresses = list(_interface_addresses(family))
    for name, address in addresses:
        if name == adapter_name:
            return _sockaddr(name, address, family, port)

    if family in (socket.AF_INET, socket.AF_INET6):
        try:
            wanted = socket.inet_pton(family, adapter_name)
        except (OSError, ValueError):
            wanted = None
        if wanted is not None:
            for name, address in addresses:
                try:
                    packed = socket.inet_pton(family, address.partition("%")[0])
                except (OSError, ValueError):
                    continue
                if packed == wanted:
                    return _sockaddr(name, address, family, port)

    raise HResultError(E_FAIL, f"no interface matches {adapter_name}")