"""Turning host names and numeric addresses into socket addresses."""

import socket

from .errors import E_FAIL, HResultError, errno_to_hresult
from .stringhelper import trim


def resolve_host_name(
    host_name: str, family: int = socket.AF_INET, numeric_only: bool = False
) -> tuple:
    """Resolve host_name to the first matching socket address (port 0).

    With numeric_only, no name lookup is done and only literal addresses
    resolve. Raises ValueError for an empty name and HResultError when the
    name cannot be resolved.
    """
    name = trim(host_name)
    if not name:
        raise ValueError("no host name given")
    flags = socket.AI_NUMERICHOST if numeric_only else 0
    try:
        results = socket.getaddrinfo(name, None, family, socket.SOCK_STREAM, 0, flags)
    except socket.gaierror as err:
        code = err.errno if err.errno is not None else 0
        raise HResultError(errno_to_hresult(code), f"unable to resolve {name}") from err
    if not results:
        raise HResultError(E_FAIL, f"no addresses found for {name}")
    return results[0][4]