"""HRESULT-style result codes and the exception that carries them."""

FACILITY_ERRNO = 0x800

SEVERITY_SUCCESS = 0
SEVERITY_ERROR = 1


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def make_hresult(severity: int, facility: int, code: int) -> int:
    """Build a signed 32-bit result code from its parts."""
    return _to_int32((severity << 31) | (facility << 16) | code)


def succeeded(hr: int) -> bool:
    """Return True when the result code is a success (non-negative)."""
    return _to_int32(hr) >= 0


def failed(hr: int) -> bool:
    """Return True when the result code is a failure (negative)."""
    return _to_int32(hr) < 0


def hresult_code(hr: int) -> int:
    """Return the low 16-bit code of a result."""
    return hr & 0xFFFF


def hresult_facility(hr: int) -> int:
    """Return the facility field of a result."""
    return (hr >> 16) & 0x1FFF


def hresult_severity(hr: int) -> int:
    """Return the severity bit of a result."""
    return (hr >> 31) & 0x1


def errno_to_hresult(err: int) -> int:
    """Wrap an errno value into a failing result code."""
    return make_hresult(SEVERITY_ERROR, FACILITY_ERRNO, err)


S_OK = 0
S_FALSE = 1
E_UNEXPECTED = _to_int32(0x8000FFFF)
E_NOTIMPL = _to_int32(0x80004001)
E_OUTOFMEMORY = _to_int32(0x8007000E)
E_INVALIDARG = _to_int32(0x80070057)
E_NOINTERFACE = _to_int32(0x80004002)
E_POINTER = _to_int32(0x80004003)
E_HANDLE = _to_int32(0x80070006)
E_ABORT = _to_int32(0x80004004)
E_FAIL = _to_int32(0x80004005)
E_ACCESSDENIED = _to_int32(0x80070005)
E_PENDING = _to_int32(0x8000000A)


class HResultError(Exception):
    """An operation failed with the given result code."""

    def __init__(self, hr: int, message: str = "") -> None:
        self.hr = _to_int32(hr)
        self.message = message
        super().__init__(message or f"operation failed (hr == 0x{self.hr & 0xFFFFFFFF:08x})")