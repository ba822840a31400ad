"""Line settings for a serial port and their termios equivalents."""

from __future__ import annotations

import enum
import termios

from .errors import UnsupportedSettingError

__all__ = [
    "DataBits",
    "StopBits",
    "Parity",
    "baud_constant",
    "databits_flag",
    "stopbits_flag",
    "parity_flag",
    "supported_bauds",
]


class DataBits(enum.IntEnum):
    """Number of data bits in one character."""

    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    SIXTEEN = 16


class StopBits(enum.Enum):
    """Number of stop bits after each character."""

    ONE = 1
    ONE_AND_HALF = 1.5
    TWO = 2


class Parity(enum.Enum):
    """Parity bit mode."""

    NONE = "N"
    EVEN = "E"
    ODD = "O"
    MARK = "M"
    SPACE = "S"


_STANDARD_BAUDS = (110, 300, 600, 1200, 2400, 4800, 9600, 19200, 38400, 57600, 115200)
_OPTIONAL_BAUDS = (
    230400, 460800, 500000, 576000, 921600, 1000000, 1152000,
    1500000, 2000000, 2500000, 3000000, 3500000, 4000000,
)


def _collect_bauds() -> dict[int, int]:
    rates = {rate: getattr(termios, f"B{rate}") for rate in _STANDARD_BAUDS}
    for rate in _OPTIONAL_BAUDS:
        constant = getattr(termios, f"B{rate}", None)
        if constant is not None:
            rates[rate] = constant
    return rates


_BAUDS = _collect_bauds()


def supported_bauds() -> tuple[int, ...]:
    """Return the baud rates this platform supports, in ascending order."""
    return tuple(sorted(_BAUDS))


def baud_constant(bauds: int) -> int:
    """Return the termios speed constant for a baud rate."""
    try:
        return _BAUDS[bauds]
    except (KeyError, TypeError):
        raise UnsupportedSettingError("baud rate", bauds) from None


def _coerce(kind: type[enum.Enum], value: object, setting: str) -> enum.Enum:
    try:
        return kind(value)
    except ValueError:
        raise UnsupportedSettingError(setting, value) from None


def databits_flag(databits: DataBits | int) -> int:
    """Return the c_cflag character-size bits for a data bit count."""
    flags = {
        DataBits.FIVE: termios.CS5,
        DataBits.SIX: termios.CS6,
        DataBits.SEVEN: termios.CS7,
        DataBits.EIGHT: termios.CS8,
    }
    member = _coerce(DataBits, databits, "data bits")
    if member not in flags:
        raise UnsupportedSettingError("data bits", member)
    return flags[member]


def stopbits_flag(stopbits: StopBits | float) -> int:
    """Return the c_cflag bits for a stop bit count."""
    flags = {StopBits.ONE: 0, StopBits.TWO: termios.CSTOPB}
    member = _coerce(StopBits, stopbits, "stop bits")
    if member not in flags:
        raise UnsupportedSettingError("stop bits", member)
    return flags[member]


def parity_flag(parity: Parity | str) -> int:
    """Return the c_cflag bits for a parity mode."""
    flags = {
        Parity.NONE: 0,
        Parity.EVEN: termios.PARENB,
        Parity.ODD: termios.PARENB | termios.PARODD,
    }
    member = _coerce(Parity, parity, "parity")
    if member not in flags:
        raise UnsupportedSettingError("parity", member)
    return flags[member]