"""Exceptions raised by the serial port layer."""

from __future__ import annotations


class SerialError(Exception):
    """Base class for every error raised by this package."""


class DeviceOpenError(SerialError):
    """The device could not be opened."""

    def __init__(self, device: str, cause: BaseException | None = None) -> None:
        self.device = device
        self.cause = cause
        message = f"cannot open serial device {device!r}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class UnsupportedSettingError(SerialError, ValueError):
    """A baud rate, data bit count, stop bit count or parity is not supported."""

    def __init__(self, setting: str, value: object) -> None:
        self.setting = setting
        self.value = value
        super().__init__(f"unsupported {setting}: {value!r}")


class SerialReadError(SerialError):
    """Reading from the device failed."""

    def __init__(self, message: str = "error while reading from the device",
                 cause: BaseException | None = None) -> None:
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class SerialWriteError(SerialError):
    """Writing to the device failed or was incomplete."""

    def __init__(self, written: int, expected: int,
                 cause: BaseException | None = None) -> None:
        self.written = written
        self.expected = expected
        self.cause = cause
        message = f"wrote {written} of {expected} bytes"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class BufferFullError(SerialError):
    """The byte limit was reached before the terminating character arrived."""

    def __init__(self, data: bytes, limit: int) -> None:
        self.data = data
        self.limit = limit
        super().__init__(f"no terminator within {limit} bytes")


class DeviceClosedError(SerialError):
    """An operation needed an open device but none is open."""

    def __init__(self, message: str = "the serial device is not open") -> None:
        super().__init__(message)