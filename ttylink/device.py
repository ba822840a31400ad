"""Access to a serial device through the POSIX terminal interface."""

from __future__ import annotations

import fcntl
import os
import select
import struct
import termios
import time
from types import TracebackType

from .errors import (
    BufferFullError,
    DeviceClosedError,
    DeviceOpenError,
    SerialError,
    SerialReadError,
    SerialWriteError,
)
from .settings import (
    DataBits,
    Parity,
    StopBits,
    baud_constant,
    databits_flag,
    parity_flag,
    stopbits_flag,
)
from .timer import Timer

__all__ = ["SerialDevice"]

_INT = struct.Struct("i")


def _to_byte(value: int | bytes | str, what: str) -> bytes:
    """Normalise a single character given as int, bytes or str to one byte."""
    if isinstance(value, int):
        if not 0 <= value <= 255:
            raise ValueError(f"{what} must be in range 0..255, got {value}")
        return bytes([value])
    if isinstance(value, str):
        if len(value) != 1 or ord(value) > 255:
            raise ValueError(f"{what} must be a single byte-sized character")
        return value.encode("latin-1")
    data = bytes(value)
    if len(data) != 1:
        raise ValueError(f"{what} must be exactly one byte")
    return data


class SerialDevice:
    """A serial port opened in non-blocking raw mode.

    The device closes itself when used as a context manager or when it is
    garbage collected.
    """

    def __init__(self) -> None:
        self._fd: int | None = None

    def __del__(self) -> None:
        fd = getattr(self, "_fd", None)
        if fd is not None:
            try:
                os.close(fd)
            except OSError:
                pass
            self._fd = None

    # Configuration -----------------------------------------------------

    def open(
        self,
        device: str,
        bauds: int,
        databits: DataBits | int = DataBits.EIGHT,
        parity: Parity | str = Parity.NONE,
        stopbits: StopBits | float = StopBits.ONE,
    ) -> None:
        """Open ``device`` and configure speed, data bits, parity and stop bits.

        Raises DeviceOpenError if the device cannot be opened or configured and
        UnsupportedSettingError if a setting is not supported.
        """
        self.close()
        try:
            fd = os.open(device, os.O_RDWR | os.O_NOCTTY | os.O_NONBLOCK)
        except OSError as exc:
            raise DeviceOpenError(device, exc) from exc

        try:
            speed = baud_constant(bauds)
            cflag = (
                termios.CLOCAL
                | termios.CREAD
                | databits_flag(databits)
                | parity_flag(parity)
                | stopbits_flag(stopbits)
            )
            try:
                attrs = termios.tcgetattr(fd)
                cc = [0] * len(attrs[6])
                cc[termios.VTIME] = 0
                cc[termios.VMIN] = 0
                iflag = termios.IGNPAR | termios.IGNBRK
                termios.tcsetattr(
                    fd, termios.TCSANOW, [iflag, 0, cflag, 0, speed, speed, cc]
                )
            except termios.error as exc:
                raise DeviceOpenError(device, exc) from exc
        except BaseException:
            os.close(fd)
            raise
        self._fd = fd

    def is_open(self) -> bool:
        """Return whether a device is currently open."""
        return self._fd is not None

    def close(self) -> None:
        """Close the device if one is open."""
        if self._fd is not None:
            fd, self._fd = self._fd, None
            try:
                os.close(fd)
            except OSError:
                pass

    def __enter__(self) -> SerialDevice:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _require_fd(self) -> int:
        if self._fd is None:
            raise DeviceClosedError()
        return self._fd

    # Writing -----------------------------------------------------------

    def _write_all(self, data: bytes) -> None:
        fd = self._require_fd()
        try:
            written = os.write(fd, data)
        except OSError as exc:
            raise SerialWriteError(0, len(data), exc) from exc
        if written != len(data):
            raise SerialWriteError(written, len(data))

    def write_char(self, byte: int | bytes | str) -> None:
        """Write a single byte."""
        self._write_all(_to_byte(byte, "byte"))

    def write_string(self, text: str) -> None:
        """Write a text string encoded as UTF-8."""
        self._write_all(text.encode("utf-8"))

    def write_bytes(self, data: bytes | bytearray | memoryview) -> None:
        """Write a block of bytes."""
        self._write_all(bytes(data))

    # Reading -----------------------------------------------------------

    @staticmethod
    def _read(fd: int, count: int) -> bytes:
        try:
            return os.read(fd, count)
        except BlockingIOError:
            return b""
        except OSError as exc:
            raise SerialReadError(cause=exc) from exc

    @staticmethod
    def _wait_readable(fd: int, seconds: float | None) -> bool:
        try:
            ready, _, _ = select.select([fd], [], [], seconds)
        except OSError as exc:
            raise SerialReadError(cause=exc) from exc
        return bool(ready)

    def read_char(self, timeout_ms: int = 0) -> bytes | None:
        """Wait for one byte and return it, or None once ``timeout_ms`` passes.

        A timeout of zero waits forever.
        """
        fd = self._require_fd()
        timer = Timer()
        while timeout_ms == 0 or timer.elapsed_ms() < timeout_ms:
            if timeout_ms == 0:
                wait = None
            else:
                wait = max(0, timeout_ms - timer.elapsed_ms()) / 1000
            if not self._wait_readable(fd, wait):
                continue
            chunk = self._read(fd, 1)
            if chunk:
                return chunk
        return None

    def read_string(
        self,
        final_char: int | bytes | str,
        max_bytes: int,
        timeout_ms: int = 0,
    ) -> bytes | None:
        """Read bytes up to and including ``final_char``.

        Returns None if ``timeout_ms`` passes first (zero waits forever) and
        raises BufferFullError if ``max_bytes`` are read without the terminator.
        """
        terminator = _to_byte(final_char, "final_char")
        self._require_fd()
        received = bytearray()

        if timeout_ms == 0:
            while len(received) < max_bytes:
                char = self.read_char()
                if char is not None:
                    received += char
                    if char == terminator:
                        return bytes(received)
            raise BufferFullError(bytes(received), max_bytes)

        timer = Timer()
        while len(received) < max_bytes:
            remaining = timeout_ms - timer.elapsed_ms()
            if remaining > 0:
                char = self.read_char(remaining)
                if char is not None:
                    received += char
                    if char == terminator:
                        return bytes(received)
            if timer.elapsed_ms() > timeout_ms:
                return None
        raise BufferFullError(bytes(received), max_bytes)

    def read_bytes(
        self, max_bytes: int, timeout_ms: int = 0, sleep_us: int = 100
    ) -> bytes:
        """Read up to ``max_bytes``, returning what arrived before the timeout.

        A timeout of zero waits until ``max_bytes`` have been read. Between
        attempts the loop sleeps ``sleep_us`` microseconds.
        """
        fd = self._require_fd()
        if max_bytes <= 0:
            return b""
        received = bytearray()
        timer = Timer()
        while timeout_ms == 0 or timer.elapsed_ms() < timeout_ms:
            chunk = self._read(fd, max_bytes - len(received))
            if chunk:
                received += chunk
                if len(received) >= max_bytes:
                    return bytes(received)
            time.sleep(sleep_us / 1_000_000)
        return bytes(received)

    # Buffer control ----------------------------------------------------

    def flush_receiver(self) -> None:
        """Discard data received but not yet read."""
        fd = self._require_fd()
        try:
            termios.tcflush(fd, termios.TCIFLUSH)
        except termios.error as exc:
            raise SerialError(f"cannot flush receiver: {exc}") from exc

    def available(self) -> int:
        """Return the number of bytes waiting in the receive buffer."""
        fd = self._require_fd()
        try:
            result = fcntl.ioctl(fd, termios.FIONREAD, _INT.pack(0))
        except OSError as exc:
            raise SerialError(f"cannot query pending bytes: {exc}") from exc
        return _INT.unpack(result)[0]

    # Modem lines -------------------------------------------------------

    def _modem_status(self) -> int:
        fd = self._require_fd()
        try:
            result = fcntl.ioctl(fd, termios.TIOCMGET, _INT.pack(0))
        except OSError as exc:
            raise SerialError(f"cannot read modem lines: {exc}") from exc
        return _INT.unpack(result)[0]

    def _set_line(self, bit: int, status: bool) -> None:
        current = self._modem_status()
        updated = current | bit if status else current & ~bit
        try:
            fcntl.ioctl(self._require_fd(), termios.TIOCMSET, _INT.pack(updated))
        except OSError as exc:
            raise SerialError(f"cannot set modem lines: {exc}") from exc

    def set_dtr(self, status: bool = True) -> None:
        """Set (True) or clear (False) the Data Terminal Ready line."""
        self._set_line(termios.TIOCM_DTR, status)

    def set_rts(self, status: bool = True) -> None:
        """Set (True) or clear (False) the Request To Send line."""
        self._set_line(termios.TIOCM_RTS, status)

    def is_dtr(self) -> bool:
        """Return whether Data Terminal Ready is set."""
        return bool(self._modem_status() & termios.TIOCM_DTR)

    def is_rts(self) -> bool:
        """Return whether Request To Send is set."""
        return bool(self._modem_status() & termios.TIOCM_RTS)

    def is_cts(self) -> bool:
        """Return whether Clear To Send is set."""
        return bool(self._modem_status() & termios.TIOCM_CTS)

    def is_dsr(self) -> bool:
        """Return whether Data Set Ready is set."""
        return bool(self._modem_status() & termios.TIOCM_DSR)

    def is_dcd(self) -> bool:
        """Return whether Data Carrier Detect is set."""
        return bool(self._modem_status() & termios.TIOCM_CAR)

    def is_ri(self) -> bool:
        """Return whether the Ring Indicator is set."""
        return bool(self._modem_status() & termios.TIOCM_RNG)