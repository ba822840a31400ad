# ttylink

A small library for talking to serial devices (`/dev/ttyS0`, `/dev/ttyUSB0`,
`/dev/ttyACM0`, ...) on Linux and macOS. It uses the standard library only
(`termios`, `fcntl`, `select`, `os`).

## Install

```
pip install ttylink
```

## Opening a port

```python
from ttylink.device import SerialDevice
from ttylink.settings import DataBits, Parity, StopBits

with SerialDevice() as port:
    port.open("/dev/ttyUSB0", 115200, DataBits.EIGHT, Parity.NONE, StopBits.ONE)
    port.write_string("hello\n")
    line = port.read_string("\n", 128, 1000)
    print(line)  # bytes ending in b"\n", or None on timeout
```

`SerialDevice.open(device, bauds, databits=DataBits.EIGHT,
parity=Parity.NONE, stopbits=StopBits.ONE)` opens the device non-blocking
and without making it the controlling terminal. It clears all terminal
flags, then enables the receiver, ignores modem control lines, ignores
parity errors and breaks, and sets `VMIN` and `VTIME` to zero. Opening a
port that is already open closes the previous device first.

The settings may be given as enum members or as their plain values:
`8` for data bits, `"N"`, `"E"` or `"O"` for parity, `1` or `2` for stop bits.

`is_open()` tells whether a device is open and `close()` closes it. The port
also closes when the `with` block ends or the object is garbage collected.

## Settings

`ttylink.settings` holds `DataBits`, `StopBits` and `Parity`, and the
functions that turn them into termios flags: `baud_constant`,
`databits_flag`, `stopbits_flag` and `parity_flag`.

The standard rates from 110 up to 115200 are always available; higher rates
up to 4000000 are available when the platform's `termios` module defines
them. `supported_bauds()` lists the rates on the machine you are running on,
in ascending order.

Only 5, 6, 7 and 8 data bits, 1 or 2 stop bits, and no, even or odd parity
can be used. `DataBits.SIXTEEN`, `StopBits.ONE_AND_HALF`, `Parity.MARK`,
`Parity.SPACE`, unknown values and unsupported baud rates raise
`UnsupportedSettingError`.

## Reading and writing

- `write_char(byte)` sends one byte given as an int (0–255), a one-byte
  `bytes` or a one-character string. `write_string(text)` sends text encoded
  as UTF-8, and `write_bytes(data)` sends a bytes-like object. They raise
  `SerialWriteError` if the device accepts less than everything.
- `read_char(timeout_ms=0)` waits for one byte and returns it as `bytes`. It
  returns `None` when the timeout runs out. A timeout of `0` waits for ever.
- `read_string(final_char, max_bytes, timeout_ms=0)` reads until
  `final_char` arrives and returns the bytes read, terminator included. It
  returns `None` when the timeout runs out (`0` waits for ever), and raises
  `BufferFullError` when `max_bytes` bytes arrive without the final
  character; the error carries the bytes read in its `data` attribute.
- `read_bytes(max_bytes, timeout_ms=0, sleep_us=100)` collects up to
  `max_bytes` bytes, sleeping `sleep_us` microseconds between attempts. It
  returns whatever arrived before the timeout; with a timeout of `0` it waits
  until `max_bytes` bytes have arrived.
- `available()` gives the number of bytes waiting in the receive buffer, and
  `flush_receiver()` discards them.

## Modem lines

`set_dtr(status=True)` and `set_rts(status=True)` set or clear the output
lines. `is_dtr`, `is_rts`, `is_cts`, `is_dsr`, `is_dcd` and `is_ri` read the
line states.

## Errors

Every error is a subclass of `ttylink.errors.SerialError`:

- `DeviceOpenError`: the device could not be opened or configured.
- `UnsupportedSettingError` (also a `ValueError`): the baud rate, data bits,
  parity or stop bits are not supported.
- `SerialReadError` and `SerialWriteError`: I/O on the device failed.
- `BufferFullError`: a string read filled its limit.
- `DeviceClosedError`: an operation was tried on a closed port.

Failures of `flush_receiver`, `available` and the modem line calls raise
`SerialError` itself.

## Timeouts

`ttylink.timer.Timer(clock=None)` measures whole milliseconds elapsed since
it was created or last `reset()`; `elapsed_ms()` returns the count. `clock`
is any function returning seconds and defaults to `time.monotonic`; pass
your own to control timing in tests.

## What it does not do

ttylink is a library only: it has no command-line tool. It works through the
POSIX terminal interface and does not run on Windows. It has no flow control
settings and no port discovery; you give the device path yourself.