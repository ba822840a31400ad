import termios

import pytest

from ttylink.errors import UnsupportedSettingError
from ttylink.settings import (
    DataBits,
    Parity,
    StopBits,
    baud_constant,
    databits_flag,
    parity_flag,
    stopbits_flag,
    supported_bauds,
)


@pytest.mark.parametrize(
    "rate", [110, 300, 600, 1200, 2400, 4800, 9600, 19200, 38400, 57600, 115200]
)
def test_standard_bauds_map_to_termios(rate):
    assert baud_constant(rate) == getattr(termios, f"B{rate}")
    assert rate in supported_bauds()


def test_supported_bauds_sorted_and_all_mapped():
    rates = supported_bauds()
    assert list(rates) == sorted(rates)
    for rate in rates:
        assert baud_constant(rate) == getattr(termios, f"B{rate}")


@pytest.mark.parametrize("rate", [14400, 56000, 128000, 256000, 0, -9600])
def test_unknown_baud_rejected(rate):
    with pytest.raises(UnsupportedSettingError) as info:
        baud_constant(rate)
    assert info.value.value == rate


@pytest.mark.parametrize(
    "bits, flag",
    [
        (DataBits.FIVE, termios.CS5),
        (DataBits.SIX, termios.CS6),
        (DataBits.SEVEN, termios.CS7),
        (DataBits.EIGHT, termios.CS8),
        (8, termios.CS8),
    ],
)
def test_databits_flags(bits, flag):
    assert databits_flag(bits) == flag


@pytest.mark.parametrize("bits", [DataBits.SIXTEEN, 16, 9])
def test_databits_unsupported(bits):
    with pytest.raises(UnsupportedSettingError):
        databits_flag(bits)


def test_stopbits_flags():
    assert stopbits_flag(StopBits.ONE) == 0
    assert stopbits_flag(StopBits.TWO) == termios.CSTOPB
    assert stopbits_flag(2) == termios.CSTOPB


def test_stopbits_one_and_half_unsupported():
    with pytest.raises(UnsupportedSettingError) as info:
        stopbits_flag(StopBits.ONE_AND_HALF)
    assert info.value.value is StopBits.ONE_AND_HALF


def test_parity_flags():
    assert parity_flag(Parity.NONE) == 0
    assert parity_flag(Parity.EVEN) == termios.PARENB
    assert parity_flag(Parity.ODD) == termios.PARENB | termios.PARODD
    assert parity_flag("E") == termios.PARENB


@pytest.mark.parametrize("parity", [Parity.MARK, Parity.SPACE, "X"])
def test_parity_unsupported(parity):
    with pytest.raises(UnsupportedSettingError):
        parity_flag(parity)


def test_enum_lookup_by_value():
    assert DataBits(7) is DataBits.SEVEN
    assert StopBits(1.5) is StopBits.ONE_AND_HALF
    assert Parity("O") is Parity.ODD