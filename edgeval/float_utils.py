"""
Bit-level helpers for 32- and 64-bit floats.

Python has no native 32-bit float, so f32 values are carried as
numpy.float32 scalars. Going through numpy views keeps every bit
pattern intact, signaling NaN payloads included.
"""

from __future__ import annotations

import numpy as np

from edgeval.models import F32, F64, FloatClass, FloatFormat


def format_of(value) -> FloatFormat:
    """numpy.float32 is 32-bit, any other real is treated as 64-bit."""
    if isinstance(value, np.float32):
        return F32
    return F64


def to_bits(value, fmt: FloatFormat | None = None) -> int:
    """Reinterpret a float as its raw unsigned bit pattern."""
    fmt = fmt or format_of(value)
    return int(np.array(value, dtype=fmt.dtype).view(fmt.bits_dtype))


def from_bits(bits: int, fmt: FloatFormat):
    """Reinterpret a raw bit pattern as a float of the given format."""
    return np.array(bits, dtype=fmt.bits_dtype).view(fmt.dtype)[()]


def f32_to_bits(value) -> int:
    return to_bits(value, F32)


def f32_from_bits(bits: int) -> np.float32:
    return from_bits(bits, F32)


def f64_to_bits(value) -> int:
    return to_bits(value, F64)


def f64_from_bits(bits: int) -> np.float64:
    return from_bits(bits, F64)


def bits_equal(lhs, rhs) -> bool:
    """
    True if both values have identical bit patterns.

    Unlike ==, this tells 0.0 from -0.0 and compares NaN payloads.
    Values of different widths never compare equal.
    """
    lfmt, rfmt = format_of(lhs), format_of(rhs)
    if lfmt != rfmt:
        return False
    return to_bits(lhs, lfmt) == to_bits(rhs, rfmt)


def is_signaling_nan(value) -> bool:
    """
    Returns whether the float is a signaling NaN.

    A signaling NaN has an all-ones exponent, a non-zero mantissa, and
    the top mantissa bit (bit 22 for f32, bit 51 for f64) clear. Some
    old platforms (PA-RISC, some MIPS) use the opposite convention; the
    2008 revision of IEEE-754 settled on a clear bit meaning signaling.
    """
    fmt = format_of(value)
    bits = to_bits(value, fmt)
    # checked on bits; comparing a signaling NaN raises the invalid flag
    return classify(value) is FloatClass.NAN and (bits & fmt.signaling_bit) == 0


def is_subnormal(value) -> bool:
    fmt = format_of(value)
    bits = to_bits(value, fmt)
    return (bits & fmt.exponent_mask) == 0 and (bits & fmt.mantissa_mask) != 0


def classify(value) -> FloatClass:
    fmt = format_of(value)
    bits = to_bits(value, fmt)
    exponent = (bits & fmt.exponent_mask) >> fmt.mantissa_bits
    mantissa = bits & fmt.mantissa_mask

    if exponent == fmt.exponent_max:
        return FloatClass.NAN if mantissa else FloatClass.INFINITE
    if exponent == 0:
        return FloatClass.SUBNORMAL if mantissa else FloatClass.ZERO
    return FloatClass.NORMAL
