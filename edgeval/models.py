"""
Core data models for edgeval.

Numeric traits for the supported float formats and integer kinds, the
category enumerations used for weighted dispatch, and the sample/report
models produced by the CLI.
"""

from __future__ import annotations

import struct
from datetime import datetime, timezone
from enum import Enum

import numpy as np
from pydantic import BaseModel, ConfigDict, Field


class FloatCategory(str, Enum):
    NORMAL = "normal"
    SUBNORMAL = "subnormal"
    NAN = "nan"
    SPECIAL = "special"


class IntCategory(str, Enum):
    SPECIAL = "special"
    GENERAL = "general"


class FloatClass(str, Enum):
    """IEEE-754 classification of an arbitrary float value."""
    ZERO = "zero"
    SUBNORMAL = "subnormal"
    NORMAL = "normal"
    INFINITE = "infinite"
    NAN = "nan"


# ── Numeric traits ───────────────────────────────────────────────────────────

class FloatFormat(BaseModel):
    """Field layout of a binary IEEE-754 format."""
    model_config = ConfigDict(frozen=True)

    name: str
    bits: int
    exponent_bits: int
    mantissa_bits: int
    float_dtype: str
    uint_dtype: str

    @property
    def sign_shift(self) -> int:
        return self.bits - 1

    @property
    def exponent_max(self) -> int:
        """All-ones exponent field (infinity / NaN)."""
        return (1 << self.exponent_bits) - 1

    @property
    def exponent_bias(self) -> int:
        return (1 << (self.exponent_bits - 1)) - 1

    @property
    def mantissa_mask(self) -> int:
        return (1 << self.mantissa_bits) - 1

    @property
    def exponent_mask(self) -> int:
        return self.exponent_max << self.mantissa_bits

    @property
    def sign_mask(self) -> int:
        return 1 << self.sign_shift

    @property
    def signaling_bit(self) -> int:
        """Mantissa bit that is clear for a signaling NaN (IEEE 754-2008)."""
        return 1 << (self.mantissa_bits - 1)

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.float_dtype)

    @property
    def bits_dtype(self) -> np.dtype:
        return np.dtype(self.uint_dtype)

    def pack(self, sign: int, exponent: int, mantissa: int) -> int:
        """Assemble raw bits from sign, exponent and mantissa fields."""
        return (
            (sign << self.sign_shift)
            | ((exponent & self.exponent_max) << self.mantissa_bits)
            | (mantissa & self.mantissa_mask)
        )


class IntKind(BaseModel):
    """Width and signedness of a fixed-size integer type."""
    model_config = ConfigDict(frozen=True)

    name: str
    bits: int
    signed: bool

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1


F32 = FloatFormat(
    name="f32", bits=32, exponent_bits=8, mantissa_bits=23,
    float_dtype="float32", uint_dtype="uint32",
)
F64 = FloatFormat(
    name="f64", bits=64, exponent_bits=11, mantissa_bits=52,
    float_dtype="float64", uint_dtype="uint64",
)

FLOAT_FORMATS: dict[str, FloatFormat] = {f.name: f for f in (F32, F64)}

POINTER_BITS = struct.calcsize("P") * 8

INT_KINDS: dict[str, IntKind] = {}
for _prefix, _signed in (("u", False), ("i", True)):
    for _bits in (8, 16, 32, 64, 128):
        _name = f"{_prefix}{_bits}"
        INT_KINDS[_name] = IntKind(name=_name, bits=_bits, signed=_signed)
    _name = f"{_prefix}size"
    INT_KINDS[_name] = IntKind(name=_name, bits=POINTER_BITS, signed=_signed)
del _prefix, _signed, _bits, _name


def type_names() -> list[str]:
    """All supported type names, floats first."""
    return list(FLOAT_FORMATS) + list(INT_KINDS)


# ── Samples & reports ────────────────────────────────────────────────────────

class Sample(BaseModel):
    """One generated value as shown by the CLI."""
    type_name: str
    category: str = "any"
    value: str
    bits: str = ""
    float_class: FloatClass | None = None


class SampleReport(BaseModel):
    """Complete sampling run."""
    run_id: str = ""
    type_name: str
    count: int = 0
    seed: int
    category: str = "any"
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: datetime | None = None
    samples: list[Sample] = Field(default_factory=list)

    def class_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for s in self.samples:
            if s.float_class is not None:
                counts[s.float_class.value] = counts.get(s.float_class.value, 0) + 1
        return counts
