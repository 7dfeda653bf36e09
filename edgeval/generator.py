"""
Edge-case value generator.

Generates random numbers in such a way that rare edge cases become very
likely. Sampling 32 uniform bits for an f32 will almost never give NaN,
infinity or -0.0, which is exactly the data randomized testing wants to
see more often.

NOT cryptographically secure. Use these values as test inputs only.
"""

from __future__ import annotations

import logging
import random
from typing import Callable

from edgeval.float_utils import from_bits
from edgeval.models import (
    F32,
    F64,
    FLOAT_FORMATS,
    INT_KINDS,
    FloatCategory,
    FloatFormat,
    IntCategory,
    IntKind,
    type_names,
)

logger = logging.getLogger(__name__)

SEED_BITS = 64
FALLBACK_SEED = 0x0D6A_B0F1_C7FF_B91B

_FLOAT_CATEGORIES = (
    FloatCategory.NORMAL,
    FloatCategory.SUBNORMAL,
    FloatCategory.NAN,
    FloatCategory.SPECIAL,
)


def _check_seed(seed: int) -> int:
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise TypeError(f"seed must be an int, got {type(seed).__name__}")
    if not 0 <= seed < (1 << SEED_BITS):
        raise ValueError(f"seed must fit in {SEED_BITS} unsigned bits, got {seed}")
    return seed


def _special_float_bits(fmt: FloatFormat) -> tuple[int, ...]:
    """Bit patterns of the special values, in draw-index order."""
    max_finite = fmt.pack(0, fmt.exponent_max - 1, fmt.mantissa_mask)
    min_positive = fmt.pack(0, 1, 0)
    # epsilon is 2 ** -mantissa_bits
    epsilon = fmt.pack(0, fmt.exponent_bias - fmt.mantissa_bits, 0)
    one = fmt.pack(0, fmt.exponent_bias, 0)
    infinity = fmt.pack(0, fmt.exponent_max, 0)
    neg = fmt.sign_mask
    return (
        0,                       # 0.0
        neg,                     # -0.0
        infinity,
        neg | infinity,
        one,
        neg | one,
        neg | max_finite,        # MIN
        max_finite,              # MAX
        min_positive,
        neg | min_positive,
        epsilon,
        neg | epsilon,
    )


SPECIAL_FLOAT_BITS: dict[str, tuple[int, ...]] = {
    name: _special_float_bits(fmt) for name, fmt in FLOAT_FORMATS.items()
}


def special_int_values(kind: IntKind) -> tuple[int, ...]:
    if kind.signed:
        return (0, 1, kind.max, -1, kind.min)
    return (0, 1, kind.max)


class EdgeCaseGenerator:
    """
    A weird data generator.

    Wraps one uniform random source and builds values per category on
    top of it. Every call advances the internal state; two generators
    created from the same seed produce identical sequences.

    Not safe for concurrent use without external locking.
    """

    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = random.SystemRandom().getrandbits(SEED_BITS)
        self._rng = random.Random(_check_seed(seed))

    # ── Construction & state ────────────────────────────────────────────────

    @classmethod
    def with_seed(cls, seed: int) -> "EdgeCaseGenerator":
        return cls(_check_seed(seed))

    @classmethod
    def new(cls) -> "EdgeCaseGenerator":
        """
        Create a generator by forking the thread-local one.

        If that one can't be reached (e.g. during interpreter shutdown)
        a fixed seed is used instead. Use with_seed() to control the seed.
        """
        from edgeval.global_functions import GeneratorAccessError, borrow_generator

        try:
            with borrow_generator() as gen:
                return gen.fork()
        except GeneratorAccessError:
            logger.debug("Thread-local generator unavailable, using fallback seed")
            return cls.with_seed(FALLBACK_SEED)

    def fork(self) -> "EdgeCaseGenerator":
        """Derive an independent child, advancing this generator."""
        child_seed = self._rng.getrandbits(SEED_BITS)
        logger.debug(f"Forking generator with child seed {child_seed:#018x}")
        return type(self).with_seed(child_seed)

    def seed(self, seed: int) -> None:
        self._rng.seed(_check_seed(seed))

    def get_seed(self) -> int:
        """
        Return a seed that reproduces this generator from here on.

        The underlying state is far larger than 64 bits, so a fresh seed
        is drawn and the generator re-seeds itself with it. Feeding the
        result to with_seed() gives a generator that tracks this one.
        """
        seed = self._rng.getrandbits(SEED_BITS)
        self._rng.seed(seed)
        return seed

    # ── Floats ──────────────────────────────────────────────────────────────

    def _sign(self) -> int:
        return self._rng.randrange(0, 2)

    def nan(self, fmt: FloatFormat):
        """
        Generate a NaN of the given format.

        There are many bit patterns that are NaN. All of them are
        reachable: either sign, quiet or signaling, any payload.
        """
        # mantissa 00...00 is infinity, not NaN
        mantissa = self._rng.randrange(1, 1 << fmt.mantissa_bits)
        return from_bits(fmt.pack(self._sign(), fmt.exponent_max, mantissa), fmt)

    def subnormal(self, fmt: FloatFormat):
        """Generate a subnormal (denormal) value; covers all of them."""
        # mantissa 00...00 is a signed zero, not subnormal
        mantissa = self._rng.randrange(1, 1 << fmt.mantissa_bits)
        return from_bits(fmt.pack(self._sign(), 0, mantissa), fmt)

    def normal(self, fmt: FloatFormat):
        sign = self._sign()
        # all zeros and all ones are not normal exponents
        exponent = self._rng.randrange(1, fmt.exponent_max)
        mantissa = self._rng.randrange(0, 1 << fmt.mantissa_bits)
        return from_bits(fmt.pack(sign, exponent, mantissa), fmt)

    def special_float(self, fmt: FloatFormat):
        """
        Generate a "special" float: a value that is practically impossible
        to hit by chance and has unusual properties (signed zeros,
        infinities, +-1, MIN, MAX, smallest normal, epsilon).
        """
        table = SPECIAL_FLOAT_BITS[fmt.name]
        return from_bits(table[self._rng.randrange(0, len(table))], fmt)

    def float_of_category(self, fmt: FloatFormat, category: FloatCategory | str):
        category = FloatCategory(category)
        if category is FloatCategory.NORMAL:
            return self.normal(fmt)
        if category is FloatCategory.SUBNORMAL:
            return self.subnormal(fmt)
        if category is FloatCategory.NAN:
            return self.nan(fmt)
        return self.special_float(fmt)

    def float_value(self, fmt: FloatFormat):
        """
        Generate a float such that problematic values are much more common
        than usual.

        The distribution is not statistically useful, but every edge case
        gets a fair chance:

        - 25% normal values
        - 25% subnormal values
        - 25% NaN values, all payloads, quiet and signaling
        - 25% special values such as infinity and -0.0
        """
        category = _FLOAT_CATEGORIES[self._rng.randrange(0, len(_FLOAT_CATEGORIES))]
        return self.float_of_category(fmt, category)

    def nan_f32(self):
        return self.nan(F32)

    def nan_f64(self):
        return self.nan(F64)

    def subnormal_f32(self):
        return self.subnormal(F32)

    def subnormal_f64(self):
        return self.subnormal(F64)

    def normal_f32(self):
        return self.normal(F32)

    def normal_f64(self):
        return self.normal(F64)

    def special_f32(self):
        return self.special_float(F32)

    def special_f64(self):
        return self.special_float(F64)

    def f32(self):
        return self.float_value(F32)

    def f64(self):
        return self.float_value(F64)

    # ── Integers ────────────────────────────────────────────────────────────

    def special_int(self, kind: IntKind) -> int:
        """
        Generate a "special" integer: 0, 1 and MAX, plus -1 and MIN for
        signed kinds.
        """
        values = special_int_values(kind)
        return values[self._rng.randrange(0, len(values))]

    def general_int(self, kind: IntKind) -> int:
        """
        Generate an integer outside the special set.

        Unsigned: [2, MAX). Signed: half [2, MAX), half [MIN + 1, -1).
        """
        if kind.signed and self._rng.randrange(0, 2):
            return self._rng.randrange(kind.min + 1, -1)
        return self._rng.randrange(2, kind.max)

    def int_of_category(self, kind: IntKind, category: IntCategory | str) -> int:
        if IntCategory(category) is IntCategory.SPECIAL:
            return self.special_int(kind)
        return self.general_int(kind)

    def int_value(self, kind: IntKind) -> int:
        """50% special values, 50% anything else."""
        if self._rng.randrange(0, 2) == 0:
            return self.special_int(kind)
        return self.general_int(kind)

    # ── Lookup by name ──────────────────────────────────────────────────────

    def value(self, type_name: str):
        """Top-level draw for a type given by name ("f32", "i64", ...)."""
        if type_name in FLOAT_FORMATS:
            return self.float_value(FLOAT_FORMATS[type_name])
        if type_name in INT_KINDS:
            return self.int_value(INT_KINDS[type_name])
        raise KeyError(f"Unknown type {type_name!r}, expected one of: {', '.join(type_names())}")

    def of_category(self, type_name: str, category: str):
        if type_name in FLOAT_FORMATS:
            return self.float_of_category(FLOAT_FORMATS[type_name], category)
        if type_name in INT_KINDS:
            return self.int_of_category(INT_KINDS[type_name], category)
        raise KeyError(f"Unknown type {type_name!r}, expected one of: {', '.join(type_names())}")


# ── Per-kind integer methods (special_u8, general_u8, u8, ...) ──────────────

def _int_method(name: str, doc: str, impl: Callable, kind: IntKind) -> Callable:
    def method(self: EdgeCaseGenerator) -> int:
        return impl(self, kind)

    method.__name__ = method.__qualname__ = name
    method.__doc__ = doc
    return method


for _kind in INT_KINDS.values():
    for _name, _impl, _doc in (
        (f"special_{_kind.name}", EdgeCaseGenerator.special_int,
         f'Generate a random {_kind.name} "special" value.'),
        (f"general_{_kind.name}", EdgeCaseGenerator.general_int,
         f"Generate a random {_kind.name} outside the special set."),
        (_kind.name, EdgeCaseGenerator.int_value,
         f"Generate a random {_kind.name}, such that special values are much more common than normal."),
    ):
        setattr(EdgeCaseGenerator, _name, _int_method(_name, _doc, _impl, _kind))
del _kind, _name, _impl, _doc
