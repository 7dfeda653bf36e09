"""Tests for the edge-case generator core."""
import math
import sys

import numpy as np
import pytest

from edgeval.float_utils import bits_equal, classify, f32_to_bits, f64_to_bits, is_subnormal, to_bits
from edgeval.generator import EdgeCaseGenerator
from edgeval.models import F32, F64, INT_KINDS, POINTER_BITS, FloatClass


# ─── Helpers ─────────────────────────────────────────────────────────────────

def _bits_sequence(gen: EdgeCaseGenerator, n: int = 64) -> list[int]:
    """Mix of operations, floats compared by bits since NaN != NaN."""
    out = []
    for _ in range(n):
        out.append(f32_to_bits(gen.f32()))
        out.append(f64_to_bits(gen.f64()))
        out.append(gen.u64())
        out.append(gen.i128())
    return out


F32_SPECIALS = [
    np.float32(0.0),
    np.float32(-0.0),
    np.float32(np.inf),
    np.float32(-np.inf),
    np.float32(1.0),
    np.float32(-1.0),
    np.finfo(np.float32).min,
    np.finfo(np.float32).max,
    np.finfo(np.float32).smallest_normal,
    -np.finfo(np.float32).smallest_normal,
    np.finfo(np.float32).eps,
    -np.finfo(np.float32).eps,
]

F64_SPECIALS = [
    0.0,
    -0.0,
    math.inf,
    -math.inf,
    1.0,
    -1.0,
    -sys.float_info.max,
    sys.float_info.max,
    sys.float_info.min,
    -sys.float_info.min,
    sys.float_info.epsilon,
    -sys.float_info.epsilon,
]


# ─── Seed-0 fixtures ─────────────────────────────────────────────────────────

def test_nan_f32_seed_zero():
    gen = EdgeCaseGenerator.with_seed(0)
    assert classify(gen.nan_f32()) is FloatClass.NAN


def test_nan_f64_seed_zero():
    gen = EdgeCaseGenerator.with_seed(0)
    assert math.isnan(gen.nan_f64())


def test_subnormal_f32_seed_zero():
    gen = EdgeCaseGenerator.with_seed(0)
    assert is_subnormal(gen.subnormal_f32())


def test_subnormal_f64_seed_zero():
    gen = EdgeCaseGenerator.with_seed(0)
    assert is_subnormal(gen.subnormal_f64())


def test_normal_f32_seed_zero():
    gen = EdgeCaseGenerator.with_seed(0)
    assert not is_subnormal(gen.normal_f32())


def test_normal_f64_seed_zero():
    gen = EdgeCaseGenerator.with_seed(0)
    assert not is_subnormal(gen.normal_f64())


def test_float_widths():
    """f32 values are numpy.float32, f64 values are real Python floats."""
    gen = EdgeCaseGenerator.with_seed(0)
    assert isinstance(gen.f32(), np.float32)
    assert isinstance(gen.f64(), float)
    assert isinstance(gen.nan_f64(), np.float64)


# ─── Seeding & forking ───────────────────────────────────────────────────────

@pytest.mark.parametrize("seed", [0, 1, 0x8EBD463750B49B1A, 2**64 - 1])
def test_same_seed_same_sequence(seed):
    a = EdgeCaseGenerator.with_seed(seed)
    b = EdgeCaseGenerator.with_seed(seed)
    assert _bits_sequence(a) == _bits_sequence(b)


def test_different_seeds_diverge():
    a = EdgeCaseGenerator.with_seed(1)
    b = EdgeCaseGenerator.with_seed(2)
    assert _bits_sequence(a) != _bits_sequence(b)


def test_fork_advances_parent():
    """Forking changes what the parent produces next."""
    forked = EdgeCaseGenerator.with_seed(0x292D3ADFEDDDC082)
    untouched = EdgeCaseGenerator.with_seed(0x292D3ADFEDDDC082)
    forked.fork()
    assert _bits_sequence(forked, 8) != _bits_sequence(untouched, 8)


def test_fork_is_reproducible():
    """The child only depends on the parent's state before the fork."""
    child_a = EdgeCaseGenerator.with_seed(77).fork()
    child_b = EdgeCaseGenerator.with_seed(77).fork()
    assert _bits_sequence(child_a) == _bits_sequence(child_b)


def test_fork_twice_gives_different_children():
    parent = EdgeCaseGenerator.with_seed(77)
    first = parent.fork()
    second = parent.fork()
    assert _bits_sequence(first, 8) != _bits_sequence(second, 8)


def test_child_differs_from_parent():
    parent = EdgeCaseGenerator.with_seed(5)
    child = parent.fork()
    assert _bits_sequence(parent, 8) != _bits_sequence(child, 8)


def test_reseed_in_place():
    gen = EdgeCaseGenerator.with_seed(123)
    _bits_sequence(gen, 4)
    gen.seed(9)
    assert _bits_sequence(gen) == _bits_sequence(EdgeCaseGenerator.with_seed(9))


@pytest.mark.parametrize("seed", [0, 42, 0x0B65582B4ED820FE])
def test_get_seed_round_trip(seed):
    """A seed from get_seed() replays the generator from that point on."""
    gen = EdgeCaseGenerator.with_seed(seed)
    replay = EdgeCaseGenerator.with_seed(gen.get_seed())
    assert _bits_sequence(gen) == _bits_sequence(replay)


def test_get_seed_after_draws():
    gen = EdgeCaseGenerator.with_seed(3)
    _bits_sequence(gen, 10)
    replay = EdgeCaseGenerator.with_seed(gen.get_seed())
    assert _bits_sequence(gen) == _bits_sequence(replay)


def test_entropy_seeded_generators_work():
    gen = EdgeCaseGenerator()
    assert isinstance(gen.u8(), int)
    replay = EdgeCaseGenerator.with_seed(gen.get_seed())
    assert _bits_sequence(gen, 4) == _bits_sequence(replay, 4)


@pytest.mark.parametrize("bad", [-1, 2**64])
def test_seed_out_of_range(bad):
    with pytest.raises(ValueError):
        EdgeCaseGenerator.with_seed(bad)
    with pytest.raises(ValueError):
        EdgeCaseGenerator.with_seed(0).seed(bad)


@pytest.mark.parametrize("bad", [1.5, "7", None, True])
def test_seed_wrong_type(bad):
    with pytest.raises(TypeError):
        EdgeCaseGenerator.with_seed(bad)


# ─── Float categories ────────────────────────────────────────────────────────

@pytest.mark.parametrize("fmt", [F32, F64], ids=["f32", "f64"])
def test_nan_is_always_nan(fmt):
    gen = EdgeCaseGenerator.with_seed(0x0B65582B4ED820FE)
    for i in range(10000):
        num = gen.nan(fmt)
        bits = to_bits(num, fmt)
        assert bits & fmt.exponent_mask == fmt.exponent_mask, f"{i}: {bits:#x}"
        # mantissa 0 would be infinity
        assert bits & fmt.mantissa_mask != 0, f"{i}: {bits:#x}"


@pytest.mark.parametrize("fmt", [F32, F64], ids=["f32", "f64"])
def test_subnormal_is_always_subnormal(fmt):
    gen = EdgeCaseGenerator.with_seed(0x52584AD155E17210)
    for i in range(10000):
        num = gen.subnormal(fmt)
        assert is_subnormal(num), f"{i}: {num!r}"
        assert num != 0


@pytest.mark.parametrize("fmt", [F32, F64], ids=["f32", "f64"])
def test_normal_exponent_in_open_range(fmt):
    gen = EdgeCaseGenerator.with_seed(0x2CFE59BB7A562820)
    for i in range(10000):
        num = gen.normal(fmt)
        assert classify(num) is FloatClass.NORMAL, f"{i}: {num!r}"


def test_nan_f32_range():
    gen = EdgeCaseGenerator.with_seed(0x2921F1BD8BA9C6B6)
    coverage = 0
    for _ in range(10000):
        coverage |= f32_to_bits(gen.nan_f32())

    # every bit should be generated at least once, given enough attempts
    assert coverage == 0xFFFF_FFFF, f"{coverage:032b}"


def test_nan_f64_range():
    gen = EdgeCaseGenerator.with_seed(0x6F356753E63713C3)
    coverage = 0
    for _ in range(10000):
        coverage |= f64_to_bits(gen.nan_f64())
    assert coverage == 2**64 - 1, f"{coverage:064b}"


def test_nan_covers_quiet_and_signaling():
    from edgeval.float_utils import is_signaling_nan

    gen = EdgeCaseGenerator.with_seed(0x36443EF840AF6E49)
    kinds = {is_signaling_nan(gen.nan_f32()) for _ in range(1000)}
    kinds |= {is_signaling_nan(gen.nan_f64()) for _ in range(1000)}
    assert kinds == {True, False}


def test_subnormal_f32_range():
    gen = EdgeCaseGenerator.with_seed(0x98FB6BEFAC5D81F3)
    coverage = F32.exponent_mask
    for _ in range(10000):
        coverage |= f32_to_bits(gen.subnormal_f32())
    assert coverage == 0xFFFF_FFFF, f"{coverage:032b}"


def test_subnormal_f64_range():
    gen = EdgeCaseGenerator.with_seed(0x7A075814F4B82F49)
    coverage = F64.exponent_mask
    for _ in range(10000):
        coverage |= f64_to_bits(gen.subnormal_f64())
    assert coverage == 2**64 - 1, f"{coverage:064b}"


def test_normal_f32_range():
    gen = EdgeCaseGenerator.with_seed(0x1563E31109CB11B5)
    coverage = 0
    for _ in range(10000):
        coverage |= f32_to_bits(gen.normal_f32())
    assert coverage == 0xFFFF_FFFF, f"{coverage:032b}"


def test_normal_f64_range():
    gen = EdgeCaseGenerator.with_seed(0x56E519B147F25E0D)
    coverage = 0
    for _ in range(10000):
        coverage |= f64_to_bits(gen.normal_f64())
    assert coverage == 2**64 - 1, f"{coverage:064b}"


def test_special_f32_range():
    gen = EdgeCaseGenerator.with_seed(0x90AE720334A0D74B)
    seen = [False] * len(F32_SPECIALS)
    for _ in range(10000):
        num = gen.special_f32()
        matches = [bits_equal(num, s) for s in F32_SPECIALS]
        assert any(matches), f"unexpected special {num!r}"
        seen = [a or b for a, b in zip(seen, matches)]
    assert all(seen), [s for s, hit in zip(F32_SPECIALS, seen) if not hit]


def test_special_f64_range():
    gen = EdgeCaseGenerator.with_seed(0x106CA134A56D0397)
    seen = [False] * len(F64_SPECIALS)
    for _ in range(10000):
        num = gen.special_f64()
        matches = [bits_equal(num, s) for s in F64_SPECIALS]
        assert any(matches), f"unexpected special {num!r}"
        seen = [a or b for a, b in zip(seen, matches)]
    assert all(seen), [s for s, hit in zip(F64_SPECIALS, seen) if not hit]


@pytest.mark.parametrize(
    "method, seed",
    [("f32", 0x7C6554C7D6A9D4B7), ("f64", 0x9AA4EE0F08BAD9DE)],
)
def test_float_value_hits_every_category(method, seed):
    gen = EdgeCaseGenerator.with_seed(seed)
    specials = F32_SPECIALS if method == "f32" else F64_SPECIALS

    # these should all be true by the end, given enough attempts
    had_normal = had_subnormal = had_nan = had_special = False
    for _ in range(10000):
        num = getattr(gen, method)()
        cls = classify(num)
        had_normal |= cls is FloatClass.NORMAL
        had_subnormal |= cls is FloatClass.SUBNORMAL
        had_nan |= cls is FloatClass.NAN
        had_special |= any(bits_equal(num, s) for s in specials)
    assert had_normal and had_subnormal and had_nan and had_special


def test_float_of_category_dispatch():
    gen = EdgeCaseGenerator.with_seed(11)
    assert classify(gen.float_of_category(F32, "nan")) is FloatClass.NAN
    assert classify(gen.float_of_category(F64, "subnormal")) is FloatClass.SUBNORMAL
    assert classify(gen.float_of_category(F64, "normal")) is FloatClass.NORMAL
    with pytest.raises(ValueError):
        gen.float_of_category(F32, "bogus")


# ─── Integers ────────────────────────────────────────────────────────────────

def test_int_kinds_table():
    """Twelve kinds, pointer-sized ones follow the interpreter."""
    assert len(INT_KINDS) == 12
    assert INT_KINDS["usize"].bits == POINTER_BITS
    assert INT_KINDS["isize"].bits == POINTER_BITS
    assert INT_KINDS["i8"].min == -128
    assert INT_KINDS["i8"].max == 127
    assert INT_KINDS["u128"].max == 2**128 - 1


def test_special_i8_exact_set():
    gen = EdgeCaseGenerator.with_seed(0x292D3ADFEDDDC082)
    seen = {gen.special_i8() for _ in range(10000)}
    assert seen == {0, 1, -1, -128, 127}


def test_special_u8_exact_set():
    gen = EdgeCaseGenerator.with_seed(0x292D3ADFEDDDC082)
    seen = {gen.special_u8() for _ in range(10000)}
    assert seen == {0, 1, 255}


@pytest.mark.parametrize("name", list(INT_KINDS))
def test_special_int_exact_set(name):
    kind = INT_KINDS[name]
    allowed = {0, 1, kind.max} | ({-1, kind.min} if kind.signed else set())
    gen = EdgeCaseGenerator.with_seed(0x292D3ADFEDDDC082)
    method = getattr(gen, f"special_{name}")
    assert {method() for _ in range(2000)} == allowed


@pytest.mark.parametrize("name", [n for n, k in INT_KINDS.items() if k.signed])
def test_general_signed_excludes_specials(name):
    kind = INT_KINDS[name]
    excluded = {kind.min, kind.max, -1, 0, 1}
    gen = EdgeCaseGenerator.with_seed(0x8EBD463750B49B1A)
    had_positive = had_negative = False
    for _ in range(10000):
        n = getattr(gen, f"general_{name}")()
        assert n not in excluded
        assert kind.min < n < kind.max
        had_positive |= n > 0
        had_negative |= n < 0
    assert had_positive and had_negative


@pytest.mark.parametrize("name", [n for n, k in INT_KINDS.items() if not k.signed])
def test_general_unsigned_excludes_specials(name):
    kind = INT_KINDS[name]
    gen = EdgeCaseGenerator.with_seed(0x8EBD463750B49B1A)
    for _ in range(10000):
        n = getattr(gen, f"general_{name}")()
        assert 2 <= n < kind.max


def test_general_i8_reaches_both_ends():
    """[2, MAX) and [MIN + 1, -1) are both fully reachable for small kinds."""
    gen = EdgeCaseGenerator.with_seed(1)
    seen = {gen.general_i8() for _ in range(20000)}
    assert seen == set(range(-127, -1)) | set(range(2, 127))


@pytest.mark.parametrize("name", list(INT_KINDS))
def test_int_value_in_range(name):
    kind = INT_KINDS[name]
    gen = EdgeCaseGenerator.with_seed(0x8EBD463750B49B1A)
    values = [getattr(gen, name)() for _ in range(2000)]
    assert all(kind.min <= v <= kind.max for v in values)
    # both categories show up
    assert any(v in (0, 1, kind.max) for v in values)
    assert any(v not in (0, 1, -1, kind.min, kind.max) for v in values)


def test_int_value_is_half_special():
    """Top-level draws are 50% special, not split three ways."""
    gen = EdgeCaseGenerator.with_seed(99)
    kind = INT_KINDS["i64"]
    specials = {0, 1, -1, kind.min, kind.max}
    hits = sum(gen.i64() in specials for _ in range(10000))
    assert 4500 < hits < 5500


def test_int_of_category_dispatch():
    gen = EdgeCaseGenerator.with_seed(5)
    kind = INT_KINDS["u16"]
    assert gen.int_of_category(kind, "special") in (0, 1, 65535)
    assert 2 <= gen.int_of_category(kind, "general") < 65535
    with pytest.raises(ValueError):
        gen.int_of_category(kind, "nan")


# ─── Lookup by name ──────────────────────────────────────────────────────────

def test_value_by_name():
    gen = EdgeCaseGenerator.with_seed(8)
    assert isinstance(gen.value("f32"), np.float32)
    assert isinstance(gen.value("u32"), int)
    assert gen.of_category("i16", "special") in (0, 1, -1, -32768, 32767)


def test_value_unknown_type():
    gen = EdgeCaseGenerator.with_seed(8)
    with pytest.raises(KeyError):
        gen.value("f16")
    with pytest.raises(KeyError):
        gen.of_category("bool", "special")


def test_generated_methods_are_named():
    assert EdgeCaseGenerator.special_u8.__name__ == "special_u8"
    assert EdgeCaseGenerator.i128.__doc__
