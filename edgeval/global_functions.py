"""
A global, thread-local EdgeCaseGenerator.

Each thread gets its own implicit generator, created lazily. It is
seeded from the configured default seed (see edgeval.config) or from
system entropy. The free functions here forward to it.
"""

from __future__ import annotations

import logging
import sys
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

from edgeval.config import resolve_seed
from edgeval.float_utils import bits_equal, is_signaling_nan
from edgeval.generator import EdgeCaseGenerator
from edgeval.models import INT_KINDS

logger = logging.getLogger(__name__)

R = TypeVar("R")


class GeneratorAccessError(RuntimeError):
    """Raised when the thread-local generator can't be reached."""


_local = threading.local()

# (configured seed, root generator); thread generators fork from the root
_root: tuple[int, EdgeCaseGenerator] | None = None
_root_lock = threading.Lock()


def _new_thread_generator() -> EdgeCaseGenerator:
    """
    Build the implicit generator for the calling thread.

    With a configured seed, every thread forks a process-wide root seeded
    with it, so threads draw distinct streams and the run is reproducible
    given the order in which threads first use the generator. Without one,
    each thread seeds itself from system entropy.
    """
    global _root
    seed = resolve_seed()
    if seed is None:
        return EdgeCaseGenerator()
    with _root_lock:
        if _root is None or _root[0] != seed:
            _root = (seed, EdgeCaseGenerator.with_seed(seed))
        return _root[1].fork()


def _slot() -> threading.local:
    if sys.is_finalizing():
        raise GeneratorAccessError("thread-local generator is unavailable during interpreter shutdown")
    if getattr(_local, "gen", None) is None:
        _local.gen = _new_thread_generator()
        logger.debug(f"Created thread-local generator for {threading.current_thread().name}")
    return _local


@contextmanager
def borrow_generator() -> Iterator[EdgeCaseGenerator]:
    """
    Borrow the current thread's generator for the duration of the block.

    While borrowed, the slot holds a seed-0 placeholder, so reentrant
    use inside the block works on the placeholder. The original is put
    back on every exit path, exceptions included.
    """
    slot = _slot()
    current = slot.gen
    slot.gen = EdgeCaseGenerator.with_seed(0)
    try:
        yield current
    finally:
        slot.gen = current



def with_generator(fn: Callable[[EdgeCaseGenerator], R]) -> R:
    """Run an operation with the current thread-local generator."""
    with borrow_generator() as gen:
        return fn(gen)


def seed(seed: int) -> None:
    """Re-seed the thread-local generator."""
    with_generator(lambda gen: gen.seed(seed))


def get_seed() -> int:
    """A seed that reproduces the thread-local generator from here on."""
    return with_generator(EdgeCaseGenerator.get_seed)


def fork() -> EdgeCaseGenerator:
    return with_generator(EdgeCaseGenerator.fork)


def nan_f32():
    return with_generator(EdgeCaseGenerator.nan_f32)


def nan_f64():
    return with_generator(EdgeCaseGenerator.nan_f64)


def subnormal_f32():
    return with_generator(EdgeCaseGenerator.subnormal_f32)


def subnormal_f64():
    return with_generator(EdgeCaseGenerator.subnormal_f64)


def normal_f32():
    return with_generator(EdgeCaseGenerator.normal_f32)


def normal_f64():
    return with_generator(EdgeCaseGenerator.normal_f64)


def special_f32():
    return with_generator(EdgeCaseGenerator.special_f32)


def special_f64():
    return with_generator(EdgeCaseGenerator.special_f64)


def f32():
    return with_generator(EdgeCaseGenerator.f32)


def f64():
    return with_generator(EdgeCaseGenerator.f64)


def value(type_name: str):
    return with_generator(lambda gen: gen.value(type_name))


__all__ = [
    "GeneratorAccessError",
    "borrow_generator",
    "with_generator",
    "bits_equal",
    "is_signaling_nan",
    "seed",
    "get_seed",
    "fork",
    "nan_f32",
    "nan_f64",
    "subnormal_f32",
    "subnormal_f64",
    "normal_f32",
    "normal_f64",
    "special_f32",
    "special_f64",
    "f32",
    "f64",
    "value",
]


# ── Per-kind integer functions (special_u8, general_u8, u8, ...) ────────────

def _forward(name: str) -> Callable[[], int]:
    method = getattr(EdgeCaseGenerator, name)

    def fn() -> int:
        return with_generator(method)

    fn.__name__ = fn.__qualname__ = name
    fn.__doc__ = method.__doc__
    return fn


for _kind in INT_KINDS:
    for _name in (f"special_{_kind}", f"general_{_kind}", _kind):
        globals()[_name] = _forward(_name)
        __all__.append(_name)
del _kind, _name
