"""edgeval — generate random data that makes rare edge cases very likely."""

__version__ = "0.1.0"

from edgeval.float_utils import bits_equal, classify, is_signaling_nan, is_subnormal
from edgeval.generator import EdgeCaseGenerator
from edgeval.global_functions import GeneratorAccessError, borrow_generator
from edgeval.models import F32, F64, FLOAT_FORMATS, INT_KINDS, FloatCategory, FloatClass, IntCategory

__all__ = [
    "EdgeCaseGenerator",
    "GeneratorAccessError",
    "borrow_generator",
    "bits_equal",
    "classify",
    "is_signaling_nan",
    "is_subnormal",
    "F32",
    "F64",
    "FLOAT_FORMATS",
    "INT_KINDS",
    "FloatCategory",
    "FloatClass",
    "IntCategory",
]
