"""
fixpoint — fixed-point numbers with a class-level scale.

    >>> from fixpoint import si
    >>> si.Milli(300) == si.Centi(30).convert(si.Milli)
    True
"""

from fixpoint.core.contracts import dump, dumps, load, loads
from fixpoint.core.domain import (
    CheckedAdd,
    CheckedDivFix,
    CheckedMulFix,
    CheckedSub,
    Fix,
    FixError,
    Scale,
    ScaleMismatchError,
    checked_sum,
    fix_type,
)
from fixpoint.core.domain.aliases import iec, si
from fixpoint.core.math import (
    I8,
    I16,
    I32,
    I64,
    I128,
    ISIZE,
    U8,
    U16,
    U32,
    U64,
    U128,
    USIZE,
    IntType,
)

__version__ = "0.1.0"

__all__ = [
    "Fix",
    "FixError",
    "ScaleMismatchError",
    "fix_type",
    "Scale",
    "si",
    "iec",
    "CheckedAdd",
    "CheckedSub",
    "CheckedMulFix",
    "CheckedDivFix",
    "checked_sum",
    "dump",
    "dumps",
    "load",
    "loads",
    "IntType",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "ISIZE",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "USIZE",
]
