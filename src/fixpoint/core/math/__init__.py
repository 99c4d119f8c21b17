"""
Core math modules for fixpoint

Fixed-width integer primitives the fixed-point magnitude is stored in.
"""

# Primitives
from fixpoint.core.math.primitives import (
    # Integer types
    I8,
    I16,
    I32,
    I64,
    I128,
    INT_TYPES,
    ISIZE,
    U8,
    U16,
    U32,
    U64,
    U128,
    USIZE,
    IntType,
    lookup,
    # Truncating division
    trunc_div,
    trunc_rem,
)

__all__ = [
    # Primitives — Integer types
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
    "INT_TYPES",
    "IntType",
    "lookup",
    # Primitives — Truncating division
    "trunc_div",
    "trunc_rem",
]
