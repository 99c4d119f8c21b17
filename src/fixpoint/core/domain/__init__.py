"""
Domain models and value objects.

Contains the fixed-point number, its checked-arithmetic protocols and the
named scale presets.
"""

from fixpoint.core.domain.aliases import DEFAULT_BITS, Scale
from fixpoint.core.domain.checked import (
    CheckedAdd,
    CheckedDivFix,
    CheckedMulFix,
    CheckedSub,
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    checked_sum,
)
from fixpoint.core.domain.fix import Fix, FixError, ScaleMismatchError, fix_type

__all__ = [
    # Fix
    "Fix",
    "FixError",
    "ScaleMismatchError",
    "fix_type",
    # Checked protocols
    "CheckedAdd",
    "CheckedSub",
    "CheckedMulFix",
    "CheckedDivFix",
    "checked_add",
    "checked_sub",
    "checked_mul",
    "checked_div",
    "checked_sum",
    # Scale presets
    "DEFAULT_BITS",
    "Scale",
]
