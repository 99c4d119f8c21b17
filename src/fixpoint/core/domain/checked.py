"""
Checked Arithmetic Protocols

Structural interfaces for arithmetic that reports failure as None instead of
wrapping. Generic code written against these protocols works with Fix values
of any scale and with any other type exposing the same methods.

CheckedAdd and CheckedSub produce a value of the operand type. CheckedMulFix
and CheckedDivFix exist separately because their result type is computed from
the operands' scales (the exponent changes), so a same-type protocol cannot
describe them.
"""

from functools import reduce
from typing import Any, Iterable, Optional, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


# =============================================================================
# PROTOCOLS
# =============================================================================


@runtime_checkable
class CheckedAdd(Protocol):
    """Addition returning None on overflow."""

    def checked_add(self, other: Any) -> Optional[Any]: ...


@runtime_checkable
class CheckedSub(Protocol):
    """Subtraction returning None on overflow or underflow."""

    def checked_sub(self, other: Any) -> Optional[Any]: ...


@runtime_checkable
class CheckedMulFix(Protocol):
    """Multiplication whose result type depends on both operands."""

    def checked_mul(self, other: Any) -> Optional[Any]: ...


@runtime_checkable
class CheckedDivFix(Protocol):
    """Division whose result type depends on both operands."""

    def checked_div(self, other: Any) -> Optional[Any]: ...


# =============================================================================
# GENERIC HELPERS
# =============================================================================


def checked_add(lhs: CheckedAdd, rhs: Any) -> Optional[Any]:
    return lhs.checked_add(rhs)


def checked_sub(lhs: CheckedSub, rhs: Any) -> Optional[Any]:
    return lhs.checked_sub(rhs)


def checked_mul(lhs: CheckedMulFix, rhs: Any) -> Optional[Any]:
    return lhs.checked_mul(rhs)


def checked_div(lhs: CheckedDivFix, rhs: Any) -> Optional[Any]:
    return lhs.checked_div(rhs)


def checked_sum(values: Iterable[T], start: Optional[T] = None) -> Optional[T]:
    """
    Sum values with checked addition.

    Args:
        values: Values implementing CheckedAdd, all of the same type
        start: Initial value (default: the first element)

    Returns:
        The sum, None if any partial sum overflows or there is nothing to sum

    Examples:
        >>> checked_sum([Kilo[U8](200), Kilo[U8](50)])
        Fix[u8, 10, 3](250)
        >>> checked_sum([Kilo[U8](200), Kilo[U8](56)]) is None
        True
    """
    iterator = iter(values)
    if start is None:
        start = next(iterator, None)
        if start is None:
            return None

    def step(total: Optional[T], value: T) -> Optional[T]:
        if total is None:
            return None
        return total.checked_add(value)

    return reduce(step, iterator, start)
