"""
Primitives — Fixed-Width Integer Capabilities

Models the integer primitives a fixed-point magnitude can be stored in
(u8 ... u128, i8 ... i128, usize, isize). Python ints are unbounded, so every
width is described by an IntType and all arithmetic is reduced into its range
explicitly.

Two capabilities let scale conversion be written once for every width:
- from_unsigned: materialize a non-negative constant (the scale base) as a
  magnitude-typed value
- pow: raise a magnitude-typed value to a runtime power

OVERFLOW POLICY:
1. Unchecked operations wrap (two's complement), like `wrapping_*` integer ops
2. Checked operations return None instead of wrapping
3. Division and remainder by zero raise ZeroDivisionError on the unchecked path
4. Division truncates toward zero, the remainder takes the sign of the dividend
"""

import logging
import operator
from dataclasses import dataclass
from typing import Final, Optional

logger = logging.getLogger(__name__)


# =============================================================================
# TRUNCATING DIVISION
# =============================================================================


def trunc_div(lhs: int, rhs: int) -> int:
    """
    Integer division rounding toward zero.

    Python's // floors, which differs for operands of opposite sign.

    Examples:
        >>> trunc_div(7, 2)
        3
        >>> trunc_div(-7, 2)
        -3
    """
    quotient = abs(lhs) // abs(rhs)
    if (lhs < 0) != (rhs < 0):
        return -quotient
    return quotient


def trunc_rem(lhs: int, rhs: int) -> int:
    """
    Remainder matching trunc_div: the result takes the sign of lhs.

    Examples:
        >>> trunc_rem(-7, 2)
        -1
        >>> trunc_rem(7, -2)
        1
    """
    return lhs - rhs * trunc_div(lhs, rhs)


# =============================================================================
# INTEGER TYPE DESCRIPTOR
# =============================================================================


@dataclass(frozen=True)
class IntType:
    """
    Fixed-width primitive integer type.

    Calling the descriptor casts a Python int into the type's range, with the
    same semantics as an `as` cast between primitive integers:

        >>> U8(1699)
        163
        >>> I8(200)
        -56
    """

    name: str
    width: int
    signed: bool

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError(f"width must be positive, got {self.width}")

    def __repr__(self) -> str:
        return self.name

    def __call__(self, value: int) -> int:
        return self.wrap(value)

    # -------------------------------------------------------------------------
    # Range
    # -------------------------------------------------------------------------

    @property
    def min(self) -> int:
        """Smallest representable value."""
        if self.signed:
            return -(1 << (self.width - 1))
        return 0

    @property
    def max(self) -> int:
        """Largest representable value."""
        if self.signed:
            return (1 << (self.width - 1)) - 1
        return (1 << self.width) - 1

    def contains(self, value: int) -> bool:
        """True if value is representable without wrapping."""
        return self.min <= value <= self.max

    def wrap(self, value: int) -> int:
        """
        Reduce an integer into range (two's complement).

        Args:
            value: Any integer (objects implementing __index__ are accepted)

        Returns:
            value modulo 2**width, reinterpreted as signed when the type is signed

        Raises:
            TypeError: If value is not an integer
        """
        value = operator.index(value)
        if self.min <= value <= self.max:
            return value

        wrapped = value & ((1 << self.width) - 1)
        if self.signed and wrapped > self.max:
            wrapped -= 1 << self.width
        logger.debug("%s wrapped %d to %d", self.name, value, wrapped)
        return wrapped

    def _fit(self, value: int) -> Optional[int]:
        if self.min <= value <= self.max:
            return value
        return None

    # -------------------------------------------------------------------------
    # Capabilities used by scale conversion
    # -------------------------------------------------------------------------

    def from_unsigned(self, constant: int) -> int:
        """
        Materialize a non-negative constant as a value of this type.

        Constants wider than the type are truncated like a cast.

        Args:
            constant: Non-negative integer (e.g. a scale base)

        Raises:
            ValueError: If constant is negative
        """
        constant = operator.index(constant)
        if constant < 0:
            raise ValueError(f"constant must be non-negative, got {constant}")
        return self.wrap(constant)

    def pow(self, value: int, exp: int) -> int:
        """
        Raise value to a non-negative power, wrapping on overflow.

        Args:
            value: Base, a value of this type
            exp: Non-negative exponent

        Raises:
            ValueError: If exp is negative

        Examples:
            >>> U8.pow(10, 2)
            100
            >>> U8.pow(10, 3)
            232
        """
        if exp < 0:
            raise ValueError(f"exp must be non-negative, got {exp}")
        return self.wrap(pow(value, exp, 1 << self.width))

    # -------------------------------------------------------------------------
    # Wrapping arithmetic
    # -------------------------------------------------------------------------

    def wrapping_add(self, lhs: int, rhs: int) -> int:
        return self.wrap(lhs + rhs)

    def wrapping_sub(self, lhs: int, rhs: int) -> int:
        return self.wrap(lhs - rhs)

    def wrapping_mul(self, lhs: int, rhs: int) -> int:
        return self.wrap(lhs * rhs)

    def wrapping_neg(self, value: int) -> int:
        """
        Negate value.

        Raises:
            TypeError: If the type is unsigned (negation is undefined there)
        """
        if not self.signed:
            raise TypeError(f"cannot negate a value of unsigned type {self.name}")
        return self.wrap(-value)

    def wrapping_div(self, lhs: int, rhs: int) -> int:
        """
        Truncating division. MIN / -1 wraps to MIN.

        Raises:
            ZeroDivisionError: If rhs is zero
        """
        if rhs == 0:
            raise ZeroDivisionError(f"{self.name} division by zero")
        return self.wrap(trunc_div(lhs, rhs))

    def wrapping_rem(self, lhs: int, rhs: int) -> int:
        """
        Truncating remainder. MIN % -1 is 0.

        Raises:
            ZeroDivisionError: If rhs is zero
        """
        if rhs == 0:
            raise ZeroDivisionError(f"{self.name} remainder by zero")
        return self.wrap(trunc_rem(lhs, rhs))

    # -------------------------------------------------------------------------
    # Checked arithmetic
    # -------------------------------------------------------------------------

    def checked_add(self, lhs: int, rhs: int) -> Optional[int]:
        return self._fit(lhs + rhs)

    def checked_sub(self, lhs: int, rhs: int) -> Optional[int]:
        return self._fit(lhs - rhs)

    def checked_mul(self, lhs: int, rhs: int) -> Optional[int]:
        return self._fit(lhs * rhs)

    def checked_div(self, lhs: int, rhs: int) -> Optional[int]:
        """None if rhs is zero or the quotient overflows (signed MIN / -1)."""
        if rhs == 0:
            return None
        return self._fit(trunc_div(lhs, rhs))

    def checked_rem(self, lhs: int, rhs: int) -> Optional[int]:
        """None if rhs is zero or the matching division overflows."""
        if rhs == 0 or self.checked_div(lhs, rhs) is None:
            return None
        return trunc_rem(lhs, rhs)

    def checked_neg(self, value: int) -> Optional[int]:
        """None if -value is not representable (any non-zero unsigned value)."""
        return self._fit(-value)

    def checked_pow(self, value: int, exp: int) -> Optional[int]:
        """
        Exact power, None if the result does not fit.

        Stops multiplying as soon as the running product leaves the range, so
        a huge exponent never builds a huge intermediate.
        """
        if exp < 0:
            raise ValueError(f"exp must be non-negative, got {exp}")
        if value in (0, 1) or exp == 0:
            return self._fit(value**exp)
        if value == -1:
            return self._fit(1 if exp % 2 == 0 else -1)

        result = 1
        for _ in range(exp):
            result *= value
            if not self.contains(result):
                return None
        return result


# =============================================================================
# SUPPORTED WIDTHS
# =============================================================================

U8: Final[IntType] = IntType("u8", 8, False)
U16: Final[IntType] = IntType("u16", 16, False)
U32: Final[IntType] = IntType("u32", 32, False)
U64: Final[IntType] = IntType("u64", 64, False)
U128: Final[IntType] = IntType("u128", 128, False)
USIZE: Final[IntType] = IntType("usize", 64, False)

I8: Final[IntType] = IntType("i8", 8, True)
I16: Final[IntType] = IntType("i16", 16, True)
I32: Final[IntType] = IntType("i32", 32, True)
I64: Final[IntType] = IntType("i64", 64, True)
I128: Final[IntType] = IntType("i128", 128, True)
ISIZE: Final[IntType] = IntType("isize", 64, True)

INT_TYPES: Final[dict[str, IntType]] = {
    t.name: t for t in (U8, U16, U32, U64, U128, USIZE, I8, I16, I32, I64, I128, ISIZE)
}


def lookup(name: str) -> IntType:
    """
    Find a supported integer type by name.

    Raises:
        ValueError: If name is not a supported type
    """
    try:
        return INT_TYPES[name]
    except KeyError:
        raise ValueError(
            f"unknown integer type {name!r}, expected one of {sorted(INT_TYPES)}"
        ) from None
