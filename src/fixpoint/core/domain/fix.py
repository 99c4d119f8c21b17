"""
Fix — Fixed-Point Number

A fixed-point number represents magnitude x Base^Exp. The magnitude is an
integer of a chosen primitive width, stored per value. Base and Exp are the
scale and live on the class: Fix[bits_type, base, exp] returns a memoized
concrete subclass, so two values share a scale exactly when they share a class.

    >>> Milli = Fix[I64, 10, -3]
    >>> Milli(25)                  # 0.025
    Fix[i64, 10, -3](25)

Summary of operations (x, y magnitudes; B base; E exponents):
    -(x B^E)               = (-x) B^E
    (x B^E) + (y B^E)      = (x + y) B^E
    (x B^E) - (y B^E)      = (x - y) B^E
    (x B^Ex) * (y B^Ey)    = (x * y) B^(Ex + Ey)
    (x B^Ex) / (y B^Ey)    = (x / y) B^(Ex - Ey)
    (x B^E) % (y B^E)      = (x % y) B^E
    (x B^E) * y            = (x * y) B^E
    (x B^E) / y            = (x / y) B^E
    (x B^E) % y            = (x % y) B^E

INVARIANTS:
1. Add, subtract, remainder and ordering require the same class, otherwise
   ScaleMismatchError. Values of different classes are never equal. Python has no compile-time integers, so this is a
   runtime check rather than a type error
2. Multiply and divide require the same base and magnitude type; the result
   class carries the combined exponent
3. Conversion keeps the base and changes only the exponent
4. Unchecked arithmetic wraps; checked arithmetic returns None on failure
"""

import logging
import operator
import threading
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Optional, Union

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from fixpoint.core.math.primitives import IntType, lookup, trunc_div

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class FixError(Exception):
    """Base class for fixed-point errors."""

    pass


class ScaleMismatchError(FixError, TypeError):
    """
    Operands do not share the scale an operation requires.

    Raised where a statically typed implementation would refuse to compile:
    adding kilo to milli, comparing u8 to u64 magnitudes, converting between
    bases. Convert explicitly first.
    """

    pass


# =============================================================================
# SCALE CLASS CACHE
# =============================================================================

_SCALED: dict[tuple[IntType, int, int], type["Fix"]] = {}
_SCALED_LOCK = threading.Lock()


def fix_type(bits: Union[IntType, str], base: int, exp: int) -> type["Fix"]:
    """
    Concrete Fix class for a magnitude type and scale.

    Repeated calls with equal arguments return the identical class.

    Args:
        bits: Magnitude type, or its name ("u8", "i64", ...)
        base: Non-negative scale base (commonly 10 or 2)
        exp: Signed scale exponent

    Raises:
        TypeError: If bits is not an IntType/name, or base/exp are not ints
        ValueError: If base is negative or bits names no supported type
    """
    if isinstance(bits, str):
        bits = lookup(bits)
    if not isinstance(bits, IntType):
        raise TypeError(f"bits must be an IntType, got {type(bits).__name__}")
    if isinstance(base, bool) or isinstance(exp, bool):
        raise TypeError("base and exp must be integers, not bool")
    base = operator.index(base)
    exp = operator.index(exp)
    if base < 0:
        raise ValueError(f"base must be non-negative, got {base}")

    key = (bits, base, exp)
    with _SCALED_LOCK:
        cls = _SCALED.get(key)
        if cls is None:
            name = f"Fix[{bits.name}, {base}, {exp}]"
            cls = type(
                name,
                (Fix,),
                {
                    "__slots__": (),
                    "__module__": __name__,
                    "__qualname__": name,
                    "BITS": bits,
                    "BASE": base,
                    "EXP": exp,
                },
            )
            _SCALED[key] = cls
            logger.debug("created scale class %s", name)
    return cls


def _rebuild(bits: IntType, base: int, exp: int, magnitude: int) -> "Fix":
    return fix_type(bits, base, exp)(magnitude)


# =============================================================================
# FIX
# =============================================================================


@dataclass(frozen=True, eq=False, repr=False, slots=True)
class Fix:
    """
    Fixed-point number: bits x BASE^EXP.

    Parametrize before use: Fix[U8, 10, -3](25). The magnitude is cast into
    BITS on construction, so any integer is accepted.
    """

    bits: int = 0

    BITS: ClassVar[Optional[IntType]] = None
    BASE: ClassVar[Optional[int]] = None
    EXP: ClassVar[Optional[int]] = None

    def __post_init__(self) -> None:
        bits_type = type(self).BITS
        if bits_type is None:
            raise TypeError("Fix must be parametrized before use, e.g. Fix[I64, 10, -2]")
        object.__setattr__(self, "bits", bits_type(self.bits))

    def __class_getitem__(cls, params: tuple) -> type["Fix"]:
        if cls.BITS is not None:
            raise TypeError(f"{cls.__name__} is already parametrized")
        if not isinstance(params, tuple) or len(params) != 3:
            raise TypeError("Fix takes exactly three parameters: Fix[bits, base, exp]")
        return fix_type(*params)

    @classmethod
    def new(cls, bits: int) -> "Fix":
        """Wrap a magnitude. Never fails for an integer input."""
        return cls(bits)

    # -------------------------------------------------------------------------
    # Scale helpers
    # -------------------------------------------------------------------------

    def _require_same(self, other: "Fix", op: str) -> None:
        if type(other) is not type(self):
            raise ScaleMismatchError(
                f"cannot {op} {type(self).__name__} and {type(other).__name__}; "
                f"convert to a common scale first"
            )

    def _require_fix(self, other: Any, op: str) -> None:
        if not isinstance(other, Fix):
            raise TypeError(
                f"cannot {op} {type(self).__name__} and {type(other).__name__}; "
                f"expected a Fix value"
            )

    def _require_same_base(self, other_cls: type["Fix"], op: str) -> None:
        if other_cls.BITS != self.BITS or other_cls.BASE != self.BASE:
            raise ScaleMismatchError(
                f"cannot {op} {type(self).__name__} and {other_cls.__name__}; "
                f"base and magnitude type must match"
            )

    def _rescaled(self, exp: int) -> type["Fix"]:
        return fix_type(self.BITS, self.BASE, exp)

    def _target_exp(self, to: Any) -> int:
        if isinstance(to, type) and issubclass(to, Fix):
            if to.BITS is None:
                raise TypeError("conversion target must be a parametrized Fix class")
            self._require_same_base(to, "convert between")
            return to.EXP
        # Scale presets carry base/exp but no magnitude type.
        if hasattr(to, "base") and hasattr(to, "exp"):
            if to.base != self.BASE:
                raise ScaleMismatchError(
                    f"cannot convert {type(self).__name__} to base {to.base}"
                )
            return to.exp
        if isinstance(to, bool):
            raise TypeError("conversion target must be an exponent, not bool")
        return operator.index(to)

    def _scalar(self, other: Any) -> Optional[int]:
        if isinstance(other, (Fix, bool)) or not isinstance(other, int):
            return None
        return self.BITS(other)

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def convert(self, to: Any) -> "Fix":
        """
        Re-express the value at another exponent of the same base.

        Coarsening (to a larger exponent) divides the magnitude by
        Base^|diff| and truncates toward zero. Refining multiplies, wrapping
        on overflow.

        Args:
            to: Target exponent (int), a Fix class, or a scale preset

        Returns:
            Value of class Fix[BITS, BASE, to]

        Raises:
            ScaleMismatchError: If the target has a different base or bits type
            ZeroDivisionError: If the ratio wraps to zero on the coarsening path

        Examples:
            >>> Fix[I64, 10, 3](5).convert(-3)
            Fix[i64, 10, -3](5000000)
            >>> Fix[I64, 10, -3](5_000_999).convert(3)
            Fix[i64, 10, 3](5)
        """
        to_exp = self._target_exp(to)
        bits_type = self.BITS
        diff = abs(self.EXP - to_exp)
        ratio = bits_type.pow(bits_type.from_unsigned(self.BASE), diff)

        if self.EXP <= to_exp:
            magnitude = bits_type.wrapping_div(self.bits, ratio)
            if magnitude * ratio != self.bits:
                logger.debug(
                    "lossy conversion %s -> exp %d truncated to %d", self, to_exp, magnitude
                )
        else:
            magnitude = bits_type.wrapping_mul(self.bits, ratio)
        return self._rescaled(to_exp)(magnitude)

    def checked_convert(self, to: Any) -> Optional["Fix"]:
        """
        Like convert, but None when the result does not fit the magnitude type.

        The coarsening path is exact arithmetic and never overflows for a
        non-zero ratio; a zero ratio (base 0) returns None.
        """
        to_exp = self._target_exp(to)
        bits_type = self.BITS
        diff = abs(self.EXP - to_exp)
        target = self._rescaled(to_exp)

        if self.EXP <= to_exp:
            if diff == 0 or self.BASE == 1:
                return target(self.bits)
            if self.BASE == 0:
                logger.debug("checked_convert %s -> exp %d: zero ratio", self, to_exp)
                return None
            if (self.BASE.bit_length() - 1) * diff >= bits_type.width:
                # Ratio is at least 2**width, above every magnitude.
                return target(0)
            return target(trunc_div(self.bits, self.BASE**diff))

        ratio = bits_type.checked_pow(self.BASE, diff)
        if ratio is None:
            if self.bits == 0:
                return target(0)
            logger.debug("checked_convert %s -> exp %d: ratio overflow", self, to_exp)
            return None
        magnitude = bits_type.checked_mul(self.bits, ratio)
        if magnitude is None:
            logger.debug("checked_convert %s -> exp %d: overflow", self, to_exp)
            return None
        return target(magnitude)

    def map_bits(
        self,
        transform: Callable[[int], int],
        to_bits: Union[IntType, str, None] = None,
    ) -> "Fix":
        """
        Change the magnitude type, keeping base and exponent.

        The transform's own truncation applies unmodified; narrowing can lose
        precision or wrap. Passing an IntType as the transform is a cast.

        Args:
            transform: Function from the current magnitude to the new one
            to_bits: New magnitude type (defaults to transform if it is an IntType)

        Examples:
            >>> Fix[U64, 10, -3](1699).map_bits(U8)
            Fix[u8, 10, -3](163)
        """
        if to_bits is None:
            if not isinstance(transform, IntType):
                raise TypeError("to_bits is required unless transform is an IntType")
            to_bits = transform
        return fix_type(to_bits, self.BASE, self.EXP)(transform(self.bits))

    # -------------------------------------------------------------------------
    # Representation
    # -------------------------------------------------------------------------

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.bits})"

    def __str__(self) -> str:
        return f"{self.bits}x{self.BASE}^{self.EXP}"

    def __hash__(self) -> int:
        return hash(self.bits)

    def __reduce__(self):
        return _rebuild, (self.BITS, self.BASE, self.EXP, self.bits)

    def __copy__(self) -> "Fix":
        return self

    def __deepcopy__(self, memo: dict) -> "Fix":
        return self

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Serialize as the raw magnitude; validate from an instance or an int.

        The scale is never written; the annotated class supplies it on load.
        """
        if cls.BITS is None:
            raise TypeError("annotate fields with a parametrized Fix class")
        from_int = core_schema.chain_schema(
            [
                core_schema.int_schema(ge=cls.BITS.min, le=cls.BITS.max),
                core_schema.no_info_plain_validator_function(cls),
            ]
        )
        return core_schema.json_or_python_schema(
            json_schema=from_int,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_int]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                operator.attrgetter("bits"),
                info_arg=False,
                return_schema=core_schema.int_schema(),
            ),
        )

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        # Values at different scales are never equal; only ordering raises.
        if type(other) is not type(self):
            return NotImplemented
        return self.bits == other.bits

    def __lt__(self, other: "Fix") -> bool:
        if not isinstance(other, Fix):
            return NotImplemented
        self._require_same(other, "compare")
        return self.bits < other.bits

    def __le__(self, other: "Fix") -> bool:
        if not isinstance(other, Fix):
            return NotImplemented
        self._require_same(other, "compare")
        return self.bits <= other.bits

    def __gt__(self, other: "Fix") -> bool:
        if not isinstance(other, Fix):
            return NotImplemented
        self._require_same(other, "compare")
        return self.bits > other.bits

    def __ge__(self, other: "Fix") -> bool:
        if not isinstance(other, Fix):
            return NotImplemented
        self._require_same(other, "compare")
        return self.bits >= other.bits

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __neg__(self) -> "Fix":
        return type(self)(self.BITS.wrapping_neg(self.bits))

    def __add__(self, other: "Fix") -> "Fix":
        if not isinstance(other, Fix):
            return NotImplemented
        self._require_same(other, "add")
        return type(self)(self.BITS.wrapping_add(self.bits, other.bits))

    def __sub__(self, other: "Fix") -> "Fix":
        if not isinstance(other, Fix):
            return NotImplemented
        self._require_same(other, "subtract")
        return type(self)(self.BITS.wrapping_sub(self.bits, other.bits))

    def __mul__(self, other: Union["Fix", int]) -> "Fix":
        if isinstance(other, Fix):
            self._require_same_base(type(other), "multiply")
            target = self._rescaled(self.EXP + other.EXP)
            return target(self.BITS.wrapping_mul(self.bits, other.bits))
        scalar = self._scalar(other)
        if scalar is None:
            return NotImplemented
        return type(self)(self.BITS.wrapping_mul(self.bits, scalar))

    def __truediv__(self, other: Union["Fix", int]) -> "Fix":
        if isinstance(other, Fix):
            self._require_same_base(type(other), "divide")
            target = self._rescaled(self.EXP - other.EXP)
            return target(self.BITS.wrapping_div(self.bits, other.bits))
        scalar = self._scalar(other)
        if scalar is None:
            return NotImplemented
        return type(self)(self.BITS.wrapping_div(self.bits, scalar))

    def __mod__(self, other: Union["Fix", int]) -> "Fix":
        if isinstance(other, Fix):
            self._require_same(other, "take the remainder of")
            return type(self)(self.BITS.wrapping_rem(self.bits, other.bits))
        scalar = self._scalar(other)
        if scalar is None:
            return NotImplemented
        return type(self)(self.BITS.wrapping_rem(self.bits, scalar))

    # Compound forms rebind to a new value; the exponent never changes in place.

    def __iadd__(self, other: "Fix") -> "Fix":
        return self.__add__(other)

    def __isub__(self, other: "Fix") -> "Fix":
        return self.__sub__(other)

    def __imul__(self, other: int) -> "Fix":
        if isinstance(other, Fix):
            raise TypeError("in-place multiply takes a bare magnitude, not a Fix")
        return self.__mul__(other)

    def __itruediv__(self, other: int) -> "Fix":
        if isinstance(other, Fix):
            raise TypeError("in-place divide takes a bare magnitude, not a Fix")
        return self.__truediv__(other)

    def __imod__(self, other: Union["Fix", int]) -> "Fix":
        return self.__mod__(other)

    # -------------------------------------------------------------------------
    # Checked arithmetic
    # -------------------------------------------------------------------------

    def checked_add(self, other: "Fix") -> Optional["Fix"]:
        """Sum, or None on overflow."""
        self._require_same(other, "add")
        magnitude = self.BITS.checked_add(self.bits, other.bits)
        if magnitude is None:
            logger.debug("checked_add overflow: %s + %s", self, other)
            return None
        return type(self)(magnitude)

    def checked_sub(self, other: "Fix") -> Optional["Fix"]:
        """Difference, or None on underflow/overflow."""
        self._require_same(other, "subtract")
        magnitude = self.BITS.checked_sub(self.bits, other.bits)
        if magnitude is None:
            logger.debug("checked_sub overflow: %s - %s", self, other)
            return None
        return type(self)(magnitude)

    def checked_mul(self, other: "Fix") -> Optional["Fix"]:
        """
        Product at exponent EXP + other.EXP, or None on overflow.

        The result class differs from self's whenever other.EXP != 0.
        """
        self._require_fix(other, "multiply")
        self._require_same_base(type(other), "multiply")
        magnitude = self.BITS.checked_mul(self.bits, other.bits)
        if magnitude is None:
            logger.debug("checked_mul overflow: %s * %s", self, other)
            return None
        return self._rescaled(self.EXP + other.EXP)(magnitude)

    def checked_div(self, other: "Fix") -> Optional["Fix"]:
        """
        Quotient at exponent EXP - other.EXP, or None on division by zero or
        overflow.
        """
        self._require_fix(other, "divide")
        self._require_same_base(type(other), "divide")
        magnitude = self.BITS.checked_div(self.bits, other.bits)
        if magnitude is None:
            logger.debug("checked_div failed: %s / %s", self, other)
            return None
        return self._rescaled(self.EXP - other.EXP)(magnitude)
