"""
Tests for checked Fix arithmetic and the checked protocols

Checks:
1. checked_add/checked_sub boundaries at fixed scale
2. checked_mul/checked_div result scale and failure cases
3. Protocol conformance and generic helpers
4. Scale mismatches still raise
"""

import pytest

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
from fixpoint.core.domain.fix import Fix, ScaleMismatchError
from fixpoint.core.math.primitives import I8, I64, U8, U64

Kilo = Fix[U8, 10, 3]
Milli = Fix[U8, 10, -3]
Unit = Fix[U8, 10, 0]


# =============================================================================
# ADD / SUB
# =============================================================================


class TestCheckedAdd:
    """checked_add"""

    def test_overflow_is_none(self) -> None:
        assert Kilo(U8.max).checked_add(Kilo(1)) is None

    def test_in_range(self) -> None:
        assert Kilo(40).checked_add(Kilo(2)) == Kilo(42)

    def test_exact_max(self) -> None:
        assert Kilo(250).checked_add(Kilo(5)) == Kilo(255)

    def test_signed_underflow_is_none(self) -> None:
        Small = Fix[I8, 10, 0]
        assert Small(-128).checked_add(Small(-1)) is None

    def test_scale_mismatch_raises(self) -> None:
        with pytest.raises(ScaleMismatchError):
            Kilo(1).checked_add(Milli(1))


class TestCheckedSub:
    """checked_sub"""

    def test_underflow_is_none(self) -> None:
        assert Kilo(1).checked_sub(Kilo(U8.max)) is None

    def test_in_range(self) -> None:
        assert Kilo(50).checked_sub(Kilo(8)) == Kilo(42)

    def test_scale_mismatch_raises(self) -> None:
        with pytest.raises(ScaleMismatchError):
            Kilo(1).checked_sub(Milli(1))


# =============================================================================
# MUL / DIV
# =============================================================================


class TestCheckedMul:
    """checked_mul computes the result exponent"""

    def test_overflow_is_none(self) -> None:
        assert Kilo(50).checked_mul(Kilo(U8.max)) is None

    def test_in_range_then_convert(self) -> None:
        fifty = Fix[U64, 10, 3](50)
        product = fifty.checked_mul(fifty)
        assert type(product) is Fix[U64, 10, 6]
        assert product.convert(3) == Fix[U64, 10, 3](2_500_000)

    def test_mixed_exponents(self) -> None:
        product = Kilo(2).checked_mul(Milli(3))
        assert type(product) is Unit
        assert product == Unit(6)

    def test_different_base_raises(self) -> None:
        with pytest.raises(ScaleMismatchError):
            Kilo(1).checked_mul(Fix[U8, 2, 3](1))

    def test_non_fix_raises(self) -> None:
        with pytest.raises(TypeError, match="expected a Fix value"):
            Kilo(1).checked_mul(2)


class TestCheckedDiv:
    """checked_div computes the result exponent"""

    def test_zero_by_zero_is_none(self) -> None:
        zero = Unit(0)
        assert zero.checked_div(zero) is None

    def test_by_zero_is_none(self) -> None:
        assert Kilo(100).checked_div(Kilo(0)) is None

    def test_in_range(self) -> None:
        assert Kilo(100).checked_div(Kilo(5)) == Unit(20)

    def test_signed_overflow_is_none(self) -> None:
        Small = Fix[I8, 10, 0]
        assert Small(-128).checked_div(Small(-1)) is None

    def test_truncates(self) -> None:
        Small = Fix[I8, 10, 0]
        assert Small(-7).checked_div(Small(2)) == Small(-3)

    def test_exponent_difference(self) -> None:
        quotient = Kilo(6).checked_div(Milli(2))
        assert type(quotient) is Fix[U8, 10, 6]
        assert quotient.bits == 3

    def test_non_fix_raises(self) -> None:
        with pytest.raises(TypeError, match="expected a Fix value"):
            Kilo(6).checked_div(2)


# =============================================================================
# PROTOCOLS
# =============================================================================


class TestProtocols:
    """Fix satisfies the checked protocol family"""

    def test_isinstance(self) -> None:
        value = Kilo(1)
        assert isinstance(value, CheckedAdd)
        assert isinstance(value, CheckedSub)
        assert isinstance(value, CheckedMulFix)
        assert isinstance(value, CheckedDivFix)

    def test_plain_int_does_not_conform(self) -> None:
        assert not isinstance(1, CheckedAdd)

    def test_generic_helpers(self) -> None:
        assert checked_add(Kilo(40), Kilo(2)) == Kilo(42)
        assert checked_sub(Kilo(1), Kilo(2)) is None
        assert checked_mul(Kilo(2), Milli(3)) == Unit(6)
        assert checked_div(Unit(0), Unit(0)) is None


class TestCheckedSum:
    """Generic reduction over CheckedAdd"""

    def test_sum_in_range(self) -> None:
        assert checked_sum([Kilo(200), Kilo(50), Kilo(5)]) == Kilo(255)

    def test_sum_overflow(self) -> None:
        assert checked_sum([Kilo(200), Kilo(50), Kilo(6)]) is None

    def test_overflow_not_recovered(self) -> None:
        """A later negative term cannot undo an earlier overflow"""
        Small = Fix[I8, 10, 0]
        assert checked_sum([Small(100), Small(100), Small(-100)]) is None

    def test_start(self) -> None:
        Wide = Fix[I64, 10, -2]
        assert checked_sum([Wide(1), Wide(2)], start=Wide(10)) == Wide(13)

    def test_empty(self) -> None:
        assert checked_sum([]) is None
        assert checked_sum([], start=Kilo(7)) == Kilo(7)
