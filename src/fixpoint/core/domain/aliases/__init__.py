"""
Scale presets.

A Scale is a (base, exp) pair without a magnitude type. Indexing it with an
integer type gives the concrete Fix class; calling it uses DEFAULT_BITS.

    >>> from fixpoint.core.domain.aliases.si import Centi
    >>> Centi[U8](30)
    Fix[u8, 10, -2](30)
    >>> Centi(30) == Centi(10) + Centi(20)
    True

Submodules:
- si  : decimal prefixes, base 10
- iec : binary prefixes, base 2
"""

from dataclasses import dataclass
from typing import Final, Union

from fixpoint.core.domain.fix import Fix, fix_type
from fixpoint.core.math.primitives import I64, IntType

# Magnitude type used when a preset is called directly
DEFAULT_BITS: Final[IntType] = I64


@dataclass(frozen=True)
class Scale:
    """Named scale base^exp, generic over the magnitude type."""

    base: int
    exp: int

    def __getitem__(self, bits: Union[IntType, str]) -> type[Fix]:
        return fix_type(bits, self.base, self.exp)

    def __call__(self, bits: int = 0) -> Fix:
        return self[DEFAULT_BITS](bits)

    def new(self, bits: int) -> Fix:
        return self(bits)


__all__ = ["DEFAULT_BITS", "Scale"]
