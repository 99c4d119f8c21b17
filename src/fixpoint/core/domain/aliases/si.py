"""SI decimal prefixes: base 10."""

from typing import Final

from fixpoint.core.domain.aliases import Scale

Yocto: Final[Scale] = Scale(10, -24)
Zepto: Final[Scale] = Scale(10, -21)
Atto: Final[Scale] = Scale(10, -18)
Femto: Final[Scale] = Scale(10, -15)
Pico: Final[Scale] = Scale(10, -12)
Nano: Final[Scale] = Scale(10, -9)
Micro: Final[Scale] = Scale(10, -6)
Milli: Final[Scale] = Scale(10, -3)
Centi: Final[Scale] = Scale(10, -2)
Deci: Final[Scale] = Scale(10, -1)
Unit: Final[Scale] = Scale(10, 0)
Deca: Final[Scale] = Scale(10, 1)
Hecto: Final[Scale] = Scale(10, 2)
Kilo: Final[Scale] = Scale(10, 3)
Mega: Final[Scale] = Scale(10, 6)
Giga: Final[Scale] = Scale(10, 9)
Tera: Final[Scale] = Scale(10, 12)
Peta: Final[Scale] = Scale(10, 15)
Exa: Final[Scale] = Scale(10, 18)
Zetta: Final[Scale] = Scale(10, 21)
Yotta: Final[Scale] = Scale(10, 24)
