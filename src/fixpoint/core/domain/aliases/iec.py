"""IEC binary prefixes: base 2."""

from typing import Final

from fixpoint.core.domain.aliases import Scale

Unit: Final[Scale] = Scale(2, 0)
Kibi: Final[Scale] = Scale(2, 10)
Mebi: Final[Scale] = Scale(2, 20)
Gibi: Final[Scale] = Scale(2, 30)
Tebi: Final[Scale] = Scale(2, 40)
Pebi: Final[Scale] = Scale(2, 50)
Exbi: Final[Scale] = Scale(2, 60)
Zebi: Final[Scale] = Scale(2, 70)
Yobi: Final[Scale] = Scale(2, 80)
