"""Pool normalization and cache constants."""

from typing import Final

# Producers emit the AMM trading fee on a 10,000 scale (864 -> 0.0864)
FEE_BASIS_DENOMINATOR: Final[int] = 10_000

# Separator between currency code and issuer in "CODE.ISSUER" identifiers
ASSET_ISSUER_SEPARATOR: Final[str] = "."

# Separator used in pool ids and canonical pair keys
PAIR_KEY_SEPARATOR: Final[str] = "_"

# Refresh defaults (minutes)
DEFAULT_REFRESH_INTERVAL_MINUTES: Final[int] = 5
STALENESS_MULTIPLIER: Final[int] = 2

# Strings accepted as boolean true in producer records
TRUTHY_STRINGS: Final[frozenset[str]] = frozenset({"true", "1", "yes", "y", "on"})
