"""Bundled sample pool records.

Served only when ``TRAXR_FALLBACK_SAMPLE`` is enabled and no real snapshot
exists. Records use the producer's raw shape so they pass through the
same normalizer as snapshot data.
"""

from typing import Any, Final

SAMPLE_POOLS: Final[tuple[dict[str, Any], ...]] = (
    {
        "id": "XRP_43525950544F0000000000000000000000000000.rRbiKwcueo6MchUpMFDce9XpDwHhRLPFo",
        "mintA": "XRP",
        "mintB": "43525950544F0000000000000000000000000000.rRbiKwcueo6MchUpMFDce9XpDwHhRLPFo",
        "ammAccount": "rLjUKpwUVmz3vCTmFkXungxwzdoyrWRsFG",
        "tokenCode": "CRYPTO",
        "tokenName": "CryptoLand",
        "tokenIssuer": "rRbiKwcueo6MchUpMFDce9XpDwHhRLPFo",
        "reserveA": 2_949_601.711352,
        "tvlXrp": 2_949_601.711352,
        "tvlLevel": "partial",
        "priceConfidence": False,
        "tokenVolume24hXrp": 651.710414,
        "tokenVolume7dXrp": 4_483.408065,
        "tokenExchanges24h": 50,
        "tradingFee": 864,
        "tokenTrustlines": 4_195,
        "tokenBlackholed": True,
        "blacklisted": False,
        "freezeEnabled": False,
        "dataAgeHours": 0.1,
    },
)
