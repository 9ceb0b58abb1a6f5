"""Normalization of raw producer records into PoolMetrics.

The producer script has emitted several record shapes over time
(XRPSCAN pool fields, token enrichment fields, legacy UI fields). This
module is the single place that knows those names: every other component
works on PoolMetrics only.

normalize_pool is total. Missing or malformed fields fall back to the
field default; it never raises for a bad record.
"""

import math
from collections.abc import Mapping
from typing import Any

from traxr.constants.pools import (
    FEE_BASIS_DENOMINATOR,
    PAIR_KEY_SEPARATOR,
    TRUTHY_STRINGS,
)
from traxr.models.pool import PoolMetrics, RawRecord, ValuationConfidence

# Alias groups, highest priority first
_TVL_FIELDS = ("tvlXrp", "totalValueLocked")
_RESERVE_FIELDS = ("reserveA",)
_LEGACY_LIQUIDITY_FIELDS = ("liquidity", "liquidityXrp", "liquidityUsd")
_TOKEN_VOLUME_24H_FIELDS = ("tokenVolume24hXrp", "tokenVolume24h")
_VOLUME_24H_FIELDS = ("volume24hXrp", "volume24h", "volume24hUsd")
_TOKEN_VOLUME_7D_FIELDS = ("tokenVolume7dXrp", "tokenVolume7d")
_VOLUME_7D_FIELDS = ("volume7dXrp", "volume7d", "volume7dUsd")
_TX_24H_FIELDS = ("tx24h", "tokenExchanges24h", "tokenTakers24h")
_TX_7D_FIELDS = ("tx7d", "tokenExchanges7d")
_FEE_FRACTION_FIELDS = ("feePct", "feeFraction")
_VOLATILITY_FIELDS = ("volatilityPct", "volatility")
_PRICE_IMPACT_FIELDS = ("priceImpactPct", "priceImpact")
_TRUSTLINE_FIELDS = ("trustlines", "tokenTrustlines")
_BLACKHOLED_FIELDS = ("blackholed", "tokenBlackholed")
_BLACKLISTED_FIELDS = ("blacklisted", "tokenBlacklisted")
_FREEZE_FIELDS = ("freezeEnabled", "freeze")
_VALUATION_LEVEL_FIELDS = ("tvlLevel", "valuationConfidenceLevel")
_PRICE_CONFIDENCE_FIELDS = ("priceConfidence", "priceConfident")
_UPDATED_AT_FIELDS = ("tokenUpdatedAt", "updatedAt")


def _to_float(value: Any) -> float | None:
    """Coerce a number or numeric string to a finite float."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _to_int(value: Any) -> int | None:
    number = _to_float(value)
    return int(number) if number is not None else None


def _to_str(value: Any) -> str | None:
    """Coerce identifiers to a stripped, non-empty string."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
    elif isinstance(value, int | float):
        text = str(value)
    else:
        return None
    return text or None


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_STRINGS
    if isinstance(value, int | float):
        return value != 0
    return False


def _first_float(raw: RawRecord, fields: tuple[str, ...]) -> float | None:
    """First alias whose value parses as a number."""
    for field in fields:
        number = _to_float(raw.get(field))
        if number is not None:
            return number
    return None


def _first_int(raw: RawRecord, fields: tuple[str, ...]) -> int | None:
    for field in fields:
        number = _to_int(raw.get(field))
        if number is not None:
            return number
    return None


def _first_str(raw: RawRecord, fields: tuple[str, ...]) -> str | None:
    for field in fields:
        text = _to_str(raw.get(field))
        if text is not None:
            return text
    return None


def _any_true(raw: RawRecord, fields: tuple[str, ...]) -> bool:
    return any(_to_bool(raw.get(field)) for field in fields)


def _liquidity(raw: RawRecord) -> float:
    tvl = _first_float(raw, _TVL_FIELDS)
    if tvl is not None and tvl > 0:
        return tvl

    reserve = _first_float(raw, _RESERVE_FIELDS)
    if reserve is not None:
        return reserve

    legacy = _first_float(raw, _LEGACY_LIQUIDITY_FIELDS)
    return legacy if legacy is not None else 0.0


def _fee_fraction(raw: RawRecord) -> float | None:
    basis_points = _to_float(raw.get("tradingFee"))
    if basis_points is not None:
        return basis_points / FEE_BASIS_DENOMINATOR
    return _first_float(raw, _FEE_FRACTION_FIELDS)


def _valuation_level(raw: RawRecord) -> ValuationConfidence:
    for field in _VALUATION_LEVEL_FIELDS:
        value = _to_str(raw.get(field))
        if value is None:
            continue
        try:
            return ValuationConfidence(value.lower())
        except ValueError:
            continue
    return ValuationConfidence.UNKNOWN


def _price_confident(raw: RawRecord) -> bool:
    for field in _PRICE_CONFIDENCE_FIELDS:
        if raw.get(field) is not None:
            return _to_bool(raw.get(field))
    return False


def derive_pool_id(raw: RawRecord) -> str:
    """Pool id: explicit identifier, else the producer's mintA_mintB pairing."""
    explicit = _first_str(raw, ("poolId", "id"))
    if explicit is not None:
        return explicit
    mint_a = _to_str(raw.get("mintA")) or ""
    mint_b = _to_str(raw.get("mintB")) or ""
    return f"{mint_a}{PAIR_KEY_SEPARATOR}{mint_b}"


def normalize_pool(raw: RawRecord | Any) -> PoolMetrics:
    """Normalize one raw producer record.

    Args:
        raw: Loosely-typed record from a snapshot file. Anything that is not
            a mapping is treated as an empty record.

    Returns:
        PoolMetrics with every field set to a parsed value or its default.
    """
    if not isinstance(raw, Mapping):
        raw = {}

    volume_24h = _first_float(raw, _TOKEN_VOLUME_24H_FIELDS)
    if volume_24h is None:
        volume_24h = _first_float(raw, _VOLUME_24H_FIELDS)

    volume_7d = _first_float(raw, _TOKEN_VOLUME_7D_FIELDS)
    if volume_7d is None:
        volume_7d = _first_float(raw, _VOLUME_7D_FIELDS)

    volatility = _first_float(raw, _VOLATILITY_FIELDS)

    return PoolMetrics(
        pool_id=derive_pool_id(raw),
        mint_a=_to_str(raw.get("mintA")) or "",
        mint_b=_to_str(raw.get("mintB")) or "",
        amm_account=_to_str(raw.get("ammAccount")),
        token_name=_to_str(raw.get("tokenName")),
        token_code=_to_str(raw.get("tokenCode")),
        token_issuer=_to_str(raw.get("tokenIssuer")),
        updated_at=_first_str(raw, _UPDATED_AT_FIELDS),
        liquidity=_liquidity(raw),
        volume_24h=volume_24h if volume_24h is not None else 0.0,
        volume_7d=volume_7d,
        tx_count_24h=_first_int(raw, _TX_24H_FIELDS) or 0,
        tx_count_7d=_first_int(raw, _TX_7D_FIELDS),
        fee_fraction=_fee_fraction(raw),
        volatility=volatility if volatility is not None else 0.0,
        price_impact=_first_float(raw, _PRICE_IMPACT_FIELDS),
        data_age_hours=_to_float(raw.get("dataAgeHours")) or 0.0,
        trustline_count=max(_first_int(raw, _TRUSTLINE_FIELDS) or 0, 0),
        is_blacklisted=_any_true(raw, _BLACKLISTED_FIELDS),
        is_blackholed=_any_true(raw, _BLACKHOLED_FIELDS),
        freeze_enabled=_any_true(raw, _FREEZE_FIELDS),
        total_value_locked=_first_float(raw, _TVL_FIELDS),
        valuation_confidence_level=_valuation_level(raw),
        price_confident=_price_confident(raw),
    )
