"""Pair keys and token matching for pool lookups."""

from traxr.constants.pools import ASSET_ISSUER_SEPARATOR, PAIR_KEY_SEPARATOR
from traxr.models.pool import PoolMetrics


def _canon(value: str | None) -> str:
    return value.strip().upper() if value else ""


def pair_key(asset_a: str, asset_b: str) -> str:
    """Order-independent cache key for an asset pair.

    Example:
        pair_key("xrp", "FOO.rIssuer") == pair_key("FOO.rIssuer", "XRP")
    """
    return PAIR_KEY_SEPARATOR.join(sorted((_canon(asset_a), _canon(asset_b))))


def _asset_forms(asset: str | None) -> list[str]:
    """Full identifier plus its bare currency code ("CODE.ISSUER" -> "CODE")."""
    canon = _canon(asset)
    if not canon:
        return []
    code = canon.split(ASSET_ISSUER_SEPARATOR, 1)[0]
    return [canon, code]


def pool_tokens(metrics: PoolMetrics) -> frozenset[str]:
    """Every upper-cased name a pool answers to in a fuzzy search."""
    tokens = [
        *_asset_forms(metrics.mint_a),
        *_asset_forms(metrics.mint_b),
        _canon(metrics.token_code),
        _canon(metrics.token_name),
    ]
    return frozenset(token for token in tokens if token)


def matches_pool_tokens(metrics: PoolMetrics, token_a: str, token_b: str) -> bool:
    """True when both query tokens name one of the pool's assets."""
    query_a, query_b = _canon(token_a), _canon(token_b)
    if not query_a or not query_b:
        return False
    tokens = pool_tokens(metrics)
    return query_a in tokens and query_b in tokens
