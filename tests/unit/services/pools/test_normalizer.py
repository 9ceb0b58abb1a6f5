"""Unit tests for raw record normalization."""

import pytest

from tests.factories import RawPoolRecordFactory
from traxr.models.pool import PoolMetrics, ValuationConfidence
from traxr.services.pools.normalizer import derive_pool_id, normalize_pool


@pytest.mark.unit
class TestNormalizeTotality:
    """normalize_pool never raises and always fills every field."""

    @pytest.mark.parametrize(
        "raw",
        [
            {},
            None,
            [],
            "not a record",
            42,
            {"mintA": None, "mintB": None},
            {"tvlXrp": "abc", "reserveA": {}, "tradingFee": "x", "trustlines": "many"},
            {"tx24h": float("nan"), "volume24hXrp": "inf"},
        ],
    )
    def test_malformed_input_yields_defaults(self, raw):
        """Malformed records normalize to documented defaults."""
        metrics = normalize_pool(raw)

        assert isinstance(metrics, PoolMetrics)
        assert metrics.liquidity == 0.0
        assert metrics.volume_24h == 0.0
        assert metrics.volume_7d is None
        assert metrics.tx_count_24h == 0
        assert metrics.tx_count_7d is None
        assert metrics.fee_fraction is None
        assert metrics.volatility == 0.0
        assert metrics.trustline_count == 0
        assert metrics.is_blacklisted is False
        assert metrics.is_blackholed is False
        assert metrics.freeze_enabled is False
        assert metrics.total_value_locked is None
        assert metrics.valuation_confidence_level == ValuationConfidence.UNKNOWN
        assert metrics.price_confident is False

    def test_empty_record_pool_id(self):
        """Empty record still gets a deterministic pool id."""
        assert normalize_pool({}).pool_id == "_"

    def test_deterministic(self):
        """Identical input always yields identical output."""
        record = RawPoolRecordFactory()
        assert normalize_pool(record) == normalize_pool(dict(record))


@pytest.mark.unit
class TestPoolIdentity:
    """Pool id derivation."""

    def test_explicit_pool_id_wins(self):
        raw = {"poolId": "P1", "id": "P2", "mintA": "XRP", "mintB": "FOO.r1"}
        assert derive_pool_id(raw) == "P1"

    def test_id_alias(self):
        assert derive_pool_id({"id": "P2", "mintA": "XRP", "mintB": "FOO.r1"}) == "P2"

    def test_derived_from_mints_in_producer_order(self):
        """Fixed mintA_mintB pairing, case preserved."""
        raw = {"mintA": "XRP", "mintB": "FOO.rISSUER"}
        assert normalize_pool(raw).pool_id == "XRP_FOO.rISSUER"

    def test_blank_explicit_id_falls_back(self):
        raw = {"poolId": "  ", "mintA": "XRP", "mintB": "FOO.r1"}
        assert derive_pool_id(raw) == "XRP_FOO.r1"


@pytest.mark.unit
class TestLiquidityCoalescing:
    """Liquidity: positive TVL, then reserve, then legacy fields."""

    def test_positive_tvl_preferred(self):
        metrics = normalize_pool({"tvlXrp": 500, "reserveA": 200})
        assert metrics.liquidity == 500
        assert metrics.total_value_locked == 500

    def test_zero_tvl_falls_back_to_reserve(self):
        metrics = normalize_pool({"tvlXrp": 0, "reserveA": 200})
        assert metrics.liquidity == 200
        assert metrics.total_value_locked == 0

    def test_legacy_liquidity_string(self):
        assert normalize_pool({"liquidity": "100"}).liquidity == 100

    def test_total_value_locked_alias(self):
        assert normalize_pool({"totalValueLocked": "42.5"}).liquidity == 42.5


@pytest.mark.unit
class TestVolumeAndActivity:
    """Volume and transaction count aliases."""

    def test_token_volume_preferred(self):
        metrics = normalize_pool({"tokenVolume24hXrp": 10, "volume24hXrp": 99})
        assert metrics.volume_24h == 10

    def test_generic_volume_fallback(self):
        metrics = normalize_pool({"volume24hXrp": "99", "volume7dXrp": 700})
        assert metrics.volume_24h == 99
        assert metrics.volume_7d == 700

    def test_unparseable_token_volume_uses_next_alias(self):
        metrics = normalize_pool({"tokenVolume24hXrp": "n/a", "volume24hXrp": 5})
        assert metrics.volume_24h == 5

    def test_tx_count_aliases(self):
        metrics = normalize_pool({"tokenExchanges24h": 12, "tokenTakers24h": 3})
        assert metrics.tx_count_24h == 12
        assert normalize_pool({"tokenTakers24h": "3"}).tx_count_24h == 3


@pytest.mark.unit
class TestFeeAndFlags:
    """Fee conversion and trust flags."""

    def test_trading_fee_basis_points(self):
        assert normalize_pool({"tradingFee": 864}).fee_fraction == pytest.approx(0.0864)

    def test_trading_fee_string(self):
        assert normalize_pool({"tradingFee": "30"}).fee_fraction == pytest.approx(0.003)

    def test_explicit_fee_fraction(self):
        assert normalize_pool({"feePct": 0.01}).fee_fraction == 0.01

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ({"blackholed": True}, True),
            ({"tokenBlackholed": True}, True),
            ({"blackholed": False, "tokenBlackholed": True}, True),
            ({"blackholed": "true"}, True),
            ({"blackholed": "false"}, False),
            ({}, False),
        ],
    )
    def test_blackholed_is_or_of_aliases(self, raw, expected):
        assert normalize_pool(raw).is_blackholed is expected

    def test_trustlines_alias_and_clamp(self):
        assert normalize_pool({"tokenTrustlines": "4195"}).trustline_count == 4195
        assert normalize_pool({"trustlines": -5}).trustline_count == 0

    def test_boolean_is_not_a_number(self):
        """True must not read as liquidity 1."""
        assert normalize_pool({"reserveA": True}).liquidity == 0.0


@pytest.mark.unit
class TestValuationFields:
    """Derived-truth fields."""

    def test_valuation_level_parsed(self):
        metrics = normalize_pool({"tvlLevel": "Realistic", "priceConfidence": True})
        assert metrics.valuation_confidence_level == ValuationConfidence.REALISTIC
        assert metrics.price_confident is True

    def test_unknown_valuation_level(self):
        metrics = normalize_pool({"tvlLevel": "excellent"})
        assert metrics.valuation_confidence_level == ValuationConfidence.UNKNOWN

    def test_factory_record_round_trip_fields(self):
        record = RawPoolRecordFactory(tokenCode="SOLO", tradingFee=500)
        metrics = normalize_pool(record)

        assert metrics.pool_id == record["id"]
        assert metrics.token_code == "SOLO"
        assert metrics.fee_fraction == pytest.approx(0.05)
        assert metrics.valuation_confidence_level == ValuationConfidence.PARTIAL
        assert metrics.updated_at == "2025-01-01T00:00:00Z"
