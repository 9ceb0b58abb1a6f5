"""Test data factories using factory_boy.

These factories generate realistic test data for TRAXR models and raw
producer records.
"""

from tests.factories.pool import PoolMetricsFactory, RawPoolRecordFactory
from tests.factories.scoring import StubScorer

__all__ = [
    "PoolMetricsFactory",
    "RawPoolRecordFactory",
    "StubScorer",
]
