"""Scoring collaborator interface and loader.

TRAXR does not score pools itself. Scores come from an external package
located by import path at startup; there is no fallback scorer, so a
missing or incomplete package stops the process before the first request.

Accepted import targets (``TRAXR_SCORER``):
    - ``"package.module"``: a module exposing ``score`` and ``warnings``
    - ``"package.module:attribute"``: an object exposing both methods,
      or a zero-argument class/factory returning one
"""

import importlib
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

import structlog

from traxr.core.exceptions import ScorerUnavailableError
from traxr.models.pool import DimensionBreakdown, PoolMetrics, ScoreResult

log = structlog.get_logger(__name__)

# (score, dimensions, tier_count) as returned by tuple-style scorers
RawScore = tuple[float, DimensionBreakdown | Mapping[str, float], int]


@runtime_checkable
class Scorer(Protocol):
    """Black-box scoring collaborator."""

    def score(self, metrics: PoolMetrics) -> ScoreResult | RawScore:
        """Score a pool: overall score, six dimensions and tier count."""
        ...

    def warnings(
        self, metrics: PoolMetrics, dimensions: DimensionBreakdown
    ) -> list[str]:
        """Human-readable warnings for a scored pool."""
        ...


def _has_scorer_api(candidate: Any) -> bool:
    return callable(getattr(candidate, "score", None)) and callable(
        getattr(candidate, "warnings", None)
    )


def load_scorer(import_path: str) -> Scorer:
    """Import and validate the configured scorer.

    Args:
        import_path: ``"module"`` or ``"module:attribute"``.

    Returns:
        An object satisfying the Scorer protocol.

    Raises:
        ScorerUnavailableError: If the target cannot be imported or lacks
            ``score``/``warnings`` callables.
    """
    module_name, _, attribute = import_path.partition(":")

    try:
        module = importlib.import_module(module_name)
    except Exception as e:
        log.error("scorer_import_failed", scorer=import_path, error=str(e))
        raise ScorerUnavailableError(import_path, f"cannot import: {e}") from e

    target: Any = module
    if attribute:
        try:
            target = getattr(module, attribute)
        except AttributeError as e:
            raise ScorerUnavailableError(
                import_path, f"module has no attribute '{attribute}'"
            ) from e

        # Class or factory: instantiate once
        if isinstance(target, type) or (
            not _has_scorer_api(target) and callable(target)
        ):
            try:
                target = target()
            except Exception as e:
                raise ScorerUnavailableError(
                    import_path, f"factory failed: {e}"
                ) from e

    if not _has_scorer_api(target):
        raise ScorerUnavailableError(
            import_path, "target must expose callable 'score' and 'warnings'"
        )

    log.info("scorer_loaded", scorer=import_path)
    return target  # type: ignore[no-any-return]


def require_scorer(scorer: Scorer | None) -> Scorer:
    """Reject a missing or incomplete scorer at construction time."""
    if scorer is None or not _has_scorer_api(scorer):
        raise ScorerUnavailableError(
            repr(scorer), "a scorer exposing 'score' and 'warnings' is required"
        )
    return scorer


def _as_score_result(raw: Any) -> ScoreResult:
    if isinstance(raw, ScoreResult):
        return raw
    if isinstance(raw, tuple | list) and len(raw) == 3:
        score, dimensions, tier_count = raw
        raw = {"score": score, "dimensions": dimensions, "tier_count": tier_count}
    return ScoreResult.model_validate(raw)


def score_pool(
    scorer: Scorer, metrics: PoolMetrics
) -> tuple[ScoreResult, tuple[str, ...]]:
    """Run the scorer and warning builder for one pool.

    Scorers may return a ScoreResult, an equivalent mapping, or a
    ``(score, dimensions, tier_count)`` tuple.
    """
    result = _as_score_result(scorer.score(metrics))
    warnings = tuple(str(w) for w in scorer.warnings(metrics, result.dimensions))
    return result, warnings
