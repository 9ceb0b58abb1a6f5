"""Scoring collaborator interface."""

from traxr.services.scoring.scorer import (
    Scorer,
    load_scorer,
    require_scorer,
    score_pool,
)

__all__ = [
    "Scorer",
    "load_scorer",
    "require_scorer",
    "score_pool",
]
