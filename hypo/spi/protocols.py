"""
SPI callables supplied by callers.

The core never inspects hypotheses; it only calls these.
"""

from __future__ import annotations

from typing import Any, Protocol


class Predictor(Protocol):
    """Pure, deterministic prediction of an experiment's outcome."""

    def __call__(self, hypothesis: Any, experiment_index: int) -> bool: ...


class Oracle(Protocol):
    """Ground truth for a chosen experiment. May have side effects."""

    def __call__(self, experiment_index: int) -> bool: ...
