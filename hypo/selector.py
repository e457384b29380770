"""
Optimal guess selection.

An optimal guess is the experiment whose number of `True` predictions is as
close as possible to half the surviving hypotheses: whatever the outcome, it
eliminates about half of them, like a step of binary search over an unsorted
hypothesis space.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

from .scoring import guess_count
from .spi.protocols import Predictor


def optimal_guess(n: int, hypotheses: Sequence[Any], predict: Predictor) -> Optional[int]:
    """
    Return the index of the experiment closest to an even split.

    Every experiment in `0..n` is scored; the first index reaching the minimal
    distance `abs(count - len(hypotheses) // 2)` wins ties.

    Args:
        n: Number of available experiments
        hypotheses: Surviving hypotheses
        predict: Function making a prediction from (hypothesis, experiment index)

    Returns:
        The chosen experiment index, or None when `n == 0`
    """
    best: Optional[Tuple[int, int]] = None  # (dist, index)
    half = len(hypotheses) // 2
    for i in range(n):
        dist = abs(guess_count(i, hypotheses, predict) - half)
        if best is None or dist < best[0]:
            best = (dist, i)
    if best is None:
        return None
    return best[1]
