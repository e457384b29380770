"""
Hypothesis elimination.
"""

from __future__ import annotations

from typing import Any, List

from .spi.protocols import Predictor


def update(
    hypotheses: List[Any],
    experiment_index: int,
    observed_answer: bool,
    predict: Predictor,
) -> None:
    """
    Remove all hypotheses that predicted the wrong answer.

    Removal is swap-and-truncate: the last element is moved into the freed
    slot. The relative order of survivors is therefore NOT preserved; the
    population is treated as an unordered collection.

    Predictions are all evaluated before the first removal, so an exception
    from `predict` leaves `hypotheses` unchanged.
    """
    wrong = [bool(predict(h, experiment_index)) != observed_answer for h in hypotheses]
    for i in range(len(hypotheses) - 1, -1, -1):
        if wrong[i]:
            last = hypotheses.pop()
            if i < len(hypotheses):
                hypotheses[i] = last
