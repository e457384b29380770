"""
Deterministic oracle backed by a hidden hypothesis.
"""

from __future__ import annotations

from typing import Any, List

from .spi.protocols import Predictor


class HiddenAnswerOracle:
    """
    Answers every experiment the way the hidden hypothesis predicts it.

    Queries are recorded in order, so callers can count how many experiments
    a run needed.
    """

    def __init__(self, answer: Any, predict: Predictor):
        self._answer = answer
        self._predict = predict
        self._queries: List[int] = []

    def __call__(self, experiment_index: int) -> bool:
        self._queries.append(experiment_index)
        return bool(self._predict(self._answer, experiment_index))

    @property
    def answer(self) -> Any:
        return self._answer

    @property
    def queries(self) -> List[int]:
        return list(self._queries)

    @property
    def query_count(self) -> int:
        return len(self._queries)
