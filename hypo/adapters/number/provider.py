"""
Number-guessing provider. Experiment i probes the value i.
"""

from __future__ import annotations

from typing import List, Optional

from .hypothesis import NumberHypothesis
from .kit import NumberKit, load_kit


class NumberProvider:
    def __init__(self, kit: NumberKit):
        self._kit = kit

    @classmethod
    def load(cls, path: Optional[str] = None) -> "NumberProvider":
        return cls(load_kit(path))

    def id(self) -> str:
        return "number"

    def version(self) -> str:
        return "1.0"

    def hypotheses(self) -> List[NumberHypothesis]:
        return list(self._kit.hypotheses)

    def experiment_count(self) -> int:
        return self._kit.experiments

    def predict(self, hypothesis: NumberHypothesis, experiment_index: int) -> bool:
        return hypothesis.predict(experiment_index)

    def describe_experiment(self, experiment_index: int) -> str:
        return f"does the rule hold for {experiment_index}?"

    def hidden_answer(self) -> Optional[NumberHypothesis]:
        return self._kit.answer
