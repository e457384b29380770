"""
Guess-the-circle provider.

Hypotheses are circles; experiment i asks whether probe point i lies inside
the hidden circle.
"""

from __future__ import annotations

from typing import List, Optional

from .kit import Circle, CircleKit, load_kit


class CircleProvider:
    def __init__(self, kit: CircleKit):
        self._kit = kit

    @classmethod
    def load(cls, path: Optional[str] = None) -> "CircleProvider":
        return cls(load_kit(path))

    def id(self) -> str:
        return "circle"

    def version(self) -> str:
        return "1.0"

    def hypotheses(self) -> List[Circle]:
        return list(self._kit.hypotheses)

    def experiment_count(self) -> int:
        return len(self._kit.probes)

    def predict(self, hypothesis: Circle, experiment_index: int) -> bool:
        return hypothesis.inside(self._kit.probes[experiment_index])

    def describe_experiment(self, experiment_index: int) -> str:
        x, y = self._kit.probes[experiment_index]
        return f"is ({x}, {y}) inside?"

    def hidden_answer(self) -> Optional[Circle]:
        return self._kit.answer
