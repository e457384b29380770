"""
SPI interface for experiment providers.
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol


class ExperimentProvider(Protocol):
    """
    SPI interface implemented by domain adapters.
    hypo treats hypotheses as opaque.
    """

    # ---- identity ----
    def id(self) -> str: ...

    def version(self) -> str: ...

    # ---- hypothesis space ----
    def hypotheses(self) -> List[Any]:
        """Fresh population list; the caller owns and mutates it."""

    # ---- experiment interface ----
    def experiment_count(self) -> int: ...

    def predict(self, hypothesis: Any, experiment_index: int) -> bool: ...

    def describe_experiment(self, experiment_index: int) -> str: ...

    def hidden_answer(self) -> Optional[Any]:
        """Hypothesis used as ground truth, or None when the kit has none."""
