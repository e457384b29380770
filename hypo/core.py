"""
hypo core driver loop.

Reduces a hypothesis population by repeatedly making optimal guesses for
experiments. No I/O, no state kept between calls: the population passed in
is the only thing mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Set

from .eliminator import update
from .selector import optimal_guess
from .spi.protocols import Oracle, Predictor


@dataclass(frozen=True)
class RoundRecord:
    """Record of a single selection + elimination round."""
    round_index: int
    experiment_index: int
    answer: bool
    survivors_before: int
    survivors_after: int

    @property
    def eliminated(self) -> int:
        return self.survivors_before - self.survivors_after

    def to_dict(self) -> dict:
        return {
            "round_index": self.round_index,
            "experiment_index": self.experiment_index,
            "answer": self.answer,
            "survivors_before": self.survivors_before,
            "survivors_after": self.survivors_after,
            "eliminated": self.eliminated,
        }


def experiment(
    n: int,
    hypotheses: List[Any],
    oracle: Oracle,
    predict: Predictor,
) -> List[RoundRecord]:
    """
    Run selection and elimination until no further progress is possible.

    Each round asks the oracle exactly once, for the selected experiment only.
    The loop stops when there is no experiment to run, when an observation
    eliminated nothing, or when the selector returns to an experiment already
    asked in this run. Every survivor agrees with an answered experiment, so
    asking it again could not eliminate anything and the oracle never sees
    the same index twice.

    Exceptions from `oracle` or `predict` propagate and abort the run.

    Args:
        n: Number of available experiments
        hypotheses: Population, reduced in place
        oracle: Returns the observed answer for an experiment index
        predict: Function making a prediction from (hypothesis, experiment index)

    Returns:
        Ordered list of RoundRecord, one per oracle query
    """
    rounds: List[RoundRecord] = []
    asked: Set[int] = set()
    while True:
        guess = optimal_guess(n, hypotheses, predict)
        if guess is None or guess in asked:
            break
        asked.add(guess)
        before = len(hypotheses)
        answer = bool(oracle(guess))
        update(hypotheses, guess, answer, predict)
        rounds.append(
            RoundRecord(
                round_index=len(rounds),
                experiment_index=guess,
                answer=answer,
                survivors_before=before,
                survivors_after=len(hypotheses),
            )
        )
        if len(hypotheses) == before:
            break
    return rounds
