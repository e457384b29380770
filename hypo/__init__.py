"""
hypo - Automatic hypothesis testing

Instead of designing one experiment to test a single hypothesis, pick the
experiment that eliminates as many hypotheses as possible. Assuming each
experiment concludes `true` or `false`, the ideal experiment is one where the
surviving hypotheses disagree: about half predict `true`, so about half are
eliminated whatever the conclusion. This works like binary search, except
that hypotheses do not need to be sorted.

Minimized over experiments e:

    abs(|h : prediction(h, e)| - |Hypothesis| / 2)

Design principles:
- Hypotheses are opaque; only a caller-supplied prediction function is used
- The core performs no I/O and keeps no state between calls
- Greedy: each round picks the best single experiment
"""

from .core import RoundRecord, experiment
from .eliminator import update
from .oracles import HiddenAnswerOracle
from .scoring import (
    correlation_matrix,
    fitness_profile,
    guess_count,
    guess_count_correlation,
    guess_fitness,
    prediction_matrix,
)
from .selector import optimal_guess
from .session import ExperimentSession, SessionError, SessionSnapshot

__all__ = [
    "RoundRecord",
    "experiment",
    "update",
    "optimal_guess",
    "guess_count",
    "guess_count_correlation",
    "guess_fitness",
    "fitness_profile",
    "prediction_matrix",
    "correlation_matrix",
    "HiddenAnswerOracle",
    "ExperimentSession",
    "SessionError",
    "SessionSnapshot",
]
