"""
Experiment scoring.

Counts how the surviving hypotheses split on an experiment. All functions are
pure: they only call the prediction function and never touch the population.
"""

from __future__ import annotations

from typing import Any, List, Sequence

import numpy as np

from .spi.protocols import Predictor


def guess_count(i: int, hypotheses: Sequence[Any], predict: Predictor) -> int:
    """Return the number of hypotheses predicting `True` for experiment `i`."""
    count = 0
    for hypothesis in hypotheses:
        if predict(hypothesis, i):
            count += 1
    return count


def guess_count_correlation(
    i: int,
    j: int,
    hypotheses: Sequence[Any],
    predict: Predictor,
) -> int:
    """
    Return the number of hypotheses predicting the same outcome for `i` and `j`.

    A value equal to the population size means the two experiments are
    redundant for the current survivors.
    """
    count = 0
    for hypothesis in hypotheses:
        if predict(hypothesis, i) == predict(hypothesis, j):
            count += 1
    return count


def guess_fitness(i: int, hypotheses: Sequence[Any], predict: Predictor) -> int:
    """
    Return the fitness of experiment `i`: `-(|H| // 2 - count) ** 2`.

    The score is never positive; 0 means the experiment splits the survivors
    in half.
    """
    half = len(hypotheses) // 2
    return -((half - guess_count(i, hypotheses, predict)) ** 2)


def fitness_profile(n: int, hypotheses: Sequence[Any], predict: Predictor) -> List[int]:
    return [guess_fitness(i, hypotheses, predict) for i in range(n)]


def prediction_matrix(n: int, hypotheses: Sequence[Any], predict: Predictor) -> np.ndarray:
    """Boolean matrix of shape (len(hypotheses), n); row per hypothesis."""
    rows = [[bool(predict(hypothesis, i)) for i in range(n)] for hypothesis in hypotheses]
    return np.array(rows, dtype=bool).reshape(len(hypotheses), n)


def correlation_matrix(n: int, hypotheses: Sequence[Any], predict: Predictor) -> np.ndarray:
    """
    Pairwise agreement counts between all experiments.

    Entry [i, j] equals `guess_count_correlation(i, j, hypotheses, predict)`.

    Args:
        n: Number of experiments
        hypotheses: Current population
        predict: Prediction function

    Returns:
        Symmetric integer array of shape (n, n)
    """
    agree = prediction_matrix(n, hypotheses, predict).astype(np.int64)
    disagree = 1 - agree
    return agree.T @ agree + disagree.T @ disagree
