"""
Hypotheses about a hidden number.

Each hypothesis is a predicate over probe values, built from `le` thresholds
combined with `not`, `and` and `or`. Kits write them as nested YAML mappings:

    {le: 3}
    {not: {le: 3}}
    {and: [{le: 5}, {not: {le: 3}}]}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from ..types import KitError

MAX_VALUE = 255


@dataclass(frozen=True)
class Le:
    value: int

    def predict(self, val: int) -> bool:
        return val <= self.value

    def __str__(self) -> str:
        return f"le {self.value}"


@dataclass(frozen=True)
class Not:
    inner: "NumberHypothesis"

    def predict(self, val: int) -> bool:
        return not self.inner.predict(val)

    def __str__(self) -> str:
        return f"not {self.inner}"


@dataclass(frozen=True)
class And:
    left: "NumberHypothesis"
    right: "NumberHypothesis"

    def predict(self, val: int) -> bool:
        return self.left.predict(val) and self.right.predict(val)

    def __str__(self) -> str:
        return f"and({self.left}, {self.right})"


@dataclass(frozen=True)
class Or:
    left: "NumberHypothesis"
    right: "NumberHypothesis"

    def predict(self, val: int) -> bool:
        return self.left.predict(val) or self.right.predict(val)

    def __str__(self) -> str:
        return f"or({self.left}, {self.right})"


NumberHypothesis = Union[Le, Not, And, Or]


def parse_hypothesis(data: Any) -> NumberHypothesis:
    """Build a hypothesis from its YAML form; raises KitError on bad input."""
    if not isinstance(data, dict) or len(data) != 1:
        raise KitError(f"Hypothesis must be a single-key mapping, got {data!r}.")
    op, arg = next(iter(data.items()))
    if op == "le":
        if isinstance(arg, bool) or not isinstance(arg, int) or not 0 <= arg <= MAX_VALUE:
            raise KitError(f"'le' expects an integer in 0..{MAX_VALUE}, got {arg!r}.")
        return Le(arg)
    if op == "not":
        return Not(parse_hypothesis(arg))
    if op in ("and", "or"):
        if not isinstance(arg, list) or len(arg) != 2:
            raise KitError(f"'{op}' expects a list of two hypotheses, got {arg!r}.")
        left, right = (parse_hypothesis(item) for item in arg)
        return And(left, right) if op == "and" else Or(left, right)
    raise KitError(f"Unknown hypothesis operator '{op}'.")
