"""Number-guessing reference adapter."""

from .hypothesis import And, Le, Not, NumberHypothesis, Or, parse_hypothesis
from .kit import NumberKit, load_kit
from .provider import NumberProvider

__all__ = [
    "And",
    "Le",
    "Not",
    "NumberHypothesis",
    "NumberKit",
    "NumberProvider",
    "Or",
    "load_kit",
    "parse_hypothesis",
]
