"""Guess-the-circle reference adapter."""

from .kit import Circle, CircleKit, load_kit
from .provider import CircleProvider

__all__ = [
    "Circle",
    "CircleKit",
    "CircleProvider",
    "load_kit",
]
