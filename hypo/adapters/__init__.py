"""hypo adapters (reference experiment providers)."""

from .types import KitError
from .circle import CircleProvider
from .number import NumberProvider

BUILTIN_PROVIDERS = {
    "circle": CircleProvider,
    "number": NumberProvider,
}

__all__ = [
    "BUILTIN_PROVIDERS",
    "CircleProvider",
    "KitError",
    "NumberProvider",
]
