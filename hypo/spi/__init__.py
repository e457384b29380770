"""SPI surface for hypo adapters."""

from .adapter import ENTRY_POINT_GROUP, discover_providers
from .experiment_provider import ExperimentProvider
from .protocols import Oracle, Predictor

__all__ = [
    "ENTRY_POINT_GROUP",
    "ExperimentProvider",
    "Oracle",
    "Predictor",
    "discover_providers",
]
