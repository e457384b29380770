"""
SPI discovery for experiment providers.
"""

from __future__ import annotations

from importlib import metadata
from typing import Dict, Type

from .experiment_provider import ExperimentProvider

ENTRY_POINT_GROUP = "hypo.experiments"


def discover_providers() -> Dict[str, Type[ExperimentProvider]]:
    try:
        eps = metadata.entry_points()
    except Exception:
        return {}

    if hasattr(eps, "select"):
        group = eps.select(group=ENTRY_POINT_GROUP)
    else:
        group = eps.get(ENTRY_POINT_GROUP, [])

    return {ep.name: ep.load() for ep in group}
