"""
Number-guessing kit loader.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from ..types import load_kit_model, resolve_kit_path
from .hypothesis import MAX_VALUE, NumberHypothesis, parse_hypothesis

DEFAULT_KIT = Path(__file__).parent / "kits" / "default.yaml"


@dataclass(frozen=True)
class NumberKit:
    experiments: int  # probe values 0..experiments-1
    hypotheses: List[NumberHypothesis]
    answer: Optional[NumberHypothesis]


class NumberKitModel(BaseModel):
    experiments: int = Field(gt=0, le=MAX_VALUE + 1)
    hypotheses: List[Any]
    answer: Optional[Any] = None


def load_kit(path: Optional[str] = None) -> NumberKit:
    model = load_kit_model(resolve_kit_path(path, DEFAULT_KIT), NumberKitModel)
    return NumberKit(
        experiments=model.experiments,
        hypotheses=[parse_hypothesis(item) for item in model.hypotheses],
        answer=parse_hypothesis(model.answer) if model.answer is not None else None,
    )
