"""
Guess-the-circle kit loader.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from ..types import load_kit_model, resolve_kit_path

DEFAULT_KIT = Path(__file__).parent / "kits" / "default.yaml"

Point = Tuple[float, float]


@dataclass(frozen=True)
class Circle:
    pos: Point
    rad: float

    def inside(self, point: Point) -> bool:
        """Strictly inside; points on the boundary are outside."""
        dx = point[0] - self.pos[0]
        dy = point[1] - self.pos[1]
        return dx * dx + dy * dy < self.rad * self.rad


@dataclass(frozen=True)
class CircleKit:
    hypotheses: List[Circle]
    probes: List[Point]
    answer: Optional[Circle]


class CircleModel(BaseModel):
    pos: Tuple[float, float]
    rad: float = Field(gt=0)


class CircleKitModel(BaseModel):
    hypotheses: List[CircleModel]
    probes: List[Tuple[float, float]]
    answer: Optional[CircleModel] = None


def load_kit(path: Optional[str] = None) -> CircleKit:
    model = load_kit_model(resolve_kit_path(path, DEFAULT_KIT), CircleKitModel)
    return CircleKit(
        hypotheses=[_circle(c) for c in model.hypotheses],
        probes=[tuple(p) for p in model.probes],
        answer=_circle(model.answer) if model.answer is not None else None,
    )


def _circle(model: CircleModel) -> Circle:
    return Circle(pos=tuple(model.pos), rad=model.rad)
