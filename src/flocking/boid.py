from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Tuple

from pygame.math import Vector2

from .math2d import _is_finite_vector

Color = Tuple[int, int, int]


@dataclass(slots=True)
class Boid:
    position: Vector2
    radius: float
    color: Color = (255, 0, 0)
    velocity: Vector2 = field(default_factory=Vector2)

    def __post_init__(self) -> None:
        if not (math.isfinite(self.radius) and self.radius > 0):
            raise ValueError(f"Boid radius must be positive, got {self.radius!r}")
        if not _is_finite_vector(self.position):
            raise ValueError(f"Boid position must be finite, got {tuple(self.position)!r}")

    def move(self) -> None:
        """Advance position by one frame of velocity."""
        self.position += self.velocity

    def copy(self) -> "Boid":
        return Boid(
            position=Vector2(self.position),
            radius=self.radius,
            color=self.color,
            velocity=Vector2(self.velocity),
        )
