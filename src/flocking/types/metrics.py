from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class StepMetrics:
    tick: int
    population: int
    neighbor_checks: int
    neighbor_links: int
    isolated: int
    average_speed: float
    min_speed: float
    max_speed: float
    step_duration_ms: float = 0.0
