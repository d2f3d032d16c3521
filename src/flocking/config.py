from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


@dataclass
class FlockConfig:
    avoid_factor: float = 0.5
    visual_range: float = 20.0
    centering_factor: float = 0.0005
    matching_factor: float = 0.05
    max_speed: float = 6.0
    min_speed: float = 1.0
    bias: float = 0.005
    noise_strength: float = 0.1
    # Floor for neighbor distance and destination normalization.
    distance_epsilon: float = 1e-5
    # Added to the speed in the clamp divisor.
    speed_epsilon: float = 1e-2
    # False reads neighbors live while they are being updated in place.
    snapshot_neighbors: bool = True

    def __post_init__(self) -> None:
        if self.max_speed <= 0:
            raise ValueError(f"max_speed must be positive, got {self.max_speed}")
        if self.min_speed < 0 or self.min_speed > self.max_speed:
            raise ValueError(f"min_speed must lie in [0, max_speed], got {self.min_speed}")
        if self.visual_range <= 0:
            raise ValueError(f"visual_range must be positive, got {self.visual_range}")
        if self.distance_epsilon <= 0 or self.speed_epsilon <= 0:
            raise ValueError("distance_epsilon and speed_epsilon must be positive")


@dataclass
class WindowConfig:
    width: int = 1524
    height: int = 1024
    title: str = "Flocking Demo"
    frame_rate: int = 60
    background: tuple[int, int, int] = (0, 0, 0)


@dataclass
class PopulationConfig:
    size: int = 300
    min_radius: int = 2
    max_radius: int = 8


@dataclass
class AppConfig:
    seed: Optional[int] = None
    flock: FlockConfig = field(default_factory=FlockConfig)
    window: WindowConfig = field(default_factory=WindowConfig)
    population: PopulationConfig = field(default_factory=PopulationConfig)

    @staticmethod
    def from_yaml(path: Path) -> "AppConfig":
        data = yaml.safe_load(Path(path).read_text()) or {}
        return load_config(data)


def load_config(raw: dict) -> AppConfig:
    window_raw = dict(raw.get("window", {}))
    if "background" in window_raw:
        window_raw["background"] = tuple(int(channel) for channel in window_raw["background"])
    flock = FlockConfig(**raw.get("flock", {}))
    window = WindowConfig(**window_raw)
    population = PopulationConfig(**raw.get("population", {}))
    app_values = {k: v for k, v in raw.items() if k not in {"flock", "window", "population"}}
    return AppConfig(flock=flock, window=window, population=population, **app_values)
