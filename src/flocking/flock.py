from __future__ import annotations

import logging
import math
from time import perf_counter
from typing import List, Optional, Sequence, Tuple

from pygame.math import Vector2

from .boid import Boid, Color
from .config import FlockConfig
from .math2d import _clamp_speed, _safe_normalize
from .rng import DeterministicRng
from .types.metrics import StepMetrics

logger = logging.getLogger(__name__)

# Floor for the repulsion exponent; deep overlaps saturate at 2**60.
_MIN_REPULSION_EXPONENT = -60.0


class Flock:
    """A set of boids steering together toward a shared destination.

    Each :meth:`update` scans every pair of boids, so the cost is quadratic in
    the population. With ``snapshot_neighbors`` enabled (the default) all new
    velocities are computed from a copy of the flock taken at the start of the
    step and positions are integrated in a second pass, which makes the result
    independent of boid order. Disabling it reads neighbors live and moves each
    boid right after its own velocity changes.
    """

    def __init__(self, config: Optional[FlockConfig] = None, rng: Optional[DeterministicRng] = None):
        self._config = config if config is not None else FlockConfig()
        self._rng = rng if rng is not None else DeterministicRng()
        self._boids: List[Boid] = []
        self._destination = Vector2()
        self._tick = 0
        self._metrics: StepMetrics | None = None

    @property
    def boids(self) -> Tuple[Boid, ...]:
        return tuple(self._boids)

    @property
    def destination(self) -> Vector2:
        return Vector2(self._destination)

    @property
    def config(self) -> FlockConfig:
        return self._config

    @property
    def metrics(self) -> StepMetrics | None:
        return self._metrics

    def __len__(self) -> int:
        return len(self._boids)

    def add_boid(self, x: float, y: float, radius: float, color: Color) -> Boid:
        boid = Boid(position=Vector2(x, y), radius=radius, color=color)
        self._boids.append(boid)
        return boid

    def set_destination(self, point: Sequence[float]) -> None:
        self._destination = Vector2(point[0], point[1])
        logger.debug("Destination set to (%.1f, %.1f)", self._destination.x, self._destination.y)

    def clear(self) -> None:
        logger.debug("Clearing flock of %d boids", len(self._boids))
        self._boids.clear()

    def update(self) -> None:
        start = perf_counter()
        config = self._config
        boids = self._boids

        if config.snapshot_neighbors:
            neighbors: Sequence[Boid] = [boid.copy() for boid in boids]
        else:
            neighbors = boids

        neighbor_checks = 0
        neighbor_links = 0
        isolated = 0
        for index, boid in enumerate(boids):
            velocity, links = self._steer(index, boid, neighbors)
            boid.velocity.update(velocity)
            neighbor_checks += len(neighbors) - 1
            neighbor_links += links
            if links == 0:
                isolated += 1
            if not config.snapshot_neighbors:
                boid.move()

        if config.snapshot_neighbors:
            for boid in boids:
                boid.move()

        self._metrics = self._collect_metrics(neighbor_checks, neighbor_links, isolated, start)
        self._tick += 1

    def _steer(self, index: int, boid: Boid, neighbors: Sequence[Boid]) -> tuple[Vector2, int]:
        config = self._config
        position = Vector2(boid.position)
        velocity = Vector2(boid.velocity)
        radius = boid.radius

        separation = Vector2()
        avg_velocity = Vector2()
        avg_position = Vector2()
        neighborhood_size = 0

        for other_index, other in enumerate(neighbors):
            if other_index == index:
                continue
            to_other = other.position - position
            length = to_other.length()
            surface_distance = length - (radius + other.radius)
            if surface_distance < config.visual_range:
                length = max(length, config.distance_epsilon)
                falloff = math.pow(2.0, max(surface_distance, _MIN_REPULSION_EXPONENT))
                separation -= to_other / (length * falloff)
                avg_velocity += other.velocity
                avg_position += other.position
                neighborhood_size += 1

        velocity += separation * config.avoid_factor
        if neighborhood_size > 0:
            avg_velocity /= neighborhood_size
            avg_position /= neighborhood_size
            velocity += (avg_velocity - velocity) * config.matching_factor
            velocity += (avg_position - position) * config.centering_factor

        to_destination = _safe_normalize(self._destination - position, config.distance_epsilon)
        destination_velocity = to_destination * config.max_speed
        velocity = velocity * (1.0 - config.bias) + destination_velocity * config.bias

        noise = config.noise_strength
        velocity.x += self._rng.next_range(-1.0, 1.0) * noise
        velocity.y += self._rng.next_range(-1.0, 1.0) * noise

        velocity = _clamp_speed(velocity, config.min_speed, config.max_speed, config.speed_epsilon)
        return velocity, neighborhood_size

    def _collect_metrics(self, neighbor_checks: int, neighbor_links: int, isolated: int, start: float) -> StepMetrics:
        population = len(self._boids)
        if population:
            speeds = [boid.velocity.length() for boid in self._boids]
            average_speed = sum(speeds) / population
            min_speed = min(speeds)
            max_speed = max(speeds)
        else:
            average_speed = min_speed = max_speed = 0.0
        return StepMetrics(
            tick=self._tick,
            population=population,
            neighbor_checks=neighbor_checks,
            neighbor_links=neighbor_links,
            isolated=isolated,
            average_speed=average_speed,
            min_speed=min_speed,
            max_speed=max_speed,
            step_duration_ms=(perf_counter() - start) * 1000.0,
        )
