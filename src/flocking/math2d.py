from __future__ import annotations

import math

from pygame.math import Vector2


def _safe_normalize(vector: Vector2, epsilon: float) -> Vector2:
    magnitude = math.hypot(vector.x, vector.y)
    if magnitude <= epsilon:
        return Vector2()
    inv = 1.0 / magnitude
    return Vector2(vector.x * inv, vector.y * inv)


def _clamp_speed(velocity: Vector2, min_speed: float, max_speed: float, epsilon: float) -> Vector2:
    # epsilon keeps the divisor positive and lands slightly inside the band
    speed = math.hypot(velocity.x, velocity.y)
    if speed > max_speed:
        return velocity * (max_speed / (speed + epsilon))
    if speed < min_speed:
        return velocity * (min_speed / (speed + epsilon))
    return Vector2(velocity)


def _is_finite_vector(vector: Vector2) -> bool:
    return math.isfinite(vector.x) and math.isfinite(vector.y)
