from __future__ import annotations

import argparse
import csv
import json
import logging
import math
from pathlib import Path
from typing import Optional, Sequence

from ..config import AppConfig
from ..flock import Flock
from ..rng import DeterministicRng
from ..spawn import populate_random
from ..types.metrics import StepMetrics

logger = logging.getLogger(__name__)

_HEADER = [
    "tick",
    "population",
    "neighbor_checks",
    "neighbor_links",
    "isolated",
    "avg_speed",
    "min_speed",
    "max_speed",
    "centroid_x",
    "centroid_y",
    "destination_distance",
    "tick_ms",
]


def _centroid(flock: Flock) -> tuple[float, float]:
    boids = flock.boids
    if not boids:
        return 0.0, 0.0
    count = len(boids)
    return (
        sum(boid.position.x for boid in boids) / count,
        sum(boid.position.y for boid in boids) / count,
    )


def _format_row(flock: Flock, metrics: StepMetrics, tick_ms: float) -> list[object]:
    centroid_x, centroid_y = _centroid(flock)
    destination = flock.destination
    distance = math.hypot(destination.x - centroid_x, destination.y - centroid_y) if flock.boids else 0.0
    return [
        metrics.tick,
        metrics.population,
        metrics.neighbor_checks,
        metrics.neighbor_links,
        metrics.isolated,
        f"{metrics.average_speed:.4f}",
        f"{metrics.min_speed:.4f}",
        f"{metrics.max_speed:.4f}",
        f"{centroid_x:.4f}",
        f"{centroid_y:.4f}",
        f"{distance:.4f}",
        f"{tick_ms:.3f}",
    ]


def _summary_stats(values: list[float]) -> dict[str, float]:
    if not values:
        return {"min": 0.0, "max": 0.0, "avg": 0.0}
    return {
        "min": float(min(values)),
        "max": float(max(values)),
        "avg": float(sum(values) / len(values)),
    }


def build_flock(config: AppConfig) -> Flock:
    rng = DeterministicRng(config.seed)
    flock = Flock(config.flock, rng)
    population = config.population
    populate_random(
        flock,
        population.size,
        config.window.width,
        config.window.height,
        rng,
        min_radius=population.min_radius,
        max_radius=population.max_radius,
    )
    return flock


def run_headless(
    steps: int,
    seed: Optional[int],
    log_path: Optional[Path],
    deterministic_log: bool = False,
    config_path: Optional[Path] = None,
    population: Optional[int] = None,
    destination: Optional[Sequence[float]] = None,
    summary_path: Optional[Path] = None,
) -> Flock:
    if steps < 0:
        raise ValueError(f"steps must be non-negative, got {steps}")
    config = AppConfig.from_yaml(config_path) if config_path else AppConfig()
    if seed is not None:
        config.seed = seed
    if population is not None:
        config.population.size = population

    flock = build_flock(config)
    if destination is None:
        destination = (config.window.width / 2.0, config.window.height / 2.0)
    flock.set_destination(destination)
    logger.info("Running %d steps with %d boids (seed=%s)", steps, len(flock), config.seed)

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_HEADER)

    tick_ms_series: list[float] = []
    speed_series: list[float] = []
    links_series: list[float] = []
    try:
        for _ in range(steps):
            flock.update()
            metrics = flock.metrics
            tick_ms = 0.0 if deterministic_log else metrics.step_duration_ms
            tick_ms_series.append(tick_ms)
            speed_series.append(metrics.average_speed)
            links_series.append(float(metrics.neighbor_links))
            if writer:
                writer.writerow(_format_row(flock, metrics, tick_ms))
    finally:
        if csv_file:
            csv_file.close()

    if summary_path:
        centroid_x, centroid_y = _centroid(flock)
        summary = {
            "steps": steps,
            "seed": config.seed,
            "population": len(flock),
            "snapshot_neighbors": flock.config.snapshot_neighbors,
            "deterministic_log": deterministic_log,
            "tick_ms": _summary_stats(tick_ms_series),
            "avg_speed": _summary_stats(speed_series),
            "neighbor_links": _summary_stats(links_series),
            "final_centroid": [centroid_x, centroid_y],
            "destination": [flock.destination.x, flock.destination.y],
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))

    logger.info("Finished %d steps", steps)
    return flock


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless flocking simulation")
    parser.add_argument("--steps", type=int, default=600)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("--population", type=int, default=None, help="Override the number of boids")
    parser.add_argument(
        "--destination",
        type=float,
        nargs=2,
        metavar=("X", "Y"),
        default=None,
        help="Destination point (defaults to the window center).",
    )
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write metrics")
    parser.add_argument("--summary", type=Path, default=None, help="Optional JSON file to write summary stats.")
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Write deterministic CSV (tick_ms is forced to 0.000 so identical seeds match).",
    )
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run_headless(
        args.steps,
        args.seed,
        args.log,
        deterministic_log=args.deterministic_log,
        config_path=args.config,
        population=args.population,
        destination=args.destination,
        summary_path=args.summary,
    )


if __name__ == "__main__":
    main()
