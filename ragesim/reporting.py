"""Summaries of finished simulations: DPS histogram, damage time lapse and text reports."""

from __future__ import annotations

from typing import Iterable, Mapping, Protocol

HISTOGRAM_BINS = 1000
"""Number of bins of the DPS histogram."""


class DamageInstance(Protocol):
    damage_source: int
    time_stamp: float
    damage: float


def histogram_bins(resolution: int, count: int = HISTOGRAM_BINS) -> tuple[list[int], list[int]]:
    """Empty DPS histogram: bin lower edges and zeroed counts."""
    if count < 0:
        raise ValueError("a histogram cannot have a negative number of bins")
    return [i * resolution for i in range(count)], [0] * count


def prune_histogram(hist_x: list[int], hist_y: list[int]) -> tuple[list[int], list[int]]:
    """Drop the empty bins at both ends of a histogram."""
    if len(hist_x) != len(hist_y):
        raise ValueError("histogram edges and counts differ in length")
    filled = [i for i, count in enumerate(hist_y) if count != 0]
    if not filled:
        return [], []
    start, end = filled[0], filled[-1] + 1
    return hist_x[start:end], hist_y[start:end]


def empty_time_lapse(sim_time_ms: int, resolution: int, n_sources: int) -> list[list[float]]:
    """One row of zeroed time buckets for every damage source."""
    if resolution <= 0:
        raise ValueError("time lapse resolution must be positive")
    buckets = sim_time_ms // resolution + 1
    return [[0.0] * buckets for _ in range(n_sources)]


def add_to_time_lapse(time_lapse: list[list[float]], damage_instances: Iterable[DamageInstance],
                      resolution: int) -> list[list[float]]:
    """Add every damage instance to the bucket of its source and time; returns ``time_lapse``."""
    for instance in damage_instances:
        source = int(instance.damage_source)
        bucket = int(instance.time_stamp / resolution)
        if not 0 <= source < len(time_lapse):
            raise IndexError(f"damage source {source} is outside the time lapse")
        row = time_lapse[source]
        if not 0 <= bucket < len(row):
            raise IndexError(f"time stamp {instance.time_stamp} is outside the time lapse")
        row[bucket] += instance.damage
    return time_lapse


def normalize_time_lapse(time_lapse: list[list[float]], n_batches: int) -> list[list[float]]:
    """Turn summed damage into the average per fight; returns ``time_lapse``."""
    if n_batches <= 0:
        raise ValueError("the number of fights must be positive")
    for row in time_lapse:
        row[:] = [value / n_batches for value in row]
    return time_lapse


def aura_uptime_lines(aura_uptimes: Mapping[str, float], n_batches: int, sim_time: float,
                      flurry_uptime: float = 0.0, oh_queued_uptime: float = 0.0,
                      rampage_uptime: float = 0.0) -> list[str]:
    """Report lines of the form ``"<aura> <percent>"``.

    ``aura_uptimes`` holds total seconds over all fights; the other uptimes are
    fractions and are listed only when non-zero.
    """
    total_sim_time = n_batches * sim_time
    if total_sim_time <= 0:
        raise ValueError("the total simulated time must be positive")
    lines = [f"{name} {100 * seconds / total_sim_time:f}" for name, seconds in aura_uptimes.items()]
    extras = (
        ("Flurry", flurry_uptime),
        ("'Heroic_strike_bug'", oh_queued_uptime),
        ("Rampage", rampage_uptime),
    )
    lines.extend(f"{name} {100 * uptime:f}" for name, uptime in extras if uptime != 0.0)
    return lines


def proc_statistic_lines(proc_data: Mapping[str, int], n_batches: int) -> list[str]:
    """Report lines of the form ``"<effect> <average procs per fight>"``."""
    if n_batches <= 0:
        raise ValueError("the number of fights must be positive")
    return [f"{name} {count / n_batches:f}" for name, count in proc_data.items()]