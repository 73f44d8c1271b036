"""Small numeric helpers shared by the scoring and simulation code."""

from collections.abc import Sequence


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def clamp01(value: float) -> float:
    """Clamp a score into [0, 1]."""
    return clamp(value, 0.0, 1.0)


def safe_mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""
    return sum(values) / len(values) if values else 0.0
