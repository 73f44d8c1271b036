"""Configuration utilities for rnaiforge."""

from .defaults import (
    ALLOWED_GUIDE_LENGTHS,
    CANDIDATE_OVERSAMPLING,
    CONSTRUCT_DEFAULT_LENGTHS,
    DEFAULT_ALGORITHM_VERSION,
    DEFAULT_MAX_DESIGNS,
    MIRNA_MIMIC_MISMATCHES,
    PASSING_SPECIFICITY,
    SHRNA_LOOP,
    SIRNA_OVERHANG,
    SUCCESS_RATE_THRESHOLD,
    default_parameters,
)
from .settings import EngineSettings

__all__ = [
    "ALLOWED_GUIDE_LENGTHS",
    "CANDIDATE_OVERSAMPLING",
    "CONSTRUCT_DEFAULT_LENGTHS",
    "DEFAULT_ALGORITHM_VERSION",
    "DEFAULT_MAX_DESIGNS",
    "MIRNA_MIMIC_MISMATCHES",
    "PASSING_SPECIFICITY",
    "SHRNA_LOOP",
    "SIRNA_OVERHANG",
    "SUCCESS_RATE_THRESHOLD",
    "EngineSettings",
    "default_parameters",
]
