"""Sequence utilities shared by generation, scoring and validation.

All helpers are case-insensitive and pure.
"""

import re

from rnaiforge.models.rnai import DesignParameters

# DNA or RNA input; complements are always emitted as RNA
_COMPLEMENT = str.maketrans({"A": "U", "T": "A", "U": "A", "G": "C", "C": "G"})

_VALID_ALPHABET = re.compile(r"^[ATCGU]+$", re.IGNORECASE)
_SIMPLE_REPEAT = re.compile(r"(.{3,})\1")
_POLY_AT_RUN = re.compile(r"AAAA|TTTT", re.IGNORECASE)

SEED_START = 1  # 0-based index of guide position 2
SEED_END = 8  # exclusive; covers positions 2-8
SEED_LENGTH = SEED_END - SEED_START


def complement(sequence: str) -> str:
    """Base-wise complement without reversal; unknown characters pass through."""
    return sequence.upper().translate(_COMPLEMENT)


def reverse_complement(sequence: str) -> str:
    return complement(sequence)[::-1]


def gc_fraction(sequence: str) -> float:
    """Fraction of G/C bases, 0.0 for an empty sequence."""
    if not sequence:
        return 0.0
    upper = sequence.upper()
    return (upper.count("G") + upper.count("C")) / len(upper)


def is_valid_alphabet(sequence: str) -> bool:
    """True for a non-empty sequence over A/T/C/G/U."""
    return bool(sequence) and bool(_VALID_ALPHABET.match(sequence))


def has_simple_repeat(sequence: str) -> bool:
    """Detect an immediately repeated substring of length >= 3 (e.g. ``ATCATC``)."""
    return bool(_SIMPLE_REPEAT.search(sequence.upper()))


def has_poly_run(sequence: str) -> bool:
    """Detect a run of four or more A or T bases."""
    return bool(_POLY_AT_RUN.search(sequence))


def seed_region(sequence: str) -> str:
    """Guide positions 2-8, or an empty string for guides shorter than 8 nt."""
    if len(sequence) < SEED_END:
        return ""
    return sequence[SEED_START:SEED_END]


def passes_prefilter(window: str, parameters: DesignParameters) -> bool:
    """Pre-filter applied to every window before a construct is assembled."""
    gc = gc_fraction(window)
    gc_range = parameters.gc_content_range
    if gc < gc_range.min or gc > gc_range.max:
        return False

    if parameters.filter_repeats and has_simple_repeat(window):
        return False

    return not has_poly_run(window)
