"""Data handling: persistence and FASTA input/output."""

from .fasta import read_targets, write_candidates_fasta
from .store import DesignStore

__all__ = [
    "DesignStore",
    "read_targets",
    "write_candidates_fasta",
]
