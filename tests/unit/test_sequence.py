"""Tests for sequence utilities."""

import pytest

from rnaiforge.core.sequence import (
    complement,
    gc_fraction,
    has_poly_run,
    has_simple_repeat,
    is_valid_alphabet,
    passes_prefilter,
    reverse_complement,
    seed_region,
)
from rnaiforge.models.rnai import DesignParameters, GCContentRange


@pytest.mark.unit
class TestComplement:
    """Base-wise complement mapping."""

    def test_dna_and_rna_inputs_complement_to_rna(self):
        assert complement("ATGC") == "UACG"
        assert complement("AUGC") == "UACG"

    def test_lowercase_input(self):
        assert complement("augc") == "UACG"

    @pytest.mark.parametrize("sequence", ["AUGC", "GGGCCCAAAUUU", "A", "", "UAGGCAUCGAUCGGAUCCGAU"])
    def test_involution_over_rna_alphabet(self, sequence):
        assert complement(complement(sequence)) == sequence
        assert len(complement(sequence)) == len(sequence)

    def test_unknown_characters_pass_through(self):
        assert complement("ANG") == "UNC"

    def test_reverse_complement(self):
        assert reverse_complement("AAGC") == "GCUU"


@pytest.mark.unit
class TestComposition:
    """GC fraction and low-complexity detectors."""

    def test_gc_fraction(self):
        assert gc_fraction("GCGC") == 1.0
        assert gc_fraction("ATGC") == 0.5
        assert gc_fraction("") == 0.0

    def test_simple_repeat(self):
        assert has_simple_repeat("GATCATCG")
        assert has_simple_repeat("ATCGATCG")
        assert not has_simple_repeat("GCAUGCUAG")

    def test_poly_run(self):
        assert has_poly_run("GCAAAAG")
        assert has_poly_run("gcttttg")
        assert not has_poly_run("GCAAAG")
        # only A/T runs are rejected
        assert not has_poly_run("GGGGCCCC")

    def test_alphabet(self):
        assert is_valid_alphabet("ATCGU")
        assert is_valid_alphabet("atcgu")
        assert not is_valid_alphabet("ATCGN")
        assert not is_valid_alphabet("")

    def test_seed_region(self):
        assert seed_region("ABCDEFGHIJ") == "BCDEFGH"
        assert seed_region("ABCDEFG") == ""


@pytest.mark.unit
class TestPrefilter:
    """Window pre-filter."""

    def test_clean_window_passes(self):
        window = "AACACGUCGGAUAACGGACUA"
        params = DesignParameters()
        assert passes_prefilter(window, params)
        assert passes_prefilter(window, params) == passes_prefilter(window, params)

    def test_gc_out_of_range(self):
        params = DesignParameters(gc_content_range=GCContentRange(min=0.6, max=0.7))
        assert not passes_prefilter("UAGGCAUCGAUCGGAUCCGAU", params)

    def test_repeat_filter_is_optional(self):
        window = "ATCG" * 5 + "A"
        assert not passes_prefilter(window, DesignParameters(filter_repeats=True))
        assert passes_prefilter(window, DesignParameters(filter_repeats=False))

    def test_poly_a_rejected(self):
        assert not passes_prefilter("A" * 21, DesignParameters(gc_content_range=GCContentRange(min=0.0, max=1.0)))
