"""Tests for design orchestration and selection."""

import pandas as pd
import pytest

from rnaiforge.core.design import RNAiDesigner, select_designs
from rnaiforge.core.sequence import complement
from rnaiforge.errors import InvalidArgumentError
from rnaiforge.models.rnai import ConstructType, DesignParameters
from rnaiforge.utils.random_source import make_rng


@pytest.mark.unit
class TestSelection:
    """Ranking, truncation and the run summary."""

    def test_ranked_best_first_and_truncated(self, make_design):
        designs = [make_design(i, specificity=s) for i, s in enumerate([0.9, 0.5, 0.7, 0.3], start=1)]
        selection = select_designs(designs, max_designs=2)

        assert [d.id for d in selection.designs] == ["design_1", "design_3"]
        assert selection.summary.recommended_id == "design_1"

    def test_summary_covers_all_candidates(self, make_design):
        """Summary statistics are computed over every scored candidate, not the selected subset."""
        designs = [make_design(i, specificity=s) for i, s in enumerate([0.9, 0.5, 0.7, 0.3], start=1)]
        summary = select_designs(designs, max_designs=1).summary

        assert summary.total_evaluated == 4
        assert summary.passing_filters == 2
        assert summary.average_specificity == pytest.approx(0.6)

    def test_ties_keep_input_order(self, make_design):
        designs = [make_design(1, specificity=0.8), make_design(2, specificity=0.8), make_design(3, specificity=0.9)]
        selection = select_designs(designs, max_designs=3)
        assert [d.id for d in selection.designs] == ["design_3", "design_1", "design_2"]

    def test_empty_input(self):
        selection = select_designs([], max_designs=5)
        assert selection.designs == []
        assert selection.summary.total_evaluated == 0
        assert selection.summary.average_specificity == 0.0
        assert selection.summary.recommended_id is None

    def test_zero_max_designs(self, make_design):
        selection = select_designs([make_design(1)], max_designs=0)
        assert selection.designs == []
        assert selection.summary.total_evaluated == 1


@pytest.mark.unit
class TestRNAiDesigner:
    """Full generate, score and select pipeline."""

    def test_sirna_design_against_sample_target(self, sample_target):
        """21-nt siRNAs with complementary passengers, sorted by specificity."""
        designer = RNAiDesigner(DesignParameters(filter_repeats=False), rng=make_rng(1))
        result = designer.design(sample_target, max_designs=5)

        assert 0 < len(result.designs) <= 5
        for design in result.designs:
            assert len(design.guide_sequence) == 21
            assert design.passenger_sequence == complement(design.guide_sequence)
        scores = [d.specificity_score for d in result.designs]
        assert scores == sorted(scores, reverse=True)
        assert result.summary.total_evaluated == len(result.candidates)
        assert result.summary.recommended_id == result.designs[0].id

    def test_verbatim_windows_are_fully_specific(self, sample_target):
        result = RNAiDesigner(DesignParameters(), rng=make_rng(2)).design(sample_target, max_designs=3)
        assert all(c.specificity_score == 1.0 for c in result.candidates)
        assert result.summary.passing_filters == result.summary.total_evaluated

    def test_repeat_target_without_repeat_filter(self, repeat_target):
        """ATCG x 10 with the repeat filter off yields 21-nt siRNAs with complementary passengers."""
        designer = RNAiDesigner(DesignParameters(length=21, filter_repeats=False), rng=make_rng(3))
        result = designer.design(repeat_target, max_designs=3)

        assert 0 < len(result.designs) <= 3
        assert all(len(c.guide_sequence) == 21 for c in result.candidates)
        assert all(d.passenger_sequence == complement(d.guide_sequence) for d in result.designs)
        scores = [d.specificity_score for d in result.designs]
        assert scores == sorted(scores, reverse=True)

    def test_fully_filtered_target_returns_empty_result(self, repeat_target):
        """A repeat-only target yields no designs rather than an error."""
        result = RNAiDesigner(DesignParameters(), rng=make_rng(3)).design(repeat_target, max_designs=5)
        assert result.designs == []
        assert result.candidates == []
        assert result.summary.total_evaluated == 0
        assert result.summary.recommended_id is None

    def test_accepts_raw_sequence(self, sample_target):
        result = RNAiDesigner(DesignParameters(), rng=make_rng(4)).design(sample_target.sequence, max_designs=2)
        assert result.target_name == "target"
        assert len(result.designs) <= 2

    def test_design_from_sequence_names_target(self, sample_target):
        designer = RNAiDesigner(DesignParameters(), rng=make_rng(4))
        result = designer.design_from_sequence(sample_target.sequence, name="GENE1")
        assert result.target_name == "GENE1"
        assert all(c.id.startswith("GENE1_") for c in result.candidates)

    def test_construct_type_is_validated(self):
        with pytest.raises(InvalidArgumentError):
            RNAiDesigner(DesignParameters(), construct_type="ribozyme")

    def test_shrna_designs(self, sample_target):
        designer = RNAiDesigner(DesignParameters(length=19), ConstructType.SHRNA, rng=make_rng(5))
        result = designer.design(sample_target, max_designs=3)
        assert all(d.loop_sequence is not None for d in result.designs)
        assert result.construct_type is ConstructType.SHRNA

    def test_seeded_runs_are_reproducible(self, sample_target):
        params = DesignParameters(filter_repeats=False)
        first = RNAiDesigner(params, rng=make_rng(11)).design(sample_target, max_designs=5)
        second = RNAiDesigner(params, rng=make_rng(11)).design(sample_target, max_designs=5)
        assert [d.id for d in first.designs] == [d.id for d in second.designs]
        assert [d.efficacy_prediction for d in first.designs] == [d.efficacy_prediction for d in second.designs]

    def test_tool_versions_recorded(self, sample_target):
        result = RNAiDesigner(DesignParameters(), rng=make_rng(6)).design(sample_target, max_designs=1)
        assert {"python", "biopython", "numpy", "rnaiforge"} <= set(result.tool_versions)


@pytest.mark.unit
class TestDesignResultExport:
    """Tabular export of a design run."""

    @pytest.fixture
    def result(self, sample_target):
        return RNAiDesigner(DesignParameters(), rng=make_rng(8)).design(sample_target, max_designs=3)

    def test_dataframe_has_all_candidates(self, result):
        df = result.to_dataframe()
        assert len(df) == len(result.candidates)
        assert {"guide_sequence", "specificity_score", "risk_classification"} <= set(df.columns)

    def test_selected_only(self, result):
        assert len(result.to_dataframe(selected_only=True)) == len(result.designs)

    def test_save_csv(self, result, tmp_path):
        path = tmp_path / "designs.csv"
        result.save_csv(str(path))
        df = pd.read_csv(path)
        assert list(df["id"]) == [c.id for c in result.candidates]

    def test_empty_result_dataframe_has_columns(self, repeat_target):
        result = RNAiDesigner(DesignParameters(), rng=make_rng(9)).design(repeat_target, max_designs=2)
        df = result.to_dataframe()
        assert df.empty
        assert "guide_sequence" in df.columns

    def test_summary_dict(self, result):
        summary = result.get_summary()
        assert summary["target"] == "sample"
        assert summary["construct_type"] == "siRNA"
        assert summary["selected_designs"] == len(result.designs)


@pytest.mark.unit
class TestDesignFromFile:
    """FASTA driven design runs."""

    def test_one_result_per_record(self, tmp_path, sample_target):
        fasta = tmp_path / "targets.fasta"
        fasta.write_text(f">GENE_A\n{sample_target.sequence}\n>GENE_B\n{sample_target.sequence[::-1]}\n")

        results = RNAiDesigner(DesignParameters(), rng=make_rng(10)).design_from_file(fasta, max_designs=2)

        assert [r.target_name for r in results] == ["GENE_A", "GENE_B"]

    def test_empty_file_raises(self, tmp_path):
        fasta = tmp_path / "empty.fasta"
        fasta.write_text("")
        with pytest.raises(InvalidArgumentError):
            RNAiDesigner(DesignParameters()).design_from_file(fasta)
