"""Shared pytest fixtures for all test modules."""

import pytest

from rnaiforge.core.scoring import ScoringEngine
from rnaiforge.data.store import DesignStore
from rnaiforge.models.rnai import (
    Candidate,
    ConstructType,
    Design,
    DesignParameters,
    OffTargetSummary,
    RiskClassification,
    Target,
    ThermodynamicProperties,
)
from rnaiforge.utils.random_source import make_rng

# 120 nt, mixed composition, no poly-A/T runs
SAMPLE_TARGET_SEQUENCE = (
    "UGCGUCCAUCAACACGUCGGAUAACGGACUACCCUAUCCGGCUACCGCGAAUUCUCAGGCGG"
    "UUAGAAACUGUUUCACUUGUUGCUACCGUACGUCCAGCCCACAUGCCCAACUGGGUAA"
)


@pytest.fixture
def rng():
    """Seeded generator so noise draws are reproducible."""
    return make_rng(1234)


@pytest.fixture
def sample_target():
    return Target(name="sample", sequence=SAMPLE_TARGET_SEQUENCE, organism="human")


@pytest.fixture
def repeat_target():
    """Forty bases of ``ATCG`` repeats."""
    return Target(name="repeat", sequence="ATCG" * 10)


@pytest.fixture
def default_parameters():
    return DesignParameters()


@pytest.fixture
def scored_design(rng, sample_target, default_parameters):
    """A scored siRNA taken verbatim from the sample target."""
    guide = SAMPLE_TARGET_SEQUENCE[10:31]
    candidate = Candidate(
        id="sample_11_31",
        construct_type=ConstructType.SIRNA,
        position=11,
        guide_sequence=guide,
        passenger_sequence="".join({"A": "U", "U": "A", "G": "C", "C": "G"}[b] for b in guide),
        full_sequence=f"{guide}UU",
    )
    return ScoringEngine(rng).score(candidate, sample_target, default_parameters)


@pytest.fixture
def make_design():
    """Factory for persisted designs with chosen scores."""

    def _make(
        design_id: int = 1,
        specificity: float = 0.8,
        efficacy: float = 0.7,
        asymmetry: float = 0.2,
        off_targets: int = 2,
        guide: str = "GCAUGCUAGCUAGGCAUCGAU",
    ) -> Design:
        return Design(
            id=f"design_{design_id}",
            design_id=design_id,
            target_id=1,
            construct_type=ConstructType.SIRNA,
            position=1,
            guide_sequence=guide,
            passenger_sequence=None,
            full_sequence=guide,
            specificity_score=specificity,
            efficacy_prediction=efficacy,
            thermodynamic_properties=ThermodynamicProperties(
                melting_temperature=55.0,
                guide_stability=4.5,
                passenger_stability=4.5,
                asymmetry_score=asymmetry,
                internal_stability=4.5,
                seed_stability=3.0,
            ),
            off_target_analysis=OffTargetSummary(
                total_predicted_targets=off_targets,
                high_confidence_targets=0,
                seed_matches=0,
                analysis_timestamp="2024-01-01T00:00:00+00:00",
                risk_classification=RiskClassification.from_specificity(specificity),
            ),
        )

    return _make


@pytest.fixture
def store(tmp_path):
    """Store mirroring records into a temporary directory."""
    return DesignStore(tmp_path / "store")


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(config, items):
    """Auto-assign tier markers based on test type.

    Tier hierarchy:
    - dev: Fast unit tests for development iteration
    - ci: Smoke tests for CI/CD
    - release: Integration tests and heavy workloads for release validation
    """
    for item in items:
        marker_names = {mark.name for mark in item.iter_markers()}

        # Smoke tests → CI tier
        if "smoke" in marker_names:
            if "ci" not in marker_names:
                item.add_marker(pytest.mark.ci)
            continue

        # Heavy workloads → Release tier
        if marker_names & {"integration", "slow"}:
            if "release" not in marker_names:
                item.add_marker(pytest.mark.release)
            continue

        # Unit tests → Dev tier
        if "unit" in marker_names:
            if "dev" not in marker_names:
                item.add_marker(pytest.mark.dev)
            continue

        # Default: untagged tests → Dev tier
        if "dev" not in marker_names and "release" not in marker_names and "ci" not in marker_names:
            item.add_marker(pytest.mark.dev)
