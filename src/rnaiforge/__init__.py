"""rnaiforge: heuristic RNAi reagent design, validation and benchmarking toolkit."""

__version__ = "0.3.0"
__author__ = "rnaiforge developers"

from rnaiforge.core.benchmark import BenchmarkEngine
from rnaiforge.core.design import RNAiDesigner, select_designs
from rnaiforge.core.generator import CandidateGenerator
from rnaiforge.core.scoring import ScoringEngine
from rnaiforge.core.simulation import ExperimentSimulator
from rnaiforge.core.validator import DesignValidator
from rnaiforge.models.rnai import ConstructType, DesignParameters, ScoredDesign, Target

__all__ = [
    "__version__",
    "BenchmarkEngine",
    "CandidateGenerator",
    "ConstructType",
    "DesignParameters",
    "DesignValidator",
    "ExperimentSimulator",
    "RNAiDesigner",
    "ScoredDesign",
    "ScoringEngine",
    "Target",
    "select_designs",
]
