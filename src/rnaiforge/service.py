"""Service layer: request/response operations over the engine and the store."""

from typing import Optional, Union

from rnaiforge.config.defaults import default_parameters
from rnaiforge.config.settings import EngineSettings
from rnaiforge.core.benchmark import BenchmarkEngine
from rnaiforge.core.design import RNAiDesigner
from rnaiforge.core.off_target import OffTargetAnalyzer
from rnaiforge.core.prediction import EfficiencyPredictor
from rnaiforge.core.scoring import ScoringEngine
from rnaiforge.core.sequence import complement, is_valid_alphabet
from rnaiforge.core.simulation import ExperimentSimulator
from rnaiforge.core.target_analysis import TargetAnalyzer
from rnaiforge.core.thermodynamics import ThermodynamicCalculator
from rnaiforge.core.validator import DesignValidator, assess_design, build_specificity_analysis
from rnaiforge.data.store import DesignStore
from rnaiforge.errors import InvalidArgumentError, NotFoundError, ensure_member
from rnaiforge.models.benchmark import BenchmarkResult
from rnaiforge.models.experiment import EfficiencyPrediction, ExperimentRecord
from rnaiforge.models.off_target import OffTargetAnalysisResult, OffTargetSearchParameters
from rnaiforge.models.requests import (
    BenchmarkRequest,
    DesignDetail,
    DesignRequest,
    DesignResponse,
    DesignSummary,
    ExperimentRequest,
    PredictionRequest,
    ValidationRequest,
)
from rnaiforge.models.rnai import (
    Candidate,
    ConstructType,
    Design,
    DesignAssessment,
    Target,
    TargetType,
    ValidationMethod,
    ValidationResult,
)
from rnaiforge.models.target import TargetValidationResult
from rnaiforge.models.thermodynamics import AnalysisConditions, ThermodynamicAnalysis
from rnaiforge.utils.logging_utils import configure_logging, get_logger
from rnaiforge.utils.random_source import make_rng

logger = get_logger(__name__)


class RNAiDesignService:
    """Entry point for callers that work with stored targets and designs.

    One seeded generator is shared by every component the service drives, so
    a fixed ``EngineSettings.seed`` reproduces a whole session.
    """

    def __init__(self, settings: Optional[EngineSettings] = None, store: Optional[DesignStore] = None) -> None:
        self.settings = settings or EngineSettings()
        configure_logging(self.settings.log_level)
        self.store = store or DesignStore(self.settings.store_dir)
        self.rng = make_rng(self.settings.seed)

        self.validator = DesignValidator(self.rng)
        self.simulator = ExperimentSimulator(self.rng)
        self.predictor = EfficiencyPredictor(self.rng)
        self.benchmark_engine = BenchmarkEngine(self.rng)
        self.off_target_analyzer = OffTargetAnalyzer(self.rng)
        self.target_analyzer = TargetAnalyzer(self.rng)
        self.thermodynamics = ThermodynamicCalculator()

    def register_target(
        self,
        sequence: str,
        name: str = "target",
        target_type: Union[TargetType, str] = TargetType.MRNA,
        organism: str = "unknown",
        gene_symbol: Optional[str] = None,
    ) -> Target:
        target = Target(
            name=name, sequence=sequence, target_type=target_type, organism=organism, gene_symbol=gene_symbol
        )
        return self.store.add_target(target)

    def validate_target(
        self, sequence: str, target_type: Union[TargetType, str] = TargetType.MRNA, organism: str = "unknown"
    ) -> TargetValidationResult:
        return self.target_analyzer.validate(sequence, target_type, organism)

    def design(self, request: DesignRequest) -> DesignResponse:
        """Generate, score, select and persist designs for a stored target.

        Designs that fail to persist are skipped; the summary still covers
        every scored candidate.

        Raises:
            NotFoundError: unknown target id.
            InvalidArgumentError: unsupported construct type or parameters.
        """
        target = self.store.get_target(request.target_id)
        parameters = default_parameters(request.construct_type, request.design_parameters)

        designer = RNAiDesigner(parameters, request.construct_type, rng=self.rng, num_threads=self.settings.num_threads)
        result = designer.design(target, max_designs=request.max_designs)
        saved = self.store.save_designs(result.designs, target.id, parameters)

        if len(saved) < len(result.designs):
            logger.warning(f"Persisted {len(saved)} of {len(result.designs)} selected designs for target {target.id}")

        return DesignResponse(
            designs=saved,
            summary=DesignSummary(
                total_evaluated=result.summary.total_evaluated,
                passing_filters=result.summary.passing_filters,
                average_specificity=result.summary.average_specificity,
                recommended_id=saved[0].design_id if saved else None,
            ),
        )

    def register_guide(
        self, guide: str, target_id: int, construct_type: Union[ConstructType, str] = ConstructType.SIRNA
    ) -> Design:
        """Score a user supplied guide against a stored target and persist it.

        Raises:
            NotFoundError: unknown target id.
            InvalidArgumentError: unsupported construct type or a guide outside A/T/C/G/U.
            PersistenceError: the design could not be written.
        """
        target = self.store.get_target(target_id)
        construct = ensure_member(ConstructType, construct_type)
        guide = guide.strip().upper()
        if not is_valid_alphabet(guide):
            raise InvalidArgumentError("Guide contains characters other than A, T, C, G, U")

        parameters = default_parameters(construct, {"length": len(guide)})
        candidate = Candidate(
            id=f"{target.label}_custom",
            construct_type=construct,
            guide_sequence=guide,
            passenger_sequence=None if construct is ConstructType.ANTAGOMIR else complement(guide),
            full_sequence=guide,
        )
        scored = ScoringEngine(self.rng).score(candidate, target, parameters)
        return self.store.save_design(scored, target.id, parameters)

    def validate(self, request: ValidationRequest) -> ValidationResult:
        return self.validator.validate(request.guide_sequence, request.target_sequence, request.construct_type)

    def get_design(self, design_id: int) -> DesignDetail:
        """Stored design plus a specificity analysis recomputed against its target."""
        design = self.store.get_design(design_id)
        target = self._design_target(design)
        return DesignDetail(
            design=design, analysis=build_specificity_analysis(design, target.sequence, design.design_id)
        )

    def list_designs(
        self, target_id: Optional[int] = None, construct_type: Optional[Union[ConstructType, str]] = None
    ) -> list[Design]:
        construct = ensure_member(ConstructType, construct_type) if construct_type is not None else None
        return self.store.list_designs(target_id, construct)

    def assess_design(self, design_id: int, method: Union[ValidationMethod, str]) -> DesignAssessment:
        return assess_design(self.store.get_design(design_id), method)

    def predict_efficiency(self, request: PredictionRequest) -> EfficiencyPrediction:
        design = self.store.get_design(request.design_id)
        return self.predictor.predict(
            design, cell_line=request.cell_line, include_delivery_factors=request.include_delivery_factors
        )

    def run_experiment(self, request: ExperimentRequest) -> ExperimentRecord:
        """Simulate an experiment for a stored design and record it."""
        design = self.store.get_design(request.design_id)
        parameters = request.experimental_parameters
        outcome = self.simulator.simulate(design, request.experiment_type, parameters)

        record = ExperimentRecord(
            experiment_id=self.store.next_experiment_id(),
            design_id=design.design_id,
            experiment_name=request.experiment_name,
            experiment_type=request.experiment_type,
            cell_line=parameters.cell_line,
            parameters=parameters,
            knockdown_efficiency=outcome.efficiency_metrics.target_knockdown_percentage,
            viability_impact=outcome.safety_profile.cell_viability_impact,
            outcome=outcome,
        )
        return self.store.add_experiment(record)

    def benchmark(self, request: BenchmarkRequest) -> BenchmarkResult:
        designs = self.store.get_designs(request.design_ids)
        return self.benchmark_engine.benchmark(designs, request.benchmark_type)

    def analyze_off_targets(
        self,
        design_id: int,
        genome_database: str = "human",
        parameters: Optional[OffTargetSearchParameters] = None,
    ) -> OffTargetAnalysisResult:
        design = self.store.get_design(design_id)
        return self.off_target_analyzer.analyze(design, genome_database, parameters)

    def analyze_thermodynamics(
        self, design_id: int, conditions: Optional[AnalysisConditions] = None
    ) -> ThermodynamicAnalysis:
        design = self.store.get_design(design_id)
        return self.thermodynamics.analyze_duplex(
            design.guide_sequence, design.passenger_sequence, conditions, design_id=design.design_id
        )

    def _design_target(self, design: Design) -> Target:
        if design.target_id is None:
            raise NotFoundError(f"design {design.design_id} has no target")
        return self.store.get_target(design.target_id)
