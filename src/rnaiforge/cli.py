"""Command line interface for rnaiforge."""

from pathlib import Path
from typing import NoReturn, Optional

import pandas as pd
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rnaiforge import __version__
from rnaiforge.config.settings import EngineSettings
from rnaiforge.data.fasta import read_targets
from rnaiforge.errors import InvalidArgumentError, RNAiForgeError
from rnaiforge.models.benchmark import BenchmarkAxis
from rnaiforge.models.experiment import ExperimentalParameters, ExperimentType, TreatmentConditions
from rnaiforge.models.requests import (
    BenchmarkRequest,
    DesignRequest,
    ExperimentRequest,
    PredictionRequest,
    ValidationRequest,
)
from rnaiforge.models.rnai import ConstructType, Design, Target, TargetType, design_record_row
from rnaiforge.models.schemas import DesignRecordSchema
from rnaiforge.service import RNAiDesignService

app = typer.Typer(help="Heuristic RNAi reagent design, validation and benchmarking")
console = Console()

SequenceOption = typer.Option(None, "--sequence", "-s", help="Target sequence")
InputOption = typer.Option(None, "--input", "-i", help="FASTA file; the first record is used")
SeedOption = typer.Option(None, "--seed", help="Seed for reproducible noise draws")


def _service(seed: Optional[int], threads: int = 1) -> RNAiDesignService:
    settings = EngineSettings.from_env()
    updates: dict[str, object] = {"num_threads": min(threads, 8)}
    if seed is not None:
        updates["seed"] = seed
    return RNAiDesignService(settings.model_copy(update=updates))


def _load_target(sequence: Optional[str], input_file: Optional[Path]) -> Target:
    if sequence:
        return Target(name="cli_target", sequence=sequence)
    if input_file is not None:
        targets = read_targets(input_file)
        if not targets:
            raise InvalidArgumentError(f"No sequences found in {input_file}")
        return targets[0]
    raise InvalidArgumentError("Provide a target with --sequence or --input")


def _register(service: RNAiDesignService, target: Target) -> Target:
    return service.register_target(target.sequence, name=target.name, target_type=target.target_type)


def _fail(exc: Exception) -> NoReturn:
    console.print(f"❌ [bold red]{escape(str(exc))}[/bold red]")
    raise typer.Exit(code=1)


def _designs_table(designs: list[Design], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("Position", justify="right")
    table.add_column("Guide")
    table.add_column("Specificity", justify="right")
    table.add_column("Efficacy", justify="right")
    table.add_column("Tm (°C)", justify="right")
    table.add_column("Risk")
    for design in designs:
        table.add_row(
            str(design.design_id),
            str(design.position),
            design.guide_sequence,
            f"{design.specificity_score:.3f}",
            f"{design.efficacy_prediction:.3f}",
            f"{design.thermodynamic_properties.melting_temperature:.1f}",
            design.off_target_analysis.risk_classification.value,
        )
    return table


@app.command()
def design(
    sequence: Optional[str] = SequenceOption,
    input_file: Optional[Path] = InputOption,
    construct_type: ConstructType = typer.Option(ConstructType.SIRNA, "--construct-type", "-c"),
    length: Optional[int] = typer.Option(None, "--length", "-l", help="Guide length (construct default if omitted)"),
    max_designs: int = typer.Option(10, "--max-designs", "-n", min=1),
    gc_min: float = typer.Option(0.3, "--gc-min", min=0.0, max=1.0),
    gc_max: float = typer.Option(0.7, "--gc-max", min=0.0, max=1.0),
    filter_repeats: bool = typer.Option(True, "--filter-repeats/--no-filter-repeats"),
    threads: int = typer.Option(1, "--threads", "-t", min=1, help="Scoring threads (capped at 8)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write selected designs to CSV"),
    seed: Optional[int] = SeedOption,
) -> None:
    """Design constructs against a target."""
    try:
        service = _service(seed, threads)
        target = _register(service, _load_target(sequence, input_file))
        overrides: dict[str, object] = {
            "gc_content_range": {"min": gc_min, "max": gc_max},
            "filter_repeats": filter_repeats,
        }
        if length is not None:
            overrides["length"] = length
        response = service.design(
            DesignRequest(
                target_id=target.id,
                construct_type=construct_type,
                design_parameters=overrides,
                max_designs=max_designs,
            )
        )
    except RNAiForgeError as exc:
        _fail(exc)

    summary = response.summary
    console.print(f"🎯 Evaluated {summary.total_evaluated} {construct_type.value} candidates for {target.name}")
    console.print(
        f"   {summary.passing_filters} passing (specificity >= 0.7), "
        f"average specificity {summary.average_specificity:.3f}"
    )
    if not response.designs:
        console.print("⚠️  No candidates survived the pre-filters")
        return

    console.print(_designs_table(response.designs, f"Top {len(response.designs)} designs"))
    if output is not None:
        frame = DesignRecordSchema.validate(pd.DataFrame([design_record_row(d) for d in response.designs]))
        frame.to_csv(output, index=False)
        console.print(f"📊 Results saved to: [blue]{output}[/blue]")


@app.command()
def validate(
    guide: str = typer.Argument(..., help="Guide sequence"),
    target: str = typer.Argument(..., help="Target sequence"),
    construct_type: ConstructType = typer.Option(ConstructType.SIRNA, "--construct-type", "-c"),
    seed: Optional[int] = SeedOption,
) -> None:
    """Validate a guide against a target."""
    result = _service(seed).validate(
        ValidationRequest(guide_sequence=guide, target_sequence=target, construct_type=construct_type)
    )
    status = "[bold green]VALID[/bold green]" if result.is_valid else "[bold red]INVALID[/bold red]"
    console.print(f"Validation: {status}")
    for issue in result.issues:
        console.print(f"  ❌ {escape(issue)}")

    analysis = result.specificity_analysis
    table = Table(title="Specificity analysis")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Specificity", f"{analysis.specificity_score:.3f}")
    table.add_row("Seed region", f"{analysis.seed_region_score:.3f}")
    table.add_row("Asymmetry", f"{analysis.thermodynamic_score:.3f}")
    table.add_row("Position bias", f"{analysis.position_bias_score:.3f}")
    table.add_row("Efficacy", f"{analysis.overall_efficacy_prediction:.3f}")
    table.add_row(
        "Efficacy CI", escape(f"[{analysis.confidence_interval.lower:.2f}, {analysis.confidence_interval.upper:.2f}]")
    )
    console.print(table)
    for recommendation in result.recommendations:
        console.print(f"  💡 {recommendation}")


@app.command()
def predict(
    guide: str = typer.Argument(..., help="Guide sequence"),
    target: str = typer.Argument(..., help="Target sequence"),
    construct_type: ConstructType = typer.Option(ConstructType.SIRNA, "--construct-type", "-c"),
    cell_line: Optional[str] = typer.Option(None, "--cell-line"),
    seed: Optional[int] = SeedOption,
) -> None:
    """Predict knockdown efficiency for a guide."""
    try:
        service = _service(seed)
        stored_target = service.register_target(target)
        stored = service.register_guide(guide, stored_target.id, construct_type)
        prediction = service.predict_efficiency(PredictionRequest(design_id=stored.design_id, cell_line=cell_line))
    except RNAiForgeError as exc:
        _fail(exc)

    console.print(f"Predicted efficiency: [bold]{prediction.predicted_efficiency:.3f}[/bold]")
    console.print(f"Confidence: {prediction.confidence_score:.3f}")
    table = Table(title="Prediction factors")
    table.add_column("Factor")
    table.add_column("Type")
    table.add_column("Contribution", justify="right")
    for factor in prediction.prediction_factors:
        table.add_row(factor.factor_name, factor.factor_type.value, f"{factor.contribution_score:.3f}")
    console.print(table)


@app.command()
def simulate(
    guide: str = typer.Argument(..., help="Guide sequence"),
    target: str = typer.Argument(..., help="Target sequence"),
    experiment_type: ExperimentType = typer.Option(ExperimentType.IN_SILICO, "--experiment-type", "-e"),
    concentration: float = typer.Option(25.0, "--concentration", min=0.0, help="Dose (nM)"),
    construct_type: ConstructType = typer.Option(ConstructType.SIRNA, "--construct-type", "-c"),
    seed: Optional[int] = SeedOption,
) -> None:
    """Simulate a knockdown experiment for a guide."""
    try:
        service = _service(seed)
        stored_target = service.register_target(target)
        stored = service.register_guide(guide, stored_target.id, construct_type)
        record = service.run_experiment(
            ExperimentRequest(
                design_id=stored.design_id,
                experiment_name="cli_simulation",
                experiment_type=experiment_type,
                experimental_parameters=ExperimentalParameters(
                    treatment_conditions=TreatmentConditions(concentration=concentration)
                ),
            )
        )
    except RNAiForgeError as exc:
        _fail(exc)

    outcome = record.outcome
    console.print(f"🧪 {experiment_type.value} knockdown: [bold]{record.knockdown_efficiency:.1f}%[/bold]")
    console.print(f"   Viability impact: {record.viability_impact:.1f}%")
    console.print(
        f"   Off-target effects: {len(outcome.safety_profile.off_target_effects)}, "
        f"p-value {outcome.statistics.p_value:.4f}"
    )

    table = Table(title="Dose response")
    table.add_column("Concentration", justify="right")
    table.add_column("Knockdown %", justify="right")
    table.add_column("Viability %", justify="right")
    for point in outcome.efficiency_metrics.dose_response_curve:
        table.add_row(
            f"{point.concentration:g}", f"{point.knockdown_percentage:.1f}", f"{point.viability_percentage:.1f}"
        )
    console.print(table)
    for recommendation in outcome.recommendations:
        console.print(f"  💡 {recommendation}")


@app.command()
def benchmark(
    sequence: Optional[str] = SequenceOption,
    input_file: Optional[Path] = InputOption,
    axis: BenchmarkAxis = typer.Option(BenchmarkAxis.SPECIFICITY, "--axis", "-a"),
    construct_type: ConstructType = typer.Option(ConstructType.SIRNA, "--construct-type", "-c"),
    max_designs: int = typer.Option(5, "--max-designs", "-n", min=1),
    seed: Optional[int] = SeedOption,
) -> None:
    """Design constructs for a target and benchmark them along one axis."""
    try:
        service = _service(seed)
        target = _register(service, _load_target(sequence, input_file))
        response = service.design(
            DesignRequest(target_id=target.id, construct_type=construct_type, max_designs=max_designs)
        )
        if not response.designs:
            raise InvalidArgumentError("No designs available to benchmark")
        result = service.benchmark(
            BenchmarkRequest(design_ids=[d.design_id for d in response.designs], benchmark_type=axis)
        )
    except RNAiForgeError as exc:
        _fail(exc)

    table = Table(title=f"Benchmark {result.test_id} ({axis.value})")
    table.add_column("Rank", justify="right")
    table.add_column("Design", justify="right")
    table.add_column("Score", justify="right")
    for ranking in result.design_rankings:
        table.add_row(str(ranking.rank), str(ranking.design_id), f"{ranking.overall_score:.3f}")
    console.print(table)

    metrics = result.benchmark_metrics
    console.print(
        f"Average {metrics.average_score:.3f}, variance {metrics.score_variance:.4f}, "
        f"top {metrics.top_performer_score:.3f}"
    )


@app.command("analyze-target")
def analyze_target(
    sequence: Optional[str] = SequenceOption,
    input_file: Optional[Path] = InputOption,
    target_type: TargetType = typer.Option(TargetType.MRNA, "--target-type"),
    organism: str = typer.Option("unknown", "--organism"),
    seed: Optional[int] = SeedOption,
) -> None:
    """Validate a target sequence and report accessible sites."""
    try:
        target = _load_target(sequence, input_file)
    except RNAiForgeError as exc:
        _fail(exc)

    result = _service(seed).validate_target(target.sequence, target_type, organism)
    status = "[bold green]VALID[/bold green]" if result.is_valid else "[bold red]INVALID[/bold red]"
    analysis = result.sequence_analysis
    console.print(f"Target {target.name}: {status}")
    console.print(
        f"   Length {analysis.length}, GC {analysis.gc_content:.1%}, complexity {analysis.complexity_score:.3f}, "
        f"{len(analysis.repeat_regions)} repeat regions"
    )
    for error in result.validation_errors:
        console.print(f"  ❌ {escape(error)}")

    sites = result.accessibility_analysis.recommended_target_sites
    if sites:
        table = Table(title="Recommended target sites")
        table.add_column("Position", justify="right")
        table.add_column("Functionality", justify="right")
        for site in sites:
            table.add_row(str(site.position), f"{site.functionality_score:.2f}")
        console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"rnaiforge [bold]{__version__}[/bold]")


if __name__ == "__main__":
    app()
