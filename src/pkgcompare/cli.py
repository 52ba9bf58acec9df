"""CLI entry point for pkgcompare."""

import json
import logging
from datetime import datetime
from pathlib import Path

# Load .env file if it exists
from dotenv import load_dotenv
load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from pkgcompare.analyzers.classifier import Classifier
from pkgcompare.analyzers.pipeline import EnrichmentPipeline
from pkgcompare.analyzers.scorer import Scorer, ScoreWeights
from pkgcompare.analyzers.search import paginate
from pkgcompare.config import Settings
from pkgcompare.loader import RecordLoadError, load_records
from pkgcompare.models.schemas import Category, ComparisonResult, Grade, SearchCriteria, SortKey
from pkgcompare.monitoring import MetricsCollector

app = typer.Typer(help="Package categorization and comparison scoring tool.")

console = Console()

DATE_FORMATS = ["%Y-%m-%d"]


def _settings() -> Settings:
    try:
        return Settings.from_env()
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)


def _load(path: Path):
    try:
        return load_records(path)
    except RecordLoadError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _scorer(today: datetime | None) -> Scorer:
    return Scorer(today=today.date() if today else None)


def _grade_color(grade: Grade) -> str:
    return {Grade.A: "green", Grade.B: "green", Grade.C: "yellow"}.get(grade, "red")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging before any command runs."""
    level = "DEBUG" if verbose else _settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def classify(
    name: str = typer.Argument(..., help="Package name, e.g. org.slf4j:slf4j-api or @angular/core"),
    description: str | None = typer.Option(None, "--description", "-d", help="Package description"),
    keyword: list[str] | None = typer.Option(None, "--keyword", "-k", help="Keyword (repeatable)"),
    language: str | None = typer.Option(None, "--language", "-l", help="Primary language"),
    platform: str | None = typer.Option(None, "--platform", "-p", help="Package manager"),
    show_scores: bool = typer.Option(False, "--scores", help="Show per-category scores"),
) -> None:
    """Infer the categories of a single package."""
    classifier = Classifier(_settings().classifier_weights)
    result = classifier.classify(name, description, keyword or [], language, platform)

    console.print()
    console.print(f"[bold cyan]{name}[/bold cyan]")
    console.print(f"[bold]Categories:[/bold] {', '.join(result.names)}")
    console.print(f"[bold]Primary:[/bold] {result.primary.value}")

    if show_scores:
        table = Table(title="Category Scores")
        table.add_column("Category", style="bold")
        table.add_column("Score", justify="right")
        threshold = classifier.weights.threshold
        for category, score in sorted(result.scores.items(), key=lambda kv: -kv[1]):
            if score == 0:
                continue
            color = "green" if score >= threshold else "dim"
            table.add_row(category.value, f"[{color}]{score}[/{color}]")
        console.print()
        console.print(table)


@app.command()
def score(
    records_file: Path = typer.Argument(..., help="JSON file with package records"),
    today: datetime | None = typer.Option(None, "--today", formats=DATE_FORMATS, help="Reference date"),
) -> None:
    """Score every record in a file."""
    records = _load(records_file)
    scorer = _scorer(today)

    table = Table(title=f"Comparison Scores ({len(records)} packages)")
    table.add_column("Package", style="cyan")
    table.add_column("Popularity", justify="right")
    table.add_column("Maintenance", justify="right")
    table.add_column("Security", justify="right")
    table.add_column("Community", justify="right")
    table.add_column("Quality", justify="right")
    table.add_column("Overall", justify="right", style="bold")
    table.add_column("Grade", justify="center")

    for record in records:
        result = scorer.score(record)
        color = _grade_color(result.grade)
        table.add_row(
            record.name or "-",
            f"{result.popularity:.1f}",
            f"{result.maintenance:.1f}",
            f"{result.security:.1f}",
            f"{result.community:.1f}",
            f"{result.quality:.1f}",
            f"{result.overall:.1f}",
            f"[{color}]{result.grade.value}[/{color}]",
        )

    console.print(table)


def _score_bar(score: float, width: int = 20) -> str:
    """Create a visual bar for a 0-10 score."""
    filled = int(score / 10 * width)
    color = "green" if score >= 7 else "yellow" if score >= 5 else "red"
    return f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (width - filled)}[/dim]"


def _print_breakdown(name: str, result: ComparisonResult, weights: ScoreWeights) -> None:
    color = _grade_color(result.grade)
    console.print(
        Panel(
            f"[bold][{color}]{result.overall:.1f}[/{color}][/bold] / 10  Grade: [bold]{result.grade.value}[/bold]",
            title=name,
            expand=False,
        )
    )
    console.print()

    scores_table = Table(title="Score Breakdown", show_header=True)
    scores_table.add_column("Component", style="bold")
    scores_table.add_column("Score", justify="right")
    scores_table.add_column("Weight", justify="right", style="dim")
    scores_table.add_column("Bar", width=20)

    components = [
        ("Popularity", result.popularity, weights.popularity),
        ("Maintenance", result.maintenance, weights.maintenance),
        ("Security", result.security, weights.security),
        ("Community", result.community, weights.community),
        ("Quality", result.quality, weights.quality),
    ]
    for component, score, weight in components:
        scores_table.add_row(component, f"{score:.1f}", f"{weight:.0%}", _score_bar(score))

    console.print(scores_table)


@app.command()
def analyze(
    records_file: Path = typer.Argument(..., help="JSON file with package records"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output JSON file"),
    workers: int | None = typer.Option(None, "--workers", "-w", help="Worker threads (overrides PKGCOMPARE_WORKERS)"),
    today: datetime | None = typer.Option(None, "--today", formats=DATE_FORMATS, help="Reference date"),
) -> None:
    """Classify, score and enrich every record in a file."""
    settings = _settings()
    records = _load(records_file)

    metrics = MetricsCollector(settings.metrics_file)
    pipeline = EnrichmentPipeline(
        classifier=Classifier(settings.classifier_weights),
        scorer=_scorer(today),
        metrics=metrics,
        workers=workers or settings.workers,
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task(f"Analyzing {len(records)} packages...", total=None)
        analyses = pipeline.analyze_batch(records)

    snapshot = metrics.get_metrics()

    console.print()
    console.print(f"[bold green]Completed:[/bold green] {len(analyses)} packages analyzed")
    if snapshot.error_count:
        console.print(f"[bold red]Errors:[/bold red] {snapshot.error_count} packages failed")
        for entry in list(snapshot.recent_errors)[:5]:
            console.print(f"  [red]x[/red] {entry.package}: {entry.message}")

    table = Table(title="Analysis")
    table.add_column("Package", style="cyan")
    table.add_column("Categories")
    table.add_column("Primary", style="bold")
    table.add_column("Overall", justify="right")
    table.add_column("Grade", justify="center")
    table.add_column("Runtime", style="dim")

    for analysis in analyses:
        comparison = analysis.comparison
        color = _grade_color(comparison.grade)
        table.add_row(
            analysis.record.name or "-",
            ", ".join(analysis.categories.names),
            analysis.categories.primary.value,
            f"{comparison.overall:.1f}",
            f"[{color}]{comparison.grade.value}[/{color}]",
            analysis.runtime_environment,
        )

    console.print()
    console.print(table)

    if len(analyses) == 1:
        console.print()
        _print_breakdown(analyses[0].record.name or "-", analyses[0].comparison, pipeline.scorer.weights)

    if snapshot.grade_distribution:
        grades = "  ".join(f"{g}: {n}" for g, n in sorted(snapshot.grade_distribution.items()))
        console.print()
        console.print(f"[bold]Grades:[/bold] {grades}")
        if snapshot.average_score is not None:
            console.print(f"[bold]Average score:[/bold] {snapshot.average_score:.1f}")

    if output:
        output.write_text(
            json.dumps([a.model_dump(mode="json") for a in analyses], indent=2, default=str)
        )
        console.print(f"\n[green]Saved to {output}[/green]")


@app.command()
def search(
    records_file: Path = typer.Argument(..., help="JSON file with package records"),
    query: str | None = typer.Option(None, "--query", "-q", help="Substring of name or description"),
    category: list[str] | None = typer.Option(None, "--category", "-c", help="Category to include (repeatable)"),
    exclude_category: list[str] | None = typer.Option(None, "--exclude-category", help="Category to exclude (repeatable)"),
    platform: list[str] | None = typer.Option(None, "--platform", "-p", help="Platform to include (repeatable)"),
    exclude_platform: list[str] | None = typer.Option(None, "--exclude-platform", help="Platform to exclude (repeatable)"),
    min_stars: int | None = typer.Option(None, "--min-stars"),
    max_stars: int | None = typer.Option(None, "--max-stars"),
    min_dependents: int | None = typer.Option(None, "--min-dependents"),
    max_dependents: int | None = typer.Option(None, "--max-dependents"),
    after: datetime | None = typer.Option(None, "--after", formats=DATE_FORMATS, help="Last release on or after"),
    grade: list[Grade] | None = typer.Option(None, "--grade", "-g", help="Grade to include (repeatable)"),
    exclude_deprecated: bool = typer.Option(False, "--exclude-deprecated"),
    exclude_vulnerable: bool = typer.Option(False, "--exclude-vulnerable"),
    exclude_unmaintained: bool = typer.Option(False, "--exclude-unmaintained"),
    sort_by: SortKey | None = typer.Option(None, "--sort-by", "-s", help="Sort order"),
    page: int = typer.Option(1, "--page", min=1),
    size: int = typer.Option(20, "--size", min=1),
    today: datetime | None = typer.Option(None, "--today", formats=DATE_FORMATS, help="Reference date"),
) -> None:
    """Classify a file of records, then filter and sort them."""
    settings = _settings()
    records = _load(records_file)

    criteria = SearchCriteria(
        query=query,
        categories=category or None,
        exclude_categories=exclude_category or None,
        platforms=platform or None,
        exclude_platforms=exclude_platform or None,
        min_stars=min_stars,
        max_stars=max_stars,
        min_dependents=min_dependents,
        max_dependents=max_dependents,
        last_commit_after=after.date() if after else None,
        include_grades=grade or None,
        exclude_deprecated=exclude_deprecated,
        exclude_vulnerable=exclude_vulnerable,
        exclude_unmaintained=exclude_unmaintained,
        sort_by=sort_by,
    )

    pipeline = EnrichmentPipeline(
        classifier=Classifier(settings.classifier_weights),
        scorer=_scorer(today),
        workers=settings.workers,
    )
    analyses = pipeline.analyze_batch(records)
    matched = pipeline.search(analyses, criteria)
    result_page = paginate(matched, page=page, size=size)

    table = Table(title=f"Results (page {result_page.page} of {max(result_page.total_pages, 1)}, {result_page.total} total)")
    table.add_column("Package", style="cyan")
    table.add_column("Platform", style="dim")
    table.add_column("Categories")
    table.add_column("Stars", justify="right")
    table.add_column("Dependents", justify="right")
    table.add_column("Grade", justify="center")

    for analysis in result_page.items:
        record = analysis.record
        stars = record.metrics.stars
        dependents = record.metrics.dependents
        comparison = analysis.comparison
        color = _grade_color(comparison.grade)
        table.add_row(
            record.name or "-",
            record.platform or "-",
            record.categories_text,
            f"{stars:,}" if stars is not None else "-",
            f"{dependents:,}" if dependents is not None else "-",
            f"[{color}]{comparison.grade.value}[/{color}]",
        )

    console.print(table)


@app.command()
def categories() -> None:
    """List the category taxonomy."""
    table = Table(title="Categories")
    table.add_column("Category", style="bold cyan")
    table.add_column("Description")
    for name, description in Category.descriptions().items():
        table.add_row(name, description)
    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from pkgcompare import __version__

    console.print(f"pkgcompare v{__version__}")


if __name__ == "__main__":
    app()
