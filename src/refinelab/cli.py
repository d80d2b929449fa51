"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from refinelab.analyzer import compute_metrics, detect_issues
from refinelab.clients.llm_client import LLMClient
from refinelab.config import AppConfig, load_config
from refinelab.lessons import get_lesson, list_lessons, recommend_lessons
from refinelab.models.analysis import LiveMetrics, WritingSuggestion
from refinelab.pipeline.orchestrator import EssayNotFoundError, FeedbackPipeline
from refinelab.store.essay_store import EssayStore

app = typer.Typer(
    name="refinelab",
    help="Essay feedback, live writing metrics and draft comparison",
    no_args_is_help=True,
)
lessons_app = typer.Typer(help="Browse the writing lesson library", no_args_is_help=True)
grades_app = typer.Typer(help="Record past grades for grade prediction", no_args_is_help=True)
app.add_typer(lessons_app, name="lessons")
app.add_typer(grades_app, name="grades")
console = Console()

SEVERITY_COLORS = {"high": "red", "medium": "yellow", "low": "blue"}


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _store(config: AppConfig) -> EssayStore:
    return EssayStore(config.store.resolved_db_path)


def _pipeline(config: AppConfig) -> FeedbackPipeline:
    return FeedbackPipeline(LLMClient.from_config(config.llm), _store(config))


def _read_text(file: Path) -> str:
    if not file.exists():
        console.print(f"[red]File not found: {file}[/red]")
        raise typer.Exit(1)
    if file.suffix.lower() not in (".txt", ".md"):
        console.print(f"[red]Unsupported file format: {file.suffix} (use .txt or .md)[/red]")
        raise typer.Exit(1)
    return file.read_text(encoding="utf-8")


def _metrics_table(metrics: LiveMetrics) -> Table:
    table = Table(title="Live metrics", show_header=False)
    table.add_row("Words", str(metrics.word_count))
    table.add_row("Characters", str(metrics.character_count))
    table.add_row("Sentences", str(metrics.sentence_count))
    table.add_row("Paragraphs", str(metrics.paragraph_count))
    table.add_row("Avg words / sentence", f"{metrics.avg_words_per_sentence:.1f}")
    table.add_row("Avg sentences / paragraph", f"{metrics.avg_sentences_per_paragraph:.1f}")
    table.add_row("Vocabulary diversity", f"{metrics.vocabulary_diversity}%")
    table.add_row("Transition words", str(metrics.transition_words))
    table.add_row("Academic tone", f"{metrics.academic_tone}%")
    table.add_row("Reading level", metrics.reading_level)
    table.add_row("Read time", f"{metrics.estimated_read_time} min")
    return table


def _print_suggestions(text: str, suggestions: list[WritingSuggestion]) -> None:
    if not suggestions:
        console.print("[green]No suggestions. Keep writing![/green]")
        return
    console.print(f"\n[bold]Suggestions ({len(suggestions)}):[/bold]")
    for s in suggestions:
        color = SEVERITY_COLORS[s.severity]
        line = f"  [{color}]{s.severity:>6}[/{color}] [dim]{s.category}[/dim] {s.message}"
        if s.has_span:
            excerpt = text[s.start:s.end].strip().replace("\n", " ")
            if len(excerpt) > 60:
                excerpt = excerpt[:57] + "..."
            line += f' [dim]@{s.start}: "{excerpt}"[/dim]'
        console.print(line)


@app.command()
def analyze(
    file: Path = typer.Argument(help="Essay text file (.txt or .md)"),
) -> None:
    """Run the live writing analyzer on a local file (no API calls)."""
    config = load_config()
    text = _read_text(file)
    console.print(_metrics_table(compute_metrics(text, config.analyzer)))
    _print_suggestions(text, detect_issues(text, config.analyzer))


@app.command()
def add(
    title: str = typer.Argument(help="Essay title"),
    file: Path = typer.Option(..., "--file", "-f", help="Essay text file (.txt or .md)"),
    assignment: str = typer.Option(None, "--assignment", "-a", help="Assignment name"),
    score: bool = typer.Option(True, "--score/--no-score", help="Request AI feedback"),
) -> None:
    """Store an essay, optionally with AI feedback."""
    config = load_config()
    content = _read_text(file)
    try:
        if score:
            with console.status("Analyzing essay..."):
                essay, _ = asyncio.run(_pipeline(config).submit(title, content, assignment))
        else:
            essay = _store(config).create(title, content, assignment_name=assignment)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Saved essay {essay.id}[/green]")


@app.command("list")
def list_essays(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of essays to show"),
) -> None:
    """List stored essays, newest first."""
    essays = _store(load_config()).list_essays(limit=limit)
    if not essays:
        console.print("[yellow]No essays yet.[/yellow]")
        return
    table = Table(title="Essays")
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("Words", justify="right")
    table.add_column("Analysed")
    table.add_column("Created")
    for essay in essays:
        table.add_row(
            essay.id,
            essay.title,
            str(essay.word_count),
            "yes" if essay.analysis else "-",
            essay.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)


@app.command()
def show(essay_id: str = typer.Argument(help="Essay ID")) -> None:
    """Show an essay's AI feedback."""
    essay = _store(load_config()).get(essay_id)
    if essay is None:
        console.print(f"[red]Essay not found: {essay_id}[/red]")
        raise typer.Exit(1)
    console.print(Panel(essay.content[:500] + ("..." if len(essay.content) > 500 else ""), title=essay.title))
    if essay.analysis is None:
        console.print("[dim]No AI feedback yet. Run `refinelab score` to request it.[/dim]")
        return
    _print_analysis(essay.analysis)


def _print_analysis(analysis) -> None:
    table = Table(title="Rubric metrics", show_header=False)
    for name, value in analysis.metrics.model_dump().items():
        table.add_row(name.replace("_", " ").capitalize(), f"{value:.0%}")
    console.print(table)
    for heading, items in (
        ("Strengths", analysis.strengths),
        ("Weaknesses", analysis.weaknesses),
        ("Strategic suggestions", analysis.strategic_suggestions),
    ):
        if items:
            console.print(f"\n[bold]{heading}:[/bold]")
            for item in items:
                console.print(f"  - {item}")
    lessons = recommend_lessons(analysis.metrics)
    console.print("\n[bold]Recommended lessons:[/bold]")
    for lesson in lessons:
        console.print(f"  - {lesson.title} [dim](refinelab lessons show {lesson.id})[/dim]")


@app.command()
def delete(essay_id: str = typer.Argument(help="Essay ID")) -> None:
    """Delete an essay and its comparisons."""
    if not _store(load_config()).delete(essay_id):
        console.print(f"[red]Essay not found: {essay_id}[/red]")
        raise typer.Exit(1)
    console.print("[green]Deleted.[/green]")


@app.command()
def score(essay_id: str = typer.Argument(help="Essay ID")) -> None:
    """Request (or refresh) AI feedback for a stored essay."""
    config = load_config()
    try:
        with console.status("Analyzing essay..."):
            analysis = asyncio.run(_pipeline(config).analyze(essay_id))
    except EssayNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    _print_analysis(analysis)


@app.command()
def compare(
    before: str = typer.Argument(help="ID of the earlier version"),
    after: str = typer.Argument(help="ID of the later version"),
) -> None:
    """Compare two versions of an essay."""
    config = load_config()
    try:
        with console.status("Comparing versions..."):
            result = asyncio.run(_pipeline(config).compare(before, after))
    except EssayNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Change between versions", show_header=False)
    for label, delta in (
        ("Clarity", result.clarity_delta),
        ("Coherence", result.coherence_delta),
        ("Structure", result.structure_delta),
        ("Argument", result.argument_delta),
        ("Analysis", result.analysis_delta),
    ):
        color = "green" if delta > 0 else "red" if delta < 0 else "white"
        table.add_row(label, f"[{color}]{delta:+.0%}[/{color}]")
    console.print(table)
    for item in result.improvements:
        console.print(f"  - {item}")


@app.command()
def trends(limit: int = typer.Option(20, "--limit", "-n")) -> None:
    """Show rubric metrics across analysed drafts, oldest first."""
    points = _store(load_config()).metric_trend(limit=limit)
    if not points:
        console.print("[yellow]No analysed essays yet.[/yellow]")
        return
    table = Table(title="Metric trends")
    table.add_column("Date")
    table.add_column("Title")
    for header in ("Thesis", "Argument", "Structure", "Evidence", "Analysis", "Variety", "Logic"):
        table.add_column(header, justify="right")
    for point in points:
        table.add_row(
            point.created_at.strftime("%Y-%m-%d"),
            point.title,
            *(f"{v:.0%}" for v in point.metrics.model_dump().values()),
        )
    console.print(table)


@app.command()
def fingerprint(limit: int = typer.Option(5, "--limit", "-n", help="Recent essays to include")) -> None:
    """Identify recurring habits across your recent essays."""
    config = load_config()
    try:
        with console.status("Reading your essays..."):
            result = asyncio.run(_pipeline(config).fingerprint(limit=limit))
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    for heading, items in (
        ("Tone", result.tone_tendencies),
        ("Structure", result.structural_patterns),
        ("Pacing", result.pacing_issues),
        ("Evidence", result.evidence_habits),
    ):
        console.print(f"\n[bold]{heading}:[/bold]")
        for item in items:
            console.print(f"  - {item}")

@app.command()
def predict(essay_id: str = typer.Argument(help="ID of an analysed essay")) -> None:
    """Predict a grade band from rubric metrics and your recorded grades."""
    config = load_config()
    try:
        with console.status("Predicting grade..."):
            result = asyncio.run(_pipeline(config).predict_grade(essay_id))
    except (EssayNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(
        f"Predicted grade: [bold]{result.predicted_grade_band}[/bold] "
        f"[dim](confidence {result.confidence:.0%})[/dim]"
    )
    for item in result.key_factors:
        console.print(f"  - {item}")


@app.command()
def strategies(essay_id: str = typer.Argument(help="ID of an analysed essay")) -> None:
    """Refresh strategic suggestions from an essay's weaknesses."""
    config = load_config()
    try:
        with console.status("Thinking about strategies..."):
            items = asyncio.run(_pipeline(config).suggest_strategies(essay_id))
    except (EssayNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    if not items:
        console.print("[yellow]No weaknesses recorded, nothing to suggest.[/yellow]")
    for item in items:
        console.print(f"  - {item}")


@lessons_app.command("list")
def lessons_list(
    category: str = typer.Option(None, "--category", "-c", help="Only lessons in this category"),
) -> None:
    """List writing lessons."""
    lessons = list_lessons(category)
    if not lessons:
        console.print(f"[yellow]No lessons in category: {category}[/yellow]")
        return
    table = Table(title="Writing lessons")
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("Category")
    for lesson in lessons:
        table.add_row(lesson.id, lesson.title, lesson.category)
    console.print(table)


@lessons_app.command("show")
def lessons_show(lesson_id: str = typer.Argument(help="Lesson ID")) -> None:
    """Show a lesson's principles, strategies and checklist."""
    lesson = get_lesson(lesson_id)
    if lesson is None:
        console.print(f"[red]Lesson not found: {lesson_id}[/red]")
        raise typer.Exit(1)
    console.print(Panel(lesson.category, title=lesson.title))
    for heading, items in (
        ("Principles", lesson.principles),
        ("Strategies", lesson.strategies),
    ):
        console.print(f"\n[bold]{heading}:[/bold]")
        for item in items:
            console.print(f"  - {item}")
    console.print("\n[bold]Checklist:[/bold]")
    for item in lesson.checklist_items:
        console.print(f"  [ ] {item}", markup=False)


@grades_app.command("add")
def grades_add(
    assignment: str = typer.Argument(help="Assignment name"),
    grade: str = typer.Argument(help="Grade received, e.g. B+"),
    penalty: Optional[List[str]] = typer.Option(
        None, "--penalty", "-p", help="Area you lost marks for (repeatable)"
    ),
    essay_id: str = typer.Option(
        None, "--essay", "-e", help="Attach the rubric metrics of this analysed essay"
    ),
) -> None:
    """Record a grade received for a past assignment."""
    store = _store(load_config())
    rubric = None
    if essay_id is not None:
        essay = store.get(essay_id)
        if essay is None or essay.analysis is None:
            console.print(f"[red]No analysed essay with ID {essay_id}[/red]")
            raise typer.Exit(1)
        rubric = essay.analysis.metrics.model_dump()
    try:
        pattern = store.add_grading_pattern(assignment, grade, rubric, penalty or [])
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Recorded {pattern.grade} for {pattern.assignment_name}[/green]")


@grades_app.command("list")
def grades_list() -> None:
    """List recorded grades, newest first."""
    patterns = _store(load_config()).list_grading_patterns()
    if not patterns:
        console.print("[yellow]No grades recorded yet.[/yellow]")
        return
    table = Table(title="Recorded grades")
    table.add_column("Assignment")
    table.add_column("Grade")
    table.add_column("Penalty areas")
    table.add_column("Recorded")
    for p in patterns:
        table.add_row(
            p.assignment_name,
            p.grade,
            ", ".join(p.penalty_areas) or "-",
            p.created_at.strftime("%Y-%m-%d"),
        )
    console.print(table)


if __name__ == "__main__":
    app()
