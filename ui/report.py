"""
Terminal reports for indexing and classification results.

All rendering goes through a Rich Console so tests can capture the output with
`Console(record=True)` or a `StringIO` file.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core.capabilities import CapabilityResult, CapabilityStatus
from core.classifier import get_top_priority_files
from core.models import FileClassification, IndexingResult, PriorityFileMap
from models import ImportanceCategory

CATEGORY_STYLES = {
    ImportanceCategory.CRITICAL: "bold red",
    ImportanceCategory.IMPORTANT: "yellow",
    ImportanceCategory.NORMAL: "green",
    ImportanceCategory.IGNORE: "dim",
}

CAPABILITY_STYLES = {
    CapabilityStatus.FOUND: "green",
    CapabilityStatus.EMPTY: "yellow",
    CapabilityStatus.UNIMPLEMENTED: "dim",
}

PRIORITY_GROUPS = (
    ("Package files", "package_files"),
    ("Config files", "config_files"),
    ("Entry points", "entry_points"),
    ("Schemas", "schemas"),
    ("Docker files", "docker_files"),
    ("CI/CD files", "cicd_files"),
)


def render_index_report(
    result: IndexingResult,
    top: int,
    capabilities: Optional[list[CapabilityResult]] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Print the full report of an indexing run.

    Args:
        result: The indexing result to report.
        top: Maximum number of top priority files to list.
        capabilities: Downstream capability results, if any were run.
        console: Console to print to. Defaults to a stdout console.
    """
    console = console or Console()

    render_summary(result, console)
    render_priority_files(result.index.priority_files, console)
    render_top_files(result, top, console)
    render_diagnostics(result, console)
    if capabilities:
        render_capabilities(capabilities, console)


def render_summary(result: IndexingResult, console: Console) -> None:
    stats = result.statistics
    codebase = result.index.statistics

    table = Table(title="Indexing Summary", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Files scanned", str(stats.total_files_scanned))
    table.add_row("Files indexed", str(stats.files_indexed))
    table.add_row("Files ignored", str(stats.files_ignored))
    table.add_row("Total size", _format_size(stats.total_size_bytes))
    table.add_row("Complexity score", str(codebase.complexity_score))
    table.add_row("Processing time", f"{stats.processing_time_ms} ms")

    languages = sorted(
        codebase.language_distribution.items(), key=lambda item: item[1], reverse=True
    )
    if languages:
        table.add_row(
            "Languages", ", ".join(f"{name} ({count})" for name, count in languages)
        )

    console.print()
    console.print(table)


def render_priority_files(priority_files: PriorityFileMap, console: Console) -> None:
    table = Table(title="Priority Files")
    table.add_column("Group", style="bold cyan")
    table.add_column("Count", justify="right")
    table.add_column("Files")

    for label, attribute in PRIORITY_GROUPS:
        paths: list[str] = getattr(priority_files, attribute)
        shown = escape(", ".join(paths[:5]))
        if len(paths) > 5:
            shown += f", ... (+{len(paths) - 5})"
        table.add_row(label, str(len(paths)), shown or "-")

    console.print()
    console.print(table)


def render_top_files(result: IndexingResult, top: int, console: Console) -> None:
    entries = get_top_priority_files(result.index.file_index, top)
    if not entries:
        console.print("\n[yellow]No critical or important files found.[/yellow]")
        return

    table = Table(title=f"Top {len(entries)} Priority Files")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Path", style="cyan")
    table.add_column("Type")
    table.add_column("Score", justify="right")
    table.add_column("Category")
    table.add_column("Reasons", style="dim")

    for position, entry in enumerate(entries, start=1):
        category = entry.importance.category
        table.add_row(
            str(position),
            escape(entry.path),
            str(entry.type),
            str(entry.importance.score),
            f"[{CATEGORY_STYLES[category]}]{category}[/]",
            escape("; ".join(entry.importance.reasons)),
        )

    console.print()
    console.print(table)


def render_diagnostics(result: IndexingResult, console: Console) -> None:
    stats = result.statistics
    if not stats.warnings and not stats.errors:
        return

    console.print()
    for warning in stats.warnings:
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")
    for error in stats.errors:
        console.print(f"[red]Error:[/red] {escape(error)}")


def render_capabilities(capabilities: list[CapabilityResult], console: Console) -> None:
    table = Table(title="Downstream Analysis")
    table.add_column("Capability", style="bold")
    table.add_column("Status")
    table.add_column("Details", style="dim")

    for capability in capabilities:
        style = CAPABILITY_STYLES[capability.status]
        table.add_row(
            capability.capability,
            f"[{style}]{capability.status}[/]",
            capability.message,
        )

    console.print()
    console.print(table)


def render_classification(
    path: str, classification: FileClassification, console: Optional[Console] = None
) -> None:
    """Print the classification of a single file."""
    console = console or Console()
    importance = classification.importance
    characteristics = classification.characteristics
    style = CATEGORY_STYLES[importance.category]

    console.print(f"\n[bold cyan]{escape(path)}[/bold cyan]")
    console.print(
        f"Score: [bold]{importance.score}[/bold]  "
        f"Category: [{style}]{importance.category}[/]  "
        f"Role: {characteristics.architectural_role}"
    )

    flags = [
        name.removeprefix("is_").removeprefix("has_").replace("_", " ")
        for name, value in vars(characteristics).items()
        if isinstance(value, bool) and value
    ]
    if flags:
        console.print(f"Characteristics: {', '.join(flags)}")

    if importance.reasons:
        console.print("Reasons:")
        for reason in importance.reasons:
            console.print(f"  - {escape(reason)}")

    if classification.recommendations:
        table = Table(title="Recommendations")
        table.add_column("Priority")
        table.add_column("Type")
        table.add_column("Description")
        table.add_column("Action", style="dim")
        for recommendation in classification.recommendations:
            table.add_row(
                str(recommendation.priority),
                str(recommendation.type),
                recommendation.description,
                recommendation.action,
            )
        console.print(table)


def _format_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB"):
        if value < 1024:
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"
