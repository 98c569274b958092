"""
CLI entry point.

This module implements the command-line interface of the codebase indexer. It
ranks the files of a local Git repository by architectural importance, which is
the first stage of generating infrastructure (Docker, Kubernetes, CI/CD) for a
codebase.

Commands:

1.  **index**: Lists the repository's files with `git ls-files`, reads their
    content, indexes them (filtering, scoring, sorting, priority grouping and
    statistics) and prints a report. Optionally exports the index as JSONL.
2.  **classify**: Runs the detailed priority classifier on a single file and
    prints its score, characteristics, reasons and recommendations.
3.  **configure**: Interactively edits the saved settings (project type,
    language, framework, scoring strategy).

Usage:
    $ python main.py index /path/to/repo --project-type api-service --top 20
    $ python main.py classify src/index.ts --language typescript
    $ python main.py configure

Dependencies:
    - Typer: CLI argument parsing and app structure.
    - Rich: Terminal UI, colors, tables and progress visualization.
    - Inquirer: Interactive terminal user prompts.
"""

from pathlib import Path
from typing import Annotated, Optional

from rich import print as pr
import typer

from adapters.git import SubprocessGitClient
from constants import DEFAULT_TOP_PRIORITY_LIMIT
from core.capabilities import run_downstream_capabilities
from core.classifier import FilePriorityClassifier
from core.exceptions import FileIOError, InfrastructureError, log_error
from core.file_io import FileReader, FilesystemFileReader, FilesystemFileWriter
from core.indexer import FileIndexer
from core.log import get_logger, setup_logging
from core.models import CodebaseInput, CodebaseMetadata, FileEntry
from core.settings import (
    build_classifier_options,
    build_indexer_options,
    get_config_file,
    parse_project_type,
    save_config,
)
from models import ProjectType, ScoringStrategy
from ui.progress_display import RichProgressDisplay
from ui.prompts import prompt_settings, select_project_type
from ui.report import render_classification, render_index_report

app = typer.Typer(
    help="Rank the files of a codebase by architectural importance.",
    no_args_is_help=True,
)

logger = get_logger("cli")


@app.command()
def index(
    path: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
            help="Root of the Git repository to index",
        ),
    ] = Path("."),
    project_type: Annotated[
        Optional[str],
        typer.Option(help=f"Project type: {', '.join(ProjectType)}"),
    ] = None,
    language: Annotated[
        Optional[str], typer.Option(help="Primary language (e.g., typescript)")
    ] = None,
    framework: Annotated[
        Optional[str], typer.Option(help="Framework (e.g., react, django)")
    ] = None,
    strategy: Annotated[
        Optional[ScoringStrategy],
        typer.Option(help="Importance scorer: fast heuristic or detailed classifier"),
    ] = None,
    max_files: Annotated[
        Optional[int], typer.Option(min=1, help="Maximum number of files to index")
    ] = None,
    max_file_size: Annotated[
        Optional[int], typer.Option(min=1, help="Maximum file size in bytes")
    ] = None,
    ignore: Annotated[
        Optional[list[str]],
        typer.Option(help="Extra ignore pattern; '*' matches anything. Repeatable."),
    ] = None,
    top: Annotated[
        int, typer.Option(min=1, help="Number of top priority files to list")
    ] = DEFAULT_TOP_PRIORITY_LIMIT,
    output: Annotated[
        Optional[Path],
        typer.Option(dir_okay=False, help="Write the index as JSON lines to this file"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
):
    """
    Index a Git repository and report its most important files.

    Raises:
        typer.Exit: If the path is not a Git repository, or on any error.
    """
    setup_logging(verbose=verbose)

    git_client = SubprocessGitClient(path)
    if not git_client.is_repo():
        pr(f"[red]Error:[/red] Not a git repository: [green]'{path}'[/green]")
        raise typer.Exit(code=1)

    project = resolve_project_type(project_type)

    try:
        config = get_config_file()
        classifier_options = build_classifier_options(
            config,
            project_type=project,
            primary_language=language,
            framework=framework,
        )
        indexer_options = build_indexer_options(
            config,
            max_files=max_files,
            max_file_size=max_file_size,
            custom_ignore_patterns=ignore,
            scoring_strategy=strategy,
        )

        pr(f"\n[green]Project type: {classifier_options.project_type}[/green]")
        pr(f"[green]Scanning: {path}...[/green]\n")

        files = read_repository_files(
            path,
            git_client.get_file_paths_list(),
            indexer_options.max_file_size,
            FilesystemFileReader(),
        )

        indexer = FileIndexer(
            options=indexer_options,
            classifier=FilePriorityClassifier(classifier_options),
            progress_display=RichProgressDisplay(),
        )
        result = indexer.index_codebase(
            CodebaseInput(files=files, metadata=CodebaseMetadata(name=path.name))
        )

        capabilities = run_downstream_capabilities(result.index)
        render_index_report(result, top, capabilities)

        if output is not None:
            writer = FilesystemFileWriter.from_path(output.resolve())
            writer.append_index_entries(result.index.file_index, mode="w")
            pr(f"\n[green]Index written to {output}[/green]")
    except InfrastructureError as e:
        print_infrastructure_err(e)
    except FileIOError as e:
        print_file_io_err(e)
    except Exception as e:  # noqa: BLE001
        print_unexpected_err(e)


@app.command()
def classify(
    file: Annotated[
        Path,
        typer.Argument(
            exists=True, file_okay=True, dir_okay=False, help="File to classify"
        ),
    ],
    project_type: Annotated[
        Optional[str],
        typer.Option(help=f"Project type: {', '.join(ProjectType)}"),
    ] = None,
    language: Annotated[Optional[str], typer.Option(help="Primary language")] = None,
    framework: Annotated[Optional[str], typer.Option(help="Framework")] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
):
    """Classify a single file and explain its importance."""
    setup_logging(verbose=verbose)

    project = resolve_project_type(project_type)

    try:
        options = build_classifier_options(
            get_config_file(),
            project_type=project,
            primary_language=language,
            framework=framework,
        )
        content = FilesystemFileReader().read_file(file)
        classification = FilePriorityClassifier(options).classify_file(
            file.as_posix(), content
        )
        render_classification(file.as_posix(), classification)
    except InfrastructureError as e:
        print_infrastructure_err(e)
    except FileIOError as e:
        print_file_io_err(e)
    except Exception as e:  # noqa: BLE001
        print_unexpected_err(e)


@app.command()
def configure():
    """Edit the saved settings (shows current values for editing)."""
    try:
        current = get_config_file()
    except InfrastructureError as e:
        print_infrastructure_err(e)
        return

    settings = prompt_settings(current)

    try:
        save_config(settings)
    except FileIOError as e:
        print_file_io_err(e)
    except OSError as e:
        pr("[red]Error:[/red] Could not save settings.")
        pr(f"[yellow]{e}[/yellow]")
        raise typer.Exit(code=1) from e

    pr("[green]Settings saved.[/green]\n")


def resolve_project_type(project_type: str | None) -> ProjectType | None:
    """
    Validate a project type given on the command line.

    Returns None when no project type was given, so saved settings apply. An
    invalid value opens the interactive selection.
    """
    if project_type is None:
        return None

    try:
        return parse_project_type(project_type)
    except InfrastructureError:
        pr(f"\n[red bold]Not a valid project type: {project_type}")
        return select_project_type()


def read_repository_files(
    root: Path,
    relative_paths: list[Path],
    max_file_size: int,
    reader: FileReader,
) -> list[FileEntry]:
    """
    Build file entries for the files of a repository.

    Files that are listed but missing from the working tree (deleted but still
    tracked) are skipped. Content is not read for files above `max_file_size`,
    which the indexer skips anyway.

    Args:
        root: Repository root.
        relative_paths: File paths relative to `root`.
        max_file_size: Size in bytes above which content is not read.
        reader: File reader used for content.

    Returns:
        One FileEntry per existing file, in the order of `relative_paths`.
    """
    files: list[FileEntry] = []
    for relative_path in relative_paths:
        full_path = root / relative_path
        if not full_path.is_file():
            logger.debug("Skipping missing file %s", relative_path)
            continue

        size = full_path.stat().st_size
        content = reader.read_file(full_path) if size <= max_file_size else ""
        files.append(FileEntry(path=relative_path.as_posix(), content=content, size=size))

    return files


def print_infrastructure_err(e: InfrastructureError) -> None:
    """
    Displays a user-friendly error message for structured application errors.

    Args:
        e (InfrastructureError): The error, with its code, category and suggestions.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr(f"❌ [bold red]{str(e.category).capitalize()} Error[/bold red] ({e.code})")
    pr(e.message)

    if e.suggestions:
        pr("\n[yellow]What to do:[/yellow]")
        for number, suggestion in enumerate(e.suggestions, start=1):
            pr(f"{number}. {suggestion}")

    raise typer.Exit(code=1) from e


def print_file_io_err(e: FileIOError) -> None:
    """
    Displays a user-friendly error message for file I/O operation failures.

    Args:
        e (FileIOError): The exception that was raised, containing error details
            and file path information.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr("❌ [bold red]File I/O Error[/bold red]")
    pr(f"The app encountered an error while working with files: {e.message}")
    if e.file_path:
        pr(f"File path: [yellow]{e.file_path}[/yellow]")

    pr("\n[yellow]Quick Fix:[/yellow] Check file permissions and available disk space.")
    if e.original_exception:
        pr(f"\nTechnical details: {e.original_exception}")

    raise typer.Exit(code=1) from e


def print_unexpected_err(e: Exception) -> None:
    """
    Displays a user-friendly error message for unexpected errors.

    The full traceback goes to the log, so users see a friendly message on
    stdout while `--verbose` runs keep the details.

    Args:
        e (Exception): The unexpected exception that was raised.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    log_error(e, logger)

    pr("❌ [bold red]Unexpected Error[/bold red]")
    pr("An unexpected error occurred while processing your request.")
    pr(f"\n[yellow]Error Type:[/yellow] {type(e).__name__}")
    pr(f"[yellow]Error Message:[/yellow] {str(e)}")

    pr("\n[yellow]What to do:[/yellow]")
    pr("1. Check that your repository is valid and accessible")
    pr("2. Ensure you have sufficient disk space and permissions")
    pr("3. Try running the command again")
    pr("4. If the problem persists, please report this issue")

    if e.__cause__:
        pr(f"\nCaused by: {e.__cause__}")

    raise typer.Exit(code=1) from e


if __name__ == "__main__":
    app()
