"""
Interactive user prompts for the CLI.

This module handles two interactive flows:

1. Project type selection, used when `--project-type` is missing or invalid.
2. Settings editing (`configure`), which shows the saved values as defaults.

Cancelling a prompt (Ctrl+C) exits the CLI.

Dependencies:
    - inquirer: Interactive terminal prompts
    - rich: Terminal formatting and colors
    - typer: CLI framework integration
"""

from typing import Any

import inquirer  # type: ignore
from inquirer.themes import GreenPassion  # type: ignore
from rich import print as pr
import typer

from models import ProjectType, ScoringStrategy


def select_project_type() -> ProjectType:
    """
    Prompt the user to pick the project type that biases file prioritization.

    Returns:
        ProjectType: The selected project type.

    Raises:
        typer.Exit: If the prompt is cancelled.
    """
    pr("\n[bold green]Select the type of project you are indexing.[/bold green]")

    questions = [
        inquirer.List(
            "project_type",
            message="Hit [ENTER] to make your selection",
            choices=list(ProjectType),
        ),
    ]

    answers = inquirer.prompt(questions, theme=GreenPassion())

    if not answers:
        raise typer.Exit()

    return ProjectType(answers["project_type"])


def prompt_settings(current: dict[str, Any]) -> dict[str, Any]:
    """
    Prompt for the classifier settings, prepopulated with the current values.

    Args:
        current: The currently saved settings.

    Returns:
        dict: `current` updated with the answers. An empty language keeps the
        previous value; an empty framework clears it.

    Raises:
        typer.Exit: If the prompt is cancelled.
    """
    pr("\n[bold green]Edit indexing settings.[/bold green]\n")

    questions = [
        inquirer.List(
            "project_type",
            message="Project type",
            choices=list(ProjectType),
            default=current.get("project_type", ProjectType.WEB_APP),
        ),
        inquirer.Text(
            "primary_language",
            message="Primary language",
            default=current.get("primary_language", "javascript"),
        ),
        inquirer.Text(
            "framework",
            message="Framework (leave empty for none)",
            default=current.get("framework", ""),
        ),
        inquirer.List(
            "scoring_strategy",
            message="Scoring strategy",
            choices=list(ScoringStrategy),
            default=current.get("scoring_strategy", ScoringStrategy.FAST),
        ),
    ]

    answers = inquirer.prompt(questions, theme=GreenPassion())

    if not answers:
        raise typer.Exit(code=1)

    settings = dict(current)
    settings["project_type"] = str(answers["project_type"])
    settings["scoring_strategy"] = str(answers["scoring_strategy"])
    settings["framework"] = (answers.get("framework") or "").strip()

    language = (answers.get("primary_language") or "").strip().lower()
    if language:
        settings["primary_language"] = language

    return settings
