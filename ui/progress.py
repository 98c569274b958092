"""
Rich progress bar helpers.

Progress bars are drawn on stderr so that the report printed on stdout can be
redirected without progress noise. Task descriptions are colored by state.
"""

from enum import StrEnum
from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
)


class ProgressState(StrEnum):
    """
    Progress states and the Rich color used for each.

    Attributes:
        IN_PROGRESS: Magenta, for running tasks.
        COMPLETE: Green, for finished tasks.
        WARNING: Yellow, for tasks that finished with warnings.
        ERROR: Red, for failed tasks.
    """

    IN_PROGRESS = "magenta"
    COMPLETE = "green"
    WARNING = "yellow"
    ERROR = "red"


def create_progress(console: Optional[Console] = None) -> Progress:
    """
    Create a Progress instance with the application's column layout.

    Args:
        console: Console to draw on. Defaults to a stderr console.

    Returns:
        Progress: A configured Rich Progress instance.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TaskProgressColumn(),
        console=console or Console(stderr=True),
    )


def create_task(progress: Progress, description: str, total: Optional[int]) -> TaskID:
    """Add a task in the IN_PROGRESS state and return its id."""
    return progress.add_task(f"[{ProgressState.IN_PROGRESS}]{description}", total=total)


def update_progress(
    progress: Progress,
    task: TaskID,
    progress_state: Optional[ProgressState] = None,
    total: Optional[float] = None,
    completed: Optional[float] = None,
    advance: Optional[float] = None,
    description: Optional[str] = None,
) -> None:
    """
    Update a progress task.

    `progress_state` and `description` go together: a new description is always
    styled with the color of a state.

    Args:
        progress: The Progress instance containing the task.
        task: The task to update.
        progress_state: The new state (color). Requires `description`.
        total: The new total. If None, the existing total is kept.
        completed: Absolute number of completed items.
        advance: Number of items to advance by.
        description: The new description. Requires `progress_state`.

    Raises:
        ValueError: If only one of `progress_state` and `description` is given.
    """
    if bool(progress_state) != bool(description):
        raise ValueError("progress_state and description must be provided together.")

    # Rich treats description=None as "clear", so it is only passed when set
    if description:
        progress.update(
            task,
            total=total,
            completed=completed,
            advance=advance,
            description=f"[{progress_state}]{description}",
        )
    else:
        progress.update(task, total=total, completed=completed, advance=advance)
