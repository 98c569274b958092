"""
Progress reporting protocol used by the indexer.

The indexer reports progress through a ProgressDisplay so that it never depends
on Rich directly. The CLI passes a RichProgressDisplay; library callers and
tests get the NoOpProgressDisplay default.
"""

from types import TracebackType
from typing import Optional, Protocol

from rich.console import Console
from rich.progress import Progress, TaskID
from ui.progress import (
    ProgressState,
    create_progress,
    create_task,
    update_progress,
)


class ProgressDisplay(Protocol):
    """
    Receives progress events from FileIndexer.index_codebase.

    Inside the context the indexer calls on_start() once with the number of
    files that passed validation, on_update(advance=...) at every tenth of the
    way, and on_complete() once after the last file.
    """

    def __enter__(self) -> "ProgressDisplay":
        """Enter the progress context."""

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the progress context."""

    def on_start(self, description: str, total: int | None) -> None:
        """
        Start reporting a new task.

        Args:
            description: Initial description text.
            total: Number of items to process, or None if indeterminate.
        """

    def on_update(
        self, *, advance: int | None = None, description: str | None = None
    ) -> None:
        """
        Advance the counter, change the description, or both.

        At least one of `advance` or `description` must be provided.
        """

    def on_complete(
        self, description: str, completed: int, total: int | None = None
    ) -> None:
        """
        Mark the task as complete.

        Args:
            description: Final description text.
            completed: Number of items that were completed.
            total: Optional new total. If None, the existing total is kept.
        """


class RichProgressDisplay:
    """
    Rich implementation of ProgressDisplay.

    Must be used as a context manager: `with RichProgressDisplay() as display:`.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self._console = console
        self._progress: Progress | None = None
        self._task: TaskID | None = None

    def __enter__(self) -> "RichProgressDisplay":
        self._progress = create_progress(self._console)
        self._progress.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._progress:
            self._progress.__exit__(exc_type, exc_val, exc_tb)

    def on_start(self, description: str, total: int | None) -> None:
        """
        Create the Rich task.

        Raises:
            RuntimeError: If not used as a context manager.
        """
        self._task = create_task(self._require_progress(), description, total=total)

    def on_update(
        self, *, advance: int | None = None, description: str | None = None
    ) -> None:
        """
        Update the Rich task. A new description is styled as IN_PROGRESS.

        Raises:
            RuntimeError: If not used as a context manager, or if on_start()
                was not called first.
            ValueError: If neither advance nor description is provided.
        """
        progress, task = self._require_task("on_update")

        if not (advance or description):
            raise ValueError(
                "At least one of 'advance' or 'description' must be provided to on_update()"
            )

        if description:
            update_progress(
                progress,
                task,
                ProgressState.IN_PROGRESS,
                advance=advance,
                description=description,
            )
        else:
            update_progress(progress, task, advance=advance)

    def on_complete(
        self, description: str, completed: int, total: int | None = None
    ) -> None:
        """
        Show the task as complete.

        Raises:
            RuntimeError: If not used as a context manager, or if on_start()
                was not called first.
        """
        progress, task = self._require_task("on_complete")

        update_progress(
            progress,
            task,
            ProgressState.COMPLETE,
            completed=completed,
            total=total,
            description=description,
        )

    def _require_progress(self) -> Progress:
        if not self._progress:
            raise RuntimeError(
                "RichProgressDisplay must be used as a context manager. "
                "Use: with RichProgressDisplay() as display:"
            )
        return self._progress

    def _require_task(self, caller: str) -> tuple[Progress, TaskID]:
        progress = self._require_progress()
        if self._task is None:
            raise RuntimeError(f"on_start() must be called before {caller}()")
        return progress, self._task


class NoOpProgressDisplay:
    """ProgressDisplay that does nothing. The default for library callers and tests."""

    def __enter__(self) -> "NoOpProgressDisplay":
        return self

    def __exit__(self, *args) -> None:
        pass

    def on_start(self, description: str, total: int | None) -> None:
        pass

    def on_update(
        self, *, advance: int | None = None, description: str | None = None
    ) -> None:
        pass

    def on_complete(
        self, description: str, completed: int, total: int | None = None
    ) -> None:
        pass
