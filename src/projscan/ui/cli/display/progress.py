"""Progress display functionality for CLI."""

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar, final

from rich.console import Console
from rich.progress import Progress, TaskID

from projscan.platform.logging import ScanEventRichHandler, logger
from projscan.shared.progress import ProgressEvent, ProgressObserver, ProgressStage

T = TypeVar("T")

_STAGE_STYLES: dict[ProgressStage, str] = {
    ProgressStage.INITIALIZING: "cyan",
    ProgressStage.SCANNING: "cyan",
    ProgressStage.PROCESSING: "magenta",
    ProgressStage.COMPLETED: "green",
    ProgressStage.ERROR: "red",
}


def log_console() -> Console | None:
    """Return the console used by the package's rich log handler, if any."""

    for handler in logger.handlers:
        if isinstance(handler, ScanEventRichHandler):
            return handler.console
    return None


def describe(event: ProgressEvent) -> str:
    """Render a one-line progress description for ``event``."""

    style = _STAGE_STYLES.get(event.stage, "white")
    label = event.stage.value.capitalize()
    detail = event.current_category or event.message
    if detail:
        return f"[{style}]{label}... {detail}"
    return f"[{style}]{label}..."


@final
class ProgressDisplay:
    """Drive a rich progress bar from pipeline progress events."""

    def run(
        self,
        operation: Callable[[ProgressObserver], Coroutine[Any, Any, T]],
        *,
        quiet: bool = False,
    ) -> T:
        """Run ``operation`` to completion while rendering its progress.

        Args:
            operation: Coroutine factory receiving the progress observer.
            quiet: Skip rendering and run the operation silently.

        Returns:
            Whatever the coroutine returns.
        """
        if quiet:
            return asyncio.run(operation(lambda _event: None))

        progress_kwargs: dict[str, Any] = {
            "transient": True,
            "redirect_stdout": False,
            "redirect_stderr": False,
        }
        console = log_console()
        if console is not None:
            progress_kwargs["console"] = console

        with Progress(**progress_kwargs) as progress:
            task_id: TaskID = progress.add_task("[cyan]Starting...", total=100)

            def _observer(event: ProgressEvent) -> None:
                progress.update(
                    task_id,
                    completed=event.percent_complete,
                    description=describe(event),
                )

            return asyncio.run(operation(_observer))
