"""Advisory progress reporting for generation runs."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ordergen.lib.logging_config import get_logger

logger = get_logger("progress")


@dataclass(frozen=True)
class ProgressEvent:
    """A coarse status update.

    Attributes:
        message: Human-readable step description.
        progress: Completion percentage, 0-100.
    """

    message: str
    progress: int


ProgressObserver = Callable[[ProgressEvent], None]


def notify(observer: ProgressObserver | None, message: str, progress: int) -> None:
    """Send an event to the observer, if any.

    Observer failures are logged and never propagate into the caller.
    """
    if observer is None:
        return
    try:
        observer(ProgressEvent(message=message, progress=progress))
    except Exception:
        logger.exception("Progress observer failed on '%s'", message)
