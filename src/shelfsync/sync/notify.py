# ABOUTME: Outcome records and the Notifier protocol for reporting sync results.
# ABOUTME: LoggingNotifier is the default sink; UIs plug in their own notifier.

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from shelfsync.catalog.types import RecordId
from shelfsync.errors import StoreError

logger = logging.getLogger(__name__)

_SUCCESS_MESSAGES = {
    "add": "Book added successfully!",
    "update": "Book updated successfully!",
    "delete": "Book deleted successfully!",
    "fetch": "Books loaded",
}

_FAILURE_MESSAGES = {
    "add": "Failed to add book",
    "update": "Failed to update book",
    "delete": "Failed to delete book",
    "fetch": "Failed to fetch books",
}


@dataclass(frozen=True)
class Outcome:
    """Structured result of a fetch or mutation, handed to a Notifier."""

    action: str
    success: bool
    record_id: RecordId | None = None
    error: StoreError | None = None

    @property
    def reason(self) -> str | None:
        """The error's reason tag, or None on success."""
        return self.error.reason if self.error is not None else None

    @property
    def message(self) -> str:
        table = _SUCCESS_MESSAGES if self.success else _FAILURE_MESSAGES
        return table.get(self.action, self.action)


@runtime_checkable
class Notifier(Protocol):
    """Receives outcomes for user-facing reporting."""

    def notify(self, outcome: Outcome) -> None: ...


class LoggingNotifier:
    """Notifier that writes outcomes to the module logger."""

    def notify(self, outcome: Outcome) -> None:
        if outcome.success:
            logger.info("%s", outcome.message)
        else:
            logger.error("%s (%s): %s", outcome.message, outcome.reason, outcome.error)


class RecordingNotifier:
    """Notifier that keeps every outcome in memory, in arrival order."""

    def __init__(self) -> None:
        self.outcomes: list[Outcome] = []

    def notify(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)
