"""Error conditions raised by the classifier and its dataset readers."""

from __future__ import annotations


class HamOrSpamError(Exception):
    """Base class for all ham-or-spam errors."""


class UntrainedClassifierError(HamOrSpamError, RuntimeError):
    """A query was made before any training message was accepted."""


class InvalidLabelError(HamOrSpamError, ValueError):
    """A label is not a member of the classifier's closed category set."""


class MalformedRowError(HamOrSpamError, ValueError):
    """A training line has no tab between label and message."""

    def __init__(self, line: str, line_number: int | None = None) -> None:
        self.line = line
        self.line_number = line_number
        where = f" at line {line_number}" if line_number is not None else ""
        super().__init__(f"Training row has no tab delimiter{where}: {line[:60]!r}")


class ModelFormatError(HamOrSpamError, ValueError):
    """A persisted model could not be decoded."""
