"""Readers for training and testing datasets.

Training files hold one ``label<TAB>message`` row per line. Testing files
hold one raw message per line. Both are read as UTF-8 with undecodable
bytes replaced.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Optional

from .exceptions import MalformedRowError
from .models import LabeledMessage

logger = logging.getLogger(__name__)

FIELD_DELIMITER = "\t"


def _validate_path(path: Path) -> None:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if not path.is_file():
        raise IsADirectoryError(f"Not a regular file: {path}")


def _iter_lines(path: Path) -> Iterator[tuple[int, str]]:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line_number, line in enumerate(f, 1):
            yield line_number, line.rstrip("\r\n")


def parse_training_line(line: str, line_number: Optional[int] = None) -> LabeledMessage:
    """Split a training row on its first tab.

    Raises:
        MalformedRowError: If the row contains no tab.
    """
    label, sep, message = line.partition(FIELD_DELIMITER)
    if not sep:
        raise MalformedRowError(line, line_number)
    return LabeledMessage(label=label, message=message, line_number=line_number)


def read_training_file(path: str | Path) -> Iterator[LabeledMessage]:
    """Yield labeled rows from a training file.

    Blank lines are skipped silently; rows without a tab are logged and
    skipped so one bad line never aborts the load.
    """
    path = Path(path)
    _validate_path(path)

    skipped = 0
    for line_number, line in _iter_lines(path):
        if not line.strip():
            continue
        try:
            yield parse_training_line(line, line_number)
        except MalformedRowError as e:
            skipped += 1
            logger.warning("%s: %s", path.name, e)

    if skipped:
        logger.info("Skipped %d malformed rows in %s", skipped, path)


def read_testing_file(path: str | Path) -> Iterator[str]:
    """Yield one message per line of a testing file."""
    path = Path(path)
    _validate_path(path)
    for _, line in _iter_lines(path):
        yield line
