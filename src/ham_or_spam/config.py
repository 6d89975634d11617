"""Runtime configuration loaded from the environment.

Values are read from process environment variables, after loading a
``.env`` file from the working directory if one exists:

- ``HAM_OR_SPAM_LABELS``: comma-separated closed label set (``ham,spam``)
- ``HAM_OR_SPAM_SMOOTHING``: Laplace smoothing constant (``1.0``)
- ``HAM_OR_SPAM_LOG_LEVEL``: logging level name (``WARNING``)
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .classifier import DEFAULT_SMOOTHING
from .models import MessageType

ENV_PREFIX = "HAM_OR_SPAM_"
DEFAULT_LABELS: tuple[str, ...] = tuple(m.value for m in MessageType)
DEFAULT_LOG_LEVEL = "WARNING"


def parse_labels(raw: str) -> tuple[str, ...]:
    """Parse a comma-separated label list, dropping blanks and duplicates."""
    labels: list[str] = []
    for part in raw.split(","):
        label = part.strip()
        if label and label not in labels:
            labels.append(label)
    if not labels:
        raise ValueError(f"No labels found in {raw!r}")
    return tuple(labels)


def parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level: {raw!r}")
    return level


@dataclass(frozen=True)
class ClassifierConfig:
    """Settings for building a classifier and running the CLI."""

    labels: tuple[str, ...] = DEFAULT_LABELS
    smoothing: float = DEFAULT_SMOOTHING
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if not self.labels:
            raise ValueError("labels must not be empty")
        if not (math.isfinite(self.smoothing) and self.smoothing > 0):
            raise ValueError(
                f"smoothing must be a finite positive number, got {self.smoothing}"
            )

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        dotenv: bool = True,
    ) -> "ClassifierConfig":
        """Build a config from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.
            dotenv: Load a ``.env`` file into ``os.environ`` first.

        Raises:
            ValueError: If a variable holds an invalid value.
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        env = os.environ if environ is None else environ

        kwargs: dict = {}
        if raw := env.get(f"{ENV_PREFIX}LABELS"):
            kwargs["labels"] = parse_labels(raw)
        if raw := env.get(f"{ENV_PREFIX}SMOOTHING"):
            try:
                kwargs["smoothing"] = float(raw)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}SMOOTHING must be a number, got {raw!r}") from None
        if raw := env.get(f"{ENV_PREFIX}LOG_LEVEL"):
            kwargs["log_level"] = parse_log_level(raw)
        return cls(**kwargs)
