"""Data models shared by the classifier, dataset readers and CLI."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class MessageType(str, Enum):
    """Default closed label set for SMS spam filtering."""

    HAM = "ham"
    SPAM = "spam"


@dataclass
class LabeledMessage:
    """A single training or evaluation row."""

    label: str
    message: str
    line_number: Optional[int] = None


@dataclass
class CategoryStats:
    """Training statistics for one category."""

    label: str
    message_count: int
    term_count: int
    vocabulary_size: int

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "message_count": self.message_count,
            "term_count": self.term_count,
            "vocabulary_size": self.vocabulary_size,
        }


@dataclass
class ClassificationResult:
    """Result of classifying a single message.

    Attributes:
        label: The winning category.
        scores: Natural-log joint score per category. ``-inf`` marks a
            category whose score is exactly zero.
        tied: Every category that shared the maximum score. Has more than
            one entry only when a collision was resolved by declaration order.
    """

    label: str
    scores: dict[str, float]
    tied: list[str] = field(default_factory=list)

    @property
    def is_tie(self) -> bool:
        return len(self.tied) > 1

    @property
    def probabilities(self) -> dict[str, float]:
        """Scores normalized to sum to 1, using log-sum-exp."""
        finite = [s for s in self.scores.values() if s != -math.inf]
        if not finite:
            share = 1.0 / len(self.scores) if self.scores else 0.0
            return {label: share for label in self.scores}
        max_score = max(finite)
        exp_scores = {
            label: (math.exp(s - max_score) if s != -math.inf else 0.0)
            for label, s in self.scores.items()
        }
        total = sum(exp_scores.values())
        return {label: v / total for label, v in exp_scores.items()}

    @property
    def confidence(self) -> float:
        return self.probabilities.get(self.label, 0.0)

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "confidence": round(self.confidence, 4),
            "probabilities": {
                k: round(v, 4) for k, v in sorted(
                    self.probabilities.items(),
                    key=lambda x: x[1],
                    reverse=True,
                )
            },
            "tied": list(self.tied),
        }
