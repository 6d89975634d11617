"""Evaluation metrics for scoring predictions against labeled messages."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from .classifier import NaiveBayesClassifier
from .models import LabeledMessage


@dataclass
class ClassificationMetrics:
    """Evaluation metrics for a set of predictions.

    Attributes:
        accuracy: Overall accuracy.
        per_class: Per-class precision, recall, F1 scores.
        macro_f1: Unweighted mean F1 across classes.
        confusion_matrix: ``{true_label: {predicted_label: count}}``.
        support: Per-class sample counts in the true labels.
    """

    accuracy: float = 0.0
    per_class: dict[str, dict[str, float]] = field(default_factory=dict)
    macro_f1: float = 0.0
    confusion_matrix: dict[str, dict[str, int]] = field(default_factory=dict)
    support: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.support.values())

    def to_dict(self) -> dict:
        return {
            "accuracy": round(self.accuracy, 4),
            "macro_f1": round(self.macro_f1, 4),
            "per_class": {
                cls: {k: round(v, 4) for k, v in metrics.items()}
                for cls, metrics in self.per_class.items()
            },
            "confusion_matrix": self.confusion_matrix,
            "support": self.support,
        }

    def summary(self) -> str:
        """Human-readable summary of metrics."""
        lines = [
            f"Accuracy: {self.accuracy:.2%}",
            f"Macro F1: {self.macro_f1:.4f}",
            "",
            f"{'Class':<12} {'Precision':>10} {'Recall':>10} {'F1':>10} {'Support':>10}",
            "-" * 54,
        ]
        for cls in sorted(self.per_class):
            m = self.per_class[cls]
            lines.append(
                f"{cls:<12} {m['precision']:>10.4f} {m['recall']:>10.4f} "
                f"{m['f1']:>10.4f} {self.support.get(cls, 0):>10}"
            )
        return "\n".join(lines)


def compute_metrics(y_true: list[str], y_pred: list[str]) -> ClassificationMetrics:
    """Compute classification metrics from true and predicted labels.

    Raises:
        ValueError: If the two lists differ in length.
    """
    if len(y_true) != len(y_pred):
        raise ValueError("y_true and y_pred must have the same length")

    pairs = Counter(zip(y_true, y_pred))
    support = Counter(y_true)
    predicted = Counter(y_pred)
    labels = sorted(support.keys() | predicted.keys())

    confusion = {
        actual: {guess: pairs[actual, guess] for guess in labels}
        for actual in labels
    }

    per_class: dict[str, dict[str, float]] = {}
    for label in labels:
        hits = pairs[label, label]
        precision = hits / predicted[label] if predicted[label] else 0.0
        recall = hits / support[label] if support[label] else 0.0
        total = precision + recall
        per_class[label] = {
            "precision": precision,
            "recall": recall,
            "f1": 2 * precision * recall / total if total else 0.0,
        }

    correct = sum(pairs[label, label] for label in labels)
    return ClassificationMetrics(
        accuracy=correct / len(y_true) if y_true else 0.0,
        per_class=per_class,
        macro_f1=(
            sum(m["f1"] for m in per_class.values()) / len(labels) if labels else 0.0
        ),
        confusion_matrix=confusion,
        support=dict(support),
    )


def evaluate(
    classifier: NaiveBayesClassifier,
    examples: Iterable[LabeledMessage],
) -> ClassificationMetrics:
    """Classify every example and compare against its label."""
    y_true: list[str] = []
    y_pred: list[str] = []
    for example in examples:
        y_true.append(example.label)
        y_pred.append(classifier.query(example.message))
    return compute_metrics(y_true, y_pred)
