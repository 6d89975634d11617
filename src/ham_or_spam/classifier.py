"""Naive Bayes message classifier with Laplace smoothing.

The classifier keeps one :class:`CategoryModel` per label in a closed,
ordered category set. Each model counts normalized terms from the
training messages of its category. At query time every category is
scored with

    P(c) * Product(P(term_i | c))

where, with smoothing constant ``w``:

    P(c)        = (messages(c) + w) / (total messages + w * K)
    P(term | c) = (occurrences(term, c) + w) / (terms(c) + w * T)

``K`` is the number of categories with at least one training message and
``T`` the number of terms in the query. A category without any counted
terms scores exactly zero and can never win. Scores are accumulated as
natural logs, which preserves ordering and avoids underflow on long
messages.

Example::

    classifier = NaiveBayesClassifier(["ham", "spam"])
    classifier.add("ham", "see you at lunch")
    classifier.add("spam", "WIN a free prize now")
    classifier.query("free prize")  # "spam"
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .exceptions import InvalidLabelError, ModelFormatError, UntrainedClassifierError
from .models import CategoryStats, ClassificationResult, LabeledMessage, MessageType
from .preprocessing import normalize_message, normalize_term, split_terms

logger = logging.getLogger(__name__)

DEFAULT_SMOOTHING = 1.0
MODEL_FORMAT_VERSION = 1

Categories = Union[Iterable[str], type[Enum]]


# ---------------------------------------------------------------------------
# Per-category term statistics
# ---------------------------------------------------------------------------

def _is_count(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class CategoryModel:
    """Term-frequency statistics for a single category.

    ``term_count`` always equals the sum of all stored occurrence counts,
    and no term is ever stored with a zero count.
    """

    def __init__(self) -> None:
        self._term_counts: dict[str, int] = {}
        self._total_terms = 0
        self._message_count = 0

    def add_message(self, message: str) -> None:
        """Count every term of ``message`` and record one more message."""
        for term in normalize_message(message):
            self._count_term(term)
        self._message_count += 1

    def _count_term(self, term: str) -> None:
        self._term_counts[term] = self._term_counts.get(term, 0) + 1
        self._total_terms += 1

    def get_occurrences(self, term: str) -> int:
        """Return how often ``term`` was seen in this category (0 if never)."""
        return self._term_counts.get(normalize_term(term), 0)

    @property
    def message_count(self) -> int:
        return self._message_count

    @property
    def term_count(self) -> int:
        return self._total_terms

    @property
    def vocabulary_size(self) -> int:
        return len(self._term_counts)

    @property
    def term_counts(self) -> dict[str, int]:
        """A copy of the normalized term counts."""
        return dict(self._term_counts)

    def to_dict(self) -> dict:
        return {
            "message_count": self._message_count,
            "term_counts": dict(self._term_counts),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CategoryModel":
        """Rebuild a model, recomputing the term total from the counts."""
        try:
            message_count = data["message_count"]
            counts = {str(term): n for term, n in data["term_counts"].items()}
        except (KeyError, TypeError, AttributeError) as e:
            raise ModelFormatError(f"Invalid category model data: {e}") from e

        if not _is_count(message_count):
            raise ModelFormatError(f"Message count must be an integer: {message_count!r}")
        not_integers = [term for term, n in counts.items() if not _is_count(n)]
        if not_integers:
            raise ModelFormatError(f"Non-integer counts for terms: {not_integers[:5]}")
        if message_count < 0:
            raise ModelFormatError(f"Negative message count: {message_count}")
        bad = [term for term, n in counts.items() if n <= 0]
        if bad:
            raise ModelFormatError(f"Non-positive counts for terms: {bad[:5]}")

        model = cls()
        model._message_count = message_count
        model._term_counts = counts
        model._total_terms = sum(counts.values())
        return model

    def __repr__(self) -> str:
        return (
            f"CategoryModel(messages={self._message_count}, "
            f"terms={self._total_terms}, vocabulary={len(self._term_counts)})"
        )


# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------

def _coerce_categories(categories: Categories) -> tuple[str, ...]:
    """Turn an Enum class or iterable of labels into an ordered label tuple."""
    if isinstance(categories, type) and issubclass(categories, Enum):
        raw = [m.value if isinstance(m.value, str) else m.name for m in categories]
    elif isinstance(categories, str):
        raw = [categories]
    else:
        raw = [_label_key(c) for c in categories]

    labels: list[str] = []
    for label in raw:
        if label not in labels:
            labels.append(label)
    if not labels:
        raise InvalidLabelError("At least one category label is required")
    return tuple(labels)


def _label_key(label: Union[str, Enum]) -> str:
    if isinstance(label, Enum):
        return label.value if isinstance(label.value, str) else label.name
    return str(label)


class NaiveBayesClassifier:
    """Naive Bayes classifier over a closed set of category labels.

    Args:
        categories: The valid labels, as an iterable of strings or an Enum
            class. Order matters: it breaks ties between equal scores.
        smoothing: Laplace smoothing constant (must be positive).
        preregister: Create an empty model for every label up front instead
            of on the first training message.
        logger: Logger for discarded rows, collisions and score traces.
    """

    def __init__(
        self,
        categories: Categories = MessageType,
        *,
        smoothing: float = DEFAULT_SMOOTHING,
        preregister: bool = False,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if not (math.isfinite(smoothing) and smoothing > 0):
            raise ValueError(f"smoothing must be a finite positive number, got {smoothing}")
        self._categories = _coerce_categories(categories)
        self._smoothing = float(smoothing)
        self._logger = logger or logging.getLogger(__name__)
        self._models: dict[str, CategoryModel] = {}
        self._total_messages = 0
        if preregister:
            for label in self._categories:
                self._models[label] = CategoryModel()

    @property
    def categories(self) -> tuple[str, ...]:
        return self._categories

    @property
    def smoothing(self) -> float:
        return self._smoothing

    @property
    def total_messages(self) -> int:
        return self._total_messages

    @property
    def is_trained(self) -> bool:
        return self._total_messages > 0

    def model(self, label: Union[str, Enum]) -> Optional[CategoryModel]:
        """Return the model for ``label``, or None if it was never created."""
        return self._models.get(_label_key(label))

    # -- training -------------------------------------------------------

    def add(self, label: Union[str, Enum], message: str) -> bool:
        """Add one training message.

        A label outside the category set is logged and discarded so that a
        bad row never aborts a bulk load.

        Returns:
            True if the message was counted, False if it was discarded.
        """
        key = _label_key(label)
        if key not in self._categories:
            self._logger.warning("Discarding message with invalid label [%s]", key)
            return False

        model = self._models.get(key)
        if model is None:
            model = self._models[key] = CategoryModel()
        model.add_message(message.lower())
        self._total_messages += 1
        return True

    def train(self, examples: Iterable[LabeledMessage]) -> int:
        """Add every example and return how many were accepted."""
        accepted = 0
        for example in examples:
            if self.add(example.label, example.message):
                accepted += 1
        self._logger.info(
            "Trained on %d messages (%d total)", accepted, self._total_messages,
        )
        return accepted

    # -- querying -------------------------------------------------------

    def query(self, message: str) -> str:
        """Return the most probable label for ``message``.

        Raises:
            UntrainedClassifierError: If no training message was accepted yet.
        """
        return self.classify(message).label

    def classify(self, message: str) -> ClassificationResult:
        """Score ``message`` against every category and pick the best.

        Equal maximum scores are resolved in favour of the label declared
        first and logged as a collision.

        Raises:
            UntrainedClassifierError: If no training message was accepted yet.
        """
        scores = self.scores(message)
        best = max(scores.values())
        tied = [label for label, score in scores.items() if score == best]

        if len(tied) > 1:
            self._logger.warning(
                "Score collision (%s) between %s; choosing %r",
                best, ", ".join(tied), tied[0],
            )
        return ClassificationResult(label=tied[0], scores=scores, tied=tied)

    def classify_batch(self, messages: Iterable[str]) -> list[ClassificationResult]:
        return [self.classify(m) for m in messages]

    def scores(self, message: str) -> dict[str, float]:
        """Natural-log joint score per category, in declaration order."""
        if self._total_messages == 0:
            raise UntrainedClassifierError("No training messages added yet")

        terms = split_terms(message)
        trained_categories = sum(1 for m in self._models.values() if m.message_count > 0)

        scores: dict[str, float] = {}
        for label in self._categories:
            model = self._models.get(label)
            if model is None:
                continue
            score = self._log_prior(model, trained_categories)
            score += self._log_message_likelihood(model, terms)
            self._logger.debug("Scored %r: %s", label, score)
            scores[label] = score
        return scores

    def _log_prior(self, model: CategoryModel, trained_categories: int) -> float:
        w = self._smoothing
        return math.log(
            (model.message_count + w) / (self._total_messages + w * trained_categories)
        )

    def _log_message_likelihood(self, model: CategoryModel, terms: list[str]) -> float:
        # No counted terms: every likelihood is zero
        if model.term_count == 0:
            return -math.inf

        w = self._smoothing
        denominator = model.term_count + w * len(terms)
        return sum(
            math.log((model.get_occurrences(term) + w) / denominator)
            for term in terms
        )

    # -- introspection --------------------------------------------------

    def stats(self) -> list[CategoryStats]:
        """Per-category statistics in declaration order."""
        return [
            CategoryStats(
                label=label,
                message_count=model.message_count,
                term_count=model.term_count,
                vocabulary_size=model.vocabulary_size,
            )
            for label in self._categories
            if (model := self._models.get(label)) is not None
        ]

    def snapshot(self) -> "NaiveBayesClassifier":
        """Return an independent copy for readers while training continues."""
        return self.from_dict(self.to_dict(), logger=self._logger)

    # -- persistence ----------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "version": MODEL_FORMAT_VERSION,
            "categories": list(self._categories),
            "smoothing": self._smoothing,
            "total_messages": self._total_messages,
            "models": {
                label: self._models[label].to_dict()
                for label in self._categories
                if label in self._models
            },
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> "NaiveBayesClassifier":
        """Rebuild a classifier from :meth:`to_dict` output.

        Raises:
            ModelFormatError: On a missing field, unknown version, or counts
                that do not add up.
            InvalidLabelError: If a model is stored under an unknown label.
        """
        if not isinstance(data, dict):
            raise ModelFormatError("Model data must be a JSON object")
        version = data.get("version")
        if version != MODEL_FORMAT_VERSION:
            raise ModelFormatError(f"Unsupported model format version: {version!r}")

        try:
            nb = cls(data["categories"], smoothing=data["smoothing"], logger=logger)
            models = data["models"]
            total_messages = data["total_messages"]
        except (KeyError, TypeError, ValueError) as e:
            raise ModelFormatError(f"Invalid model data: {e}") from e
        if not _is_count(total_messages):
            raise ModelFormatError(f"total_messages must be an integer, got {total_messages!r}")

        if not isinstance(models, dict):
            raise ModelFormatError("Model data field 'models' must be an object")
        for label, model_data in models.items():
            if label not in nb._categories:
                raise InvalidLabelError(f"Model stored for unknown label: {label!r}")
            nb._models[label] = CategoryModel.from_dict(model_data)

        counted = sum(m.message_count for m in nb._models.values())
        if counted != total_messages:
            raise ModelFormatError(
                f"total_messages ({total_messages}) does not match "
                f"per-category counts ({counted})"
            )
        nb._total_messages = total_messages
        return nb

    def save(self, path: Union[str, Path]) -> None:
        """Save the model to a JSON file, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        self._logger.info("Saved model to %s", path)

    @classmethod
    def load(
        cls,
        path: Union[str, Path],
        *,
        logger: Optional[logging.Logger] = None,
    ) -> "NaiveBayesClassifier":
        """Load a model saved with :meth:`save`."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ModelFormatError(f"{path} is not valid JSON: {e}") from e
        return cls.from_dict(data, logger=logger)

    def __repr__(self) -> str:
        return (
            f"NaiveBayesClassifier(categories={list(self._categories)}, "
            f"total_messages={self._total_messages})"
        )
