"""ham-or-spam -- Naive Bayes message classification over a closed label set."""

__version__ = "0.1.0"

from .classifier import CategoryModel, NaiveBayesClassifier
from .config import ClassifierConfig
from .dataset import parse_training_line, read_testing_file, read_training_file
from .evaluation import ClassificationMetrics, compute_metrics, evaluate
from .exceptions import (
    HamOrSpamError,
    InvalidLabelError,
    MalformedRowError,
    ModelFormatError,
    UntrainedClassifierError,
)
from .models import CategoryStats, ClassificationResult, LabeledMessage, MessageType
from .preprocessing import normalize_message, normalize_term, split_terms

__all__ = [
    # Core
    "NaiveBayesClassifier",
    "CategoryModel",
    "normalize_term",
    "normalize_message",
    "split_terms",
    # Models
    "MessageType",
    "LabeledMessage",
    "CategoryStats",
    "ClassificationResult",
    # Datasets
    "parse_training_line",
    "read_training_file",
    "read_testing_file",
    # Evaluation
    "ClassificationMetrics",
    "compute_metrics",
    "evaluate",
    # Configuration
    "ClassifierConfig",
    # Errors
    "HamOrSpamError",
    "UntrainedClassifierError",
    "InvalidLabelError",
    "MalformedRowError",
    "ModelFormatError",
]
