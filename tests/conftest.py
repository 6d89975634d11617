"""Shared test fixtures for ham-or-spam tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from ham_or_spam.classifier import NaiveBayesClassifier

TRAINING_ROWS = [
    ("ham", "Are you coming to lunch today?"),
    ("ham", "Ok see you at home later"),
    ("ham", "Can you pick up milk on the way home"),
    ("ham", "I will call you when I get to the office"),
    ("spam", "WINNER!! You have won a free prize call 09061701461 now"),
    ("spam", "Free entry to win a cash prize text WIN to 80086"),
    ("spam", "URGENT your mobile number has won a prize claim now"),
]


@pytest.fixture
def scenario_classifier() -> NaiveBayesClassifier:
    """Three-message ham/spam classifier used in end-to-end checks."""
    classifier = NaiveBayesClassifier(["ham", "spam"])
    classifier.add("ham", "hello world")
    classifier.add("spam", "buy viagra now")
    classifier.add("ham", "hello there friend")
    return classifier


@pytest.fixture
def sms_classifier() -> NaiveBayesClassifier:
    """Classifier trained on a small SMS-style corpus."""
    classifier = NaiveBayesClassifier(["ham", "spam"])
    for label, message in TRAINING_ROWS:
        classifier.add(label, message)
    return classifier


@pytest.fixture
def training_file(tmp_path: Path) -> Path:
    """Tab-separated training file with a blank line and a malformed row."""
    lines = [f"{label}\t{message}" for label, message in TRAINING_ROWS]
    lines.insert(2, "")
    lines.insert(4, "this row has no tab delimiter")
    file = tmp_path / "training.txt"
    file.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return file


@pytest.fixture
def testing_file(tmp_path: Path) -> Path:
    """One raw message per line."""
    file = tmp_path / "testing.txt"
    file.write_text(
        "see you at home\n"
        "you have won a free prize\n"
        "call me when you get to the office\n",
        encoding="utf-8",
    )
    return file


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run from an empty directory with no ham-or-spam variables set."""
    for name in ("HAM_OR_SPAM_LABELS", "HAM_OR_SPAM_SMOOTHING", "HAM_OR_SPAM_LOG_LEVEL"):
        # setenv first so anything a .env file loads is undone afterwards
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
