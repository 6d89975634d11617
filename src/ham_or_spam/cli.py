"""Command-line interface for ham-or-spam.

Provides ``classify``, ``train``, ``query`` and ``evaluate`` commands with
rich terminal output using the ``click`` and ``rich`` libraries.

Usage::

    ham-or-spam classify training.txt testing.txt
    ham-or-spam train training.txt --save model.json
    ham-or-spam query model.json "WINNER!! Claim your prize"
    ham-or-spam evaluate training.txt labeled_test.txt
"""

from __future__ import annotations

import dataclasses
import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .classifier import NaiveBayesClassifier
from .config import ClassifierConfig, parse_labels
from .dataset import read_testing_file, read_training_file
from .evaluation import ClassificationMetrics, evaluate as evaluate_examples
from .exceptions import HamOrSpamError
from .models import ClassificationResult

console = Console()
err_console = Console(stderr=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _fail(error: Exception) -> None:
    err_console.print(f"[bold red]Error:[/] {escape(str(error))}")
    sys.exit(1)


def _build_classifier(config: ClassifierConfig, training: Path) -> NaiveBayesClassifier:
    classifier = NaiveBayesClassifier(config.labels, smoothing=config.smoothing)
    classifier.train(read_training_file(training))
    return classifier


@click.group()
@click.version_option(package_name="ham-or-spam")
@click.option("--labels", "-l", default=None,
              help="Comma-separated closed label set (default: ham,spam).")
@click.option("--smoothing", type=float, default=None,
              help="Laplace smoothing constant (default: 1.0).")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False),
              default=None, help="Logging level for diagnostics on stderr.")
@click.pass_context
def main(ctx: click.Context, labels: str | None, smoothing: float | None,
         log_level: str | None) -> None:
    """📨 ham-or-spam — Naive Bayes message classifier.

    Train on tab-separated ``label<TAB>message`` rows and classify new
    messages into one of a closed set of labels.
    """
    overrides: dict = {}
    try:
        config = ClassifierConfig.from_env()
        if labels is not None:
            overrides["labels"] = parse_labels(labels)
        if smoothing is not None:
            overrides["smoothing"] = smoothing
        if log_level is not None:
            overrides["log_level"] = log_level.upper()
        config = dataclasses.replace(config, **overrides)
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    _configure_logging(config.log_level)
    ctx.obj = config


@main.command()
@click.argument("training", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("testing", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Choice(["text", "json"]), default="text",
              help="Output format.")
@click.pass_obj
def classify(config: ClassifierConfig, training: Path, testing: Path, output: str) -> None:
    """Train on TRAINING and print one label per line of TESTING.

    Example: ham-or-spam classify training.txt testing.txt
    """
    try:
        classifier = _build_classifier(config, training)
        if output == "json":
            results = [
                {"message": message, **classifier.classify(message).to_dict()}
                for message in read_testing_file(testing)
            ]
            click.echo(json.dumps(results, indent=2))
        else:
            for message in read_testing_file(testing):
                click.echo(classifier.query(message))
    except (HamOrSpamError, OSError) as e:
        _fail(e)


@main.command()
@click.argument("training", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--save", "-s", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Save the trained model to a JSON file.")
@click.pass_obj
def train(config: ClassifierConfig, training: Path, save: Path | None) -> None:
    """Train on TRAINING and show per-category statistics.

    Example: ham-or-spam train training.txt --save model.json
    """
    try:
        classifier = _build_classifier(config, training)
        if save:
            classifier.save(save)
    except (HamOrSpamError, OSError) as e:
        _fail(e)

    _render_stats(classifier, training.name)
    if save:
        console.print(f"[dim]Model saved to {save}[/]")


@main.command()
@click.argument("model", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("messages", nargs=-1, required=True)
@click.option("--output", "-o", type=click.Choice(["text", "rich", "json"]), default="text",
              help="Output format.")
def query(model: Path, messages: tuple[str, ...], output: str) -> None:
    """Classify MESSAGES with a model saved by ``train --save``.

    Example: ham-or-spam query model.json "Call 555-1234 to claim"
    """
    try:
        classifier = NaiveBayesClassifier.load(model)
        results = classifier.classify_batch(messages)
    except (HamOrSpamError, OSError) as e:
        _fail(e)

    if output == "json":
        click.echo(json.dumps(
            [{"message": m, **r.to_dict()} for m, r in zip(messages, results)],
            indent=2,
        ))
    elif output == "rich":
        _render_results(messages, results)
    else:
        for result in results:
            click.echo(result.label)


@main.command()
@click.argument("training", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("labeled_test", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.pass_obj
def evaluate(config: ClassifierConfig, training: Path, labeled_test: Path, output: str) -> None:
    """Train on TRAINING and score predictions for LABELED_TEST rows.

    Example: ham-or-spam evaluate training.txt labeled_test.txt
    """
    try:
        classifier = _build_classifier(config, training)
        metrics = evaluate_examples(classifier, read_training_file(labeled_test))
    except (HamOrSpamError, OSError) as e:
        _fail(e)

    if output == "json":
        click.echo(json.dumps(metrics.to_dict(), indent=2))
    else:
        _render_metrics(metrics, labeled_test.name)


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _render_stats(classifier: NaiveBayesClassifier, filename: str) -> None:
    """Render per-category training statistics."""
    table = Table(title=f"Training statistics — {filename}")
    table.add_column("Label", style="cyan")
    table.add_column("Messages", justify="right")
    table.add_column("Terms", justify="right")
    table.add_column("Vocabulary", justify="right")

    for stats in classifier.stats():
        table.add_row(
            stats.label,
            str(stats.message_count),
            str(stats.term_count),
            str(stats.vocabulary_size),
        )

    console.print(table)
    console.print(f"Total messages: [bold]{classifier.total_messages}[/]")


def _render_results(messages: tuple[str, ...], results: list[ClassificationResult]) -> None:
    """Render classification results as a rich table."""
    table = Table(title="Classification", show_lines=True)
    table.add_column("#", justify="right", width=4)
    table.add_column("Message (excerpt)", style="white", max_width=60)
    table.add_column("Label", style="cyan")
    table.add_column("Conf.", justify="center", width=6)

    for i, (message, result) in enumerate(zip(messages, results), 1):
        excerpt = message[:80] + ("..." if len(message) > 80 else "")
        label = f"{result.label} [yellow](tie)[/]" if result.is_tie else result.label
        table.add_row(str(i), excerpt, label, f"{result.confidence:.0%}")

    console.print(table)


def _render_metrics(metrics: ClassificationMetrics, filename: str) -> None:
    """Render evaluation metrics with a per-class table."""
    if metrics.accuracy > 0.9:
        style = "bold green"
    elif metrics.accuracy > 0.7:
        style = "bold yellow"
    else:
        style = "bold red"

    console.print(Panel(
        f"Messages: {metrics.total} | "
        f"Accuracy: [{style}]{metrics.accuracy:.2%}[/] | "
        f"Macro F1: {metrics.macro_f1:.4f}",
        title=f"📊 Evaluation — {filename}",
        border_style="blue",
    ))

    table = Table(show_lines=False)
    table.add_column("Label", style="cyan")
    table.add_column("Precision", justify="right")
    table.add_column("Recall", justify="right")
    table.add_column("F1", justify="right")
    table.add_column("Support", justify="right")

    for label in sorted(metrics.per_class):
        m = metrics.per_class[label]
        table.add_row(
            label,
            f"{m['precision']:.4f}",
            f"{m['recall']:.4f}",
            f"{m['f1']:.4f}",
            str(metrics.support.get(label, 0)),
        )

    console.print(table)


if __name__ == "__main__":
    main()
