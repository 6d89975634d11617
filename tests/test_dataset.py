"""Tests for training and testing file readers."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from ham_or_spam.dataset import (
    parse_training_line,
    read_testing_file,
    read_training_file,
)
from ham_or_spam.exceptions import MalformedRowError


class TestParseTrainingLine:

    def test_splits_on_first_tab(self):
        row = parse_training_line("spam\tfree\tprize", line_number=7)
        assert row.label == "spam"
        assert row.message == "free\tprize"
        assert row.line_number == 7

    def test_empty_message_allowed(self):
        row = parse_training_line("ham\t")
        assert row.label == "ham"
        assert row.message == ""

    def test_missing_tab_raises(self):
        with pytest.raises(MalformedRowError) as exc_info:
            parse_training_line("no delimiter here", line_number=4)
        assert exc_info.value.line_number == 4
        assert "line 4" in str(exc_info.value)


class TestReadTrainingFile:

    def test_skips_blank_and_malformed_rows(self, training_file: Path, caplog):
        with caplog.at_level(logging.WARNING, logger="ham_or_spam.dataset"):
            rows = list(read_training_file(training_file))
        assert len(rows) == 7
        assert [r.label for r in rows].count("spam") == 3
        assert "no tab delimiter" in caplog.text

    def test_line_numbers(self, tmp_path: Path):
        file = tmp_path / "train.txt"
        file.write_text("ham\thi\n\nspam\twin\n", encoding="utf-8")
        rows = list(read_training_file(file))
        assert [r.line_number for r in rows] == [1, 3]

    def test_crlf_line_endings(self, tmp_path: Path):
        file = tmp_path / "train.txt"
        file.write_bytes(b"ham\thello there\r\nspam\twin now\r\n")
        rows = list(read_training_file(file))
        assert rows[0].message == "hello there"
        assert rows[1].message == "win now"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            list(read_training_file(tmp_path / "nope.txt"))

    def test_directory_rejected(self, tmp_path: Path):
        with pytest.raises(IsADirectoryError):
            list(read_training_file(tmp_path))


class TestReadTestingFile:

    def test_one_message_per_line(self, testing_file: Path):
        messages = list(read_testing_file(testing_file))
        assert messages == [
            "see you at home",
            "you have won a free prize",
            "call me when you get to the office",
        ]

    def test_blank_lines_are_messages(self, tmp_path: Path):
        file = tmp_path / "test.txt"
        file.write_text("hello\n\nworld\n", encoding="utf-8")
        assert list(read_testing_file(file)) == ["hello", "", "world"]

    def test_undecodable_bytes_replaced(self, tmp_path: Path):
        file = tmp_path / "test.txt"
        file.write_bytes(b"caf\xe9 prize\n")
        assert list(read_testing_file(file)) == ["caf\ufffd prize"]
