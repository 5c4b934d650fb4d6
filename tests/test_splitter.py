"""Tests for splitting raw text into segments and entries."""

import re

import pytest

from logweave.core.splitter import split_entries, split_keep

DATE = re.compile(r"^\d{4}-\d{2}-\d{2}", re.MULTILINE)

TEXTS = [
    "",
    "no timestamps here\n",
    "2024-01-01 a\n2024-01-02 b\n",
    "preamble\n2024-01-01 a\n  continued\n2024-01-02 b",
    "2024-01-01 a\n\n\n2024-01-02 b\n\n",
    "2024-01-012024-01-02 not at line start",
]

@pytest.mark.parametrize("text", TEXTS)
@pytest.mark.parametrize("pattern", [DATE, re.compile(r"\n"), re.compile(r"b|a")])
def test_split_keep_is_lossless(text, pattern):
    """Test that joining the segments gives back the input."""
    segments = split_keep(pattern, text)
    assert "".join(segments) == text
    assert all(segments)

@pytest.mark.parametrize("text", TEXTS)
def test_split_entries_is_lossless(text):
    entries = split_entries(DATE, text)
    assert "".join(entries) == text
    assert all(entries)

def test_split_keep_without_match():
    """Test that text without delimiters comes back whole."""
    assert split_keep(DATE, "just one line\n") == ["just one line\n"]

def test_split_keep_alternates_spans_and_delimiters():
    text = "pre\n2024-01-01 a\n2024-01-02 b"
    assert split_keep(DATE, text) == ["pre\n", "2024-01-01", " a\n", "2024-01-02", " b"]

def test_split_keep_leading_delimiter():
    """Test that no empty leading segment is produced."""
    assert split_keep(DATE, "2024-01-01 a") == ["2024-01-01", " a"]

def test_split_keep_adjacent_delimiters():
    pattern = re.compile(r"\d{4}-\d{2}-\d{2}")
    assert split_keep(pattern, "2024-01-012024-01-02") == ["2024-01-01", "2024-01-02"]

def test_split_keep_empty_text():
    assert split_keep(DATE, "") == []

def test_split_entries_one_per_timestamp():
    """Test that entries spanning several lines stay together."""
    text = "2024-01-01 a\n  trace 1\n  trace 2\n2024-01-02 b\n"
    assert split_entries(DATE, text) == [
        "2024-01-01 a\n  trace 1\n  trace 2\n",
        "2024-01-02 b\n",
    ]

def test_split_entries_preamble_is_separate():
    text = "-- Journal begins --\n2024-01-01 a\n"
    assert split_entries(DATE, text) == ["-- Journal begins --\n", "2024-01-01 a\n"]

def test_split_entries_zero_width_delimiter():
    """Test that a lookahead delimiter still marks entry boundaries."""
    pattern = re.compile(r"^(?=\d{4}-)", re.MULTILINE)
    assert split_entries(pattern, "2024-01-01 a\n2024-01-02 b\n") == [
        "2024-01-01 a\n",
        "2024-01-02 b\n",
    ]
