"""Unit tests for the formatting helpers."""

from __future__ import annotations

import pytest

from calens.text import capitalize, wrap_text

LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod "
    "tempor incididunt ut labore et dolore magna aliqua."
)


@pytest.mark.parametrize(
    ("text", "width", "indent", "expected"),
    [
        ("Example string", 80, 4, "Example string"),
        (
            LOREM,
            70,
            3,
            "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do\n"
            "   eiusmod tempor incididunt ut labore et dolore magna aliqua.",
        ),
        (
            LOREM,
            55,
            2,
            "Lorem ipsum dolor sit amet, consectetur adipiscing\n"
            "  elit, sed do eiusmod tempor incididunt ut labore et\n"
            "  dolore magna aliqua.",
        ),
        (
            "```\nexample\n   with\n       random spaces\n```",
            10,
            3,
            "```\n   example\n      with\n          random spaces\n   ```",
        ),
    ],
)
def test_wrap_text(text: str, width: int, indent: int, expected: str) -> None:
    assert wrap_text(text, width, indent) == expected


def test_wrap_text_keeps_long_words_whole() -> None:
    assert wrap_text("a supercalifragilistic b", 5, 2) == "a\n  supercalifragilistic\n  b"


def test_wrap_text_lines_fit_width_and_keep_words() -> None:
    wrapped = wrap_text(LOREM, 30, 4)

    for line in wrapped.split("\n"):
        assert len(line.removeprefix(" " * 4)) <= 30
    assert wrapped.split() == LOREM.split()


def test_wrap_text_empty() -> None:
    assert wrap_text("", 10, 2) == ""


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", ""),
        ("subject line", "Subject line"),
        ("Subject line", "Subject line"),
        ("mIXED case", "MIXED case"),
        ("```code", "```code"),
    ],
)
def test_capitalize(text: str, expected: str) -> None:
    assert capitalize(text) == expected
    assert capitalize(capitalize(text)) == capitalize(text)
