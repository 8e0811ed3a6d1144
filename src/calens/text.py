"""Formatting helpers exposed to changelog templates."""

from __future__ import annotations

CODE_FENCE = "```"


def capitalize(text: str) -> str:
    """Return ``text`` with its first character upper-cased.

    Unlike ``str.capitalize`` the remainder is left untouched.
    """
    if not text:
        return text
    return text[:1].upper() + text[1:]


def wrap_text(text: str, width: int, indent: int) -> str:
    """Reflow ``text`` into lines of at most ``width`` columns.

    Every line after the first starts with ``indent`` spaces, which do not
    count towards ``width``. Words are never split, so a word longer than
    ``width`` occupies a line on its own. Fenced code blocks are not reflowed;
    only the indentation is added after each line break.
    """
    if text.startswith(CODE_FENCE):
        return text.replace("\n", "\n" + " " * indent)

    lines: list[str] = []
    current: list[str] = []
    column = 0
    for word in text.split():
        if current and column + 1 + len(word) > width:
            lines.append(" ".join(current))
            current = []
            column = 0
        column += len(word) + (1 if current else 0)
        current.append(word)
    if current:
        lines.append(" ".join(current))
    return ("\n" + " " * indent).join(lines)
