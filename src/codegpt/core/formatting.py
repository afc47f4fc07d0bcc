"""Text post-processing for completion output."""
from __future__ import annotations

import re
from typing import Dict, List

from rich.cells import cell_len

# Matches every line start, including after a trailing newline.
LINE_START = re.compile(r"^", re.MULTILINE)

DISPLAY_WIDTH = 80

COMMENT_MARKERS: Dict[str, str] = {
    **dict.fromkeys(("rust", "c", "javascript", "typescript", "solidity"), "// "),
    **dict.fromkeys(("dockerfile", "bash", "zsh", "sh", "python", "ruby"), "# "),
    **dict.fromkeys(("lua", "sql"), "-- "),
}


def format_as_comment(text: str, lang: str) -> str:
    """Prefix every line of ``text`` with the single-line comment marker of ``lang``.

    Unknown languages get the text back unchanged.
    """
    marker = COMMENT_MARKERS.get(lang)
    if marker is None:
        return text
    return LINE_START.sub(marker, text)


def double_newlines(text: str) -> str:
    """Insert an extra line break at the start of every line (for editor buffers)."""
    return LINE_START.sub("\n\r", text)


def _wrap_line(line: str, width: int) -> List[str]:
    """Greedily fill lines of at most ``width`` terminal cells.

    Breaks only at whitespace; leading indentation stays on the first line.
    """
    words = line.split()
    if not words:
        return [""]

    indent = line[: len(line) - len(line.lstrip())]
    lines: List[str] = []
    current = indent + words[0]
    current_width = cell_len(current)
    for word in words[1:]:
        word_width = cell_len(word)
        if current_width + 1 + word_width > width:
            lines.append(current)
            current, current_width = word, word_width
        else:
            current += " " + word
            current_width += 1 + word_width
    lines.append(current)
    return lines


def wrap_for_display(text: str, width: int = DISPLAY_WIDTH) -> str:
    """Re-flow each line of ``text`` to ``width`` display columns.

    Wide characters count as two columns. Words longer than ``width`` are
    left whole and overflow the line. Blank lines are kept.
    """
    wrapped_lines: List[str] = []
    for line in text.split("\n"):
        wrapped_lines.extend(_wrap_line(line, width))
    return "\n".join(wrapped_lines)
