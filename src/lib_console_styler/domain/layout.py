"""Width-aware text layout that ignores escape sequences.

Purpose
-------
Measure, pad, wrap and truncate text in terminal display cells. Escape
sequences count as zero cells, wide glyphs as two and combining marks as
zero, so boxes and tables stay aligned with coloured or multi-byte content.

Contents
--------
* :func:`clusters` / :func:`measure` – grapheme grouping and cell counting.
* :func:`pad`, :func:`fit`, :func:`truncate`, :func:`wrap` – layout helpers.

System Role
-----------
Consumed by every renderer and by the console log formatter. Per-glyph widths
come from :func:`rich.cells.cell_len`, the same table Rich uses for its own
layout.
"""

from __future__ import annotations

from typing import Iterator, Literal

from rich.cells import cell_len

from .colors import ANSI_PATTERN, RESET, strip_ansi

Align = Literal["left", "center", "right"]

_ZWJ = "‍"
_RESETS = frozenset({RESET, "\x1b[m"})


def clusters(text: str) -> list[str]:
    """Split plain ``text`` into graphemes (base glyph plus zero-width marks).

    >>> len(clusters("e\\u0301x"))
    2
    """
    grouped: list[str] = []
    for char in text:
        if grouped and (cell_len(char) == 0 or grouped[-1].endswith(_ZWJ)):
            grouped[-1] += char
        else:
            grouped.append(char)
    return grouped


def cluster_width(cluster: str) -> int:
    return cell_len(cluster)


def measure(text: str) -> int:
    """Return the number of display cells ``text`` occupies.

    >>> measure("\\x1b[31mhi\\x1b[0m")
    2
    """
    return cell_len(strip_ansi(text))


def _tokens(text: str) -> Iterator[tuple[bool, str]]:
    """Yield ``(is_escape, chunk)`` pairs; non-escape chunks are whole graphemes."""
    position = 0
    for match in ANSI_PATTERN.finditer(text):
        if match.start() > position:
            for cluster in clusters(text[position : match.start()]):
                yield False, cluster
        yield True, match.group(0)
        position = match.end()
    if position < len(text):
        for cluster in clusters(text[position:]):
            yield False, cluster


def _track(active: list[str], sequence: str) -> None:
    """Update the list of open SGR sequences after ``sequence``."""
    if sequence in _RESETS:
        active.clear()
    elif sequence.endswith("m"):
        active.append(sequence)


def pad(text: str, width: int, align: Align = "left", fill: str = " ") -> str:
    """Pad ``text`` to ``width`` cells; text already wider is returned unchanged."""
    gap = width - measure(text)
    if gap <= 0:
        return text
    if align == "right":
        return fill * gap + text
    if align == "center":
        left = gap // 2
        return fill * left + text + fill * (gap - left)
    return text + fill * gap


def truncate(text: str, max_width: int, ellipsis: str = "…") -> str:
    """Cut ``text`` to ``max_width`` cells, ending with ``ellipsis`` when cut.

    >>> truncate("abcdef", 4)
    'abc…'
    """
    if measure(text) <= max_width:
        return text
    if max_width <= 0:
        return ""
    budget = max_width - measure(ellipsis)
    if budget < 0:
        return truncate(ellipsis, max_width, "")
    pieces: list[str] = []
    active: list[str] = []
    width = 0
    for is_escape, chunk in _tokens(text):
        if is_escape:
            pieces.append(chunk)
            _track(active, chunk)
            continue
        size = cluster_width(chunk)
        if width + size > budget:
            break
        pieces.append(chunk)
        width += size
    pieces.append(ellipsis)
    if active:
        pieces.append(RESET)
    return "".join(pieces)


def fit(text: str, width: int, align: Align = "left", ellipsis: str = "…") -> str:
    """Truncate then pad so the result is exactly ``width`` cells."""
    return pad(truncate(text, width, ellipsis), width, align)


class _LineBuilder:
    """Accumulate one wrapped line while tracking open colour spans."""

    def __init__(self, active: list[str], lines: list[str]) -> None:
        self.active = active
        self.lines = lines
        self.pieces = ["".join(active)]
        self.width = 0

    def add_escape(self, sequence: str) -> None:
        self.pieces.append(sequence)
        _track(self.active, sequence)

    def add_text(self, chunk: str, size: int) -> None:
        self.pieces.append(chunk)
        self.width += size

    def add_word(self, word: list[tuple[bool, str]]) -> None:
        for is_escape, chunk in word:
            if is_escape:
                self.add_escape(chunk)
            else:
                self.add_text(chunk, cluster_width(chunk))

    def flush(self) -> None:
        line = "".join(self.pieces)
        if self.active:
            line += RESET
        self.lines.append(line)
        self.pieces = ["".join(self.active)]
        self.width = 0


def _words(paragraph: str) -> list[list[tuple[bool, str]]]:
    words: list[list[tuple[bool, str]]] = []
    current: list[tuple[bool, str]] = []
    for is_escape, chunk in _tokens(paragraph):
        if not is_escape and chunk.isspace():
            if current:
                words.append(current)
                current = []
            continue
        current.append((is_escape, chunk))
    if current:
        words.append(current)
    return words


def wrap(text: str, max_width: int) -> list[str]:
    """Greedy word-wrap ``text`` so each line fits in ``max_width`` cells.

    Words longer than a line are split between graphemes. Colour spans that
    cross a line break are closed at the end of the line and re-opened at the
    start of the next one. A single grapheme wider than ``max_width`` is
    emitted on its own line.

    >>> wrap("the quick brown fox", 9)
    ['the quick', 'brown fox']
    """
    if max_width < 1:
        raise ValueError("max_width must be at least 1")
    lines: list[str] = []
    active: list[str] = []
    for paragraph in text.split("\n"):
        line = _LineBuilder(active, lines)
        for word in _words(paragraph):
            word_width = sum(cluster_width(chunk) for is_escape, chunk in word if not is_escape)
            if word_width == 0:
                line.add_word(word)
                continue
            separator = 1 if line.width > 0 else 0
            if line.width + separator + word_width <= max_width:
                if separator:
                    line.add_text(" ", 1)
                line.add_word(word)
                continue
            if line.width > 0:
                line.flush()
            if word_width <= max_width:
                line.add_word(word)
                continue
            for is_escape, chunk in word:
                if is_escape:
                    line.add_escape(chunk)
                    continue
                size = cluster_width(chunk)
                if line.width > 0 and line.width + size > max_width:
                    line.flush()
                line.add_text(chunk, size)
        line.flush()
    return lines


def repeat_to_width(glyph: str, width: int) -> str:
    """Repeat ``glyph`` until it covers ``width`` cells (never exceeding it)."""
    size = measure(glyph)
    if size <= 0 or width <= 0:
        return ""
    return glyph * (width // size)


__all__ = [
    "Align",
    "cluster_width",
    "clusters",
    "fit",
    "measure",
    "pad",
    "repeat_to_width",
    "truncate",
    "wrap",
]
