"""Column-aligned tables and key/value listings.

Purpose
-------
Turn row mappings into aligned text columns with a header, a rule and a body,
honouring per-column width, alignment and formatters.

Contents
--------
* :class:`TableColumn` / :class:`TableOptions` – column and table settings.
* :class:`TableRenderResult` – rendered lines plus layout metrics.
* :class:`TableRenderer` – ``to_lines``, ``render_result``, ``render`` and
  ``render_key_value``.

System Role
-----------
Pure layout on top of :mod:`lib_console_styler.domain.layout`; only
``render``/``render_key_value`` touch the context sink.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Literal, Mapping, Sequence

from lib_console_styler.domain.colors import ColorSpec
from lib_console_styler.domain.layout import Align, fit, measure, pad, repeat_to_width
from lib_console_styler.domain.theme import BorderStyle

from .context import StylerContext

CellFormatter = Callable[[Any, Mapping[str, Any], int], str]
"""``formatter(value, row, row_index) -> text`` for one column."""


@dataclass(frozen=True)
class TableColumn:
    """One table column; ``align=None`` right-aligns numeric columns and left-aligns the rest."""

    key: str
    label: str | None = None
    width: int | None = None
    align: Align | None = None
    formatter: CellFormatter | None = None

    @classmethod
    def coerce(cls, value: "TableColumn | Mapping[str, Any] | str") -> "TableColumn":
        if isinstance(value, TableColumn):
            return value
        if isinstance(value, str):
            return cls(key=value)
        return cls(**dict(value))

    @property
    def header(self) -> str:
        return self.label if self.label is not None else self.key


@dataclass(frozen=True)
class TableOptions:
    """Table-wide settings.

    ``row_limit`` keeps the first N rows (after sorting) and appends one
    overflow row naming how many were hidden.
    """

    style: BorderStyle | str | None = None
    border: bool = False
    max_column_width: int = 40
    show_index: bool = False
    sort_by: str | None = None
    sort_order: Literal["asc", "desc"] = "asc"
    row_limit: int | None = None
    uppercase_headers: bool = False
    fallback_value: str = ""
    empty_message: str = "No data"
    header_color: ColorSpec = ("primary", "bold")
    border_color: ColorSpec = "muted"


@dataclass(frozen=True)
class TableRenderResult:
    """Rendered lines plus the row counts needed for a truncation footer."""

    lines: list[str] = field(default_factory=list)
    column_widths: list[int] = field(default_factory=list)
    row_count: int = 0
    displayed_rows: int = 0
    truncated_rows: int = 0


_INDEX_KEY = "#"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _default_align(rows: Sequence[Mapping[str, Any]], key: str) -> Align:
    values = [row.get(key) for row in rows if row.get(key) is not None]
    return "right" if values and all(_is_number(value) for value in values) else "left"


def _sort_key(value: Any) -> tuple[int, Any]:
    if value is None:
        return (2, "")
    if _is_number(value):
        return (0, value)
    return (1, str(value).lower())


class TableRenderer:
    """Lay out rows for a :class:`StylerContext`."""

    def __init__(self, context: StylerContext) -> None:
        self._context = context

    def render_result(
        self,
        rows: Sequence[Mapping[str, Any]],
        columns: Sequence[TableColumn | Mapping[str, Any] | str] | None = None,
        options: TableOptions | None = None,
        **overrides: Any,
    ) -> TableRenderResult:
        opts = replace(options or TableOptions(), **overrides)
        cols = [TableColumn.coerce(column) for column in columns] if columns else self._auto_columns(rows)
        if not rows or not cols:
            return TableRenderResult(lines=[self._context.colorize(opts.empty_message, "muted")])

        ordered = list(rows)
        if opts.sort_by is not None:
            ordered.sort(key=lambda row: _sort_key(row.get(opts.sort_by)), reverse=opts.sort_order == "desc")
        shown = ordered if opts.row_limit is None else ordered[: max(0, opts.row_limit)]
        hidden = len(ordered) - len(shown)

        if opts.show_index:
            cols = [TableColumn(key=_INDEX_KEY, align="right"), *cols]
        cells = [self._row_cells(row, number, cols, opts) for number, row in enumerate(shown, start=1)]
        aligns = [column.align or _default_align(shown, column.key) for column in cols]
        headers = [column.header.upper() if opts.uppercase_headers else column.header for column in cols]
        widths = [
            column.width
            if column.width is not None
            else min(opts.max_column_width, max([measure(headers[i]), *(measure(row[i]) for row in cells)]))
            for i, column in enumerate(cols)
        ]
        widths = [max(1, width) for width in widths]

        glyphs = self._context.glyphs(opts.style)
        sep = self._context.colorize(f" {glyphs.vertical} ", opts.border_color)

        def join(parts: list[str]) -> str:
            line = sep.join(parts)
            if opts.border:
                edge = self._context.colorize(glyphs.vertical, opts.border_color)
                line = f"{edge} {line} {edge}"
            return line

        def rule(left: str, mid: str, right: str) -> str:
            body = f"{glyphs.horizontal}{mid}{glyphs.horizontal}".join(repeat_to_width(glyphs.horizontal, w) for w in widths)
            if opts.border:
                body = f"{left}{glyphs.horizontal}{body}{glyphs.horizontal}{right}"
            return self._context.colorize(body, opts.border_color)

        header = join(
            [self._context.colorize(fit(text, widths[i], "center"), opts.header_color) for i, text in enumerate(headers)]
        )
        lines = [header, rule(glyphs.tee_left, glyphs.cross, glyphs.tee_right)]
        for row in cells:
            lines.append(join([fit(text, widths[i], aligns[i]) for i, text in enumerate(row)]))
        if hidden:
            total = sum(widths) + 3 * (len(widths) - 1)
            note = self._context.colorize(pad(f"… {hidden} more rows …", total, "center"), "muted")
            lines.append(join([note]) if opts.border else note)
        if opts.border:
            lines.insert(0, rule(glyphs.top_left, glyphs.tee_top, glyphs.top_right))
            lines.append(rule(glyphs.bottom_left, glyphs.tee_bottom, glyphs.bottom_right))
        return TableRenderResult(
            lines=lines,
            column_widths=widths,
            row_count=len(ordered),
            displayed_rows=len(shown),
            truncated_rows=hidden,
        )

    def to_lines(
        self,
        rows: Sequence[Mapping[str, Any]],
        columns: Sequence[TableColumn | Mapping[str, Any] | str] | None = None,
        options: TableOptions | None = None,
        **overrides: Any,
    ) -> list[str]:
        return self.render_result(rows, columns, options, **overrides).lines

    def render(
        self,
        rows: Sequence[Mapping[str, Any]],
        columns: Sequence[TableColumn | Mapping[str, Any] | str] | None = None,
        options: TableOptions | None = None,
        **overrides: Any,
    ) -> TableRenderResult:
        result = self.render_result(rows, columns, options, **overrides)
        self._context.write_lines(result.lines)
        return result

    def key_value_lines(
        self,
        items: Mapping[str, Any] | Sequence[tuple[str, Any]],
        *,
        separator: str = ":",
        label_color: ColorSpec = "primary",
    ) -> list[str]:
        """Two columns; the label column is as wide as the longest label."""
        pairs = list(items.items()) if isinstance(items, Mapping) else [tuple(pair) for pair in items]
        label_width = max((measure(str(label)) for label, _ in pairs), default=0)
        lines = []
        for label, value in pairs:
            name = self._context.colorize(pad(str(label), label_width), label_color)
            lines.append(f"{name}{separator} {'' if value is None else value}")
        return lines

    def render_key_value(self, items: Mapping[str, Any] | Sequence[tuple[str, Any]], **kwargs: Any) -> None:
        self._context.write_lines(self.key_value_lines(items, **kwargs))

    @staticmethod
    def _auto_columns(rows: Sequence[Mapping[str, Any]]) -> list[TableColumn]:
        keys: dict[str, None] = {}
        for row in rows:
            keys.update(dict.fromkeys(row))
        return [TableColumn(key=key) for key in keys]

    @staticmethod
    def _row_cells(row: Mapping[str, Any], number: int, cols: list[TableColumn], opts: TableOptions) -> list[str]:
        cells = []
        for column in cols:
            if column.key == _INDEX_KEY and opts.show_index and column is cols[0]:
                cells.append(str(number))
                continue
            value = row.get(column.key)
            if column.formatter is not None:
                formatted = column.formatter(value, row, number - 1)
                text = opts.fallback_value if formatted is None else str(formatted)
            else:
                text = opts.fallback_value if value is None or value == "" else str(value)
            cells.append(text.replace("\n", " "))
        return cells


__all__ = ["CellFormatter", "TableColumn", "TableOptions", "TableRenderResult", "TableRenderer"]
