#!/usr/bin/env python3
# adminconsole/ui/static/table.py
from __future__ import annotations

from typing import Optional, Sequence

from adminconsole.ui.utils import strip_ansi


def _visible_len(cell: str) -> int:
    return len(strip_ansi(cell))


def _column_widths(rows: Sequence[Sequence[str]]) -> list[int]:
    """Widest visible cell per column; rows may be ragged."""
    widths: list[int] = []
    for row in rows:
        for index, cell in enumerate(row):
            if index == len(widths):
                widths.append(0)
            widths[index] = max(widths[index], _visible_len(cell))
    return widths


def format_table(
    rows: Sequence[Sequence[object]],
    headers: Optional[Sequence[object]] = None,
    *,
    align: Sequence[str] = (),
    padding: int = 1,
    border: bool = True,
) -> list[str]:
    """
    Return the lines of a pipe-separated table.

    `align` holds one '<' (left, default) or '>' (right) per column; short
    rows are padded with empty cells. Widths ignore ANSI sequences.
    """
    body = [[str(cell) for cell in row] for row in rows]
    head = [str(h) for h in headers] if headers is not None else None
    widths = _column_widths(([head] if head else []) + body)
    aligns = list(align)[:len(widths)]
    aligns += ["<"] * (len(widths) - len(aligns))
    pad = " " * padding

    def render_row(row: Sequence[str]) -> str:
        cells = []
        for index, width in enumerate(widths):
            cell = row[index] if index < len(row) else ""
            gap = " " * (width - _visible_len(cell))
            cells.append(pad + (gap + cell if aligns[index] == ">" else cell + gap) + pad)
        return "|" + "|".join(cells) + "|"

    lines: list[str] = []
    if head is not None:
        lines.append(render_row(head))
        lines.append(render_row(["-" * w for w in widths]))
    lines.extend(render_row(row) for row in body)

    if border:
        rule = "-" * (sum(widths) + 2 * padding * len(widths) + len(widths) + 1)
        lines = [rule, *lines, rule]
    return lines
