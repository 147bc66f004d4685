# bookreg/paste.py
"""
Spreadsheet-style paste into the grid.

Text copied from Excel / Google Sheets arrives as newline-separated lines of
tab-separated cells. It is laid out starting at the anchor cell:

  line i, cell j  ->  row at (anchor position + i), field at (anchor field + j)

Rows are appended at the end when the paste runs past the last row. Cells that
would land past the last field are dropped (no wrap to the next row).
Blank lines are dropped before layout, so they do not produce empty rows.
"""
from dataclasses import replace
from typing import Mapping, Optional

from .grid import Grid, add_row
from .models import FIELDS
from .utils import Sanitizer, normalize_numeric_field


def split_lines(text: str) -> list[str]:
    return [line for line in (text or "").split("\n") if line.strip()]


def is_single_value(lines: list[str]) -> bool:
    return len(lines) == 1 and "\t" not in lines[0]


def paste(
    grid: Grid,
    text: str,
    anchor_row_id: int,
    anchor_field: str,
    sanitizers: Optional[Mapping[str, Sanitizer]] = None,
) -> Grid:
    lines = split_lines(text)
    if not lines or anchor_field not in FIELDS:
        return grid

    positions = grid.positions()
    if anchor_row_id not in positions:
        return grid

    if is_single_value(lines):
        value = normalize_numeric_field(anchor_field, lines[0].strip(), sanitizers)
        rows = tuple(
            replace(r, **{anchor_field: value}) if r.id == anchor_row_id else r
            for r in grid.rows
        )
        return replace(grid, rows=rows)

    row_pos = positions[anchor_row_id]
    field_pos = FIELDS.index(anchor_field)

    # grow first so every target position exists
    needed = row_pos + len(lines)
    while len(grid.rows) < needed:
        grid = add_row(grid)

    rows = list(grid.rows)
    for i, line in enumerate(lines):
        updates = {}
        for j, cell in enumerate(line.split("\t")):
            target = field_pos + j
            if target >= len(FIELDS):
                break
            name = FIELDS[target]
            updates[name] = normalize_numeric_field(name, cell.strip(), sanitizers)
        if updates:
            rows[row_pos + i] = replace(rows[row_pos + i], **updates)

    return replace(grid, rows=tuple(rows))
