# bookreg/grid.py
"""
In-memory grid of book rows being edited.

Every operation returns a new Grid; rows that are not touched are carried over
as the same objects, so callers can compare snapshots cheaply.
"""
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from .models import FIELDS, Row
from .utils import DEFAULT_SANITIZERS, Sanitizer

SEED_ROWS = 10


@dataclass(frozen=True)
class DeletePolicy:
    """
    min_rows:      the grid never shrinks below this many rows.
    content_only:  only content-bearing rows offer a delete control.
    beyond_seed:   only rows past the seed positions offer a delete control.
    """
    min_rows: int = 1
    content_only: bool = True
    beyond_seed: bool = False


@dataclass(frozen=True)
class GridSettings:
    seed_rows: int = SEED_ROWS
    delete_policy: DeletePolicy = field(default_factory=DeletePolicy)
    sanitizers: Mapping[str, Sanitizer] = field(default_factory=lambda: dict(DEFAULT_SANITIZERS))


@dataclass(frozen=True)
class Grid:
    rows: tuple = ()
    next_id: int = 0

    def __len__(self) -> int:
        return len(self.rows)

    def positions(self) -> dict[int, int]:
        """row id -> visual position"""
        return {row.id: pos for pos, row in enumerate(self.rows)}

    def find(self, row_id: int) -> Optional[Row]:
        for row in self.rows:
            if row.id == row_id:
                return row
        return None


def seed_grid(count: int = SEED_ROWS, start: int = 0) -> Grid:
    return Grid(rows=tuple(Row(id=start + i) for i in range(count)), next_id=start + count)


def is_content_bearing(row: Row) -> bool:
    return any(getattr(row, f) for f in FIELDS)


def content_rows(grid: Grid) -> list[Row]:
    return [r for r in grid.rows if is_content_bearing(r)]


def set_cell(grid: Grid, row_id: int, field_name: str, value: str) -> Grid:
    if field_name not in FIELDS:
        raise KeyError(f"unknown field: {field_name}")
    if grid.find(row_id) is None:
        return grid
    rows = tuple(replace(r, **{field_name: value}) if r.id == row_id else r for r in grid.rows)
    return replace(grid, rows=rows)


def add_row(grid: Grid) -> Grid:
    # ids come from a counter, not len(rows), so a deleted id is never handed out again
    return Grid(rows=grid.rows + (Row(id=grid.next_id),), next_id=grid.next_id + 1)


def delete_row(grid: Grid, row_id: int, policy: Optional[DeletePolicy] = None) -> Grid:
    policy = policy or DeletePolicy()
    if grid.find(row_id) is None:
        return grid
    if len(grid.rows) - 1 < max(policy.min_rows, 1):
        return grid
    return replace(grid, rows=tuple(r for r in grid.rows if r.id != row_id))


def can_delete(grid: Grid, row: Row, policy: Optional[DeletePolicy] = None, seed_rows: int = SEED_ROWS) -> bool:
    """Whether the UI should offer a delete control for `row`."""
    policy = policy or DeletePolicy()
    if len(grid.rows) <= max(policy.min_rows, 1):
        return False
    if policy.content_only and not is_content_bearing(row):
        return False
    if policy.beyond_seed and grid.positions().get(row.id, 0) < seed_rows:
        return False
    return True
