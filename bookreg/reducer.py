from dataclasses import dataclass
from typing import Optional, Union

from .grid import Grid, GridSettings, add_row, delete_row, seed_grid, set_cell
from .paste import paste
from .utils import normalize_numeric_field


@dataclass(frozen=True)
class SetCell:
    row_id: int
    field: str
    value: str


@dataclass(frozen=True)
class AddRow:
    pass


@dataclass(frozen=True)
class DeleteRow:
    row_id: int


@dataclass(frozen=True)
class Paste:
    row_id: int
    field: str
    text: str


@dataclass(frozen=True)
class Reset:
    pass


Action = Union[SetCell, AddRow, DeleteRow, Paste, Reset]


def reduce(grid: Grid, action: Action, settings: Optional[GridSettings] = None) -> Grid:
    """(grid, action) -> grid. Typed edits and pastes share the sanitizer table."""
    settings = settings or GridSettings()
    if isinstance(action, SetCell):
        value = normalize_numeric_field(action.field, action.value, settings.sanitizers)
        return set_cell(grid, action.row_id, action.field, value)
    if isinstance(action, AddRow):
        return add_row(grid)
    if isinstance(action, DeleteRow):
        return delete_row(grid, action.row_id, settings.delete_policy)
    if isinstance(action, Paste):
        return paste(grid, action.text, action.row_id, action.field, settings.sanitizers)
    if isinstance(action, Reset):
        # fresh ids so nothing from before the reset is reused
        return seed_grid(settings.seed_rows, start=grid.next_id)
    raise TypeError(f"unsupported action: {action!r}")
