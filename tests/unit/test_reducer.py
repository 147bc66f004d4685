from __future__ import annotations

import pytest

from bookreg.grid import DeletePolicy, GridSettings, seed_grid
from bookreg.reducer import AddRow, DeleteRow, Paste, Reset, SetCell, reduce


def test_set_cell_action_sanitizes_numeric_fields():
    grid = reduce(seed_grid(), SetCell(0, "price", "12,500원"))
    assert grid.rows[0].price == "12500"


def test_set_cell_action_keeps_text_fields():
    grid = reduce(seed_grid(), SetCell(0, "publisher", " 민음사 "))
    assert grid.rows[0].publisher == " 민음사 "


def test_set_cell_action_uses_configured_sanitizers():
    settings = GridSettings(sanitizers={})
    grid = reduce(seed_grid(), SetCell(0, "isbn", "978-89"), settings)
    assert grid.rows[0].isbn == "978-89"


def test_add_and_delete_actions():
    grid = reduce(seed_grid(2), AddRow())
    assert len(grid) == 3
    grid = reduce(grid, DeleteRow(2))
    assert len(grid) == 2


def test_delete_action_honours_min_rows():
    settings = GridSettings(delete_policy=DeletePolicy(min_rows=10))
    grid = seed_grid()
    assert reduce(grid, DeleteRow(0), settings) == grid


def test_paste_action():
    grid = reduce(seed_grid(), Paste(0, "book_name", "A1\tB1\nA2\tB2"))
    assert (grid.rows[1].book_name, grid.rows[1].author) == ("A2", "B2")


def test_reset_restores_seed_count_with_fresh_ids():
    grid = seed_grid()
    for _ in range(5):
        grid = reduce(grid, AddRow())
    grid = reduce(grid, SetCell(3, "author", "x"))
    old_ids = {r.id for r in grid.rows}

    reset = reduce(grid, Reset())
    assert len(reset) == 10
    assert all(r.author == "" for r in reset.rows)
    assert not old_ids & {r.id for r in reset.rows}


def test_unknown_action_raises():
    with pytest.raises(TypeError):
        reduce(seed_grid(), object())
