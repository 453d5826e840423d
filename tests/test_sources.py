import pytest
from openpyxl import Workbook

from gridcommit.errors import ConfigurationError
from gridcommit.sources import DAY_LABELS, column_index, load_workbook_grid, rasterize_text


def make_workbook(path, sheets):
    wb = Workbook()
    wb.remove(wb.active)
    for title, rows in sheets.items():
        ws = wb.create_sheet(title)
        for row in rows:
            ws.append(row)
    wb.save(path)
    return path


@pytest.fixture
def attendance(tmp_path):
    return make_workbook(tmp_path / "attendance.xlsx", {
        "2024": [
            ["name", 1, 2, 3, "notes"],
            ["alice", 1, 0, 1, "first"],
            [None, None, None, None, None],
            ["bob", None, "x", None, None],
        ],
        "2025": [
            ["who", "1", "2"],
            ["carol", 1, 1],
        ],
    })


def test_first_sheet_by_default(attendance):
    grid = load_workbook_grid(attendance)

    assert [r.label for r in grid] == ["alice", "bob"]
    assert grid.rows[0].cells == {1: 1, 2: 0, 3: 1}
    assert grid.rows[1].cells == {1: None, 2: "x", 3: None}
    # blank rows are skipped, offsets follow the kept rows
    assert [r.day_offset for r in grid] == [0, 1]


def test_named_sheet_and_fallback_label(attendance):
    grid = load_workbook_grid(attendance, sheet="2025")

    assert [(r.label, r.cells) for r in grid] == [("carol", {1: 1, 2: 1})]


def test_label_column_by_header(attendance):
    grid = load_workbook_grid(attendance, label_column="NOTES")

    assert [r.label for r in grid] == ["first", "row 2"]


def test_missing_sheet_lists_alternatives(attendance):
    with pytest.raises(ConfigurationError, match="Available sheets: 2024, 2025"):
        load_workbook_grid(attendance, sheet="2026")


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_workbook_grid(tmp_path / "nope.xlsx")


def test_not_a_workbook(tmp_path):
    bogus = tmp_path / "bogus.xlsx"
    bogus.write_text("name,1,2\n")

    with pytest.raises(ConfigurationError, match="Cannot read workbook"):
        load_workbook_grid(bogus)


@pytest.mark.parametrize("header, expected", [
    (1, 1), (53, 53), (54, 54), (2.0, 2), (" 7 ", 7), ("name", None), (None, None), (True, None),
])
def test_column_index(header, expected):
    assert column_index(header) == expected


def test_rasterize_blank_text():
    grid = rasterize_text("")

    assert [r.label for r in grid] == DAY_LABELS
    assert [r.day_offset for r in grid] == list(range(7))
    assert not any(v for r in grid for v in r.cells.values())


def test_rasterize_text_lights_cells():
    grid = rasterize_text("HI")

    assert len(grid) == 7
    assert all(sorted(r.cells) == list(range(1, 54)) for r in grid)
    assert any(v for r in grid for v in r.cells.values())


def test_fractional_header_is_not_the_label(tmp_path):
    path = make_workbook(tmp_path / "odd.xlsx", {
        "s": [
            [1.5, "who", 1],
            [9, "dave", 1],
        ],
    })

    grid = load_workbook_grid(path)

    assert [(r.label, r.cells) for r in grid] == [("dave", {1: 1})]
