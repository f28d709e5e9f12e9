"""Tests for GridTable layout."""

from unittest.mock import Mock

from json_pdf_report.core.canvas import PdfCanvas
from json_pdf_report.core.layout import LayoutContext
from json_pdf_report.core.table_layout import GridTable


def _page_words(canvas: PdfCanvas, page_number: int):
    return [w[4] for w in canvas.doc[page_number - 1].get_text("words")]


def test_small_table_on_one_page(canvas: PdfCanvas) -> None:
    table = GridTable(canvas, ["name", "qty"], [["apple", "3"], ["pear", "5"]], x=50, width=495)
    new_page = Mock()

    final_y = table.draw(start_y=120, bottom=742, page_top=100, new_page=new_page)

    new_page.assert_not_called()
    assert final_y > 120
    assert table.final_y == final_y
    words = _page_words(canvas, 1)
    for expected in ("name", "qty", "apple", "3", "pear", "5"):
        assert expected in words


def test_rows_flow_onto_new_pages_with_repeated_header(context: LayoutContext) -> None:
    canvas = context.canvas
    rows = [[f"row-{i}", str(i)] for i in range(80)]
    table = GridTable(canvas, ["label", "value"], rows, x=50, width=495)

    final_y = table.draw(
        start_y=context.y,
        bottom=context.content_bottom,
        page_top=context.top_of_content,
        new_page=context.break_page,
    )

    assert canvas.page_count >= 2
    assert final_y <= context.content_bottom
    all_words = []
    for page_number in range(1, canvas.page_count + 1):
        words = _page_words(canvas, page_number)
        assert "label" in words
        all_words.extend(words)
    for i in range(80):
        assert all_words.count(f"row-{i}") == 1


def test_rows_stay_above_bottom(context: LayoutContext) -> None:
    canvas = context.canvas
    rows = [[f"cell-{i}"] for i in range(120)]
    GridTable(canvas, ["only"], rows, x=50, width=495).draw(
        start_y=context.y,
        bottom=context.content_bottom,
        page_top=context.top_of_content,
        new_page=context.break_page,
    )

    for page in canvas.doc:
        for word in page.get_text("words"):
            if word[4].startswith("cell-"):
                assert word[3] <= context.content_bottom


def test_header_not_separated_from_first_row(canvas: PdfCanvas) -> None:
    def new_page() -> float:
        canvas.add_page()
        return 100

    table = GridTable(canvas, ["h"], [["first"]], x=50, width=495)
    table.draw(start_y=730, bottom=742, page_top=100, new_page=new_page)

    assert canvas.page_count == 2
    assert _page_words(canvas, 1) == []
    assert _page_words(canvas, 2) == ["h", "first"]


def test_oversized_row_is_truncated(canvas: PdfCanvas) -> None:
    huge = " ".join(["word"] * 3000)
    table = GridTable(canvas, ["text"], [[huge]], x=50, width=495)

    final_y = table.draw(start_y=100, bottom=742, page_top=100, new_page=Mock())

    assert final_y <= 742
    assert "..." in canvas.doc[0].get_text()


def test_wrapped_cell_grows_row(canvas: PdfCanvas) -> None:
    short = GridTable(canvas, ["a"], [["x"]], x=50, width=100)
    tall = GridTable(canvas, ["a"], [["many words that wrap inside a narrow column " * 3]], x=50, width=100)

    short_bottom = short.draw(start_y=100, bottom=742, page_top=100, new_page=Mock())
    tall_bottom = tall.draw(start_y=100, bottom=742, page_top=100, new_page=Mock())

    assert tall_bottom - 100 > short_bottom - 100
