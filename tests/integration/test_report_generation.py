"""End-to-end tests: JSON in, PDF file out, read back with PyMuPDF."""

import asyncio
import json
import re
from pathlib import Path
from unittest.mock import Mock, patch

import fitz
import pytest
import yaml

from json_pdf_report import (
    FetchError,
    HttpFetcher,
    PDFOptions,
    ReportGenerator,
    SerializationError,
    WriteError,
    agenerate_pdf,
    generate_pdf,
)
from json_pdf_report.core.furniture import DEFAULT_FOOTER_TEXT, DEFAULT_HEADER_TEXT

from conftest import read_pages


def _long_text(words: int = 1500) -> str:
    return " ".join(f"lorem{i}" for i in range(words))


class TestSimpleDocument:
    """A small document fits on one page."""

    def test_single_page_round_trip(self, in_tmp_cwd: Path) -> None:
        data = {"header": {"text": "T"}, "footer": {"text": "F"}, "Summary": "short text"}

        path = generate_pdf(data)

        pages = read_pages(path)
        assert len(pages) == 1
        words = pages[0].split()
        assert "T" in words
        assert "F" in words
        assert words.index("SUMMARY:") < words.index("short")
        assert "short text" in pages[0]
        assert "Page 1 of 1" in pages[0]

    def test_output_location_and_name(self, in_tmp_cwd: Path) -> None:
        path = Path(generate_pdf({"a": "b"}))

        assert path.is_absolute()
        assert path.parent == in_tmp_cwd.resolve()
        assert re.fullmatch(r"report-\d{13}\.pdf", path.name)

    def test_output_dir_option(self, tmp_path: Path) -> None:
        target = tmp_path / "reports"
        path = Path(generate_pdf({"a": "b"}, {"outputDir": target}))
        assert path.parent == target.resolve()

    def test_default_header_without_declaration(self, in_tmp_cwd: Path) -> None:
        pages = read_pages(generate_pdf({"Summary": "x"}))
        assert DEFAULT_HEADER_TEXT in pages[0]

    def test_skipped_fields_do_not_render(self, in_tmp_cwd: Path) -> None:
        data = {"count": 12345, "nested": {"inner": "hidden"}, "empty": [], "Note": "shown"}
        text = read_pages(generate_pdf(data))[0]

        assert "12345" not in text
        assert "hidden" not in text
        assert "EMPTY" not in text
        assert "NOTE:" in text

    def test_page_numbering_disabled(self, in_tmp_cwd: Path) -> None:
        text = read_pages(generate_pdf({"a": "b"}, PDFOptions(page_numbering=False)))[0]
        assert "Page 1 of 1" not in text

    def test_landscape_letter(self, in_tmp_cwd: Path) -> None:
        path = generate_pdf({"a": "b"}, PDFOptions(format="letter", orientation="landscape"))
        doc = fitz.open(path)
        try:
            assert (doc[0].rect.width, doc[0].rect.height) == (792, 612)
        finally:
            doc.close()


class TestPagination:
    """Multi-page layout invariants."""

    def test_header_everywhere_footer_everywhere(self, in_tmp_cwd: Path) -> None:
        data = {"header": {"text": "HeadMark"}, "footer": {"text": "FootMark"}, "Body": _long_text()}

        pages = read_pages(generate_pdf(data))

        assert len(pages) >= 2
        for text in pages:
            assert text.count("HeadMark") == 1
            assert text.count("FootMark") == 1

    def test_no_footer_anywhere_when_undeclared(self, in_tmp_cwd: Path) -> None:
        pages = read_pages(generate_pdf({"header": {"text": "HeadMark"}, "Body": _long_text()}))

        assert len(pages) >= 2
        for text in pages:
            assert "HeadMark" in text
            assert DEFAULT_FOOTER_TEXT not in text

    def test_page_numbers_consistent(self, in_tmp_cwd: Path) -> None:
        pages = read_pages(generate_pdf({"Body": _long_text(3000)}))

        total = len(pages)
        assert total >= 3
        for index, text in enumerate(pages, start=1):
            assert f"Page {index} of {total}" in text

    def test_content_stays_above_bottom_margin(self, in_tmp_cwd: Path) -> None:
        rows = [{"col": f"cell{i}"} for i in range(100)]
        path = generate_pdf({"footer": "F", "Body": _long_text(), "Rows": rows})

        doc = fitz.open(path)
        try:
            limit = doc[0].rect.height - 100
            for page in doc:
                for word in page.get_text("words"):
                    if word[4].startswith(("lorem", "cell")):
                        assert word[1] < limit
        finally:
            doc.close()

    def test_oversized_table_spans_pages(self, in_tmp_cwd: Path) -> None:
        rows = [{"sku": f"S{i}", "qty": i} for i in range(60)]
        pages = read_pages(generate_pdf({"Inventory": rows}))

        assert len(pages) >= 3
        # estimate does not fit: the table starts on a fresh page
        assert "sku" not in pages[0].split()
        assert "S0" not in pages[0].split()
        for text in pages[1:]:
            assert "sku" in text.split()
        assert pages[1].split().index("sku") < pages[1].split().index("S0")

    def test_table_preflight_after_text(self, in_tmp_cwd: Path) -> None:
        rows = [{"sku": f"S{i}", "qty": i} for i in range(60)]
        data = {"Intro": "Some words before the table.", "Inventory": rows}

        pages = read_pages(generate_pdf(data))

        assert len(pages) >= 2
        assert "INTRO:" in pages[0]
        assert "sku" not in pages[0].split()
        assert pages[1].split().index("sku") < pages[1].split().index("S0")


class TestImages:
    """Image rows fetched through the HTTP collaborator."""

    def test_failed_image_is_skipped(self, in_tmp_cwd: Path, image_fetcher, jpeg_bytes) -> None:
        fetcher = image_fetcher({"https://img/a.jpg": jpeg_bytes, "https://img/c.jpg": jpeg_bytes})
        data = {
            "Photos": [
                {"url": "https://img/a.jpg"},
                {"url": "https://img/missing.jpg"},
                {"url": "https://img/c.jpg", "x": 300},
            ]
        }

        result = ReportGenerator(data, fetcher=fetcher).generate()

        assert result.path.exists()
        assert [d.url for d in result.diagnostics] == ["https://img/missing.jpg"]
        doc = fitz.open(result.path)
        try:
            page = doc[0]
            rects = [
                r
                for xref in {img[0] for img in page.get_images()}
                for r in page.get_image_rects(xref)
            ]
            assert len(rects) == 2
            assert sorted(round(r.x0) for r in rects) == [50, 300]
        finally:
            doc.close()


class TestSources:
    """Document sources: URL, files, in-memory."""

    def test_url_source(self, in_tmp_cwd: Path) -> None:
        fetcher = Mock(spec=HttpFetcher)
        fetcher.fetch_json.return_value = {"Remote": "from the web"}

        path = generate_pdf("https://api.example.com/report.json", fetcher=fetcher)

        fetcher.fetch_json.assert_called_once_with("https://api.example.com/report.json")
        assert "from the web" in read_pages(path)[0]

    def test_url_fetch_failure_is_fatal(self, in_tmp_cwd: Path) -> None:
        fetcher = Mock(spec=HttpFetcher)
        fetcher.fetch_json.side_effect = FetchError("GET failed: 500")

        with pytest.raises(FetchError):
            generate_pdf("https://api.example.com/broken", fetcher=fetcher)
        assert list(in_tmp_cwd.glob("report-*.pdf")) == []

    def test_json_file_source(self, in_tmp_cwd: Path) -> None:
        source = in_tmp_cwd / "data.json"
        source.write_text(json.dumps({"FromFile": "json body"}), encoding="utf-8")

        assert "json body" in read_pages(generate_pdf(str(source)))[0]

    def test_yaml_file_source(self, in_tmp_cwd: Path) -> None:
        source = in_tmp_cwd / "data.yaml"
        source.write_text(yaml.safe_dump({"FromYaml": "yaml body"}), encoding="utf-8")

        assert "yaml body" in read_pages(generate_pdf(source))[0]

    def test_unreadable_file(self, in_tmp_cwd: Path) -> None:
        source = in_tmp_cwd / "broken.json"
        source.write_text("{not json", encoding="utf-8")

        with pytest.raises(FetchError, match="Cannot read document"):
            generate_pdf(source)

    def test_cycle_fails_before_drawing(self, in_tmp_cwd: Path) -> None:
        data = {"a": "b"}
        data["loop"] = data

        with pytest.raises(SerializationError):
            generate_pdf(data)
        assert list(in_tmp_cwd.glob("report-*.pdf")) == []


class TestFailures:
    """Write failures propagate."""

    def test_write_error(self, in_tmp_cwd: Path) -> None:
        with patch.object(fitz.Document, "save", side_effect=RuntimeError("disk full")):
            with pytest.raises(WriteError, match="disk full"):
                generate_pdf({"a": "b"})
        assert list(in_tmp_cwd.glob("report-*.pdf")) == []


def test_async_entry_point(in_tmp_cwd: Path) -> None:
    path = asyncio.run(agenerate_pdf({"Async": "awaited"}))
    assert "awaited" in read_pages(path)[0]


class TestOutputDirectory:
    """Output location failures are write errors."""

    def test_output_dir_under_a_file(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(WriteError, match="Cannot create output directory"):
            generate_pdf({"a": "b"}, {"outputDir": blocker / "sub"})


class TestFetcherLifecycle:
    """The generator closes only the fetcher it created."""

    def test_own_fetcher_closed(self, in_tmp_cwd: Path) -> None:
        with patch.object(HttpFetcher, "close") as mock_close:
            ReportGenerator({"a": "b"}).generate()
        mock_close.assert_called_once()

    def test_own_fetcher_closed_on_failure(self, in_tmp_cwd: Path) -> None:
        data = {"a": "b"}
        data["loop"] = data

        with patch.object(HttpFetcher, "close") as mock_close:
            with pytest.raises(SerializationError):
                ReportGenerator(data).generate()
        mock_close.assert_called_once()

    def test_injected_fetcher_left_open(self, in_tmp_cwd: Path) -> None:
        fetcher = Mock(spec=HttpFetcher)
        ReportGenerator({"a": "b"}, fetcher=fetcher).generate()
        fetcher.close.assert_not_called()
