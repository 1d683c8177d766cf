"""Tests for ConversionJob and process_files using in-memory documents."""

import logging

from PIL import Image

from pdfcrop.converter import ConversionJob, process_files
from pdfcrop.models.callbacks import ConversionCallbacks

from conftest import FakeDocument, FakeOpener


def _png_names(directory):
    return sorted(p.name for p in directory.glob("*.png"))


def test_single_page_request_writes_only_that_page(tmp_path, config):
    doc = FakeDocument([(1600, 900)] * 3)
    job = ConversionJob(tmp_path / "report.pdf", tmp_path, config, FakeOpener({"report.pdf": doc}))

    written = job.run(2)

    assert [p.page_num for p in written] == [2]
    assert _png_names(tmp_path / "report") == ["page_002.png"]
    assert doc.rendered == [1]
    assert doc.closed


def test_all_pages_written_in_order_at_target_size(tmp_path, config):
    doc = FakeDocument([(1600, 900), (900, 1600), (1000, 750)])
    job = ConversionJob(tmp_path / "deck.pdf", tmp_path, config, FakeOpener({"deck.pdf": doc}))

    written = job.run()

    assert doc.rendered == [0, 1, 2]
    assert _png_names(tmp_path / "deck") == ["page_001.png", "page_002.png", "page_003.png"]
    for page in written:
        with Image.open(page.path) as img:
            assert img.format == "PNG"
            assert img.size == (1440, 1080)


def test_no_resize_keeps_native_crop(tmp_path, config):
    config.RESIZE = False
    doc = FakeDocument([(1000, 750), (1600, 900)])
    job = ConversionJob(tmp_path / "a.pdf", tmp_path, config, FakeOpener({"a.pdf": doc}))

    written = job.run()

    assert [p.dimensions for p in written] == [(1000, 750), (1200, 900)]
    with Image.open(tmp_path / "a" / "page_001.png") as img:
        assert img.size == (1000, 750)


def test_rerun_overwrites_same_files(tmp_path, config):
    opener = FakeOpener({"a.pdf": FakeDocument([(1600, 900)] * 2)})
    first = ConversionJob(tmp_path / "a.pdf", tmp_path, config, opener).run()
    opener.documents["a.pdf"] = FakeDocument([(1600, 900)] * 2)
    second = ConversionJob(tmp_path / "a.pdf", tmp_path, config, opener).run()

    assert [p.path for p in first] == [p.path for p in second]
    assert [p.dimensions for p in first] == [p.dimensions for p in second]
    assert _png_names(tmp_path / "a") == ["page_001.png", "page_002.png"]


def test_page_beyond_document_writes_nothing(tmp_path, config, caplog):
    doc = FakeDocument([(1600, 900)] * 2)
    job = ConversionJob(tmp_path / "short.pdf", tmp_path, config, FakeOpener({"short.pdf": doc}))

    with caplog.at_level(logging.WARNING):
        assert job.run(5) == []

    assert "Page 5 does not exist" in caplog.text
    assert _png_names(tmp_path / "short") == []
    assert doc.closed


def test_failed_page_does_not_stop_remaining_pages(tmp_path, config, caplog):
    doc = FakeDocument([(1600, 900)] * 3, failing_pages={1})
    errors = []
    callbacks = ConversionCallbacks(on_error=lambda path, msg: errors.append(msg))
    job = ConversionJob(
        tmp_path / "b.pdf", tmp_path, config, FakeOpener({"b.pdf": doc}), callbacks
    )

    with caplog.at_level(logging.ERROR):
        written = job.run()

    assert [p.page_num for p in written] == [1, 3]
    assert _png_names(tmp_path / "b") == ["page_001.png", "page_003.png"]
    assert "Error converting page 2 of b.pdf" in caplog.text
    assert len(errors) == 1
    assert doc.closed


def test_open_failure_is_reported_not_raised(tmp_path, config, caplog):
    errors = []
    callbacks = ConversionCallbacks(on_error=lambda path, msg: errors.append(path.name))
    job = ConversionJob(tmp_path / "broken.pdf", tmp_path, config, FakeOpener({}), callbacks)

    with caplog.at_level(logging.ERROR):
        assert job.run() == []

    assert "Error processing broken.pdf" in caplog.text
    assert errors == ["broken.pdf"]
    assert not (tmp_path / "broken").exists()


def test_existing_output_directory_is_reused(tmp_path, config):
    (tmp_path / "c").mkdir()
    doc = FakeDocument([(800, 600)])
    job = ConversionJob(tmp_path / "c.pdf", tmp_path, config, FakeOpener({"c.pdf": doc}))

    assert len(job.run()) == 1
    assert _png_names(tmp_path / "c") == ["page_001.png"]


def test_process_files_continues_after_bad_file(tmp_path, config):
    good = FakeDocument([(1600, 900)] * 2)
    opener = FakeOpener({"good.pdf": good})
    started = []
    saved = []
    callbacks = ConversionCallbacks(
        on_file_start=lambda path, n: started.append((path.name, n)),
        on_page_saved=lambda path, page, out: saved.append((path.name, page)),
    )

    written = process_files(
        [tmp_path / "bad.pdf", tmp_path / "good.pdf"], 0, config, tmp_path, opener, callbacks
    )

    assert written == 2
    assert opener.opened == ["bad.pdf", "good.pdf"]
    assert started == [("good.pdf", 2)]
    assert saved == [("good.pdf", 1), ("good.pdf", 2)]


def test_uncreatable_output_directory_skips_file(tmp_path, config, caplog):
    (tmp_path / "blocked").write_text("not a directory")
    blocked = FakeDocument([(1600, 900)])
    good = FakeDocument([(1600, 900)])
    opener = FakeOpener({"blocked.pdf": blocked, "good.pdf": good})
    errors = []
    callbacks = ConversionCallbacks(on_error=lambda path, msg: errors.append(path.name))

    with caplog.at_level(logging.ERROR):
        written = process_files(
            [tmp_path / "blocked.pdf", tmp_path / "good.pdf"],
            0,
            config,
            tmp_path,
            opener,
            callbacks,
        )

    assert written == 1
    assert "Error processing blocked.pdf" in caplog.text
    assert errors == ["blocked.pdf"]
    assert blocked.closed
    assert blocked.rendered == []
    assert _png_names(tmp_path / "good") == ["page_001.png"]


def test_shared_output_directory_is_warned(tmp_path, config, caplog):
    opener = FakeOpener(
        {"a.pdf": FakeDocument([(1600, 900)]), "a.PDF": FakeDocument([(1600, 900)])}
    )

    with caplog.at_level(logging.WARNING):
        process_files([tmp_path / "a.PDF", tmp_path / "a.pdf"], 0, config, tmp_path, opener)

    assert "a.pdf and a.PDF share output directory" in caplog.text
