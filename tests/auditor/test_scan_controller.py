# tests/auditor/test_scan_controller.py
import asyncio

import pytest

from auditor.controllers.scan_controller import ScanController
from frontscan.core.managers.cache_manager import ScanCache
from frontscan.core.utils.file_utils import read_document
from frontscan.model import ScannerSettings


@pytest.fixture
def controller(detector, cache):
    return ScanController(detector, cache, ScannerSettings(batch_size=4, show_progress=False))


@pytest.fixture
def site(tmp_path):
    """Ten distinct pages plus a file that is not part of the scan."""
    root = tmp_path / "site"
    root.mkdir()
    for i in range(10):
        (root / f"page{i:02d}.html").write_text(f'<html lang="en"><body><h1>Page {i}</h1><img src="p{i}.png"></body></html>')
    (root / "notes.txt").write_text("not scanned")
    return root


def test_scan_directory_twice_hits_the_cache(controller, cache, site):
    first = asyncio.run(controller.scan_directory(site))
    assert len(first) == 10
    assert cache.metadata().misses >= 10
    assert cache.metadata().hits == 0

    second = asyncio.run(controller.scan_directory(site))
    assert cache.metadata().hits >= 10
    assert [r.to_wire() for r in second] == [r.to_wire() for r in first]


def test_results_follow_traversal_order(controller, site):
    results = asyncio.run(controller.scan_directory(site))
    assert [r.file_name for r in results] == [f"page{i:02d}.html" for i in range(10)]
    assert all(r.file_type == "markup" for r in results)
    assert all(not r.is_valid for r in results)


def test_batch_size_does_not_change_results(detector, cache, site):
    small = ScanController(detector, cache, ScannerSettings(batch_size=1, show_progress=False))
    large = ScanController(detector, cache, ScannerSettings(batch_size=100, show_progress=False))

    one = asyncio.run(small.scan_directory(site))
    cache.clear()
    two = asyncio.run(large.scan_directory(site))
    assert [r.to_wire() for r in one] == [r.to_wire() for r in two]


def test_identical_content_under_two_paths(controller, cache, tmp_path):
    root = tmp_path / "dup"
    (root / "a").mkdir(parents=True)
    (root / "b").mkdir()
    content = "<html><body><img src=x.png></body></html>"
    (root / "a" / "index.html").write_text(content)
    (root / "b" / "index.html").write_text(content)

    results = asyncio.run(controller.scan_directory(root))
    assert [r.file_name for r in results] == ["a/index.html", "b/index.html"]
    assert cache.metadata().hits == 1
    assert results[0].issues == results[1].issues


def test_identical_content_in_two_formats(controller, tmp_path):
    root = tmp_path / "empty"
    root.mkdir()
    (root / "a.html").write_text("")
    (root / "b.css").write_text("")

    by_name = {r.file_name: r for r in asyncio.run(controller.scan_directory(root))}
    assert by_name["a.html"].file_type == "markup"
    assert by_name["b.css"].file_type == "stylesheet"

    fresh = controller.scan_document(read_document(root / "b.css", root))
    assert by_name["b.css"].issues == fresh.issues


def test_unreadable_file_is_skipped(controller, tmp_path):
    root = tmp_path / "mixed"
    root.mkdir()
    (root / "good.html").write_text("<html lang='en'><body><h1>ok</h1></body></html>")
    (root / "bad.html").write_bytes(b"\xff\xfe\x00broken")

    results = asyncio.run(controller.scan_directory(root))
    assert [r.file_name for r in results] == ["good.html"]


def test_cache_directory_inside_root_is_not_scanned(detector, tmp_path, cache_settings, clock):
    root = tmp_path / "proj"
    root.mkdir()
    (root / "index.html").write_text("<html></html>")
    cache = ScanCache(cache_settings, cache_dir=root / "scan-cache", clock=clock)
    (cache.cache_dir / "stray.html").write_text("<html></html>")

    controller = ScanController(detector, cache, ScannerSettings(show_progress=False))
    results = asyncio.run(controller.scan_directory(root))
    assert [r.file_name for r in results] == ["index.html"]


def test_invalid_root(controller, tmp_path):
    with pytest.raises(FileNotFoundError):
        asyncio.run(controller.scan_directory(tmp_path / "missing"))


def test_scan_file_and_document(controller, cache, make_doc, tmp_path):
    path = tmp_path / "App.jsx"
    path.write_text("export const A = () => <img src='/logo.png' />;")

    result = asyncio.run(controller.scan_file(path))
    assert result.file_type == "component"
    assert cache.metadata().misses == 1

    uncached = controller.scan_document(make_doc(path.read_text(), "App.jsx"))
    assert uncached.issues == result.issues
    assert cache.metadata().hits == 0
