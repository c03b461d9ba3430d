# tests/conftest.py
import pytest

from auditor.detectors.detector_factory import Detector
from auditor.model import FileFormat, SourceDocument
from frontscan.core.managers.cache_manager import ScanCache
from frontscan.model import CacheSettings, ScannerSettings


class FakeClock:
    """A controllable replacement for time.time()."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache_settings():
    return CacheSettings(memory_ttl_s=60, max_memory_entries=3, disk_ttl_s=3600)


@pytest.fixture
def cache(tmp_path, cache_settings, clock):
    """A cache in its own temporary directory, driven by the fake clock."""
    return ScanCache(cache_settings, cache_dir=tmp_path / "cache", clock=clock)


@pytest.fixture
def scanner_settings():
    return ScannerSettings(show_progress=False)


@pytest.fixture
def detector(scanner_settings):
    return Detector(scanner_settings)


def _make_doc(content: str, path: str = "page.html", file_format: FileFormat = None) -> SourceDocument:
    return SourceDocument(path=path, format=file_format or FileFormat.from_path(path), content=content)


@pytest.fixture
def make_doc():
    """Factory for in-memory documents; the format follows the path extension."""
    return _make_doc


@pytest.fixture
def hero_page():
    return (
        "<html><head><title>Home</title></head>"
        '<body><h1>Welcome</h1><img src="hero-banner.jpg"></body></html>'
    )
