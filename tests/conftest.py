import faulthandler
import shutil
import sys
from pathlib import Path

import pytest

from core.cache_store import CacheStore
from tests.conftest_utils import FIXTURES_DIR, MAPPING_URL, PRICES_URL, FakeTransport


@pytest.fixture
def mappings_bytes() -> bytes:
    return (FIXTURES_DIR / "mappings.json").read_bytes()


@pytest.fixture
def prices_bytes() -> bytes:
    return (FIXTURES_DIR / "prices.json").read_bytes()


@pytest.fixture
def fake_transport(mappings_bytes, prices_bytes):
    return FakeTransport({
        MAPPING_URL: mappings_bytes,
        PRICES_URL: prices_bytes,
    })


@pytest.fixture
def cache_dir(tmp_path) -> Path:
    """A cache directory that does not exist yet."""
    return tmp_path / "nested" / "cache"


@pytest.fixture
def store(cache_dir) -> CacheStore:
    return CacheStore(cache_dir)


@pytest.fixture
def seeded_cache_dir(tmp_path) -> Path:
    """A cache directory pre-populated with the fixture datasets."""
    target = tmp_path / "seeded_cache"
    target.mkdir()
    shutil.copy(FIXTURES_DIR / "mappings.json", target / "mappings.json")
    shutil.copy(FIXTURES_DIR / "prices.json", target / "prices.json")
    return target


def pytest_collection_modifyitems(config, items):
    """Assign tier markers based on test location."""
    for item in items:
        path = Path(str(item.fspath)).as_posix()

        if "/tests/unit/" in path:
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)


def pytest_sessionstart(session):  # pragma: no cover - test harness init
    """Enable faulthandler for the entire test run to aid diagnosing hangs."""
    try:
        faulthandler.enable(file=sys.stderr, all_threads=True)
    except Exception:
        pass
