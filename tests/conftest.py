import sys
import pathlib
import pytest

# Ensure project root (containing the 'trex_loader' package) is on sys.path
PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from trex_loader.core.config import settings
from trex_loader.core.diagnostics import capture_diagnostics
from trex_loader.class_loader.registry import get_vendor_registry
from tests.helpers import FIXTURE_BASE_DIR


@pytest.fixture(autouse=True)
def base_dir(monkeypatch):
    monkeypatch.setattr(settings, 'base_dir', FIXTURE_BASE_DIR)
    monkeypatch.setattr(settings, 'source_suffix', '.py')
    yield FIXTURE_BASE_DIR


@pytest.fixture
def registry():
    reg = get_vendor_registry()
    reg.reset()
    yield reg
    reg.reset()


@pytest.fixture
def diagnostics_log():
    with capture_diagnostics() as collector:
        yield collector

