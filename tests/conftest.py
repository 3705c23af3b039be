import faulthandler
import os
import sys
from pathlib import Path

import pytest

# Qt widgets in tests render offscreen
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from a11y.element_tree import Element, ElementNodeTree, FocusPointer  # noqa: E402
from a11y.scheduler import ManualScheduler  # noqa: E402
from core.config import EngineConfig  # noqa: E402

# =============================================================================
# Global singleton reset fixture for test isolation
# =============================================================================


@pytest.fixture(autouse=True)
def reset_singletons():
    """
    Reset process-wide singletons after each test for proper isolation.

    Singletons reset:
    - IdAllocator: id counter and random source
    """
    yield

    from a11y.aria_labels import reset_id_allocator_for_testing
    reset_id_allocator_for_testing()


@pytest.fixture
def temp_config(tmp_path):
    """
    Provide a fresh EngineConfig backed by a temporary file.

    This fixture GUARANTEES a clean config or fails loudly.
    """
    config = EngineConfig(config_file=tmp_path / "config.json")

    assert config.announcement_clear_ms == 1000, \
        f"FIXTURE CONTAMINATED! clear_ms={config.announcement_clear_ms}"
    assert config.reduce_animations is False, \
        f"FIXTURE CONTAMINATED! reduce_animations={config.reduce_animations}"

    return config


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def tree():
    return ElementNodeTree()


@pytest.fixture
def pointer(tree):
    return FocusPointer(tree)


@pytest.fixture
def dialog():
    """A dialog with three focusable controls and some that are skipped."""
    root = Element("div", name="dialog")
    root.append(Element("h2", name="title"))
    root.append(Element("input", name="name"))
    root.append(Element("button", name="disabled", disabled=True))
    row = root.append(Element("div", name="row"))
    row.append(Element("span", name="skip", tab_index=-1))
    row.append(Element("button", name="cancel"))
    row.append(Element("a", name="help", href="#help"))
    return root


def pytest_collection_modifyitems(config, items):
    """Assign tier markers based on test location."""
    for item in items:
        path = Path(str(item.fspath)).as_posix()
        filename = Path(path).name

        if filename == "test_qt_adapter.py":
            item.add_marker(pytest.mark.gui)
            continue

        if "/tests/unit/" in path:
            item.add_marker(pytest.mark.unit)


def pytest_sessionstart(session):  # pragma: no cover - test harness init
    """Enable faulthandler for the entire test run to aid diagnosing hangs."""
    try:
        faulthandler.enable(file=sys.stderr, all_threads=True)
    except Exception:
        pass
