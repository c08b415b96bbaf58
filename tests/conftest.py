import os
from pathlib import Path

import pytest

# Test layer marker by directory, checked in order
_LAYER_MARKERS = (
    ("domain", pytest.mark.domain),
    ("application", pytest.mark.application),
    ("bdd", pytest.mark.bdd),
    ("integration", pytest.mark.integration),
)


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Sets PROTEAN_ENV before any domain is imported, and keeps the web app
    from seeding its demo catalogue or writing log files.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("DEMO_CATALOG", "0")
    os.environ.setdefault("LOG_DIR", "")


def pytest_collection_modifyitems(config, items):
    """Mark tests with their layer based on the directory they live in."""
    for item in items:
        parts = Path(item.fspath).parts
        for directory, marker in _LAYER_MARKERS:
            if directory in parts:
                item.add_marker(marker)
                break

        # Integration tests go through HTTP or several domains
        if "integration" in parts and not any(m.name == "fast" for m in item.iter_markers()):
            item.add_marker(pytest.mark.slow)
