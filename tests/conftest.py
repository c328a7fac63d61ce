import itertools

import pytest

from stockroom import settings
from stockroom.store import Store


@pytest.fixture
def clock():
    """A deterministic sale clock: 1000, 2000, 3000, ... nanoseconds."""
    ticks = itertools.count(start=1000, step=1000)
    return lambda: next(ticks)


@pytest.fixture
def store(clock):
    return Store(clock=clock)


@pytest.fixture
def seeded_store(store):
    """Widget (id 0, 10 @ 2.5) and Gadget (id 1, 5 @ 9.0)."""
    store.add_item("Widget", 10, 2.5)
    store.add_item("Gadget", 5, 9.0)
    return store


@pytest.fixture
def isolated_settings(monkeypatch, tmp_path):
    """Points every configured directory at tmp_path and disables the webhook."""
    input_dir = tmp_path / "input"
    input_dir.mkdir()
    monkeypatch.setattr(settings, "INPUT_DIR", input_dir)
    monkeypatch.setattr(settings, "OUTPUT_DIR", tmp_path / "output")
    monkeypatch.setattr(settings, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(settings, "WEBHOOK_URL", None)
    monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", False)
    monkeypatch.setattr(settings, "REPORT_FILENAME_BASE", "store")
    monkeypatch.setattr(settings, "REORDER_THRESHOLD", 5)
    monkeypatch.setattr(settings, "TOP_SELLERS_COUNT", 10)
    return settings
