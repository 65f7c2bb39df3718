"""
Shared test fixtures for the Open Gate test suite.

Provides a temporary data file (real file I/O, no filesystem mocking), an
in-memory host workspace and content host, and a notice recorder.
"""

import json

import pytest

from opengate.gates.host import ContentHost, Workspace
from opengate.gates.model import GateFrameOption
from opengate.gates.registry import GateRegistry
from opengate.services.store import SettingsStore


class FakeContentHost(ContentHost):
    """Content host that records navigations instead of loading pages."""

    def __init__(self, url, zoom_factor, profile_key):
        super().__init__(url, zoom_factor, profile_key)
        self.navigations = []
        self.closed = False

    def set_url(self, url):
        self.url = url
        self.navigations.append(url)

    def close(self):
        super().close()
        self.closed = True


class FakeWorkspace(Workspace):
    """In-memory host. capacity limits how many panels can be allocated."""

    def __init__(self, capacity=None):
        super().__init__()
        self.capacity = capacity
        self.allocated = 0
        self.shown = []
        self.focused = []
        self.destroyed = []

    def _allocate(self, placement):
        if self.capacity is not None and self.allocated >= self.capacity:
            return None
        self.allocated += 1
        return {"placement": placement}

    def _attach(self, panel):
        pass

    def _show(self, panel):
        self.shown.append(panel.panel_id)

    def _focus(self, panel):
        self.focused.append(panel.panel_id)

    def _destroy(self, panel):
        self.destroyed.append(panel.panel_id)


class Notices:
    """Callable notice sink that remembers messages."""

    def __init__(self):
        self.messages = []

    def __call__(self, message):
        self.messages.append(message)


@pytest.fixture
def workspace():
    return FakeWorkspace()


@pytest.fixture
def make_workspace():
    return FakeWorkspace


@pytest.fixture
def content_factory():
    return FakeContentHost


@pytest.fixture
def notices():
    return Notices()


@pytest.fixture
def data_path(tmp_path):
    return tmp_path / "data.json"


@pytest.fixture
def tmp_data(data_path):
    """Create a real data file with one right-side gate and a legacy gate."""
    data = {
        "uuid": "abc123",
        "gates": {
            "g1": {
                "id": "g1",
                "title": "Docs",
                "icon": "book",
                "hasRibbon": True,
                "position": "right",
                "url": "https://a",
                "zoomFactor": 1.0,
                "profileKey": "open-gate",
            },
            "legacy": {
                "id": "legacy",
                "title": "Legacy",
                "position": "left",
                "url": "https://legacy.example.com",
                "zoomFactor": 0,
            },
        },
    }
    data_path.write_text(json.dumps(data, indent=2))
    return data_path


@pytest.fixture
def store(data_path):
    store = SettingsStore(data_path)
    store.load()
    return store


@pytest.fixture
def registry(store, workspace, content_factory, notices):
    return GateRegistry(store, workspace, content_factory, notices)


@pytest.fixture
def docs_gate():
    return GateFrameOption(id="g1", title="Docs", position="right", url="https://a")
