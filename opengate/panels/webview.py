"""
Gate Web View - WebKitGTK content host for a gate panel.

Each profile key maps to its own NetworkSession, so cookies and storage
are shared between gates with the same profile and isolated otherwise.
Ready fires when a page load finishes.
"""

from pathlib import Path

import gi

gi.require_version("WebKit", "6.0")

from gi.repository import WebKit
from loguru import logger

from opengate.gates.host import ContentHost

# profile key → WebKit.NetworkSession
_sessions: dict = {}


def _session_for(profile_key: str, profiles_root: Path):
    session = _sessions.get(profile_key)
    if session is None:
        root = profiles_root / profile_key
        data_dir = root / "data"
        cache_dir = root / "cache"
        data_dir.mkdir(parents=True, exist_ok=True)
        cache_dir.mkdir(parents=True, exist_ok=True)
        session = WebKit.NetworkSession.new(str(data_dir), str(cache_dir))
        _sessions[profile_key] = session
        logger.debug(f"Created network session for profile {profile_key} at {root}")
    return session


class GateWebView(ContentHost):
    """Embedded browser showing a gate's url."""

    def __init__(self, url: str, zoom_factor: float, profile_key: str, profiles_root: Path):
        super().__init__(url, zoom_factor, profile_key)

        self.widget = WebKit.WebView(
            network_session=_session_for(profile_key, profiles_root),
            hexpand=True,
            vexpand=True,
        )
        self.widget.set_zoom_level(zoom_factor)
        self._load_handler = self.widget.connect("load-changed", self._on_load_changed)
        self.widget.load_uri(url)

    def set_url(self, url: str) -> None:
        self.url = url
        self.widget.load_uri(url)

    def close(self) -> None:
        super().close()
        if self._load_handler is not None:
            self.widget.disconnect(self._load_handler)
            self._load_handler = None
        self.widget.try_close()

    def _on_load_changed(self, webview, load_event):
        if load_event == WebKit.LoadEvent.STARTED:
            self.ready_signal.reset()
        elif load_event == WebKit.LoadEvent.FINISHED:
            self.ready_signal.fire()
