# Open Gate Panels Package
"""
Ignis host for gates: layer-shell panel windows, WebKit content,
and the editor/list windows.
"""

from .gate_editor import GateEditorPanel
from .gate_list import GateListPanel
from .webview import GateWebView
from .workspace import IgnisWorkspace

__all__ = ["GateEditorPanel", "GateListPanel", "GateWebView", "IgnisWorkspace"]
