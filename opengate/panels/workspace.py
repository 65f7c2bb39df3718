"""
Ignis Workspace - Gate panels as layer-shell windows.

Placement:
  - left/right: full-height window anchored to that screen edge
  - center: floating window centered on screen

Each window carries a header (gate id, close button) and a body that
holds the gate's web view.
"""

from gi.repository import GLib
from ignis import widgets
from loguru import logger

from opengate.gates.host import Panel, Workspace
from opengate.utils.helpers import get_focused_monitor

_ANCHORS = {
    "left": ["left", "top", "bottom"],
    "right": ["right", "top", "bottom"],
    "center": [],
}


class IgnisWorkspace(Workspace):
    """Workspace backed by Ignis windows."""

    def __init__(self, panel_settings: dict):
        super().__init__()
        self.panel_settings = panel_settings

    def _allocate(self, placement: str):
        margin = self.panel_settings["margin"]
        is_side = placement in ("left", "right")

        body = widgets.Box(vertical=True, vexpand=True, css_classes=["gate-body"])

        try:
            window = widgets.Window(
                namespace=f"opengate-{self._next_panel_id}",
                css_classes=["opengate-window"],
                monitor=get_focused_monitor(),
                anchor=_ANCHORS.get(placement, []),
                exclusivity="exclusive" if is_side else "normal",
                kb_mode="on_demand",
                layer="top",
                default_width=self.panel_settings["side_width"] if is_side else self.panel_settings["center_width"],
                default_height=-1 if is_side else self.panel_settings["center_height"],
                visible=False,
                margin_top=margin,
                margin_bottom=margin,
                margin_left=margin,
                margin_right=margin,
                child=body,
            )
        except GLib.Error:
            logger.exception(f"Could not create {placement} window")
            return None

        window.gate_body = body
        return window

    def _attach(self, panel: Panel) -> None:
        body = panel.widget.gate_body

        # Clear existing (GTK4 way)
        child = body.get_first_child()
        while child:
            next_child = child.get_next_sibling()
            body.remove(child)
            child = next_child

        body.append(widgets.Box(
            css_classes=["gate-header"],
            child=[
                widgets.Label(
                    label=panel.view_type,
                    css_classes=["gate-title"],
                    hexpand=True,
                    halign="start",
                    ellipsize="end",
                ),
                widgets.Button(
                    css_classes=["gate-close"],
                    on_click=lambda x, panel=panel: self.close_panel(panel),
                    child=widgets.Icon(image="window-close-symbolic", pixel_size=16),
                ),
            ],
        ))
        body.append(panel.content.widget)

    def _show(self, panel: Panel) -> None:
        panel.widget.set_visible(True)

    def _focus(self, panel: Panel) -> None:
        if panel.content is not None:
            panel.content.widget.grab_focus()

    def _destroy(self, panel: Panel) -> None:
        panel.widget.set_visible(False)
        panel.widget.destroy()
