"""
Gate List - Window listing configured gates.

Click a gate to open it, or use the row buttons to edit or remove it.
Bound to Mod+Shift+G through the "List Gates" command.
"""

from ignis import widgets
from loguru import logger

from opengate.gates.errors import PanelAllocationError

from .gate_editor import GateEditorPanel


class GateListPanel:
    """Lists gates from a GateRegistry."""

    def __init__(self, registry):
        self.registry = registry
        self.window = None
        self.list_box = None

    def show(self):
        self.window = self.create_window()
        self.window.set_visible(True)
        return self.window

    def create_window(self):
        self.list_box = widgets.Box(vertical=True, spacing=4, css_classes=["gate-list"])
        self._refresh_list()

        return widgets.Window(
            namespace="opengate-list",
            css_classes=["opengate-window"],
            anchor=[],
            kb_mode="on_demand",
            layer="overlay",
            default_width=420,
            default_height=480,
            visible=False,
            child=widgets.Box(
                vertical=True,
                css_classes=["panel", "gate-list-panel"],
                child=[
                    widgets.Box(
                        child=[
                            widgets.Label(
                                label="Gates",
                                css_classes=["panel-header"],
                                halign="start",
                                hexpand=True,
                            ),
                            widgets.Button(
                                child=widgets.Icon(image="window-close-symbolic", pixel_size=16),
                                on_click=lambda x: self._close(),
                            ),
                        ],
                    ),
                    widgets.Scroll(vexpand=True, hexpand=True, child=self.list_box),
                ],
            ),
        )

    def _refresh_list(self):
        """Rebuild rows from the registry."""
        child = self.list_box.get_first_child()
        while child:
            next_child = child.get_next_sibling()
            self.list_box.remove(child)
            child = next_child

        gates = sorted(self.registry.gates.values(), key=lambda g: g.title.lower())
        if not gates:
            self.list_box.append(widgets.Label(
                label="No gates yet\n\nUse \"Create new gate\" to add one",
                css_classes=["empty-state"],
                justify="center",
            ))
            return

        for gate in gates:
            self.list_box.append(self._create_row(gate))

    def _create_row(self, gate):
        return widgets.Box(
            spacing=8,
            css_classes=["gate-item"],
            child=[
                widgets.Button(
                    hexpand=True,
                    on_click=lambda x, gate_id=gate.id: self._on_open(gate_id),
                    child=widgets.Box(
                        vertical=True,
                        child=[
                            widgets.Label(label=gate.title, css_classes=["gate-name"], halign="start", ellipsize="end"),
                            widgets.Label(label=gate.url, css_classes=["gate-url"], halign="start", ellipsize="end"),
                        ],
                    ),
                ),
                widgets.Button(
                    child=widgets.Icon(image="document-edit-symbolic", pixel_size=16),
                    on_click=lambda x, gate=gate: self._on_edit(gate),
                ),
                widgets.Button(
                    child=widgets.Icon(image="user-trash-symbolic", pixel_size=16),
                    on_click=lambda x, gate_id=gate.id: self._on_remove(gate_id),
                ),
            ],
        )

    def _on_open(self, gate_id):
        try:
            self.registry.open_gate(gate_id)
        except PanelAllocationError as e:
            logger.exception(f"Could not open gate {gate_id}")
            self.registry.notify(str(e))
            return
        self._close()

    def _on_edit(self, gate):
        def on_submit(updated):
            self.registry.add_gate(updated)
            self._refresh_list()

        GateEditorPanel(gate, on_submit, existing_ids=self.registry.gates, heading="Edit gate").show()

    def _on_remove(self, gate_id):
        self.registry.remove_gate(gate_id)
        self._refresh_list()

    def _close(self):
        if self.window is not None:
            self.window.set_visible(False)
            self.window.destroy()
            self.window = None
