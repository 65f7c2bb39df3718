"""
Gate Editor - Window for creating or editing a gate.

Used by the "Create new gate" command, by onboarding on first run, and by
the gate list's edit button. Submitting hands the gate to the callback
(GateRegistry.add_gate) and closes the window.
"""

from ignis import widgets
from loguru import logger

from opengate.gates.errors import GateError
from opengate.gates.model import POSITIONS, GateFrameOption, normalize_gate_option
from opengate.utils.helpers import make_gate_id


class GateEditorPanel:
    """
    Form for the user-editable gate fields.

    The id is derived from the title for new gates and kept for
    existing ones.
    """

    def __init__(self, gate: GateFrameOption, on_submit, existing_ids=(), heading: str = "Gate"):
        self.gate = gate
        self.on_submit = on_submit
        self.existing_ids = list(existing_ids)
        self.heading = heading
        self.window = None

    def show(self):
        self.window = self.create_window()
        self.window.set_visible(True)
        return self.window

    def create_window(self):
        self.title_entry = self._entry("Title", self.gate.title)
        self.url_entry = self._entry("https://example.com", self.gate.url)
        self.icon_entry = self._entry("Icon name", self.gate.icon)
        self.position_entry = self._entry(" / ".join(POSITIONS), self.gate.position)
        self.profile_entry = self._entry("Profile key (optional)", self.gate.profile_key)
        self.zoom_entry = self._entry("Zoom factor", str(self.gate.zoom_factor))
        self.error_label = widgets.Label(label="", css_classes=["gate-error"], halign="start")

        return widgets.Window(
            namespace="opengate-editor",
            css_classes=["opengate-window"],
            anchor=[],
            kb_mode="exclusive",
            layer="overlay",
            default_width=420,
            visible=False,
            child=widgets.Box(
                vertical=True,
                spacing=8,
                css_classes=["panel", "gate-editor"],
                child=[
                    widgets.Label(label=self.heading, css_classes=["panel-header"], halign="start"),
                    self.title_entry,
                    self.url_entry,
                    self.icon_entry,
                    self.position_entry,
                    self.profile_entry,
                    self.zoom_entry,
                    self.error_label,
                    widgets.Box(
                        spacing=8,
                        halign="end",
                        child=[
                            widgets.Button(
                                child=widgets.Label(label="Cancel"),
                                on_click=lambda x: self._close(),
                            ),
                            widgets.Button(
                                css_classes=["suggested-action"],
                                child=widgets.Label(label="Save"),
                                on_click=lambda x: self._on_save(),
                            ),
                        ],
                    ),
                ],
            ),
        )

    def _entry(self, placeholder: str, text: str):
        entry = widgets.Entry(placeholder_text=placeholder, css_classes=["gate-entry"])
        entry.set_text(text or "")
        return entry

    def _on_save(self):
        title = self.title_entry.text.strip()
        url = self.url_entry.text.strip()
        if not title or not url:
            self.error_label.set_label("Title and URL are required")
            return

        gate = normalize_gate_option({
            "id": self.gate.id or make_gate_id(title, self.existing_ids),
            "title": title,
            "icon": self.icon_entry.text.strip(),
            "hasRibbon": self.gate.has_ribbon,
            "position": self.position_entry.text.strip().lower(),
            "url": url,
            "zoomFactor": self.zoom_entry.text.strip(),
            "profileKey": self.profile_entry.text.strip(),
        })

        try:
            self.on_submit(gate)
        except GateError as e:
            logger.exception(f"Could not save gate {gate.id}")
            self.error_label.set_label(str(e))
            return

        self._close()

    def _close(self):
        if self.window is not None:
            self.window.set_visible(False)
            self.window.destroy()
            self.window = None
