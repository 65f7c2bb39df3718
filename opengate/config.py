"""
Open Gate - Ignis Configuration

Entry point for Ignis. Loads gates, registers them as panels and exposes
`plugin` for protocol requests and commands.

Usage:
  ignis init -c /path/to/opengate/config.py

Protocol requests and commands (e.g. from a Hyprland bind):
  ignis run-python "from opengate.config import plugin; plugin.handle_uri('opengate://?title=Docs&url=https://example.com')"
  bind = SUPER SHIFT, G, exec, ignis run-python "from opengate.config import plugin; plugin.run_command('open-list-gates-modal')"
"""

from functools import partial
from pathlib import Path

from ignis.app import IgnisApp
from loguru import logger

from opengate.panels import GateEditorPanel, GateListPanel, GateWebView, IgnisWorkspace
from opengate.plugin import OpenGatePlugin
from opengate.utils.helpers import configure_logging, load_settings, notify, profiles_dir

settings = load_settings()
configure_logging(settings)

app = IgnisApp.get_default()

styles_path = Path(__file__).parent / "styles" / "main.css"
if styles_path.exists():
    app.apply_css(str(styles_path))


def _open_editor(gate, on_submit):
    GateEditorPanel(gate, on_submit, existing_ids=plugin.registry.gates, heading="New gate").show()


def _open_onboarding(gate, on_submit):
    GateEditorPanel(gate, on_submit, heading="Welcome to Open Gate - create your first gate").show()


def _open_gate_list(registry):
    GateListPanel(registry).show()


plugin = OpenGatePlugin(
    workspace=IgnisWorkspace(settings["panels"]),
    content_factory=partial(GateWebView, profiles_root=profiles_dir(settings)),
    notify=lambda message: notify(message, settings),
    onboarding=_open_onboarding,
    editor=_open_editor,
    gate_list=_open_gate_list,
)
plugin.onload()

logger.info("Open Gate initialized")
