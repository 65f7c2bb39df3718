"""
Open Gate Plugin - Wires settings, registry, dispatcher and commands.

Startup order: load settings → init_frames (first-run setup, register
gates) → register commands. The host supplies the workspace, the content
factory and the editor/list windows; everything else is owned here.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from loguru import logger

from opengate.gates.errors import PanelAllocationError
from opengate.gates.host import Workspace
from opengate.gates.model import GateFrameOption, create_empty_gate_option
from opengate.gates.protocol import Dispatch, ProtocolDispatcher
from opengate.gates.registry import ContentFactory, GateRegistry, Onboarding
from opengate.services.store import SettingsStore
from opengate.utils.helpers import notify as desktop_notify


@dataclass
class Hotkey:
    modifiers: list[str]
    key: str


@dataclass
class Command:
    """An entry of the command surface."""
    id: str
    name: str
    callback: Callable[[], None]
    hotkeys: list[Hotkey] = field(default_factory=list)


class OpenGatePlugin:
    """
    Top-level object owning the gate subsystem.

    Args:
        workspace: Host panel registry
        content_factory: Builds embedded content for a gate
        store: Settings store (defaults to the user data file)
        notify: Notice sink (defaults to desktop notifications)
        onboarding: First-run flow, called with (template, on_submit)
        editor: Gate editor, called with (gate, on_submit)
        gate_list: Gate list, called with the registry
    """

    def __init__(
        self,
        workspace: Workspace,
        content_factory: ContentFactory,
        store: Optional[SettingsStore] = None,
        notify: Callable[[str], None] = desktop_notify,
        onboarding: Optional[Onboarding] = None,
        editor: Optional[Callable[[GateFrameOption, Callable[[GateFrameOption], None]], None]] = None,
        gate_list: Optional[Callable[[GateRegistry], None]] = None,
    ):
        self.store = store or SettingsStore()
        self.notify = notify
        self.editor = editor
        self.gate_list = gate_list
        self.registry = GateRegistry(self.store, workspace, content_factory, notify, onboarding)
        self.dispatcher = ProtocolDispatcher(self.registry, notify)
        self.commands: dict[str, Command] = {}

    def onload(self) -> None:
        self.store.load()
        self.registry.init_frames()
        self.register_commands()
        logger.info(f"Open Gate loaded with {len(self.registry.gates)} gate(s)")

    def register_commands(self) -> None:
        self.add_command(Command(
            id="open-gate-create-new",
            name="Create new gate",
            callback=self._create_new_gate,
        ))
        self.add_command(Command(
            id="open-list-gates-modal",
            name="List Gates",
            callback=self._list_gates,
            hotkeys=[Hotkey(modifiers=["Mod", "Shift"], key="g")],
        ))

    def add_command(self, command: Command) -> None:
        self.commands[command.id] = command

    def run_command(self, command_id: str) -> None:
        """Execute a command by id. Unknown ids are logged and ignored."""
        command = self.commands.get(command_id)
        if command is None:
            logger.warning(f"Unknown command: {command_id}")
            return
        logger.debug(f"Running command {command_id}")
        command.callback()

    def handle_uri(self, uri: str) -> Optional[Dispatch]:
        """
        Entry point for opengate:// requests.

        Returns:
            The dispatch record, or None if no panel could be allocated
        """
        try:
            return self.dispatcher.handle_uri(uri)
        except PanelAllocationError as e:
            logger.exception(f"Failed to open panel for {uri}")
            self.notify(str(e))
            return None

    def _create_new_gate(self) -> None:
        if self.editor is None:
            logger.warning("No gate editor available")
            return
        self.editor(create_empty_gate_option(), self.registry.add_gate)

    def _list_gates(self) -> None:
        if self.gate_list is None:
            logger.warning("No gate list available")
            return
        self.gate_list(self.registry)
