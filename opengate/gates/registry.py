"""
Gate Registry - Correlates configured gates with host panel types.

Startup registers every configured gate as an openable panel type without
opening it. Panel types are add-only for the session, so editing or
removing an already registered gate only fully applies after a restart;
the user is told so with a notice.
"""

from typing import Callable, Optional

from loguru import logger

from opengate.gates.errors import (
    GateNotFoundError,
    GateValidationError,
    PanelAllocationError,
    StaleRegistrationError,
)
from opengate.gates.host import ContentHost, Panel, Workspace
from opengate.gates.model import GateFrameOption, create_empty_gate_option, normalize_gate_option
from opengate.gates.views import open_view
from opengate.services.store import SettingsStore
from opengate.utils.helpers import generate_uuid

# factory(url=..., zoom_factor=..., profile_key=...) -> ContentHost
ContentFactory = Callable[..., ContentHost]
# onboarding(template, on_submit)
Onboarding = Callable[[GateFrameOption, Callable[[GateFrameOption], None]], None]


class GateRegistry:
    """
    Source of truth for configured gates.

    Methods:
        init_frames(): First-run setup and panel type registration
        add_gate(gate): Create or update a gate
        remove_gate(gate_id): Delete a gate and close its panels
        find_by_title(title): Case-insensitive lookup, first match wins
        open_gate(gate_id): Reveal the gate's panel, creating it if needed
    """

    def __init__(
        self,
        store: SettingsStore,
        workspace: Workspace,
        content_factory: ContentFactory,
        notify: Callable[[str], None],
        onboarding: Optional[Onboarding] = None,
    ):
        self.store = store
        self.workspace = workspace
        self.content_factory = content_factory
        self.notify = notify
        self.onboarding = onboarding

    @property
    def gates(self) -> dict[str, GateFrameOption]:
        return self.store.settings.gates

    def get(self, gate_id: str) -> Optional[GateFrameOption]:
        return self.gates.get(gate_id)

    def find_by_title(self, title: str) -> Optional[GateFrameOption]:
        wanted = title.lower()
        for gate in self.gates.values():
            if gate.title.lower() == wanted:
                return gate
        return None

    def init_frames(self) -> None:
        """Initialize a fresh install, then register every configured gate."""
        settings = self.store.settings
        if settings.uuid == "":
            settings.uuid = generate_uuid()
            self.store.save()
            logger.info(f"Initialized installation {settings.uuid}")

            if len(settings.gates) == 0:
                self._start_onboarding()

        for gate in list(self.gates.values()):
            # Onboarding may already have registered its gate
            if not self.workspace.has_panel_type(gate.id):
                self.register_gate(gate)

    def register_gate(self, gate: GateFrameOption) -> None:
        """Make gate openable. Never creates a panel."""
        options = dict(url=gate.url, zoom_factor=gate.zoom_factor, profile_key=gate.profile_key)
        self.workspace.register_panel_type(gate.id, lambda: self.content_factory(**options))

    def add_gate(self, gate: GateFrameOption) -> None:
        """
        Create or update a gate and persist it.

        A gate whose panel type is not registered yet is registered and
        opened right away; failing to open it is
        reported as a notice, the gate stays saved. Updating a registered gate only applies after a
        restart.

        Raises:
            GateValidationError: the gate has no id
        """
        gate = normalize_gate_option(gate)
        if not gate.id:
            raise GateValidationError("A gate needs an id")
        is_new = not self.workspace.has_panel_type(gate.id)

        if is_new:
            self.register_gate(gate)
        else:
            self._notify_stale(gate.id)

        self.gates[gate.id] = gate
        self.store.save()
        logger.info(f"Saved gate {gate.id} ({gate.title})")

        if is_new:
            try:
                self.open_gate(gate.id)
            except PanelAllocationError as e:
                logger.exception(f"Saved gate {gate.id} but could not open its panel")
                self.notify(str(e))

    def remove_gate(self, gate_id: str) -> None:
        """Close the gate's panels and delete it. Unknown ids only warn."""
        if gate_id not in self.gates:
            self.notify("Gate not found")
            logger.warning(f"Removing unknown gate {gate_id}")

        closed = self.workspace.close_panels_of_type(gate_id)
        self.gates.pop(gate_id, None)
        self.store.save()
        logger.info(f"Removed gate {gate_id}, closed {closed} panel(s)")

        self._notify_stale(gate_id)

    def open_gate(self, gate_id: str) -> Panel:
        """
        Reveal the panel of a configured gate.

        Raises:
            GateNotFoundError: gate_id is not configured
            PanelAllocationError: the host could not supply a panel
        """
        gate = self.get(gate_id)
        if gate is None:
            raise GateNotFoundError(f"Gate not found: {gate_id}")
        return open_view(self.workspace, gate.id, gate.position)

    def _start_onboarding(self) -> None:
        if self.onboarding is None:
            logger.warning("No gates configured and no onboarding available")
            return
        logger.debug("Starting onboarding")
        self.onboarding(create_empty_gate_option(), self.add_gate)

    def _notify_stale(self, gate_id: str) -> None:
        notice = StaleRegistrationError(gate_id)
        logger.info(f"Panel type {gate_id} is stale until restart")
        self.notify(str(notice))
