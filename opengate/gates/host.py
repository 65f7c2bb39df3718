"""
Host collaborators - the window shell that owns panels and their content.

Workspace keeps the bookkeeping every host needs (panels, registered panel
types, active panel) and leaves widget work to a few hooks. The Ignis
implementation lives in opengate.panels; tests use an in-memory subclass.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from loguru import logger

SIDE_PLACEMENTS = ("left", "right")


class ReadySubscription:
    """Handle for a single pending ready callback."""

    def __init__(self, signal: "ReadySignal", callback: Callable[[], None]):
        self._signal = signal
        self._callback = callback
        self.active = True

    def cancel(self) -> None:
        """Unsubscribe. Safe to call after the callback already ran."""
        if self.active:
            self.active = False
            self._signal._discard(self)

    def _run(self) -> None:
        if not self.active:
            return
        self.active = False
        self._callback()


class ReadySignal:
    """
    One-shot "content ready" notifications.

    Each subscription fires at most once. Subscribing while the content is
    already ready runs the callback immediately. reset() marks a new load
    in progress; close() drops every pending subscription.
    """

    def __init__(self):
        self.ready = False
        self._pending: list[ReadySubscription] = []

    def subscribe(self, callback: Callable[[], None]) -> ReadySubscription:
        subscription = ReadySubscription(self, callback)
        if self.ready:
            subscription._run()
        else:
            self._pending.append(subscription)
        return subscription

    def fire(self) -> None:
        self.ready = True
        pending, self._pending = self._pending, []
        for subscription in pending:
            subscription._run()

    def reset(self) -> None:
        self.ready = False

    def close(self) -> None:
        self.ready = False
        pending, self._pending = self._pending, []
        for subscription in pending:
            subscription.active = False

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def _discard(self, subscription: ReadySubscription) -> None:
        if subscription in self._pending:
            self._pending.remove(subscription)


class ContentHost(ABC):
    """Embedded web content shown inside a gate panel."""

    def __init__(self, url: str, zoom_factor: float, profile_key: str):
        self.url = url
        self.zoom_factor = zoom_factor
        self.profile_key = profile_key
        self.ready_signal = ReadySignal()

    def on_ready(self, callback: Callable[[], None]) -> ReadySubscription:
        """Run callback once the content can accept navigation commands."""
        return self.ready_signal.subscribe(callback)

    @abstractmethod
    def set_url(self, url: str) -> None:
        """Navigate the content to url."""
        ...

    def close(self) -> None:
        self.ready_signal.close()


@dataclass(eq=False)
class Panel:
    """A host panel (leaf). view_type is None until a view state is set."""
    panel_id: int
    placement: str
    view_type: Optional[str] = None
    content: Optional[ContentHost] = None
    widget: object = None


class Workspace(ABC):
    """
    Panel registry of the host shell.

    Panel types are add-only for the lifetime of the workspace: a type
    cannot be replaced or unregistered once registered.
    """

    def __init__(self):
        self._panels: list[Panel] = []
        self._factories: dict[str, Callable[[], ContentHost]] = {}
        self._next_panel_id = 1
        self.active_panel: Optional[Panel] = None

    # Panel types

    def register_panel_type(self, view_type: str, factory: Callable[[], ContentHost]) -> None:
        if view_type in self._factories:
            raise ValueError(f"Panel type already registered: {view_type}")
        self._factories[view_type] = factory
        logger.debug(f"Registered panel type {view_type}")

    def has_panel_type(self, view_type: str) -> bool:
        return view_type in self._factories

    @property
    def panel_types(self) -> list[str]:
        return list(self._factories)

    # Panels

    @property
    def panels(self) -> list[Panel]:
        return list(self._panels)

    def get_panels_of_type(self, view_type: str) -> list[Panel]:
        return [panel for panel in self._panels if panel.view_type == view_type]

    def create_panel(self, placement: str, split: bool = False) -> Optional[Panel]:
        """
        Get a panel for placement.

        Side placements without split reuse an empty panel already anchored
        to that edge. open_view never leaves such a panel behind, so these
        only exist when a host or caller creates panels directly.
        Returns None when the host cannot supply a panel.
        """
        if placement in SIDE_PLACEMENTS and not split:
            for panel in self._panels:
                if panel.placement == placement and panel.view_type is None:
                    return panel

        widget = self._allocate(placement)
        if widget is None:
            logger.warning(f"Host could not allocate a {placement} panel")
            return None

        panel = Panel(panel_id=self._next_panel_id, placement=placement, widget=widget)
        self._next_panel_id += 1
        self._panels.append(panel)
        return panel

    def set_view_state(self, panel: Panel, view_type: str, active: bool = False) -> None:
        """Attach fresh content of view_type to panel."""
        factory = self._factories.get(view_type)
        if factory is None:
            raise ValueError(f"Unknown panel type: {view_type}")

        content = factory()
        if panel.content is not None:
            panel.content.close()
        panel.content = content
        panel.view_type = view_type
        self._attach(panel)

        if active:
            self.active_panel = panel

    def reveal_panel(self, panel: Panel) -> None:
        self._show(panel)

    def focus_panel(self, panel: Panel) -> None:
        self.active_panel = panel
        self._focus(panel)

    def close_panel(self, panel: Panel) -> None:
        if panel not in self._panels:
            return
        self._panels.remove(panel)
        if panel.content is not None:
            panel.content.close()
        if self.active_panel is panel:
            self.active_panel = None
        self._destroy(panel)

    def close_panels_of_type(self, view_type: str) -> int:
        """Close every panel showing view_type. Returns how many were closed."""
        panels = self.get_panels_of_type(view_type)
        for panel in panels:
            self.close_panel(panel)
        return len(panels)

    # Host hooks

    @abstractmethod
    def _allocate(self, placement: str) -> object:
        """Create the host widget for a new panel, or None if impossible."""
        ...

    @abstractmethod
    def _attach(self, panel: Panel) -> None:
        """Put panel.content into the panel widget."""
        ...

    @abstractmethod
    def _show(self, panel: Panel) -> None:
        ...

    @abstractmethod
    def _focus(self, panel: Panel) -> None:
        ...

    @abstractmethod
    def _destroy(self, panel: Panel) -> None:
        ...
