"""
Protocol Dispatcher - Route external "opengate" URIs to gate panels.

Accepted shapes:
    opengate://?title=Docs&url=https://example.com
    opengate://opengate?title=Docs&url=https://example.com
    obsidian://opengate?title=Docs&url=https://example.com

A dispatch moves through VALIDATING → RESOLVING → AWAITING_READY →
NAVIGATED, or stops at REJECTED. Navigation waits for the panel's content
to report ready, since fresh content cannot take navigation commands yet.
"""

import urllib.parse
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from loguru import logger

from opengate.gates.errors import GateError, GateNotFoundError, GateValidationError
from opengate.gates.host import Panel, ReadySubscription
from opengate.gates.model import GateFrameOption
from opengate.gates.registry import GateRegistry
from opengate.gates.views import open_view

ACTION = "opengate"


class DispatchState(str, Enum):
    VALIDATING = "validating"
    RESOLVING = "resolving"
    AWAITING_READY = "awaiting_ready"
    NAVIGATED = "navigated"
    REJECTED = "rejected"


@dataclass(eq=False)
class Dispatch:
    """Progress of a single navigation request."""
    title: str
    url: str
    state: DispatchState = DispatchState.VALIDATING
    gate: Optional[GateFrameOption] = None
    panel: Optional[Panel] = None
    error: Optional[GateError] = None
    subscription: Optional[ReadySubscription] = None

    def cancel(self) -> None:
        """Drop the pending navigation, if any."""
        if self.subscription is not None:
            self.subscription.cancel()


def parse_protocol_uri(uri: str) -> tuple[str, dict[str, str]]:
    """
    Split a protocol URI into its action and query parameters.

    Returns:
        (action, params) where params keeps the first value of each key
    """
    parsed = urllib.parse.urlsplit(uri)

    if parsed.scheme == ACTION and not parsed.netloc.strip("/"):
        action = ACTION
    else:
        action = (parsed.netloc or parsed.path).strip("/")

    query = urllib.parse.parse_qs(parsed.query, keep_blank_values=True)
    params = {key: values[0] for key, values in query.items() if values}
    return action, params


class ProtocolDispatcher:
    """Resolve (title, url) requests to a gate and navigate its panel."""

    def __init__(self, registry: GateRegistry, notify: Callable[[str], None]):
        self.registry = registry
        self.notify = notify

    def handle_uri(self, uri: str) -> Dispatch:
        action, params = parse_protocol_uri(uri)
        if action != ACTION:
            dispatch = Dispatch(title=params.get("title", ""), url=params.get("url", ""))
            return self._reject(dispatch, GateValidationError(f"Unsupported action: {action or '(none)'}"))
        return self.handle_params(params)

    def handle_params(self, params: dict) -> Dispatch:
        return self.dispatch(params.get("title") or "", params.get("url") or "")

    def dispatch(self, title: str, url: str) -> Dispatch:
        """
        Open the gate titled `title` and navigate it to `url` once ready.

        Returns:
            Dispatch record; REJECTED when validation or lookup fails

        Raises:
            PanelAllocationError: the host could not supply a panel
        """
        dispatch = Dispatch(title=title, url=url)

        if not title or not url:
            return self._reject(dispatch, GateValidationError("Missing title or url parameter"))

        gate = self.registry.find_by_title(title)
        if gate is None:
            return self._reject(dispatch, GateNotFoundError(f"Gate not found: {title}"))

        dispatch.gate = gate
        dispatch.state = DispatchState.RESOLVING
        panel = open_view(self.registry.workspace, gate.id, gate.position)
        dispatch.panel = panel

        if panel.content is None:
            # Panels from open_view always carry content
            raise RuntimeError(f"Panel {panel.panel_id} has no content for {gate.id}")

        dispatch.state = DispatchState.AWAITING_READY
        logger.debug(f"Waiting for {gate.id} to be ready before opening {url}")
        dispatch.subscription = panel.content.on_ready(lambda: self._navigate(dispatch))
        return dispatch

    def _navigate(self, dispatch: Dispatch) -> None:
        dispatch.panel.content.set_url(dispatch.url)
        dispatch.state = DispatchState.NAVIGATED
        logger.info(f"Navigated {dispatch.gate.id} to {dispatch.url}")

    def _reject(self, dispatch: Dispatch, error: GateError) -> Dispatch:
        dispatch.state = DispatchState.REJECTED
        dispatch.error = error
        logger.warning(f"Rejected protocol request: {error}")
        self.notify(str(error))
        return dispatch
