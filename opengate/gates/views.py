"""
View resolver - open at most one panel per gate.

open_view() reuses the first existing panel of the gate's type and only
creates a new one when none exists. Placement is chosen from the gate
position at creation time only.
"""

from typing import Optional

from loguru import logger

from opengate.gates.errors import PanelAllocationError
from opengate.gates.host import Panel, Workspace


def open_view(workspace: Workspace, view_id: str, position: Optional[str] = None) -> Panel:
    """
    Reveal and focus the panel for view_id, creating it if needed.

    Args:
        workspace: Host panel registry
        view_id: Gate id (registered panel type)
        position: "left", "center" or "right" (default)

    Returns:
        The live panel for view_id

    Raises:
        PanelAllocationError: the host could not supply a panel
    """
    panels = workspace.get_panels_of_type(view_id)
    if panels:
        panel = panels[0]
        workspace.reveal_panel(panel)
        workspace.focus_panel(panel)
        logger.debug(f"Revealed existing panel {panel.panel_id} for {view_id}")
        return panel

    panel = _create_view(workspace, view_id, position)
    workspace.reveal_panel(panel)
    workspace.focus_panel(panel)
    logger.debug(f"Opened {panel.placement} panel {panel.panel_id} for {view_id}")
    return panel


def is_view_exist(workspace: Workspace, view_id: str) -> bool:
    """True if a panel of type view_id is currently open."""
    return len(workspace.get_panels_of_type(view_id)) > 0


def _create_view(workspace: Workspace, view_id: str, position: Optional[str]) -> Panel:
    if position == "left":
        panel = workspace.create_panel("left", split=False)
    elif position == "center":
        panel = workspace.create_panel("center", split=True)
    else:
        panel = workspace.create_panel("right", split=False)

    placement = position if position in ("left", "center") else "right"
    if panel is None:
        raise PanelAllocationError(view_id, placement)

    try:
        workspace.set_view_state(panel, view_id, active=True)
    except Exception as e:
        # Leave nothing half-built behind
        workspace.close_panel(panel)
        raise PanelAllocationError(view_id, placement) from e

    return panel
