"""
Gate errors.

Validation and lookup failures are reported to the user as notices.
Panel allocation failures propagate to the caller.
"""


class GateError(Exception):
    """Base class for gate lifecycle errors."""


class GateValidationError(GateError, ValueError):
    """A request is missing required parameters."""


class GateNotFoundError(GateError, LookupError):
    """No configured gate matches the requested title or id."""


class PanelAllocationError(GateError, RuntimeError):
    """The host could not supply a panel for the requested placement."""

    def __init__(self, view_id: str, placement: str):
        super().__init__(f"Could not allocate a {placement} panel for gate '{view_id}'")
        self.view_id = view_id
        self.placement = placement


class StaleRegistrationError(GateError):
    """
    A gate changed after its panel type was registered.

    Panel types cannot be replaced or removed while running, so the change
    only applies after a restart. Reported as a notice, never raised.
    """

    def __init__(self, gate_id: str):
        super().__init__("This change will take effect after you restart Open Gate.")
        self.gate_id = gate_id
