"""
Tests for plugin startup, commands and the URI entry point.
"""

from unittest.mock import MagicMock

import pytest

from opengate.gates.protocol import DispatchState
from opengate.plugin import OpenGatePlugin
from opengate.services.store import SettingsStore


@pytest.fixture
def plugin(data_path, workspace, content_factory, notices):
    return OpenGatePlugin(
        workspace=workspace,
        content_factory=content_factory,
        store=SettingsStore(data_path),
        notify=notices,
        onboarding=MagicMock(),
        editor=MagicMock(),
        gate_list=MagicMock(),
    )


class TestOnload:
    """Test startup sequence."""

    def test_first_run(self, plugin, workspace):
        plugin.onload()
        assert plugin.store.settings.uuid != ""
        plugin.registry.onboarding.assert_called_once()
        assert workspace.panel_types == []

    def test_existing_gates_registered(self, tmp_data, workspace, content_factory, notices):
        plugin = OpenGatePlugin(workspace, content_factory, store=SettingsStore(tmp_data), notify=notices)
        plugin.onload()
        assert sorted(workspace.panel_types) == ["g1", "legacy"]
        assert workspace.panels == []

    def test_commands_registered(self, plugin):
        plugin.onload()
        assert plugin.commands["open-gate-create-new"].name == "Create new gate"
        list_command = plugin.commands["open-list-gates-modal"]
        assert list_command.name == "List Gates"
        assert list_command.hotkeys[0].modifiers == ["Mod", "Shift"]
        assert list_command.hotkeys[0].key == "g"


class TestCommands:
    """Test command callbacks."""

    def test_create_new_gate_opens_editor(self, plugin):
        plugin.onload()
        plugin.run_command("open-gate-create-new")
        template, on_submit = plugin.editor.call_args.args
        assert template.id == ""
        assert on_submit == plugin.registry.add_gate

    def test_list_gates_opens_list(self, plugin):
        plugin.onload()
        plugin.run_command("open-list-gates-modal")
        plugin.gate_list.assert_called_once_with(plugin.registry)

    def test_unknown_command_ignored(self, plugin):
        plugin.onload()
        plugin.run_command("nope")
        plugin.editor.assert_not_called()


class TestHandleUri:
    """Test the URI entry point."""

    def test_dispatches_to_gate(self, tmp_data, workspace, content_factory, notices):
        plugin = OpenGatePlugin(workspace, content_factory, store=SettingsStore(tmp_data), notify=notices)
        plugin.onload()
        dispatch = plugin.handle_uri("opengate://?title=docs&url=https://b")
        dispatch.panel.content.ready_signal.fire()
        assert dispatch.state == DispatchState.NAVIGATED
        assert dispatch.panel.content.navigations == ["https://b"]

    def test_allocation_failure_becomes_notice(self, tmp_data, make_workspace, content_factory, notices):
        plugin = OpenGatePlugin(make_workspace(capacity=0), content_factory,
                                store=SettingsStore(tmp_data), notify=notices)
        plugin.onload()
        assert plugin.handle_uri("opengate://?title=docs&url=https://b") is None
        assert len(notices.messages) == 1
