import pathlib
import sys

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from carrier_hub.actions import ActionHandle, Plugin  # noqa: E402
from carrier_hub.capabilities import list_actions, supports, verify  # noqa: E402
from carrier_hub.errors import ActionNotSupported, PluginNotFound  # noqa: E402


async def track(data, fields):
    return data


async def quote(data, fields):
    return fields


@pytest.fixture
def plugin():
    return Plugin(name="Correios", actions={"Tracking": track, "quotation": quote})


def test_verify_returns_handle_for_declared_action(plugin):
    handle = verify(plugin, "tracking")

    assert isinstance(handle, ActionHandle)
    assert handle.plugin_name == "Correios"
    assert handle.action_name == "tracking"
    assert handle.action is track
    assert handle.label == "Correios.tracking"


def test_verify_folds_action_case(plugin):
    assert verify(plugin, "TRACKING") == verify(plugin, "tracking")


def test_verify_rejects_missing_action(plugin):
    with pytest.raises(ActionNotSupported) as excinfo:
        verify(plugin, "Solicitation")

    assert "Solicitation" in str(excinfo.value)
    assert excinfo.value.action == "Solicitation"
    assert excinfo.value.plugin == "Correios"
    assert not isinstance(excinfo.value, PluginNotFound)


def test_verify_never_reaches_undeclared_attributes(plugin):
    for name in ["__init__", "name", "actions", "__class__"]:
        with pytest.raises(ActionNotSupported):
            verify(plugin, name)


def test_introspection_does_not_invoke_actions():
    calls = []

    async def spy(data, fields):
        calls.append(data)

    plugin = Plugin(name="Braspress", actions={"tracking": spy})

    assert supports(plugin, "Tracking")
    assert not supports(plugin, "labels")
    assert list_actions(plugin) == ["tracking"]
    verify(plugin, "tracking")
    assert calls == []


def test_plugin_action_set_is_frozen(plugin):
    with pytest.raises(TypeError):
        plugin.actions["labels"] = track  # type: ignore[index]
    with pytest.raises(AttributeError):
        plugin.name = "Other"  # type: ignore[misc]


def test_plugin_rejects_duplicate_or_invalid_actions():
    with pytest.raises(ValueError):
        Plugin(name="Correios", actions={"tracking": track, "TRACKING": track})
    with pytest.raises(ValueError):
        Plugin(name="Correios", actions={"  ": track})
    with pytest.raises(TypeError):
        Plugin(name="Correios", actions={"tracking": "not-callable"})  # type: ignore[dict-item]


def test_plugins_are_hashable_by_identity(plugin):
    twin = Plugin(name="Correios", actions={"tracking": track, "quotation": quote})

    assert hash(plugin) == hash(plugin)
    assert plugin != twin
    assert {plugin, twin, plugin} == {plugin, twin}
    assert {plugin: "ok"}[plugin] == "ok"
