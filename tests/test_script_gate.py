from __future__ import annotations

import logging
from typing import Any, Dict, List
from uuid import UUID

import pytest

OWNER = UUID("cccccccc-0000-0000-0000-000000000001")
ESTATE_OWNER = UUID("cccccccc-0000-0000-0000-000000000002")


def _gate(values: Dict[str, Any], shouts: List[str] | None = None):
    from osslgate.authz.gate import ScriptGate
    from osslgate.core.config import MappingConfigSource

    return ScriptGate(MappingConfigSource(values), shout=shouts.append if shouts is not None else None)


def _ctx(owner: UUID = OWNER):
    from osslgate.core.models import CallContext
    from osslgate.providers.world import StaticWorld

    world = StaticWorld(estate_owner=ESTATE_OWNER)
    return CallContext(world=world, object_owner_id=owner, script_owner_id=owner, creator_id=owner)


def test_uses_catalogued_threat_level() -> None:
    gate = _gate({"OSFunctionThreatLevel": "Low"})
    gate.ensure_authorized("osDie", _ctx())  # Low
    assert gate.check("osGetAgents", _ctx()) is None  # None


def test_denial_raises_permission_error_with_reason() -> None:
    from osslgate.authz.evaluator import DenialKind
    from osslgate.errors import ScriptPermissionError

    gate = _gate({"OSFunctionThreatLevel": "Low"})
    with pytest.raises(ScriptPermissionError) as ei:
        gate.ensure_authorized("osTeleportAgent", _ctx())

    assert str(ei.value) == (
        "OSSL Permission Error: osTeleportAgent permission denied. "
        "Allowed threat level is Low but function threat level is Severe."
    )
    assert ei.value.denial.kind is DenialKind.THRESHOLD_EXCEEDED


def test_denial_addressed_to_owner() -> None:
    from osslgate.errors import ScriptPermissionError

    gate = _gate({"PermissionErrorToOwner": True, "Allow_osKickAvatar": "false"})
    with pytest.raises(ScriptPermissionError) as ei:
        gate.ensure_authorized("osKickAvatar", _ctx())
    assert str(ei.value) == "(OWNER)OSSL Permission Error: osKickAvatar disabled in region configuration"


def test_explicit_level_overrides_catalog() -> None:
    from osslgate.authz.threat import ThreatLevel

    gate = _gate({"OSFunctionThreatLevel": "High"})
    assert gate.check("osTeleportAgent", _ctx(), ThreatLevel.LOW) is None
    assert gate.check("myCustomFunction", _ctx(), ThreatLevel.HIGH) is None


def test_unknown_operation_without_level_is_rejected() -> None:
    gate = _gate({})
    with pytest.raises(ValueError):
        gate.check("osNotAFunction", _ctx())


def test_globally_disabled_short_circuits(monkeypatch: pytest.MonkeyPatch) -> None:
    import osslgate.authz.gate as gate_mod
    from osslgate.authz.evaluator import DenialKind
    from osslgate.errors import ScriptPermissionError, ScriptRuntimeError

    def _boom(*args, **kwargs):
        raise AssertionError("evaluator must not run when functions are disabled")

    monkeypatch.setattr(gate_mod, "authorize", _boom)
    gate = _gate({"AllowOSFunctions": "false", "Allow_osDie": "true"})

    denial = gate.check("osDie", _ctx())
    assert denial is not None
    assert denial.kind is DenialKind.GLOBALLY_DISABLED

    with pytest.raises(ScriptPermissionError) as ei:
        gate.ensure_authorized("osDie", _ctx())
    assert str(ei.value) == "OSSL Permission Error: All unsafe OSSL functions disabled"

    with pytest.raises(ScriptRuntimeError) as ei2:
        gate.ensure_enabled()
    assert str(ei2.value) == "OSSL Runtime Error: permission denied. All unsafe OSSL functions disabled"


def test_ensure_enabled_passes_when_functions_on() -> None:
    _gate({}).ensure_enabled()


def test_gates_share_first_initialization() -> None:
    first = _gate({"OSFunctionThreatLevel": "Severe", "Allow_osDie": "false"})
    second = _gate({"OSFunctionThreatLevel": "None"})

    assert second.state is first.state
    assert second.cache is first.cache
    assert second.check("osConsoleCommand", _ctx()) is None
    assert second.check("osDie", _ctx()) is not None


def test_end_to_end_estate_owner_policy() -> None:
    from osslgate.errors import ScriptPermissionError

    gate = _gate({"Allow_osRegionRestart": "ESTATE_OWNER"})
    gate.ensure_authorized("osRegionRestart", _ctx(owner=ESTATE_OWNER))
    with pytest.raises(ScriptPermissionError):
        gate.ensure_authorized("osRegionRestart", _ctx(owner=OWNER))


def test_deprecated_logs_and_shouts(caplog: pytest.LogCaptureFixture) -> None:
    shouts: List[str] = []
    gate = _gate({}, shouts)
    with caplog.at_level(logging.WARNING, logger="osslgate.authz.gate"):
        gate.deprecated("osTerrainSetHeight", "osSetTerrainHeight")

    expected = "Use of function osTerrainSetHeight is deprecated. Use osSetTerrainHeight instead."
    assert shouts == [expected]
    assert any(r.getMessage() == expected for r in caplog.records)


def test_shout_is_truncated() -> None:
    from osslgate.authz.gate import MAX_SHOUT_CHARS

    shouts: List[str] = []
    gate = _gate({}, shouts)
    gate.shout_error("x" * 5000)
    assert len(shouts[0]) == MAX_SHOUT_CHARS


def test_runtime_error_prefix() -> None:
    from osslgate.errors import ScriptRuntimeError

    with pytest.raises(ScriptRuntimeError, match="^OSSL Runtime Error: osSetRot: Invalid target$"):
        _gate({}).runtime_error("osSetRot: Invalid target")
