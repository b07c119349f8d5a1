"""Process-wide switches, initialized once and read-only afterwards."""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from osslgate.authz.cache import PolicyCache
from osslgate.authz.threat import ThreatLevel, parse_threat_level
from osslgate.core.config import ConfigSource, EnvConfigSource

logger = logging.getLogger(__name__)


class GlobalPolicyState(BaseModel):
    model_config = ConfigDict(frozen=True)

    functions_enabled: bool = True
    max_threat_level: ThreatLevel = ThreatLevel.VERY_LOW
    denial_addressed_to_owner: bool = False

    @field_validator("max_threat_level", mode="before")
    @classmethod
    def _threat_label(cls, v: Any) -> ThreatLevel:
        # Configuration carries labels ("VeryLow"); unknown labels fall back to VeryLow.
        if isinstance(v, int) and not isinstance(v, bool):
            try:
                return ThreatLevel(v)
            except ValueError:
                return ThreatLevel.VERY_LOW
        return parse_threat_level(v)

    @classmethod
    def from_config(cls, config: ConfigSource) -> "GlobalPolicyState":
        return cls(
            functions_enabled=config.get_bool("AllowOSFunctions", True),
            max_threat_level=config.get_string("OSFunctionThreatLevel", "VeryLow"),
            denial_addressed_to_owner=config.get_bool("PermissionErrorToOwner", False),
        )


_state: Optional[GlobalPolicyState] = None
_cache: Optional[PolicyCache] = None
_state_lock = threading.Lock()


def init_global_state(config: ConfigSource) -> GlobalPolicyState:
    """
    Initialize the shared state and policy cache from `config` (first caller only).

    Later calls return the existing state and ignore their `config` argument.
    """
    global _state, _cache
    if _state is not None:
        return _state
    with _state_lock:
        if _state is not None:
            return _state
        state = GlobalPolicyState.from_config(config)
        _cache = PolicyCache(config)
        _state = state
        logger.info(
            "OSSL functions %s, threat level ceiling %s",
            "enabled" if state.functions_enabled else "disabled",
            state.max_threat_level,
        )
        return state


def get_global_state() -> GlobalPolicyState:
    if _state is not None:
        return _state
    return init_global_state(EnvConfigSource())


def get_policy_cache() -> PolicyCache:
    get_global_state()
    cache = _cache
    if cache is None:
        raise RuntimeError("policy cache missing: global state was initialized without one")
    return cache


def reset_global_state() -> None:
    """Forget the shared state (tests only; runtime reconfiguration is unsupported)."""
    global _state, _cache
    with _state_lock:
        _state = None
        _cache = None
