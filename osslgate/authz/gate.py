"""Entry point used by privileged script functions before they touch the world."""

from __future__ import annotations

import logging
from typing import Callable, NoReturn, Optional

from osslgate.authz.cache import PolicyCache
from osslgate.authz.evaluator import GLOBALLY_DISABLED_REASON, Denial, authorize, globally_disabled
from osslgate.authz.state import GlobalPolicyState, get_policy_cache, init_global_state
from osslgate.authz.threat import ThreatLevel
from osslgate.catalog import threat_level_for
from osslgate.core.config import ConfigSource
from osslgate.core.models import CallContext
from osslgate.errors import ScriptPermissionError, ScriptRuntimeError

logger = logging.getLogger(__name__)

MAX_SHOUT_CHARS = 1023

PERMISSION_ERROR_PREFIX = "OSSL Permission Error: "
OWNER_PERMISSION_ERROR_PREFIX = "(OWNER)OSSL Permission Error: "
RUNTIME_ERROR_PREFIX = "OSSL Runtime Error: "


class ScriptGate:
    """
    Per-script facade over the shared policy state.

    Creating a gate performs the process-wide initialization on first use only; every gate
    shares the same state and policy cache.

    `shout` receives messages meant for the region debug channel (deprecation notices).
    """

    def __init__(self, config: ConfigSource, *, shout: Optional[Callable[[str], None]] = None):
        self.state: GlobalPolicyState = init_global_state(config)
        self.cache: PolicyCache = get_policy_cache()
        self._shout = shout

    def check(self, operation: str, ctx: CallContext, level: Optional[ThreatLevel] = None) -> Optional[Denial]:
        """Return the Denial for this call, or None when it may proceed."""
        if not self.state.functions_enabled:
            return globally_disabled(operation)
        if level is None:
            level = threat_level_for(operation)
            if level is None:
                raise ValueError(f"unknown operation {operation!r}: pass an explicit threat level")
        return authorize(
            operation,
            level,
            ctx,
            cache=self.cache,
            max_threat_level=self.state.max_threat_level,
        )

    def ensure_authorized(self, operation: str, ctx: CallContext, level: Optional[ThreatLevel] = None) -> None:
        """Raise ScriptPermissionError unless the call is allowed."""
        denial = self.check(operation, ctx, level)
        if denial is None:
            return
        prefix = OWNER_PERMISSION_ERROR_PREFIX if self.state.denial_addressed_to_owner else PERMISSION_ERROR_PREFIX
        raise ScriptPermissionError(prefix + denial.reason, denial)

    def ensure_enabled(self) -> None:
        """Check for functions that are safe whenever OSSL is on at all."""
        if not self.state.functions_enabled:
            self.runtime_error("permission denied. " + GLOBALLY_DISABLED_REASON)

    def runtime_error(self, message: str) -> NoReturn:
        raise ScriptRuntimeError(RUNTIME_ERROR_PREFIX + message)

    def shout_error(self, message: str) -> None:
        if len(message) > MAX_SHOUT_CHARS:
            message = message[:MAX_SHOUT_CHARS]
        if self._shout is not None:
            self._shout(message)

    def deprecated(self, operation: str, replacement: str) -> None:
        message = f"Use of function {operation} is deprecated. Use {replacement} instead."
        logger.warning("%s", message)
        self.shout_error(message)
