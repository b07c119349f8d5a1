from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from osslgate.authz.evaluator import Denial


class OsslGateError(Exception):
    """Base class for errors raised by this package."""


class ConfigError(OsslGateError):
    """A configuration file could not be read or has the wrong shape."""


class ScriptError(OsslGateError):
    """Fault surfaced to the calling script."""


class ScriptRuntimeError(ScriptError):
    pass


class ScriptPermissionError(ScriptError):
    """
    Raised when a privileged operation is denied.

    The message is what the script (or its owner) sees; `denial` keeps the structured reason.
    """

    def __init__(self, message: str, denial: "Denial"):
        super().__init__(message)
        self.denial = denial
