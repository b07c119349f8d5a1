"""Configuration sources (env / mapping / YAML file).

Keys follow the region configuration names:
- AllowOSFunctions=true|false
- OSFunctionThreatLevel=VeryLow
- PermissionErrorToOwner=false
- Allow_<function>=true|false|PARCEL_OWNER,GOD,<uuid>,...
- Creators_<function>=<uuid>,<uuid>,...
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, Union, runtime_checkable

import yaml

from osslgate.errors import ConfigError

_TRUE = ("1", "true", "yes", "y", "on")
_FALSE = ("0", "false", "no", "n", "off")


def parse_bool(raw: Optional[str], default: bool = False) -> bool:
    value = (raw or "").strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return default


@runtime_checkable
class ConfigSource(Protocol):
    def get_string(self, key: str, default: str = "") -> str: ...

    def get_bool(self, key: str, default: bool = False) -> bool: ...


def _render(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(str(v) for v in value)
    return str(value)


class MappingConfigSource:
    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, str] = {}
        for key, value in (values or {}).items():
            rendered = _render(value)
            if rendered is not None:
                self._values[str(key)] = rendered

    def get_string(self, key: str, default: str = "") -> str:
        return self._values.get(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        return parse_bool(self._values.get(key), default)

    def __repr__(self) -> str:
        return f"MappingConfigSource({len(self._values)} keys)"


class EnvConfigSource:
    """
    Read keys from the environment as `<prefix><key>`, e.g. OSSL_Allow_osTeleportAgent.
    """

    def __init__(self, prefix: str = "OSSL_"):
        self.prefix = prefix

    def get_string(self, key: str, default: str = "") -> str:
        raw = os.getenv(self.prefix + key)
        return default if raw is None else raw

    def get_bool(self, key: str, default: bool = False) -> bool:
        return parse_bool(os.getenv(self.prefix + key), default)


def load_config_file(path: Union[str, Path], section: str = "OSSL") -> MappingConfigSource:
    """
    Load a YAML configuration file.

    The `section` mapping is used when present; otherwise the whole document is treated as
    the section. YAML lists are accepted for allow-lists:

        OSSL:
          OSFunctionThreatLevel: Low
          Allow_osTeleportAgent: [ESTATE_MANAGER, ESTATE_OWNER]
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read configuration file {p}: {e}") from e
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {p}: {e}") from e

    if doc is None:
        doc = {}
    if not isinstance(doc, dict):
        raise ConfigError(f"{p}: expected a mapping at the top level")
    values = doc.get(section, doc)
    if not isinstance(values, dict):
        raise ConfigError(f"{p}: section {section!r} must be a mapping")
    return MappingConfigSource(values)
