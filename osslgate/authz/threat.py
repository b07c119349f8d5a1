"""Threat scale shared by operation ratings and the global ceiling."""

from __future__ import annotations

from enum import IntEnum


class ThreatLevel(IntEnum):
    NO_ACCESS = 0
    NONE = 1
    NUISANCE = 2
    VERY_LOW = 3
    LOW = 4
    MODERATE = 5
    HIGH = 6
    VERY_HIGH = 7
    SEVERE = 8

    @property
    def label(self) -> str:
        return _LABELS[self]

    def __str__(self) -> str:
        return self.label


_LABELS = {
    ThreatLevel.NO_ACCESS: "NoAccess",
    ThreatLevel.NONE: "None",
    ThreatLevel.NUISANCE: "Nuisance",
    ThreatLevel.VERY_LOW: "VeryLow",
    ThreatLevel.LOW: "Low",
    ThreatLevel.MODERATE: "Moderate",
    ThreatLevel.HIGH: "High",
    ThreatLevel.VERY_HIGH: "VeryHigh",
    ThreatLevel.SEVERE: "Severe",
}

_BY_LABEL = {label: level for level, label in _LABELS.items()}


def parse_threat_level(raw: object, default: ThreatLevel = ThreatLevel.VERY_LOW) -> ThreatLevel:
    """
    Map a configured label ("NoAccess", "VeryLow", ...) to a ThreatLevel.

    Labels are case sensitive, as written in region configuration files. Anything else
    (including None) returns `default`.
    """
    if isinstance(raw, ThreatLevel):
        return raw
    return _BY_LABEL.get(str(raw or "").strip(), default)
