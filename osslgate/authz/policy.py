"""Per-function override policy: representation and compilation from configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Flag, auto
from typing import FrozenSet, List, Optional, Set
from uuid import UUID

from osslgate.core.models import NIL_ID

logger = logging.getLogger(__name__)


class GrantCategory(Flag):
    NONE = 0
    PARCEL_OWNER = auto()
    PARCEL_GROUP_MEMBER = auto()
    ESTATE_MANAGER = auto()
    ESTATE_OWNER = auto()
    ACTIVE_GOD = auto()
    GOD = auto()
    GRID_GOD = auto()
    OWNER_IDENTITY_LIST = auto()
    CREATOR_IDENTITY_LIST = auto()
    BY_THREAT_LEVEL = auto()
    ALLOW_ALL = auto()


# Tokens an administrator may write in Allow_<function>.
ROLE_TOKENS = {
    "PARCEL_OWNER": GrantCategory.PARCEL_OWNER,
    "PARCEL_GROUP_MEMBER": GrantCategory.PARCEL_GROUP_MEMBER,
    "ESTATE_MANAGER": GrantCategory.ESTATE_MANAGER,
    "ESTATE_OWNER": GrantCategory.ESTATE_OWNER,
    "ACTIVE_GOD": GrantCategory.ACTIVE_GOD,
    "GOD": GrantCategory.GOD,
    "GRID_GOD": GrantCategory.GRID_GOD,
}


@dataclass(frozen=True)
class PolicyDescriptor:
    grants: GrantCategory = GrantCategory.NONE
    allowed_owners: FrozenSet[UUID] = field(default_factory=frozenset)
    allowed_creators: FrozenSet[UUID] = field(default_factory=frozenset)

    def has(self, category: GrantCategory) -> bool:
        return bool(self.grants & category)

    @property
    def by_threat_level(self) -> bool:
        return self.grants == GrantCategory.BY_THREAT_LEVEL

    @property
    def disabled(self) -> bool:
        return self.grants == GrantCategory.NONE

    @property
    def allow_all(self) -> bool:
        return self.has(GrantCategory.ALLOW_ALL)


THREAT_LEVEL_POLICY = PolicyDescriptor(grants=GrantCategory.BY_THREAT_LEVEL)
ALLOW_ALL_POLICY = PolicyDescriptor(grants=GrantCategory.ALLOW_ALL)


def owner_key(operation: str) -> str:
    return f"Allow_{operation}"


def creator_key(operation: str) -> str:
    return f"Creators_{operation}"


def _parse_bool_literal(raw: str) -> Optional[bool]:
    value = raw.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def parse_identity(token: str) -> Optional[UUID]:
    """Parse a UUID literal; returns None when the token isn't one."""
    try:
        return UUID(token.strip())
    except (ValueError, AttributeError):
        return None


def _split(raw: str) -> List[str]:
    return [x.strip() for x in (raw or "").split(",")]


def compile_policy(operation: str, raw_owner_rule: Optional[str], raw_creator_rule: Optional[str]) -> PolicyDescriptor:
    """
    Compile the Allow_/Creators_ configuration of one function.

    - both rules blank: the global threat ceiling decides (BY_THREAT_LEVEL)
    - Allow_ = true: always allowed, Creators_ is ignored
    - Allow_ = false: only the creator list (if any) can grant
    - otherwise Allow_ is a comma list of role tokens and owner UUIDs

    Malformed tokens are logged and skipped. An empty result disables the function.
    Deterministic: the same inputs always produce an equal descriptor.
    """
    owner_rule = raw_owner_rule or ""
    creator_rule = raw_creator_rule or ""

    if not owner_rule.strip() and not creator_rule.strip():
        return THREAT_LEVEL_POLICY

    allowed = _parse_bool_literal(owner_rule)
    if allowed is True:
        return ALLOW_ALL_POLICY

    grants = GrantCategory.NONE
    owners: Set[UUID] = set()
    creators: Set[UUID] = set()

    if allowed is None and owner_rule.strip():
        malformed = False
        for token in _split(owner_rule):
            current = token.upper()
            if not current:
                continue
            role = ROLE_TOKENS.get(current)
            if role is not None:
                grants |= role
                continue
            uuid = parse_identity(current)
            if uuid is None:
                malformed = True
            elif uuid != NIL_ID:
                owners.add(uuid)
                grants |= GrantCategory.OWNER_IDENTITY_LIST
        if malformed:
            logger.warning("error parsing line %s = %s", owner_key(operation), owner_rule)

    if creator_rule.strip():
        malformed = False
        for token in _split(creator_rule):
            uuid = parse_identity(token)
            if uuid is None:
                malformed = True
            elif uuid != NIL_ID:
                creators.add(uuid)
                grants |= GrantCategory.CREATOR_IDENTITY_LIST
        if malformed:
            logger.warning("error parsing line %s = %s", creator_key(operation), creator_rule)

    return PolicyDescriptor(grants=grants, allowed_owners=frozenset(owners), allowed_creators=frozenset(creators))
