"""Authorization decision for a single privileged call."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from osslgate.authz.cache import PolicyCache
from osslgate.authz.policy import GrantCategory, PolicyDescriptor
from osslgate.authz.threat import ThreatLevel
from osslgate.core.models import NIL_ID, CallContext, ParcelInfo, PermissionMask

GLOBALLY_DISABLED_REASON = "All unsafe OSSL functions disabled"


class DenialKind(str, Enum):
    GLOBALLY_DISABLED = "globally_disabled"
    THRESHOLD_EXCEEDED = "threshold_exceeded"
    CONFIGURED_DISABLED = "configured_disabled"
    GENERIC_DENIED = "generic_denied"
    CREATOR_NOT_ALLOWED = "creator_not_allowed"
    CREATOR_NOT_OWNER = "creator_not_owner"


@dataclass(frozen=True)
class Denial:
    operation: str
    kind: DenialKind
    reason: str


def globally_disabled(operation: str) -> Denial:
    return Denial(operation, DenialKind.GLOBALLY_DISABLED, GLOBALLY_DISABLED_REASON)


def _role_grants(perms: PolicyDescriptor, ctx: CallContext) -> bool:
    """Owner list and role checks; order is significant and must not be rearranged."""
    if perms.has(GrantCategory.OWNER_IDENTITY_LIST) and ctx.object_owner_id in perms.allowed_owners:
        return True

    world = ctx.world
    owner_id = ctx.script_owner_id

    parcel: Optional[ParcelInfo] = None
    if perms.has(GrantCategory.PARCEL_OWNER | GrantCategory.PARCEL_GROUP_MEMBER):
        parcel = world.parcel_at(ctx.position)

    if perms.has(GrantCategory.PARCEL_OWNER) and parcel is not None and parcel.owner_id == owner_id:
        return True

    # object must be in the same group as the parcel
    if (
        perms.has(GrantCategory.PARCEL_GROUP_MEMBER)
        and parcel is not None
        and parcel.group_id != NIL_ID
        and parcel.group_id == ctx.group_id
    ):
        return True

    # managers only; the estate owner is matched by ESTATE_OWNER
    if perms.has(GrantCategory.ESTATE_MANAGER):
        if world.is_estate_manager_or_owner(owner_id) and world.estate_owner_id() != owner_id:
            return True

    if perms.has(GrantCategory.ESTATE_OWNER) and world.estate_owner_id() == owner_id:
        return True

    if perms.has(GrantCategory.GRID_GOD) and world.is_grid_god(owner_id):
        return True

    if perms.has(GrantCategory.GOD) and world.is_administrator(owner_id):
        return True

    if perms.has(GrantCategory.ACTIVE_GOD):
        presence = world.presence_of(owner_id)
        if presence is not None and not presence.is_deleted and presence.is_god:
            return True

    return False


def authorize(
    operation: str,
    level: ThreatLevel,
    ctx: CallContext,
    *,
    cache: PolicyCache,
    max_threat_level: ThreatLevel,
) -> Optional[Denial]:
    """
    Decide whether `operation` (rated `level`) may run for the script described by `ctx`.

    Returns None when allowed, otherwise a Denial with a human readable reason. Never raises
    for bad configuration; the global enable switch is the caller's concern.
    """
    perms = cache.get_or_compile(operation)

    if perms.by_threat_level:
        if level <= max_threat_level:
            return None
        return Denial(
            operation,
            DenialKind.THRESHOLD_EXCEEDED,
            f"{operation} permission denied. Allowed threat level is {max_threat_level} "
            f"but function threat level is {level}.",
        )

    if perms.disabled:
        return Denial(operation, DenialKind.CONFIGURED_DISABLED, f"{operation} disabled in region configuration")

    if perms.allow_all:
        return None

    if _role_grants(perms, ctx):
        return None

    if not perms.has(GrantCategory.CREATOR_IDENTITY_LIST):
        return Denial(operation, DenialKind.GENERIC_DENIED, f"{operation} permission denied.")

    if ctx.creator_id not in perms.allowed_creators:
        return Denial(
            operation,
            DenialKind.CREATOR_NOT_ALLOWED,
            f"{operation} permission denied. Script creator is not in the list of users allowed "
            "to execute this function and prim owner also has no permission.",
        )

    # A creator grant does not survive handing modify rights to someone else.
    if ctx.creator_id != ctx.script_owner_id and ctx.permissions & PermissionMask.MODIFY:
        return Denial(
            operation,
            DenialKind.CREATOR_NOT_OWNER,
            f"{operation} permission denied. Script creator is not prim owner.",
        )

    return None
