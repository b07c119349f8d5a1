"""Shapes passed into an authorization decision.

Identities are `uuid.UUID`; the nil UUID means "no identity" (e.g. a parcel without a group).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import TYPE_CHECKING, Tuple
from uuid import UUID

if TYPE_CHECKING:
    from osslgate.providers.world import WorldView

NIL_ID = UUID(int=0)

Position = Tuple[float, float, float]


class PermissionMask(IntFlag):
    NONE = 0
    TRANSFER = 1 << 13
    MODIFY = 1 << 14
    COPY = 1 << 15
    MOVE = 1 << 19


@dataclass(frozen=True)
class ParcelInfo:
    owner_id: UUID
    group_id: UUID = NIL_ID


@dataclass(frozen=True)
class Presence:
    """A connected avatar as seen by the region."""

    is_god: bool = False
    is_deleted: bool = False


@dataclass(frozen=True)
class CallContext:
    """
    Everything one authorization decision needs about the calling script.

    `object_owner_id` is the owner of the object hosting the script (matched against owner
    allow-lists). `script_owner_id` is the owner of the script item itself; role checks
    (parcel, estate, god) use it. The two are normally the same identity.
    """

    world: "WorldView"
    object_owner_id: UUID
    script_owner_id: UUID
    creator_id: UUID
    group_id: UUID = NIL_ID
    permissions: PermissionMask = PermissionMask.NONE
    position: Position = (0.0, 0.0, 0.0)
