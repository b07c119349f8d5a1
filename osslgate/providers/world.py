"""Read-only region lookups consulted by role-based grants."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, Set, Tuple, runtime_checkable
from uuid import UUID

from osslgate.core.models import NIL_ID, ParcelInfo, Position, Presence


@runtime_checkable
class WorldView(Protocol):
    def parcel_at(self, position: Position) -> ParcelInfo: ...

    def estate_owner_id(self) -> UUID: ...

    def is_estate_manager_or_owner(self, identity: UUID) -> bool: ...

    def is_administrator(self, identity: UUID) -> bool: ...

    def is_grid_god(self, identity: UUID) -> bool: ...

    # Not consulted by authorize() (parcel grants compare group ids directly); group-aware
    # operations such as NPC creation query membership through the same view.
    def is_group_member(self, group_id: UUID, identity: UUID) -> bool: ...

    def presence_of(self, identity: UUID) -> Optional[Presence]: ...


@dataclass
class StaticWorld:
    """
    In-memory WorldView.

    Parcels are keyed by the integer (x, y) cell a position falls in; positions without an
    entry resolve to `default_parcel`.
    """

    estate_owner: UUID = NIL_ID
    estate_managers: Set[UUID] = field(default_factory=set)
    administrators: Set[UUID] = field(default_factory=set)
    grid_gods: Set[UUID] = field(default_factory=set)
    default_parcel: ParcelInfo = field(default_factory=lambda: ParcelInfo(owner_id=NIL_ID))
    parcels: Dict[Tuple[int, int], ParcelInfo] = field(default_factory=dict)
    groups: Dict[UUID, Set[UUID]] = field(default_factory=dict)
    presences: Dict[UUID, Presence] = field(default_factory=dict)

    def parcel_at(self, position: Position) -> ParcelInfo:
        cell = (int(position[0]), int(position[1]))
        return self.parcels.get(cell, self.default_parcel)

    def estate_owner_id(self) -> UUID:
        return self.estate_owner

    def is_estate_manager_or_owner(self, identity: UUID) -> bool:
        if identity == NIL_ID:
            return False
        return identity == self.estate_owner or identity in self.estate_managers

    def is_administrator(self, identity: UUID) -> bool:
        # Grid gods are administrators everywhere.
        return identity in self.administrators or identity in self.grid_gods

    def is_grid_god(self, identity: UUID) -> bool:
        return identity in self.grid_gods

    def is_group_member(self, group_id: UUID, identity: UUID) -> bool:
        return identity in self.groups.get(group_id, set())

    def presence_of(self, identity: UUID) -> Optional[Presence]:
        return self.presences.get(identity)
