"""Inventory container and helper functions."""
from __future__ import annotations

from dataclasses import dataclass, field

from caravan.types import ResourceKind


@dataclass
class Inventory:
    """Mutable resource holder.

    Attributes:
        slots: Mapping of resource kind -> quantity. Zero entries are dropped.
        capacity: Maximum total quantity across all kinds (-1 for unlimited).
    """

    slots: dict[ResourceKind, int] = field(default_factory=dict)
    capacity: int = -1


class InventoryHelper:
    """Pure functions for inventory manipulation."""

    @staticmethod
    def add(inv: Inventory, kind: ResourceKind, amount: int = 1) -> int:
        """Add resources, respecting capacity. Returns amount actually added."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        if amount == 0:
            return 0

        if inv.capacity == -1:
            inv.slots[kind] = inv.slots.get(kind, 0) + amount
            return amount

        available = inv.capacity - InventoryHelper.total(inv)
        actual = min(amount, max(0, available))
        if actual > 0:
            inv.slots[kind] = inv.slots.get(kind, 0) + actual
        return actual

    @staticmethod
    def remove(inv: Inventory, kind: ResourceKind, amount: int = 1) -> int:
        """Remove resources. Returns amount actually removed."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        if amount == 0 or kind not in inv.slots:
            return 0

        current = inv.slots[kind]
        actual = min(amount, current)
        remaining = current - actual
        if remaining == 0:
            del inv.slots[kind]
        else:
            inv.slots[kind] = remaining
        return actual

    @staticmethod
    def count(inv: Inventory, kind: ResourceKind) -> int:
        return inv.slots.get(kind, 0)

    @staticmethod
    def total(inv: Inventory) -> int:
        return sum(inv.slots.values())

    @staticmethod
    def has(inv: Inventory, kind: ResourceKind, amount: int = 1) -> bool:
        """Check if at least *amount* of *kind* is held."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        return inv.slots.get(kind, 0) >= amount

    @staticmethod
    def has_all(inv: Inventory, requirements: dict[ResourceKind, int]) -> bool:
        for kind, needed in requirements.items():
            if inv.slots.get(kind, 0) < needed:
                return False
        return True

    @staticmethod
    def first_available(inv: Inventory) -> ResourceKind | None:
        """Return the first kind (in ResourceKind order) with a positive count."""
        for kind in ResourceKind:
            if inv.slots.get(kind, 0) > 0:
                return kind
        return None

    @staticmethod
    def kinds(inv: Inventory) -> list[ResourceKind]:
        """Held kinds in ResourceKind order."""
        return [kind for kind in ResourceKind if inv.slots.get(kind, 0) > 0]

    @staticmethod
    def transfer(
        source: Inventory, target: Inventory, kind: ResourceKind, amount: int = 1
    ) -> int:
        """Move resources between inventories. Returns amount transferred.

        Whatever the target cannot hold goes back to the source, so the
        combined total of both inventories never changes.
        """
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        removed = InventoryHelper.remove(source, kind, amount)
        added = InventoryHelper.add(target, kind, removed)
        if added < removed:
            InventoryHelper.add(source, kind, removed - added)
        return added

    @staticmethod
    def transfer_all(source: Inventory, target: Inventory) -> int:
        """Move every held kind from *source* to *target*. Returns units moved."""
        moved = 0
        for kind in InventoryHelper.kinds(source):
            moved += InventoryHelper.transfer(source, target, kind, source.slots[kind])
        return moved

    @staticmethod
    def clear(inv: Inventory, kind: ResourceKind | None = None) -> None:
        """Remove all of one kind, or everything if kind is None."""
        if kind is None:
            inv.slots.clear()
        else:
            inv.slots.pop(kind, None)

    @staticmethod
    def as_dict(inv: Inventory) -> dict[str, int]:
        """Plain ``{name: amount}`` view in ResourceKind order."""
        return {kind.value: inv.slots[kind] for kind in InventoryHelper.kinds(inv)}
