"""
Farmhand Sim — Inventory
Stack-based item counting against a capacity limit.

An inventory is a list of InventoryEntry with at most one entry per item
id. Entries are removed when their quantity reaches zero. A limit of -1
means unlimited.
"""

from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Sequence, Tuple
import math
import logging

from ..core.catalog import Catalog, CraftedItem, Item, ItemType
from ..core.errors import ItemNotFoundError
from ..core.memoize import CacheRegistry
from ..config import COWS, INVENTORY, InventoryConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InventoryEntry:
    id: str
    quantity: int


def inventory_space_consumed(inventory: Iterable[InventoryEntry]) -> int:
    return sum(entry.quantity for entry in inventory)


def inventory_space_remaining(
    inventory: Iterable[InventoryEntry],
    inventory_limit: int,
    config: InventoryConfig = INVENTORY,
) -> float:
    """Free slots; math.inf when the limit is the unlimited sentinel."""
    if inventory_limit == config.unlimited_sentinel:
        return math.inf
    return inventory_limit - inventory_space_consumed(inventory)


def does_inventory_space_remain(
    inventory: Iterable[InventoryEntry],
    inventory_limit: int,
    config: InventoryConfig = INVENTORY,
) -> bool:
    return inventory_space_remaining(inventory, inventory_limit, config) > 0


def get_inventory_quantity_map(inventory: Iterable[InventoryEntry]) -> Dict[str, int]:
    return {entry.id: entry.quantity for entry in inventory}


def get_inventory_quantity(inventory: Iterable[InventoryEntry], item_id: str) -> int:
    return get_inventory_quantity_map(inventory).get(item_id, 0)


def add_item_to_inventory(
    inventory: Sequence[InventoryEntry],
    item_id: str,
    quantity: int,
    inventory_limit: int,
    config: InventoryConfig = INVENTORY,
) -> List[InventoryEntry]:
    """
    Add items, clipped to the space remaining.

    inventory_limit is required; pass the unlimited sentinel explicitly for
    an uncapped inventory.

    Returns a new inventory list.
    """
    if quantity < 0:
        raise ValueError(f"Cannot add negative quantity: {quantity}")

    space = inventory_space_remaining(inventory, inventory_limit, config)
    actual_add = int(min(quantity, max(space, 0)))
    overflow = quantity - actual_add
    if overflow > 0:
        logger.debug(f"Inventory full: {overflow} x {item_id} not added")

    new_inventory = list(inventory)
    if actual_add == 0:
        return new_inventory

    for index, entry in enumerate(new_inventory):
        if entry.id == item_id:
            new_inventory[index] = replace(entry, quantity=entry.quantity + actual_add)
            return new_inventory

    new_inventory.append(InventoryEntry(id=item_id, quantity=actual_add))
    return new_inventory


def decrement_item_from_inventory(
    inventory: Sequence[InventoryEntry],
    item_id: str,
    quantity: int = 1,
) -> List[InventoryEntry]:
    """
    Remove up to quantity of an item, dropping the entry when it runs out.

    Raises ItemNotFoundError if the item is not held at all.
    """
    if quantity < 0:
        raise ValueError(f"Cannot remove negative quantity: {quantity}")

    new_inventory = list(inventory)
    for index, entry in enumerate(new_inventory):
        if entry.id != item_id:
            continue
        remaining = entry.quantity - quantity
        if remaining > 0:
            new_inventory[index] = replace(entry, quantity=remaining)
        else:
            del new_inventory[index]
        return new_inventory

    raise ItemNotFoundError(item_id, where="inventory")


def _can_make_recipe(recipe: CraftedItem, inventory: Sequence[InventoryEntry]) -> bool:
    quantities = get_inventory_quantity_map(inventory)
    return all(
        quantities.get(item_id, 0) >= needed
        for item_id, needed in recipe.ingredients.items()
    )


def _are_hugging_machines_in_inventory(inventory: Sequence[InventoryEntry],
                                       hugging_machine_id: str = COWS.hugging_machine_item_id) -> bool:
    return any(entry.id == hugging_machine_id for entry in inventory)


class Inventory:
    """
    Inventory queries that benefit from caching.

    The memoized functions live in the owning engine's cache registry.
    """

    def __init__(self, catalog: Catalog, caches: CacheRegistry, config: InventoryConfig = INVENTORY):
        self.catalog = catalog
        self.config = config
        self.space_consumed = caches.memoize(inventory_space_consumed)
        self.can_make_recipe = caches.memoize(_can_make_recipe)
        self.are_hugging_machines_in_inventory = caches.memoize(_are_hugging_machines_in_inventory)
        self._sort_item_ids = caches.memoize(self._sort_item_ids_by_type_and_value)

    def space_remaining(self, inventory: Sequence[InventoryEntry], inventory_limit: int) -> float:
        if inventory_limit == self.config.unlimited_sentinel:
            return math.inf
        return inventory_limit - self.space_consumed(inventory)

    def does_space_remain(self, inventory: Sequence[InventoryEntry], inventory_limit: int) -> bool:
        return self.space_remaining(inventory, inventory_limit) > 0

    def _sort_item_ids_by_type_and_value(self, item_ids: Sequence[str]) -> Tuple[str, ...]:
        # Crops first, then by value; milk runs from most to least valuable
        def sort_key(item_id: str):
            item = self.catalog.get(item_id)
            value = -item.value if item.type == ItemType.MILK else item.value
            return (item.type != ItemType.CROP, value)

        return tuple(sorted(item_ids, key=sort_key))

    def sort_items(self, items: Sequence[Item]) -> List[Item]:
        by_id = {item.id: item for item in items}
        return [by_id[item_id] for item_id in self._sort_item_ids([item.id for item in items])]
