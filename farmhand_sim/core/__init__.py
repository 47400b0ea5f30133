"""
Farmhand Sim — Core Module
Catalog, caching, money helpers and errors shared by every system.
"""

from .errors import (
    FarmhandError,
    ItemNotFoundError,
    CatalogError,
    BreedingError,
    InvalidPlacementError,
)
from .memoize import MemoizeCache, MemoizedFunction, CacheRegistry, memoize, serialize_args
from .catalog import (
    Catalog,
    CropItem,
    CropLifeStage,
    CraftedItem,
    Item,
    ItemType,
    MilkItem,
    SprinklerItem,
)
from .money import (
    cast_to_money,
    clamp_number,
    dollar_string,
    integer_string,
    money_string,
    money_total,
    scale_number,
)

__all__ = [
    # Errors
    "FarmhandError",
    "ItemNotFoundError",
    "CatalogError",
    "BreedingError",
    "InvalidPlacementError",

    # Memoization
    "MemoizeCache",
    "MemoizedFunction",
    "CacheRegistry",
    "memoize",
    "serialize_args",

    # Catalog
    "Catalog",
    "CropItem",
    "CropLifeStage",
    "CraftedItem",
    "Item",
    "ItemType",
    "MilkItem",
    "SprinklerItem",

    # Money
    "cast_to_money",
    "clamp_number",
    "dollar_string",
    "integer_string",
    "money_string",
    "money_total",
    "scale_number",
]
