"""
Farmhand Sim — Farming Simulation Engine

Deterministic calculation layer for a farming game: crop growth, cow
breeding and milk economics, a fluctuating item market and bounded
inventory and field capacity.
"""

__version__ = "1.0.0"

from .config import (
    FIELD,
    CROPS,
    COWS,
    MARKET,
    INVENTORY,
    CACHE,
    FieldConfig,
    CropConfig,
    CowConfig,
    MarketConfig,
    InventoryConfig,
    CacheConfig,
)

from .core import (
    Catalog,
    CacheRegistry,
    CropLifeStage,
    Item,
    ItemType,
    FarmhandError,
    ItemNotFoundError,
    CatalogError,
    BreedingError,
    InvalidPlacementError,
)

from .simulation import FarmEngine, FarmState

__all__ = [
    # Version info
    "__version__",

    # Config
    "FIELD",
    "CROPS",
    "COWS",
    "MARKET",
    "INVENTORY",
    "CACHE",
    "FieldConfig",
    "CropConfig",
    "CowConfig",
    "MarketConfig",
    "InventoryConfig",
    "CacheConfig",

    # Core classes
    "Catalog",
    "CacheRegistry",
    "CropLifeStage",
    "Item",
    "ItemType",

    # Errors
    "FarmhandError",
    "ItemNotFoundError",
    "CatalogError",
    "BreedingError",
    "InvalidPlacementError",

    # Engine
    "FarmEngine",
    "FarmState",
]
