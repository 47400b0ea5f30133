"""
Farmhand Sim — Default game data
"""

from .items import ITEM_RECORDS, SHOP_INVENTORY, COW_NAMES, load_default_catalog

__all__ = [
    "ITEM_RECORDS",
    "SHOP_INVENTORY",
    "COW_NAMES",
    "load_default_catalog",
]
