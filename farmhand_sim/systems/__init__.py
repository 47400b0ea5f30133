"""
Farmhand Sim — Systems
Crops, cows, market, field and inventory calculators.
"""

from .crops import Crop, CropLifecycle, PlotContent, get_crop_from_item_id, get_plot_content_from_item_id
from .cows import (
    Cow,
    CowBreeder,
    CowColor,
    Gender,
    age_cow,
    find_cow_by_id,
    get_cow_milk_rate,
    get_cow_value,
    get_cow_weight,
    hug_cow,
    is_cow_ready_for_milking,
    milk_cow,
)
from .market import Market, PriceEvent
from .field import (
    FieldQueries,
    create_new_field,
    for_range,
    get_plot,
    get_range_coords,
    set_plot,
)
from .inventory import (
    Inventory,
    InventoryEntry,
    add_item_to_inventory,
    decrement_item_from_inventory,
    does_inventory_space_remain,
    inventory_space_consumed,
    inventory_space_remaining,
)

__all__ = [
    # Crops
    "Crop",
    "CropLifecycle",
    "PlotContent",
    "get_crop_from_item_id",
    "get_plot_content_from_item_id",

    # Cows
    "Cow",
    "CowBreeder",
    "CowColor",
    "Gender",
    "age_cow",
    "find_cow_by_id",
    "get_cow_milk_rate",
    "get_cow_value",
    "get_cow_weight",
    "hug_cow",
    "is_cow_ready_for_milking",
    "milk_cow",

    # Market
    "Market",
    "PriceEvent",

    # Field
    "FieldQueries",
    "create_new_field",
    "for_range",
    "get_plot",
    "get_range_coords",
    "set_plot",

    # Inventory
    "Inventory",
    "InventoryEntry",
    "add_item_to_inventory",
    "decrement_item_from_inventory",
    "does_inventory_space_remain",
    "inventory_space_consumed",
    "inventory_space_remaining",
]
