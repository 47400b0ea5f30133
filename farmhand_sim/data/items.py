"""
Farmhand Sim — Default item data
"""

from ..core.catalog import Catalog

ITEM_RECORDS = [
    # Crops
    {"id": "carrot-seed", "name": "Carrot Seed", "type": "CROP", "value": 15,
     "crop_type": "carrot", "crop_timetable": {"SEED": 2, "GROWING": 3},
     "grows_into": "carrot", "is_seed": True},
    {"id": "carrot", "name": "Carrot", "type": "CROP", "value": 25,
     "does_price_fluctuate": True, "crop_type": "carrot",
     "crop_timetable": {"SEED": 2, "GROWING": 3}},
    {"id": "corn-seed", "name": "Corn Seed", "type": "CROP", "value": 25,
     "crop_type": "corn", "crop_timetable": {"SEED": 3, "GROWING": 4},
     "grows_into": "corn", "is_seed": True},
    {"id": "corn", "name": "Corn", "type": "CROP", "value": 50,
     "does_price_fluctuate": True, "crop_type": "corn",
     "crop_timetable": {"SEED": 3, "GROWING": 4}},
    {"id": "pumpkin-seed", "name": "Pumpkin Seed", "type": "CROP", "value": 40,
     "crop_type": "pumpkin", "crop_timetable": {"SEED": 3, "GROWING": 6},
     "grows_into": "pumpkin", "is_seed": True},
    {"id": "pumpkin", "name": "Pumpkin", "type": "CROP", "value": 110,
     "does_price_fluctuate": True, "crop_type": "pumpkin",
     "crop_timetable": {"SEED": 3, "GROWING": 6}},

    # Milk
    {"id": "milk-1", "name": "Milk", "type": "MILK", "value": 30, "quality_tier": 1},
    {"id": "milk-2", "name": "Rich Milk", "type": "MILK", "value": 60, "quality_tier": 2},
    {"id": "milk-3", "name": "Creamy Milk", "type": "MILK", "value": 90, "quality_tier": 3},

    # Farm supplies
    {"id": "fertilizer", "name": "Fertilizer", "type": "FERTILIZER", "value": 25},
    {"id": "sprinkler", "name": "Sprinkler", "type": "SPRINKLER", "value": 120, "range": 1},
    {"id": "scarecrow", "name": "Scarecrow", "type": "SCARECROW", "value": 160},
    {"id": "hugging-machine", "name": "Hugging Machine", "type": "HUGGING_MACHINE", "value": 500},
    {"id": "cow-feed", "name": "Cow Feed", "type": "COW_FEED", "value": 5},
    {"id": "watering-can", "name": "Watering Can", "type": "TOOL", "value": 0},
    {"id": "bronze-ore", "name": "Bronze Ore", "type": "ORE", "value": 50,
     "does_price_fluctuate": True},

    # Recipes
    {"id": "carrot-soup", "name": "Carrot Soup", "type": "CRAFTED_ITEM", "value": 90,
     "ingredients": {"carrot": 4}},
    {"id": "cheese", "name": "Cheese", "type": "CRAFTED_ITEM", "value": 240,
     "ingredients": {"milk-3": 2}},
]

SHOP_INVENTORY = [
    "carrot-seed",
    "corn-seed",
    "pumpkin-seed",
    "fertilizer",
    "sprinkler",
    "scarecrow",
    "hugging-machine",
    "cow-feed",
]

COW_NAMES = [
    "Apple", "Apricot", "Banana", "Blueberry", "Cherry", "Clementine",
    "Coconut", "Date", "Fig", "Grape", "Guava", "Kiwi", "Lemon", "Lime",
    "Lychee", "Mango", "Melon", "Nectarine", "Olive", "Papaya", "Peach",
    "Pear", "Plum", "Quince", "Raspberry", "Strawberry", "Tangerine",
]


def load_default_catalog() -> Catalog:
    """Build the catalog shipped with the game."""
    return Catalog.from_records(ITEM_RECORDS, SHOP_INVENTORY)
