"""
Farmhand Sim — Item Catalog
Immutable item definitions, validated once at load time.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional
from enum import Enum, auto
import logging

from .errors import CatalogError, ItemNotFoundError

logger = logging.getLogger(__name__)


class ItemType(Enum):
    """Kinds of catalog items."""
    CROP = auto()
    MILK = auto()
    TOOL = auto()
    FERTILIZER = auto()
    ORE = auto()
    SCARECROW = auto()
    SPRINKLER = auto()
    HUGGING_MACHINE = auto()
    COW_FEED = auto()
    CRAFTED_ITEM = auto()


class CropLifeStage(Enum):
    """Growth stages of a planted crop."""
    SEED = auto()
    GROWING = auto()
    GROWN = auto()


@dataclass(frozen=True)
class Item:
    """Fields shared by every catalog entry."""
    id: str
    name: str
    type: ItemType
    value: float = 0.0
    does_price_fluctuate: bool = False


@dataclass(frozen=True)
class CropItem(Item):
    """A seed or a harvested crop."""
    crop_type: str = ""
    crop_timetable: Mapping[CropLifeStage, int] = field(default_factory=dict)
    grows_into: Optional[str] = None  # Seeds only
    is_seed: bool = False


@dataclass(frozen=True)
class MilkItem(Item):
    quality_tier: int = 1


@dataclass(frozen=True)
class SprinklerItem(Item):
    range: int = 1


@dataclass(frozen=True)
class CraftedItem(Item):
    """An item made from a recipe of other items."""
    ingredients: Mapping[str, int] = field(default_factory=dict)


_VARIANTS = {
    ItemType.CROP: CropItem,
    ItemType.MILK: MilkItem,
    ItemType.SPRINKLER: SprinklerItem,
    ItemType.CRAFTED_ITEM: CraftedItem,
}


def _build_item(record: Mapping[str, Any]) -> Item:
    """Build the variant matching a raw record's type."""
    try:
        item_id = record["id"]
        raw_type = record["type"]
    except KeyError as e:
        raise CatalogError(f"Catalog record {dict(record)!r} is missing {e.args[0]!r}") from e

    try:
        item_type = raw_type if isinstance(raw_type, ItemType) else ItemType[raw_type]
    except KeyError as e:
        raise CatalogError(f"{item_id}: unknown item type {raw_type!r}") from e

    kwargs = {k: v for k, v in record.items() if k != "type"}
    kwargs.setdefault("name", item_id)

    if item_type == ItemType.CROP and "crop_timetable" in kwargs:
        try:
            kwargs["crop_timetable"] = {
                (stage if isinstance(stage, CropLifeStage) else CropLifeStage[stage]): days
                for stage, days in kwargs["crop_timetable"].items()
            }
        except KeyError as e:
            raise CatalogError(f"{item_id}: unknown crop life stage {e.args[0]!r}") from e

    variant = _VARIANTS.get(item_type, Item)
    try:
        return variant(type=item_type, **kwargs)
    except TypeError as e:
        raise CatalogError(f"{item_id}: invalid fields for {item_type.name}: {e}") from e


class Catalog:
    """
    Read-only lookup of every item in the game.

    Lookups of unknown ids raise ItemNotFoundError instead of returning None,
    so a missing item can never leak into a price or growth calculation.
    """

    def __init__(self, items: Iterable[Item], shop_inventory: Iterable[str] = ()):
        self._items: Dict[str, Item] = {}
        for item in items:
            if item.id in self._items:
                raise CatalogError(f"Duplicate item id '{item.id}'")
            self._items[item.id] = item

        self._shop_ids = frozenset(shop_inventory)
        self._validate()

        logger.info(f"Catalog loaded: {len(self._items)} items, {len(self._shop_ids)} sold in shop")

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]],
                     shop_inventory: Iterable[str] = ()) -> "Catalog":
        return cls([_build_item(r) for r in records], shop_inventory)

    def _validate(self):
        for item in self._items.values():
            if item.value < 0:
                raise CatalogError(f"{item.id}: value must not be negative ({item.value})")

            if isinstance(item, CropItem):
                for stage in (CropLifeStage.SEED, CropLifeStage.GROWING):
                    days = item.crop_timetable.get(stage)
                    if not isinstance(days, int) or days <= 0:
                        raise CatalogError(
                            f"{item.id}: crop timetable needs a positive whole number of "
                            f"{stage.name} days, got {days!r}"
                        )
                if item.grows_into is not None and item.grows_into not in self._items:
                    raise CatalogError(f"{item.id}: grows into unknown item '{item.grows_into}'")

            elif isinstance(item, CraftedItem):
                for ingredient_id, quantity in item.ingredients.items():
                    if ingredient_id not in self._items:
                        raise CatalogError(f"{item.id}: unknown ingredient '{ingredient_id}'")
                    if quantity <= 0:
                        raise CatalogError(f"{item.id}: ingredient '{ingredient_id}' needs a positive quantity")

            elif isinstance(item, SprinklerItem) and item.range < 0:
                raise CatalogError(f"{item.id}: sprinkler range must not be negative")

        for item_id in self._shop_ids:
            if item_id not in self._items:
                raise CatalogError(f"Shop sells unknown item '{item_id}'")

    def get(self, item_id: str) -> Item:
        try:
            return self._items[item_id]
        except KeyError:
            raise ItemNotFoundError(item_id) from None

    def __contains__(self, item_id: str) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    @property
    def shop_items(self) -> List[Item]:
        return [self._items[i] for i in sorted(self._shop_ids)]

    def is_sold_in_shop(self, item: Item) -> bool:
        return item.id in self._shop_ids

    def is_item_a_grown_crop(self, item: Item) -> bool:
        return isinstance(item, CropItem) and not item.is_seed

    def is_item_a_farm_product(self, item: Item) -> bool:
        return self.is_item_a_grown_crop(item) or item.type == ItemType.MILK

    def final_stage_crops(self) -> List[CropItem]:
        return [item for item in self._items.values() if self.is_item_a_grown_crop(item)]

    def get_final_crop_item_from_seed_item(self, seed_item: Item) -> CropItem:
        seed = self.get(seed_item.id)
        if not isinstance(seed, CropItem) or seed.grows_into is None:
            raise CatalogError(f"{seed_item.id} is not a seed")
        return self.get(seed.grows_into)
