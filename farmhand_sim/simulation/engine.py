"""
Farmhand Sim — Engine
Session context owning the rng, caches and calculators, plus the daily tick.
"""

from dataclasses import dataclass, field, replace
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple
import random
import logging

from ..core.catalog import Catalog, SprinklerItem
from ..core.memoize import CacheRegistry
from ..config import (
    CACHE,
    COWS,
    CROPS,
    FIELD,
    INVENTORY,
    MARKET,
    CacheConfig,
    CowConfig,
    CropConfig,
    FieldConfig,
    InventoryConfig,
    MarketConfig,
)
from ..data import COW_NAMES, load_default_catalog
from ..systems.cows import Cow, CowBreeder, age_cow, is_cow_ready_for_milking, milk_cow
from ..systems.crops import Crop, CropLifecycle
from ..systems.field import Field, FieldQueries, create_new_field, for_range, iter_plots, set_plot
from ..systems.inventory import (
    Inventory,
    InventoryEntry,
    add_item_to_inventory,
    decrement_item_from_inventory,
    get_inventory_quantity,
)
from ..systems.market import Market, PriceEvent, ValueAdjustments

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FarmState:
    """Snapshot of everything the engine reads and produces."""
    field: Field
    inventory: Tuple[InventoryEntry, ...] = ()
    inventory_limit: int = INVENTORY.initial_limit
    money: float = INVENTORY.initial_money
    cow_inventory: Tuple[Cow, ...] = ()
    price_crashes: Mapping[str, PriceEvent] = field(default_factory=dict)
    price_surges: Mapping[str, PriceEvent] = field(default_factory=dict)
    value_adjustments: ValueAdjustments = field(default_factory=dict)
    cows_fed: FrozenSet[str] = frozenset()
    day_count: int = 1


def water_plot_at(state: FarmState, x: int, y: int) -> FarmState:
    """Mark the crop at (x, y) watered today; other plots are left alone."""
    plot = state.field[y][x]
    if not isinstance(plot, Crop) or plot.was_watered_today:
        return state
    return replace(state, field=set_plot(state.field, x, y, replace(plot, was_watered_today=True)))


class FarmEngine:
    """
    Owns one game session's calculators.

    The rng and the cache registry are injected (or created here) so that a
    session is reproducible and never shares cached results with another.
    """

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        caches: Optional[CacheRegistry] = None,
        cow_names: Sequence[str] = COW_NAMES,
        field_config: FieldConfig = FIELD,
        crop_config: CropConfig = CROPS,
        cow_config: CowConfig = COWS,
        market_config: MarketConfig = MARKET,
        inventory_config: InventoryConfig = INVENTORY,
        cache_config: CacheConfig = CACHE,
    ):
        self.catalog = catalog if catalog is not None else load_default_catalog()
        self.rng = rng if rng is not None else random.Random(seed)
        self.caches = caches if caches is not None else CacheRegistry(cache_config)

        self.field_config = field_config
        self.crop_config = crop_config
        self.cow_config = cow_config
        self.inventory_config = inventory_config

        self.crops = CropLifecycle(self.catalog, self.caches, crop_config)
        self.market = Market(self.catalog, self.rng, self.caches, market_config)
        self.cows = CowBreeder(self.catalog, self.rng, cow_names, cow_config)
        self.inventory = Inventory(self.catalog, self.caches, inventory_config)
        self.field_queries = FieldQueries(self.caches)

        self.day_summaries: List[Dict] = []
        self.on_day_complete: Optional[Callable[[Dict], None]] = None

        logger.info(f"Farm engine initialized with {len(self.catalog)} catalog items")

    def new_game(self) -> FarmState:
        """Initial state: empty field, empty inventory, fresh market."""
        return FarmState(
            field=create_new_field(self.field_config.initial_width, self.field_config.initial_height),
            inventory_limit=self.inventory_config.initial_limit,
            money=self.inventory_config.initial_money,
            value_adjustments=self.market.generate_value_adjustments({}, {}),
        )

    # Daily tick

    def _apply_sprinklers(self, state: FarmState) -> FarmState:
        for x, y, plot in list(iter_plots(state.field)):
            if plot is None:
                continue
            item = self.catalog.get(plot.item_id)
            if isinstance(item, SprinklerItem):
                state = for_range(state, water_plot_at, item.range, x, y)
        return state

    def _age_field(self, field: Field) -> Field:
        return tuple(
            tuple(
                self.crops.reset_was_watered(self.crops.increment_plot_content_age(plot))
                if plot is not None else None
                for plot in row
            )
            for row in field
        )

    def _process_cows(self, state: FarmState) -> FarmState:
        inventory: Sequence[InventoryEntry] = state.inventory
        cows: List[Cow] = []
        milk_produced: Dict[str, int] = {}
        feed_id = self.cow_config.cow_feed_item_id

        for cow in state.cow_inventory:
            was_fed = cow.id in state.cows_fed
            if not was_fed and get_inventory_quantity(inventory, feed_id) > 0:
                inventory = decrement_item_from_inventory(inventory, feed_id)
                was_fed = True

            cow = age_cow(cow, was_fed, self.cow_config)

            if is_cow_ready_for_milking(cow, self.cow_config):
                milk = self.cows.get_cow_milk_item(cow)
                inventory = add_item_to_inventory(
                    inventory, milk.id, 1, state.inventory_limit, self.inventory_config
                )
                milk_produced[milk.id] = milk_produced.get(milk.id, 0) + 1
                cow = milk_cow(cow)

            cows.append(cow)

        if milk_produced:
            logger.debug(f"Milk produced: {milk_produced}")

        return replace(
            state,
            inventory=tuple(inventory),
            cow_inventory=tuple(cows),
            cows_fed=frozenset(),
        )

    def _process_market(self, state: FarmState) -> FarmState:
        crashes = self.market.decrement_price_events(state.price_crashes)
        surges = self.market.decrement_price_events(state.price_surges)
        crashes, surges = self.market.roll_price_event(crashes, surges)
        return replace(
            state,
            price_crashes=crashes,
            price_surges=surges,
            value_adjustments=self.market.generate_value_adjustments(crashes, surges),
        )

    def process_day(self, state: FarmState) -> FarmState:
        """
        Advance the farm by one day.

        Sprinklers water their range, plots age and dry out, cows eat, age
        and are milked, and the market moves.
        """
        state = self._apply_sprinklers(state)
        state = replace(state, field=self._age_field(state.field))
        state = self._process_cows(state)
        state = self._process_market(state)
        state = replace(state, day_count=state.day_count + 1)

        summary = {
            "day": state.day_count,
            "money": state.money,
            "inventory_used": self.inventory.space_consumed(state.inventory),
            "cows": len(state.cow_inventory),
            "price_crashes": sorted(state.price_crashes),
            "price_surges": sorted(state.price_surges),
        }
        self.day_summaries.append(summary)
        if self.on_day_complete:
            self.on_day_complete(summary)

        logger.info(f"Day {state.day_count} started")
        return state

    def run(self, state: FarmState, days: int) -> FarmState:
        for _ in range(days):
            state = self.process_day(state)
        return state

    def get_status(self, state: FarmState) -> Dict:
        crops_planted = sum(
            1 for _, _, plot in iter_plots(state.field) if self.crops.does_plot_contain_crop(plot)
        )
        return {
            "day": state.day_count,
            "money": state.money,
            "inventory_used": self.inventory.space_consumed(state.inventory),
            "inventory_limit": state.inventory_limit,
            "crops_planted": crops_planted,
            "cows": len(state.cow_inventory),
            "prices": self.market.get_status(state.value_adjustments),
            "caches": self.caches.get_status(),
        }
