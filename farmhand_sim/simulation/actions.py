"""
Farmhand Sim — Player actions
State transitions triggered by the player. Each takes the engine and the
current FarmState and returns a new FarmState.
"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Callable, Optional
import logging

from ..core.catalog import CropItem, CropLifeStage, Item, ItemType
from ..core.errors import FarmhandError, ItemNotFoundError
from ..core.money import money_total
from ..systems.cows import Cow, find_cow_by_id, get_cow_value
from ..systems.cows import hug_cow as hug
from ..systems.crops import Crop, get_crop_from_item_id, get_plot_content_from_item_id
from ..systems.field import get_plot, set_plot
from ..systems.inventory import (
    add_item_to_inventory,
    decrement_item_from_inventory,
    get_inventory_quantity,
)
from .engine import FarmEngine, FarmState, water_plot_at

logger = logging.getLogger(__name__)

_PLACEABLE_TYPES = (ItemType.SCARECROW, ItemType.SPRINKLER)


def purchase_item(engine: FarmEngine, state: FarmState, item: Item, how_many: int = 1) -> FarmState:
    """
    Buy items at today's price.

    The quantity is cut down to what fits in the inventory; nothing is
    bought when the player cannot afford it.
    """
    space = engine.inventory.space_remaining(state.inventory, state.inventory_limit)
    quantity = int(min(how_many, space))
    if quantity <= 0:
        logger.warning(f"No inventory space for {item.id}")
        return state

    unit_value = engine.market.get_item_value(item, state.value_adjustments)
    total = unit_value * quantity
    if total > state.money:
        logger.warning(f"Cannot afford {quantity} x {item.id} ({total:.2f} > {state.money:.2f})")
        return state

    return replace(
        state,
        inventory=tuple(add_item_to_inventory(
            state.inventory, item.id, quantity, state.inventory_limit, engine.inventory_config
        )),
        money=money_total(state.money, -total),
    )


def sell_item(engine: FarmEngine, state: FarmState, item: Item, how_many: int = 1) -> FarmState:
    """Sell items: farm products at market value, everything else at resale value."""
    held = get_inventory_quantity(state.inventory, item.id)
    if held == 0:
        raise ItemNotFoundError(item.id, where="inventory")

    quantity = min(how_many, held)
    catalog_item = engine.catalog.get(item.id)
    if engine.catalog.is_item_a_farm_product(catalog_item):
        unit_value = engine.market.get_adjusted_item_value(state.value_adjustments, item.id)
    else:
        unit_value = engine.market.get_resale_value(catalog_item)

    return replace(
        state,
        inventory=tuple(decrement_item_from_inventory(state.inventory, item.id, quantity)),
        money=money_total(state.money, unit_value * quantity),
    )


def make_recipe(engine: FarmEngine, state: FarmState, recipe: Item) -> FarmState:
    """Consume a recipe's ingredients and add the crafted item."""
    recipe = engine.catalog.get(recipe.id)
    if recipe.type != ItemType.CRAFTED_ITEM:
        raise FarmhandError(f"{recipe.id} is not a recipe")
    if not engine.inventory.can_make_recipe(recipe, state.inventory):
        logger.warning(f"Missing ingredients for {recipe.id}")
        return state

    inventory = state.inventory
    for ingredient_id, quantity in recipe.ingredients.items():
        inventory = decrement_item_from_inventory(inventory, ingredient_id, quantity)
    inventory = add_item_to_inventory(inventory, recipe.id, 1, state.inventory_limit, engine.inventory_config)
    return replace(state, inventory=tuple(inventory))


def plant_in_plot(engine: FarmEngine, state: FarmState, x: int, y: int, seed_item_id: str) -> FarmState:
    """Move one seed from the inventory into an empty plot."""
    if get_plot(state.field, x, y) is not None:
        logger.warning(f"Plot ({x}, {y}) is already occupied")
        return state

    seed = engine.catalog.get(seed_item_id)
    if not isinstance(seed, CropItem) or not seed.is_seed:
        raise FarmhandError(f"{seed_item_id} cannot be planted")

    inventory = decrement_item_from_inventory(state.inventory, seed_item_id)
    return replace(
        state,
        field=set_plot(state.field, x, y, get_crop_from_item_id(seed_item_id)),
        inventory=tuple(inventory),
    )


def place_item(engine: FarmEngine, state: FarmState, x: int, y: int, item_id: str) -> FarmState:
    """Put a scarecrow or sprinkler from the inventory onto an empty plot."""
    if get_plot(state.field, x, y) is not None:
        logger.warning(f"Plot ({x}, {y}) is already occupied")
        return state

    if engine.catalog.get(item_id).type not in _PLACEABLE_TYPES:
        raise FarmhandError(f"{item_id} cannot be placed in the field")

    inventory = decrement_item_from_inventory(state.inventory, item_id)
    return replace(
        state,
        field=set_plot(state.field, x, y, get_plot_content_from_item_id(item_id)),
        inventory=tuple(inventory),
    )


def water_plot(engine: FarmEngine, state: FarmState, x: int, y: int) -> FarmState:
    get_plot(state.field, x, y)
    return water_plot_at(state, x, y)


def water_all_plots(engine: FarmEngine, state: FarmState) -> FarmState:
    width = len(state.field[0]) if state.field else 0
    height = len(state.field)
    for y in range(height):
        for x in range(width):
            state = water_plot_at(state, x, y)
    return state


def fertilize_plot(engine: FarmEngine, state: FarmState, x: int, y: int) -> FarmState:
    """Fertilize an unfertilized crop, using one fertilizer from the inventory."""
    plot = get_plot(state.field, x, y)
    if not isinstance(plot, Crop) or plot.is_fertilized:
        return state

    fertilizer_id = engine.crop_config.fertilizer_item_id
    inventory = decrement_item_from_inventory(state.inventory, fertilizer_id)
    return replace(
        state,
        field=set_plot(state.field, x, y, replace(plot, is_fertilized=True)),
        inventory=tuple(inventory),
    )


def harvest_plot(engine: FarmEngine, state: FarmState, x: int, y: int) -> FarmState:
    """Pick a fully grown crop, if there is room for it."""
    plot = get_plot(state.field, x, y)
    if not isinstance(plot, Crop) or engine.crops.get_crop_life_stage(plot) != CropLifeStage.GROWN:
        return state

    if not engine.inventory.does_space_remain(state.inventory, state.inventory_limit):
        logger.warning(f"No inventory space to harvest plot ({x}, {y})")
        return state

    seed = engine.catalog.get(plot.item_id)
    crop_item = engine.catalog.get_final_crop_item_from_seed_item(seed)
    return replace(
        state,
        field=set_plot(state.field, x, y, None),
        inventory=tuple(add_item_to_inventory(
            state.inventory, crop_item.id, 1, state.inventory_limit, engine.inventory_config
        )),
    )


def clear_plot(engine: FarmEngine, state: FarmState, x: int, y: int) -> FarmState:
    """
    Empty a plot.

    Placed items go back into the inventory when there is room; crops are
    discarded.
    """
    plot = get_plot(state.field, x, y)
    if plot is None:
        return state

    inventory = state.inventory
    if not engine.crops.does_plot_contain_crop(plot):
        if not engine.inventory.does_space_remain(inventory, state.inventory_limit):
            logger.warning(f"No inventory space to pick up {plot.item_id}")
            return state
        inventory = add_item_to_inventory(
            inventory, plot.item_id, 1, state.inventory_limit, engine.inventory_config
        )

    return replace(state, field=set_plot(state.field, x, y, None), inventory=tuple(inventory))


# Cows

def _replace_cow(state: FarmState, cow: Cow) -> FarmState:
    return replace(
        state,
        cow_inventory=tuple(cow if c.id == cow.id else c for c in state.cow_inventory),
    )


def _require_cow(state: FarmState, cow_id: str) -> Cow:
    cow = find_cow_by_id(state.cow_inventory, cow_id)
    if cow is None:
        raise ItemNotFoundError(cow_id, where="cow inventory")
    return cow


def purchase_cow(engine: FarmEngine, state: FarmState, cow: Cow) -> FarmState:
    value = get_cow_value(cow, engine.cow_config)
    if value > state.money:
        logger.warning(f"Cannot afford cow {cow.name} ({value:.2f} > {state.money:.2f})")
        return state
    return replace(
        state,
        cow_inventory=state.cow_inventory + (cow,),
        money=money_total(state.money, -value),
    )


def sell_cow(engine: FarmEngine, state: FarmState, cow_id: str) -> FarmState:
    cow = _require_cow(state, cow_id)
    return replace(
        state,
        cow_inventory=tuple(c for c in state.cow_inventory if c.id != cow_id),
        money=money_total(state.money, get_cow_value(cow, engine.cow_config)),
    )


def hug_cow(engine: FarmEngine, state: FarmState, cow_id: str) -> FarmState:
    cow = _require_cow(state, cow_id)
    hugged = hug(cow, engine.cow_config)
    if hugged is cow:
        return state
    return _replace_cow(state, hugged)


def feed_cow(engine: FarmEngine, state: FarmState, cow_id: str) -> FarmState:
    """Feed one cow by hand, using one cow feed."""
    cow = _require_cow(state, cow_id)
    if cow.id in state.cows_fed:
        return state
    inventory = decrement_item_from_inventory(state.inventory, engine.cow_config.cow_feed_item_id)
    return replace(state, inventory=tuple(inventory), cows_fed=state.cows_fed | {cow.id})


def toggle_hugging_machine(engine: FarmEngine, state: FarmState, cow_id: str) -> FarmState:
    """Put a cow on (or take it off) a hugging machine held in the inventory."""
    cow = _require_cow(state, cow_id)
    if not cow.is_using_hugging_machine and not engine.inventory.are_hugging_machines_in_inventory(
        state.inventory, engine.cow_config.hugging_machine_item_id
    ):
        logger.warning("No hugging machine in inventory")
        return state

    machine_id = engine.cow_config.hugging_machine_item_id
    if cow.is_using_hugging_machine:
        if not engine.inventory.does_space_remain(state.inventory, state.inventory_limit):
            logger.warning(f"No inventory space to take {cow.name} off the hugging machine")
            return state
        inventory = add_item_to_inventory(
            state.inventory, machine_id, 1, state.inventory_limit, engine.inventory_config
        )
    else:
        inventory = decrement_item_from_inventory(state.inventory, machine_id)

    state = replace(state, inventory=tuple(inventory))
    return _replace_cow(state, replace(cow, is_using_hugging_machine=not cow.is_using_hugging_machine))


def breed_cows(engine: FarmEngine, state: FarmState, cow_a_id: str, cow_b_id: str) -> FarmState:
    """Add a calf of two owned cows to the herd. Raises BreedingError for same-gender pairs."""
    offspring = engine.cows.generate_offspring_cow(
        _require_cow(state, cow_a_id),
        _require_cow(state, cow_b_id),
    )
    return replace(state, cow_inventory=state.cow_inventory + (offspring,))


# Drag painting

class PointerButton(Enum):
    HELD = auto()
    RELEASED = auto()


@dataclass(frozen=True)
class PointerState:
    """Whether the pointer button is down, carried through event handling."""
    button: PointerButton = PointerButton.RELEASED

    @property
    def is_held(self) -> bool:
        return self.button == PointerButton.HELD

    def press(self) -> "PointerState":
        return PointerState(PointerButton.HELD)

    def release(self) -> "PointerState":
        return PointerState(PointerButton.RELEASED)


PlotAction = Callable[[FarmEngine, FarmState, int, int], FarmState]


def handle_plot_drag(
    engine: FarmEngine,
    state: FarmState,
    pointer: PointerState,
    x: int,
    y: int,
    action: Optional[PlotAction] = None,
) -> FarmState:
    """Apply a plot action to a plot the pointer moves over, only while held."""
    if not pointer.is_held or action is None:
        return state
    return action(engine, state, x, y)
