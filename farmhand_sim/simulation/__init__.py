"""
Farmhand Sim — Simulation
Engine session context, daily tick and player actions.
"""

from .engine import FarmEngine, FarmState, water_plot_at
from .actions import (
    PointerButton,
    PointerState,
    breed_cows,
    clear_plot,
    feed_cow,
    fertilize_plot,
    handle_plot_drag,
    harvest_plot,
    hug_cow,
    make_recipe,
    place_item,
    plant_in_plot,
    purchase_cow,
    purchase_item,
    sell_cow,
    sell_item,
    toggle_hugging_machine,
    water_all_plots,
    water_plot,
)

__all__ = [
    # Engine
    "FarmEngine",
    "FarmState",
    "water_plot_at",

    # Actions
    "PointerButton",
    "PointerState",
    "breed_cows",
    "clear_plot",
    "feed_cow",
    "fertilize_plot",
    "handle_plot_drag",
    "harvest_plot",
    "hug_cow",
    "make_recipe",
    "place_item",
    "plant_in_plot",
    "purchase_cow",
    "purchase_item",
    "sell_cow",
    "sell_item",
    "toggle_hugging_machine",
    "water_all_plots",
    "water_plot",
]
