"""
Test: Simulation
Daily tick and player actions driven through the FarmEngine.
"""

from dataclasses import replace
from functools import partial

import pytest

from farmhand_sim.config import MarketConfig
from farmhand_sim.core.catalog import CropLifeStage
from farmhand_sim.core.errors import BreedingError, FarmhandError, ItemNotFoundError
from farmhand_sim.simulation.actions import (
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
from farmhand_sim.simulation.engine import FarmEngine, FarmState
from farmhand_sim.systems.cows import Gender, get_cow_value
from farmhand_sim.systems.crops import Crop, PlotContent
from farmhand_sim.systems.field import get_plot, set_plot
from farmhand_sim.systems.inventory import InventoryEntry, get_inventory_quantity


@pytest.fixture
def quiet_engine(catalog):
    """Engine whose market never starts new price events."""
    return FarmEngine(catalog=catalog, seed=42, market_config=MarketConfig(price_event_chance=0.0))


def with_inventory(state: FarmState, **quantities) -> FarmState:
    entries = tuple(InventoryEntry(item_id.replace("_", "-"), qty) for item_id, qty in quantities.items())
    return replace(state, inventory=entries)


# =============================================================================
# ENGINE
# =============================================================================

class TestFarmEngine:

    def test_new_game(self, engine):
        state = engine.new_game()
        assert len(state.field) == engine.field_config.initial_height
        assert len(state.field[0]) == engine.field_config.initial_width
        assert state.inventory == ()
        assert state.day_count == 1
        assert all(0.5 <= v < 1.5 for v in state.value_adjustments.values())

    def test_day_ages_watered_crops(self, quiet_engine):
        state = quiet_engine.new_game()
        state = replace(state, field=set_plot(state.field, 0, 0, Crop("corn-seed")))
        state = replace(state, field=set_plot(state.field, 1, 0, Crop("corn-seed")))
        state = water_plot(quiet_engine, state, 0, 0)

        next_state = quiet_engine.process_day(state)

        watered = get_plot(next_state.field, 0, 0)
        dry = get_plot(next_state.field, 1, 0)
        assert watered.days_old == 1 and watered.days_watered == 1
        assert dry.days_old == 1 and dry.days_watered == 0
        assert not watered.was_watered_today
        assert next_state.day_count == 2
        assert get_plot(state.field, 0, 0).days_old == 0, "Input state must not change"

    def test_sprinkler_waters_its_range(self, quiet_engine):
        state = quiet_engine.new_game()
        field = set_plot(state.field, 2, 2, PlotContent("sprinkler"))
        field = set_plot(field, 1, 1, Crop("carrot-seed"))
        field = set_plot(field, 3, 3, Crop("carrot-seed"))
        field = set_plot(field, 4, 4, Crop("carrot-seed"))
        state = quiet_engine.process_day(replace(state, field=field))

        assert get_plot(state.field, 1, 1).days_watered == 1
        assert get_plot(state.field, 3, 3).days_watered == 1
        assert get_plot(state.field, 4, 4).days_watered == 0
        assert get_plot(state.field, 2, 2) == PlotContent("sprinkler")

    def test_crop_grows_to_harvest(self, quiet_engine):
        state = with_inventory(quiet_engine.new_game(), corn_seed=1)
        state = plant_in_plot(quiet_engine, state, 0, 0, "corn-seed")

        for _ in range(7):
            assert quiet_engine.crops.get_crop_life_stage(get_plot(state.field, 0, 0)) != CropLifeStage.GROWN
            state = quiet_engine.process_day(water_plot(quiet_engine, state, 0, 0))

        assert quiet_engine.crops.get_crop_life_stage(get_plot(state.field, 0, 0)) == CropLifeStage.GROWN
        state = harvest_plot(quiet_engine, state, 0, 0)
        assert get_plot(state.field, 0, 0) is None
        assert get_inventory_quantity(state.inventory, "corn") == 1

    def test_cows_are_fed_aged_and_milked(self, quiet_engine):
        cow = quiet_engine.cows.generate_cow(gender=Gender.FEMALE, days_since_milking=4)
        state = replace(
            with_inventory(quiet_engine.new_game(), cow_feed=2),
            cow_inventory=(cow,),
        )

        state = quiet_engine.process_day(state)

        milked = state.cow_inventory[0]
        assert milked.days_old == cow.days_old + 1
        assert milked.days_since_milking == 0
        assert milked.weight_multiplier == pytest.approx(1.1)
        assert get_inventory_quantity(state.inventory, "cow-feed") == 1
        assert get_inventory_quantity(state.inventory, "milk-1") == 1

    def test_unfed_cow_loses_weight(self, quiet_engine):
        cow = quiet_engine.cows.generate_cow(gender=Gender.MALE)
        state = replace(quiet_engine.new_game(), cow_inventory=(cow,))
        state = quiet_engine.process_day(state)
        assert state.cow_inventory[0].weight_multiplier == pytest.approx(0.9)

    def test_milk_respects_inventory_limit(self, quiet_engine):
        cow = quiet_engine.cows.generate_cow(gender=Gender.FEMALE, days_since_milking=10)
        state = replace(
            with_inventory(quiet_engine.new_game(), bronze_ore=1),
            cow_inventory=(cow,),
            inventory_limit=1,
        )
        state = quiet_engine.process_day(state)
        assert get_inventory_quantity(state.inventory, "milk-1") == 0
        assert state.cow_inventory[0].days_since_milking == 0

    def test_price_events_expire(self, quiet_engine, market):
        state = replace(
            quiet_engine.new_game(),
            price_crashes={"carrot": market.get_price_event_for_crop(quiet_engine.catalog.get("carrot"))},
        )
        days = state.price_crashes["carrot"].days_remaining

        state = quiet_engine.process_day(state)
        assert state.value_adjustments["carrot"] == 0.5
        assert state.price_crashes["carrot"].days_remaining == days - 1

        state = quiet_engine.run(state, days)
        assert "carrot" not in state.price_crashes
        assert 0.5 <= state.value_adjustments["carrot"] < 1.5

    def test_same_seed_same_game(self, catalog):
        def play(seed):
            engine = FarmEngine(catalog=catalog, seed=seed,
                                market_config=MarketConfig(price_event_chance=0.5))
            state = replace(engine.new_game(), cow_inventory=(engine.cows.generate_cow(),))
            return engine.run(state, 10)

        assert play(3) == play(3)

    def test_engines_do_not_share_caches(self, catalog):
        a = FarmEngine(catalog=catalog, seed=1)
        b = FarmEngine(catalog=catalog, seed=1)
        a.crops.get_life_stage_range(catalog.get("corn-seed").crop_timetable)
        assert len(a.crops.get_life_stage_range.cache) == 1
        assert len(b.crops.get_life_stage_range.cache) == 0

    def test_day_summaries(self, quiet_engine):
        seen = []
        quiet_engine.on_day_complete = seen.append
        quiet_engine.run(quiet_engine.new_game(), 3)
        assert [s["day"] for s in quiet_engine.day_summaries] == [2, 3, 4]
        assert seen == quiet_engine.day_summaries

    def test_status(self, engine):
        state = engine.new_game()
        state = replace(state, field=set_plot(state.field, 0, 0, Crop("carrot-seed")))
        status = engine.get_status(state)
        assert status["crops_planted"] == 1
        assert set(status["prices"]) == {"carrot", "corn", "pumpkin", "bronze-ore"}


# =============================================================================
# ACTIONS
# =============================================================================

class TestShopActions:

    def test_purchase(self, engine, catalog):
        state = purchase_item(engine, engine.new_game(), catalog.get("carrot-seed"), 2)
        assert state.money == 470
        assert get_inventory_quantity(state.inventory, "carrot-seed") == 2

    def test_purchase_refused_without_funds(self, engine, catalog):
        state = replace(engine.new_game(), money=10)
        assert purchase_item(engine, state, catalog.get("carrot-seed")) is state

    def test_purchase_clipped_to_space(self, engine, catalog):
        state = replace(engine.new_game(), inventory_limit=3)
        state = purchase_item(engine, state, catalog.get("cow-feed"), 5)
        assert get_inventory_quantity(state.inventory, "cow-feed") == 3
        assert state.money == 485

    def test_sell_farm_product_at_market_value(self, engine):
        state = replace(with_inventory(engine.new_game(), carrot=2), value_adjustments={"carrot": 1.5})
        state = sell_item(engine, state, engine.catalog.get("carrot"), 2)
        assert state.money == 500 + 75
        assert state.inventory == ()

    def test_sell_other_items_at_resale_value(self, engine):
        state = with_inventory(engine.new_game(), fertilizer=1)
        state = sell_item(engine, state, engine.catalog.get("fertilizer"))
        assert state.money == 512.5

    def test_sell_missing_item(self, engine):
        with pytest.raises(ItemNotFoundError):
            sell_item(engine, engine.new_game(), engine.catalog.get("carrot"))

    def test_make_recipe(self, engine):
        state = with_inventory(engine.new_game(), carrot=5)
        state = make_recipe(engine, state, engine.catalog.get("carrot-soup"))
        assert get_inventory_quantity(state.inventory, "carrot") == 1
        assert get_inventory_quantity(state.inventory, "carrot-soup") == 1

        assert make_recipe(engine, state, engine.catalog.get("carrot-soup")) is state


class TestFieldActions:

    def test_plant(self, engine):
        state = with_inventory(engine.new_game(), carrot_seed=1)
        planted = plant_in_plot(engine, state, 2, 3, "carrot-seed")
        assert get_plot(planted.field, 2, 3) == Crop("carrot-seed")
        assert planted.inventory == ()

    def test_plant_occupied_plot(self, engine):
        state = with_inventory(engine.new_game(), carrot_seed=2)
        state = plant_in_plot(engine, state, 0, 0, "carrot-seed")
        assert plant_in_plot(engine, state, 0, 0, "carrot-seed") is state

    def test_plant_requires_seed(self, engine):
        state = with_inventory(engine.new_game(), carrot=1)
        with pytest.raises(FarmhandError):
            plant_in_plot(engine, state, 0, 0, "carrot")

    def test_fertilize(self, engine):
        state = with_inventory(engine.new_game(), fertilizer=1)
        state = replace(state, field=set_plot(state.field, 0, 0, Crop("carrot-seed")))
        state = fertilize_plot(engine, state, 0, 0)
        assert get_plot(state.field, 0, 0).is_fertilized
        assert state.inventory == ()

        with pytest.raises(ItemNotFoundError):
            fertilize_plot(engine, replace(state, field=set_plot(state.field, 1, 0, Crop("corn-seed"))), 1, 0)

    def test_water_all_plots(self, engine):
        state = engine.new_game()
        state = replace(state, field=set_plot(state.field, 0, 0, Crop("carrot-seed")))
        state = replace(state, field=set_plot(state.field, 5, 9, Crop("corn-seed")))
        state = water_all_plots(engine, state)
        assert get_plot(state.field, 0, 0).was_watered_today
        assert get_plot(state.field, 5, 9).was_watered_today

    def test_harvest_ungrown_crop_does_nothing(self, engine):
        state = engine.new_game()
        state = replace(state, field=set_plot(state.field, 0, 0, Crop("carrot-seed", days_watered=4)))
        assert harvest_plot(engine, state, 0, 0) is state

    def test_place_and_clear(self, engine):
        state = with_inventory(engine.new_game(), scarecrow=1)
        state = place_item(engine, state, 1, 1, "scarecrow")
        assert get_plot(state.field, 1, 1) == PlotContent("scarecrow")
        assert state.inventory == ()

        state = clear_plot(engine, state, 1, 1)
        assert get_plot(state.field, 1, 1) is None
        assert get_inventory_quantity(state.inventory, "scarecrow") == 1

        with pytest.raises(FarmhandError):
            place_item(engine, with_inventory(state, carrot=1), 0, 0, "carrot")

    def test_drag_only_while_held(self, engine):
        state = with_inventory(engine.new_game(), carrot_seed=3)
        plant = partial(plant_in_plot, seed_item_id="carrot-seed")
        pointer = PointerState()

        assert handle_plot_drag(engine, state, pointer, 0, 0, plant) is state

        pointer = pointer.press()
        state = handle_plot_drag(engine, state, pointer, 0, 0, plant)
        state = handle_plot_drag(engine, state, pointer, 1, 0, plant)

        pointer = pointer.release()
        state = handle_plot_drag(engine, state, pointer, 2, 0, plant)

        assert get_plot(state.field, 0, 0) == Crop("carrot-seed")
        assert get_plot(state.field, 1, 0) == Crop("carrot-seed")
        assert get_plot(state.field, 2, 0) is None
        assert get_inventory_quantity(state.inventory, "carrot-seed") == 1


class TestCowActions:

    def test_buy_and_sell_cow(self, engine):
        cow = engine.cows.generate_cow(base_weight=100)
        value = get_cow_value(cow)
        state = purchase_cow(engine, engine.new_game(), cow)
        assert state.cow_inventory == (cow,)
        assert state.money == 500 - value

        state = sell_cow(engine, state, cow.id)
        assert state.cow_inventory == ()
        assert state.money == 500

    def test_cannot_afford_cow(self, engine):
        state = engine.new_game()
        cow = engine.cows.generate_cow()
        assert purchase_cow(engine, state, cow) is state

    def test_breed(self, engine):
        bull = engine.cows.generate_cow(gender=Gender.MALE)
        cow = engine.cows.generate_cow(gender=Gender.FEMALE)
        state = replace(engine.new_game(), cow_inventory=(bull, cow))
        state = breed_cows(engine, state, bull.id, cow.id)
        assert len(state.cow_inventory) == 3

    def test_breed_same_gender(self, engine):
        a = engine.cows.generate_cow(gender=Gender.FEMALE)
        b = engine.cows.generate_cow(gender=Gender.FEMALE)
        state = replace(engine.new_game(), cow_inventory=(a, b))
        with pytest.raises(BreedingError):
            breed_cows(engine, state, a.id, b.id)

    def test_hug_and_feed(self, engine):
        cow = engine.cows.generate_cow()
        state = with_inventory(replace(engine.new_game(), cow_inventory=(cow,)), cow_feed=1)

        state = hug_cow(engine, state, cow.id)
        assert state.cow_inventory[0].happiness == pytest.approx(0.2)

        state = feed_cow(engine, state, cow.id)
        assert cow.id in state.cows_fed
        assert feed_cow(engine, state, cow.id) is state

        with pytest.raises(ItemNotFoundError):
            hug_cow(engine, state, "missing-cow")

    def test_hugging_machine(self, engine):
        cow = engine.cows.generate_cow()
        state = with_inventory(replace(engine.new_game(), cow_inventory=(cow,)), hugging_machine=1)

        state = toggle_hugging_machine(engine, state, cow.id)
        assert state.cow_inventory[0].is_using_hugging_machine
        assert state.inventory == ()

        state = toggle_hugging_machine(engine, state, cow.id)
        assert not state.cow_inventory[0].is_using_hugging_machine
        assert get_inventory_quantity(state.inventory, "hugging-machine") == 1

    def test_hugging_machine_not_returned_to_full_inventory(self, engine, catalog):
        cow = engine.cows.generate_cow()
        state = replace(engine.new_game(), cow_inventory=(cow,), inventory_limit=5)
        state = with_inventory(state, hugging_machine=1)

        state = toggle_hugging_machine(engine, state, cow.id)
        state = purchase_item(engine, state, catalog.get("cow-feed"), 5)
        assert get_inventory_quantity(state.inventory, "cow-feed") == 5

        assert toggle_hugging_machine(engine, state, cow.id) is state
        assert state.cow_inventory[0].is_using_hugging_machine
        assert sum(entry.quantity for entry in state.inventory) == 5
