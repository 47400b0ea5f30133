"""
Farmhand Sim — Market
Item values, daily price fluctuation and timed crash/surge events.
"""

from dataclasses import dataclass, replace
from typing import Dict, Mapping, Optional, Tuple
import random
import logging

from ..core.catalog import Catalog, CropItem, Item
from ..core.memoize import CacheRegistry
from ..core.money import cast_to_money, to_cents
from ..config import MARKET, MarketConfig
from .crops import sum_crop_timetable

logger = logging.getLogger(__name__)

ValueAdjustments = Dict[str, float]
PriceEvents = Mapping[str, "PriceEvent"]


@dataclass(frozen=True)
class PriceEvent:
    """An active crash or surge on one item."""
    item_id: str
    days_remaining: int


class Market:
    """
    Prices items against the catalog.

    Random multipliers are drawn from the injected rng.
    """

    def __init__(
        self,
        catalog: Catalog,
        rng: random.Random,
        caches: CacheRegistry,
        config: MarketConfig = MARKET,
    ):
        self.catalog = catalog
        self.rng = rng
        self.config = config
        self._timetable_duration = caches.memoize(sum_crop_timetable)

    def generate_value_adjustments(self, price_crashes: PriceEvents,
                                   price_surges: PriceEvents) -> ValueAdjustments:
        """
        Multiplier for every fluctuating item.

        Crashes win over surges. Items that do not fluctuate are left out,
        which callers read as a multiplier of 1.
        """
        adjustments: ValueAdjustments = {}
        for item in self.catalog:
            if not item.does_price_fluctuate:
                continue

            if item.id in price_crashes:
                adjustments[item.id] = self.config.crash_multiplier
            elif item.id in price_surges:
                adjustments[item.id] = self.config.surge_multiplier
            else:
                adjustments[item.id] = (
                    self.rng.random() * self.config.fluctuation_span + self.config.crash_multiplier
                )

        return adjustments

    def get_price_event_for_crop(self, crop_item: CropItem) -> PriceEvent:
        """Price event lasting roughly one planting-to-harvest cycle of the crop."""
        duration = self._timetable_duration(crop_item.crop_timetable)
        return PriceEvent(
            item_id=crop_item.id,
            days_remaining=duration - self.config.price_event_standard_duration_decrease,
        )

    def get_item_value(self, item: Item, value_adjustments: Mapping[str, float]) -> float:
        catalog_item = self.catalog.get(item.id)
        value = catalog_item.value
        multiplier = value_adjustments.get(item.id)
        if multiplier and catalog_item.does_price_fluctuate:
            value *= multiplier
        return to_cents(value) / 100

    def get_adjusted_item_value(self, value_adjustments: Mapping[str, float], item_id: str) -> float:
        multiplier = value_adjustments.get(item_id) or 1
        return cast_to_money(multiplier * self.catalog.get(item_id).value)

    def get_resale_value(self, item: Item) -> float:
        """Flat fraction of base value, unaffected by the market."""
        return self.catalog.get(item.id).value * self.config.resale_fraction

    def get_random_crop_item(self) -> CropItem:
        return self.rng.choice(self.catalog.final_stage_crops())

    def decrement_price_events(self, events: PriceEvents) -> Dict[str, PriceEvent]:
        """Count every event down a day, dropping the ones that run out."""
        remaining = {}
        for item_id, event in events.items():
            days = event.days_remaining - 1
            if days > 0:
                remaining[item_id] = replace(event, days_remaining=days)
            else:
                logger.debug(f"Price event for {item_id} expired")
        return remaining

    def roll_price_event(
        self,
        price_crashes: PriceEvents,
        price_surges: PriceEvents,
    ) -> Tuple[Dict[str, PriceEvent], Dict[str, PriceEvent]]:
        """
        Maybe start a new crash or surge on a crop that has none.

        Returns new (crashes, surges) mappings.
        """
        crashes = dict(price_crashes)
        surges = dict(price_surges)

        if self.rng.random() >= self.config.price_event_chance:
            return crashes, surges

        candidates = [
            item for item in self.catalog.final_stage_crops()
            if item.does_price_fluctuate and item.id not in crashes and item.id not in surges
        ]
        if not candidates:
            return crashes, surges

        crop_item = self.rng.choice(candidates)
        event = self.get_price_event_for_crop(crop_item)
        is_crash = self.rng.random() < 0.5
        if is_crash:
            crashes[crop_item.id] = event
        else:
            surges[crop_item.id] = event

        logger.info(
            f"Price {'crash' if is_crash else 'surge'} on {crop_item.id} "
            f"for {event.days_remaining} days"
        )
        return crashes, surges

    def get_status(self, value_adjustments: Optional[Mapping[str, float]] = None) -> dict:
        adjustments = value_adjustments or {}
        return {
            item.id: self.get_item_value(item, adjustments)
            for item in self.catalog
            if item.does_price_fluctuate
        }
