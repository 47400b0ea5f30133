"""
Farmhand Sim — Crop Lifecycle
Plot contents, life-stage derivation and daily ageing.

A crop's life stage is not stored. It is derived from how many days the crop
has been watered, so a crop that is never watered stays a seed forever.
"""

from dataclasses import dataclass, replace
from typing import List, Mapping, Optional, Tuple
import math
import logging

from ..core.catalog import Catalog, CropItem, CropLifeStage, ItemType
from ..core.memoize import CacheRegistry
from ..config import CROPS, CropConfig

logger = logging.getLogger(__name__)

SEED = CropLifeStage.SEED
GROWING = CropLifeStage.GROWING
GROWN = CropLifeStage.GROWN

_IMAGE_SUFFIXES = {
    SEED: "seed",
    GROWING: "growing",
}


@dataclass(frozen=True)
class PlotContent:
    """Anything that can occupy a plot."""
    item_id: str


@dataclass(frozen=True)
class Crop(PlotContent):
    """A planted crop and its growth state."""
    days_old: int = 0
    days_watered: float = 0.0
    is_fertilized: bool = False
    was_watered_today: bool = False


def get_plot_content_from_item_id(item_id: str) -> PlotContent:
    return PlotContent(item_id=item_id)


def get_crop_from_item_id(item_id: str) -> Crop:
    return Crop(item_id=item_id)


def build_life_stage_range(crop_timetable: Mapping[CropLifeStage, int]) -> Tuple[CropLifeStage, ...]:
    """Stage for each whole watered-day: SEED days, then GROWING days."""
    stages: List[CropLifeStage] = []
    for stage in (SEED, GROWING):
        stages.extend([stage] * crop_timetable[stage])
    return tuple(stages)


def sum_crop_timetable(crop_timetable: Mapping[CropLifeStage, int]) -> int:
    return sum(crop_timetable.values())


class CropLifecycle:
    """
    Derives crop state from the catalog.

    Stage tables and lifecycle durations are memoized through the
    owning engine's cache registry.
    """

    def __init__(self, catalog: Catalog, caches: CacheRegistry, config: CropConfig = CROPS):
        self.catalog = catalog
        self.config = config
        self.get_life_stage_range = caches.memoize(build_life_stage_range)
        self._timetable_duration = caches.memoize(sum_crop_timetable)

    def get_crop_lifecycle_duration(self, item: CropItem) -> int:
        """Total days from planting to fully grown."""
        return self._timetable_duration(item.crop_timetable)

    def get_plot_content_type(self, plot_content: PlotContent) -> ItemType:
        return self.catalog.get(plot_content.item_id).type

    def does_plot_contain_crop(self, plot: Optional[PlotContent]) -> bool:
        return plot is not None and self.get_plot_content_type(plot) == ItemType.CROP

    def get_crop_life_stage(self, crop: Crop) -> CropLifeStage:
        item = self.catalog.get(crop.item_id)
        stage_range = self.get_life_stage_range(item.crop_timetable)
        index = math.floor(crop.days_watered)
        if index < len(stage_range):
            return stage_range[index]
        return GROWN

    def get_crop_life_stage_label(self, crop: Crop) -> str:
        return self.get_crop_life_stage(crop).name.lower()

    def get_crop_id(self, crop: PlotContent) -> str:
        return self.catalog.get(crop.item_id).crop_type

    def increment_plot_content_age(self, plot_content: PlotContent) -> PlotContent:
        """
        Age a plot's content by one day.

        Non-crop content is returned unchanged (the same object), so callers
        can detect a no-op by identity.
        """
        if not isinstance(plot_content, Crop) or not self.does_plot_contain_crop(plot_content):
            return plot_content

        watered_increment = 0.0
        if plot_content.was_watered_today:
            watered_increment = 1 + (self.config.fertilizer_bonus if plot_content.is_fertilized else 0)

        return replace(
            plot_content,
            days_old=plot_content.days_old + 1,
            days_watered=plot_content.days_watered + watered_increment,
        )

    def reset_was_watered(self, plot_content: Optional[PlotContent]) -> Optional[PlotContent]:
        if isinstance(plot_content, Crop) and plot_content.was_watered_today:
            return replace(plot_content, was_watered_today=False)
        return plot_content

    def get_plot_image_key(self, plot_content: Optional[PlotContent]) -> Optional[str]:
        """Lookup key for a plot's image; None for an empty plot."""
        if plot_content is None:
            return None

        if self.get_plot_content_type(plot_content) != ItemType.CROP:
            return plot_content.item_id

        crop_id = self.get_crop_id(plot_content)
        if not isinstance(plot_content, Crop):
            return crop_id

        stage = self.get_crop_life_stage(plot_content)
        if stage == GROWN:
            return crop_id
        return f"{crop_id}-{_IMAGE_SUFFIXES[stage]}"
