"""
Farmhand Sim — Configuration
Tuning constants for the field, crops, cows, market, inventory and caches.
"""

from dataclasses import dataclass


@dataclass
class FieldConfig:
    """Field grid dimensions."""
    initial_width: int = 6
    initial_height: int = 10

    @property
    def total_plots(self) -> int:
        return self.initial_width * self.initial_height


@dataclass
class CropConfig:
    """Crop growth parameters."""

    # Extra watered-days granted per watered day when fertilized
    fertilizer_bonus: float = 0.5

    fertilizer_item_id: str = "fertilizer"


@dataclass
class CowConfig:
    """Cow breeding, weight, value and milk parameters."""

    # Weight
    starting_weight_base: int = 1400
    starting_weight_variance: int = 100
    male_weight_multiplier: float = 1.1
    weight_multiplier_minimum: float = 0.5
    weight_multiplier_maximum: float = 1.5
    weight_multiplier_feed_benefit: float = 0.1

    # Milk (days between milkings)
    milk_rate_slowest: float = 7.0
    milk_rate_fastest: float = 3.0

    # Value
    maximum_value_multiplier: float = 1.5
    minimum_value_multiplier: float = 0.5
    maximum_age_value_dropoff: int = 100

    # Happiness
    hug_benefit: float = 0.2
    max_daily_hugs: int = 3

    hugging_machine_item_id: str = "hugging-machine"
    cow_feed_item_id: str = "cow-feed"

    @property
    def male_starting_weight(self) -> float:
        return self.starting_weight_base * self.male_weight_multiplier


@dataclass
class MarketConfig:
    """Market fluctuation parameters."""
    crash_multiplier: float = 0.5
    surge_multiplier: float = 1.5
    price_event_standard_duration_decrease: int = 1
    price_event_chance: float = 0.05
    resale_fraction: float = 0.5

    @property
    def fluctuation_span(self) -> float:
        return self.surge_multiplier - self.crash_multiplier


@dataclass
class InventoryConfig:
    """Inventory capacity."""

    # -1 means unlimited
    unlimited_sentinel: int = -1
    initial_limit: int = 100
    initial_money: float = 500.0


@dataclass
class CacheConfig:
    """Memoization cache parameters."""
    clear_threshold: int = 10


# Default configurations
FIELD = FieldConfig()
CROPS = CropConfig()
COWS = CowConfig()
MARKET = MarketConfig()
INVENTORY = InventoryConfig()
CACHE = CacheConfig()
