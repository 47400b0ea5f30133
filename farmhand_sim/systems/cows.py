"""
Farmhand Sim — Cows
Cow generation, breeding with bloodline inheritance, and weight/value/milk models.
"""

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Optional, Sequence
from enum import Enum, auto
import random
import uuid
import logging

from ..core.catalog import Catalog, MilkItem
from ..core.errors import BreedingError
from ..core.money import clamp_number, scale_number
from ..config import COWS, CowConfig

logger = logging.getLogger(__name__)


class Gender(Enum):
    MALE = auto()
    FEMALE = auto()


class CowColor(Enum):
    BLUE = auto()
    BROWN = auto()
    GREEN = auto()
    ORANGE = auto()
    PURPLE = auto()
    WHITE = auto()
    YELLOW = auto()


@dataclass
class Cow:
    """A single cow in the player's herd."""
    id: str
    name: str
    gender: Gender
    color: CowColor
    base_weight: float
    colors_in_bloodline: FrozenSet[CowColor] = field(default_factory=frozenset)
    weight_multiplier: float = 1.0
    days_old: int = 1
    days_since_milking: int = 0
    happiness: float = 0.0
    happiness_boosts_today: int = 0
    is_using_hugging_machine: bool = False


class CowBreeder:
    """
    Creates cows, either from scratch or from two parents.

    All randomness (gender, color, weight noise, name) comes from the
    injected rng.
    """

    def __init__(
        self,
        catalog: Catalog,
        rng: random.Random,
        names: Sequence[str],
        config: CowConfig = COWS,
    ):
        self.catalog = catalog
        self.rng = rng
        self.names = list(names)
        self.config = config

    def _create_unique_id(self) -> str:
        return str(uuid.UUID(int=self.rng.getrandbits(128), version=4))

    def generate_cow(self, **options) -> Cow:
        """
        Generate a friendly cow.

        Any Cow field may be passed to override the generated value.
        """
        gender = options.get("gender") or self.rng.choice(list(Gender))

        weight_base = self.config.starting_weight_base
        if gender == Gender.MALE:
            weight_base *= self.config.male_weight_multiplier
        variance = self.config.starting_weight_variance
        base_weight = round(weight_base - variance + self.rng.random() * variance * 2)

        color = options.get("color") or self.rng.choice(list(CowColor))

        attributes = {
            "id": self._create_unique_id(),
            "name": self.rng.choice(self.names),
            "gender": gender,
            "color": color,
            "base_weight": base_weight,
            "colors_in_bloodline": frozenset({color}),
        }
        attributes.update(options)
        return Cow(**attributes)

    def generate_offspring_cow(self, cow_a: Cow, cow_b: Cow) -> Cow:
        """
        Breed two cows of opposite gender.

        The calf takes its father's color and the mean of its parents' base
        weights; everything else is generated fresh.
        """
        if cow_a.gender == cow_b.gender:
            raise BreedingError(cow_a, cow_b, "they have the same gender")

        father, mother = (cow_a, cow_b) if cow_a.gender == Gender.MALE else (cow_b, cow_a)

        # Parents' own colors are added explicitly: a parent's bloodline set
        # may have been recorded without its own color.
        bloodline = (
            frozenset({father.color, mother.color})
            | frozenset(father.colors_in_bloodline)
            | frozenset(mother.colors_in_bloodline)
        )

        offspring = self.generate_cow(
            color=father.color,
            colors_in_bloodline=bloodline,
            base_weight=(father.base_weight + mother.base_weight) / 2,
        )
        logger.info(f"{father.name} and {mother.name} produced {offspring.name} ({offspring.id})")
        return offspring

    def get_cow_milk_item(self, cow: Cow) -> MilkItem:
        """Milk quality tier from happiness."""
        if cow.happiness < 1 / 3:
            return self.catalog.get("milk-1")
        if cow.happiness < 2 / 3:
            return self.catalog.get("milk-2")
        return self.catalog.get("milk-3")


def get_cow_weight(cow: Cow) -> int:
    return round(cow.base_weight * cow.weight_multiplier)


def get_cow_value(cow: Cow, config: CowConfig = COWS) -> float:
    """Weight times an age multiplier that falls from max at day 1 to min at the dropoff."""
    age_multiplier = scale_number(
        cow.days_old,
        1,
        config.maximum_age_value_dropoff,
        config.maximum_value_multiplier,
        config.minimum_value_multiplier,
    )
    return get_cow_weight(cow) * clamp_number(
        age_multiplier,
        config.minimum_value_multiplier,
        config.maximum_value_multiplier,
    )


def get_cow_milk_rate(cow: Cow, config: CowConfig = COWS) -> Optional[float]:
    """
    Days between milkings.

    Returns None for cows that cannot be milked.
    """
    if cow.gender != Gender.FEMALE:
        return None
    return scale_number(
        cow.weight_multiplier,
        config.weight_multiplier_minimum,
        config.weight_multiplier_maximum,
        config.milk_rate_slowest,
        config.milk_rate_fastest,
    )


def is_cow_ready_for_milking(cow: Cow, config: CowConfig = COWS) -> bool:
    rate = get_cow_milk_rate(cow, config)
    return rate is not None and cow.days_since_milking >= rate


def milk_cow(cow: Cow) -> Cow:
    return replace(cow, days_since_milking=0)


def hug_cow(cow: Cow, config: CowConfig = COWS) -> Cow:
    """Boost happiness, up to the daily hug limit. Returns the same cow when capped."""
    if cow.happiness_boosts_today >= config.max_daily_hugs:
        return cow
    return replace(
        cow,
        happiness=clamp_number(cow.happiness + config.hug_benefit, 0, 1),
        happiness_boosts_today=cow.happiness_boosts_today + 1,
    )


def age_cow(cow: Cow, was_fed: bool, config: CowConfig = COWS) -> Cow:
    """
    Advance a cow by one day.

    Fed cows gain weight multiplier and unfed cows lose it, within the
    configured band. A cow on a hugging machine starts the day with one hug.
    """
    delta = config.weight_multiplier_feed_benefit if was_fed else -config.weight_multiplier_feed_benefit
    aged = replace(
        cow,
        days_old=cow.days_old + 1,
        days_since_milking=cow.days_since_milking + 1,
        happiness_boosts_today=0,
        weight_multiplier=clamp_number(
            round(cow.weight_multiplier + delta, 4),
            config.weight_multiplier_minimum,
            config.weight_multiplier_maximum,
        ),
    )
    if aged.is_using_hugging_machine:
        aged = hug_cow(aged, config)
    return aged


def find_cow_by_id(cow_inventory: Iterable[Cow], cow_id: str) -> Optional[Cow]:
    for cow in cow_inventory:
        if cow.id == cow_id:
            return cow
    return None
