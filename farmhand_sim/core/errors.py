"""
Farmhand Sim — Errors
Exceptions raised by the simulation engine.
"""

from typing import Any


class FarmhandError(Exception):
    """Base class for all engine errors."""


class ItemNotFoundError(FarmhandError, KeyError):
    """An item id is not present where it was looked up."""

    def __init__(self, item_id: str, where: str = "catalog"):
        self.item_id = item_id
        self.where = where
        super().__init__(f"Item '{item_id}' not found in {where}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class CatalogError(FarmhandError, ValueError):
    """A catalog record failed validation at load time."""


class BreedingError(FarmhandError, ValueError):
    """Two cows cannot produce offspring."""

    def __init__(self, cow_a: Any, cow_b: Any, reason: str):
        self.cow_a = cow_a
        self.cow_b = cow_b
        super().__init__(f"{cow_a!r} {cow_b!r} cannot produce offspring because {reason}")


class InvalidPlacementError(FarmhandError, ValueError):
    """A single-plot operation addressed coordinates outside the field."""

    def __init__(self, x: int, y: int, width: int, height: int):
        self.x = x
        self.y = y
        super().__init__(f"Plot ({x}, {y}) is outside the {width}x{height} field")
