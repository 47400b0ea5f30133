"""
Farmhand Sim — Field
Plot grid storage, neighbourhood coordinates and range folds.

Fields are tuples of rows, indexed field[y][x]. Every update returns a new
field; untouched rows are shared with the old one.
"""

from typing import Any, Callable, List, Optional, Tuple, TypeVar
import logging

from ..core.errors import InvalidPlacementError
from ..core.memoize import CacheRegistry
from ..config import FIELD
from .crops import PlotContent

logger = logging.getLogger(__name__)

Plot = Optional[PlotContent]
Field = Tuple[Tuple[Plot, ...], ...]
S = TypeVar("S")


def create_new_field(width: int = FIELD.initial_width, height: int = FIELD.initial_height) -> Field:
    return tuple(tuple(None for _ in range(width)) for _ in range(height))


def null_array(size: int) -> Tuple[None, ...]:
    return (None,) * size


def field_dimensions(field: Field) -> Tuple[int, int]:
    """(width, height) of a field."""
    height = len(field)
    width = len(field[0]) if height else 0
    return width, height


def is_in_bounds(field: Field, x: int, y: int) -> bool:
    width, height = field_dimensions(field)
    return 0 <= x < width and 0 <= y < height


def get_plot(field: Field, x: int, y: int) -> Plot:
    if not is_in_bounds(field, x, y):
        raise InvalidPlacementError(x, y, *field_dimensions(field))
    return field[y][x]


def set_plot(field: Field, x: int, y: int, content: Plot) -> Field:
    """Return a copy of field with one plot replaced."""
    if not is_in_bounds(field, x, y):
        raise InvalidPlacementError(x, y, *field_dimensions(field))
    row = field[y]
    new_row = row[:x] + (content,) + row[x + 1:]
    return field[:y] + (new_row,) + field[y + 1:]


def get_range_coords(range_size: int, center_x: int, center_y: int) -> List[List[Tuple[int, int]]]:
    """
    Square of (x, y) coordinates around a center, one list per row.

    The square is not clipped to any field.
    """
    square_size = 2 * range_size + 1
    start_x = center_x - range_size
    start_y = center_y - range_size
    return [
        [(start_x + x, start_y + y) for x in range(square_size)]
        for y in range(square_size)
    ]


def for_range(
    state: S,
    cell_fn: Callable[..., S],
    range_radius: int,
    plot_x: int,
    plot_y: int,
    *args: Any,
) -> S:
    """
    Fold cell_fn over every in-bounds plot within range_radius of a center.

    Plots are visited row by row (y ascending, then x ascending) and each
    call receives the state returned by the previous one, so later cells see
    earlier updates. state must expose a ``field`` attribute.
    """
    width, height = field_dimensions(state.field)
    start_x = max(plot_x - range_radius, 0)
    end_x = min(plot_x + range_radius, width - 1)
    start_y = max(plot_y - range_radius, 0)
    end_y = min(plot_y + range_radius, height - 1)

    for y in range(start_y, end_y + 1):
        for x in range(start_x, end_x + 1):
            state = cell_fn(state, x, y, *args)

    return state


def iter_plots(field: Field):
    """Yield (x, y, plot) for every plot in row-major order."""
    for y, row in enumerate(field):
        for x, plot in enumerate(row):
            yield x, y, plot


def _find_in_field(field: Field, condition: Callable[[Plot], bool]) -> Plot:
    for row in field:
        for plot in row:
            if condition(plot):
                return plot
    return None


def _get_crops(field: Field, filter_condition: Callable[[Plot], bool]) -> Tuple[Plot, ...]:
    return tuple(plot for row in field for plot in row if filter_condition(plot))


class FieldQueries:
    """Memoized whole-field searches keyed by the condition's code and captured values."""

    def __init__(self, caches: CacheRegistry):
        self.find_in_field = caches.memoize(_find_in_field)
        self.get_crops = caches.memoize(_get_crops)
