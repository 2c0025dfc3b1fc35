from __future__ import annotations

import logging
import math
from typing import Callable, Dict, Iterable, Iterator, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

Position = Tuple[float, float]
T = TypeVar("T")

def validate_position(position: object) -> Position:
    """Return ``position`` as a float pair or raise ``ValueError``."""
    try:
        x, z = position  # type: ignore[misc]
        x, z = float(x), float(z)
    except (TypeError, ValueError):
        raise ValueError(f"malformed position: {position!r}") from None
    if not (math.isfinite(x) and math.isfinite(z)):
        raise ValueError(f"malformed position: {position!r}")
    return (x, z)

def distance_sq(a: Position, b: Position) -> float:
    return (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2

def distance(a: Position, b: Position) -> float:
    return math.sqrt(distance_sq(a, b))

class SpatialLookup:
    """Side table of id -> live position for entities that move.

    The table does not own the entities.  Whoever removes an entity from the
    world must also remove it here so nearest-neighbour queries never see a
    position for something that no longer exists.
    """

    def __init__(self) -> None:
        self._positions: Dict[int, Position] = {}

    def set(self, entity_id: int, position: Position) -> None:
        self._positions[entity_id] = (position[0], position[1])

    def get(self, entity_id: int) -> Optional[Position]:
        return self._positions.get(entity_id)

    def remove(self, entity_id: int) -> None:
        self._positions.pop(entity_id, None)

    def position_of(self, entity: object) -> Position:
        """Live position of ``entity``, or its stored one if not yet tracked."""
        pos = self._positions.get(getattr(entity, "id"))
        if pos is None:
            return getattr(entity, "position")
        return pos

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._positions))

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._positions

def find_nearest(
    origin: Position,
    candidates: Iterable[T],
    *,
    position_of: Callable[[T], Position] = lambda c: getattr(c, "position"),
    radius: float | None = None,
    predicate: Callable[[T], bool] | None = None,
) -> Tuple[Optional[T], float]:
    """Return the closest candidate to ``origin`` and its distance.

    ``radius`` limits the search; ``predicate`` filters candidates.  When no
    candidate qualifies ``(None, inf)`` is returned.
    """
    best: Optional[T] = None
    best_sq = math.inf
    limit_sq = radius * radius if radius is not None else math.inf
    for cand in candidates:
        if predicate is not None and not predicate(cand):
            continue
        d_sq = distance_sq(origin, position_of(cand))
        if d_sq <= limit_sq and d_sq < best_sq:
            best = cand
            best_sq = d_sq
    return best, math.sqrt(best_sq)

def any_within(
    origin: Position,
    candidates: Iterable[object],
    radius: float,
    *,
    position_of: Callable[[object], Position] = lambda c: getattr(c, "position"),
) -> bool:
    """Return True if any candidate lies strictly within ``radius``."""
    r_sq = radius * radius
    return any(distance_sq(origin, position_of(c)) < r_sq for c in candidates)
