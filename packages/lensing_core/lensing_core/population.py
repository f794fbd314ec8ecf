from typing import Iterator, List, Optional
import logging

from .constants import DEFAULT_MAX_DISTANCE, DEFAULT_MAX_TRAIL_LENGTH
from .errors import SpawnRejected
from .models import BlackHole, Point
from .ray import Ray

logger = logging.getLogger(__name__)


class RayPopulation:
    """Live and fading rays around one mass, in spawn order."""

    def __init__(self, black_hole: BlackHole,
                 max_distance: float = DEFAULT_MAX_DISTANCE,
                 max_trail_length: int = DEFAULT_MAX_TRAIL_LENGTH):
        self.black_hole = black_hole
        self.max_distance = max_distance
        self.max_trail_length = max_trail_length
        self._rays: List[Ray] = []

    def spawn(self, position: Point, direction: Point,
              max_distance: Optional[float] = None,
              max_trail_length: Optional[int] = None) -> None:
        try:
            ray = Ray.launch(
                position, direction, self.black_hole,
                self.max_distance if max_distance is None else max_distance,
                self.max_trail_length if max_trail_length is None else max_trail_length,
            )
        except SpawnRejected as exc:
            logger.info("spawn rejected at %r: %s", position, exc)
            raise
        self._rays.append(ray)

    def advance(self, dlam: float) -> None:
        for ray in self._rays:
            ray.step(dlam)
        # dead rays stay until their trail has drained
        self._rays = [ray for ray in self._rays if ray.alive or ray.trail]

    def count(self) -> int:
        return len(self._rays)

    def alive_count(self) -> int:
        return sum(1 for ray in self._rays if ray.alive)

    def ray_at(self, i: int) -> Ray:
        return self._rays[i]

    def clear(self) -> None:
        self._rays.clear()

    def __len__(self) -> int:
        return len(self._rays)

    def __iter__(self) -> Iterator[Ray]:
        return iter(self._rays)
