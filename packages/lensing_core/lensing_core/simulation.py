from typing import List, Optional, Tuple
import logging
import math

from .constants import (M_PI, DEFAULT_DLAMBDA, DEFAULT_FAN_RAYS, DEFAULT_MAX_DISTANCE,
                        DEFAULT_MAX_POINTS, DEFAULT_MAX_TRAIL_LENGTH, WORLD_HEIGHT, WORLD_WIDTH)
from .errors import PreconditionError, SpawnRejected
from .models import BlackHole, Point
from .population import RayPopulation
from .ray import Ray
from .settings import Settings
from .trail_buffer import TrailBuffer, TrailBufferAssembler

logger = logging.getLogger(__name__)

PendingSpawn = Tuple[Point, Point, Optional[float], Optional[int]]


class Simulation:
    """One lensing scene: a mass, its rays and the per-frame driver calls.

    Spawns coming from input handlers may be applied straight away with
    :meth:`spawn` or queued with :meth:`queue_spawn`; queued spawns are
    applied at the start of the next :meth:`advance`.
    """

    def __init__(self, black_hole: BlackHole,
                 dlambda: float = DEFAULT_DLAMBDA,
                 max_distance: float = DEFAULT_MAX_DISTANCE,
                 max_trail_length: int = DEFAULT_MAX_TRAIL_LENGTH,
                 max_points: int = DEFAULT_MAX_POINTS,
                 fan_rays: int = DEFAULT_FAN_RAYS):
        self.black_hole = black_hole
        self.population = RayPopulation(black_hole, max_distance, max_trail_length)
        self.assembler = TrailBufferAssembler(self.population)
        self.dlambda = dlambda
        self.max_points = max_points
        self.fan_rays = fan_rays
        self.speed = 1.0
        self._pending: List[PendingSpawn] = []

    @classmethod
    def from_settings(cls, settings: Settings) -> "Simulation":
        sim = cls(BlackHole(settings.mass), settings.dlambda, settings.max_distance,
                  settings.max_trail_length, settings.max_points, settings.fan_rays)
        if settings.seed_scene:
            sim.seed_default_scene()
        return sim

    def spawn(self, position: Point, direction: Point,
              max_distance: Optional[float] = None,
              max_trail_length: Optional[int] = None) -> None:
        self.population.spawn(position, direction, max_distance, max_trail_length)

    def spawn_fan(self, position: Point, num_rays: Optional[int] = None) -> int:
        """Emit rays evenly spread over the full circle from one point."""
        n = self.fan_rays if num_rays is None else num_rays
        if n < 1:
            raise SpawnRejected(f"num_rays must be at least 1, got {n!r}")
        # validate once so a bad position adds nothing
        Ray.launch(position, (1.0, 0.0), self.black_hole, max_trail_length=1)
        for i in range(n):
            angle = 2.0 * M_PI / n * i
            self.spawn(position, (math.cos(angle), math.sin(angle)))
        return n

    def queue_spawn(self, position: Point, direction: Point,
                    max_distance: Optional[float] = None,
                    max_trail_length: Optional[int] = None) -> None:
        self._pending.append((position, direction, max_distance, max_trail_length))

    def flush_spawns(self) -> int:
        pending, self._pending = self._pending, []
        applied = 0
        for position, direction, max_distance, max_trail_length in pending:
            try:
                self.spawn(position, direction, max_distance, max_trail_length)
            except SpawnRejected:
                # already logged by the population
                continue
            applied += 1
        return applied

    def seed_default_scene(self) -> None:
        w, h = WORLD_WIDTH, WORLD_HEIGHT
        self.spawn((-w / 2, h / 2), (1.0, -0.10484016))
        self.spawn((w / 2, h / 2), (-1.0, -0.10484016))
        self.spawn((-w, h), (1.0, -0.3))
        self.spawn((w, h), (-1.0, -0.3))

    def set_speed(self, speed: float) -> None:
        if not speed > 0.0 or not math.isfinite(speed):
            raise PreconditionError(f"speed must be positive, got {speed!r}")
        self.speed = speed

    def reset(self) -> None:
        self.population.clear()
        self._pending.clear()
        logger.info("simulation reset")

    def advance(self, dlam: Optional[float] = None) -> None:
        self.flush_spawns()
        self.population.advance(self.dlambda * self.speed if dlam is None else dlam)

    def build(self, max_points: Optional[int] = None) -> TrailBuffer:
        return self.assembler.build(self.max_points if max_points is None else max_points)

    def frame(self, dlam: Optional[float] = None, max_points: Optional[int] = None) -> TrailBuffer:
        self.advance(dlam)
        return self.build(max_points)

    def schwarzschild_radius(self) -> float:
        return self.black_hole.rs

    def ray_count(self) -> int:
        return self.population.count()

    def pending_count(self) -> int:
        return len(self._pending)

    @staticmethod
    def is_alive(ray: Ray) -> bool:
        return ray.alive
