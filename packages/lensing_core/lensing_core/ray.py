from collections import deque
from dataclasses import dataclass, field
from typing import Deque
import math

from .constants import DEFAULT_MAX_DISTANCE, DEFAULT_MAX_TRAIL_LENGTH
from .errors import SpawnRejected
from .integrators import rk4_step
from .models import BlackHole, Point, RayStage


@dataclass(eq=False)
class Ray:
    """A photon moving in the equatorial plane of a Schwarzschild mass.

    Polar coordinates are measured from ``black_hole.position``. ``E`` and
    ``L`` are fixed at launch and only used to check integration accuracy.
    """
    x: float; y: float
    r: float; phi: float
    dr: float; dphi: float
    E: float; L: float
    black_hole: BlackHole
    max_distance: float = DEFAULT_MAX_DISTANCE
    alive: bool = True
    trail: Deque[Point] = field(default_factory=deque)

    @classmethod
    def launch(cls, position: Point, direction: Point, black_hole: BlackHole,
               max_distance: float = DEFAULT_MAX_DISTANCE,
               max_trail_length: int = DEFAULT_MAX_TRAIL_LENGTH) -> "Ray":
        x, y = float(position[0]), float(position[1])
        vx, vy = float(direction[0]), float(direction[1])
        if not all(math.isfinite(v) for v in (x, y, vx, vy)):
            raise SpawnRejected(f"non-finite spawn parameters {position!r} {direction!r}")
        if max_trail_length < 1:
            raise SpawnRejected(f"max_trail_length must be at least 1, got {max_trail_length!r}")
        if not max_distance > 0.0:
            raise SpawnRejected(f"max_distance must be positive, got {max_distance!r}")

        cx, cy = black_hole.position
        r = math.hypot(x - cx, y - cy)
        if r == 0.0:
            raise SpawnRejected("cannot spawn a ray at the centre of the mass")
        rs = black_hole.rs
        if r <= rs:
            raise SpawnRejected(f"spawn radius {r:g} is inside the horizon (rs={rs:g})")

        phi = math.atan2(y - cy, x - cx)
        dr = vx * math.cos(phi) + vy * math.sin(phi)
        dphi = (-vx * math.sin(phi) + vy * math.cos(phi)) / r
        L = r * r * dphi
        f = 1.0 - rs / r
        dt_dlam = math.sqrt((dr*dr)/(f*f) + (r*r*dphi*dphi)/f)
        E = f * dt_dlam

        trail = deque([(x, y)], maxlen=max_trail_length)
        return cls(x, y, r, phi, dr, dphi, E, L, black_hole, max_distance, True, trail)

    @property
    def max_trail_length(self) -> int:
        return self.trail.maxlen

    @property
    def is_captured(self) -> bool:
        return self.r < self.black_hole.rs

    @property
    def is_escaped(self) -> bool:
        return self.r > self.max_distance

    def snapshot(self) -> RayStage:
        return RayStage(self.r, self.phi, self.dr, self.dphi, self.E, self.L, self.black_hole)

    def step(self, dlam: float) -> None:
        # dead rays only fade: one trail point per frame
        if not self.alive or self.is_captured or self.is_escaped:
            if self.trail:
                self.trail.popleft()
            self.alive = False
            return

        if not rk4_step(self, dlam):
            return

        cx, cy = self.black_hole.position
        self.x = cx + self.r * math.cos(self.phi)
        self.y = cy + self.r * math.sin(self.phi)
        # maxlen drops the oldest point
        self.trail.append((self.x, self.y))

    def current_L(self) -> float:
        return self.r * self.r * self.dphi

    def current_E(self) -> float:
        f = 1.0 - self.black_hole.rs / self.r
        return f * math.sqrt((self.dr*self.dr)/(f*f) + (self.r*self.r*self.dphi*self.dphi)/f)
