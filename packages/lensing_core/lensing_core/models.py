from dataclasses import dataclass, field, replace
from typing import Tuple
import math

from .constants import SGR_A_MASS, schwarzschild_radius
from .errors import PreconditionError

Point = Tuple[float, float]
State = Tuple[float, float, float, float]


@dataclass(frozen=True)
class BlackHole:
    mass: float  # kg
    position: Point = (0.0, 0.0)
    rs: float = field(init=False)

    def __post_init__(self):
        if not math.isfinite(self.mass) or self.mass <= 0.0:
            raise PreconditionError(f"mass must be positive, got {self.mass!r}")
        object.__setattr__(self, "position", (float(self.position[0]), float(self.position[1])))
        object.__setattr__(self, "rs", schwarzschild_radius(self.mass))

    @classmethod
    def sagittarius_a(cls) -> "BlackHole":
        return cls(SGR_A_MASS)


@dataclass(frozen=True)
class RayStage:
    """Scalar photon state used for intermediate Runge-Kutta evaluations.

    Carries the polar state and the conserved quantities only, never the
    trail, so building one per stage is O(1).
    """
    r: float; phi: float
    dr: float; dphi: float
    E: float; L: float
    black_hole: BlackHole

    @property
    def state(self) -> State:
        return (self.r, self.phi, self.dr, self.dphi)

    def advanced(self, k: State, h: float) -> "RayStage":
        r, phi, dr, dphi = self.state
        return replace(self, r=r + h*k[0], phi=phi + h*k[1], dr=dr + h*k[2], dphi=dphi + h*k[3])
