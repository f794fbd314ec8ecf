from .models import RayStage, State
import logging
import math

logger = logging.getLogger(__name__)


def geodesic_rhs(stage: RayStage) -> State:
    rs = stage.black_hole.rs
    r, dr, dphi, E = stage.r, stage.dr, stage.dphi, stage.E
    f = 1.0 - rs / r
    dt_dlam = E / f
    rhs0 = dr
    rhs1 = dphi
    rhs2 = -(rs / (2.0 * r * r)) * f * (dt_dlam * dt_dlam) + (rs / (2.0 * r * r * f)) * (dr * dr) + (r - rs) * (dphi * dphi)
    rhs3 = -2.0 * dr * dphi / r
    return rhs0, rhs1, rhs2, rhs3


def rk4_stages(stage: RayStage, dlam: float) -> State:
    """Classic RK4 increment of (r, phi, dr, dphi) over one affine step."""
    k1 = geodesic_rhs(stage)
    k2 = geodesic_rhs(stage.advanced(k1, dlam/2.0))
    k3 = geodesic_rhs(stage.advanced(k2, dlam/2.0))
    k4 = geodesic_rhs(stage.advanced(k3, dlam))
    y0 = stage.state
    return tuple(y0[i] + (dlam / 6.0) * (k1[i] + 2*k2[i] + 2*k3[i] + k4[i]) for i in range(4))


def rk4_step(ray, dlam: float) -> bool:
    """Advance ``ray`` in place by ``dlam``.

    A non-finite result (or a stage landing exactly on r == rs or r == 0)
    kills the ray and leaves its state untouched. Returns True when the new
    state was committed.
    """
    try:
        y1 = rk4_stages(ray.snapshot(), dlam)
    except ZeroDivisionError:
        y1 = (math.nan,) * 4
    if not all(math.isfinite(v) for v in y1):
        logger.debug("non-finite geodesic step at r=%g (rs=%g), ray stopped", ray.r, ray.black_hole.rs)
        ray.alive = False
        return False
    ray.r, ray.phi, ray.dr, ray.dphi = y1
    return True
