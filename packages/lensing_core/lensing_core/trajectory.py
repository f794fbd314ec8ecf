from .models import BlackHole
from .ray import Ray


def integrate_trajectory(bh: BlackHole, x: float, y: float, vx: float, vy: float,
                        steps: int = 1000, dlam: float = 1.0,
                        max_distance: float = float("inf")):
    """Trace a single photon without a frame loop and keep its whole path."""
    ray = Ray.launch((x, y), (vx, vy), bh, max_distance=max_distance, max_trail_length=steps + 1)
    taken = 0
    for _ in range(steps):
        if ray.is_captured or ray.is_escaped:
            ray.alive = False
        if not ray.alive:
            break
        ray.step(dlam)
        taken += 1
    return {
        "trail": list(ray.trail),
        "hit_horizon": ray.is_captured,
        "escaped": ray.is_escaped,
        "rs": bh.rs,
        "steps": taken,
    }
