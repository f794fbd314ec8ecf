import logging

from celery import Celery
from lensing_core.constants import DEFAULT_DLAMBDA, DEFAULT_FAN_RAYS, DEFAULT_MAX_POINTS
from lensing_core.models import BlackHole
from lensing_core.settings import get_settings
from lensing_core.simulation import Simulation
from lensing_core.trajectory import integrate_trajectory

settings = get_settings()
logger = logging.getLogger(__name__)

celery = Celery("bh", broker=settings.celery_broker_url, backend=settings.celery_backend_url)

@celery.task
def integrate_task(mass, x, y, vx, vy, steps=50000, dlam=1.0):
    bh = BlackHole(mass=mass)
    return integrate_trajectory(bh, x, y, vx, vy, steps, dlam)

@celery.task
def render_frames_task(mass, x, y, num_rays=DEFAULT_FAN_RAYS, frames=600,
                       dlam=DEFAULT_DLAMBDA, max_points=DEFAULT_MAX_POINTS):
    """Run a headless fan of rays and report what each frame would draw."""
    sim = Simulation(BlackHole(mass=mass), dlambda=dlam, max_points=max_points)
    sim.spawn_fan((x, y), num_rays)
    point_counts, ray_counts = [], []
    for _ in range(frames):
        buf = sim.frame()
        point_counts.append(buf.count)
        ray_counts.append(sim.ray_count())
        if not sim.ray_count():
            break
    logger.info("rendered %d frames for %d rays", len(point_counts), num_rays)
    return {
        "rs": sim.schwarzschild_radius(),
        "frames": len(point_counts),
        "point_counts": point_counts,
        "ray_counts": ray_counts,
    }
