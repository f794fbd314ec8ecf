import math

import pytest

from lensing_core.errors import SpawnRejected
from lensing_core.models import BlackHole, RayStage
from lensing_core.ray import Ray


def test_launch_tangential(bh, rs):
    ray = Ray.launch((10 * rs, 0.0), (0.0, 1.0), bh)
    r = 10 * rs
    f = 1.0 - rs / r
    assert ray.r == r
    assert ray.phi == 0.0
    assert ray.dr == pytest.approx(0.0, abs=1e-15)
    assert ray.dphi == pytest.approx(1.0 / r)
    assert ray.L == pytest.approx(r)
    assert ray.E == pytest.approx(math.sqrt(f))
    assert ray.alive
    assert list(ray.trail) == [(10 * rs, 0.0)]


def test_launch_relative_to_mass_position(rs):
    bh = BlackHole.sagittarius_a()
    shifted = BlackHole(bh.mass, (5 * rs, 0.0))
    a = Ray.launch((10 * rs, 3 * rs), (-1.0, 0.2), bh)
    b = Ray.launch((15 * rs, 3 * rs), (-1.0, 0.2), shifted)
    assert (a.r, a.phi, a.dr, a.dphi, a.E, a.L) == pytest.approx((b.r, b.phi, b.dr, b.dphi, b.E, b.L))


@pytest.mark.parametrize("factor", [0.0, 0.5, 1.0])
def test_launch_inside_or_on_horizon_rejected(bh, rs, factor):
    with pytest.raises(SpawnRejected):
        Ray.launch((factor * rs, 0.0), (1.0, 0.0), bh)


def test_launch_bad_limits_rejected(bh, rs):
    with pytest.raises(SpawnRejected):
        Ray.launch((10 * rs, 0.0), (1.0, 0.0), bh, max_trail_length=0)
    with pytest.raises(SpawnRejected):
        Ray.launch((10 * rs, 0.0), (1.0, 0.0), bh, max_distance=-1.0)
    with pytest.raises(SpawnRejected):
        Ray.launch((math.nan, 0.0), (1.0, 0.0), bh)


def test_snapshot_carries_no_trail(bh, rs):
    ray = Ray.launch((10 * rs, 0.0), (0.0, 1.0), bh)
    stage = ray.snapshot()
    assert isinstance(stage, RayStage)
    assert stage.state == (ray.r, ray.phi, ray.dr, ray.dphi)
    assert not hasattr(stage, "trail")


def test_trail_is_bounded(bh, rs):
    ray = Ray.launch((10 * rs, 0.0), (0.0, 1.0), bh, max_trail_length=3)
    for _ in range(10):
        ray.step(0.01 * rs)
        assert len(ray.trail) <= 3
    assert len(ray.trail) == 3
    assert ray.trail[-1] == (ray.x, ray.y)


def test_dead_ray_only_drains(bh, rs):
    ray = Ray.launch((10 * rs, 0.0), (0.0, 1.0), bh)
    for _ in range(4):
        ray.step(0.01 * rs)
    ray.alive = False
    state = (ray.r, ray.phi, ray.dr, ray.dphi)
    assert len(ray.trail) == 5
    ray.step(0.01 * rs)
    assert (ray.r, ray.phi, ray.dr, ray.dphi) == state
    assert len(ray.trail) == 4
