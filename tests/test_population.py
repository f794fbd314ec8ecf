import pytest

from lensing_core.errors import SpawnRejected
from lensing_core.population import RayPopulation


def test_spawn_appends_in_order(bh, rs):
    pop = RayPopulation(bh)
    pop.spawn((10 * rs, 0.0), (0.0, 1.0))
    pop.spawn((0.0, 10 * rs), (1.0, 0.0), max_distance=50 * rs, max_trail_length=7)
    assert pop.count() == len(pop) == 2
    assert pop.ray_at(0).phi == 0.0
    assert pop.ray_at(1).max_distance == 50 * rs
    assert pop.ray_at(1).max_trail_length == 7
    assert [r.r for r in pop] == [10 * rs, 10 * rs]


@pytest.mark.parametrize("position", [(0.0, 0.0), (0.5, 0.0), "horizon"])
def test_rejected_spawn_adds_nothing(bh, rs, position):
    if position == "horizon":
        position = (0.0, rs)
    pop = RayPopulation(bh)
    with pytest.raises(SpawnRejected):
        pop.spawn(position, (1.0, 0.0))
    assert pop.count() == 0


def test_advance_keeps_dead_rays_until_drained(bh, rs):
    pop = RayPopulation(bh, max_distance=100 * rs, max_trail_length=4)
    pop.spawn((10 * rs, 0.0), (0.0, 1.0))
    pop.spawn((20 * rs, 0.0), (0.0, 1.0))
    for _ in range(5):
        pop.advance(1e8)
    assert pop.alive_count() == 2
    pop.ray_at(0).alive = False
    for expected in (3, 2, 1):
        pop.advance(1e8)
        assert len(pop.ray_at(0).trail) == expected
        assert pop.count() == 2
    pop.advance(1e8)
    assert pop.count() == 1
    assert pop.ray_at(0).r == pytest.approx(20 * rs, rel=1e-3)


def test_one_bad_ray_does_not_stop_the_rest(bh, rs):
    pop = RayPopulation(bh)
    pop.spawn((10 * rs, 0.0), (0.0, 1.0))
    pop.spawn((12 * rs, 0.0), (0.0, 1.0))
    pop.ray_at(0).dphi = float("inf")
    pop.advance(1e8)
    assert not pop.ray_at(0).alive
    assert pop.ray_at(1).alive
    assert len(pop.ray_at(1).trail) == 2


def test_clear(bh, rs):
    pop = RayPopulation(bh)
    pop.spawn((10 * rs, 0.0), (0.0, 1.0))
    pop.clear()
    assert pop.count() == 0
