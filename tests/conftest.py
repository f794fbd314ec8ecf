import pytest

from lensing_core.models import BlackHole


@pytest.fixture
def bh():
    return BlackHole.sagittarius_a()


@pytest.fixture
def rs(bh):
    return bh.rs
