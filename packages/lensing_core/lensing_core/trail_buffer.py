"""Flatten ray trails into one line-strip vertex buffer.

Strips are separated by a restart pair so the renderer can issue a single
draw call with primitive restart. The physics modules never import this one.
"""
from typing import Iterable, List, NamedTuple
import logging

import numpy as np

from .models import Point
from .ray import Ray

logger = logging.getLogger(__name__)

RESTART_SENTINEL = float(np.finfo(np.float32).max)


class TrailBuffer(NamedTuple):
    points: np.ndarray  # flat float32 [x0, y0, x1, y1, ...]
    count: int          # number of (x, y) pairs written

    def strips(self) -> List[List[Point]]:
        out: List[List[Point]] = []
        current: List[Point] = []
        for x, y in self.points.reshape(-1, 2).tolist():
            if x == RESTART_SENTINEL and y == RESTART_SENTINEL:
                out.append(current)
                current = []
            else:
                current.append((x, y))
        if current:
            out.append(current)
        return out


class TrailBufferAssembler:
    def __init__(self, rays: Iterable[Ray]):
        self.rays = rays

    def build(self, max_points: int) -> TrailBuffer:
        if max_points < 0:
            raise ValueError(f"max_points must be non-negative, got {max_points!r}")
        trails = [ray.trail for ray in self.rays if len(ray.trail) >= 2]
        available = sum(len(trail) + 1 for trail in trails)
        # sized by content, the cap only truncates
        size = min(max_points, available)
        data = np.empty(size * 2, dtype=np.float32)
        n = 0
        for trail in trails:
            for x, y in trail:
                if n >= size:
                    break
                data[2*n] = x
                data[2*n + 1] = y
                n += 1
            if n >= size:
                break
            data[2*n] = RESTART_SENTINEL
            data[2*n + 1] = RESTART_SENTINEL
            n += 1
        if n < available:
            logger.debug("trail buffer truncated: %d of %d points written", n, available)
        return TrailBuffer(data, n)
