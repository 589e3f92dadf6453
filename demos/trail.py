"""Breadcrumb trails left behind moving boids."""

import numpy as np
from typing import Optional


class BreadcrumbTrail:
    """
    Fixed-size ring buffer of dropped positions.

    A crumb is dropped every `interval` seconds; once the buffer is full the
    oldest crumb is overwritten.
    """

    def __init__(self, capacity: int, interval: float, first_drop: Optional[float] = None):
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        self.capacity = capacity
        self.interval = interval
        self._crumbs = np.zeros((capacity, 2), dtype=np.float64)
        self._dropped = 0
        self._next = 0
        self._remaining = interval if first_drop is None else first_drop

    def __len__(self):
        return self._dropped

    def drop(self, position: np.ndarray):
        """Drop a crumb now, regardless of the timer."""
        if self.capacity == 0:
            return
        self._crumbs[self._next] = position
        self._next = (self._next + 1) % self.capacity
        self._dropped = min(self._dropped + 1, self.capacity)

    def update(self, position: np.ndarray, dt: float) -> bool:
        """Advance the drop timer; returns True when a crumb was dropped."""
        self._remaining -= dt
        if self._remaining > 0:
            return False
        self._remaining = self.interval
        self.drop(position)
        return True

    @property
    def points(self) -> np.ndarray:
        """Dropped crumbs, oldest first."""
        if self._dropped < self.capacity:
            return self._crumbs[:self._dropped].copy()
        return np.roll(self._crumbs, -self._next, axis=0)

    def clear(self):
        self._dropped = 0
        self._next = 0
        self._remaining = self.interval
