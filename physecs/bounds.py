"""Axis-aligned bounding boxes."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass
class Bounds:
    """An axis-aligned box given by its lower and upper corners."""

    min: np.ndarray = field(default_factory=lambda: np.zeros(3))
    max: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        self.min = np.array(self.min, dtype=float)
        self.max = np.array(self.max, dtype=float)

    def center(self) -> np.ndarray:
        return (self.min + self.max) / 2.0

    def half_extents(self) -> np.ndarray:
        return self.max - self.center()

    def expand(self, expansion) -> None:
        """Stretch the box along ``expansion``: negative parts move the lower corner."""
        e = np.asarray(expansion, dtype=float)
        self.min = self.min + np.where(e < 0, e, 0.0)
        self.max = self.max + np.where(e < 0, 0.0, e)

    def add_margin(self, margin) -> None:
        m = np.asarray(margin, dtype=float)
        self.max = self.max + m
        self.min = self.min - m

    def area(self) -> float:
        """Surface area of the box."""
        dx, dy, dz = self.max - self.min
        return float(2.0 * (dx * dy + dy * dz + dz * dx))