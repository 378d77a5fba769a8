"""
Geometry utilities for panel circle layouts.

Contains:
- BoundaryGeometry: rectangular panel boundary, disk containment, bounding boxes
- clamp_angle, grid_count: shared lattice helpers
"""

import math
import numpy as np
from typing import Optional

from .config import (
    BoundingBox,
    Centers,
    MAX_LATTICE_ANGLE,
    MIN_LATTICE_ANGLE,
    VECTORIZED_THRESHOLD,
)


def clamp_angle(angle: float) -> float:
    """Clamp a lattice angle (degrees) to the valid packing range."""
    return min(MAX_LATTICE_ANGLE, max(MIN_LATTICE_ANGLE, angle))


def grid_count(span: float, pitch: float) -> int:
    """
    Number of lattice sites at `pitch` intervals whose first site sits at 0
    and whose last site does not pass `span`. Never negative.
    """
    if pitch <= 0 or span < 0:
        return 0
    return max(0, math.floor(span / pitch) + 1)


class BoundaryGeometry:
    """Handles geometric calculations for a rectangular panel with origin top-left."""

    def __init__(self, width: float, height: float, epsilon: float = 1e-9):
        self.width = float(width)
        self.height = float(height)
        self.epsilon = epsilon
        self.min_coords = np.array([0.0, 0.0])
        self.max_coords = np.array([self.width, self.height])

    def contains_points(self, points: Centers) -> np.ndarray:
        """Vectorized inside test for multiple points (edges count as inside)."""
        points = np.asarray(points, dtype=float).reshape(-1, 2)
        return np.all(
            (points >= self.min_coords - self.epsilon) & (points <= self.max_coords + self.epsilon),
            axis=1,
        )

    def distances_to_boundary_batch(self, points: Centers) -> np.ndarray:
        """Distance from each point to the nearest panel edge."""
        points = np.asarray(points, dtype=float).reshape(-1, 2)
        if len(points) == 0:
            return np.array([])
        to_min = points - self.min_coords
        to_max = self.max_coords - points
        return np.min(np.hstack([to_min, to_max]), axis=1)

    def contains_disks(self, centers: Centers, radius: float, tolerance: Optional[float] = None) -> np.ndarray:
        """True for each disk lying entirely inside the panel, within `tolerance` (default epsilon)."""
        if tolerance is None:
            tolerance = self.epsilon
        distances = self.distances_to_boundary_batch(centers)
        return distances >= radius - tolerance

    @staticmethod
    def bounding_box(centers: Centers, radius: float) -> BoundingBox:
        """Minimal axis-aligned box enclosing every disk."""
        centers = np.asarray(centers, dtype=float).reshape(-1, 2)
        if len(centers) == 0:
            return (0.0, 0.0, 0.0, 0.0)
        min_x, min_y = np.min(centers, axis=0) - radius
        max_x, max_y = np.max(centers, axis=0) + radius
        return (float(min_x), float(min_y), float(max_x), float(max_y))

    @staticmethod
    def min_center_distance(centers: Centers) -> float:
        """Smallest distance between any two centers, inf for fewer than two."""
        centers = np.asarray(centers, dtype=float).reshape(-1, 2)
        n = len(centers)
        if n < 2:
            return float('inf')

        if n < VECTORIZED_THRESHOLD:
            dists = np.linalg.norm(
                centers[:, np.newaxis, :] - centers[np.newaxis, :, :],
                axis=2
            )
            np.fill_diagonal(dists, np.inf)
            return float(np.min(dists))

        best = float('inf')
        for i in range(n - 1):
            distances = np.linalg.norm(centers[i + 1:] - centers[i], axis=1)
            best = min(best, float(np.min(distances)))
        return best
