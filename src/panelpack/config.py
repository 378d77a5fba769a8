"""
Configuration and type definitions for panel circle layouts.
"""

import math
import numbers
import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple
from enum import Enum

# Type aliases
Centers = np.ndarray  # shape (N, 2)
BoundingBox = Tuple[float, float, float, float]  # (min_x, min_y, max_x, max_y)

# Lattice angle limits (degrees). Below 30 rows two apart collide,
# above 60 neighbours in the same row collide.
MIN_LATTICE_ANGLE = 30.0
MAX_LATTICE_ANGLE = 60.0
DEFAULT_LATTICE_ANGLE = 60.0

# Row counts explored either side of the 60 degree estimate
OPTIMIZER_ROW_WINDOW = 2

# Relative slack when checking that forced rows fit the panel height
FORCED_ROWS_TOLERANCE = 1e-9

# Threshold for switching between vectorized and row-by-row distance checks
VECTORIZED_THRESHOLD = 750

# Default panel (mm)
DEFAULT_DIAMETER = 33.0
DEFAULT_CLEARANCE = 1.0
DEFAULT_WIDTH = 600.0
DEFAULT_HEIGHT = 120.0

# Visualization plot parameters
UNIT_LABEL = "mm"
PLOT_MARGIN_FACTOR = 0.12
FILL_OPACITY = 0.15
CIRCLE_COLOR = "#3b82f6"
BOUNDARY_COLOR = "#94a3b8"
LABEL_COLOR = "#64748b"


class ConfigurationError(ValueError):
    """Raised when packing inputs or options cannot describe a layout."""


class PackingPattern(Enum):
    """Available lattice patterns."""
    RECTANGULAR = "rectangular"
    TRIANGULAR = "triangular"


@dataclass(frozen=True)
class PackingInputs:
    """
    Panel and circle dimensions, all in the same length unit.

        diameter: Circle diameter
        clearance: Minimum gap between the surfaces of adjacent circles
        width: Panel width
        height: Panel height
    """
    diameter: float = DEFAULT_DIAMETER
    clearance: float = DEFAULT_CLEARANCE
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT

    @property
    def spacing(self) -> float:
        """Minimum center-to-center distance."""
        return self.diameter + self.clearance

    @property
    def radius(self) -> float:
        return self.diameter / 2

    def validate(self) -> "PackingInputs":
        for name in ("diameter", "clearance", "width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
                raise ConfigurationError(f"{name} must be a finite number, got {value!r}")
        if self.diameter <= 0:
            raise ConfigurationError(f"diameter must be positive, got {self.diameter}")
        if self.clearance < 0:
            raise ConfigurationError(f"clearance must not be negative, got {self.clearance}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"panel dimensions must be positive, got {self.width} x {self.height}"
            )
        return self


@dataclass
class PackingConfig:
    """
    Layout options.

    Pattern selection:
        pattern: Rectangular grid or triangular lattice
        spread: Stretch the layout so the outer circles touch the panel edges

    Triangular lattice:
        angle: Lattice angle in degrees, clamped to [30, 60]
        optimize_angle: Search nearby row counts for the angle with most circles
        forced_rows: Use exactly this many rows instead of as many as fit

    Output:
        verbose: Print progress while packing
    """
    pattern: PackingPattern = PackingPattern.TRIANGULAR
    spread: bool = False

    angle: float = DEFAULT_LATTICE_ANGLE
    optimize_angle: bool = False
    forced_rows: Optional[int] = None

    verbose: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.pattern, PackingPattern):
            try:
                self.pattern = PackingPattern(self.pattern)
            except ValueError as exc:
                raise ConfigurationError(f"unknown pattern {self.pattern!r}") from exc
        validate_forced_rows(self.forced_rows)
        if self.optimize_angle and self.pattern is PackingPattern.RECTANGULAR:
            raise ConfigurationError("optimize_angle applies to the triangular pattern only")
        if self.optimize_angle and self.forced_rows is not None:
            raise ConfigurationError("optimize_angle chooses its own row count, drop forced_rows")


def validate_forced_rows(forced_rows: Optional[int]) -> None:
    if forced_rows is None:
        return
    if isinstance(forced_rows, bool) or not isinstance(forced_rows, (int, np.integer)) or forced_rows < 0:
        raise ConfigurationError(f"forced_rows must be a non-negative integer, got {forced_rows!r}")
