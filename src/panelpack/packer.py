import math
import numpy as np
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .config import (
    Centers,
    FORCED_ROWS_TOLERANCE,
    DEFAULT_LATTICE_ANGLE,
    MAX_LATTICE_ANGLE,
    MIN_LATTICE_ANGLE,
    OPTIMIZER_ROW_WINDOW,
    UNIT_LABEL,
    ConfigurationError,
    PackingConfig,
    PackingInputs,
    PackingPattern,
    validate_forced_rows,
)
from .geometry import BoundaryGeometry, clamp_angle, grid_count


@dataclass(frozen=True)
class CirclePosition:
    """Circle center in panel coordinates (origin top-left, y down)."""
    x: float
    y: float


@dataclass(frozen=True)
class PackingResult:
    """
    A finished layout. Fields that only one pattern produces are None for the other:
    vertical_clearance for rectangular, diagonal_clearance/angle/even_row_count/
    odd_row_count for triangular.
    """
    circles: Tuple[CirclePosition, ...]
    actual_width: float
    actual_height: float
    horizontal_clearance: float
    pattern: PackingPattern
    num_rows: int
    circles_per_row: int
    spread: bool = False
    vertical_clearance: Optional[float] = None
    diagonal_clearance: Optional[float] = None
    angle: Optional[float] = None
    even_row_count: Optional[int] = None
    odd_row_count: Optional[int] = None
    count: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "count", len(self.circles))

    @property
    def centers(self) -> Centers:
        if not self.circles:
            return np.empty((0, 2))
        return np.array([(c.x, c.y) for c in self.circles], dtype=float)

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping for renderers and JSON output."""
        data: Dict[str, Any] = {
            "circles": [{"x": c.x, "y": c.y} for c in self.circles],
            "actual_width": self.actual_width,
            "actual_height": self.actual_height,
            "horizontal_clearance": self.horizontal_clearance,
            "count": self.count,
            "pattern": self.pattern.value,
            "spread": self.spread,
            "num_rows": self.num_rows,
            "circles_per_row": self.circles_per_row,
        }
        optional = {
            "vertical_clearance": self.vertical_clearance,
            "diagonal_clearance": self.diagonal_clearance,
            "angle": self.angle,
            "even_row_count": self.even_row_count,
            "odd_row_count": self.odd_row_count,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data

    def summary(self, unit: str = UNIT_LABEL) -> str:
        lines = [
            f"Number of circles: {self.count}",
            f"Number of rows: {self.num_rows}",
        ]
        if self.pattern is PackingPattern.TRIANGULAR:
            lines += [
                f"Circles per row: {self.even_row_count} (even rows) / {self.odd_row_count} (odd rows)",
                f"Horizontal clearance: {self.horizontal_clearance:.2f} {unit}",
                f"Diagonal clearance: {self.diagonal_clearance:.2f} {unit}",
                f"Pattern: {self.pattern.value} ({self.angle:.1f}°)",
            ]
        else:
            lines += [
                f"Circles per row: {self.circles_per_row}",
                f"Horizontal clearance: {self.horizontal_clearance:.2f} {unit}",
                f"Vertical clearance: {self.vertical_clearance:.2f} {unit}",
                f"Pattern: {self.pattern.value}",
            ]
        lines += [
            f"Bounding box width: {self.actual_width:.2f} {unit}",
            f"Bounding box height: {self.actual_height:.2f} {unit}",
        ]
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.summary()


class CirclePacker:
    """Lays out equal circles on a regular lattice inside a rectangular panel."""

    def __init__(self, inputs: PackingInputs, config: Optional[PackingConfig] = None):
        self.inputs = inputs.validate()
        self.config = config or PackingConfig()
        self.geometry = BoundaryGeometry(inputs.width, inputs.height)

    def _to_positions(self, points: List[List[float]]) -> Tuple[CirclePosition, ...]:
        return tuple(CirclePosition(float(x), float(y)) for x, y in points)

    # =========================================================================
    # Rectangular Grid Packing
    # =========================================================================

    def pack_rectangular(self, spread: bool = False) -> PackingResult:
        """
        Square grid at the minimum spacing. With `spread`, the pitch on each axis
        is stretched so the outer circles touch the panel edges.
        """
        d = self.inputs.diameter
        width, height = self.inputs.width, self.inputs.height
        spacing = self.inputs.spacing

        circles_x = grid_count(width - d, spacing)
        circles_y = grid_count(height - d, spacing)

        if spread:
            h_spacing = (width - d) / (circles_x - 1) if circles_x > 1 else d / 2
            v_spacing = (height - d) / (circles_y - 1) if circles_y > 1 else d / 2
            actual_width, actual_height = width, height
        else:
            h_spacing = v_spacing = spacing
            if circles_x * circles_y == 0:
                actual_width = actual_height = 0.0
            else:
                actual_width = (circles_x - 1) * spacing + d
                actual_height = (circles_y - 1) * spacing + d

        if self.config.verbose:
            print(f"Rectangular grid: {circles_x} x {circles_y} (pitch {h_spacing:.3f} x {v_spacing:.3f})")

        points = []
        for y in range(circles_y):
            for x in range(circles_x):
                points.append([x * h_spacing + d / 2, y * v_spacing + d / 2])

        return PackingResult(
            circles=self._to_positions(points),
            actual_width=float(actual_width),
            actual_height=float(actual_height),
            horizontal_clearance=h_spacing - d,
            vertical_clearance=v_spacing - d,
            pattern=PackingPattern.RECTANGULAR,
            spread=spread,
            num_rows=circles_y,
            circles_per_row=circles_x,
        )

    # =========================================================================
    # Triangular Lattice Packing
    # =========================================================================

    def pack_triangular(
        self,
        angle: float = DEFAULT_LATTICE_ANGLE,
        spread: bool = False,
        forced_rows: Optional[int] = None,
    ) -> PackingResult:
        """
        Staggered rows: odd rows are shifted by half the horizontal pitch.

        The lattice angle sets row height (D sin a) and in-row pitch (2 D cos a),
        where D is diameter plus clearance. At 60 degrees this is hexagonal close
        packing. Angles outside [30, 60] are clamped.
        """
        validate_forced_rows(forced_rows)
        d = self.inputs.diameter
        width, height = self.inputs.width, self.inputs.height
        spacing = self.inputs.spacing

        lattice_angle = clamp_angle(angle)
        theta = math.radians(lattice_angle)
        row_height = spacing * math.sin(theta)
        horiz_spacing = 2 * spacing * math.cos(theta)

        if forced_rows is not None:
            num_rows = int(forced_rows)
            # Forced rows may not be closer than the lattice row height
            required_height = (num_rows - 1) * row_height + d if num_rows > 0 else 0.0
            if required_height > height + FORCED_ROWS_TOLERANCE * height:
                raise ConfigurationError(
                    f"{num_rows} rows at {lattice_angle:.2f} deg need a panel height of "
                    f"{required_height:.3f}, got {height}"
                )
        else:
            num_rows = grid_count(height - d, row_height)

        even_count = grid_count(width - d, horiz_spacing)
        # Odd rows never hold more circles than even rows
        odd_count = min(grid_count(width - horiz_spacing / 2 - d, horiz_spacing), even_count)

        actual_row_height = row_height
        actual_horiz_spacing = horiz_spacing

        if spread:
            actual_row_height = (height - d) / (num_rows - 1) if num_rows > 1 else d / 2

            even_span = (even_count - 1) * horiz_spacing
            odd_span = (odd_count - 1) * horiz_spacing + horiz_spacing / 2
            target_width = even_span if num_rows == 1 else max(even_span, odd_span)
            if target_width > 0:
                actual_horiz_spacing = horiz_spacing * (width - d) / target_width

        if self.config.verbose:
            print(
                f"Triangular lattice at {lattice_angle:.2f} deg: {num_rows} rows, "
                f"{even_count} even / {odd_count} odd per row"
            )

        points = []
        for row in range(num_rows):
            is_odd = row % 2 == 1
            circles_this_row = odd_count if is_odd else even_count
            x_offset = actual_horiz_spacing / 2 if is_odd else 0.0
            for col in range(circles_this_row):
                points.append([
                    col * actual_horiz_spacing + x_offset + d / 2,
                    row * actual_row_height + d / 2,
                ])

        if spread:
            actual_width, actual_height = width, height
            reported_angle = math.degrees(math.atan2(actual_row_height, actual_horiz_spacing / 2))
        else:
            min_x, min_y, max_x, max_y = self.geometry.bounding_box(points, d / 2)
            actual_width, actual_height = max_x - min_x, max_y - min_y
            reported_angle = lattice_angle

        return PackingResult(
            circles=self._to_positions(points),
            actual_width=float(actual_width),
            actual_height=float(actual_height),
            horizontal_clearance=actual_horiz_spacing - d,
            diagonal_clearance=math.hypot(actual_horiz_spacing / 2, actual_row_height) - d,
            pattern=PackingPattern.TRIANGULAR,
            spread=spread,
            angle=reported_angle,
            num_rows=num_rows,
            circles_per_row=even_count,
            even_row_count=even_count,
            odd_row_count=odd_count,
        )

    # =========================================================================
    # Angle Optimization
    # =========================================================================

    def optimize_angle(self) -> PackingResult:
        """
        Spread triangular layout with the most circles among a few row counts.

        Row counts within OPTIMIZER_ROW_WINDOW of the 60 degree estimate are tried;
        each one fixes the angle whose rows exactly span the panel height. The
        plain 60 degree spread layout wins ties.
        """
        d = self.inputs.diameter
        spacing = self.inputs.spacing
        usable_height = self.inputs.height - d

        best = self.pack_triangular(DEFAULT_LATTICE_ANGLE, spread=True)
        initial_rows = grid_count(usable_height, spacing * math.sin(math.radians(DEFAULT_LATTICE_ANGLE)))

        first = max(2, initial_rows - OPTIMIZER_ROW_WINDOW)
        for target_rows in range(first, initial_rows + OPTIMIZER_ROW_WINDOW + 1):
            sin_theta = usable_height / (spacing * (target_rows - 1))
            if sin_theta > 1:
                continue

            angle = math.degrees(math.asin(sin_theta))
            if angle < MIN_LATTICE_ANGLE or angle > MAX_LATTICE_ANGLE:
                continue

            result = self.pack_triangular(angle, spread=True, forced_rows=target_rows)
            if self.config.verbose:
                print(f"  {target_rows} rows at {angle:.2f} deg -> {result.count} circles")
            if result.count > best.count:
                best = result

        if self.config.verbose:
            print(f"Best: {best.count} circles in {best.num_rows} rows at {best.angle:.2f} deg")

        return best

    # =========================================================================
    # Main Entry Point
    # =========================================================================

    def pack(self) -> PackingResult:
        """
        Lay out circles as configured.

        Strategy selection:
        1. pattern=RECTANGULAR: square grid, tight or spread
        2. pattern=TRIANGULAR with optimize_angle: best spread lattice angle
        3. pattern=TRIANGULAR: lattice at config.angle, tight or spread
        """
        config = self.config
        if config.pattern is PackingPattern.RECTANGULAR:
            return self.pack_rectangular(config.spread)

        if config.optimize_angle:
            return self.optimize_angle()

        return self.pack_triangular(config.angle, config.spread, config.forced_rows)
