"""
panelpack - Regular circle layouts for rectangular panels.

Usage:
    from panelpack import CirclePacker, PackingInputs, PackingConfig, PackingPattern

    inputs = PackingInputs(diameter=33, clearance=1, width=600, height=120)

    # Hexagonal close packing, tight
    result = CirclePacker(inputs).pack()

    # Rectangular grid stretched to the panel edges
    config = PackingConfig(pattern=PackingPattern.RECTANGULAR, spread=True)
    result = CirclePacker(inputs, config).pack()

    # Lattice angle with the most circles
    config = PackingConfig(optimize_angle=True, verbose=True)
    result = CirclePacker(inputs, config).pack()
    print(result)

Packing modes:
    - Rectangular: square grid at diameter + clearance pitch
    - Triangular: staggered rows at a lattice angle in [30, 60] degrees
    - Optimized: triangular, spread, angle chosen to maximise circle count
    Each can be tight (minimal bounding box) or spread (touching the panel edges).
"""

from .config import ConfigurationError, PackingConfig, PackingInputs, PackingPattern, BoundingBox, Centers
from .packer import CirclePacker, CirclePosition, PackingResult
from .geometry import BoundaryGeometry, clamp_angle, grid_count

__all__ = [
    "CirclePacker",
    "CirclePosition",
    "PackingResult",
    "PackingConfig",
    "PackingInputs",
    "PackingPattern",
    "ConfigurationError",
    "BoundaryGeometry",
    "clamp_angle",
    "grid_count",
    "BoundingBox",
    "Centers",
]

__version__ = "0.1.0"
