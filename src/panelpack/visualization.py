"""
Module containing visualization functions for packing results.
"""

from typing import Optional
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.colors import to_rgba
from matplotlib.patches import Circle, Rectangle

from .config import (
    BOUNDARY_COLOR,
    CIRCLE_COLOR,
    FILL_OPACITY,
    LABEL_COLOR,
    PLOT_MARGIN_FACTOR,
    UNIT_LABEL,
    PackingInputs,
)
from .packer import PackingResult

def set_plot_bounds(ax: Axes, width: float, height: float) -> None:
    """
    Sets the plot bounds to hug the panel with a margin for dimension labels.
    The y axis points down so the origin is the panel's top-left corner.
    """
    margin = max(width, height) * PLOT_MARGIN_FACTOR
    ax.set_xlim(-margin, width + margin)
    ax.set_ylim(height + margin, -margin)
    ax.set_aspect('equal')

def draw_dimension(ax: Axes, start: tuple, end: tuple, label: str, text_pos: tuple,
                   color: str, rotation: float = 0, linestyle: str = '-') -> None:
    """
    Draws a double-headed dimension arrow between two points with a label.
    """
    ax.annotate(
        "",
        xy=end,
        xytext=start,
        arrowprops=dict(arrowstyle="<|-|>", color=color, linestyle=linestyle, shrinkA=0, shrinkB=0),
    )
    ax.text(*text_pos, label, color=color, ha='center', va='center', rotation=rotation, fontsize=8)

def plot_packing(result: PackingResult, inputs: PackingInputs, ax: Optional[Axes] = None,
                 show_dimensions: bool = True, unit: str = UNIT_LABEL) -> Axes:
    """
    Plots the panel, the achieved bounding box and every circle of a packing result.
    Returns the axes drawn on.
    """
    if ax is None:
        _, ax = plt.subplots()

    width, height = inputs.width, inputs.height
    set_plot_bounds(ax, width, height)

    # Panel outline and achieved bounding box
    ax.add_patch(Rectangle((0, 0), width, height, fill=False, edgecolor=BOUNDARY_COLOR, linewidth=1))
    ax.add_patch(Rectangle(
        (0, 0), result.actual_width, result.actual_height,
        fill=False, edgecolor=CIRCLE_COLOR, linestyle='--', linewidth=1,
    ))

    # Circles and their centers
    radius = inputs.diameter / 2
    face = to_rgba(CIRCLE_COLOR, FILL_OPACITY)
    for circle in result.circles:
        ax.add_patch(Circle((circle.x, circle.y), radius, facecolor=face, edgecolor=CIRCLE_COLOR, linewidth=0.8))
    if result.count:
        centers = result.centers
        ax.plot(centers[:, 0], centers[:, 1], linestyle='', marker='.', markersize=2, color=CIRCLE_COLOR)

    if show_dimensions:
        scale = max(width, height) / 400
        offset = 15 * scale
        text_offset = 30 * scale

        draw_dimension(ax, (0, height + offset), (width, height + offset),
                       f"{width:g} {unit}", (width / 2, height + text_offset), LABEL_COLOR)
        draw_dimension(ax, (width + offset, height), (width + offset, 0),
                       f"{height:g} {unit}", (width + text_offset, height / 2), LABEL_COLOR, rotation=90)

        # Tight layouts narrower than the panel get their own dimensions
        if not result.spread and result.actual_width != width:
            draw_dimension(ax, (0, -offset), (result.actual_width, -offset),
                           f"{result.actual_width:.1f} {unit}", (result.actual_width / 2, -text_offset),
                           CIRCLE_COLOR, linestyle='--')
            draw_dimension(ax, (-offset, result.actual_height), (-offset, 0),
                           f"{result.actual_height:.1f} {unit}", (-text_offset, result.actual_height / 2),
                           CIRCLE_COLOR, rotation=90, linestyle='--')

    title = f"{result.count} circles, {result.pattern.value}"
    if result.angle is not None:
        title += f" ({result.angle:.1f}°)"
    ax.set_title(title)
    return ax

def save_packing_plot(result: PackingResult, inputs: PackingInputs, filename: str, **kwargs) -> None:
    """
    Renders a packing result to an image file.
    """
    fig, ax = plt.subplots()
    try:
        plot_packing(result, inputs, ax=ax, **kwargs)
        fig.savefig(filename, bbox_inches='tight')
    finally:
        plt.close(fig)

def show_packing(result: PackingResult, inputs: PackingInputs, **kwargs) -> None:
    """
    Plots a packing result in an interactive window.
    """
    plot_packing(result, inputs, **kwargs)
    plt.show()
