"""
Danger layer 시각화 (matplotlib)

Kept out of ``danger_grid_core.grid`` so the core only needs numpy.
"""
from typing import Optional, Union

import matplotlib.pyplot as plt

from .danger_grid import DangerGrid
from .spatial_layer import SpatialLayer


def plot_danger_layer(
    source: Union[DangerGrid, SpatialLayer],
    seconds: Optional[int] = 0,
    ax=None,
    cmap: str = "inferno",
    title: Optional[str] = None,
    colorbar: bool = True
):
    """
    Draw one danger layer as a heat map, north at the top

    Args:
        source: DangerGrid or a single SpatialLayer
        seconds: Time offset to draw when ``source`` is a DangerGrid
            (None draws the overlay of all deposits)
        ax: Matplotlib axes (a new figure is created when None)
        cmap: Colormap name
        title: Axes title (defaults to the time offset)
        colorbar: Attach a colorbar

    Returns:
        The matplotlib axes
    """
    if isinstance(source, DangerGrid):
        layer = source.overlay if seconds is None else source.layer_at(seconds)
        default_title = "overlay" if seconds is None else f"t = {seconds:+d} s"
    else:
        layer = source
        default_title = "danger"

    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))

    # rows = y (south grows downward), columns = x
    image = ax.imshow(layer.as_array().T, origin="upper", cmap=cmap, interpolation="nearest")
    ax.set_xlabel("x (east)")
    ax.set_ylabel("y (south)")
    ax.set_title(title or default_title)
    if colorbar:
        ax.figure.colorbar(image, ax=ax, label="danger")
    return ax
