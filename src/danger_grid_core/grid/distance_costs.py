"""
Goal distance + danger 비용 융합 (planner cost surface)
"""
import logging
from typing import List, Sequence, Tuple

import numpy as np

from .spatial_layer import SpatialLayer

logger = logging.getLogger(__name__)


class DistanceCostFuser:
    """
    Folds the straight-line distance to a goal into danger layers

    fused = danger_weight * danger + euclidean_distance(cell, goal)

    Attributes:
        goal_x, goal_y: Goal cell
        danger_weight: Multiplier on the existing danger value
    """

    def __init__(self, goal_x: int, goal_y: int, danger_weight: float = 1.0):
        self.goal_x = goal_x
        self.goal_y = goal_y
        self.danger_weight = danger_weight

    def distance_map(self, template: SpatialLayer) -> SpatialLayer:
        """
        Pure distance-to-goal layer (no danger term), same shape as template
        """
        width, height = template.shape
        xs, ys = np.meshgrid(np.arange(width), np.arange(height), indexing="ij")
        distances = np.hypot(xs - float(self.goal_x), ys - float(self.goal_y))
        layer = SpatialLayer.like(template)
        layer._danger[:, :] = distances
        return layer

    def fuse(self, layer: SpatialLayer, distances: SpatialLayer) -> SpatialLayer:
        """
        New layer holding ``danger_weight * danger + distance``

        The input layer is left untouched.
        """
        fused = layer.copy()
        fused._danger[:, :] = self.danger_weight * layer._danger + distances._danger
        return fused

    def fuse_layers(
        self,
        layers: Sequence[SpatialLayer],
        look_behind: int,
        look_ahead: int
    ) -> Tuple[List[SpatialLayer], SpatialLayer]:
        """
        Fuse a time-layered grid

        Layers for offsets 0 .. look_ahead - 1 are fused; past offsets and
        offset ``look_ahead`` are carried over as copies.

        Args:
            layers: Layers ordered by ``offset + look_behind``
            look_behind, look_ahead: Time horizon of ``layers``

        Returns:
            (replacement layers, pure distance layer)
        """
        distances = self.distance_map(layers[0])
        fused_layers = []
        for index, layer in enumerate(layers):
            seconds = index - look_behind
            if 0 <= seconds < look_ahead:
                fused_layers.append(self.fuse(layer, distances))
            else:
                fused_layers.append(layer.copy())

        logger.info(
            "Fused distance to goal (%d, %d) into %d layers (danger weight %.3f)",
            self.goal_x, self.goal_y, min(look_ahead, len(layers)), self.danger_weight,
        )
        return fused_layers, distances
