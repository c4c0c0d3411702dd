"""
Time-layered danger grid (x, y, seconds)

A danger grid holds one SpatialLayer per second in
[-look_behind, +look_ahead]. On construction it projects every aircraft
other than the owner along its route, deposits the predicted danger into the
matching layers and spreads it into the neighbouring cells. A planner then
queries ``grid(x, y, seconds)``.

Example:
    >>> grid = DangerGrid(aircraft, width=500, height=500, resolution=10, owner_id=0)
    >>> grid.get_danger_at(10, 7, 4)      # danger at (10, 7), 4 s from now
    >>> grid.calculate_distance_costs(goal_x=40, goal_y=3)
"""
import logging
import math
import numbers
from typing import List, Optional, Sequence, Tuple

from ..aircraft import Aircraft
from ..config import DangerGridConfig, DEFAULT_CONFIG
from ..exceptions import (
    TimeOffsetError,
    NegativeDangerError,
    DistanceCostsNotComputedError,
    DistanceCostsAlreadyComputedError,
)
from ..trajectory import TrajectoryPredictor
from ..types import PositionEstimate
from .distance_costs import DistanceCostFuser
from .field_spreader import DirectionalFieldSpreader
from .spatial_layer import SpatialLayer

logger = logging.getLogger(__name__)


class DangerGrid:
    """
    Collision-risk field over a discretised airspace and a short time horizon

    The grid is built from the owner aircraft's point of view: the owner
    never registers as a hazard to itself.

    Attributes:
        config: DangerGridConfig used to build the grid
        owner_id: ID of the aircraft the grid is built for
        plane_danger: Deposit magnitude for one aircraft, scaled to the grid
            diagonal so danger dominates normalised distance costs
        danger_ratings: Danger scale per time layer (index = seconds + look_behind)
        overlay: Every deposit of every layer accumulated into one layer,
            for visualisation
    """

    def __init__(
        self,
        aircraft: Sequence[Aircraft],
        width: float,
        height: float,
        resolution: float,
        owner_id: Optional[int] = None,
        config: Optional[DangerGridConfig] = None
    ):
        """
        Args:
            aircraft: Aircraft to consider (read, never modified)
            width: Width of the airspace (our x dimension)
            height: Height of the airspace (our y dimension)
            resolution: Edge length of one square, same unit as width/height
            owner_id: Aircraft the grid is built for; None considers everyone
            config: Tuning parameters (DEFAULT_CONFIG when omitted)

        Raises:
            ConfigurationError: degenerate width, height or resolution
        """
        self._setup(aircraft, SpatialLayer(width, height, resolution), owner_id, config)

    @classmethod
    def from_map(
        cls,
        aircraft: Sequence[Aircraft],
        the_map: SpatialLayer,
        owner_id: Optional[int] = None,
        config: Optional[DangerGridConfig] = None
    ) -> "DangerGrid":
        """
        Build a danger grid on top of an existing static map

        Only the map's dimensions and resolution are used.
        """
        grid = cls.__new__(cls)
        grid._setup(aircraft, SpatialLayer.like(the_map), owner_id, config)
        return grid

    def _setup(self, aircraft, template, owner_id, config):
        self.config = config or DEFAULT_CONFIG
        self.owner_id = owner_id
        self._aircraft = aircraft
        self._predictor = TrajectoryPredictor.from_config(self.config)
        self._spreader = DirectionalFieldSpreader(self.config.field_weight, self.config.spread_policy)
        self._distance_costs: Optional[SpatialLayer] = None

        width_sq, height_sq = template.shape
        self.plane_danger = math.sqrt(width_sq ** 2 + height_sq ** 2) * self.config.plane_danger_scale

        self._danger_space: List[SpatialLayer] = [
            SpatialLayer.like(template) for _ in range(self.config.layer_count)
        ]
        self.overlay = SpatialLayer.like(template)
        logger.debug(
            "Allocated %d layers of %dx%d squares (look-behind %d, look-ahead %d)",
            len(self._danger_space), width_sq, height_sq,
            self.config.look_behind, self.config.look_ahead,
        )

        self.danger_ratings = self._build_danger_ratings()
        self._fill_danger_space()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def _build_danger_ratings(self) -> Tuple[float, ...]:
        """
        Danger scale per time layer; constant plane danger unless the
        config supplies a decay function
        """
        look_behind = self.config.look_behind
        ratings = []
        for index in range(self.config.layer_count):
            seconds = index - look_behind
            if self.config.decay is None:
                ratings.append(self.plane_danger)
            else:
                ratings.append(float(self.config.decay(seconds, self.plane_danger)))
        return tuple(ratings)

    def adjust_danger(self, seconds: int) -> float:
        """Scale applied to a raw predicted weight at the given time offset"""
        return self.danger_ratings[self._layer_index(seconds)]

    def _fill_danger_space(self):
        ids = [plane.plane_id for plane in self._aircraft]
        if self.owner_id is not None and self.owner_id not in ids:
            logger.warning("Owner aircraft %s is not in the aircraft list", self.owner_id)

        considered = 0
        for plane in self._aircraft:
            if plane.plane_id == self.owner_id:
                continue
            considered += 1
            self._deposit_present(plane)
            self._deposit_future(plane)

        logger.info(
            "Danger grid for owner %s built from %d aircraft (plane danger %.3f)",
            self.owner_id, considered, self.plane_danger,
        )

    def _deposit_present(self, plane: Aircraft):
        present = self._layer(0)
        x, y = plane.location
        if not present.in_bounds(x, y):
            logger.warning("Aircraft %s at (%d, %d) is outside the grid", plane.plane_id, x, y)
            return
        present.add_danger_at(x, y, self.plane_danger)
        present.add_plane_at(x, y, plane.plane_id)
        self.overlay.add_danger_at(x, y, self.plane_danger)

    def _deposit_future(self, plane: Aircraft):
        look_ahead = self.config.look_ahead

        # to avoid: current location -> next waypoint
        to_avoid = self._predictor.predict_leg(plane.location, plane.destination, look_ahead)
        t = self._deposit_estimates(to_avoid, 1, plane.bearing)

        # to goal: next waypoint -> final destination, time carried over
        to_goal = self._predictor.predict_leg(
            plane.destination, plane.final_destination, look_ahead - (t - 1)
        )
        t = self._deposit_estimates(to_goal, t, plane.bearing)

        beyond_goal = self._predictor.goal_hazard(plane.final_destination, look_ahead - (t - 1))
        t = self._deposit_estimates(beyond_goal, t, plane.bearing_to_destination)

        logger.debug(
            "Aircraft %s: %d predicted seconds (%d + %d + %d estimates)",
            plane.plane_id, t - 1, len(to_avoid), len(to_goal), len(beyond_goal),
        )

    def _deposit_estimates(
        self,
        estimates: Sequence[PositionEstimate],
        t: int,
        bearing: float
    ) -> int:
        """
        Deposit scaled, spread danger for a sequence of estimates

        Args:
            estimates: Estimates separated by time markers
            t: Time offset of the first estimate (seconds)
            bearing: Direction of travel used by a bearing-gated spread

        Returns:
            Time offset following the last time marker
        """
        look_ahead = self.config.look_ahead
        for est in estimates:
            if est.is_time_marker:
                t += 1
                continue
            if t > look_ahead:
                logger.debug("Discarding estimate %s beyond the %d s horizon", est, look_ahead)
                continue

            layer = self._layer(t)
            if not layer.in_bounds(est.x, est.y):
                logger.debug("Skipping estimate %s outside the grid at t=%d", est, t)
                continue

            danger = est.weight * self.adjust_danger(t)
            layer.add_danger_at(est.x, est.y, danger)
            self.overlay.add_danger_at(est.x, est.y, danger)
            self._spreader.spread(layer, est.x, est.y, danger, bearing)
        return t

    # ------------------------------------------------------------------
    # Time indexing
    # ------------------------------------------------------------------
    def _layer_index(self, seconds: int) -> int:
        look_behind = self.config.look_behind
        look_ahead = len(self._danger_space) - 1 - look_behind
        if isinstance(seconds, bool) or not isinstance(seconds, numbers.Integral) or \
                not -look_behind <= seconds <= look_ahead:
            raise TimeOffsetError(seconds, look_behind, look_ahead)
        return int(seconds) + look_behind

    def _layer(self, seconds: int) -> SpatialLayer:
        return self._danger_space[self._layer_index(seconds)]

    def layer_at(self, seconds: int) -> SpatialLayer:
        """
        The live layer for a time offset (mutations affect the grid)
        """
        return self._layer(seconds)

    # ------------------------------------------------------------------
    # Public accessors
    # ------------------------------------------------------------------
    def get_danger_at(self, x_pos: int, y_pos: int, seconds: int) -> float:
        """
        Danger rating of a square

        Args:
            x_pos, y_pos: Square in question
            seconds: Time offset, in [-look_behind, look_ahead]

        Raises:
            TimeOffsetError: seconds outside the horizon
            CellIndexError: square outside the grid
        """
        return self._layer(seconds).get_danger_at(x_pos, y_pos)

    def add_danger_at(self, x_pos: int, y_pos: int, seconds: int, danger: float):
        """Add to the danger rating of a square"""
        if danger < 0:
            raise NegativeDangerError(f"Cannot add negative danger {danger}")
        self._layer(seconds).add_danger_at(x_pos, y_pos, danger)

    def set_danger_at(self, x_pos: int, y_pos: int, seconds: int, danger: float):
        """Set the danger rating of a square"""
        if danger < 0:
            raise NegativeDangerError(f"Cannot set negative danger {danger}")
        self._layer(seconds).set_danger_at(x_pos, y_pos, danger)

    def __call__(self, x: int, y: int, seconds: int) -> float:
        return self.get_danger_at(x, y, seconds)

    def get_width_in_squares(self) -> int:
        return self._danger_space[0].get_width_in_squares()

    def get_height_in_squares(self) -> int:
        return self._danger_space[0].get_height_in_squares()

    def get_time_in_secs(self) -> int:
        """Look-ahead horizon in seconds"""
        return self.config.look_ahead

    def get_res(self) -> float:
        return self._danger_space[0].get_resolution()

    def get_danger_space(self) -> Tuple[SpatialLayer, ...]:
        """Copies of all layers, ordered from -look_behind to look_ahead"""
        return tuple(layer.copy() for layer in self._danger_space)

    def copy(self) -> "DangerGrid":
        """
        Independent copy of the grid; the aircraft list is shared, not copied
        """
        clone = DangerGrid.__new__(DangerGrid)
        clone.__dict__.update(self.__dict__)
        clone._danger_space = [layer.copy() for layer in self._danger_space]
        clone.overlay = self.overlay.copy()
        if self._distance_costs is not None:
            clone._distance_costs = self._distance_costs.copy()
        return clone

    # ------------------------------------------------------------------
    # Distance costs
    # ------------------------------------------------------------------
    def calculate_distance_costs(self, goal_x: int, goal_y: int, danger_weight: float = 1.0):
        """
        Fuse the straight-line distance to a goal into the grid

        Every cell of the layers at offsets 0 .. look_ahead - 1 becomes
        ``danger_weight * danger + distance(cell, goal)``. The layers are
        replaced, so the pure danger values are gone afterwards; the pure
        distance map stays available through :meth:`get_dist_cost_at`.

        Raises:
            DistanceCostsAlreadyComputedError: called a second time
        """
        if self._distance_costs is not None:
            raise DistanceCostsAlreadyComputedError()

        fuser = DistanceCostFuser(goal_x, goal_y, danger_weight)
        fused_layers, distances = fuser.fuse_layers(
            self._danger_space, self.config.look_behind, self.config.look_ahead
        )
        self._danger_space = fused_layers
        self._distance_costs = distances

    @property
    def has_distance_costs(self) -> bool:
        return self._distance_costs is not None

    def get_dist_cost_at(self, x_pos: int, y_pos: int) -> float:
        """
        Pure straight-line distance from a square to the goal

        Raises:
            DistanceCostsNotComputedError: before calculate_distance_costs()
        """
        if self._distance_costs is None:
            raise DistanceCostsNotComputedError()
        return self._distance_costs.get_danger_at(x_pos, y_pos)

    # ------------------------------------------------------------------
    # Troubleshooting output
    # ------------------------------------------------------------------
    def _dump_target(self, seconds: Optional[int]) -> SpatialLayer:
        return self.overlay if seconds is None else self._layer(seconds)

    def dump(self, seconds: Optional[int] = None, file=None):
        """Print the layer at ``seconds`` (the overlay when None)"""
        self._dump_target(seconds).dump(file)

    def dump_big_numbers(self, seconds: Optional[int] = None, file=None):
        """Print the layer at ``seconds`` with integer cost values"""
        self._dump_target(seconds).dump_big_numbers(file)

    def to_csv(self, path, seconds: Optional[int] = None):
        """Write the layer at ``seconds`` (the overlay when None) as CSV"""
        return self._dump_target(seconds).to_csv(path)

    def __repr__(self) -> str:
        return (f"DangerGrid({self.get_width_in_squares()}x{self.get_height_in_squares()}, "
                f"t=[-{self.config.look_behind}, {self.config.look_ahead}], owner={self.owner_id})")
