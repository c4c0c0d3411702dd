"""
항공기 미래 위치 예측 (Trajectory Prediction)

The predictor walks from a start cell towards a target cell one second at a
time. Every second emits two probability-weighted neighbour cells (the
majority and the remainder of the split) followed by a time marker; the walk
then continues from one of the two cells.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from ..config import DangerGridConfig
from ..geometry.bearings import leg_angle
from ..types import Position, PositionEstimate, TIME_MARKER
from .branching import (
    neighboring_angles,
    closest_and_other,
    split_weight,
    placement_directions,
)

logger = logging.getLogger(__name__)


class TrajectoryPredictor:
    """
    Branching trajectory extrapolation on the grid

    Attributes:
        danger_ceiling: Upper bound of each split weight
        branch_threshold: The walk keeps following the majority cell while
            its weight is above this value, otherwise it follows the
            remainder cell
        goal_hazard_steps: Seconds the destination stays marked after arrival
        goal_hazard_weight: Weight of each of those goal estimates
    """

    def __init__(
        self,
        danger_ceiling: float = 0.4,
        branch_threshold: float = 0.3,
        goal_hazard_steps: int = 3,
        goal_hazard_weight: float = 1.0
    ):
        self.danger_ceiling = danger_ceiling
        self.branch_threshold = branch_threshold
        self.goal_hazard_steps = goal_hazard_steps
        self.goal_hazard_weight = goal_hazard_weight

    @classmethod
    def from_config(cls, config: DangerGridConfig) -> "TrajectoryPredictor":
        return cls(
            danger_ceiling=config.danger_ceiling,
            branch_threshold=config.branch_threshold,
            goal_hazard_steps=config.goal_hazard_steps,
            goal_hazard_weight=config.goal_hazard_weight,
        )

    def predict_step(
        self,
        current: Sequence[int],
        target: Sequence[int]
    ) -> Optional[Tuple[PositionEstimate, PositionEstimate]]:
        """
        Split one second of movement between two neighbour cells

        Args:
            current: Current cell (x, y)
            target: Target cell (x, y)

        Returns:
            (majority, remainder) estimates, or None when already at the target
        """
        x_1, y_1 = int(current[0]), int(current[1])
        x_2, y_2 = int(target[0]), int(target[1])
        if x_1 == x_2 and y_1 == y_2:
            return None

        angle = leg_angle(x_1, y_1, x_2, y_2)
        first, second = neighboring_angles(angle)
        closest, other = closest_and_other(angle, first, second)
        weight = split_weight(angle, closest, other)

        majority_weight = max(0.0, min(weight, self.danger_ceiling))
        remainder_weight = max(0.0, min(1.0 - weight, self.danger_ceiling))

        majority_dir, remainder_dir = placement_directions(angle, closest, other)
        m_dx, m_dy = majority_dir.offset
        r_dx, r_dy = remainder_dir.offset
        return (
            PositionEstimate(x_1 + m_dx, y_1 + m_dy, majority_weight),
            PositionEstimate(x_1 + r_dx, y_1 + r_dy, remainder_weight),
        )

    def predict_leg(
        self,
        start: Sequence[int],
        target: Sequence[int],
        max_steps: int
    ) -> List[PositionEstimate]:
        """
        Predict one leg of a route, one second per step

        Args:
            start: First cell of the leg
            target: Last cell of the leg
            max_steps: Maximum number of seconds to predict

        Returns:
            [majority, remainder, TIME_MARKER, majority, remainder, TIME_MARKER, ...]
            Empty when start and target are the same cell.
        """
        estimates: List[PositionEstimate] = []
        current = Position(int(start[0]), int(start[1]))

        for _ in range(max(0, max_steps)):
            step = self.predict_step(current, target)
            if step is None:
                break
            majority, remainder = step
            estimates.extend((majority, remainder, TIME_MARKER))

            if majority.weight > self.branch_threshold:
                current = Position(majority.x, majority.y)
            else:
                current = Position(remainder.x, remainder.y)

        if current != (int(target[0]), int(target[1])) and estimates:
            logger.debug(
                "Leg %s -> %s stopped at %s after %d steps",
                tuple(start), tuple(target), tuple(current), max_steps,
            )
        return estimates

    def goal_hazard(self, destination: Sequence[int], max_steps: int = None) -> List[PositionEstimate]:
        """
        Keep the destination marked for a few more seconds after arrival

        Returns:
            [goal, TIME_MARKER] repeated ``goal_hazard_steps`` times
            (fewer when ``max_steps`` is smaller)
        """
        steps = self.goal_hazard_steps
        if max_steps is not None:
            steps = min(steps, max(0, max_steps))

        goal = PositionEstimate(int(destination[0]), int(destination[1]), self.goal_hazard_weight)
        estimates: List[PositionEstimate] = []
        for _ in range(steps):
            estimates.extend((goal, TIME_MARKER))
        return estimates

    @staticmethod
    def count_steps(estimates: Sequence[PositionEstimate]) -> int:
        """Number of seconds covered by an estimate sequence"""
        return sum(1 for est in estimates if est.is_time_marker)
