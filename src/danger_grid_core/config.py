"""
Danger grid 튜닝 파라미터
"""
from dataclasses import dataclass, replace
from typing import Callable, Optional

from .exceptions import ConfigurationError
from .types import SpreadPolicy


@dataclass(frozen=True)
class DangerGridConfig:
    """
    Danger grid 설정

    Attributes:
        look_ahead: Future seconds represented as layers
        look_behind: Past seconds represented as layers
        field_weight: Multiplier applied to a deposit before it is spread
            into the neighbouring cells
        danger_ceiling: Upper bound of each split weight per predicted step
        branch_threshold: The prediction keeps following the majority cell
            while its weight is above this value
        plane_danger_scale: plane danger = grid diagonal (squares) * scale
        goal_hazard_steps: Number of extra seconds the final destination
            stays marked after arrival
        goal_hazard_weight: Weight of each of those goal estimates
        spread_policy: Neighbour selection used by the field spreader
        decay: Optional ``decay(seconds, plane_danger) -> float`` giving the
            danger scale for a time offset; None keeps plane danger for
            every offset
    """
    look_ahead: int = 20
    look_behind: int = 2
    field_weight: float = 0.7
    danger_ceiling: float = 0.4
    branch_threshold: float = 0.3
    plane_danger_scale: float = 2.5
    goal_hazard_steps: int = 3
    goal_hazard_weight: float = 1.0
    spread_policy: SpreadPolicy = SpreadPolicy.ISOTROPIC_8
    decay: Optional[Callable[[int, float], float]] = None

    def __post_init__(self):
        if self.look_ahead < 1:
            raise ConfigurationError(f"look_ahead must be >= 1, got {self.look_ahead}")
        if self.look_behind < 0:
            raise ConfigurationError(f"look_behind must be >= 0, got {self.look_behind}")
        for name in ("field_weight", "danger_ceiling", "branch_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be in [0, 1], got {value}")
        if self.plane_danger_scale <= 0:
            raise ConfigurationError(
                f"plane_danger_scale must be positive, got {self.plane_danger_scale}"
            )
        if self.goal_hazard_steps < 0:
            raise ConfigurationError(
                f"goal_hazard_steps must be >= 0, got {self.goal_hazard_steps}"
            )
        if self.goal_hazard_weight < 0:
            raise ConfigurationError(
                f"goal_hazard_weight must be >= 0, got {self.goal_hazard_weight}"
            )
        if not isinstance(self.spread_policy, SpreadPolicy):
            raise ConfigurationError(f"Unknown spread policy: {self.spread_policy!r}")

    @property
    def layer_count(self) -> int:
        """Number of time layers (past + present + future)"""
        return self.look_ahead + self.look_behind + 1

    def replace(self, **changes) -> "DangerGridConfig":
        """Return a copy with the given fields changed"""
        return replace(self, **changes)


DEFAULT_CONFIG = DangerGridConfig()
