from .utils import (
    EPSILON,
    WrapTo360,
    wrap_to_range,
    is_zero,
)

__all__ = [
    'EPSILON',
    'WrapTo360',
    'wrap_to_range',
    'is_zero',
]
