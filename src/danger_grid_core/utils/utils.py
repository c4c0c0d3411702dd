import numpy as np

EPSILON = 1e-6


def wrap_to_range(angle, min_val, max_val):
    """
    Wraps an angle to a given range [min_val, max_val).

    The length of the range (max_val - min_val) is assumed to be a full circle (2*pi or 360).

    Args:
        angle (float): The angle value to wrap.
        min_val (float): The minimum value of the range (inclusive).
        max_val (float): The maximum value of the range (exclusive).

    Returns:
        float: The wrapped angle.
    """
    span = max_val - min_val
    if span <= 0:
        raise ValueError("max_val must be greater than min_val.")

    wrapped = (angle - min_val) % span + min_val

    # Snap to min_val if the result is very close to max_val (due to float inaccuracies)
    if np.isclose(wrapped, max_val):
        return min_val

    return wrapped


def WrapTo360(deg):
    """
    Transform an angle in degrees to the range [0, 360).
    """
    return wrap_to_range(deg, 0.0, 360.0)


def is_zero(value, tol=EPSILON):
    """True when |value| is below the tolerance."""
    return -tol < value < tol
