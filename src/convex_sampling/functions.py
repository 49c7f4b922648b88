"""
Convex Test Functions

Closed-form convex functions for exercising the sampler:
- sphere:       f(x) = sum((x_i - s_i)^2)
- exp-sum:      f(x) = sum(exp(x_i - s_i))
- log-sum-exp:  f(x) = log(sum(exp(x_i - s_i)))
- abs-sum:      f(x) = sum(|x_i - s_i|)   (convex, nonsmooth)

Each builder takes the dimension and an optional shift and returns a
callable accepting a float64 vector and returning a float.
"""

from typing import Callable, Dict, Optional
import numpy as np


Objective = Callable[[np.ndarray], float]


def _shift(n: int, shift: Optional[np.ndarray]) -> np.ndarray:
    if shift is None:
        return np.zeros(n)
    shift = np.asarray(shift, dtype=np.float64)
    if len(shift) != n:
        raise ValueError(f"shift length ({len(shift)}) must match dimension ({n})")
    return shift


def build_sphere(n: int, shift: Optional[np.ndarray] = None) -> Objective:
    """Sphere function, minimum 0 at x = shift."""
    s = _shift(n, shift)

    def sphere(x: np.ndarray) -> float:
        return float(np.sum((np.asarray(x) - s) ** 2))
    return sphere


def build_exp_sum(n: int, shift: Optional[np.ndarray] = None) -> Objective:
    """Separable exponential, strictly convex."""
    s = _shift(n, shift)

    def exp_sum(x: np.ndarray) -> float:
        return float(np.sum(np.exp(np.asarray(x) - s)))
    return exp_sum


def build_log_sum_exp(n: int, shift: Optional[np.ndarray] = None) -> Objective:
    """Log-sum-exp, convex but not strictly convex."""
    s = _shift(n, shift)

    def log_sum_exp(x: np.ndarray) -> float:
        z = np.asarray(x) - s
        m = np.max(z)
        return float(m + np.log(np.sum(np.exp(z - m))))
    return log_sum_exp


def build_abs_sum(n: int, shift: Optional[np.ndarray] = None) -> Objective:
    """L1 distance to the shift."""
    s = _shift(n, shift)

    def abs_sum(x: np.ndarray) -> float:
        return float(np.sum(np.abs(np.asarray(x) - s)))
    return abs_sum


FUNCTIONS: Dict[str, Callable[..., Objective]] = {
    'sphere': build_sphere,
    'exp-sum': build_exp_sum,
    'log-sum-exp': build_log_sum_exp,
    'abs-sum': build_abs_sum,
}
