"""
Box Domain

Axis-aligned box [lower, upper] on which the convex function is sampled.
Degenerate axes (lower[i] == upper[i]) are allowed.

Scalar bounds give a one-dimensional box flagged as scalar: the sampled
function then receives plain floats instead of length-1 arrays.
"""

from dataclasses import dataclass
from itertools import product
from typing import Any, Callable, Dict, Iterator
import numpy as np

from .errors import DimensionMismatchError


@dataclass
class Box:
    """
    Box domain [lower, upper].

    Attributes:
        lower: Lower bounds for each variable
        upper: Upper bounds for each variable
        is_scalar: True when built from scalar bounds
    """
    lower: np.ndarray
    upper: np.ndarray
    is_scalar: bool = False

    def __post_init__(self):
        self.lower = np.array(self.lower, dtype=np.float64, ndmin=1)
        self.upper = np.array(self.upper, dtype=np.float64, ndmin=1)

        if self.lower.ndim != 1 or self.upper.ndim != 1:
            raise DimensionMismatchError("function dimension: xL and xU must be vectors")
        if len(self.upper) != len(self.lower):
            raise DimensionMismatchError(
                f"function dimension: length of xL ({len(self.lower)}) and "
                f"xU ({len(self.upper)}) must be equal"
            )
        if len(self.lower) == 0:
            raise DimensionMismatchError("function dimension: box must have at least one axis")

    @classmethod
    def from_scalars(cls, lower: float, upper: float) -> 'Box':
        """Create a one-dimensional box from scalar bounds."""
        return cls(np.array([lower]), np.array([upper]), is_scalar=True)

    @property
    def n_vars(self) -> int:
        return len(self.lower)

    @property
    def widths(self) -> np.ndarray:
        return self.upper - self.lower

    @property
    def center(self) -> np.ndarray:
        return (self.lower + self.upper) / 2.0

    @property
    def is_degenerate(self) -> np.ndarray:
        """Mask of axes with equal lower and upper bounds."""
        return self.lower == self.upper

    def contains(self, x: np.ndarray, tol: float = 1e-10) -> bool:
        """Check if a point is within the box (with tolerance)."""
        x = np.atleast_1d(np.asarray(x, dtype=np.float64))
        return bool(
            np.all(x >= self.lower - tol) and
            np.all(x <= self.upper + tol)
        )

    def corners(self) -> Iterator[np.ndarray]:
        """Yield the 2^n vertices of the box."""
        for vertex in product(*zip(self.lower, self.upper)):
            yield np.array(vertex, dtype=np.float64)

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "lower": self.lower.tolist(),
            "upper": self.upper.tolist(),
        }


def as_box(xL, xU) -> Box:
    """
    Adapt caller bounds to a Box.

    Two scalars give a scalar one-dimensional box; anything else is
    treated as a pair of vectors.
    """
    if np.ndim(xL) == 0 and np.ndim(xU) == 0:
        return Box.from_scalars(float(xL), float(xU))
    return Box(xL, xU)


def wrap_objective(f: Callable, box: Box) -> Callable[[np.ndarray], Any]:
    """
    Call f with the argument shape the caller declared.

    For scalar boxes f receives a float; otherwise a fresh float64 array,
    so f cannot alter the stencil points.
    """
    if box.is_scalar:
        return lambda w: f(float(w[0]))
    return lambda w: f(np.array(w, dtype=np.float64))
