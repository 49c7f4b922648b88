"""
Stencil Sampler

Evaluates the convex function at the stencil points around a shifted
midpoint of the box:
- w0 = 0.5 * (1 + lambda) * (xL + xU), y0 = f(w0)
- w_step = 0.5 * alpha * (xU - xL)
- y_plus[i] = f(w0 + w_step[i] e_i)
- compass-star: y_minus[i] = f(w0 - w_step[i] e_i)   (2n+1 evaluations)
- simplex-star: y_minus[0] = f(w0 - w_step)          (n+2 evaluations)

All inputs are validated before f is called. Exceptions raised by f
propagate to the caller unchanged.
"""

import logging
import numbers
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
import numpy as np

from .box import Box, as_box, wrap_objective
from .config import ResolvedConfig, SamplingConfig, make_config
from .errors import NonScalarOutputError
from .policy import SamplingPolicy

logger = logging.getLogger(__name__)


@dataclass
class SampleSet:
    """
    Function values on one stencil.

    Attributes:
        w0: Stencil midpoint
        y0: f(w0)
        w_step: Step length along each axis
        y_plus: f at the positive step along each axis
        y_minus: f at the negative steps (n values for compass-star,
            one combined value for simplex-star)
        box: Box the stencil was built for
        config: Resolved parameters used
        n_evaluations: Number of calls made to f
    """
    w0: np.ndarray
    y0: float
    w_step: np.ndarray
    y_plus: np.ndarray
    y_minus: np.ndarray
    box: Box
    config: ResolvedConfig
    n_evaluations: int = 0

    @property
    def n_vars(self) -> int:
        return len(self.w0)

    @property
    def policy(self) -> SamplingPolicy:
        return self.config.policy

    def plus_points(self) -> np.ndarray:
        """Rows are w0 + w_step[i] e_i."""
        return self.w0 + np.diag(self.w_step)

    def minus_points(self) -> np.ndarray:
        """Rows are the negative-step points, in y_minus order."""
        if self.policy is SamplingPolicy.COMPASS_STAR:
            return self.w0 - np.diag(self.w_step)
        return (self.w0 - self.w_step).reshape(1, -1)

    def points(self) -> np.ndarray:
        """All sampled points, midpoint first, one per row."""
        return np.vstack([self.w0.reshape(1, -1), self.plus_points(), self.minus_points()])

    def values(self) -> np.ndarray:
        """Function values matching points()."""
        return np.concatenate([[self.y0], self.y_plus, self.y_minus])

    def as_tuple(self):
        """Return (w0, y0, w_step, y_plus, y_minus)."""
        return self.w0, self.y0, self.w_step, self.y_plus, self.y_minus

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "box": self.box.to_canonical(),
            "config": self.config.to_canonical(),
            "w0": self.w0.tolist(),
            "y0": self.y0,
            "w_step": self.w_step.tolist(),
            "y_plus": self.y_plus.tolist(),
            "y_minus": self.y_minus.tolist(),
            "n_evaluations": self.n_evaluations,
        }


def evaluate_objective(objective: Callable, point: np.ndarray) -> float:
    """Evaluate f at a point and insist on a real scalar result."""
    value = objective(point)
    if isinstance(value, np.ndarray) and value.ndim == 0:
        value = value.item()
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise NonScalarOutputError(
            f"function dimension: function output must be a real scalar, "
            f"got {type(value).__name__} at x={np.asarray(point).tolist()}"
        )
    return float(value)


def sample_box(f: Callable, box: Box, config: ResolvedConfig) -> SampleSet:
    """
    Sample f on an already validated box and configuration.

    Args:
        f: Convex function, called with floats for scalar boxes and
            float64 arrays otherwise
        box: Box domain
        config: Parameters resolved for box.n_vars

    Returns:
        SampleSet holding the stencil and its function values
    """
    n = box.n_vars
    objective = wrap_objective(f, box)
    lambda_, alpha = config.lambda_, config.alpha

    w0 = 0.5 * (1.0 + lambda_) * (box.lower + box.upper)
    y0 = evaluate_objective(objective, w0)

    w_step = 0.5 * alpha * (box.upper - box.lower)
    steps = np.diag(w_step)
    y_plus = np.array([evaluate_objective(objective, w0 + steps[i]) for i in range(n)])

    if config.policy is SamplingPolicy.COMPASS_STAR:
        y_minus = np.array([evaluate_objective(objective, w0 - steps[i]) for i in range(n)])
    else:
        y_minus = np.array([evaluate_objective(objective, w0 - w_step)])

    n_evaluations = 1 + len(y_plus) + len(y_minus)
    logger.debug(
        "Sampled %s stencil in %dD: %d evaluations, w0=%s, y0=%.6g",
        config.policy.value, n, n_evaluations, w0.tolist(), y0
    )

    return SampleSet(
        w0=w0,
        y0=y0,
        w_step=w_step,
        y_plus=y_plus,
        y_minus=y_minus,
        box=box,
        config=config,
        n_evaluations=n_evaluations,
    )


def sample_convex_function(
    f: Callable,
    xL,
    xU,
    config: Optional[SamplingConfig] = None,
    **overrides
) -> SampleSet:
    """
    Sample f on the stencil selected by the configuration.

    Args:
        f: Convex function on the box
        xL: Lower bounds (vector, or scalar for univariate f)
        xU: Upper bounds (vector, or scalar for univariate f)
        config: SamplingConfig; alternatively pass policy, alpha,
            lambda_ or epsilon as keywords

    Returns:
        SampleSet with w0, y0, w_step, y_plus, y_minus

    Raises:
        DimensionMismatchError: xL and xU (or alpha, lambda) disagree on length
        ParameterRangeError: alpha or lambda out of range
        UnsupportedConfigurationError: simplex-star with lambda or epsilon in nD
        NonScalarOutputError: f returned a non-scalar
    """
    box = as_box(xL, xU)
    resolved = make_config(config, **overrides).resolve(box.n_vars)
    return sample_box(f, box, resolved)
