"""
Sampling Underestimators and Lower Bounds

Turns a stencil of samples of a convex function f on a box X into:
- an affine underestimator fAffine(x) = c + b.(x - w0) <= f(x) on X
- a constant lower bound fL <= f(x) on X

Compass-star (2n+1 samples):
    b[i] = (y_plus[i] - y_minus[i]) / (2 w_step[i])       (centered simplex gradient)
    c    = y0 - eps - sum_i (1+|lambda_i|)(y_plus[i] + y_minus[i] - 2 y0 + 4 eps) / (2 alpha_i)
    In one dimension c is tightened to 2 y0 - (y_plus + y_minus)/2.

Simplex-star (n+2 samples, n > 1):
    Upper and lower slope estimates per axis bracket the gradient;
    b is the bracket midpoint and s_r its half-width.

The lower bound uses its own closed forms rather than minimizing
fAffine over X. Degenerate axes contribute b[i] = 0.

Reference: Song et al. (2021), Bounding convex relaxations of process
models from below by tractable black-box sampling,
Comput. Chem. Eng. 153, 107413.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple
import numpy as np

from .box import Box
from .config import SamplingConfig
from .errors import DimensionMismatchError
from .policy import SamplingPolicy
from .sampler import SampleSet, sample_convex_function

logger = logging.getLogger(__name__)


@dataclass
class AffineUnderestimator:
    """
    Affine function fAffine(x) = c + b.(x - w0).

    Attributes:
        w0: Anchor point (stencil midpoint)
        b: Slope vector
        c: Value at the anchor
        s_r: Slope half-widths (simplex-star only, empty otherwise)
        box: Box on which the function underestimates f
    """
    w0: np.ndarray
    b: np.ndarray
    c: float
    s_r: np.ndarray = field(default_factory=lambda: np.empty(0))
    box: Optional[Box] = None

    @property
    def n_vars(self) -> int:
        return len(self.w0)

    def __call__(self, x) -> float:
        x = np.atleast_1d(np.asarray(x, dtype=np.float64))
        if x.shape != self.w0.shape:
            raise DimensionMismatchError(
                f"point has shape {x.shape}, underestimator expects {self.w0.shape}"
            )
        return float(self.c + np.dot(self.b, x - self.w0))

    def evaluate_many(self, X) -> np.ndarray:
        """Evaluate at each row of X."""
        X = np.asarray(X, dtype=np.float64).reshape(-1, self.n_vars)
        return self.c + (X - self.w0) @ self.b

    def minimum(self) -> float:
        """Exact minimum of fAffine over its box."""
        if self.box is None:
            raise ValueError("underestimator has no box to minimize over")
        to_lower = self.b * (self.box.lower - self.w0)
        to_upper = self.b * (self.box.upper - self.w0)
        return float(self.c + np.sum(np.minimum(to_lower, to_upper)))

    def as_tuple(self) -> Tuple[np.ndarray, np.ndarray, float, np.ndarray]:
        """Return (w0, b, c, s_r)."""
        return self.w0, self.b, self.c, self.s_r

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "w0": self.w0.tolist(),
            "b": self.b.tolist(),
            "c": self.c,
            "s_r": self.s_r.tolist(),
        }


@dataclass
class SamplingRelaxation:
    """Underestimator and lower bound derived from a single stencil."""
    sample: SampleSet
    underestimator: AffineUnderestimator
    lower_bound: float

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "sample": self.sample.to_canonical(),
            "underestimator": self.underestimator.to_canonical(),
            "lower_bound": self.lower_bound,
        }


def _compass_star_coeffs(sample: SampleSet) -> Tuple[np.ndarray, float]:
    n = sample.n_vars
    cfg = sample.config
    alpha, lambda_, eps = cfg.alpha, cfg.lambda_, cfg.epsilon
    y0, y_plus, y_minus = sample.y0, sample.y_plus, sample.y_minus

    b = np.zeros(n)
    active = ~sample.box.is_degenerate
    b[active] = (y_plus[active] - y_minus[active]) / np.abs(2.0 * sample.w_step[active])

    c = y0
    if n > 1:
        c -= eps
        for i in range(n):
            c -= ((1.0 + abs(lambda_[i])) *
                  (y_plus[i] + y_minus[i] - 2.0 * y0 + 4.0 * eps)) / (2.0 * alpha[i])
    elif alpha[0] != 1.0:
        if cfg.has_offset or eps != 0.0:
            logger.warning(
                "Univariate underestimator ignores lambda=%s and epsilon=%s",
                lambda_.tolist(), eps
            )
        c = 2.0 * c - 0.5 * (y_plus[0] + y_minus[0])
    return b, c


def _simplex_star_coeffs(sample: SampleSet) -> Tuple[np.ndarray, float, np.ndarray]:
    n = sample.n_vars
    box = sample.box
    y0, y_plus, y_minus = sample.y0, sample.y_plus, sample.y_minus

    degenerate = box.is_degenerate
    step = np.where(degenerate, 1.0, np.abs(sample.w_step))

    s_u = (y_plus - y0) / step
    s_l = np.zeros(n)
    for i in range(n):
        others = 0.0
        for j in range(n):
            if j != i:
                others += y0 - y_plus[j]
        s_l[i] = (y0 - y_minus[0] + others) / step[i]
    s_u[degenerate] = 0.0
    s_l[degenerate] = 0.0

    b = 0.5 * (s_l + s_u)
    s_r = 0.5 * (s_u - s_l)
    c = y0 - 0.5 * np.dot(s_r, box.upper - box.lower)
    return b, float(c), s_r


def underestimator_from_sample(sample: SampleSet) -> AffineUnderestimator:
    """
    Derive affine underestimator coefficients from an existing stencil.

    No further evaluations of f are made. In one dimension the
    compass-star formula is used whatever the policy, since both stencils
    coincide there.
    """
    if sample.n_vars == 1 or sample.policy is SamplingPolicy.COMPASS_STAR:
        b, c = _compass_star_coeffs(sample)
        s_r = np.empty(0)
    else:
        b, c, s_r = _simplex_star_coeffs(sample)

    logger.debug("Underestimator coefficients: b=%s, c=%.6g", b.tolist(), c)
    return AffineUnderestimator(w0=sample.w0.copy(), b=b, c=float(c), s_r=s_r, box=sample.box)


def lower_bound_from_sample(sample: SampleSet) -> float:
    """
    Derive the constant lower bound fL from an existing stencil.

    Cases:
    - compass-star with n > 1, nonzero lambda or nonzero epsilon:
      worst perturbed sample per axis
    - simplex-star with n > 1: from the simplex-star coefficients of the
      same stencil
    - otherwise (n == 1): smallest of four univariate candidate bounds
    """
    n = sample.n_vars
    cfg = sample.config
    alpha, lambda_, eps = cfg.alpha, cfg.lambda_, cfg.epsilon
    y0, y_plus, y_minus = sample.y0, sample.y_plus, sample.y_minus
    box = sample.box

    if cfg.policy is SamplingPolicy.COMPASS_STAR and (n > 1 or cfg.has_offset or eps != 0.0):
        f_l = y0 - eps
        for i in range(n):
            f_l -= ((1.0 + abs(lambda_[i])) *
                    (max(y_plus[i], y_minus[i]) - y0 + 2.0 * eps)) / alpha[i]
    elif cfg.policy is SamplingPolicy.SIMPLEX_STAR and n > 1:
        affine = underestimator_from_sample(sample)
        f_l = (y0
               - 0.5 * np.sum(np.abs(affine.b) * np.abs(box.lower - box.upper))
               - 0.5 * np.dot(affine.s_r, box.upper - box.lower))
    else:
        a = alpha[0]
        f_l = min(
            2.0 * y0 - y_plus[0],
            2.0 * y0 - y_minus[0],
            (1.0 / a) * y_minus[0] - ((1.0 - a) / a) * y0,
            (1.0 / a) * y_plus[0] - ((1.0 - a) / a) * y0,
        )

    logger.debug("Sampling lower bound: fL=%.6g", f_l)
    return float(f_l)


def relaxation_from_sample(sample: SampleSet) -> SamplingRelaxation:
    """Underestimator and lower bound from one stencil."""
    return SamplingRelaxation(
        sample=sample,
        underestimator=underestimator_from_sample(sample),
        lower_bound=lower_bound_from_sample(sample),
    )


def eval_sampling_underestimator_coeffs(
    f: Callable,
    xL,
    xU,
    config: Optional[SamplingConfig] = None,
    **overrides
) -> Tuple[np.ndarray, np.ndarray, float, np.ndarray]:
    """
    Coefficients (w0, b, c, s_r) with fAffine(x) = c + b.(x - w0) <= f(x) on [xL, xU].

    s_r is only populated by simplex-star sampling and is empty otherwise.

    Example:
        >>> w0, b, c, _ = eval_sampling_underestimator_coeffs(f, xL, xU)
    """
    sample = sample_convex_function(f, xL, xU, config, **overrides)
    return underestimator_from_sample(sample).as_tuple()


def construct_sampling_underestimator(
    f: Callable,
    xL,
    xU,
    config: Optional[SamplingConfig] = None,
    **overrides
) -> AffineUnderestimator:
    """Build the callable affine underestimator of f on [xL, xU]."""
    sample = sample_convex_function(f, xL, xU, config, **overrides)
    return underestimator_from_sample(sample)


def eval_sampling_underestimator(
    f: Callable,
    xL,
    xU,
    x_in,
    config: Optional[SamplingConfig] = None,
    **overrides
) -> float:
    """Value of the affine underestimator of f on [xL, xU] at x_in."""
    affine = construct_sampling_underestimator(f, xL, xU, config, **overrides)
    return affine(x_in)


def eval_sampling_lower_bound(
    f: Callable,
    xL,
    xU,
    config: Optional[SamplingConfig] = None,
    **overrides
) -> float:
    """Guaranteed constant lower bound of f on [xL, xU]."""
    sample = sample_convex_function(f, xL, xU, config, **overrides)
    return lower_bound_from_sample(sample)


def eval_sampling_relaxation(
    f: Callable,
    xL,
    xU,
    config: Optional[SamplingConfig] = None,
    **overrides
) -> SamplingRelaxation:
    """
    Sample once and return the stencil, underestimator and lower bound.

    Use this when both outputs are needed: it costs one stencil of
    evaluations instead of two.
    """
    sample = sample_convex_function(f, xL, xU, config, **overrides)
    return relaxation_from_sample(sample)
