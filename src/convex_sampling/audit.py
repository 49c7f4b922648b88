"""
Empirical Relaxation Audit

Checks a sampled relaxation against f on a scrambled Sobol point set
plus the box corners. This is a spot check, not a proof: it cannot
certify convexity of f, but it catches a non-convex f or a wrong
epsilon quickly.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict
import numpy as np
from scipy.stats import qmc

from .box import Box, wrap_objective
from .sampler import evaluate_objective
from .underestimator import SamplingRelaxation

logger = logging.getLogger(__name__)

# Corner enumeration is skipped above this dimension (2^n points)
MAX_CORNER_DIM = 10


@dataclass
class AuditReport:
    """
    Worst violations found by an audit.

    Attributes:
        n_points: Number of points at which f was evaluated
        max_underestimator_violation: max of fAffine(x) - f(x)
        max_bound_violation: max of fL - f(x)
        affine_minimum: Exact minimum of fAffine over the box
        bound_below_affine: Whether fL <= min fAffine over the box
        epsilon: Evaluation error bound the relaxation was built with
    """
    n_points: int
    max_underestimator_violation: float
    max_bound_violation: float
    affine_minimum: float
    bound_below_affine: bool
    epsilon: float = 0.0

    def is_valid(self, tol: float = 1e-9) -> bool:
        """No violation beyond epsilon + tol at any audited point."""
        slack = self.epsilon + tol
        return (self.max_underestimator_violation <= slack and
                self.max_bound_violation <= slack)

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "n_points": self.n_points,
            "max_underestimator_violation": self.max_underestimator_violation,
            "max_bound_violation": self.max_bound_violation,
            "affine_minimum": self.affine_minimum,
            "bound_below_affine": self.bound_below_affine,
            "epsilon": self.epsilon,
        }


def audit_points(box: Box, n_points: int = 256, seed: int = 0) -> np.ndarray:
    """
    Sobol points scaled to the box, followed by the box corners.

    The Sobol count is rounded up to a power of two to keep the
    sequence balanced.
    """
    m = int(np.ceil(np.log2(max(n_points, 1))))
    engine = qmc.Sobol(d=box.n_vars, scramble=True, seed=seed)
    samples = engine.random_base2(m)
    points = box.lower + samples * box.widths

    if box.n_vars <= MAX_CORNER_DIM:
        points = np.vstack([points, np.array(list(box.corners()))])
    return points


def audit_relaxation(
    f: Callable,
    relaxation: SamplingRelaxation,
    n_points: int = 256,
    seed: int = 0
) -> AuditReport:
    """
    Compare a relaxation with f on a deterministic point set.

    Args:
        f: The function the relaxation was built for
        relaxation: Output of eval_sampling_relaxation
        n_points: Minimum number of Sobol points
        seed: Scrambling seed

    Returns:
        AuditReport with the worst violations
    """
    box = relaxation.sample.box
    objective = wrap_objective(f, box)
    points = audit_points(box, n_points, seed)

    f_values = np.array([evaluate_objective(objective, x) for x in points])
    affine_values = relaxation.underestimator.evaluate_many(points)
    affine_minimum = relaxation.underestimator.minimum()

    report = AuditReport(
        n_points=len(points),
        max_underestimator_violation=float(np.max(affine_values - f_values)),
        max_bound_violation=float(np.max(relaxation.lower_bound - f_values)),
        affine_minimum=affine_minimum,
        bound_below_affine=bool(relaxation.lower_bound <= affine_minimum),
        epsilon=relaxation.sample.config.epsilon,
    )
    logger.debug("Audit over %d points: %s", report.n_points, report.to_canonical())
    return report
