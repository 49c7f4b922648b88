"""
Convex Sampling - Affine Relaxations of Convex Black-Box Functions

Given a convex function f on a box [xL, xU], this package evaluates f
on a small stencil around the box midpoint and returns:
- an affine underestimator fAffine(x) = c + b.(x - w0) <= f(x) on the box
- a constant lower bound fL <= f(x) on the box

Key Features:
- Compass-star stencil (2n+1 evaluations) with midpoint offset and
  evaluation-error tolerance
- Simplex-star stencil (n+2 evaluations)
- Scalar convenience calls for univariate functions
- One-stencil relaxation reuse, Sobol audit and matplotlib plots

Based on Song et al. (2021), Comput. Chem. Eng. 153, 107413.
"""

from .policy import (
    SamplingPolicy,
    DEFAULT_ALPHA,
)
from .errors import (
    SamplingDomainError,
    DimensionMismatchError,
    ParameterRangeError,
    UnsupportedConfigurationError,
    NonScalarOutputError,
    PlotDomainError,
)
from .config import (
    SamplingConfig,
    ResolvedConfig,
    DEFAULT_CONFIG,
)
from .box import Box
from .sampler import (
    SampleSet,
    sample_convex_function,
)
from .underestimator import (
    AffineUnderestimator,
    SamplingRelaxation,
    underestimator_from_sample,
    lower_bound_from_sample,
    relaxation_from_sample,
    eval_sampling_underestimator_coeffs,
    construct_sampling_underestimator,
    eval_sampling_underestimator,
    eval_sampling_lower_bound,
    eval_sampling_relaxation,
)
from .audit import AuditReport, audit_relaxation

__version__ = "0.1.0"

__all__ = [
    # Policy
    "SamplingPolicy",
    "DEFAULT_ALPHA",
    # Errors
    "SamplingDomainError",
    "DimensionMismatchError",
    "ParameterRangeError",
    "UnsupportedConfigurationError",
    "NonScalarOutputError",
    "PlotDomainError",
    # Configuration
    "SamplingConfig",
    "ResolvedConfig",
    "DEFAULT_CONFIG",
    "Box",
    # Sampler
    "SampleSet",
    "sample_convex_function",
    # Underestimators and bounds
    "AffineUnderestimator",
    "SamplingRelaxation",
    "underestimator_from_sample",
    "lower_bound_from_sample",
    "relaxation_from_sample",
    "eval_sampling_underestimator_coeffs",
    "construct_sampling_underestimator",
    "eval_sampling_underestimator",
    "eval_sampling_lower_bound",
    "eval_sampling_relaxation",
    # Audit
    "AuditReport",
    "audit_relaxation",
]
