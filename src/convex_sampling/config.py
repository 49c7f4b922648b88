"""
Sampling Configuration

A single configuration object carries the stencil parameters shared by
every public operation:
- policy: stencil geometry (compass-star by default)
- alpha: dimensionless step length per axis, in (0, 1 - lambda]
- lambda_: offset of the stencil midpoint per axis, in (-1, 1)
- epsilon: absolute error bound on evaluations of f (nonnegative)

alpha and lambda_ may be given as scalars, which are broadcast to every
axis once the dimension of the box is known.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Union
import numpy as np

from .errors import (
    DimensionMismatchError,
    ParameterRangeError,
    UnsupportedConfigurationError,
)
from .policy import DEFAULT_ALPHA, SamplingPolicy


PerAxis = Union[float, Sequence[float]]


def _normalize(value: PerAxis, name: str) -> PerAxis:
    """Store scalars as floats and sequences as tuples of floats."""
    arr = np.asarray(value, dtype=np.float64)
    if arr.ndim == 0:
        return float(arr)
    if arr.ndim != 1:
        raise DimensionMismatchError(f"{name} must be a scalar or a vector, got shape {arr.shape}")
    return tuple(float(v) for v in arr)


def check_alpha(alpha: np.ndarray, lambda_: np.ndarray) -> None:
    """Raise ParameterRangeError unless 0 < alpha <= 1 - lambda on every axis."""
    if np.any(alpha > (1.0 - lambda_)) or np.any(alpha <= 0.0):
        raise ParameterRangeError(
            f"alpha out of range of (0.0, 1.0 - lambda]: alpha={np.atleast_1d(alpha).tolist()}, "
            f"lambda={np.atleast_1d(lambda_).tolist()}"
        )


def check_lambda(lambda_: np.ndarray) -> None:
    """Raise ParameterRangeError unless -1 < lambda < 1 on every axis."""
    if np.any(lambda_ <= -1.0) or np.any(lambda_ >= 1.0):
        raise ParameterRangeError(
            f"lambda out of range of (-1.0, 1.0): lambda={np.atleast_1d(lambda_).tolist()}"
        )


@dataclass(frozen=True)
class ResolvedConfig:
    """Configuration broadcast to a concrete dimension and fully validated."""
    policy: SamplingPolicy
    alpha: np.ndarray
    lambda_: np.ndarray
    epsilon: float

    @property
    def n_vars(self) -> int:
        return len(self.alpha)

    @property
    def has_offset(self) -> bool:
        return bool(np.any(self.lambda_ != 0.0))

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "policy": self.policy.value,
            "alpha": self.alpha.tolist(),
            "lambda": self.lambda_.tolist(),
            "epsilon": self.epsilon,
        }


@dataclass(frozen=True)
class SamplingConfig:
    """
    Stencil parameters with documented defaults.

    Attributes:
        policy: Stencil geometry (default: COMPASS_STAR)
        alpha: Step length, scalar or per axis (default: DEFAULT_ALPHA)
        lambda_: Midpoint offset, scalar or per axis (default: 0.0)
        epsilon: Bound on evaluation error of f (default: 0.0)
    """
    policy: SamplingPolicy = SamplingPolicy.COMPASS_STAR
    alpha: PerAxis = DEFAULT_ALPHA
    lambda_: PerAxis = 0.0
    epsilon: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "policy", SamplingPolicy.parse(self.policy))
        object.__setattr__(self, "alpha", _normalize(self.alpha, "alpha"))
        object.__setattr__(self, "lambda_", _normalize(self.lambda_, "lambda"))
        object.__setattr__(self, "epsilon", float(self.epsilon))

        if not self.epsilon >= 0.0:
            raise ParameterRangeError(f"epsilon must be nonnegative, got {self.epsilon}")

        alpha = np.asarray(self.alpha, dtype=np.float64)
        lambda_ = np.asarray(self.lambda_, dtype=np.float64)
        if alpha.ndim == 1 and lambda_.ndim == 1 and len(alpha) != len(lambda_):
            raise DimensionMismatchError(
                f"alpha has {len(alpha)} components but lambda has {len(lambda_)}"
            )
        check_alpha(alpha, lambda_)
        check_lambda(lambda_)

    def _per_axis(self, value: PerAxis, n: int, name: str) -> np.ndarray:
        arr = np.asarray(value, dtype=np.float64)
        if arr.ndim == 0:
            return np.full(n, float(arr))
        if len(arr) != n:
            raise DimensionMismatchError(
                f"function dimension: {name} has {len(arr)} components, box has {n}"
            )
        return arr.copy()

    def resolve(self, n: int) -> ResolvedConfig:
        """
        Broadcast to dimension n and run the full validation.

        Checks run in order: per-axis lengths, alpha range, simplex-star
        configuration, lambda range.

        Args:
            n: Dimension of the box

        Returns:
            ResolvedConfig with per-axis arrays
        """
        alpha = self._per_axis(self.alpha, n, "alpha")
        lambda_ = self._per_axis(self.lambda_, n, "lambda")

        check_alpha(alpha, lambda_)
        if (n > 1 and self.policy is SamplingPolicy.SIMPLEX_STAR and
                (np.any(lambda_ != 0.0) or self.epsilon != 0.0)):
            raise UnsupportedConfigurationError(
                "simplex-star sampling in more than one dimension does not use lambda or epsilon: "
                f"lambda={lambda_.tolist()}, epsilon={self.epsilon}"
            )
        check_lambda(lambda_)

        return ResolvedConfig(
            policy=self.policy,
            alpha=alpha,
            lambda_=lambda_,
            epsilon=self.epsilon,
        )

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "policy": self.policy.value,
            "alpha": list(self.alpha) if isinstance(self.alpha, tuple) else self.alpha,
            "lambda": list(self.lambda_) if isinstance(self.lambda_, tuple) else self.lambda_,
            "epsilon": self.epsilon,
        }


DEFAULT_CONFIG = SamplingConfig()


def make_config(config: Optional[SamplingConfig] = None, **overrides) -> SamplingConfig:
    """
    Build the configuration for a public call.

    Either a ready SamplingConfig or keyword overrides (policy, alpha,
    lambda_, epsilon) may be given, not both.
    """
    if config is not None and overrides:
        raise TypeError(
            f"pass either config or keyword overrides, not both (got {sorted(overrides)})"
        )
    if config is not None:
        if not isinstance(config, SamplingConfig):
            raise TypeError(f"config must be a SamplingConfig, got {type(config).__name__}")
        return config
    if not overrides:
        return DEFAULT_CONFIG
    return SamplingConfig(**overrides)
