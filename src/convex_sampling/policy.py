"""
Sampling Policies

Two stencils are supported:
- COMPASS_STAR: midpoint plus one positive and one negative step per
  axis, 2n+1 evaluations
- SIMPLEX_STAR: midpoint plus one positive step per axis and a single
  combined negative step, n+2 evaluations

The policy selects both the sampling geometry and the coefficient
formula. The two are not interchangeable.
"""

from enum import Enum


# Small alphas give tighter relaxations but amplify evaluation error
DEFAULT_ALPHA = 0.1


class SamplingPolicy(Enum):
    """Stencil used to sample the convex function."""
    COMPASS_STAR = "compass_star"   # 2n+1 evaluations
    SIMPLEX_STAR = "simplex_star"   # n+2 evaluations

    def evaluation_count(self, n: int) -> int:
        """Number of function evaluations the stencil needs in dimension n."""
        if self is SamplingPolicy.COMPASS_STAR:
            return 2 * n + 1
        return n + 2

    @classmethod
    def parse(cls, value) -> 'SamplingPolicy':
        """Accept a policy, its value, or the short names 'compass'/'simplex'."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_")
        aliases = {
            "compass": cls.COMPASS_STAR,
            "simplex": cls.SIMPLEX_STAR,
        }
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            choices = [p.value for p in cls] + sorted(aliases)
            raise ValueError(f"Unknown sampling policy '{value}'. Available: {choices}")
