"""
Sampling Errors

Precondition failures raised by the sampler, the coefficient deriver
and the plotting helpers. Every error is a ValueError, so callers that
already guard numerical code with ``except ValueError`` keep working.
"""


class SamplingDomainError(ValueError):
    """Base class for all invalid-input errors."""


class DimensionMismatchError(SamplingDomainError):
    """Box bounds or per-axis parameters disagree on the dimension."""


class ParameterRangeError(SamplingDomainError):
    """alpha, lambda or epsilon outside its admissible range."""


class UnsupportedConfigurationError(SamplingDomainError):
    """Valid parameters combined in a way the stencil formulas do not cover."""


class NonScalarOutputError(SamplingDomainError):
    """The sampled function returned something other than a real scalar."""


class PlotDomainError(SamplingDomainError):
    """Box cannot be rendered (degenerate axis or dimension outside {1, 2})."""
