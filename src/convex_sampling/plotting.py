"""
Relaxation Plots

Draws f, its sampling underestimator, the constant lower bound and the
sampled stencil points on a box in one or two dimensions.

All artists come from a single stencil, so a plot costs one stencil of
evaluations plus resolution^n evaluations of f for the mesh.
"""

from typing import Callable, Optional, Sequence
import numpy as np
import matplotlib.pyplot as plt

from .box import as_box, wrap_objective
from .config import SamplingConfig, make_config
from .errors import PlotDomainError
from .sampler import evaluate_objective, sample_box
from .underestimator import relaxation_from_sample


def plot_sampling_underestimator(
    f: Callable,
    xL,
    xU,
    config: Optional[SamplingConfig] = None,
    resolution: int = 10,
    ax=None,
    surface_styles: Sequence[str] = ("surface", "wireframe", "surface"),
    **overrides
):
    """
    Plot f, its affine underestimator and lower bound on [xL, xU].

    Args:
        f: Convex function on the box
        xL: Lower bounds (vector, or scalar for univariate f)
        xU: Upper bounds, strictly greater than xL on every axis
        config: SamplingConfig; alternatively pass policy, alpha,
            lambda_ or epsilon as keywords
        resolution: Mesh points per axis
        ax: Existing matplotlib Axes (3-D axes in two dimensions)
        surface_styles: 2-D only; "surface" or "wireframe" for f, the
            underestimator and the lower bound, in that order

    Returns:
        The matplotlib Axes drawn on

    Raises:
        PlotDomainError: xU[i] <= xL[i] on some axis, or dimension not 1 or 2
    """
    box = as_box(xL, xU)
    if not np.all(box.upper > box.lower):
        raise PlotDomainError(
            "function dimension: individual components of xU must be greater than "
            f"individual components of xL (xL={box.lower.tolist()}, xU={box.upper.tolist()})"
        )
    if box.n_vars not in (1, 2):
        raise PlotDomainError(f"function dimension: must be 1 or 2, got {box.n_vars}")
    if resolution < 2:
        raise ValueError(f"resolution must be at least 2, got {resolution}")
    for style in surface_styles:
        if style not in ("surface", "wireframe"):
            raise ValueError(f"Unknown surface style '{style}'. Available: ['surface', 'wireframe']")

    resolved = make_config(config, **overrides).resolve(box.n_vars)
    relaxation = relaxation_from_sample(sample_box(f, box, resolved))
    objective = wrap_objective(f, box)
    affine = relaxation.underestimator
    f_l = relaxation.lower_bound
    points = relaxation.sample.points()
    values = relaxation.sample.values()

    if box.n_vars == 1:
        if ax is None:
            _, ax = plt.subplots(figsize=(7, 5))
        x_mesh = np.linspace(box.lower[0], box.upper[0], resolution)
        y_f = np.array([evaluate_objective(objective, np.array([x])) for x in x_mesh])
        y_affine = affine.evaluate_many(x_mesh)

        ax.plot(x_mesh, y_f, label="Function")
        ax.plot(x_mesh, y_affine, label="Affine underestimator")
        ax.plot(x_mesh, np.full(resolution, f_l), label="Lower bound")
        ax.scatter(points[:, 0], values, label="Sampled points")
        ax.set_xlabel("x axis")
        ax.set_ylabel("y axis")
        ax.legend()
        return ax

    if ax is None:
        fig = plt.figure(figsize=(8, 6))
        ax = fig.add_subplot(projection="3d")
    x1 = np.linspace(box.lower[0], box.upper[0], resolution)
    x2 = np.linspace(box.lower[1], box.upper[1], resolution)
    X1, X2 = np.meshgrid(x1, x2, indexing="ij")
    grid = np.column_stack([X1.ravel(), X2.ravel()])
    Y_f = np.array([evaluate_objective(objective, x) for x in grid]).reshape(X1.shape)
    Y_affine = affine.evaluate_many(grid).reshape(X1.shape)
    Y_bound = np.full(X1.shape, f_l)

    layers = [
        (Y_bound, surface_styles[2], "Lower bound", "Greens"),
        (Y_affine, surface_styles[1], "Affine underestimator", "Greys"),
        (Y_f, surface_styles[0], "Function", "viridis"),
    ]
    for Z, style, label, cmap in layers:
        if style == "wireframe":
            ax.plot_wireframe(X1, X2, Z, label=label, color="gray", linewidth=0.6)
        else:
            ax.plot_surface(X1, X2, Z, label=label, cmap=cmap, alpha=0.7)

    ax.scatter(points[:, 0], points[:, 1], values, color="purple")
    ax.set_title("From top to bottom: (1) Original function, "
                 "(2) Affine underestimator, and (3) Lower bound", fontsize=10)
    ax.set_xlabel("x₁ axis")
    ax.set_ylabel("x₂ axis")
    ax.set_zlabel("y axis")
    return ax
