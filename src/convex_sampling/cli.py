"""
Convex Sampling Command-Line Interface

Computes sampling underestimators and lower bounds of the built-in
convex test functions, and renders them in one or two dimensions.
"""

import sys
import argparse
import json
import logging
import numpy as np
from typing import List, Optional

from .audit import audit_relaxation
from .config import SamplingConfig
from .errors import DimensionMismatchError, SamplingDomainError
from .functions import FUNCTIONS
from .policy import DEFAULT_ALPHA, SamplingPolicy
from .underestimator import eval_sampling_relaxation


def _build_problem(args):
    """Objective, bounds and configuration from parsed arguments."""
    if args.shift is not None and len(args.shift) != args.dim:
        raise DimensionMismatchError(
            f"shift length ({len(args.shift)}) must match dimension ({args.dim})"
        )
    f = FUNCTIONS[args.function](args.dim, args.shift)
    xL = np.full(args.dim, args.lower)
    xU = np.full(args.dim, args.upper)
    config = SamplingConfig(
        policy=SamplingPolicy.parse(args.policy),
        alpha=args.alpha,
        lambda_=args.lambda_,
        epsilon=args.epsilon,
    )
    return f, xL, xU, config


def _fmt(v: np.ndarray) -> str:
    v = np.asarray(v)
    head = np.array2string(v[:min(5, len(v))], precision=6)
    return f"{head}{'...' if len(v) > 5 else ''}"


def cmd_bound(args):
    """Sample a test function and report its relaxation."""
    print("=" * 60)
    print("Convex Sampling Relaxation")
    print("=" * 60)

    f, xL, xU, config = _build_problem(args)

    print(f"\nFunction: {args.function}")
    print(f"Dimension: {args.dim}")
    print(f"Box: [{args.lower}, {args.upper}]^{args.dim}")
    print(f"Policy: {config.policy.value}")
    print(f"Alpha: {config.alpha}  Lambda: {config.lambda_}  Epsilon: {config.epsilon}")

    relaxation = eval_sampling_relaxation(f, xL, xU, config)
    sample = relaxation.sample
    affine = relaxation.underestimator

    print("\n" + "-" * 60)
    print("RESULTS")
    print("-" * 60)
    print(f"Evaluations: {sample.n_evaluations}")
    print(f"w0: {_fmt(affine.w0)}")
    print(f"y0: {sample.y0:.6e}")
    print(f"b: {_fmt(affine.b)}")
    print(f"c: {affine.c:.6e}")
    if len(affine.s_r):
        print(f"sR: {_fmt(affine.s_r)}")
    print(f"Lower bound: {relaxation.lower_bound:.6e}")
    print(f"Underestimator minimum: {affine.minimum():.6e}")

    output_data = relaxation.to_canonical()
    output_data['function'] = args.function

    if args.audit:
        report = audit_relaxation(f, relaxation, n_points=args.audit, seed=args.seed)
        status = "PASS" if report.is_valid() else "FAIL"
        print(f"\nAudit [{status}] over {report.n_points} points")
        print(f"  max fAffine - f: {report.max_underestimator_violation:.3e}")
        print(f"  max fL - f: {report.max_bound_violation:.3e}")
        output_data['audit'] = report.to_canonical()

    if args.output:
        with open(args.output, 'w') as fh:
            json.dump(output_data, fh, indent=2)
        print(f"\nResults saved to: {args.output}")

    return 0


def cmd_plot(args):
    """Render a test function with its relaxation to an image file."""
    from .plotting import plot_sampling_underestimator
    import matplotlib.pyplot as plt

    f, xL, xU, config = _build_problem(args)
    ax = plot_sampling_underestimator(f, xL, xU, config, resolution=args.resolution)
    ax.figure.savefig(args.output, dpi=150, bbox_inches="tight")
    plt.close(ax.figure)
    print(f"Plot saved to: {args.output}")
    return 0


def cmd_version(args):
    """Print version information."""
    from . import __version__
    print(f"convex-sampling {__version__}")
    print("Affine underestimators of convex black-box functions by sampling")
    return 0


def _add_problem_arguments(parser: argparse.ArgumentParser, default_dim: int):
    parser.add_argument('function', choices=list(FUNCTIONS.keys()),
                        help='Convex test function')
    parser.add_argument('--dim', '-d', type=int, default=default_dim,
                        help=f'Dimension (default: {default_dim})')
    parser.add_argument('--shift', type=float, nargs='+',
                        help='Shift vector (optional)')
    parser.add_argument('--lower', type=float, default=-1.0,
                        help='Lower bound on every axis (default: -1)')
    parser.add_argument('--upper', type=float, default=1.0,
                        help='Upper bound on every axis (default: 1)')
    parser.add_argument('--policy', '-p', default='compass',
                        choices=['compass', 'simplex'],
                        help='Sampling stencil (default: compass)')
    parser.add_argument('--alpha', '-a', type=float, default=DEFAULT_ALPHA,
                        help=f'Step length (default: {DEFAULT_ALPHA})')
    parser.add_argument('--lambda', dest='lambda_', type=float, default=0.0,
                        help='Midpoint offset (default: 0)')
    parser.add_argument('--epsilon', '-e', type=float, default=0.0,
                        help='Evaluation error bound (default: 0)')


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='convex-sampling',
        description='Sampling-based affine relaxations of convex functions'
    )
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log debug output')
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    bound_parser = subparsers.add_parser('bound', help='Compute underestimator and lower bound')
    _add_problem_arguments(bound_parser, default_dim=2)
    bound_parser.add_argument('--audit', type=int, default=0,
                              help='Check the relaxation at N Sobol points (default: off)')
    bound_parser.add_argument('--seed', type=int, default=0,
                              help='Audit seed (default: 0)')
    bound_parser.add_argument('--output', '-o', type=str,
                              help='Output JSON file')
    bound_parser.set_defaults(func=cmd_bound)

    plot_parser = subparsers.add_parser('plot', help='Plot a relaxation in 1 or 2 dimensions')
    _add_problem_arguments(plot_parser, default_dim=2)
    plot_parser.add_argument('--resolution', '-r', type=int, default=10,
                             help='Mesh points per axis (default: 10)')
    plot_parser.add_argument('--output', '-o', type=str, required=True,
                             help='Output image file')
    plot_parser.set_defaults(func=cmd_plot)

    ver_parser = subparsers.add_parser('version', help='Print version')
    ver_parser.set_defaults(func=cmd_version)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except SamplingDomainError as exc:
        print(f"Error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
