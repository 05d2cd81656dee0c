# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import argparse
import logging
import swarmopt.common.typing as tp
from .common import errors
from .functions import corefuncs
from .optimization import Configuration
from .optimization import Result
from .optimization import solve


# options which are only forwarded to the configuration when explicitly provided
_OPTIONS = [
    ("swarm_size", int, "number of particles (default: 10 + 2 * sqrt(dimension))"),
    ("max_steps", int, "maximum number of steps"),
    ("goal", float, "stop as soon as the best error is below this value"),
    ("cognitive", float, "cognitive coefficient (attraction toward the personal best)"),
    ("social", float, "social coefficient (attraction toward the best informant)"),
    ("w_max", float, "initial inertia weight of the linear_decreasing schedule"),
    ("w_min", float, "final inertia weight of the linear_decreasing schedule"),
    ("inertia_weight", float, "inertia weight of the constant schedule"),
    ("neighborhood_size", int, "number of random links per particle of the random topology"),
    ("report_interval", int, "steps between two progress reports (0 to disable)"),
]


def get_args(argv: tp.Optional[tp.List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Minimize a classical test function with a particle swarm.")
    parser.add_argument("function", type=str, choices=sorted(corefuncs.registry), help="name of the function to minimize")
    parser.add_argument("--dimension", type=int, default=30, help="dimension of the search space")
    parser.add_argument("--lower", type=float, default=None, help="lower bound (default: conventional bound of the function)")
    parser.add_argument("--upper", type=float, default=None, help="upper bound (default: conventional bound of the function)")
    parser.add_argument("--topology", choices=["global", "ring", "random"], default="ring")
    parser.add_argument("--inertia", choices=["constant", "linear_decreasing"], default="linear_decreasing")
    parser.add_argument("--boundary", choices=["clamp", "periodic"], default="clamp")
    for name, type_, help_ in _OPTIONS:
        parser.add_argument("--" + name.replace("_", "-"), dest=name, type=type_, default=None, help=help_)
    parser.add_argument("--seed", type=int, default=None, help="Use a seed for reproducibility")
    parser.add_argument("--quiet", action="store_true", help="do not draw the progress bar")
    parser.add_argument(
        "--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging level"
    )
    return parser.parse_args(argv)


def make_config(args: argparse.Namespace) -> Configuration:
    lower, upper = corefuncs.BOUNDS[args.function]
    options = {name: getattr(args, name) for name, _, _ in _OPTIONS if getattr(args, name) is not None}
    return Configuration(
        args.dimension,
        lower if args.lower is None else args.lower,
        upper if args.upper is None else args.upper,
        topology=args.topology,
        inertia=args.inertia,
        boundary=args.boundary,
        **options,
    )


def format_result(name: str, result: Result, max_coordinates: int = 10) -> str:
    shown = ", ".join(f"{x:.6g}" for x in result.best_position[:max_coordinates])
    if result.best_position.size > max_coordinates:
        shown += ", ..."
    return "\n".join(
        [
            f"Function   : {name}",
            f"Status     : {result.status} after {result.num_steps} steps ({result.num_evaluations} evaluations)",
            f"Best error : {result.best_error:.12e}",
            f"Best point : [{shown}]",
        ]
    )


def main(argv: tp.Optional[tp.List[str]] = None) -> Result:
    args = get_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))
    try:
        config = make_config(args)
    except errors.ConfigurationError as e:
        raise SystemExit(f"Invalid configuration: {e}") from e
    print(config)
    result = solve(corefuncs.registry[args.function], config, random_state=args.seed, verbosity=0 if args.quiet else 1)
    print(format_result(args.function, result))
    return result


if __name__ == "__main__":
    main()
